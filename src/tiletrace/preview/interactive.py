"""Interactive preview window using Taichi GGUI.

The window shows a canvas and, while a render is in progress, fills in
tiles as the worker pool finishes them. Rendering runs on a background
thread; the window loop stays on the calling thread, which GGUI requires.
Closing the window cancels the tiles that have not started yet.

Example:
    >>> from src.tiletrace.core.renderer import TileRenderer
    >>> from src.tiletrace.preview.interactive import InteractivePreview
    >>>
    >>> renderer = TileRenderer(camera, scene)
    >>> preview = InteractivePreview(camera.width, camera.height)
    >>> canvas = preview.run_render(renderer)  # Blocks until window closed
"""

from __future__ import annotations

import logging
import os
import threading
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from src.tiletrace.core.errors import RenderCancelled
from src.tiletrace.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.tiletrace.core.renderer import TileRenderer
    from src.tiletrace.core.tiling import Batch
    from src.tiletrace.preview.canvas import Canvas

logger = logging.getLogger(__name__)


class InteractivePreview:
    """A GGUI window displaying a canvas, optionally while it renders.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: Taichi field of shape (width, height) holding the
            displayed RGB values.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "tiletrace - Interactive Preview",
        tone_map: ToneMapMethod = "none",
        gamma: float = 1.0,
    ) -> None:
        """Create the display buffer. The window itself opens lazily.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            title: Window title.
            tone_map: Tone mapping applied before display.
            gamma: Display gamma.

        Note:
            Taichi must be initialized before construction.
        """
        self.width = width
        self.height = height
        self._title = title
        self._tone_map: ToneMapMethod = tone_map
        self._gamma = gamma

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        # Taichi fields index (x, y), so the shape is (width, height)
        self.display_image: ti.MatrixField = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

        # Linear image assembled from finished batches, (height, width, 3)
        self._staging = np.zeros((height, width, 3), dtype=np.float32)
        self._staging_lock = threading.Lock()
        self._staging_dirty = False

    def _initialize_window(self) -> None:
        if self._window is not None:
            return
        self._window = ti.ui.Window(name=self._title, res=(self.width, self.height), vsync=True)
        self._canvas = self._window.get_canvas()

    @property
    def window(self) -> ti.ui.Window:
        """The GGUI window, opened on first access."""
        self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    # =========================================================================
    # Display buffer updates
    # =========================================================================

    def update_image(self, image: npt.NDArray[np.float32]) -> None:
        """Upload a display-ready (H, W, 3) image in [0, 1].

        Raises:
            ValueError: If the shape is not (height, width, 3).
        """
        expected_shape = (self.height, self.width, 3)
        if image.shape != expected_shape:
            raise ValueError(f"Image shape {image.shape} doesn't match expected {expected_shape}")

        # Row 0 of the image is the top; Taichi's y axis points up
        flipped = np.ascontiguousarray(np.transpose(np.flipud(image), (1, 0, 2)), dtype=np.float32)
        self.display_image.from_numpy(flipped)

    def update_from_canvas(self, canvas: Canvas) -> None:
        """Tone map a rendered canvas and upload it."""
        self.update_image(self._prepare(canvas.pixels))

    def stage_batch(self, batch: Batch) -> None:
        """Copy a finished batch into the staging image.

        Safe to call from the render thread; the next ``flush_staging``
        call on the window thread uploads it.
        """
        tile = batch.tile
        with self._staging_lock:
            self._staging[tile.y_start : tile.y_end, tile.x_start : tile.x_end] = batch.region()
            self._staging_dirty = True

    def flush_staging(self) -> bool:
        """Upload the staging image if a batch arrived since the last flush.

        Returns:
            True if the display buffer was updated.
        """
        with self._staging_lock:
            if not self._staging_dirty:
                return False
            image = self._staging.copy()
            self._staging_dirty = False
        self.update_image(self._prepare(image))
        return True

    def _prepare(self, image: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
        return process_image_for_display(image, tone_map=self._tone_map, gamma=self._gamma)

    # =========================================================================
    # Window loop
    # =========================================================================

    def is_running(self) -> bool:
        return self.window.running

    def show_frame(self) -> None:
        """Present the display buffer for one frame."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Show the current display buffer until the window is closed."""
        while self.is_running():
            self.show_frame()

    def run_render(self, renderer: TileRenderer) -> Canvas | None:
        """Render on a background thread while showing tiles as they finish.

        The window stays open after the render completes, until the user
        closes it.

        Args:
            renderer: The renderer to run. Its image size should match the
                window.

        Returns:
            The finished canvas, or None if the window was closed before the
            render completed.

        Raises:
            Exception: Any error raised by the render, other than
                cancellation, is re-raised on this thread.
        """
        cancel = threading.Event()
        outcome: dict[str, object] = {}

        def work() -> None:
            try:
                outcome["canvas"] = renderer.render(cancel=cancel, on_batch=self.stage_batch)
            except RenderCancelled as exc:
                logger.info("Interactive render stopped: %s", exc)
            except Exception as exc:  # re-raised on the window thread below
                outcome["error"] = exc

        thread = threading.Thread(target=work, name="tiletrace-render", daemon=True)
        thread.start()
        try:
            while self.is_running():
                self.flush_staging()
                self.show_frame()
        finally:
            cancel.set()
            thread.join()

        if "error" in outcome:
            raise outcome["error"]  # type: ignore[misc]
        return outcome.get("canvas")  # type: ignore[return-value]

    def close(self) -> None:
        """Stop the window loop."""
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Whether a GUI display is likely available (False when headless)."""
        display = os.environ.get("DISPLAY")
        if os.name == "nt":
            return True
        if os.uname().sysname == "Darwin":
            # SSH sessions without X forwarding have no display
            return not (os.environ.get("SSH_CONNECTION") and not display)
        return bool(display or os.environ.get("WAYLAND_DISPLAY"))
