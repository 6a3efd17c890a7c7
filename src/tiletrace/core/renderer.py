"""Tile-parallel renderer.

This module provides the TileRenderer, which partitions the camera's image
into tiles, traces the tiles concurrently on a worker pool and merges the
per-tile batches into a single canvas:

    tiles = generate_tiles(width, height, tile_size)
    fork:  one task per tile  ->  (tile, batch)
    join:  wait for every task
    merge: Canvas.from_batches(width, height, batches)

Workers receive only immutable values: the tile, the camera, and a snapshot of
the scene taken when the render starts. Tracing is pure Python, so tiles run
in worker processes by default; a thread pool is available for callers that
must stay in one process. Each worker allocates and owns its batch until it
is returned, so the compute phase needs no locks. The merge
runs on the calling thread after the join and places pixels by tile
coordinates alone, so the image does not depend on tile completion order.

Example:
    >>> from src.tiletrace.core.renderer import RenderConfig, TileRenderer
    >>> from src.tiletrace.scene.demo import create_demo_scene
    >>>
    >>> scene, camera = create_demo_scene(64, 64)
    >>> renderer = TileRenderer(camera, scene, RenderConfig(max_workers=4))
    >>> canvas = renderer.render()
    >>> canvas.to_numpy().shape
    (64, 64, 3)
"""

from __future__ import annotations

import logging
import multiprocessing
import os
import threading
import time
from collections.abc import Callable, Iterator
from concurrent.futures import (
    FIRST_EXCEPTION,
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    wait,
)
from dataclasses import dataclass, field
from typing import Literal

from src.tiletrace.camera.pinhole import Camera
from src.tiletrace.core.color import BLACK, Color
from src.tiletrace.core.errors import RenderCancelled
from src.tiletrace.core.integrator import render_tile
from src.tiletrace.core.tiling import DEFAULT_TILE_SIZE, Batch, Tile, generate_tiles
from src.tiletrace.preview.canvas import Canvas
from src.tiletrace.scene.manager import SceneSnapshot, SceneStore

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (completed_tiles, total_tiles)
ProgressCallback = Callable[[int, int], None]

# Called with each finished batch, on the thread that called render()
BatchCallback = Callable[[Batch], None]

ExecutorKind = Literal["process", "thread"]


@dataclass
class RenderConfig:
    """Configuration for a tile-parallel render.

    Attributes:
        tile_size: Edge length of a full tile in pixels. Default 16.
        max_workers: Worker count; None uses the CPU count.
        background: Color of pixels whose ray hits nothing. Default black.
        executor: "process" traces tiles in worker processes; "thread" uses
            a thread pool in this process, which the GIL serializes.
    """

    tile_size: int = DEFAULT_TILE_SIZE
    max_workers: int | None = None
    background: Color = field(default=BLACK)
    executor: ExecutorKind = "process"

    def __post_init__(self) -> None:
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.executor not in ("process", "thread"):
            raise ValueError(f"Unknown executor: {self.executor!r}")


class TileRenderer:
    """Renders a scene through a camera by tracing tiles in parallel.

    The renderer holds a reference to the scene store but reads it only
    once per render, through ``SceneStore.snapshot()``.

    Attributes:
        camera: The camera generating primary rays.
        scene: The scene store (or a ready-made snapshot) to render.
        config: Render configuration.
    """

    def __init__(
        self,
        camera: Camera,
        scene: SceneStore | SceneSnapshot,
        config: RenderConfig | None = None,
    ) -> None:
        self.camera = camera
        self.scene = scene
        self.config = config if config is not None else RenderConfig()

    @property
    def width(self) -> int:
        return self.camera.width

    @property
    def height(self) -> int:
        return self.camera.height

    def tiles(self) -> list[Tile]:
        """The tiles this renderer will dispatch, in row-major order."""
        return generate_tiles(self.width, self.height, self.config.tile_size)

    def _snapshot(self) -> SceneSnapshot:
        if isinstance(self.scene, SceneSnapshot):
            return self.scene
        return self.scene.snapshot()

    def _workers(self, tile_count: int) -> int:
        workers = self.config.max_workers or os.cpu_count() or 1
        return max(1, min(workers, tile_count))

    def _create_executor(self, workers: int) -> Executor:
        if self.config.executor == "thread":
            return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="tiletrace-tile")
        # Spawned workers do not inherit the parent's threads (GUI, thread pools)
        return ProcessPoolExecutor(
            max_workers=workers,
            mp_context=multiprocessing.get_context("spawn"),
        )

    def render_batches(
        self,
        callback: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
        on_batch: BatchCallback | None = None,
    ) -> list[Batch]:
        """Trace every tile and return the batches in tile order.

        At most one tile per worker is in flight. A new tile is handed out
        only after a previous one finishes, and only while ``cancel`` is
        unset.

        Args:
            callback: Optional progress callback, called on this thread as
                ``callback(completed, total)`` after each tile completes.
            cancel: Optional event, checked on this thread before each tile
                is dispatched. Once set, no further tiles start; tiles
                already running finish normally.
            on_batch: Optional callback receiving each finished batch, in
                completion order. Used for progressive display.

        Returns:
            One batch per tile, in the order of ``tiles()``.

        Raises:
            RenderCancelled: If ``cancel`` was set before every tile ran.
            Exception: Any exception raised while tracing a tile is re-raised
                after the remaining tiles are cancelled.
        """
        snapshot = self._snapshot()
        entities = snapshot.entities
        lights = snapshot.lights
        tiles = self.tiles()
        total = len(tiles)
        tile_size = self.config.tile_size
        background = self.config.background
        workers = self._workers(total)

        logger.debug(
            "Dispatching %d tiles (%dx%d, tile size %d, %d %s workers, %d entities, %d lights)",
            total,
            self.width,
            self.height,
            tile_size,
            workers,
            self.config.executor,
            len(entities),
            len(lights),
        )
        if not lights:
            logger.warning("Scene has no lights; every hit will shade black")

        batches: list[Batch | None] = [None] * total
        completed = 0
        queue: Iterator[tuple[int, Tile]] = iter(enumerate(tiles))
        running: dict[Future[Batch], int] = {}

        with self._create_executor(workers) as executor:

            def dispatch() -> None:
                while len(running) < workers:
                    # Cancellation is checked between tiles, never inside per-pixel work
                    if cancel is not None and cancel.is_set():
                        return
                    item = next(queue, None)
                    if item is None:
                        return
                    index, tile = item
                    future = executor.submit(
                        render_tile, tile, self.camera, entities, lights, tile_size, background
                    )
                    running[future] = index

            dispatch()
            while running:
                done, _ = wait(running, return_when=FIRST_EXCEPTION)
                for future in done:
                    index = running.pop(future)
                    exc = future.exception()
                    if exc is not None:
                        for other in running:
                            other.cancel()
                        raise exc
                    batch = future.result()
                    batches[index] = batch
                    completed += 1
                    if on_batch is not None:
                        on_batch(batch)
                    if callback is not None:
                        callback(completed, total)
                dispatch()

        if completed < total:
            logger.warning("Render cancelled after %d/%d tiles", completed, total)
            raise RenderCancelled(completed, total)
        return [batch for batch in batches if batch is not None]

    def render(
        self,
        callback: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
        on_batch: BatchCallback | None = None,
    ) -> Canvas:
        """Render the full image.

        Args:
            callback: Optional progress callback ``(completed, total)``.
            cancel: Optional cooperative cancellation event.
            on_batch: Optional callback receiving each finished batch.

        Returns:
            A canvas of ``camera.width x camera.height`` unclamped colors.

        Raises:
            RenderCancelled: If the render was cancelled.
        """
        logger.info("Rendering %dx%d image", self.width, self.height)
        start_time = time.perf_counter()

        batches = self.render_batches(callback=callback, cancel=cancel, on_batch=on_batch)
        canvas = Canvas.from_batches(self.width, self.height, batches, background=self.config.background)

        elapsed = time.perf_counter() - start_time
        logger.info("Rendered %d tiles in %.2fs", len(batches), elapsed)
        return canvas
