"""Image file export for rendered canvases.

Two formats are supported:

    - PPM: plain-text P3, written by ``Canvas.save_ppm``
    - PNG: 8-bit RGB via Pillow, with optional tone mapping and gamma

Example:
    >>> from src.tiletrace.preview.export import save_image
    >>> save_image(canvas, "sphere.png")
    >>> save_image(canvas, "sphere.ppm")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.tiletrace.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    from src.tiletrace.preview.canvas import Canvas

logger = logging.getLogger(__name__)

ImageFormat = Literal["ppm", "png"]


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Quantize a linear image to 8 bits per channel.

    Values are processed for display, scaled by 255 and rounded half up, so
    with the defaults the result matches the PPM channel values.

    Returns:
        Array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return np.floor(processed.astype(np.float64) * 255.0 + 0.5).astype(np.uint8)


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Write a canvas as an 8-bit RGB PNG.

    Args:
        canvas: The rendered canvas.
        filepath: Output path.
        tone_map: Tone mapping method.
        gamma: Output gamma; 1.0 stores the clamped linear values.
        exposure: Exposure for the "exposure" tone map.
    """
    image_uint8 = image_to_uint8(canvas.pixels, tone_map=tone_map, gamma=gamma, exposure=exposure)
    PILImage.fromarray(image_uint8).save(filepath, format="PNG")
    logger.info("Saved PNG to %s", filepath)


def save_image(
    canvas: Canvas,
    filepath: str | Path,
    image_format: ImageFormat | None = None,
    **kwargs: float | str,
) -> None:
    """Write a canvas, picking the format from the argument or the suffix.

    Args:
        canvas: The rendered canvas.
        filepath: Output path.
        image_format: "ppm" or "png". Inferred from the file suffix if None.
        **kwargs: Display options forwarded to ``save_png``.

    Raises:
        ValueError: If the format is unknown or cannot be inferred.
    """
    filepath = Path(filepath)
    if image_format is None:
        image_format = filepath.suffix.lstrip(".").lower()  # type: ignore[assignment]

    if image_format == "ppm":
        canvas.save_ppm(filepath)
    elif image_format == "png":
        save_png(canvas, filepath, **kwargs)  # type: ignore[arg-type]
    else:
        raise ValueError(f"Unsupported image format: {image_format!r}")


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Root mean squared error between two equally shaped images.

    Raises:
        ValueError: If the shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")
    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
