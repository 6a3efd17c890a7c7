"""Matplotlib preview of a rendered canvas.

Phong shading sums ambient, diffuse and specular terms over every light, so
bright highlights can exceed 1.0. The canvas keeps those values; this module
maps them into the displayable range before showing them:

    linear canvas -> tone map (optional) -> gamma -> clamp to [0, 1]

Example:
    >>> from src.tiletrace.preview.display import show_preview
    >>> canvas = renderer.render()
    >>> show_preview(canvas, tone_map="reinhard")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from src.tiletrace.preview.canvas import Canvas


ToneMapMethod = Literal["none", "reinhard", "exposure"]


def tone_map_reinhard(image: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Compress each channel with ``c / (1 + c)``; negatives become 0."""
    clipped = np.maximum(image, 0.0)
    return (clipped / (1.0 + clipped)).astype(np.float32)


def tone_map_exposure(
    image: npt.NDArray[np.float32],
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Map each channel with ``1 - exp(-c * exposure)``.

    Args:
        image: Linear image of shape (H, W, 3).
        exposure: Brightness multiplier; must be positive.

    Raises:
        ValueError: If exposure is not positive.
    """
    if exposure <= 0.0:
        raise ValueError(f"Exposure must be positive, got {exposure}")
    clipped = np.maximum(image, 0.0)
    return (1.0 - np.exp(-clipped * exposure)).astype(np.float32)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Encode a [0, 1] linear image with ``c ** (1 / gamma)``.

    A gamma of 1.0 returns the image unchanged (still unclamped).
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image
    return np.power(np.clip(image, 0.0, 1.0), 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Turn a linear image into a displayable one.

    The default (no tone mapping, gamma 1.0) only clamps to [0, 1], which
    matches how PPM output quantizes colors.

    Args:
        image: Linear image of shape (H, W, 3).
        tone_map: "none", "reinhard" or "exposure".
        gamma: Display gamma; 2.2 approximates sRGB.
        exposure: Exposure for the "exposure" tone map.

    Returns:
        A new float32 image in [0, 1].

    Raises:
        ValueError: For an unknown tone mapping method.
    """
    if tone_map == "reinhard":
        result = tone_map_reinhard(image)
    elif tone_map == "exposure":
        result = tone_map_exposure(image, exposure)
    elif tone_map == "none":
        result = image.astype(np.float32, copy=True)
    else:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def show_preview(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Show a canvas in a Matplotlib window.

    Args:
        canvas: The rendered canvas.
        tone_map: Tone mapping method.
        gamma: Display gamma.
        exposure: Exposure for the "exposure" tone map.
        title: Figure title; defaults to the image size.
        figsize: Figure size in inches.
        block: Whether to block until the window is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(
        canvas.to_numpy(),
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )

    _, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    if title is None:
        title = f"Render Preview - {canvas.width}x{canvas.height}"
        if tone_map != "none":
            title += f" ({tone_map})"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
