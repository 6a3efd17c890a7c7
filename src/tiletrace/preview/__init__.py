"""Preview module for image output and visualization.

Components:
    canvas: The merged image and plain PPM export
    display: Tone mapping and Matplotlib preview
    export: PNG export and image comparison
    interactive: Taichi GGUI window with progressive tile display, imported
        on first access so that rendering never loads Taichi

Example:
    >>> from src.tiletrace.preview import save_image, show_preview
    >>> canvas = renderer.render()
    >>> save_image(canvas, "sphere.png")
    >>> show_preview(canvas, tone_map="reinhard")
"""

from .canvas import Canvas
from .display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from .export import ImageFormat, compute_rmse, image_to_uint8, save_image, save_png

__all__ = [
    # Canvas
    "Canvas",
    # Interactive preview
    "InteractivePreview",
    # Display functions
    "show_preview",
    # Tone mapping
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "ImageFormat",
    "save_image",
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]


def __getattr__(name: str):
    if name == "InteractivePreview":
        from .interactive import InteractivePreview

        return InteractivePreview
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
