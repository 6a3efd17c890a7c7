#!/usr/bin/env python3
"""Render the demo sphere scene.

This script renders the single-sphere demo scene with the tile-parallel
renderer and writes the image as a plain PPM or a PNG.

Usage:
    python -m examples.render_demo [options]

Options:
    --width WIDTH           Image width in pixels (default: 100)
    --height HEIGHT         Image height in pixels (default: 100)
    --fov DEGREES           Field of view in degrees (default: 45)
    --tile-size SIZE        Tile edge length in pixels (default: 16)
    --workers N             Worker count (default: CPU count)
    --executor KIND         Worker pool, process or thread (default: process)
    --output OUTPUT         Output file path (default: sphere.ppm)
    --format {ppm,png}      Output format (default: from the output suffix)
    --log-level LEVEL       Logging level (default: INFO)
    --preview {matplotlib,interactive}
                            Show the image after (or while) rendering
    --quiet                 Suppress progress output

Example:
    python -m examples.render_demo --width 400 --height 200 --workers 8 --output sphere.png
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
import time
from pathlib import Path

logger = logging.getLogger("src.tiletrace.examples.render_demo")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=100,
        help="Image width in pixels (default: 100)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=100,
        help="Image height in pixels (default: 100)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=45.0,
        help="Field of view in degrees (default: 45)",
    )
    parser.add_argument(
        "--tile-size",
        type=int,
        default=16,
        help="Tile edge length in pixels (default: 16)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of workers (default: CPU count)",
    )
    parser.add_argument(
        "--executor",
        choices=("process", "thread"),
        default="process",
        help="Run tiles in worker processes or threads (default: process)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="sphere.ppm",
        help="Output file path (default: sphere.ppm)",
    )
    parser.add_argument(
        "--format",
        choices=("ppm", "png"),
        default=None,
        help="Output format (default: inferred from the output suffix)",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--preview",
        choices=("matplotlib", "interactive"),
        default=None,
        help="Show the rendered image in a preview window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_demo(
    width: int = 100,
    height: int = 100,
    fov_degrees: float = 45.0,
    tile_size: int = 16,
    workers: int | None = None,
    executor: str = "process",
    output_path: str = "sphere.ppm",
    image_format: str | None = None,
    preview: str | None = None,
    quiet: bool = False,
) -> Path | None:
    """Render the demo scene and save it.

    Returns:
        Path to the saved image, or None if an interactive render was closed
        before it finished.
    """
    from src.tiletrace.core.renderer import RenderConfig, TileRenderer
    from src.tiletrace.preview.display import show_preview
    from src.tiletrace.preview.export import save_image
    from src.tiletrace.scene.demo import DemoSceneParams, create_demo_scene

    params = DemoSceneParams(field_of_view=math.radians(fov_degrees))
    scene, camera = create_demo_scene(width, height, params)
    config = RenderConfig(tile_size=tile_size, max_workers=workers, executor=executor)  # type: ignore[arg-type]
    renderer = TileRenderer(camera, scene, config)

    start_time = time.perf_counter()

    def progress_callback(completed: int, total: int) -> None:
        if not quiet:
            progress_pct = (completed / total) * 100 if total > 0 else 100
            print(f"\r  Progress: {completed}/{total} tiles ({progress_pct:.1f}%)", end="", flush=True)

    if preview == "interactive":
        from src.tiletrace.preview.interactive import InteractivePreview

        if not InteractivePreview.is_display_available():
            raise RuntimeError("No display available for the interactive preview")
        canvas = InteractivePreview(width, height).run_render(renderer)
        if canvas is None:
            logger.warning("Preview closed before the render finished; nothing saved")
            return None
    else:
        canvas = renderer.render(callback=progress_callback)
        if not quiet:
            print()  # Newline after progress

    output_file = Path(output_path)
    save_image(canvas, output_file, image_format)  # type: ignore[arg-type]

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.perf_counter() - start_time:.2f}s")

    if preview == "matplotlib":
        show_preview(canvas)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    from src.tiletrace.utils.logconfig import setup_logging

    args = parse_args(argv)
    setup_logging(level=args.log_level)

    if args.preview == "interactive":
        import taichi as ti

        ti.init(arch=ti.cpu)

    try:
        render_demo(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            tile_size=args.tile_size,
            workers=args.workers,
            executor=args.executor,
            output_path=args.output,
            image_format=args.format,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        logger.error("Render failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
