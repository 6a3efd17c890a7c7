"""Tile-parallel Phong ray tracer.

This package renders scenes of transformed spheres lit by point lights. The
image is split into tiles that a pool of worker processes traces; the
finished tiles are merged into a canvas in a deterministic order.

Subpackages:
    core: Vector and matrix algebra, transforms, rays, tiling and rendering
    geometry: Shape variants and ray/shape intersection
    materials: The Phong material and lighting model
    scene: Scene store, lights, intersection records and the demo scene
    camera: Pinhole camera with per-pixel ray generation
    preview: Canvas, PPM/PNG export and preview windows
    utils: Logging setup for entry points
"""

__version__ = "0.1.0"
