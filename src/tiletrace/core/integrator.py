"""Per-pixel light transport: primary ray, nearest hit, Phong shading.

The integrator traces a single shadow-less primary ray per pixel:

1. Generate the camera ray through the pixel centre.
2. Intersect it with every entity of the scene snapshot.
3. Select the nearest hit with non-negative t.
4. Shade the hit with the Phong model, summing every light.

A pixel whose ray hits nothing keeps the background color. All inputs are
read-only, so tiles can be traced concurrently from several threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.tiletrace.camera.pinhole import Camera
from src.tiletrace.core.color import BLACK, Color
from src.tiletrace.core.ray import Ray
from src.tiletrace.core.tiling import DEFAULT_TILE_SIZE, Batch, Tile
from src.tiletrace.materials.phong import lighting_all
from src.tiletrace.scene.intersection import HitMetadata, intersect_scene, nearest_hit
from src.tiletrace.scene.lights import PointLight
from src.tiletrace.scene.manager import EntityView


def trace_ray(
    ray: Ray,
    entities: Iterable[EntityView],
    lights: Sequence[PointLight],
) -> Color | None:
    """Compute the color seen along a ray.

    Args:
        ray: The world-space primary ray.
        entities: The scene entities (read-only).
        lights: The scene lights.

    Returns:
        The unclamped shaded color of the nearest hit, or None when the ray
        has no visible hit.
    """
    hit = nearest_hit(intersect_scene(ray, entities))
    if hit is None:
        return None

    metadata = HitMetadata.from_hit(ray, hit)
    return lighting_all(
        hit.material,
        lights,
        metadata.point,
        metadata.eye_vector,
        metadata.normal_vector,
    )


def render_tile(
    tile: Tile,
    camera: Camera,
    entities: Sequence[EntityView],
    lights: Sequence[PointLight],
    tile_size: int = DEFAULT_TILE_SIZE,
    background: Color = BLACK,
) -> Batch:
    """Trace every pixel of one tile into a fresh batch.

    The batch is owned by the caller; nothing outside it is written.

    Args:
        tile: The pixel range to trace.
        camera: The camera generating primary rays.
        entities: The scene entities (read-only).
        lights: The scene lights.
        tile_size: Edge length of a full tile; sizes the batch buffer.
        background: Color written for pixels without a visible hit.

    Returns:
        A Batch holding the tile's colors.
    """
    batch = Batch.empty(tile, tile_size)
    colors = batch.colors
    if background != BLACK:
        batch.region()[:] = background.as_tuple()

    for x, y in tile.pixels():
        color = trace_ray(camera.ray_for_pixel(x, y), entities, lights)
        if color is not None:
            colors[y - tile.y_start, x - tile.x_start] = color.as_tuple()
    return batch
