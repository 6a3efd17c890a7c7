"""Unit tests for per-pixel tracing and per-tile rendering.

Tests cover:
- Tracing a primary ray to a shaded color
- Rays that miss every object
- Filling a batch for a tile, including the background color
"""

import math

import numpy as np


def _front_ray():
    from src.tiletrace.core.ray import Ray
    from src.tiletrace.core.vector import Tuple4

    return Ray(Tuple4.point(0.0, 0.0, -5.0), Tuple4.vector(0.0, 0.0, 1.0))


class TestTraceRay:
    """Tests for trace_ray."""

    def test_hit_is_shaded(self, sphere_scene):
        """Test the color where the ray hits the front of the sphere."""
        from src.tiletrace.core.integrator import trace_ray

        snapshot = sphere_scene.snapshot()
        color = trace_ray(_front_ray(), snapshot.entities, snapshot.lights)

        # Light at (-10, 10, -10) seen from the hit point (0, 0, -1)
        expected = 0.1 + 0.9 * 9.0 / math.sqrt(281.0)
        assert color is not None
        assert abs(color.r - expected) < 1e-4
        assert abs(color.g - expected) < 1e-4
        assert abs(color.b - expected) < 1e-4

    def test_miss_returns_none(self, sphere_scene):
        """Test that a ray missing everything has no color."""
        from src.tiletrace.core.integrator import trace_ray
        from src.tiletrace.core.ray import Ray
        from src.tiletrace.core.vector import Tuple4

        snapshot = sphere_scene.snapshot()
        ray = Ray(Tuple4.point(0.0, 0.0, -5.0), Tuple4.vector(0.0, 1.0, 0.0))
        assert trace_ray(ray, snapshot.entities, snapshot.lights) is None

    def test_nearest_entity_wins(self, white_light):
        """Test that the front sphere hides the one behind it."""
        from src.tiletrace.core.color import Color
        from src.tiletrace.core.integrator import trace_ray
        from src.tiletrace.core.transform import translation
        from src.tiletrace.materials.phong import PhongMaterial
        from src.tiletrace.scene.manager import SceneStore

        scene = SceneStore()
        scene.add_sphere(
            transform=translation(0.0, 0.0, 3.0),
            material=PhongMaterial(color=Color(0.0, 0.0, 1.0), ambient=1.0, diffuse=0.0, specular=0.0),
        )
        scene.add_sphere(
            material=PhongMaterial(color=Color(1.0, 0.0, 0.0), ambient=1.0, diffuse=0.0, specular=0.0),
        )
        scene.add_light(white_light)

        snapshot = scene.snapshot()
        color = trace_ray(_front_ray(), snapshot.entities, snapshot.lights)
        assert color is not None
        assert color.approx_equal(Color(1.0, 0.0, 0.0))


class TestRenderTile:
    """Tests for render_tile."""

    def test_tile_matches_per_pixel_tracing(self, sphere_scene):
        """Test that every pixel of the batch equals its traced color."""
        from src.tiletrace.camera.pinhole import Camera
        from src.tiletrace.core.integrator import render_tile, trace_ray
        from src.tiletrace.core.tiling import Tile
        from src.tiletrace.core.transform import view_transform
        from src.tiletrace.core.vector import Tuple4

        transform = view_transform(
            Tuple4.point(0.0, 0.0, -5.0), Tuple4.point(0.0, 0.0, 0.0), Tuple4.vector(0.0, 1.0, 0.0)
        )
        camera = Camera(20, 20, math.pi / 3.0, transform)
        snapshot = sphere_scene.snapshot()
        tile = Tile(4, 12, 6, 14)
        batch = render_tile(tile, camera, snapshot.entities, snapshot.lights, tile_size=8)

        assert batch.tile == tile
        for x, y in tile.pixels():
            color = trace_ray(camera.ray_for_pixel(x, y), snapshot.entities, snapshot.lights)
            expected = (0.0, 0.0, 0.0) if color is None else color.as_tuple()
            assert np.allclose(batch.colors[y - 6, x - 4], expected)

    def test_background_fills_misses(self):
        """Test that pixels without a hit take the background color."""
        from src.tiletrace.camera.pinhole import Camera
        from src.tiletrace.core.color import Color
        from src.tiletrace.core.integrator import render_tile
        from src.tiletrace.core.tiling import Tile

        camera = Camera(8, 8, math.pi / 2.0)
        tile = Tile(0, 5, 0, 3)
        batch = render_tile(tile, camera, [], [], tile_size=8, background=Color(0.2, 0.4, 0.6))
        assert np.allclose(batch.region(), (0.2, 0.4, 0.6))
        # Padding outside the tile stays black
        assert np.all(batch.colors[3:, :] == 0.0)
        assert np.all(batch.colors[:, 5:] == 0.0)
