"""Demo scene: a single shaded sphere.

The demo is the smallest scene that exercises every stage of the pipeline:

- A unit sphere at the origin with a magenta Phong material
- A white point light above, to the left of and behind the camera
- A camera five units back along -z, looking at the origin with a 45 degree
  field of view

Example:
    >>> from src.tiletrace.scene.demo import create_demo_scene
    >>> scene, camera = create_demo_scene(100, 100)
    >>> scene.entity_count()
    1
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.tiletrace.camera.pinhole import Camera
from src.tiletrace.core.color import Color
from src.tiletrace.core.transform import view_transform
from src.tiletrace.core.vector import Tuple4
from src.tiletrace.materials.phong import PhongMaterial
from src.tiletrace.scene.lights import PointLight
from src.tiletrace.scene.manager import SceneStore

# =============================================================================
# Demo Scene Parameters
# =============================================================================


@dataclass
class DemoSceneParams:
    """Parameters of the demo scene.

    Attributes:
        sphere_color: Phong surface color of the sphere.
        light_position: World-space position of the point light.
        light_intensity: RGB intensity of the point light.
        camera_from: Eye position.
        camera_to: Point the camera looks at.
        camera_up: Approximate up direction.
        field_of_view: Camera field of view in radians.
    """

    sphere_color: tuple[float, float, float] = (1.0, 0.2, 1.0)
    light_position: tuple[float, float, float] = (-10.0, 10.0, -10.0)
    light_intensity: tuple[float, float, float] = (1.0, 1.0, 1.0)
    camera_from: tuple[float, float, float] = (0.0, 0.0, -5.0)
    camera_to: tuple[float, float, float] = (0.0, 0.0, 0.0)
    camera_up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    field_of_view: float = math.pi / 4.0


def create_demo_scene(
    width: int,
    height: int,
    params: DemoSceneParams | None = None,
) -> tuple[SceneStore, Camera]:
    """Build the demo scene and a camera of the requested size.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        params: Scene parameters. Defaults to ``DemoSceneParams()``.

    Returns:
        Tuple of (scene, camera).
    """
    if params is None:
        params = DemoSceneParams()

    scene = SceneStore()
    scene.add_sphere(material=PhongMaterial(color=Color(*params.sphere_color)))
    scene.add_light(PointLight(Tuple4.point(*params.light_position), Color(*params.light_intensity)))

    transform = view_transform(
        Tuple4.point(*params.camera_from),
        Tuple4.point(*params.camera_to),
        Tuple4.vector(*params.camera_up),
    )
    camera = Camera(width, height, params.field_of_view, transform)
    return scene, camera
