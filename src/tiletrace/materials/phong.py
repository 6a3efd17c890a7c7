"""Phong local-illumination material.

This module provides the Phong material parameters and the shading function
that evaluates the Phong reflection model at a surface point:

    effective = material.color * light.intensity
    ambient   = effective * ambient
    diffuse   = effective * diffuse * dot(L, N)                  (if dot(L, N) >= 0)
    specular  = intensity * specular * dot(R, E) ^ shininess     (if dot(R, E) > 0)

where L is the unit vector towards the light, N the surface normal, E the
eye vector and R the reflection of -L about N. The result is the unclamped
sum ``ambient + diffuse + specular``; clamping belongs to the image sink.

Example:
    >>> from src.tiletrace.core.color import WHITE, Color
    >>> from src.tiletrace.core.vector import Tuple4
    >>> from src.tiletrace.materials.phong import PhongMaterial, phong_lighting
    >>> from src.tiletrace.scene.lights import PointLight
    >>> light = PointLight(Tuple4.point(0.0, 0.0, -10.0), WHITE)
    >>> color = phong_lighting(
    ...     PhongMaterial(),
    ...     light,
    ...     Tuple4.point(0.0, 0.0, 0.0),
    ...     Tuple4.vector(0.0, 0.0, -1.0),
    ...     Tuple4.vector(0.0, 0.0, -1.0),
    ... )
    >>> color.approx_equal(Color(1.9, 1.9, 1.9))
    True
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

from src.tiletrace.core.color import BLACK, WHITE, Color
from src.tiletrace.core.vector import Tuple4

if TYPE_CHECKING:
    from src.tiletrace.scene.lights import PointLight


class MaterialType(IntEnum):
    """Enumeration of supported material models, used for shading dispatch."""

    PHONG = 0


@dataclass(frozen=True, slots=True)
class PhongMaterial:
    """Parameters of the Phong reflection model.

    Attributes:
        color: Base surface color. Default is white.
        ambient: Ambient coefficient, usually in [0, 1]. Default 0.1.
        diffuse: Diffuse coefficient, usually in [0, 1]. Default 0.9.
        specular: Specular coefficient, usually in [0, 1]. Default 0.9.
        shininess: Specular exponent; larger values give a tighter highlight.
            Default 200.0.
    """

    color: Color = field(default=WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    material_type: MaterialType = field(default=MaterialType.PHONG, init=False)

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Phong {name} coefficient must be non-negative, got {value}")
        if self.shininess <= 0.0:
            raise ValueError(f"Phong shininess must be positive, got {self.shininess}")


def phong_lighting(
    material: PhongMaterial,
    light: PointLight,
    point: Tuple4,
    eye_vector: Tuple4,
    normal_vector: Tuple4,
) -> Color:
    """Evaluate the Phong model for one point light.

    Args:
        material: The surface material.
        light: The light source.
        point: The world-space surface point being shaded.
        eye_vector: Unit vector from the point towards the eye.
        normal_vector: Unit surface normal at the point.

    Returns:
        The unclamped shaded color. When the light is behind the surface
        only the ambient term contributes.
    """
    effective_color = material.color * light.intensity
    ambient = effective_color * material.ambient

    light_vector = (light.position - point).normalize()
    light_dot_normal = light_vector.dot(normal_vector)
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal
    reflect_vector = (-light_vector).reflect(normal_vector)
    reflect_dot_eye = reflect_vector.dot(eye_vector)
    if reflect_dot_eye > 0.0:
        factor = reflect_dot_eye**material.shininess
        specular = light.intensity * material.specular * factor
    else:
        specular = BLACK
    return ambient + diffuse + specular


def lighting(
    material: PhongMaterial,
    light: PointLight,
    point: Tuple4,
    eye_vector: Tuple4,
    normal_vector: Tuple4,
) -> Color:
    """Shade a point with the model selected by the material's type.

    Raises:
        ValueError: If the material type is not supported.
    """
    if material.material_type == MaterialType.PHONG:
        return phong_lighting(material, light, point, eye_vector, normal_vector)
    raise ValueError(f"Unsupported material type: {material.material_type!r}")


def lighting_all(
    material: PhongMaterial,
    lights: Iterable[PointLight],
    point: Tuple4,
    eye_vector: Tuple4,
    normal_vector: Tuple4,
) -> Color:
    """Sum the contribution of every light at a surface point.

    Each light contributes its own ambient, diffuse and specular terms, so
    a scene with one light shades exactly like ``lighting``.
    """
    total = BLACK
    for light in lights:
        total = total + lighting(material, light, point, eye_vector, normal_vector)
    return total
