"""Scene store: an arena of renderable entities and lights.

The SceneStore owns every entity's attributes (position, shape, transform,
material) and addresses entities by stable integer ids. The renderer never
reads the store directly while tiles are being traced; it takes an
immutable SceneSnapshot once per render and hands that snapshot to every
worker, so concurrent reads need no locking and later edits to the store
cannot affect a render in flight.

Example:
    >>> from src.tiletrace.scene.manager import SceneStore
    >>> from src.tiletrace.materials.phong import PhongMaterial
    >>> scene = SceneStore()
    >>> sphere_id = scene.add_sphere(material=PhongMaterial())
    >>> snapshot = scene.snapshot()
    >>> len(snapshot.entities)
    1
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from src.tiletrace.core.color import Color
from src.tiletrace.core.matrix import Matrix4
from src.tiletrace.core.vector import Tuple4
from src.tiletrace.geometry.shape import Shape, ShapeType
from src.tiletrace.materials.phong import PhongMaterial
from src.tiletrace.scene.lights import PointLight

logger = logging.getLogger(__name__)

ORIGIN = Tuple4.point(0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class EntityView:
    """Read-only view of one entity's attributes.

    Attributes:
        entity_id: Stable id assigned by the store.
        position: Object-space centre of the shape (a point).
        shape: The shape variant.
        transform: Object-to-world transform.
        material: Surface material.
    """

    entity_id: int
    position: Tuple4
    shape: Shape
    transform: Matrix4
    material: PhongMaterial


@dataclass(frozen=True, slots=True)
class SceneSnapshot:
    """Immutable copy of a scene, safe to share across worker threads.

    Attributes:
        entities: Entity views ordered by id.
        lights: Lights in insertion order.
    """

    entities: tuple[EntityView, ...]
    lights: tuple[PointLight, ...]

    def __iter__(self) -> Iterator[EntityView]:
        return iter(self.entities)

    def __len__(self) -> int:
        return len(self.entities)


@dataclass
class SceneConfig:
    """Plain-data scene description for serialization.

    Attributes:
        spheres: List of sphere configurations.
        lights: List of light configurations.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


def _color_from(values: Sequence[float]) -> Color:
    r, g, b = (float(v) for v in values)
    return Color(r, g, b)


def _point_from(values: Sequence[float]) -> Tuple4:
    x, y, z = (float(v) for v in values)
    return Tuple4.point(x, y, z)


class SceneStore:
    """Arena of entities addressed by stable integer ids, plus the scene lights.

    Ids are assigned in increasing order and never reused, so an id remains
    valid (or raises KeyError once removed) for the lifetime of the store.
    """

    def __init__(self) -> None:
        self._entities: dict[int, EntityView] = {}
        self._lights: list[PointLight] = []
        self._next_id = 0

    # =========================================================================
    # Entities
    # =========================================================================

    def add_entity(
        self,
        position: Tuple4,
        shape: Shape,
        transform: Matrix4 | None = None,
        material: PhongMaterial | None = None,
    ) -> int:
        """Add an entity to the scene.

        Args:
            position: Object-space centre of the shape (must be a point).
            shape: The shape variant.
            transform: Object-to-world transform. Defaults to identity. A
                singular transform is accepted; the object is simply never
                hit.
            material: Surface material. Defaults to the default Phong material.

        Returns:
            The id of the new entity.

        Raises:
            ValueError: If position is not a point.
        """
        if not position.is_point():
            raise ValueError(f"Entity position must be a point, got {position}")
        entity_id = self._next_id
        self._next_id += 1
        self._entities[entity_id] = EntityView(
            entity_id=entity_id,
            position=position,
            shape=shape,
            transform=transform if transform is not None else Matrix4.identity(),
            material=material if material is not None else PhongMaterial(),
        )
        logger.debug("Added entity %d (%s)", entity_id, shape.shape_type.name)
        return entity_id

    def add_sphere(
        self,
        position: Tuple4 = ORIGIN,
        radius: float = 1.0,
        transform: Matrix4 | None = None,
        material: PhongMaterial | None = None,
    ) -> int:
        """Add a sphere (unit sphere at the origin by default)."""
        return self.add_entity(position, Shape.sphere(radius), transform, material)

    def get_entity(self, entity_id: int) -> EntityView:
        """Look up an entity by id.

        Raises:
            KeyError: If no entity has this id.
        """
        return self._entities[entity_id]

    def remove_entity(self, entity_id: int) -> None:
        """Remove an entity. Its id is not reused.

        Raises:
            KeyError: If no entity has this id.
        """
        del self._entities[entity_id]

    def entities(self) -> Iterator[EntityView]:
        """Iterate over all entities in id order."""
        return iter(sorted(self._entities.values(), key=lambda e: e.entity_id))

    def entity_count(self) -> int:
        return len(self._entities)

    # =========================================================================
    # Lights
    # =========================================================================

    def add_light(self, light: PointLight) -> int:
        """Add a light and return its index."""
        self._lights.append(light)
        return len(self._lights) - 1

    @property
    def lights(self) -> tuple[PointLight, ...]:
        return tuple(self._lights)

    # =========================================================================
    # Whole-scene operations
    # =========================================================================

    def clear(self) -> None:
        """Remove all entities and lights. Ids keep counting upwards."""
        self._entities.clear()
        self._lights.clear()

    def snapshot(self) -> SceneSnapshot:
        """Take an immutable snapshot for one render pass."""
        return SceneSnapshot(entities=tuple(self.entities()), lights=self.lights)

    def to_config(self) -> SceneConfig:
        """Export the scene as plain data.

        Returns:
            A SceneConfig whose dictionaries contain only lists and floats.
        """
        config = SceneConfig()
        for entity in self.entities():
            material = entity.material
            config.spheres.append(
                {
                    "position": [entity.position.x, entity.position.y, entity.position.z],
                    "radius": entity.shape.radius,
                    "transform": [list(entity.transform.row(r)) for r in range(4)],
                    "material": {
                        "color": list(material.color.as_tuple()),
                        "ambient": material.ambient,
                        "diffuse": material.diffuse,
                        "specular": material.specular,
                        "shininess": material.shininess,
                    },
                }
            )
        for light in self._lights:
            config.lights.append(
                {
                    "position": [light.position.x, light.position.y, light.position.z],
                    "intensity": list(light.intensity.as_tuple()),
                }
            )
        return config

    @classmethod
    def from_config(cls, config: SceneConfig) -> SceneStore:
        """Build a scene from plain data produced by ``to_config``.

        Missing optional keys fall back to defaults (identity transform,
        unit radius, default Phong material).

        Raises:
            KeyError: If a sphere or light lacks its position, or a light
                lacks its intensity.
            ValueError: If any value is out of range.
        """
        scene = cls()
        for sphere in config.spheres:
            transform = None
            if "transform" in sphere:
                transform = Matrix4.from_rows(*sphere["transform"])
            material = None
            if "material" in sphere:
                params = dict(sphere["material"])
                if "color" in params:
                    params["color"] = _color_from(params["color"])
                material = PhongMaterial(**params)
            scene.add_entity(
                _point_from(sphere["position"]),
                Shape(ShapeType.SPHERE, float(sphere.get("radius", 1.0))),
                transform,
                material,
            )
        for light in config.lights:
            scene.add_light(
                PointLight(_point_from(light["position"]), _color_from(light["intensity"]))
            )
        return scene
