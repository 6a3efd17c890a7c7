"""Scene-level intersection records and nearest-hit selection.

This module turns per-shape parametric roots into IntersectionRecords that
reference the owning entity, gathers them for every entity in a scene, and
selects the visible hit: the record with the smallest non-negative t.

Records live only for the duration of one ray query and are never stored.

Example:
    >>> from src.tiletrace.scene.intersection import intersect_scene, nearest_hit
    >>> records = intersect_scene(ray, snapshot)
    >>> hit = nearest_hit(records)
    >>> if hit is not None:
    ...     metadata = HitMetadata.from_hit(ray, hit)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from src.tiletrace.core.matrix import Matrix4
from src.tiletrace.core.ray import Ray
from src.tiletrace.core.vector import Tuple4
from src.tiletrace.geometry.shape import Shape, intersect_shape, shape_normal_at
from src.tiletrace.materials.phong import PhongMaterial
from src.tiletrace.scene.manager import EntityView


@dataclass(frozen=True, slots=True)
class IntersectionRecord:
    """One ray/object intersection.

    Attributes:
        t: Parametric distance along the ray.
        entity: The intersected entity (its position, shape, transform and
            material).
    """

    t: float
    entity: EntityView

    @property
    def entity_id(self) -> int:
        return self.entity.entity_id

    @property
    def position(self) -> Tuple4:
        return self.entity.position

    @property
    def shape(self) -> Shape:
        return self.entity.shape

    @property
    def transform(self) -> Matrix4:
        return self.entity.transform

    @property
    def material(self) -> PhongMaterial:
        return self.entity.material


def intersect_entity(ray: Ray, entity: EntityView) -> list[IntersectionRecord]:
    """Intersect a ray with one entity.

    Returns:
        One record per root (two for a sphere hit, including the tangent
        case), or an empty list on a miss or a non-invertible transform.
    """
    roots = intersect_shape(ray, entity.position, entity.shape, entity.transform)
    return [IntersectionRecord(t, entity) for t in roots]


def intersect_scene(ray: Ray, entities: Iterable[EntityView]) -> list[IntersectionRecord]:
    """Collect the intersection records of a ray against every entity.

    Args:
        ray: The world-space ray.
        entities: The entities to test, typically a SceneSnapshot.

    Returns:
        All records, in entity order (not sorted by t).
    """
    records: list[IntersectionRecord] = []
    for entity in entities:
        records.extend(intersect_entity(ray, entity))
    return records


def sort_hits(records: Iterable[IntersectionRecord]) -> list[IntersectionRecord]:
    """Return the records ordered by ascending t."""
    return sorted(records, key=lambda record: record.t)


def nearest_hit(records: Iterable[IntersectionRecord]) -> IntersectionRecord | None:
    """Select the visible hit among a ray's intersection records.

    Records with negative t lie behind the ray origin and are discarded.
    Among the rest the one with minimum t wins; ties are broken by input
    order.

    Returns:
        The nearest record with ``t >= 0``, or None if there is none.
    """
    visible = [record for record in records if record.t >= 0.0]
    if not visible:
        return None
    return min(visible, key=lambda record: record.t)


@dataclass(frozen=True, slots=True)
class HitMetadata:
    """Geometry needed to shade a hit.

    Attributes:
        hit: The selected intersection record.
        point: World-space hit point.
        eye_vector: Unit vector from the hit point towards the ray origin.
        normal_vector: Unit surface normal, flipped to face the eye.
        inside: True when the ray origin is inside the object (the outward
            normal faced away from the eye and was flipped).
    """

    hit: IntersectionRecord
    point: Tuple4
    eye_vector: Tuple4
    normal_vector: Tuple4
    inside: bool

    @classmethod
    def from_hit(cls, ray: Ray, hit: IntersectionRecord) -> HitMetadata:
        """Compute the shading geometry for a hit on a ray."""
        point = ray.position(hit.t)
        eye_vector = -ray.direction
        normal_vector = shape_normal_at(point, hit.position, hit.shape, hit.transform)
        inside = normal_vector.dot(eye_vector) < 0.0
        if inside:
            normal_vector = -normal_vector
        return cls(
            hit=hit,
            point=point,
            eye_vector=eye_vector,
            normal_vector=normal_vector,
            inside=inside,
        )
