"""Scene module for scene storage and ray-scene queries.

Components:
    lights: Point lights
    manager: Entity arena with stable ids and immutable snapshots
    intersection: Intersection records and nearest-hit selection
    demo: The single-sphere demo scene
"""

from .demo import DemoSceneParams, create_demo_scene
from .intersection import (
    HitMetadata,
    IntersectionRecord,
    intersect_entity,
    intersect_scene,
    nearest_hit,
    sort_hits,
)
from .lights import PointLight
from .manager import ORIGIN, EntityView, SceneConfig, SceneSnapshot, SceneStore

__all__ = [
    # Lights
    "PointLight",
    # Scene store
    "ORIGIN",
    "EntityView",
    "SceneConfig",
    "SceneSnapshot",
    "SceneStore",
    # Intersection
    "HitMetadata",
    "IntersectionRecord",
    "intersect_entity",
    "intersect_scene",
    "nearest_hit",
    "sort_hits",
    # Demo scene
    "DemoSceneParams",
    "create_demo_scene",
]
