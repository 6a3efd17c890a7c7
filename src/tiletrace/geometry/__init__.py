"""Geometry module for shape variants and intersection algorithms.

Components:
    shape: Shape tags and dispatch of intersection and normal queries
    sphere: Ray/sphere intersection and sphere surface normals

Shapes are tested in object space: the ray is carried through the inverse
of the object's transform, and normals are carried back with the inverse
transpose.
"""

from .shape import Shape, ShapeType, intersect_shape, shape_normal_at
from .sphere import intersect_sphere, sphere_normal_at

__all__ = [
    "Shape",
    "ShapeType",
    "intersect_shape",
    "shape_normal_at",
    "intersect_sphere",
    "sphere_normal_at",
]
