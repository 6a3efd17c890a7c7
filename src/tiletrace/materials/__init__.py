"""Materials module.

Components:
    phong: The Phong material and its ambient/diffuse/specular lighting model
"""

from .phong import MaterialType, PhongMaterial, lighting, lighting_all, phong_lighting

__all__ = [
    "MaterialType",
    "PhongMaterial",
    "lighting",
    "lighting_all",
    "phong_lighting",
]
