"""Pytest configuration for tiletrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization, which the interactive preview's display field
requires and which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def white_light():
    """A white point light above, left of and behind the default camera."""
    from src.tiletrace.core.color import WHITE
    from src.tiletrace.core.vector import Tuple4
    from src.tiletrace.scene.lights import PointLight

    return PointLight(Tuple4.point(-10.0, 10.0, -10.0), WHITE)


@pytest.fixture
def sphere_scene(white_light):
    """A scene with one default unit sphere at the origin and a white light."""
    from src.tiletrace.scene.manager import SceneStore

    scene = SceneStore()
    scene.add_sphere()
    scene.add_light(white_light)
    return scene


@pytest.fixture
def unit_sphere():
    """Read-only view of a default unit sphere at the origin."""
    from src.tiletrace.core.matrix import Matrix4
    from src.tiletrace.geometry.shape import Shape
    from src.tiletrace.materials.phong import PhongMaterial
    from src.tiletrace.scene.manager import ORIGIN, EntityView

    return EntityView(0, ORIGIN, Shape.sphere(), Matrix4.identity(), PhongMaterial())


@pytest.fixture
def reset_package_logger():
    """Undo setup_logging() so later tests see the default logger state."""
    import logging

    from src.tiletrace.utils.logconfig import PACKAGE_LOGGER

    yield logging.getLogger(PACKAGE_LOGGER)
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
