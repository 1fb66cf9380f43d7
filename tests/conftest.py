"""Pytest configuration for pathtracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    from pathtracer.config import init_taichi

    init_taichi(seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear the sphere and material tables before and after each test."""
    # Import here so the fields are declared after Taichi is initialized
    from pathtracer.materials.material import clear_materials
    from pathtracer.scene.background import Background, setup_background
    from pathtracer.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_materials()
        setup_background(Background.sky())

    _clear_all()
    yield
    _clear_all()


@pytest.fixture
def pinhole_camera():
    """A camera at the origin looking down -z with a 90 degree field of view."""
    import math

    from pathtracer.camera.thin_lens import Camera

    return Camera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        vfov=math.radians(90.0),
        aspect_ratio=1.0,
    )
