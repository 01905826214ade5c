"""Pytest configuration for raycaster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
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
def ortho_context():
    """A small orthographic context with the default +-3 view box."""
    from raycaster.camera.context import GraphicsContext
    from raycaster.camera.projection import OrthographicProjection

    return GraphicsContext(OrthographicProjection.symmetric(3.0), width=101, height=101)


@pytest.fixture
def perspective_context():
    """A small perspective context with a non-square image."""
    from raycaster.camera.context import GraphicsContext
    from raycaster.camera.projection import PerspectiveProjection

    return GraphicsContext(
        PerspectiveProjection(aspect=4.0 / 3.0, fovy=0.8, znear=0.5, zfar=50.0),
        width=80,
        height=60,
    )
