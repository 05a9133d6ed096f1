"""Pytest configuration for voxsim tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate the module-level shape storage fields between tests.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_shape_storage():
    """Clear stored shapes before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the storage fields are created after ti.init()
    from voxsim.scene.storage import clear_shapes

    clear_shapes()
    yield
    clear_shapes()
