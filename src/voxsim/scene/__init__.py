"""Scene module for shape storage and Python-scope queries.

Components:
    storage: Structure-of-Arrays Taichi fields holding every shape's parameters
    manager: ShapeSet, the checked Python API for adding and querying shapes

Shapes are stored in module-level fields so kernels can look them up by index
with get_shape(). The ShapeSet keeps a Python-side record of every shape and
validates parameters before they reach the fields.
"""

from .manager import (
    NORMAL_TOLERANCE,
    BoxInfo,
    PlaneInfo,
    RayQueryResult,
    ShapeInfo,
    ShapeSet,
    SphereInfo,
)
from .storage import (
    MAX_SHAPES,
    add_shape_record,
    clear_shapes,
    distance_to_stored_shape,
    get_shape,
    get_generation,
    get_shape_count,
    intersect_stored_shape,
)

__all__ = [
    # Storage module
    "MAX_SHAPES",
    "add_shape_record",
    "clear_shapes",
    "get_shape",
    "get_generation",
    "get_shape_count",
    "distance_to_stored_shape",
    "intersect_stored_shape",
    # Manager module
    "ShapeSet",
    "ShapeInfo",
    "SphereInfo",
    "BoxInfo",
    "PlaneInfo",
    "RayQueryResult",
    "NORMAL_TOLERANCE",
]
