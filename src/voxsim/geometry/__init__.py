"""Geometry module for analytic shape primitives.

This module provides the shape primitives and their two queries:

Components:
    hit: RayHit record and RayStatus outcome codes
    sphere: Sphere primitive with signed distance and near-root ray hit
    box: Axis-aligned box with a two-branch signed distance
    plane: Infinite plane with signed distance and ray hit
    shape: Tagged-union Shape with exhaustive dispatch over the primitives

All queries are implemented as Taichi functions (@ti.func) and follow the
pattern:
    distance = <shape>_distance_to_point(shape, point)
    record = hit_<shape>(ray_origin, ray_direction, shape, max_dist)
"""

from .box import INSIDE_EPSILON, Box, box_distance_to_point, hit_box
from .hit import (
    PARALLEL_EPSILON,
    RayHit,
    RayStatus,
    make_unsupported_record,
)
from .plane import Plane, hit_plane, plane_distance_to_point
from .shape import (
    BLACK,
    BLUE,
    DEFAULT_COLOR,
    GRAY,
    GREEN,
    RED,
    WHITE,
    Shape,
    ShapeKind,
    make_box_shape,
    make_plane_shape,
    make_sphere_shape,
    shape_distance_to_point,
    shape_ray_intersection,
)
from .sphere import Sphere, hit_sphere, sphere_distance_to_point

__all__ = [
    "RayHit",
    "RayStatus",
    "make_unsupported_record",
    "PARALLEL_EPSILON",
    "Sphere",
    "hit_sphere",
    "sphere_distance_to_point",
    "Box",
    "hit_box",
    "box_distance_to_point",
    "INSIDE_EPSILON",
    "Plane",
    "hit_plane",
    "plane_distance_to_point",
    "Shape",
    "ShapeKind",
    "make_sphere_shape",
    "make_box_shape",
    "make_plane_shape",
    "shape_distance_to_point",
    "shape_ray_intersection",
    "WHITE",
    "BLACK",
    "GRAY",
    "RED",
    "GREEN",
    "BLUE",
    "DEFAULT_COLOR",
]
