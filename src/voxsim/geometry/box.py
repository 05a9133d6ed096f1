"""Axis-aligned box primitive with a two-branch signed distance.

A box is defined by its center and half-extents, the half-length of the box
along each axis. Boxes are never rotated.

The distance is computed piecewise:

1. Outside: per axis, the amount by which the point lies beyond the box
       d_i = max(max(c_i - h_i - p_i, 0), p_i - c_i - h_i)
   and the distance is |d|. This is exact whenever the point is outside on at
   least one axis, but collapses to zero for interior points.
2. Inside: when |d| < INSIDE_EPSILON the point is taken to be inside, and the
   per-axis penetration
       p_i = max(c_i - h_i - p_i, p_i - c_i - h_i)
   is negative on every axis. Its largest component is the (negative)
   distance to the nearest face.

The two branches agree at a face only up to INSIDE_EPSILON: a point just
outside a face by less than the threshold is evaluated with the inside
formula and reports a tiny positive penetration instead of its outside
distance. This seam is part of the distance convention used by the mapping
tests and is kept as is.

Boxes do not implement a ray query. hit_box reports RayStatus.UNSUPPORTED so
that callers can tell it apart from a genuine miss.
"""

import taichi as ti
import taichi.math as tm

from voxsim.core.vector import max_component, vec3
from voxsim.geometry.hit import RayHit, make_unsupported_record

# Outside distances below this are treated as "inside the box"
INSIDE_EPSILON = 1e-6


@ti.dataclass
class Box:
    """An axis-aligned box.

    Attributes:
        center: The center point of the box (vec3).
        half_extents: Half-length of the box along x, y and z (non-negative).
    """

    center: vec3
    half_extents: vec3


@ti.func
def box_distance_to_point(box: Box, point: vec3) -> ti.f32:
    """Signed distance from a point to the box surface.

    Args:
        box: The box to measure against.
        point: The query point.

    Returns:
        The Euclidean distance to the box when outside, or the negated
        distance to the nearest face when inside.
    """
    below = box.center - box.half_extents - point
    above = point - box.center - box.half_extents

    outside = ti.max(ti.max(below, vec3(0.0, 0.0, 0.0)), above)
    distance = tm.length(outside)

    if distance < INSIDE_EPSILON:
        distance = max_component(ti.max(below, above))

    return distance


@ti.func
def hit_box(
    ray_origin: vec3,
    ray_direction: vec3,
    box: Box,
    max_dist: ti.f32,
) -> RayHit:
    """Ray query for a box.

    Box ray intersection is not defined; the record always carries status
    UNSUPPORTED. The arguments are accepted so that every primitive exposes
    the same query signature.
    """
    return make_unsupported_record()
