"""Infinite plane primitive with signed distance and ray-plane intersection.

A plane is defined by a point on it (its center) and a normal. The normal
must already be unit length; nothing here normalizes it.

The signed distance uses the plane equation n . x + d = 0 with
d = -n . center:
    distance = n . point + d / |n|
which reduces to n . (point - center) for a unit normal. It is positive on
the side the normal points toward.

Ray intersection solves (o + t*dir - center) . n = 0:
    t = ((center - o) . n) / (dir . n)
Rays with |dir . n| < PARALLEL_EPSILON are treated as parallel and miss.
"""

import taichi as ti
import taichi.math as tm

from voxsim.core.vector import vec3
from voxsim.geometry.hit import PARALLEL_EPSILON, STATUS_HIT, STATUS_MISS, RayHit


@ti.dataclass
class Plane:
    """An infinite plane.

    Attributes:
        center: Any point on the plane (vec3).
        normal: The unit normal of the plane (vec3). Must be pre-normalized.
    """

    center: vec3
    normal: vec3


@ti.func
def plane_distance_to_point(plane: Plane, point: vec3) -> ti.f32:
    """Signed distance from a point to the plane.

    Args:
        plane: The plane to measure against.
        point: The query point.

    Returns:
        Positive on the side the normal points toward, negative on the other
        side, zero on the plane.
    """
    d = -tm.dot(plane.normal, plane.center)
    p = d / tm.length(plane.normal)
    return tm.dot(plane.normal, point) + p


@ti.func
def hit_plane(
    ray_origin: vec3,
    ray_direction: vec3,
    plane: Plane,
    max_dist: ti.f32,
) -> RayHit:
    """Find the intersection of a ray with a plane.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        plane: The plane to test intersection against.
        max_dist: The sensing range. Hits further than this are discarded.

    Returns:
        A RayHit with status HIT and t in [0, max_dist], or status MISS when
        the ray is parallel to the plane, points away from it, or reaches it
        beyond max_dist.
    """
    denominator = tm.dot(ray_direction, plane.normal)

    status = STATUS_MISS
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)

    if ti.abs(denominator) >= PARALLEL_EPSILON:
        t = tm.dot(plane.center - ray_origin, plane.normal) / denominator

        if t >= 0.0 and t <= max_dist:
            status = STATUS_HIT
            hit_t = t
            hit_point = ray_origin + t * ray_direction

    return RayHit(status=status, t=hit_t, point=hit_point)
