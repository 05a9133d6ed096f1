"""Sphere primitive with signed distance and ray-sphere intersection.

The sphere's signed distance is separable and needs no branching:
    distance = |center - point| - radius

Ray intersection substitutes the ray equation x = o + t*d into the sphere
equation |x - c|^2 = r^2 and, for a unit direction d, solves
    t = -(d . oc) -/+ sqrt((d . oc)^2 - |oc|^2 + r^2),    oc = o - c

Only the near root is ever reported. A ray whose origin lies inside the sphere
has a negative near root and is reported as a miss rather than returning the
exit point: sensor simulation treats origins inside a solid as non-hits.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from voxsim.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, 0), radius=1.0)
    >>> # Use hit_sphere / sphere_distance_to_point within a Taichi kernel
"""

import taichi as ti

from voxsim.core.vector import dot, length, length_squared, vec3
from voxsim.geometry.hit import STATUS_HIT, STATUS_MISS, RayHit


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (strictly positive).
    """

    center: vec3
    radius: ti.f32


@ti.func
def sphere_distance_to_point(sphere: Sphere, point: vec3) -> ti.f32:
    """Signed distance from a point to the sphere surface.

    Args:
        sphere: The sphere to measure against.
        point: The query point.

    Returns:
        Negative inside the sphere, zero on the surface, positive outside.
    """
    return length(sphere.center - point) - sphere.radius


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    sphere: Sphere,
    max_dist: ti.f32,
) -> RayHit:
    """Find the near intersection of a ray with a sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        sphere: The sphere to test intersection against.
        max_dist: The sensing range. Hits further than this are discarded.

    Returns:
        A RayHit with status HIT and the near root t in [0, max_dist], or
        status MISS when there is no real root, the near root lies behind the
        origin, or it lies beyond max_dist.
    """
    oc = ray_origin - sphere.center
    b = dot(ray_direction, oc)
    under_square_root = b * b - length_squared(oc) + sphere.radius * sphere.radius

    status = STATUS_MISS
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)

    # No real roots means the ray passes the sphere by
    if under_square_root >= 0.0:
        t = -b - ti.sqrt(under_square_root)

        # Behind the origin, or outside the sensor range
        if t >= 0.0 and t <= max_dist:
            status = STATUS_HIT
            hit_t = t
            hit_point = ray_origin + t * ray_direction

    return RayHit(status=status, t=hit_t, point=hit_point)
