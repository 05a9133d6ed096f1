"""Tagged-union Shape over the closed set of primitives.

A Shape carries the attributes common to every primitive (kind, center,
color) plus the union of the variant parameters. Only the parameters that
belong to its kind are meaningful:

    SPHERE: radius
    BOX:    half_extents
    PLANE:  normal

The two queries dispatch on kind with an exhaustive if/elif chain. The set of
kinds is fixed, so there is no registration mechanism for new primitives.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from voxsim.geometry.shape import make_sphere_shape, shape_distance_to_point
    >>> @ti.kernel
    ... def query() -> ti.f32:
    ...     white = ti.math.vec4(1.0, 1.0, 1.0, 1.0)
    ...     shape = make_sphere_shape(ti.math.vec3(0, 0, 0), 1.0, white)
    ...     return shape_distance_to_point(shape, ti.math.vec3(2, 0, 0))
    >>> query()  # 1.0
"""

from enum import IntEnum

import taichi as ti

from voxsim.core.vector import vec3, vec4
from voxsim.geometry.box import Box, box_distance_to_point, hit_box
from voxsim.geometry.hit import STATUS_UNSUPPORTED, RayHit
from voxsim.geometry.plane import Plane, hit_plane, plane_distance_to_point
from voxsim.geometry.sphere import Sphere, hit_sphere, sphere_distance_to_point


class ShapeKind(IntEnum):
    """Discriminator for the primitive stored in a Shape."""

    SPHERE = 0
    BOX = 1
    PLANE = 2


# Plain integer codes for use inside Taichi functions
KIND_SPHERE = int(ShapeKind.SPHERE)
KIND_BOX = int(ShapeKind.BOX)
KIND_PLANE = int(ShapeKind.PLANE)

# =============================================================================
# Colors (RGBA, each component in [0, 1]). Cosmetic only.
# =============================================================================

WHITE = (1.0, 1.0, 1.0, 1.0)
BLACK = (0.0, 0.0, 0.0, 1.0)
GRAY = (0.5, 0.5, 0.5, 1.0)
RED = (1.0, 0.0, 0.0, 1.0)
GREEN = (0.0, 1.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)

DEFAULT_COLOR = WHITE


@ti.dataclass
class Shape:
    """A sphere, box or plane with its color.

    Attributes:
        kind: The ShapeKind of this shape, as an integer.
        center: Sphere/box center, or a point on the plane (vec3).
        color: RGBA color (vec4). Not used by any query.
        radius: Sphere radius. Unused for other kinds.
        half_extents: Box half-extents. Unused for other kinds.
        normal: Plane unit normal. Unused for other kinds.
    """

    kind: ti.i32
    center: vec3
    color: vec4
    radius: ti.f32
    half_extents: vec3
    normal: vec3


@ti.func
def make_sphere_shape(center: vec3, radius: ti.f32, color: vec4) -> Shape:
    """Create a sphere Shape."""
    return Shape(
        kind=KIND_SPHERE,
        center=center,
        color=color,
        radius=radius,
        half_extents=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def make_box_shape(center: vec3, half_extents: vec3, color: vec4) -> Shape:
    """Create a box Shape."""
    return Shape(
        kind=KIND_BOX,
        center=center,
        color=color,
        radius=0.0,
        half_extents=half_extents,
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def make_plane_shape(center: vec3, normal: vec3, color: vec4) -> Shape:
    """Create a plane Shape. The normal must be unit length."""
    return Shape(
        kind=KIND_PLANE,
        center=center,
        color=color,
        radius=0.0,
        half_extents=vec3(0.0, 0.0, 0.0),
        normal=normal,
    )


@ti.func
def shape_distance_to_point(shape: Shape, point: vec3) -> ti.f32:
    """Signed distance from a point to the surface of any shape.

    Args:
        shape: The shape to measure against.
        point: The query point.

    Returns:
        The variant's signed distance: negative inside (or behind the plane),
        positive outside. Shapes with an unknown kind report 0.
    """
    distance = 0.0
    if shape.kind == KIND_SPHERE:
        distance = sphere_distance_to_point(Sphere(center=shape.center, radius=shape.radius), point)
    elif shape.kind == KIND_BOX:
        distance = box_distance_to_point(Box(center=shape.center, half_extents=shape.half_extents), point)
    elif shape.kind == KIND_PLANE:
        distance = plane_distance_to_point(Plane(center=shape.center, normal=shape.normal), point)
    return distance


@ti.func
def shape_ray_intersection(
    shape: Shape,
    ray_origin: vec3,
    ray_direction: vec3,
    max_dist: ti.f32,
) -> RayHit:
    """Ray query against any shape.

    Args:
        shape: The shape to test.
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        max_dist: The sensing range.

    Returns:
        The variant's RayHit. Boxes, and shapes with an unknown kind, report
        status UNSUPPORTED.
    """
    status = STATUS_UNSUPPORTED
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)

    if shape.kind == KIND_SPHERE:
        sphere = Sphere(center=shape.center, radius=shape.radius)
        sphere_hit = hit_sphere(ray_origin, ray_direction, sphere, max_dist)
        status = sphere_hit.status
        hit_t = sphere_hit.t
        hit_point = sphere_hit.point
    elif shape.kind == KIND_BOX:
        box = Box(center=shape.center, half_extents=shape.half_extents)
        box_hit = hit_box(ray_origin, ray_direction, box, max_dist)
        status = box_hit.status
        hit_t = box_hit.t
        hit_point = box_hit.point
    elif shape.kind == KIND_PLANE:
        plane = Plane(center=shape.center, normal=shape.normal)
        plane_hit = hit_plane(ray_origin, ray_direction, plane, max_dist)
        status = plane_hit.status
        hit_t = plane_hit.t
        hit_point = plane_hit.point

    return RayHit(status=status, t=hit_t, point=hit_point)
