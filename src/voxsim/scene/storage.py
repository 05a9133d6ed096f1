"""Shape storage in Taichi fields.

This module stores the parameters of every shape in a scene in module-level
Taichi fields so kernels can evaluate queries against them by index.

The storage uses a Structure-of-Arrays layout. Every shape has a kind, a
center and a color; the variant parameters (radius, half-extents, normal)
each get their own field and are left at zero for kinds that do not use them.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from voxsim.scene.storage import add_shape_record, clear_shapes
    >>> from voxsim.geometry.shape import ShapeKind
    >>> clear_shapes()
    >>> idx = add_shape_record(ShapeKind.SPHERE, center=(0.0, 0.0, 0.0), radius=1.0)
    >>> # Use get_shape(idx) within a Taichi kernel
"""

import taichi as ti

from voxsim.core.vector import vec3, vec4
from voxsim.geometry.hit import RayHit
from voxsim.geometry.shape import (
    DEFAULT_COLOR,
    Shape,
    ShapeKind,
    shape_distance_to_point,
    shape_ray_intersection,
)

# Maximum number of shapes supported in a scene
MAX_SHAPES = 1024

shape_kinds = ti.field(dtype=ti.i32, shape=MAX_SHAPES)
shape_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SHAPES)
shape_colors = ti.Vector.field(4, dtype=ti.f32, shape=MAX_SHAPES)
# Variant parameters, zero for kinds that do not use them
shape_radii = ti.field(dtype=ti.f32, shape=MAX_SHAPES)
shape_half_extents = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SHAPES)
shape_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SHAPES)
num_shapes = ti.field(dtype=ti.i32, shape=())

# Incremented by every clear_shapes() call; indices from an earlier
# generation no longer refer to the stored shapes
_generation = 0


def clear_shapes() -> None:
    """Remove all shapes from storage.

    Resets the shape count to zero and starts a new storage generation. The
    field data is not cleared but will be overwritten when new shapes are
    added.
    """
    global _generation
    num_shapes[None] = 0
    _generation += 1


def get_generation() -> int:
    """Get the current storage generation."""
    return _generation


def add_shape_record(
    kind: ShapeKind,
    center: tuple[float, float, float],
    color: tuple[float, float, float, float] = DEFAULT_COLOR,
    radius: float = 0.0,
    half_extents: tuple[float, float, float] = (0.0, 0.0, 0.0),
    normal: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> int:
    """Store a shape's parameters.

    No validation is performed here; see ShapeSet for the checked API.

    Args:
        kind: The kind of shape being stored.
        center: Sphere/box center, or a point on the plane, as (x, y, z).
        color: RGBA color. Defaults to DEFAULT_COLOR.
        radius: Sphere radius.
        half_extents: Box half-extents.
        normal: Plane unit normal.

    Returns:
        The index of the stored shape.

    Raises:
        RuntimeError: If the maximum number of shapes is exceeded.
    """
    idx = num_shapes[None]
    if idx >= MAX_SHAPES:
        raise RuntimeError(f"Maximum number of shapes ({MAX_SHAPES}) exceeded")

    shape_kinds[idx] = int(kind)
    shape_centers[idx] = vec3(center[0], center[1], center[2])
    shape_colors[idx] = vec4(color[0], color[1], color[2], color[3])
    shape_radii[idx] = radius
    shape_half_extents[idx] = vec3(half_extents[0], half_extents[1], half_extents[2])
    shape_normals[idx] = vec3(normal[0], normal[1], normal[2])
    num_shapes[None] = idx + 1
    return idx


def get_shape_count() -> int:
    """Get the number of stored shapes."""
    return int(num_shapes[None])


@ti.func
def get_shape(idx: ti.i32) -> Shape:
    """Assemble the Shape stored at an index.

    Args:
        idx: The index returned by add_shape_record.

    Returns:
        The stored Shape.
    """
    return Shape(
        kind=shape_kinds[idx],
        center=shape_centers[idx],
        color=shape_colors[idx],
        radius=shape_radii[idx],
        half_extents=shape_half_extents[idx],
        normal=shape_normals[idx],
    )


@ti.func
def distance_to_stored_shape(idx: ti.i32, point: vec3) -> ti.f32:
    """Signed distance from a point to the stored shape at an index."""
    return shape_distance_to_point(get_shape(idx), point)


@ti.func
def intersect_stored_shape(
    idx: ti.i32,
    ray_origin: vec3,
    ray_direction: vec3,
    max_dist: ti.f32,
) -> RayHit:
    """Ray query against the stored shape at an index."""
    return shape_ray_intersection(get_shape(idx), ray_origin, ray_direction, max_dist)
