"""Vector aliases and helpers for shape queries.

This module provides the vector type aliases and the small set of vector
helpers shared by the shape primitives. All operations are designed to work
within Taichi kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from voxsim.core.vector import length, vec3
    >>> # Use length(vec3(2.0, 3.0, 6.0)) within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type aliases for vectors using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return tm.length(v)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() when only the magnitude comparison matters.
    """
    return tm.dot(v, v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def max_component(v: vec3) -> ti.f32:
    """Return the largest of the three components of a vector."""
    return ti.max(v.x, ti.max(v.y, v.z))
