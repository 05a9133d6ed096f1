"""Core module.

This module contains the building blocks shared by every shape primitive:

Components:
    vector: Vector type aliases and vector utilities

All helpers are Taichi functions (@ti.func) so they can be used inside
kernels that evaluate many queries in parallel.
"""

from .vector import (
    dot,
    length,
    length_squared,
    max_component,
    vec3,
    vec4,
)

__all__ = [
    "vec3",
    "vec4",
    "length",
    "length_squared",
    "dot",
    "max_component",
]
