"""Analytic ground-truth shapes for voxel-mapping simulation.

This package provides Taichi-accelerated geometric queries against a small,
closed set of analytic shapes used to describe simulated scenes:
- Signed distance from a point to a shape's surface
- First intersection of a ray with a shape, bounded by a sensing range

Subpackages:
    core: Vector aliases and vector utilities
    geometry: Sphere, box and plane primitives with their queries
    scene: Shape storage in Taichi fields and the Python-scope ShapeSet API
"""

__version__ = "0.1.0"
