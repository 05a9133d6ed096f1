"""Ray query result record shared by all shape primitives.

A ray query has three possible outcomes, encoded in RayHit.status:

- HIT: the ray meets the surface at parameter t in [0, max_dist]
- MISS: no valid intersection (parallel geometry, no real root, behind the
  origin, or beyond the sensing range)
- UNSUPPORTED: the shape does not define a ray query at all (boxes)

Keeping UNSUPPORTED separate from MISS lets callers tell "nothing there" from
"this shape cannot answer", instead of silently treating a box as empty space.
"""

from enum import IntEnum

import taichi as ti

from voxsim.core.vector import vec3

# Tolerance below which a ray is considered parallel to a plane
PARALLEL_EPSILON = 1e-6


class RayStatus(IntEnum):
    """Outcome of a ray query, stored as an integer in RayHit.status."""

    UNSUPPORTED = -1
    MISS = 0
    HIT = 1


# Plain integer codes for use inside Taichi functions
STATUS_HIT = int(RayStatus.HIT)
STATUS_MISS = int(RayStatus.MISS)
STATUS_UNSUPPORTED = int(RayStatus.UNSUPPORTED)


@ti.dataclass
class RayHit:
    """Record of a ray-shape query.

    Attributes:
        status: One of the RayStatus values (1 hit, 0 miss, -1 unsupported).
        t: The ray parameter of the intersection. Equals the distance from the
            origin when the ray direction is unit length.
            Only valid if status == HIT.
        point: The 3D intersection point. Only valid if status == HIT.
    """

    status: ti.i32
    t: ti.f32
    point: vec3


@ti.func
def make_unsupported_record() -> RayHit:
    """Create a record signalling that the shape has no ray query."""
    return RayHit(status=STATUS_UNSUPPORTED, t=0.0, point=vec3(0.0, 0.0, 0.0))
