"""Unit tests for sphere signed distance and intersection.

Tests cover:
- Signed distance on, inside and outside the surface
- Ray hitting sphere head-on from outside
- Ray missing sphere (negative discriminant)
- Ray starting inside sphere (near root behind origin, reported as a miss)
- Tangent rays and the max_dist sensing range
"""

import math

import pytest
import taichi as ti


def _sphere_distance(center, radius, point):
    """Evaluate sphere_distance_to_point inside a kernel."""
    from voxsim.geometry.sphere import Sphere, sphere_distance_to_point, vec3

    result = ti.field(dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(c: vec3, r: ti.f32, p: vec3):
        result[None] = sphere_distance_to_point(Sphere(center=c, radius=r), p)

    test_kernel(vec3(*center), radius, vec3(*point))
    return result[None]


def _hit_sphere(center, radius, origin, direction, max_dist):
    """Evaluate hit_sphere inside a kernel and return (status, t, point)."""
    from voxsim.geometry.sphere import Sphere, hit_sphere, vec3

    status = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    point = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(c: vec3, r: ti.f32, o: vec3, d: vec3, max_d: ti.f32):
        record = hit_sphere(o, d, Sphere(center=c, radius=r), max_d)
        status[None] = record.status
        t_val[None] = record.t
        point[None] = record.point

    test_kernel(vec3(*center), radius, vec3(*origin), vec3(*direction), max_dist)
    p = point[None]
    return status[None], t_val[None], (p[0], p[1], p[2])


class TestSphereDistance:
    """Tests for the sphere signed distance."""

    @pytest.mark.parametrize(
        "direction",
        [
            (1.0, 0.0, 0.0),
            (0.0, -1.0, 0.0),
            (0.0, 0.0, 1.0),
            (1.0 / math.sqrt(3.0), 1.0 / math.sqrt(3.0), -1.0 / math.sqrt(3.0)),
        ],
    )
    def test_surface_points_have_zero_distance(self, direction):
        """Test points at exactly radius from the center report ~0."""
        center = (1.0, 2.0, 3.0)
        radius = 2.0
        point = tuple(c + radius * d for c, d in zip(center, direction))
        assert abs(_sphere_distance(center, radius, point)) < 1e-5

    def test_outside_is_positive(self):
        """Test a point outside reports its distance to the surface."""
        distance = _sphere_distance((0.0, 0.0, 0.0), 1.0, (3.0, 0.0, 4.0))
        assert distance > 0.0
        assert abs(distance - 4.0) < 1e-5

    def test_inside_is_negative(self):
        """Test a point inside reports a negative distance."""
        distance = _sphere_distance((0.0, 0.0, 0.0), 2.0, (0.5, 0.0, 0.0))
        assert distance < 0.0
        assert abs(distance - (-1.5)) < 1e-5

    def test_center_is_minus_radius(self):
        """Test the center is exactly one radius inside."""
        distance = _sphere_distance((4.0, -2.0, 1.0), 3.0, (4.0, -2.0, 1.0))
        assert abs(distance - (-3.0)) < 1e-6


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_direct_hit(self):
        """Test ray fired at the center from outside hits at |o - c| - r."""
        from voxsim.geometry.hit import RayStatus

        status, t, point = _hit_sphere((0.0, 0.0, 0.0), 1.0, (5.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 10.0)

        assert status == RayStatus.HIT
        assert abs(t - 4.0) < 1e-5
        assert abs(point[0] - 1.0) < 1e-5
        assert abs(point[1]) < 1e-5
        assert abs(point[2]) < 1e-5

    def test_hit_sphere_offset_center(self):
        """Test a direct hit against a sphere away from the origin."""
        from voxsim.geometry.hit import RayStatus

        status, t, point = _hit_sphere((1.0, 2.0, 3.0), 0.5, (1.0, 2.0, 10.0), (0.0, 0.0, -1.0), 100.0)

        assert status == RayStatus.HIT
        assert abs(t - 6.5) < 1e-5
        assert abs(point[2] - 3.5) < 1e-5

    def test_hit_sphere_miss(self):
        """Test ray whose closest approach exceeds the radius misses."""
        from voxsim.geometry.hit import RayStatus

        status, _, _ = _hit_sphere((0.0, 0.0, 0.0), 1.0, (5.0, 5.0, 0.0), (1.0, 0.0, 0.0), 100.0)
        assert status == RayStatus.MISS

    def test_hit_sphere_pointing_away(self):
        """Test ray pointing away from the sphere misses."""
        from voxsim.geometry.hit import RayStatus

        status, _, _ = _hit_sphere((0.0, 0.0, 0.0), 1.0, (5.0, 0.0, 0.0), (1.0, 0.0, 0.0), 100.0)
        assert status == RayStatus.MISS

    def test_hit_sphere_from_inside_is_miss(self):
        """Test ray starting inside reports no hit instead of the exit point."""
        from voxsim.geometry.hit import RayStatus

        status, _, _ = _hit_sphere((0.0, 0.0, 0.0), 1.0, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), 100.0)
        assert status == RayStatus.MISS

    def test_hit_sphere_tangent(self):
        """Test ray tangent to sphere (zero discriminant) grazes it."""
        from voxsim.geometry.hit import RayStatus

        status, t, point = _hit_sphere((0.0, 0.0, 0.0), 1.0, (1.0, 0.0, -5.0), (0.0, 0.0, 1.0), 100.0)

        assert status == RayStatus.HIT
        assert abs(t - 5.0) < 1e-4
        assert abs(point[0] - 1.0) < 1e-4
        assert abs(point[2]) < 1e-4

    def test_hit_sphere_beyond_max_dist(self):
        """Test a hit further than max_dist is discarded."""
        from voxsim.geometry.hit import RayStatus

        status, _, _ = _hit_sphere((0.0, 0.0, 0.0), 1.0, (5.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 1.0)
        assert status == RayStatus.MISS

    def test_hit_sphere_at_max_dist(self):
        """Test a hit exactly at max_dist is kept."""
        from voxsim.geometry.hit import RayStatus

        status, t, _ = _hit_sphere((0.0, 0.0, 0.0), 1.0, (5.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 4.0)
        assert status == RayStatus.HIT
        assert abs(t - 4.0) < 1e-5

    def test_hit_sphere_origin_on_surface_facing_in(self):
        """Test origin on the surface facing inward hits at t = 0."""
        from voxsim.geometry.hit import RayStatus

        status, t, _ = _hit_sphere((0.0, 0.0, 0.0), 1.0, (1.0, 0.0, 0.0), (-1.0, 0.0, 0.0), 10.0)
        assert status == RayStatus.HIT
        assert abs(t) < 1e-6

    def test_hit_sphere_is_idempotent(self):
        """Test repeated queries return identical results."""
        args = ((0.5, -0.25, 2.0), 1.25, (3.0, 1.0, -2.0), (-0.48, -0.24, 0.8436), 20.0)
        first = _hit_sphere(*args)
        second = _hit_sphere(*args)
        assert first == second


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
