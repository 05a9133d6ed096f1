"""Python-scope shape set for building scenes and running queries.

This module provides a high-level API on top of the field storage in
voxsim.scene.storage. The ShapeSet:
- Validates shape parameters before storing them
- Keeps a Python-side record (SphereInfo, BoxInfo, PlaneInfo) of every shape
- Runs single queries from Python through small kernels
- Runs batched queries over numpy arrays of points or rays

The storage fields are module-level, so only one ShapeSet is live at a time.
Creating or clearing a ShapeSet resets the stored shapes. A set whose storage
has since been reset by another set (or by clear_shapes) is stale and raises
RuntimeError on use until it is cleared.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from voxsim.scene.manager import ShapeSet
    >>> shapes = ShapeSet()
    >>> ball = shapes.add_sphere(center=(0, 0, 0), radius=1.0)
    >>> shapes.distance_to_point(ball, (2, 0, 0))
    1.0
    >>> result = shapes.ray_intersection(ball, (5, 0, 0), (-1, 0, 0), max_dist=10.0)
    >>> result.distance
    4.0
"""

import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np
import numpy.typing as npt
import taichi as ti

from voxsim.core.vector import vec3
from voxsim.geometry.hit import RayStatus
from voxsim.geometry.shape import DEFAULT_COLOR, ShapeKind
from voxsim.scene.storage import (
    MAX_SHAPES,
    add_shape_record,
    clear_shapes,
    distance_to_stored_shape,
    get_generation,
    get_shape_count,
    intersect_stored_shape,
)

# Allowed deviation of a plane normal's length from 1
NORMAL_TOLERANCE = 1e-3


# =============================================================================
# Python-side shape records
# =============================================================================


@dataclass
class SphereInfo:
    """Information about a sphere in the set.

    Attributes:
        shape_index: The index in the shape storage fields.
        center: The center of the sphere.
        radius: The radius of the sphere.
        color: The RGBA color of the sphere.
    """

    kind: ClassVar[ShapeKind] = ShapeKind.SPHERE

    shape_index: int
    center: tuple[float, float, float]
    radius: float
    color: tuple[float, float, float, float]


@dataclass
class BoxInfo:
    """Information about an axis-aligned box in the set.

    Attributes:
        shape_index: The index in the shape storage fields.
        center: The center of the box.
        half_extents: Half-length of the box along each axis.
        color: The RGBA color of the box.
    """

    kind: ClassVar[ShapeKind] = ShapeKind.BOX

    shape_index: int
    center: tuple[float, float, float]
    half_extents: tuple[float, float, float]
    color: tuple[float, float, float, float]


@dataclass
class PlaneInfo:
    """Information about an infinite plane in the set.

    Attributes:
        shape_index: The index in the shape storage fields.
        center: A point on the plane.
        normal: The unit normal of the plane.
        color: The RGBA color of the plane.
    """

    kind: ClassVar[ShapeKind] = ShapeKind.PLANE

    shape_index: int
    center: tuple[float, float, float]
    normal: tuple[float, float, float]
    color: tuple[float, float, float, float]


ShapeInfo = SphereInfo | BoxInfo | PlaneInfo


@dataclass
class RayQueryResult:
    """Result of a single ray query run from Python.

    Attributes:
        status: HIT, MISS, or UNSUPPORTED for shapes without a ray query.
        distance: The ray parameter of the hit, or None if there is no hit.
        point: The intersection point, or None if there is no hit.
    """

    status: RayStatus
    distance: float | None = None
    point: tuple[float, float, float] | None = None

    @property
    def hit(self) -> bool:
        """Whether the query found an intersection."""
        return self.status == RayStatus.HIT


# =============================================================================
# Query kernels
# =============================================================================

_distance_result = ti.field(dtype=ti.f32, shape=())
_ray_status = ti.field(dtype=ti.i32, shape=())
_ray_t = ti.field(dtype=ti.f32, shape=())
_ray_point = ti.Vector.field(3, dtype=ti.f32, shape=())


@ti.kernel
def _distance_kernel(idx: ti.i32, point: vec3):
    _distance_result[None] = distance_to_stored_shape(idx, point)


@ti.kernel
def _ray_kernel(idx: ti.i32, ray_origin: vec3, ray_direction: vec3, max_dist: ti.f32):
    record = intersect_stored_shape(idx, ray_origin, ray_direction, max_dist)
    _ray_status[None] = record.status
    _ray_t[None] = record.t
    _ray_point[None] = record.point


@ti.kernel
def _batch_distance_kernel(
    idx: ti.i32,
    points: ti.types.ndarray(dtype=ti.f32, ndim=2),
    distances: ti.types.ndarray(dtype=ti.f32, ndim=1),
):
    for i in range(points.shape[0]):
        point = vec3(points[i, 0], points[i, 1], points[i, 2])
        distances[i] = distance_to_stored_shape(idx, point)


@ti.kernel
def _batch_ray_kernel(
    idx: ti.i32,
    origins: ti.types.ndarray(dtype=ti.f32, ndim=2),
    directions: ti.types.ndarray(dtype=ti.f32, ndim=2),
    max_dist: ti.f32,
    statuses: ti.types.ndarray(dtype=ti.i32, ndim=1),
    distances: ti.types.ndarray(dtype=ti.f32, ndim=1),
    points: ti.types.ndarray(dtype=ti.f32, ndim=2),
):
    for i in range(origins.shape[0]):
        origin = vec3(origins[i, 0], origins[i, 1], origins[i, 2])
        direction = vec3(directions[i, 0], directions[i, 1], directions[i, 2])
        record = intersect_stored_shape(idx, origin, direction, max_dist)
        statuses[i] = record.status
        distances[i] = record.t
        for c in ti.static(range(3)):
            points[i, c] = record.point[c]


# =============================================================================
# Validation helpers
# =============================================================================


def _as_float_tuple(name: str, values: npt.ArrayLike, size: int) -> tuple[float, ...]:
    """Convert a sequence to a tuple of finite floats of the given size."""
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{name} must have {size} components, got {len(result)}.")
    for i, component in enumerate(result):
        if not math.isfinite(component):
            raise ValueError(f"{name} component {i} = {component} is not finite.")
    return result


def _validate_color(color: npt.ArrayLike) -> tuple[float, float, float, float]:
    rgba = _as_float_tuple("Color", color, 4)
    for i, component in enumerate(rgba):
        if component < 0.0 or component > 1.0:
            raise ValueError(f"Color component {i} = {component} is outside [0, 1].")
    return rgba


def _as_points_array(name: str, values: npt.ArrayLike) -> npt.NDArray[np.float32]:
    array = np.ascontiguousarray(values, dtype=np.float32)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"{name} must have shape (N, 3), got {array.shape}.")
    return array


class ShapeSet:
    """A set of analytic shapes with checked construction and queries.

    Attributes:
        shapes: ShapeInfo records in index order.

    Example:
        >>> shapes = ShapeSet()
        >>> floor = shapes.add_plane(center=(0, 0, 0), normal=(0, 0, 1))
        >>> crate = shapes.add_box(center=(2, 0, 1), half_extents=(1, 1, 1))
        >>> shapes.distance_to_point(floor, (0, 0, 5))
        5.0
        >>> shapes.ray_intersection(crate, (2, 0, 5), (0, 0, -1), 10.0).status
        <RayStatus.UNSUPPORTED: -1>
    """

    def __init__(self) -> None:
        """Initialize an empty shape set."""
        self.shapes: list[ShapeInfo] = []
        self._generation = get_generation()
        self.clear()

    def clear(self) -> None:
        """Remove all shapes from the set and from the storage fields.

        This also makes a stale set usable again.
        """
        clear_shapes()
        self.shapes.clear()
        self._generation = get_generation()

    def _check_current(self) -> None:
        if self._generation != get_generation():
            raise RuntimeError(
                "ShapeSet is stale: shape storage was reset by another ShapeSet or clear_shapes()"
            )

    # =========================================================================
    # Shape Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        color: tuple[float, float, float, float] = DEFAULT_COLOR,
    ) -> int:
        """Add a sphere to the set.

        Args:
            center: The center of the sphere as (x, y, z).
            radius: The radius of the sphere. Must be positive.
            color: RGBA color, each component in [0, 1]. Defaults to white.

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the maximum number of shapes is exceeded, or the
                set is stale.
            ValueError: If any parameter is non-finite, the radius is not
                positive, or a color component is outside [0, 1].
        """
        center = _as_float_tuple("Center", center, 3)
        radius = float(radius)
        if not math.isfinite(radius) or radius <= 0.0:
            raise ValueError(f"Sphere radius = {radius} must be positive and finite.")
        color = _validate_color(color)

        self._check_current()
        index = add_shape_record(ShapeKind.SPHERE, center=center, color=color, radius=radius)
        self.shapes.append(SphereInfo(shape_index=index, center=center, radius=radius, color=color))
        return index

    def add_box(
        self,
        center: tuple[float, float, float],
        half_extents: tuple[float, float, float],
        color: tuple[float, float, float, float] = DEFAULT_COLOR,
    ) -> int:
        """Add an axis-aligned box to the set.

        Args:
            center: The center of the box as (x, y, z).
            half_extents: Half-length of the box along x, y and z.
                Each component must be non-negative.
            color: RGBA color, each component in [0, 1]. Defaults to white.

        Returns:
            The index of the added box.

        Raises:
            RuntimeError: If the maximum number of shapes is exceeded, or the
                set is stale.
            ValueError: If any parameter is non-finite, a half-extent is
                negative, or a color component is outside [0, 1].
        """
        center = _as_float_tuple("Center", center, 3)
        half_extents = _as_float_tuple("Half-extents", half_extents, 3)
        for i, component in enumerate(half_extents):
            if component < 0.0:
                raise ValueError(f"Half-extent component {i} = {component} is negative.")
        color = _validate_color(color)

        self._check_current()
        index = add_shape_record(ShapeKind.BOX, center=center, color=color, half_extents=half_extents)
        self.shapes.append(BoxInfo(shape_index=index, center=center, half_extents=half_extents, color=color))
        return index

    def add_plane(
        self,
        center: tuple[float, float, float],
        normal: tuple[float, float, float],
        color: tuple[float, float, float, float] = DEFAULT_COLOR,
    ) -> int:
        """Add an infinite plane to the set.

        The normal is stored as given. It must already be unit length; it is
        checked against NORMAL_TOLERANCE but never normalized.

        Args:
            center: Any point on the plane as (x, y, z).
            normal: The unit normal of the plane.
            color: RGBA color, each component in [0, 1]. Defaults to white.

        Returns:
            The index of the added plane.

        Raises:
            RuntimeError: If the maximum number of shapes is exceeded, or the
                set is stale.
            ValueError: If any parameter is non-finite, the normal is not unit
                length, or a color component is outside [0, 1].
        """
        center = _as_float_tuple("Center", center, 3)
        normal = _as_float_tuple("Normal", normal, 3)
        norm = math.sqrt(sum(c * c for c in normal))
        if abs(norm - 1.0) > NORMAL_TOLERANCE:
            raise ValueError(f"Plane normal has length {norm}; it must be normalized.")
        color = _validate_color(color)

        self._check_current()
        index = add_shape_record(ShapeKind.PLANE, center=center, color=color, normal=normal)
        self.shapes.append(PlaneInfo(shape_index=index, center=center, normal=normal, color=color))
        return index

    def get_shape_count(self) -> int:
        """Get the number of shapes in the set.

        Raises:
            RuntimeError: If the set is stale.
        """
        self._check_current()
        return get_shape_count()

    def get_shape_info(self, index: int) -> ShapeInfo | None:
        """Get the record of a shape by index.

        Args:
            index: The shape index.

        Returns:
            The SphereInfo, BoxInfo or PlaneInfo, or None if not found.

        Raises:
            RuntimeError: If the set is stale.
        """
        self._check_current()
        if 0 <= index < len(self.shapes):
            return self.shapes[index]
        return None

    def get_kind(self, index: int) -> ShapeKind:
        """Get the kind of a shape by index.

        Raises:
            IndexError: If there is no shape at index.
            RuntimeError: If the set is stale.
        """
        return self._require(index).kind

    def get_color(self, index: int) -> tuple[float, float, float, float]:
        """Get the RGBA color of a shape by index.

        Raises:
            IndexError: If there is no shape at index.
            RuntimeError: If the set is stale.
        """
        return self._require(index).color

    def _require(self, index: int) -> ShapeInfo:
        info = self.get_shape_info(index)
        if info is None:
            raise IndexError(f"No shape at index {index} (set has {len(self.shapes)} shapes)")
        return info

    # =========================================================================
    # Queries
    # =========================================================================

    def distance_to_point(self, index: int, point: tuple[float, float, float]) -> float:
        """Signed distance from a point to a shape's surface.

        Args:
            index: The shape index.
            point: The query point as (x, y, z).

        Returns:
            Negative inside the shape (or behind a plane), positive outside.

        Raises:
            IndexError: If there is no shape at index.
            RuntimeError: If the set is stale.
        """
        self._require(index)
        _distance_kernel(index, vec3(point[0], point[1], point[2]))
        return float(_distance_result[None])

    def ray_intersection(
        self,
        index: int,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
        max_dist: float,
    ) -> RayQueryResult:
        """First intersection of a ray with a shape within max_dist.

        Args:
            index: The shape index.
            origin: The ray origin as (x, y, z).
            direction: The unit ray direction as (x, y, z).
            max_dist: The sensing range.

        Returns:
            A RayQueryResult. distance and point are None unless status is HIT.

        Raises:
            IndexError: If there is no shape at index.
            RuntimeError: If the set is stale.
        """
        self._require(index)
        _ray_kernel(
            index,
            vec3(origin[0], origin[1], origin[2]),
            vec3(direction[0], direction[1], direction[2]),
            max_dist,
        )
        status = RayStatus(int(_ray_status[None]))
        if status != RayStatus.HIT:
            return RayQueryResult(status=status)
        p = _ray_point[None]
        return RayQueryResult(
            status=status,
            distance=float(_ray_t[None]),
            point=(float(p[0]), float(p[1]), float(p[2])),
        )

    def distances_to_points(self, index: int, points: npt.ArrayLike) -> npt.NDArray[np.float32]:
        """Signed distances from many points to one shape.

        Args:
            index: The shape index.
            points: Array-like of shape (N, 3).

        Returns:
            A float32 array of shape (N,).

        Raises:
            IndexError: If there is no shape at index.
            RuntimeError: If the set is stale.
            ValueError: If points does not have shape (N, 3).
        """
        self._require(index)
        points = _as_points_array("Points", points)
        distances = np.zeros(points.shape[0], dtype=np.float32)
        if points.shape[0] > 0:
            _batch_distance_kernel(index, points, distances)
        return distances

    def ray_intersections(
        self,
        index: int,
        origins: npt.ArrayLike,
        directions: npt.ArrayLike,
        max_dist: float,
    ) -> tuple[npt.NDArray[np.int32], npt.NDArray[np.float32], npt.NDArray[np.float32]]:
        """Intersect many rays with one shape.

        Args:
            index: The shape index.
            origins: Array-like of shape (N, 3).
            directions: Array-like of shape (N, 3), unit length rows.
            max_dist: The sensing range shared by all rays.

        Returns:
            A tuple (statuses, distances, points) of shapes (N,), (N,) and
            (N, 3). statuses holds RayStatus values; distances and points are
            zero where the status is not HIT.

        Raises:
            IndexError: If there is no shape at index.
            RuntimeError: If the set is stale.
            ValueError: If the arrays are not both of shape (N, 3).
        """
        self._require(index)
        origins = _as_points_array("Origins", origins)
        directions = _as_points_array("Directions", directions)
        if origins.shape != directions.shape:
            raise ValueError(
                f"Origins {origins.shape} and directions {directions.shape} must have the same shape."
            )

        n = origins.shape[0]
        statuses = np.zeros(n, dtype=np.int32)
        distances = np.zeros(n, dtype=np.float32)
        points = np.zeros((n, 3), dtype=np.float32)
        if n > 0:
            _batch_ray_kernel(index, origins, directions, max_dist, statuses, distances, points)
        return statuses, distances, points

    @staticmethod
    def capacity() -> int:
        """Maximum number of shapes a set can hold."""
        return MAX_SHAPES
