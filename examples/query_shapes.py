#!/usr/bin/env python3
"""Query a small ground-truth scene of analytic shapes.

This script builds a scene with a floor plane, a sphere and a box, prints the
signed distance from a row of sample points to each shape, and casts a fan of
simulated sensor rays to report the first hit depth per ray.

Usage:
    python -m examples.query_shapes [options]

Options:
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --rays RAYS         Number of rays in the sensor fan (default: 9)
    --max-dist DIST     Sensor range (default: 10.0)

Example:
    python -m examples.query_shapes --rays 5 --max-dist 6.0
"""

import argparse
import math
import sys

import numpy as np
import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Query a small ground-truth scene of analytic shapes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--rays",
        type=int,
        default=9,
        help="Number of rays in the sensor fan (default: 9)",
    )
    parser.add_argument(
        "--max-dist",
        type=float,
        default=10.0,
        help="Sensor range (default: 10.0)",
    )
    return parser.parse_args()


def query_scene(num_rays: int = 9, max_dist: float = 10.0) -> None:
    """Build the demo scene and print distance and ray query results.

    Args:
        num_rays: Number of rays in the sensor fan.
        max_dist: Sensor range passed to every ray query.
    """
    # Lazy imports to allow Taichi initialization first
    from voxsim.geometry.hit import RayStatus
    from voxsim.geometry.shape import BLUE, GRAY, RED
    from voxsim.scene.manager import ShapeSet

    shapes = ShapeSet()
    floor = shapes.add_plane(center=(0.0, 0.0, 0.0), normal=(0.0, 0.0, 1.0), color=GRAY)
    ball = shapes.add_sphere(center=(4.0, 0.0, 1.0), radius=1.0, color=RED)
    crate = shapes.add_box(center=(4.0, 3.0, 1.0), half_extents=(1.0, 1.0, 1.0), color=BLUE)
    names = {floor: "floor", ball: "ball", crate: "crate"}

    samples = np.array([[x, 0.0, 1.0] for x in np.linspace(0.0, 6.0, 7)], dtype=np.float32)
    print("Signed distances along y=0, z=1:")
    for index, name in names.items():
        distances = shapes.distances_to_points(index, samples)
        row = " ".join(f"{d:7.3f}" for d in distances)
        print(f"  {name:6s} {row}")

    # Fan of rays from a sensor at (0, 0, 1), sweeping downward in the xz-plane
    origin = (0.0, 0.0, 1.0)
    print(f"Sensor fan from {origin} (max_dist={max_dist}):")
    for k in range(num_rays):
        angle = -0.5 * math.pi * k / max(num_rays - 1, 1)
        direction = (math.cos(angle), 0.0, math.sin(angle))

        nearest = None
        for index, name in names.items():
            result = shapes.ray_intersection(index, origin, direction, max_dist)
            if result.status == RayStatus.HIT and (nearest is None or result.distance < nearest[1]):
                nearest = (name, result.distance)

        if nearest is None:
            print(f"  ray {k}: no return")
        else:
            print(f"  ray {k}: {nearest[0]} at {nearest[1]:.3f}")


def main() -> int:
    """Main entry point."""
    args = parse_args()
    ti.init(arch=ti.gpu if args.arch == "gpu" else ti.cpu)

    try:
        query_scene(num_rays=args.rays, max_dist=args.max_dist)
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
