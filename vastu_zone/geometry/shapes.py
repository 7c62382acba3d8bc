"""
Geometric Shapes Module
========================

Immutable shapes consumed by the partitioner and the sampler.

Design:
- Frozen dataclasses (thread-safe by immutability)
- Boundary vertices copied once and made read-only
- Fail-fast validation in __post_init__
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence

from vastu_zone.geometry.primitives import (
    BoundingBox,
    Point,
    as_vertices,
    bounding_box,
    point_in_polygon,
    points_in_polygon,
    polygon_area,
    polygon_centroid,
)


@dataclass(frozen=True, eq=False)
class BoundaryPolygon:
    """
    Immutable building boundary.

    Design:
    - Vertices copied at construction (the caller's sequence is never mutated)
    - Read-only Nx2 float array
    - Implicitly closed; a repeated closing vertex is harmless

    Attributes:
        vertices: Nx2 array of (x, y) polygon vertices, N >= 3

    Example:
        >>> boundary = BoundaryPolygon.from_points([(0, 0), (100, 0), (100, 100), (0, 100)])
        >>> boundary.contains_point((50, 50))
        True
    """

    vertices: np.ndarray

    def __post_init__(self):
        """Copy, validate and freeze vertices."""
        vertices = as_vertices(self.vertices).copy()
        vertices.flags.writeable = False
        object.__setattr__(self, 'vertices', vertices)

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]]) -> 'BoundaryPolygon':
        """Build from any sequence of (x, y) pairs."""
        return cls(vertices=np.asarray(points, dtype=float))

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def points(self) -> tuple:
        """Vertices as a tuple of Point."""
        return tuple(Point(float(x), float(y)) for x, y in self.vertices)

    def bounding_box(self) -> BoundingBox:
        return bounding_box(self.vertices)

    def area(self) -> float:
        return polygon_area(self.vertices)

    def centroid(self) -> Point:
        return polygon_centroid(self.vertices)

    def contains_point(self, point: Sequence[float]) -> bool:
        """Even-odd membership test (see geometry.primitives for the edge convention)."""
        return point_in_polygon(point, self.vertices)

    def contains_points(self, xs, ys) -> np.ndarray:
        """Vectorised membership test; returns a boolean array."""
        return points_in_polygon(xs, ys, self.vertices)


@dataclass(frozen=True)
class Ring:
    """
    Annular radius band, as fractions of the partition radius.

    Attributes:
        name: Caller-chosen identifier (e.g. "core", "peripheral")
        inner_radius: Inner bound in [0, 1)
        outer_radius: Outer bound in (inner_radius, 1]

    Invariants:
        - 0 <= inner_radius < outer_radius <= 1
    """

    name: str
    inner_radius: float = 0.0
    outer_radius: float = 1.0

    def __post_init__(self):
        """Validate invariants."""
        if not self.name:
            raise ValueError("Ring name cannot be empty")
        if not 0.0 <= self.inner_radius < self.outer_radius <= 1.0:
            raise ValueError(
                f"Ring '{self.name}' must satisfy 0 <= inner < outer <= 1, "
                f"got inner={self.inner_radius}, outer={self.outer_radius}"
            )

    @property
    def thickness(self) -> float:
        return self.outer_radius - self.inner_radius

    @property
    def area_fraction(self) -> float:
        """Share of the full disc's area covered by this annulus."""
        return self.outer_radius ** 2 - self.inner_radius ** 2


FULL_DISC = Ring(name="full", inner_radius=0.0, outer_radius=1.0)
