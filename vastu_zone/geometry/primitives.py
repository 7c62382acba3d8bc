"""
Geometry Primitives
===================

Pure geometric functions shared by every zone analysis - NO state, NO side effects.

Conventions:
- Drawing space: +x to the right, +y down (screen coordinates)
- Angles in degrees, measured clockwise from North (North = -y)
- Polygons are implicitly closed (last vertex connects to first)

Point-in-polygon edge convention (half-open crossing rule):
    An edge (p_i, p_j) is crossed by the horizontal ray from the query point
    when exactly one endpoint lies strictly above the point's y
    ((y_i > py) != (y_j > py)) and the crossing x is strictly greater than px.
    A point lying exactly on the boundary therefore counts as inside when the
    polygon interior lies on its +x side (+y side for horizontal edges).
    For the square [-5, 5] x [-5, 5]: (-5, 0) and (0, -5) are inside,
    (5, 0) and (0, 5) are outside.

    point_in_polygon() and points_in_polygon() share one implementation, so
    the convention is identical for single queries and for the sampler.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from vastu_zone.errors import InvalidBoundaryError


class Point(NamedTuple):
    """2D coordinate in drawing units."""

    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """
    Immutable axis-aligned bounding box of a point set.

    A zero width or height is a valid value but unusable for partitioning
    (see partition_boundary()).

    Example:
        >>> box = bounding_box([(0, 0), (100, 0), (100, 50)])
        >>> box.width, box.height, box.center_x, box.center_y
        (100.0, 50.0, 50.0, 25.0)
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def center_y(self) -> float:
        return (self.min_y + self.max_y) / 2

    @property
    def center(self) -> Point:
        return Point(self.center_x, self.center_y)

    @property
    def is_degenerate(self) -> bool:
        """True when width or height is zero."""
        return self.width == 0 or self.height == 0

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON-compatible dict (derived fields included)."""
        data = asdict(self)
        data.update(
            width=self.width,
            height=self.height,
            center_x=self.center_x,
            center_y=self.center_y,
        )
        return data


def as_vertices(polygon, min_points: int = 3) -> np.ndarray:
    """
    Coerce a polygon-like value to an (N, 2) float array.

    Accepts a sequence of (x, y) pairs, an (N, 2) array, or any object with a
    ``vertices`` attribute (e.g. BoundaryPolygon).

    Raises:
        InvalidBoundaryError: If fewer than ``min_points`` vertices, wrong
            shape, or non-finite coordinates
    """
    vertices = getattr(polygon, "vertices", polygon)
    try:
        array = np.asarray(vertices, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidBoundaryError(f"Boundary is not a sequence of (x, y) points: {e}") from e

    if array.size == 0:
        array = array.reshape(0, 2)
    if array.ndim != 2 or array.shape[1] != 2:
        raise InvalidBoundaryError(f"Boundary must be Nx2, got shape {array.shape}")
    if len(array) < min_points:
        raise InvalidBoundaryError(
            f"Boundary must have at least {min_points} points, got {len(array)}"
        )
    if not np.all(np.isfinite(array)):
        raise InvalidBoundaryError("Boundary coordinates must be finite")
    return array


def bounding_box(points) -> BoundingBox:
    """
    Compute the bounding box of a point set.

    Args:
        points: Sequence of (x, y) points (at least one)

    Returns:
        BoundingBox; a single point yields zero width and height

    Raises:
        InvalidBoundaryError: If points is empty
    """
    vertices = as_vertices(points, min_points=1)
    min_x, min_y = vertices.min(axis=0)
    max_x, max_y = vertices.max(axis=0)
    return BoundingBox(
        min_x=float(min_x),
        max_x=float(max_x),
        min_y=float(min_y),
        max_y=float(max_y),
    )


def points_in_polygon(xs, ys, polygon) -> np.ndarray:
    """
    Vectorised even-odd test for many points against one polygon.

    Args:
        xs: Array-like of x coordinates
        ys: Array-like of y coordinates (same shape as xs)
        polygon: Boundary with at least 3 vertices

    Returns:
        Boolean array, True where the point is inside

    Raises:
        InvalidBoundaryError: If polygon has fewer than 3 vertices
    """
    vertices = as_vertices(polygon)
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)

    inside = np.zeros(np.broadcast(xs, ys).shape, dtype=bool)
    xj, yj = vertices[-1]
    for xi, yi in vertices:
        straddles = (yi > ys) != (yj > ys)
        # Horizontal edges never straddle; their division result is masked out
        with np.errstate(divide="ignore", invalid="ignore"):
            x_cross = (xj - xi) * (ys - yi) / (yj - yi) + xi
            inside ^= straddles & (xs < x_cross)
        xj, yj = xi, yi
    return inside


def point_in_polygon(point: Sequence[float], polygon) -> bool:
    """
    Even-odd ray-casting test for a single point.

    See the module docstring for the boundary convention.

    Raises:
        InvalidBoundaryError: If polygon has fewer than 3 vertices
    """
    return bool(points_in_polygon([point[0]], [point[1]], polygon)[0])


def distance_to_segment(
    point: Sequence[float],
    seg_start: Sequence[float],
    seg_end: Sequence[float],
) -> float:
    """Euclidean distance from point to the closed segment [seg_start, seg_end]."""
    dx = seg_end[0] - seg_start[0]
    dy = seg_end[1] - seg_start[1]
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        return math.hypot(point[0] - seg_start[0], point[1] - seg_start[1])

    t = ((point[0] - seg_start[0]) * dx + (point[1] - seg_start[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    proj_x = seg_start[0] + t * dx
    proj_y = seg_start[1] + t * dy
    return math.hypot(point[0] - proj_x, point[1] - proj_y)


def is_near_boundary(point: Sequence[float], polygon, threshold: float) -> bool:
    """True if any boundary edge lies closer than ``threshold`` to point."""
    vertices = as_vertices(polygon)
    n = len(vertices)
    return any(
        distance_to_segment(point, vertices[i], vertices[(i + 1) % n]) < threshold
        for i in range(n)
    )


def polar_to_cartesian(
    center: Sequence[float],
    radius: float,
    angle_degrees: float,
    distance_fraction: float = 1.0,
) -> Point:
    """
    Convert a compass bearing and distance to drawing coordinates.

    Args:
        center: (x, y) origin
        radius: Reference radius
        angle_degrees: Clockwise from North
        distance_fraction: Distance as a fraction of radius

    Returns:
        Point at ``(cx + d*sin(theta), cy - d*cos(theta))`` with ``d = radius * distance_fraction``
    """
    theta = math.radians(angle_degrees)
    d = radius * distance_fraction
    return Point(center[0] + d * math.sin(theta), center[1] - d * math.cos(theta))


def polar_to_cartesian_array(
    center: Sequence[float],
    radius: float,
    angles_degrees,
    distance_fractions,
) -> Tuple[np.ndarray, np.ndarray]:
    """Numpy form of polar_to_cartesian(); returns (xs, ys)."""
    theta = np.radians(np.asarray(angles_degrees, dtype=float))
    d = radius * np.asarray(distance_fractions, dtype=float)
    return center[0] + d * np.sin(theta), center[1] - d * np.cos(theta)


def bearing_from_center(center: Sequence[float], point: Sequence[float]) -> Optional[float]:
    """
    Compass bearing of point as seen from center, in [0, 360).

    Returns:
        Degrees clockwise from North, or None when point coincides with center
    """
    dx = point[0] - center[0]
    dy = point[1] - center[1]
    if dx == 0 and dy == 0:
        return None

    angle = math.degrees(math.atan2(dx, -dy)) % 360.0
    # Tiny negative angles can round up to exactly 360.0
    return 0.0 if angle >= 360.0 else angle


def polygon_area(polygon) -> float:
    """Shoelace area; works for either winding order."""
    vertices = as_vertices(polygon)
    x, y = vertices[:, 0], vertices[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)) / 2)


def polygon_centroid(polygon) -> Point:
    """
    Area centroid of a simple polygon.

    Falls back to the vertex mean when the signed area is zero
    (collinear vertices).
    """
    vertices = as_vertices(polygon)
    x, y = vertices[:, 0], vertices[:, 1]
    x1, y1 = np.roll(x, -1), np.roll(y, -1)
    cross = x * y1 - x1 * y
    signed_area = cross.sum() / 2

    if signed_area == 0:
        return Point(float(x.mean()), float(y.mean()))

    cx = ((x + x1) * cross).sum() / (6 * signed_area)
    cy = ((y + y1) * cross).sum() / (6 * signed_area)
    return Point(float(cx), float(cy))
