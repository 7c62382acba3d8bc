"""
Zone Partitioner
================

Fixed 32-zone angular division of a circle, aligned to true North.

Design:
- Pure and deterministic: same inputs give the same 32 zones, bit-for-bit
- Zone i (0-based) spans [i * 11.25 + rotation, (i + 1) * 11.25 + rotation)
  modulo 360, clockwise from North
- Direction codes come from the 32-point compass by index, so the rotation
  moves the zone angles in drawing space while "N" keeps naming true North
- Sector = one of the 8 main directions, by integer division of the index by 4
- Neighbouring zones share the exact same float for end/start (no gaps)

Direction codes are the mariner's 32-point compass ("boxing the compass"):
the 16 points of the 16-wind rose keep their 1-3 letter codes (N, NNE, NE,
...), the 16 "by" points in between use the standard b-notation (NbE, NEbN,
...), so a few codes are 4 characters long. Those are the only unambiguous
32 codes; a 3-letter-only table has to repeat codes (NNE would name three
zones).
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Iterator, Optional, Tuple

from vastu_zone.errors import DegenerateGeometryError
from vastu_zone.geometry.primitives import Point, as_vertices, bounding_box, polar_to_cartesian

ZONE_COUNT = 32
ZONE_WIDTH = 360.0 / ZONE_COUNT  # 11.25 degrees

# 32-point compass, clockwise from North: (code, name)
COMPASS_POINTS: Tuple[Tuple[str, str], ...] = (
    ("N", "North"),
    ("NbE", "North by East"),
    ("NNE", "North-Northeast"),
    ("NEbN", "Northeast by North"),
    ("NE", "Northeast"),
    ("NEbE", "Northeast by East"),
    ("ENE", "East-Northeast"),
    ("EbN", "East by North"),
    ("E", "East"),
    ("EbS", "East by South"),
    ("ESE", "East-Southeast"),
    ("SEbE", "Southeast by East"),
    ("SE", "Southeast"),
    ("SEbS", "Southeast by South"),
    ("SSE", "South-Southeast"),
    ("SbE", "South by East"),
    ("S", "South"),
    ("SbW", "South by West"),
    ("SSW", "South-Southwest"),
    ("SWbS", "Southwest by South"),
    ("SW", "Southwest"),
    ("SWbW", "Southwest by West"),
    ("WSW", "West-Southwest"),
    ("WbS", "West by South"),
    ("W", "West"),
    ("WbN", "West by North"),
    ("WNW", "West-Northwest"),
    ("NWbW", "Northwest by West"),
    ("NW", "Northwest"),
    ("NWbN", "Northwest by North"),
    ("NNW", "North-Northwest"),
    ("NbW", "North by West"),
)

# 8 main directions, clockwise from North: (code, name)
MAIN_DIRECTIONS: Tuple[Tuple[str, str], ...] = (
    ("N", "North"),
    ("NE", "Northeast"),
    ("E", "East"),
    ("SE", "Southeast"),
    ("S", "South"),
    ("SW", "Southwest"),
    ("W", "West"),
    ("NW", "Northwest"),
)

ZONES_PER_SECTOR = ZONE_COUNT // len(MAIN_DIRECTIONS)


@dataclass(frozen=True)
class CircleZone:
    """
    One of the 32 angular zones.

    Attributes:
        zone_number: 1-32, clockwise from true North
        direction: Full compass name (e.g. "North by East")
        direction_code: 32-point compass code (e.g. "NbE")
        sector: Owning main direction, full name (e.g. "North")
        main_direction: Owning main direction, code (e.g. "N")
        start_angle: Inclusive start, degrees clockwise from North, in [0, 360)
        end_angle: Exclusive end, in [0, 360); smaller than start_angle for
            the zone straddling 0/360
        center_angle: Mid-point angle, in [0, 360)
    """

    zone_number: int
    direction: str
    direction_code: str
    sector: str
    main_direction: str
    start_angle: float
    end_angle: float
    center_angle: float

    @property
    def width(self) -> float:
        """Angular width in degrees (always 11.25)."""
        return ZONE_WIDTH

    @property
    def wraps(self) -> bool:
        """True for the zone whose range straddles 0/360."""
        return self.end_angle < self.start_angle

    def contains_angle(self, angle: float) -> bool:
        """Half-open [start_angle, end_angle) test, wraparound-aware."""
        if self.wraps:
            return angle >= self.start_angle or angle < self.end_angle
        return self.start_angle <= angle < self.end_angle

    def to_dict(self) -> Dict[str, object]:
        """Serialize to JSON-compatible dict."""
        return asdict(self)


@dataclass(frozen=True)
class Circle32Zones:
    """
    All 32 zones of one partition, plus the circle they were cut from.

    Attributes:
        center_x, center_y: Partition center in drawing units
        radius: Partition radius (carried for downstream sampling)
        north_rotation: Rotation applied to every zone angle, degrees
        zones: The 32 zones, in clockwise order from true North
    """

    center_x: float
    center_y: float
    radius: float
    north_rotation: float
    zones: Tuple[CircleZone, ...]

    @property
    def center(self) -> Point:
        return Point(self.center_x, self.center_y)

    def __iter__(self) -> Iterator[CircleZone]:
        return iter(self.zones)

    def __len__(self) -> int:
        return len(self.zones)


def _normalize(angle: float) -> float:
    angle = angle % 360.0
    return 0.0 if angle >= 360.0 else angle


def generate_32_zones(
    center_x: float,
    center_y: float,
    radius: float,
    north_rotation: float = 0.0,
) -> Circle32Zones:
    """
    Build the fixed 32-zone division of a circle.

    Args:
        center_x, center_y: Circle center
        radius: Circle radius, must be > 0
        north_rotation: Degrees added to every zone angle before wrapping

    Returns:
        Circle32Zones with exactly 32 zones of 11.25 degrees

    Raises:
        DegenerateGeometryError: If radius <= 0 or any input is not finite
    """
    if not all(math.isfinite(v) for v in (center_x, center_y, radius, north_rotation)):
        raise DegenerateGeometryError(
            f"Partition inputs must be finite: center=({center_x}, {center_y}), "
            f"radius={radius}, north_rotation={north_rotation}"
        )
    if radius <= 0:
        raise DegenerateGeometryError(f"Partition radius must be > 0, got {radius}")

    zones = []
    for i, (code, name) in enumerate(COMPASS_POINTS):
        main_code, main_name = MAIN_DIRECTIONS[i // ZONES_PER_SECTOR]
        zones.append(CircleZone(
            zone_number=i + 1,
            direction=name,
            direction_code=code,
            sector=main_name,
            main_direction=main_code,
            start_angle=_normalize(i * ZONE_WIDTH + north_rotation),
            end_angle=_normalize((i + 1) * ZONE_WIDTH + north_rotation),
            center_angle=_normalize(i * ZONE_WIDTH + ZONE_WIDTH / 2 + north_rotation),
        ))

    return Circle32Zones(
        center_x=float(center_x),
        center_y=float(center_y),
        radius=float(radius),
        north_rotation=float(north_rotation),
        zones=tuple(zones),
    )


def partition_boundary(boundary, north_rotation: float = 0.0) -> Circle32Zones:
    """
    Partition a boundary around its bounding-box center.

    The radius is half the shorter bounding-box side. Degeneracy is checked
    here, before any zone is built.

    Raises:
        InvalidBoundaryError: If boundary has fewer than 3 points
        DegenerateGeometryError: If the bounding box has zero width or height
    """
    box = bounding_box(as_vertices(boundary))
    if box.is_degenerate:
        raise DegenerateGeometryError(
            f"Boundary bounding box is degenerate: width={box.width}, height={box.height}"
        )
    radius = min(box.width, box.height) / 2
    return generate_32_zones(box.center_x, box.center_y, radius, north_rotation)


def angle_to_zone_number(angle: float, north_rotation: float = 0.0) -> int:
    """Zone number (1-32) whose range contains a drawing-space angle."""
    relative = _normalize(angle - north_rotation)
    return min(int(relative // ZONE_WIDTH), ZONE_COUNT - 1) + 1


def point_on_circle(center_x: float, center_y: float, radius: float, angle: float) -> Point:
    """Point on the circle perimeter at a compass angle."""
    return polar_to_cartesian((center_x, center_y), radius, angle)


def opposite_sector(sector: str) -> Optional[str]:
    """
    Opposite main direction, in the same form as given.

    >>> opposite_sector("NE"), opposite_sector("Northeast")
    ('SW', 'Southwest')
    """
    for i, (code, name) in enumerate(MAIN_DIRECTIONS):
        opposite_code, opposite_name = MAIN_DIRECTIONS[(i + 4) % len(MAIN_DIRECTIONS)]
        if sector == code:
            return opposite_code
        if sector == name:
            return opposite_name
    return None
