"""
Zone Query Utilities
====================

Lookups over a Circle32Zones partition.

Absence is an expected outcome, never an error: single lookups return None,
filters return an empty tuple.
"""

from typing import Optional, Tuple

from vastu_zone.geometry.partition import CircleZone, Circle32Zones
from vastu_zone.geometry.primitives import bearing_from_center


def find_zone_for_point(x: float, y: float, partition: Circle32Zones) -> Optional[CircleZone]:
    """
    Zone whose angular range contains the bearing from the partition center to (x, y).

    Returns:
        The zone, or None if (x, y) coincides with the center
    """
    angle = bearing_from_center(partition.center, (x, y))
    if angle is None:
        return None

    for zone in partition.zones:
        if zone.contains_angle(angle):
            return zone
    return None


def zone_by_number(zone_number: int, partition: Circle32Zones) -> Optional[CircleZone]:
    """Zone with the given number (1-32), or None."""
    for zone in partition.zones:
        if zone.zone_number == zone_number:
            return zone
    return None


def zones_by_sector(sector_name: str, partition: Circle32Zones) -> Tuple[CircleZone, ...]:
    """Zones owned by a main direction, by full name (e.g. "Northeast")."""
    return tuple(z for z in partition.zones if z.sector == sector_name)


def zones_by_main_direction(code: str, partition: Circle32Zones) -> Tuple[CircleZone, ...]:
    """Zones owned by a main direction, by code (e.g. "NE")."""
    return tuple(z for z in partition.zones if z.main_direction == code)


def zones_by_direction_code(code: str, partition: Circle32Zones) -> Tuple[CircleZone, ...]:
    """Zones carrying a 32-point compass code (e.g. "NNE")."""
    return tuple(z for z in partition.zones if z.direction_code == code)
