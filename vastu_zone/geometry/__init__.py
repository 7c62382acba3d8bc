"""
Geometry Layer
==============

Bounded Context: Pure geometric shapes, the 32-zone partition and spatial queries.

Responsibilities:
- Primitives (bounding box, point-in-polygon, distances, polar conversion)
- Shape representation (immutable boundary, rings)
- 32-zone partition of a circle aligned to true North
- Zone lookups (by point, sector, code, number)
- NO sampling, NO scoring, NO randomness

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
- Zero side effects
"""

from vastu_zone.geometry.primitives import (
    Point,
    BoundingBox,
    bounding_box,
    point_in_polygon,
    points_in_polygon,
    distance_to_segment,
    is_near_boundary,
    polar_to_cartesian,
    polar_to_cartesian_array,
    bearing_from_center,
    polygon_area,
    polygon_centroid,
)
from vastu_zone.geometry.shapes import BoundaryPolygon, Ring, FULL_DISC
from vastu_zone.geometry.partition import (
    ZONE_COUNT,
    ZONE_WIDTH,
    COMPASS_POINTS,
    MAIN_DIRECTIONS,
    CircleZone,
    Circle32Zones,
    generate_32_zones,
    partition_boundary,
    angle_to_zone_number,
    point_on_circle,
    opposite_sector,
)
from vastu_zone.geometry.queries import (
    find_zone_for_point,
    zone_by_number,
    zones_by_sector,
    zones_by_main_direction,
    zones_by_direction_code,
)

__all__ = [
    # Primitives
    "Point",
    "BoundingBox",
    "bounding_box",
    "point_in_polygon",
    "points_in_polygon",
    "distance_to_segment",
    "is_near_boundary",
    "polar_to_cartesian",
    "polar_to_cartesian_array",
    "bearing_from_center",
    "polygon_area",
    "polygon_centroid",
    # Shapes
    "BoundaryPolygon",
    "Ring",
    "FULL_DISC",
    # Partition
    "ZONE_COUNT",
    "ZONE_WIDTH",
    "COMPASS_POINTS",
    "MAIN_DIRECTIONS",
    "CircleZone",
    "Circle32Zones",
    "generate_32_zones",
    "partition_boundary",
    "angle_to_zone_number",
    "point_on_circle",
    "opposite_sector",
    # Queries
    "find_zone_for_point",
    "zone_by_number",
    "zones_by_sector",
    "zones_by_main_direction",
    "zones_by_direction_code",
]
