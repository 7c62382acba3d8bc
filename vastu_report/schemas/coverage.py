"""
Coverage Record Schema
======================

Bounded Context: Coverage Data Structures

Serializable snapshots of coverage results.

Design:
- ZoneCoverageRecord: One zone within one ring
- RingCoverageRecord: All zones of one ring, plus ring-level statistics
- Plain fields only; conversion from kernel results lives with the caller
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional


@dataclass(frozen=True)
class ZoneCoverageRecord:
    """
    Coverage of one zone.

    Attributes:
        zone_number: 1-32, clockwise from true North
        direction_code: 32-point compass code (e.g. "NNE")
        sector: Main direction name (e.g. "Northeast")
        start_angle: Zone start, degrees clockwise from North
        end_angle: Zone end (exclusive)
        coverage: Percentage of the zone inside the boundary (0-100)
        sample_count: Points drawn
        inside_count: Points inside the boundary

    Invariants:
        - 1 <= zone_number <= 32
        - 0 <= coverage <= 100
        - 0 <= inside_count <= sample_count

    Example:
        >>> record = ZoneCoverageRecord(
        ...     zone_number=1, direction_code="N", sector="North",
        ...     start_angle=0.0, end_angle=11.25,
        ...     coverage=97.5, sample_count=1000, inside_count=975
        ... )
    """
    zone_number: int
    direction_code: str
    sector: str
    start_angle: float
    end_angle: float
    coverage: float
    sample_count: int
    inside_count: int

    def __post_init__(self):
        """Validate invariants."""
        if not 1 <= self.zone_number <= 32:
            raise ValueError(f"zone_number must be in [1, 32], got {self.zone_number}")
        if not 0 <= self.coverage <= 100:
            raise ValueError(f"coverage must be in [0, 100], got {self.coverage}")
        if not 0 <= self.inside_count <= self.sample_count:
            raise ValueError(
                f"inside_count must be in [0, sample_count], "
                f"got {self.inside_count} of {self.sample_count}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ZoneCoverageRecord':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            return cls(
                zone_number=int(data['zone_number']),
                direction_code=str(data['direction_code']),
                sector=str(data['sector']),
                start_angle=float(data['start_angle']),
                end_angle=float(data['end_angle']),
                coverage=float(data['coverage']),
                sample_count=int(data['sample_count']),
                inside_count=int(data['inside_count'])
            )
        except KeyError as e:
            raise ValueError(f"Missing required ZoneCoverageRecord field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid ZoneCoverageRecord data: {e}")


@dataclass(frozen=True)
class RingCoverageRecord:
    """
    Coverage of every zone in one ring.

    Attributes:
        name: Ring name
        inner_radius: Inner bound (fraction of partition radius)
        outer_radius: Outer bound (fraction of partition radius)
        average: Mean zone coverage
        uniformity: Radial uniformity, 0-100
        zones: Zone records, clockwise from North
    """
    name: str
    inner_radius: float
    outer_radius: float
    average: float
    uniformity: float
    zones: List[ZoneCoverageRecord] = field(default_factory=list)

    def __post_init__(self):
        """Validate invariants."""
        if not 0 <= self.inner_radius < self.outer_radius <= 1:
            raise ValueError(
                f"Ring '{self.name}' bounds must satisfy 0 <= inner < outer <= 1, "
                f"got [{self.inner_radius}, {self.outer_radius}]"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'name': self.name,
            'inner_radius': self.inner_radius,
            'outer_radius': self.outer_radius,
            'average': self.average,
            'uniformity': self.uniformity,
            'zones': [zone.to_dict() for zone in self.zones]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RingCoverageRecord':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            return cls(
                name=str(data['name']),
                inner_radius=float(data['inner_radius']),
                outer_radius=float(data['outer_radius']),
                average=float(data['average']),
                uniformity=float(data['uniformity']),
                zones=[
                    ZoneCoverageRecord.from_dict(zone)
                    for zone in data.get('zones', [])
                ]
            )
        except KeyError as e:
            raise ValueError(f"Missing required RingCoverageRecord field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid RingCoverageRecord data: {e}")

    def get_zone(self, zone_number: int) -> Optional[ZoneCoverageRecord]:
        """Find zone record by number (None if absent)."""
        for zone in self.zones:
            if zone.zone_number == zone_number:
                return zone
        return None
