"""
Directional Aggregation
=======================

Roll zone coverages up to the 8 main directions and compare opposite axes.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping

from vastu_zone.analytics.scoring import mean, opposite_balance
from vastu_zone.geometry.partition import Circle32Zones, MAIN_DIRECTIONS, opposite_sector


@dataclass(frozen=True)
class AxisBalance:
    """Coverage of one main direction against its opposite."""

    sector: str
    opposite: str
    coverage: float
    opposite_coverage: float

    @property
    def balance(self) -> float:
        """0-100, see scoring.opposite_balance()."""
        return opposite_balance(self.coverage, self.opposite_coverage)


def sector_averages(
    coverage_by_zone: Mapping[int, float],
    partition: Circle32Zones,
) -> Dict[str, float]:
    """
    Mean coverage per sector (full name), in clockwise order from North.

    Zones missing from coverage_by_zone are ignored; a sector with no
    sampled zone averages to 0.
    """
    grouped: Dict[str, List[float]] = {name: [] for _, name in MAIN_DIRECTIONS}
    for zone in partition.zones:
        if zone.zone_number in coverage_by_zone:
            grouped[zone.sector].append(coverage_by_zone[zone.zone_number])
    return {sector: mean(values) for sector, values in grouped.items()}


def axis_balances(sector_coverage: Mapping[str, float]) -> List[AxisBalance]:
    """One AxisBalance per sector present in sector_coverage."""
    balances = []
    for sector, coverage in sector_coverage.items():
        opposite = opposite_sector(sector)
        if opposite is None:
            continue
        balances.append(AxisBalance(
            sector=sector,
            opposite=opposite,
            coverage=coverage,
            opposite_coverage=sector_coverage.get(opposite, 0.0),
        ))
    return balances
