"""
Sampling Layer
==============

Bounded Context: Monte Carlo coverage estimation.

Responsibilities:
- Explicit, seedable random generators (one per task under concurrency)
- Zone / ring-sector coverage percentages
- Absolute covered-area estimates
"""

from vastu_zone.sampling.random_source import make_rng, spawn_rngs
from vastu_zone.sampling.coverage import (
    DEFAULT_SAMPLE_COUNT,
    SamplingMode,
    CoverageSample,
    AreaEstimate,
    CoverageSampler,
    theoretical_sector_area,
    sample_zone_coverage,
    sample_absolute_area,
)

__all__ = [
    "make_rng",
    "spawn_rngs",
    "DEFAULT_SAMPLE_COUNT",
    "SamplingMode",
    "CoverageSample",
    "AreaEstimate",
    "CoverageSampler",
    "theoretical_sector_area",
    "sample_zone_coverage",
    "sample_absolute_area",
]
