"""
Vastu Zone Kernel v1.0
======================

Bounded Context: 32-zone directional analysis of building floor plans.

Design Philosophy:
- Separation of Concerns: Geometry, Sampling, Analytics separated
- Pure kernel: coverage numbers and enums in/out, no display strings
- Explicit randomness: every sampler call takes its generator
- Fail fast: input errors raised synchronously (see errors.py)

Architecture:

    vastu_zone/
    ├── geometry/            # Pure geometry (immutable, stateless)
    │   ├── primitives.py    # Point, BoundingBox, point-in-polygon, polar math
    │   ├── shapes.py        # BoundaryPolygon, Ring
    │   ├── partition.py     # 32-zone partition, compass tables
    │   └── queries.py       # find_zone_for_point, zones_by_sector, ...
    │
    ├── sampling/            # Monte Carlo coverage (seeded)
    │   ├── random_source.py # make_rng, spawn_rngs
    │   └── coverage.py      # CoverageSampler, SamplingMode
    │
    ├── analytics/           # Statistics & scoring (pure)
    │   ├── scoring.py       # bands, balance, weighted composite, dominance
    │   └── directional.py   # sector averages, opposite-axis balance
    │
    ├── errors.py            # Kernel error hierarchy
    └── analysis.py          # Orchestration (builder + thread pool)

Usage:

    # 1. Partition (pure)
    from vastu_zone import BoundaryPolygon, partition_boundary

    boundary = BoundaryPolygon.from_points([(0, 0), (100, 0), (100, 80), (0, 80)])
    partition = partition_boundary(boundary, north_rotation=10)

    # 2. Sample one zone (explicit generator)
    from vastu_zone import CoverageSampler, make_rng

    sample = CoverageSampler.sample_zone_coverage(
        partition.zones[0], boundary, partition.center, partition.radius,
        sample_count=2000, rng=make_rng(7),
    )

    # 3. Score
    from vastu_zone import balance_score

    balance_score(sample.coverage, ideal=90).band

    # 4. Or run the whole plan
    from vastu_zone import AnalysisBuilder

    coverage = AnalysisBuilder().with_boundary(boundary).with_seed(7).build().run()
"""

# Errors
from vastu_zone.errors import (
    VastuKernelError,
    InvalidBoundaryError,
    DegenerateGeometryError,
    InvalidWeightError,
    AnalysisCancelledError,
)

# Geometry Layer (immutable, stateless)
from vastu_zone.geometry import (
    Point,
    BoundingBox,
    BoundaryPolygon,
    Ring,
    FULL_DISC,
    CircleZone,
    Circle32Zones,
    bounding_box,
    point_in_polygon,
    points_in_polygon,
    generate_32_zones,
    partition_boundary,
    find_zone_for_point,
    zones_by_sector,
    zones_by_direction_code,
)

# Sampling Layer
from vastu_zone.sampling import (
    SamplingMode,
    CoverageSample,
    AreaEstimate,
    CoverageSampler,
    make_rng,
    spawn_rngs,
)

# Analytics Layer (pure)
from vastu_zone.analytics import (
    Band,
    DominanceLevel,
    BalanceScore,
    WeightedScore,
    classify_deviation,
    balance_score,
    weighted_composite,
)

# Pipeline (orchestration)
from vastu_zone.analysis import (
    ZoneCoverage,
    RingCoverage,
    PlanCoverage,
    AnalysisConfig,
    CoverageAnalysis,
    AnalysisBuilder,
)

__all__ = [
    # Errors
    "VastuKernelError",
    "InvalidBoundaryError",
    "DegenerateGeometryError",
    "InvalidWeightError",
    "AnalysisCancelledError",
    # Geometry
    "Point",
    "BoundingBox",
    "BoundaryPolygon",
    "Ring",
    "FULL_DISC",
    "CircleZone",
    "Circle32Zones",
    "bounding_box",
    "point_in_polygon",
    "points_in_polygon",
    "generate_32_zones",
    "partition_boundary",
    "find_zone_for_point",
    "zones_by_sector",
    "zones_by_direction_code",
    # Sampling
    "SamplingMode",
    "CoverageSample",
    "AreaEstimate",
    "CoverageSampler",
    "make_rng",
    "spawn_rngs",
    # Analytics
    "Band",
    "DominanceLevel",
    "BalanceScore",
    "WeightedScore",
    "classify_deviation",
    "balance_score",
    "weighted_composite",
    # Pipeline
    "ZoneCoverage",
    "RingCoverage",
    "PlanCoverage",
    "AnalysisConfig",
    "CoverageAnalysis",
    "AnalysisBuilder",
]

__version__ = "1.0.0"
