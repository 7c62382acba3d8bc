"""
Coverage Analysis Pipeline
==========================

Bounded Context: Orchestration of partition + sampling for one plan.

Design:
- Orchestrator: bounding box -> partition -> coverage per (ring, zone)
- Builder pattern: fluent configuration, fail fast at build()
- One child generator per (ring, zone) task, spawned in fixed task order,
  so a given seed yields identical results for any worker count
- Optional thread pool; a threading.Event cancels outstanding tasks
- Result is immutable (PlanCoverage)

Usage:
    analysis = (
        AnalysisBuilder()
        .with_boundary([(0, 0), (100, 0), (100, 100), (0, 100)])
        .add_ring("outer", 0.6, 1.0)
        .with_seed(42)
        .build()
    )
    coverage = analysis.run()
    coverage.ring("outer").average
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from vastu_report.logging import LogEvent, StructuredLogger, create_logger
from vastu_zone.analytics.directional import AxisBalance, axis_balances, sector_averages
from vastu_zone.analytics.scoring import mean, radial_uniformity
from vastu_zone.errors import (
    AnalysisCancelledError,
    DegenerateGeometryError,
    InvalidBoundaryError,
)
from vastu_zone.geometry.partition import Circle32Zones, CircleZone, partition_boundary
from vastu_zone.geometry.primitives import BoundingBox
from vastu_zone.geometry.shapes import BoundaryPolygon, Ring, FULL_DISC
from vastu_zone.sampling.coverage import (
    DEFAULT_SAMPLE_COUNT,
    CoverageSample,
    CoverageSampler,
    SamplingMode,
)
from vastu_zone.sampling.random_source import spawn_rngs


@dataclass(frozen=True)
class ZoneCoverage:
    """Coverage of one zone within one ring."""

    zone: CircleZone
    ring: Ring
    sample: CoverageSample

    @property
    def coverage(self) -> float:
        return self.sample.coverage


@dataclass(frozen=True)
class RingCoverage:
    """
    Coverage of all 32 zones within one ring.

    Attributes:
        ring: Annulus the zones were restricted to
        zones: 32 ZoneCoverage, clockwise from true North
    """

    ring: Ring
    zones: Tuple[ZoneCoverage, ...]

    @property
    def name(self) -> str:
        return self.ring.name

    def coverage_by_zone(self) -> Dict[int, float]:
        """zone_number -> coverage %."""
        return {z.zone.zone_number: z.coverage for z in self.zones}

    @property
    def average(self) -> float:
        """Mean coverage over the ring's zones."""
        return mean([z.coverage for z in self.zones])

    @property
    def uniformity(self) -> float:
        """Evenness of coverage around the ring (0-100)."""
        return radial_uniformity([z.coverage for z in self.zones])


@dataclass(frozen=True)
class PlanCoverage:
    """
    Immutable analysis result for one plan.

    Attributes:
        plan_id: Caller-supplied identifier
        bounding_box: Boundary bounding box
        partition: The 32-zone partition used
        rings: One RingCoverage per configured ring, in configuration order
        seed: Root seed the task generators were spawned from
        sample_count: Points drawn per (ring, zone)
        mode: Radius distribution used
    """

    plan_id: str
    bounding_box: BoundingBox
    partition: Circle32Zones
    rings: Tuple[RingCoverage, ...]
    seed: int
    sample_count: int
    mode: SamplingMode

    def ring(self, name: str) -> Optional[RingCoverage]:
        """Ring result by name (None if not analysed)."""
        for ring_coverage in self.rings:
            if ring_coverage.name == name:
                return ring_coverage
        return None

    def sector_coverage(self, ring_name: Optional[str] = None) -> Dict[str, float]:
        """
        Mean coverage per main direction.

        Args:
            ring_name: Ring to aggregate (default: first ring)

        Returns:
            Sector name -> mean coverage %, empty if the ring is unknown
        """
        ring_coverage = self.ring(ring_name) if ring_name else self.rings[0]
        if ring_coverage is None:
            return {}
        return sector_averages(ring_coverage.coverage_by_zone(), self.partition)

    def axis_balances(self, ring_name: Optional[str] = None) -> List[AxisBalance]:
        """Opposite-direction balance for each sector of a ring."""
        return axis_balances(self.sector_coverage(ring_name))


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Analysis configuration (immutable).

    Design:
    - All inputs explicit (boundary, rings, seed, workers)
    - Validated at construction
    """

    boundary: BoundaryPolygon
    rings: Tuple[Ring, ...] = (FULL_DISC,)
    north_rotation: float = 0.0
    sample_count: int = DEFAULT_SAMPLE_COUNT
    seed: Optional[int] = None
    mode: SamplingMode = SamplingMode.AREA_UNIFORM
    workers: int = 1
    plan_id: str = "plan"

    def __post_init__(self):
        if not self.rings:
            raise ValueError("At least one ring is required")
        names = [ring.name for ring in self.rings]
        if len(set(names)) != len(names):
            raise ValueError(f"Ring names must be unique, got {names}")
        if isinstance(self.sample_count, bool) or not isinstance(self.sample_count, int):
            raise ValueError(f"sample_count must be an integer, got {self.sample_count!r}")
        if self.sample_count < 1:
            raise ValueError(f"sample_count must be >= 1, got {self.sample_count}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        object.__setattr__(self, 'mode', SamplingMode(self.mode))


@dataclass(frozen=True)
class _Task:
    ring: Ring
    zone: CircleZone
    rng: np.random.Generator = field(repr=False)


class CoverageAnalysis:
    """
    Runs coverage sampling for every (ring, zone) pair of one plan.

    Design:
    - Single Responsibility: orchestration only
    - Delegates geometry to partition_boundary(), sampling to CoverageSampler
    - Reusable: run() may be called repeatedly; each call re-spawns the
      same task generators from the configured seed
    """

    def __init__(self, config: AnalysisConfig, logger: Optional[StructuredLogger] = None):
        self.config = config
        self.logger = logger or create_logger("analysis")

    def run(self, cancel_event: Optional[threading.Event] = None) -> PlanCoverage:
        """
        Partition the boundary and sample every (ring, zone) pair.

        Args:
            cancel_event: Set to abandon outstanding tasks

        Returns:
            PlanCoverage

        Raises:
            DegenerateGeometryError: If the bounding box has zero width or height
            AnalysisCancelledError: If cancel_event was set before completion
        """
        config = self.config
        seed = config.seed if config.seed is not None else int(np.random.SeedSequence().entropy)
        log = self.logger.bind(plan_id=config.plan_id)

        log.info(
            event=LogEvent.ANALYSIS_STARTED,
            message="Coverage analysis started",
            metadata={
                'rings': [ring.name for ring in config.rings],
                'sample_count': config.sample_count,
                'mode': config.mode.value,
                'workers': config.workers,
                'seed': seed,
            },
        )

        try:
            partition = partition_boundary(config.boundary, config.north_rotation)
        except (InvalidBoundaryError, DegenerateGeometryError) as e:
            event = (
                LogEvent.BOUNDARY_ERROR if isinstance(e, InvalidBoundaryError)
                else LogEvent.GEOMETRY_ERROR
            )
            log.error(
                event=event,
                message="Boundary cannot be partitioned",
                exc_info=e,
            )
            raise

        log.debug(
            event=LogEvent.PARTITION_GENERATED,
            message="32-zone partition generated",
            metadata={
                'center': list(partition.center),
                'radius': partition.radius,
                'north_rotation': partition.north_rotation,
            },
        )

        tasks = self._plan_tasks(partition, seed)
        try:
            samples = self._execute(tasks, partition, cancel_event)
        except AnalysisCancelledError:
            log.warning(
                event=LogEvent.ANALYSIS_CANCELLED,
                message="Coverage analysis cancelled",
            )
            raise

        rings = []
        zone_count = len(partition)
        for index, ring in enumerate(config.rings):
            ring_samples = samples[index * zone_count:(index + 1) * zone_count]
            ring_coverage = RingCoverage(
                ring=ring,
                zones=tuple(
                    ZoneCoverage(zone=task.zone, ring=ring, sample=sample)
                    for task, sample in zip(tasks[index * zone_count:], ring_samples)
                ),
            )
            rings.append(ring_coverage)
            log.debug(
                event=LogEvent.COVERAGE_SAMPLED,
                message="Ring sampled",
                metadata={'ring': ring.name, 'average': ring_coverage.average},
            )

        result = PlanCoverage(
            plan_id=config.plan_id,
            bounding_box=config.boundary.bounding_box(),
            partition=partition,
            rings=tuple(rings),
            seed=seed,
            sample_count=config.sample_count,
            mode=config.mode,
        )

        log.info(
            event=LogEvent.ANALYSIS_COMPLETED,
            message="Coverage analysis completed",
            metadata={'ring_averages': {r.name: r.average for r in result.rings}},
        )
        return result

    def _plan_tasks(self, partition: Circle32Zones, seed: int) -> List[_Task]:
        """Tasks in fixed (ring, zone) order, one child generator each."""
        pairs = [(ring, zone) for ring in self.config.rings for zone in partition]
        rngs = spawn_rngs(seed, len(pairs))
        return [_Task(ring=ring, zone=zone, rng=rng) for (ring, zone), rng in zip(pairs, rngs)]

    def _execute(
        self,
        tasks: Sequence[_Task],
        partition: Circle32Zones,
        cancel_event: Optional[threading.Event],
    ) -> List[CoverageSample]:
        """Run tasks sequentially or on a thread pool; results in task order."""
        def sample(task: _Task) -> CoverageSample:
            if cancel_event is not None and cancel_event.is_set():
                raise AnalysisCancelledError("Coverage analysis cancelled")
            return CoverageSampler.sample_zone_coverage(
                task.zone,
                self.config.boundary,
                partition.center,
                partition.radius,
                task.ring,
                self.config.sample_count,
                rng=task.rng,
                mode=self.config.mode,
            )

        if self.config.workers == 1:
            return [sample(task) for task in tasks]

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = [executor.submit(sample, task) for task in tasks]
            try:
                return [future.result() for future in futures]
            except AnalysisCancelledError:
                for future in futures:
                    future.cancel()
                raise


class AnalysisBuilder:
    """
    Builder for CoverageAnalysis.

    Design:
    - Fluent API for construction
    - Fail-fast validation in build()
    - Defaults: full disc, 1000 samples, area-uniform, single worker

    Usage:
        analysis = (
            AnalysisBuilder()
            .with_boundary(points)
            .with_north_rotation(12.5)
            .add_ring("inner", 0.0, 0.3)
            .add_ring("outer", 0.3, 1.0)
            .with_workers(4)
            .build()
        )
    """

    def __init__(self):
        self._boundary: Optional[BoundaryPolygon] = None
        self._rings: List[Ring] = []
        self._north_rotation: float = 0.0
        self._sample_count: int = DEFAULT_SAMPLE_COUNT
        self._seed: Optional[int] = None
        self._mode: SamplingMode = SamplingMode.AREA_UNIFORM
        self._workers: int = 1
        self._plan_id: str = "plan"
        self._logger: Optional[StructuredLogger] = None

    def with_boundary(self, boundary) -> "AnalysisBuilder":
        """Set the boundary (BoundaryPolygon or sequence of (x, y))."""
        if not isinstance(boundary, BoundaryPolygon):
            boundary = BoundaryPolygon.from_points(boundary)
        self._boundary = boundary
        return self

    def with_plan_id(self, plan_id: str) -> "AnalysisBuilder":
        self._plan_id = plan_id
        return self

    def with_north_rotation(self, degrees: float) -> "AnalysisBuilder":
        """Set the north rotation applied to every zone angle."""
        self._north_rotation = float(degrees)
        return self

    def add_ring(self, name: str, inner_radius: float, outer_radius: float) -> "AnalysisBuilder":
        """
        Add a ring (fractions of the partition radius).

        Raises:
            ValueError: If the ring bounds are invalid
        """
        self._rings.append(Ring(name=name, inner_radius=inner_radius, outer_radius=outer_radius))
        return self

    def with_rings(self, rings: Sequence[Ring]) -> "AnalysisBuilder":
        """Replace all rings."""
        self._rings = list(rings)
        return self

    def with_sample_count(self, sample_count: int) -> "AnalysisBuilder":
        """Set points drawn per (ring, zone)."""
        self._sample_count = sample_count
        return self

    def with_seed(self, seed: Optional[int]) -> "AnalysisBuilder":
        """Set the root seed (None: fresh entropy, recorded in the result)."""
        self._seed = seed
        return self

    def with_sampling_mode(self, mode: SamplingMode) -> "AnalysisBuilder":
        self._mode = SamplingMode(mode)
        return self

    def with_workers(self, workers: int) -> "AnalysisBuilder":
        """Set thread-pool size (1 = sequential)."""
        self._workers = workers
        return self

    def with_logger(self, logger: StructuredLogger) -> "AnalysisBuilder":
        self._logger = logger
        return self

    def build(self) -> CoverageAnalysis:
        """
        Build the analysis.

        Returns:
            Configured CoverageAnalysis

        Raises:
            ValueError: If the boundary is missing or configuration is invalid
        """
        if self._boundary is None:
            raise ValueError("Boundary is required (use .with_boundary())")

        config = AnalysisConfig(
            boundary=self._boundary,
            rings=tuple(self._rings) if self._rings else (FULL_DISC,),
            north_rotation=self._north_rotation,
            sample_count=self._sample_count,
            seed=self._seed,
            mode=self._mode,
            workers=self._workers,
            plan_id=self._plan_id,
        )
        return CoverageAnalysis(config, logger=self._logger)
