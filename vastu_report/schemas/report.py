"""
Advisory Report Schema
======================

Bounded Context: Report Data Structures

Complete, serializable result of one advisor run.

Design:
- ScoreRecord: One measured value against its ideal
- RuleModuleRecord: Outcome of one rule module (evaluated or skipped)
- AdvisoryReport: Plan geometry, ring coverages, sector averages, modules

Report Flow:
    AdvisorService -> PlanCoverage + RuleModuleResult -> AdvisoryReport -> JSON
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional
from .common import PlanExtent, Timestamp
from .coverage import RingCoverageRecord

SCHEMA_VERSION = "1.0"


class ModuleStatus(str, Enum):
    """Rule module outcome."""
    EVALUATED = "evaluated"
    SKIPPED = "skipped"        # Module raised a kernel error


@dataclass(frozen=True)
class ScoreRecord:
    """
    One measured value compared with its ideal.

    Attributes:
        key: What was measured (sector name, ring name, ...)
        actual: Measured value (coverage %)
        ideal: Ideal value from the rule module
        weight: Weight in the module composite
        normalized_value: 0-100 balance score
        deviation: actual - ideal (signed)
        band: Deviation band value (e.g. "good")

    Example:
        >>> score = ScoreRecord(
        ...     key="Northeast", actual=82.0, ideal=90.0, weight=0.25,
        ...     normalized_value=92.0, deviation=-8.0, band="good"
        ... )
    """
    key: str
    actual: float
    ideal: float
    weight: float
    normalized_value: float
    deviation: float
    band: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'key': self.key,
            'actual': self.actual,
            'ideal': self.ideal,
            'weight': self.weight,
            'normalized_value': self.normalized_value,
            'deviation': self.deviation,
            'band': self.band
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScoreRecord':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            return cls(
                key=str(data['key']),
                actual=float(data['actual']),
                ideal=float(data['ideal']),
                weight=float(data['weight']),
                normalized_value=float(data['normalized_value']),
                deviation=float(data['deviation']),
                band=str(data['band'])
            )
        except KeyError as e:
            raise ValueError(f"Missing required ScoreRecord field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid ScoreRecord data: {e}")


@dataclass(frozen=True)
class RuleModuleRecord:
    """
    Outcome of one rule module.

    Attributes:
        name: Module name
        status: Evaluated or skipped
        composite: Weighted composite score (None when skipped)
        scores: Per-key scores (empty when skipped)
        metrics: Extra module-level numbers (e.g. uniformity)
        error: Error message (only when skipped)

    Invariants:
        - status == SKIPPED requires error
        - status == EVALUATED requires composite
    """
    name: str
    status: ModuleStatus
    composite: Optional[float] = None
    scores: List[ScoreRecord] = field(default_factory=list)
    metrics: Dict[str, float] = field(default_factory=dict)
    error: Optional[str] = None

    def __post_init__(self):
        """Validate invariants."""
        if self.status == ModuleStatus.SKIPPED and not self.error:
            raise ValueError(f"Skipped module '{self.name}' must carry an error")
        if self.status == ModuleStatus.EVALUATED and self.composite is None:
            raise ValueError(f"Evaluated module '{self.name}' must carry a composite")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        result = {
            'name': self.name,
            'status': self.status.value,
            'composite': self.composite,
            'scores': [score.to_dict() for score in self.scores],
            'metrics': dict(self.metrics)
        }
        if self.error is not None:
            result['error'] = self.error
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RuleModuleRecord':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            composite = data.get('composite')
            return cls(
                name=str(data['name']),
                status=ModuleStatus(data['status']),
                composite=float(composite) if composite is not None else None,
                scores=[ScoreRecord.from_dict(s) for s in data.get('scores', [])],
                metrics={str(k): float(v) for k, v in data.get('metrics', {}).items()},
                error=data.get('error')
            )
        except KeyError as e:
            raise ValueError(f"Missing required RuleModuleRecord field: {e}")
        except (TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Invalid RuleModuleRecord data: {e}")

    @property
    def skipped(self) -> bool:
        return self.status == ModuleStatus.SKIPPED


@dataclass(frozen=True)
class AdvisoryReport:
    """
    Complete advisory report for one plan.

    Attributes:
        schema_version: Report schema version (for evolution)
        timestamp: ISO 8601 timestamp of report creation
        plan_id: Plan identifier
        extent: Plan bounding box
        center_x, center_y: Partition center
        radius: Partition radius
        north_rotation: Rotation applied to the zones, degrees
        seed: Root seed of the sampling run
        sample_count: Points per (ring, zone)
        sampling_mode: Radius distribution value
        rings: One record per analysed ring
        sectors: Main direction -> mean coverage (first ring)
        modules: One record per registered rule module

    Example:
        >>> report = AdvisoryReport.from_dict(json.load(f))
        >>> report.get_module("sector_ideals").composite
    """
    schema_version: str
    timestamp: Timestamp
    plan_id: str
    extent: PlanExtent
    center_x: float
    center_y: float
    radius: float
    north_rotation: float
    seed: int
    sample_count: int
    sampling_mode: str
    rings: List[RingCoverageRecord] = field(default_factory=list)
    sectors: Dict[str, float] = field(default_factory=dict)
    modules: List[RuleModuleRecord] = field(default_factory=list)

    def __post_init__(self):
        """Validate invariants."""
        if self.radius <= 0:
            raise ValueError(f"Radius must be > 0, got {self.radius}")
        if self.sample_count < 1:
            raise ValueError(f"sample_count must be >= 1, got {self.sample_count}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'schema_version': self.schema_version,
            'timestamp': self.timestamp.to_dict(),
            'plan_id': self.plan_id,
            'extent': self.extent.to_dict(),
            'center_x': self.center_x,
            'center_y': self.center_y,
            'radius': self.radius,
            'north_rotation': self.north_rotation,
            'seed': self.seed,
            'sample_count': self.sample_count,
            'sampling_mode': self.sampling_mode,
            'rings': [ring.to_dict() for ring in self.rings],
            'sectors': dict(self.sectors),
            'modules': [module.to_dict() for module in self.modules]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AdvisoryReport':
        """Deserialize from dict.

        Args:
            data: Dictionary with report fields

        Returns:
            AdvisoryReport instance

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            return cls(
                schema_version=str(data['schema_version']),
                timestamp=Timestamp(value=data['timestamp']),
                plan_id=str(data['plan_id']),
                extent=PlanExtent.from_dict(data['extent']),
                center_x=float(data['center_x']),
                center_y=float(data['center_y']),
                radius=float(data['radius']),
                north_rotation=float(data['north_rotation']),
                seed=int(data['seed']),
                sample_count=int(data['sample_count']),
                sampling_mode=str(data['sampling_mode']),
                rings=[RingCoverageRecord.from_dict(r) for r in data.get('rings', [])],
                sectors={str(k): float(v) for k, v in data.get('sectors', {}).items()},
                modules=[RuleModuleRecord.from_dict(m) for m in data.get('modules', [])]
            )
        except KeyError as e:
            raise ValueError(f"Missing required AdvisoryReport field: {e}")
        except (TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Invalid AdvisoryReport data: {e}")

    def get_ring(self, name: str) -> Optional[RingCoverageRecord]:
        """Find ring record by name."""
        for ring in self.rings:
            if ring.name == name:
                return ring
        return None

    def get_module(self, name: str) -> Optional[RuleModuleRecord]:
        """Find module record by name."""
        for module in self.modules:
            if module.name == name:
                return module
        return None

    @property
    def skipped_modules(self) -> List[str]:
        """Names of modules that failed and were skipped."""
        return [module.name for module in self.modules if module.skipped]
