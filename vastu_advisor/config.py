"""
Configuration schema for the advisor service.

This module defines the configuration structure for one plan analysis:
boundary, north rotation, sampling settings, rings, and the data-driven
rule modules (ideal tables and weights).
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import yaml

from vastu_zone.geometry import MAIN_DIRECTIONS
from vastu_zone.sampling import DEFAULT_SAMPLE_COUNT, SamplingMode

RULE_MODULE_KINDS = {"sector", "ring"}
SECTOR_NAMES = tuple(name for _, name in MAIN_DIRECTIONS)


@dataclass(frozen=True)
class SamplingConfig:
    """Monte Carlo sampling settings."""

    sample_count: int = DEFAULT_SAMPLE_COUNT
    seed: Optional[int] = None  # None: fresh entropy, recorded in the report
    mode: str = SamplingMode.AREA_UNIFORM.value  # "area_uniform" or "linear_radius"
    workers: int = 1

    def __post_init__(self):
        """Validate sampling configuration."""
        if isinstance(self.sample_count, bool) or not isinstance(self.sample_count, int):
            raise ValueError(f"sample_count must be an integer, got {self.sample_count!r}")
        if self.sample_count < 1:
            raise ValueError(f"sample_count must be >= 1, got {self.sample_count}")

        valid_modes = {mode.value for mode in SamplingMode}
        if self.mode not in valid_modes:
            raise ValueError(
                f"Invalid sampling mode: {self.mode}. "
                f"Must be one of {sorted(valid_modes)}"
            )

        if isinstance(self.workers, bool) or not isinstance(self.workers, int):
            raise ValueError(f"workers must be an integer, got {self.workers!r}")
        if not 1 <= self.workers <= 64:
            raise ValueError(f"workers must be in [1, 64], got {self.workers}")

        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0
        ):
            raise ValueError(f"seed must be a non-negative integer, got {self.seed!r}")


@dataclass(frozen=True)
class RingConfig:
    """Ring bounds as fractions of the partition radius."""

    name: str
    inner_radius: float = 0.0
    outer_radius: float = 1.0

    def __post_init__(self):
        """Validate ring configuration."""
        if not self.name:
            raise ValueError("Ring name cannot be empty")
        if not 0.0 <= self.inner_radius < self.outer_radius <= 1.0:
            raise ValueError(
                f"Ring '{self.name}' must satisfy 0 <= inner_radius < outer_radius <= 1, "
                f"got [{self.inner_radius}, {self.outer_radius}]"
            )


@dataclass(frozen=True)
class IdealEntry:
    """Ideal coverage and composite weight for one key."""

    ideal: float
    weight: float

    def __post_init__(self):
        """Validate ideal entry."""
        if not 0.0 <= self.ideal <= 100.0:
            raise ValueError(f"ideal must be in [0, 100], got {self.ideal}")
        if not math.isfinite(self.weight):
            raise ValueError(f"weight must be finite, got {self.weight}")


@dataclass(frozen=True)
class RuleModuleConfig:
    """
    Data-driven rule module.

    kind "sector": ideals keyed by main direction name (e.g. "Northeast")
    kind "ring":   ideals keyed by ring name

    Weights are validated when the module is evaluated, so a module with bad
    weights is reported as skipped instead of aborting the whole run.
    """

    name: str
    kind: str
    ideals: Dict[str, IdealEntry] = field(default_factory=dict)
    ring: Optional[str] = None  # sector modules: ring to aggregate (default: first)
    enabled: bool = True

    def __post_init__(self):
        """Validate rule module configuration."""
        if not self.name:
            raise ValueError("Rule module name cannot be empty")
        if self.kind not in RULE_MODULE_KINDS:
            raise ValueError(
                f"Invalid rule module kind: {self.kind}. "
                f"Must be one of {sorted(RULE_MODULE_KINDS)}"
            )
        if not self.ideals:
            raise ValueError(f"Rule module '{self.name}' must define at least one ideal")


@dataclass(frozen=True)
class AdvisorConfig:
    """
    Main configuration for the advisor service.

    This configuration is loaded from YAML and validated at startup.
    Immutable after construction (frozen dataclass).
    """

    # Plan identification
    plan_id: str

    # Geometry
    boundary: List[Tuple[float, float]]
    north_rotation: float = 0.0

    # Sampling
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    rings: List[RingConfig] = field(
        default_factory=lambda: [RingConfig(name="full")]
    )

    # Rule modules
    rule_modules: List[RuleModuleConfig] = field(default_factory=list)

    def __post_init__(self):
        """Validate advisor configuration."""
        if not self.plan_id:
            raise ValueError("plan_id cannot be empty")

        if len(self.boundary) < 3:
            raise ValueError(
                f"boundary must have at least 3 points, got {len(self.boundary)}"
            )
        for point in self.boundary:
            if len(point) != 2 or not all(math.isfinite(v) for v in point):
                raise ValueError(f"boundary points must be finite (x, y) pairs, got {point}")

        if not math.isfinite(self.north_rotation):
            raise ValueError(f"north_rotation must be finite, got {self.north_rotation}")

        if not self.rings:
            raise ValueError("At least one ring is required")
        ring_names = [ring.name for ring in self.rings]
        if len(set(ring_names)) != len(ring_names):
            raise ValueError(f"Ring names must be unique, got {ring_names}")

        module_names = [module.name for module in self.rule_modules]
        if len(set(module_names)) != len(module_names):
            raise ValueError(f"Rule module names must be unique, got {module_names}")

        for module in self.rule_modules:
            if module.kind == "ring":
                unknown = set(module.ideals) - set(ring_names)
                if unknown:
                    raise ValueError(
                        f"Rule module '{module.name}' references unknown rings: {sorted(unknown)}"
                    )
            else:
                unknown = set(module.ideals) - set(SECTOR_NAMES)
                if unknown:
                    raise ValueError(
                        f"Rule module '{module.name}' has unknown sectors: {sorted(unknown)}. "
                        f"Must be one of {list(SECTOR_NAMES)}"
                    )
                if module.ring is not None and module.ring not in ring_names:
                    raise ValueError(
                        f"Rule module '{module.name}' references unknown ring: {module.ring}"
                    )

    @classmethod
    def from_dict(cls, data: dict) -> "AdvisorConfig":
        """
        Build configuration from a plain dict (parsed YAML).

        Raises:
            ValueError: If required keys are missing or values invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

        try:
            sampling = SamplingConfig(**data.get("sampling", {}))

            rings_data = data.get("rings") or [{"name": "full"}]
            rings = [
                RingConfig(
                    name=r["name"],
                    inner_radius=float(r.get("inner_radius", 0.0)),
                    outer_radius=float(r.get("outer_radius", 1.0)),
                )
                for r in rings_data
            ]

            modules_data = data.get("rule_modules", [])
            rule_modules = [
                RuleModuleConfig(
                    name=m["name"],
                    kind=m["kind"],
                    ideals={
                        str(key): IdealEntry(
                            ideal=float(entry["ideal"]),
                            weight=float(entry["weight"]),
                        )
                        for key, entry in m.get("ideals", {}).items()
                    },
                    ring=m.get("ring"),
                    enabled=m.get("enabled", True),
                )
                for m in modules_data
            ]

            boundary = [(float(x), float(y)) for x, y in data["boundary"]]

            return cls(
                plan_id=str(data["plan_id"]),
                boundary=boundary,
                north_rotation=float(data.get("north_rotation", 0.0)),
                sampling=sampling,
                rings=rings,
                rule_modules=rule_modules,
            )
        except KeyError as e:
            raise ValueError(f"Missing required configuration key: {e}") from e
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "AdvisorConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            plan_id: "villa_a"
            boundary: [[0, 0], [120, 0], [120, 80], [0, 80]]
            north_rotation: 12.5

            sampling:
              sample_count: 2000
              seed: 42
              mode: "area_uniform"
              workers: 4

            rings:
              - name: "core"
                inner_radius: 0.0
                outer_radius: 0.3
              - name: "outer"
                inner_radius: 0.3
                outer_radius: 1.0

            rule_modules:
              - name: "sector_ideals"
                kind: "sector"
                ring: "outer"
                ideals:
                  North: {ideal: 100, weight: 0.125}
                  ...

        Raises:
            FileNotFoundError: If yaml_path does not exist
            ValueError: If the content is not valid configuration
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data)
