"""
Rule Modules - data-driven evaluation of a coverage result.

A rule module turns a PlanCoverage into per-key balance scores and one
weighted composite. Ideal tables and weights always come from configuration;
no domain table lives in code.

Contract:
- name: unique module name
- evaluate(coverage) -> RuleModuleResult
- Kernel errors (e.g. InvalidWeightError) propagate to the caller, which
  decides whether to skip the module
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, runtime_checkable

from vastu_zone.analysis import PlanCoverage
from vastu_zone.analytics import (
    BalanceScore,
    WeightedScore,
    balance_score,
    radial_uniformity,
    weighted_composite,
)
from vastu_advisor.config import IdealEntry, RuleModuleConfig


@dataclass(frozen=True)
class KeyScore:
    """Balance score for one key (sector or ring)."""

    key: str
    actual: float
    ideal: float
    weight: float
    score: BalanceScore


@dataclass(frozen=True)
class RuleModuleResult:
    """
    Outcome of one module evaluation.

    Attributes:
        name: Module name
        composite: Weighted composite of the normalized values
        scores: One KeyScore per configured ideal
        metrics: Extra module-level numbers
    """

    name: str
    composite: float
    scores: List[KeyScore] = field(default_factory=list)
    metrics: Dict[str, float] = field(default_factory=dict)


@runtime_checkable
class RuleModule(Protocol):
    """Anything with a name and an evaluate(coverage) method."""

    name: str

    def evaluate(self, coverage: PlanCoverage) -> RuleModuleResult:
        ...


def _score_keys(
    actuals: Mapping[str, float],
    ideals: Mapping[str, IdealEntry],
) -> List[KeyScore]:
    scores = []
    for key, entry in ideals.items():
        actual = actuals.get(key, 0.0)
        scores.append(KeyScore(
            key=key,
            actual=actual,
            ideal=entry.ideal,
            weight=entry.weight,
            score=balance_score(actual, entry.ideal),
        ))
    return scores


def _composite(scores: List[KeyScore]) -> float:
    return weighted_composite(
        WeightedScore(s.score.normalized_value, s.weight) for s in scores
    )


class SectorIdealModule:
    """
    Ideal coverage per main direction.

    Actuals are sector averages of one ring (default: the first analysed ring).
    Metrics include the mean opposite-axis balance.
    """

    def __init__(self, name: str, ideals: Mapping[str, IdealEntry], ring: Optional[str] = None):
        self.name = name
        self.ideals = dict(ideals)
        self.ring = ring

    def evaluate(self, coverage: PlanCoverage) -> RuleModuleResult:
        actuals = coverage.sector_coverage(self.ring)
        scores = _score_keys(actuals, self.ideals)
        balances = coverage.axis_balances(self.ring)

        metrics = {}
        if balances:
            metrics['axis_balance'] = sum(b.balance for b in balances) / len(balances)

        return RuleModuleResult(
            name=self.name,
            composite=_composite(scores),
            scores=scores,
            metrics=metrics,
        )


class RingIdealModule:
    """
    Ideal average coverage per ring.

    Metrics include the radial uniformity of each scored ring.
    """

    def __init__(self, name: str, ideals: Mapping[str, IdealEntry]):
        self.name = name
        self.ideals = dict(ideals)

    def evaluate(self, coverage: PlanCoverage) -> RuleModuleResult:
        actuals = {}
        metrics = {}
        for key in self.ideals:
            ring_coverage = coverage.ring(key)
            if ring_coverage is None:
                continue
            actuals[key] = ring_coverage.average
            metrics[f"{key}.uniformity"] = ring_coverage.uniformity

        scores = _score_keys(actuals, self.ideals)
        metrics['uniformity'] = radial_uniformity([s.actual for s in scores])

        return RuleModuleResult(
            name=self.name,
            composite=_composite(scores),
            scores=scores,
            metrics=metrics,
        )


def build_rule_module(config: RuleModuleConfig) -> RuleModule:
    """
    Create a rule module from configuration.

    Raises:
        ValueError: If the module kind is unknown
    """
    if config.kind == "sector":
        return SectorIdealModule(config.name, config.ideals, ring=config.ring)
    elif config.kind == "ring":
        return RingIdealModule(config.name, config.ideals)
    else:
        raise ValueError(f"Unknown rule module kind: {config.kind}")
