"""
Analytics Layer
===============

Bounded Context: Statistics and scoring over coverage numbers.

Responsibilities:
- Mean / population standard deviation
- Deviation bands and balance scores
- Weighted composite indices
- Directional roll-ups (sector averages, opposite-axis balance)

Design Philosophy:
- Pure functions, raw numbers in, numbers or enums out
- No display strings
"""

from vastu_zone.analytics.scoring import (
    WEIGHT_TOLERANCE,
    Band,
    DominanceLevel,
    BalanceScore,
    WeightedScore,
    mean,
    standard_deviation,
    classify_deviation,
    balance_score,
    weighted_composite,
    dominance_score,
    classify_dominance,
    radial_uniformity,
    opposite_balance,
)
from vastu_zone.analytics.directional import AxisBalance, sector_averages, axis_balances

__all__ = [
    "WEIGHT_TOLERANCE",
    "Band",
    "DominanceLevel",
    "BalanceScore",
    "WeightedScore",
    "mean",
    "standard_deviation",
    "classify_deviation",
    "balance_score",
    "weighted_composite",
    "dominance_score",
    "classify_dominance",
    "radial_uniformity",
    "opposite_balance",
    "AxisBalance",
    "sector_averages",
    "axis_balances",
]
