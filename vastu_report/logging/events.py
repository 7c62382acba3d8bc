"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Dotted naming: <subject>.<action>, errors as error.<subject>

    subject: analysis, partition, coverage, config, rule_module, report
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - analysis.*: Coverage analysis lifecycle
    - partition.*: Zone partitioning
    - coverage.*: Sampling results
    - config.*: Configuration loading
    - rule_module.*: Rule module evaluation
    - error.*: Error conditions
    """

    # ========== Analysis Events ==========
    ANALYSIS_STARTED = "analysis.started"
    """Coverage analysis started."""

    ANALYSIS_COMPLETED = "analysis.completed"
    """Coverage analysis finished for all rings and zones."""

    ANALYSIS_CANCELLED = "analysis.cancelled"
    """Coverage analysis cancelled before completion."""

    # ========== Geometry Events ==========
    PARTITION_GENERATED = "partition.generated"
    """32-zone partition built from the boundary."""

    COVERAGE_SAMPLED = "coverage.sampled"
    """Coverage sampled for one ring."""

    # ========== Advisor Events ==========
    CONFIG_LOADED = "config.loaded"
    """Advisor configuration loaded and validated."""

    RULE_MODULE_REGISTERED = "rule_module.registered"
    """Rule module added to the registry."""

    RULE_MODULE_EVALUATED = "rule_module.evaluated"
    """Rule module evaluated against a coverage result."""

    REPORT_WRITTEN = "report.written"
    """Advisory report serialized to disk."""

    # ========== Error Events ==========
    BOUNDARY_ERROR = "error.boundary"
    """Boundary rejected (too few or non-finite points)."""

    GEOMETRY_ERROR = "error.geometry"
    """Degenerate geometry (zero-size bounding box)."""

    WEIGHT_ERROR = "error.weight"
    """Composite weights rejected."""

    RULE_MODULE_ERROR = "error.rule_module"
    """Rule module failed and was skipped."""

