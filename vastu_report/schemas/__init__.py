"""
Vastu Report Schemas
====================

Bounded Context: Data Structures

Immutable, typed data structures for analysis reports.

Design:
- Frozen dataclasses (immutability)
- Type hints for all fields
- to_dict() for JSON serialization
- from_dict() for deserialization
- Schema versioning for evolution

Public API
----------
Common Types:
    PlanExtent: Plan bounding box with validation
    Timestamp: ISO 8601 timestamp wrapper

Coverage Types:
    ZoneCoverageRecord: One zone's coverage
    RingCoverageRecord: One ring's zone coverages

Report Types:
    ModuleStatus: Enum (EVALUATED, SKIPPED)
    ScoreRecord: Measured value vs ideal
    RuleModuleRecord: One rule module outcome
    AdvisoryReport: Complete report
"""

from .common import PlanExtent, Timestamp
from .coverage import ZoneCoverageRecord, RingCoverageRecord
from .report import (
    SCHEMA_VERSION,
    ModuleStatus,
    ScoreRecord,
    RuleModuleRecord,
    AdvisoryReport,
)

__all__ = [
    # Common types
    'PlanExtent',
    'Timestamp',
    # Coverage types
    'ZoneCoverageRecord',
    'RingCoverageRecord',
    # Report types
    'SCHEMA_VERSION',
    'ModuleStatus',
    'ScoreRecord',
    'RuleModuleRecord',
    'AdvisoryReport',
]
