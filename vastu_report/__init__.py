"""
Vastu Report Package
====================

Bounded Context: Report serialization and observability

Serializable report records for the advisor and structured JSON logging
shared by the kernel pipeline and the advisor service.

Architecture:
- schemas/: Immutable data structures with to_dict()/from_dict()
- logging/: Structured JSON logging for observability

Design Philosophy:
- Plain fields only: this package never imports the kernel, so the kernel
  can log through it without import cycles
- Immutability: frozen dataclasses for report DTOs
- Observability: Structured logs (JSON) for production queries

Public API
----------
Schemas:
    PlanExtent, Timestamp
    ZoneCoverageRecord, RingCoverageRecord
    ModuleStatus, ScoreRecord, RuleModuleRecord, AdvisoryReport

Logging:
    LogEvent, StructuredLogger, create_logger
"""

from .schemas import (
    PlanExtent,
    Timestamp,
    ZoneCoverageRecord,
    RingCoverageRecord,
    SCHEMA_VERSION,
    ModuleStatus,
    ScoreRecord,
    RuleModuleRecord,
    AdvisoryReport,
)
from .logging import LogEvent, StructuredLogger, JSONFormatter, create_logger

__all__ = [
    # Schemas
    'PlanExtent',
    'Timestamp',
    'ZoneCoverageRecord',
    'RingCoverageRecord',
    'SCHEMA_VERSION',
    'ModuleStatus',
    'ScoreRecord',
    'RuleModuleRecord',
    'AdvisoryReport',
    # Logging
    'LogEvent',
    'StructuredLogger',
    'JSONFormatter',
    'create_logger',
]

__version__ = "1.0.0"
