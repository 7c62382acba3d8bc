"""
Structured Logging
==================

Bounded Context: Observability

JSON-structured logging for the analysis pipeline and the advisor service.

Design:
- One JSON line per record (JSONFormatter)
- Typed events (LogEvent)
- bind() for fixed per-run context such as plan_id

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    JSONFormatter: Renders StructuredLogger records
    create_logger: Factory function
"""

from .events import LogEvent
from .structured import StructuredLogger, JSONFormatter, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'JSONFormatter',
    'create_logger',
]
