"""
Structured JSON Logger
======================

Bounded Context: Observability Infrastructure

One JSON object per log record, built by JSONFormatter from the fields the
StructuredLogger attaches to the stdlib LogRecord.

Design:
- Events are LogEvent members, never free strings
- bind() returns a logger sharing the same handler with fixed context
  (e.g. plan_id) merged into every record's metadata
- Timestamp comes from the LogRecord, so it reflects emission time
- Thread-safe through the logging module

Example:
    >>> log = create_logger("analysis").bind(plan_id="villa_a")
    >>> log.info(LogEvent.COVERAGE_SAMPLED, "Ring sampled",
    ...          metadata={'ring': 'outer', 'average': 87.5})

Output:
    {"timestamp": "2025-10-24T15:30:45.123456+00:00", "level": "INFO",
     "component": "analysis", "event": "coverage.sampled",
     "message": "Ring sampled",
     "metadata": {"plan_id": "villa_a", "ring": "outer", "average": 87.5}}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from .events import LogEvent

_FIELDS = "vastu_structured"


class JSONFormatter(logging.Formatter):
    """Render a StructuredLogger record as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        fields = getattr(record, _FIELDS, None)
        if fields is None:
            return super().format(record)

        entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'component': fields['component'],
            'event': fields['event'],
            'message': record.getMessage(),
        }
        if fields['metadata']:
            entry['metadata'] = fields['metadata']
        if fields['exception'] is not None:
            entry['exception'] = fields['exception']
        return json.dumps(entry, default=str)


class StructuredLogger:
    """
    JSON structured logger for one component.

    Attributes:
        component: Component name ("analysis", "advisor", ...)
        logger: Underlying stdlib logger (vastu.<component> by default)
        context: Metadata merged into every record
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        self.component = component
        self.logger = logging.getLogger(logger_name or f"vastu.{component}")
        self.logger.setLevel(level)
        self.context = dict(context or {})

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def bind(self, **context: Any) -> "StructuredLogger":
        """Same underlying logger, with extra fixed metadata."""
        return StructuredLogger(
            self.component,
            level=self.logger.level,
            logger_name=self.logger.name,
            context={**self.context, **context},
        )

    def log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return

        fields = {
            'component': self.component,
            'event': LogEvent(event).value,
            'metadata': {**self.context, **(metadata or {})},
            'exception': None,
        }
        if exc_info is not None:
            fields['exception'] = {'type': type(exc_info).__name__, 'message': str(exc_info)}

        self.logger.log(level, message, extra={_FIELDS: fields})

    def debug(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.INFO, event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        self.log(logging.WARNING, event, message, metadata, exc_info)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        """
        Log ERROR with the exception type and message attached.

        Example:
            >>> try:
            ...     module.evaluate(coverage)
            ... except InvalidWeightError as e:
            ...     log.error(LogEvent.WEIGHT_ERROR, "Rule module skipped",
            ...               metadata={'module': module.name}, exc_info=e)
        """
        self.log(logging.ERROR, event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        """Change the level of the shared underlying logger."""
        self.logger.setLevel(level)


def create_logger(component: str, level: int = logging.INFO) -> StructuredLogger:
    """StructuredLogger for a component, logger name vastu.<component>."""
    return StructuredLogger(component=component, level=level)
