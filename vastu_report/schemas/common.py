"""
Common Schema Types
===================

Bounded Context: Shared Data Structures

Value types shared by the coverage records and the advisory report.

Types:
- PlanExtent: Axis-aligned plan extent in drawing units
- Timestamp: UTC ISO 8601 instant, validated on construction
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

_EXTENT_FIELDS = ('min_x', 'min_y', 'width', 'height')


@dataclass(frozen=True)
class PlanExtent:
    """
    Axis-aligned plan extent (drawing units, y grows downward, North up).

    Invariants:
        - all fields finite
        - width > 0 and height > 0 (a flat plan cannot be partitioned)

    Example:
        >>> extent = PlanExtent(min_x=0, min_y=0, width=120, height=80)
        >>> extent.center
        (60.0, 40.0)
    """
    min_x: float
    min_y: float
    width: float
    height: float

    def __post_init__(self):
        for name in _EXTENT_FIELDS:
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"PlanExtent {name} must be finite, got {getattr(self, name)}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"PlanExtent must have positive size, got {self.width} x {self.height}"
            )

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    @property
    def center_x(self) -> float:
        return self.min_x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.min_y + self.height / 2

    @property
    def center(self):
        return (self.center_x, self.center_y)

    def contains(self, x: float, y: float) -> bool:
        """Closed-box containment."""
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in _EXTENT_FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlanExtent':
        """
        Raises:
            ValueError: If a field is missing, non-numeric or out of range
        """
        missing = [name for name in _EXTENT_FIELDS if name not in data]
        if missing:
            raise ValueError(f"Missing required PlanExtent fields: {missing}")
        try:
            return cls(**{name: float(data[name]) for name in _EXTENT_FIELDS})
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid PlanExtent data: {e}")


@dataclass(frozen=True)
class Timestamp:
    """
    ISO 8601 instant. Always timezone-aware.

    Example:
        >>> Timestamp.from_datetime(datetime(2025, 1, 2, tzinfo=timezone.utc)).value
        '2025-01-02T00:00:00+00:00'
    """
    value: str

    def __post_init__(self):
        try:
            parsed = datetime.fromisoformat(self.value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid ISO timestamp: {self.value!r}") from e
        if parsed.tzinfo is None:
            raise ValueError(f"Timestamp must carry a UTC offset: {self.value!r}")

    @classmethod
    def now(cls) -> 'Timestamp':
        return cls.from_datetime(datetime.now(timezone.utc))

    @classmethod
    def from_datetime(cls, dt: datetime) -> 'Timestamp':
        """Naive datetimes are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(value=dt.isoformat())

    def to_datetime(self) -> datetime:
        return datetime.fromisoformat(self.value)

    def to_dict(self) -> str:
        """JSON form is the ISO string itself."""
        return self.value
