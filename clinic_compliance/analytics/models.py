"""Result types for the analytics helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class MonthlyPoint:
    """Summed value for one ``YYYY-MM`` bucket."""

    month: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"month": self.month, "value": self.value}


@dataclass(frozen=True)
class ForecastPoint:
    date: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "value": self.value}


@dataclass(frozen=True)
class Anomaly:
    """A flagged point, with its signed distance from the mean in std devs."""

    index: int
    value: float
    z_score: float

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "value": self.value, "z_score": self.z_score}


@dataclass(frozen=True)
class GroupTotal:
    key: str
    total: float
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "total": self.total, "count": self.count}


class InsightCategory(str, Enum):
    REVENUE = "revenue"
    PERFORMANCE = "performance"
    COMPLIANCE = "compliance"
    DATA_QUALITY = "data_quality"
    ANOMALY = "anomaly"


class InsightPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Insight:
    """A one-line dashboard observation with the numbers behind it."""

    id: str
    title: str
    description: str
    category: InsightCategory
    priority: InsightPriority
    metrics: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "priority": self.priority.value,
            "metrics": dict(self.metrics),
        }
