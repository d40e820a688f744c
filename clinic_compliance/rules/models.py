"""Data models for the compliance rules engine."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

from clinic_compliance.mapping.models import BillingRecord, DoctorRecord

if TYPE_CHECKING:
    from .index import CrossReferenceIndex

Dataset = Literal["op_billing", "doctor_roster"]


class Severity(str, Enum):
    """Violation severity tier, fixed by rule identity."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class Violation:
    """A single rule failure on one analysis-view row."""

    dataset: Dataset
    row: int
    rule: str
    severity: Severity
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "dataset": self.dataset,
            "row": self.row,
            "rule": self.rule,
            "severity": self.severity.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class RuleContext:
    """Inputs required to evaluate the rules for one billing row.

    ``doctor`` is resolved once per row before any rule runs, so rules that
    depend on a roster match only check it instead of repeating the lookup.
    """

    record: BillingRecord
    doctor: DoctorRecord | None
    index: CrossReferenceIndex
    now: datetime

    @property
    def row(self) -> int:
        return self.record.row_number


RuleCheck = Callable[[RuleContext], "Violation | None"]


@dataclass(frozen=True)
class RuleDefinition:
    """Catalog entry binding a rule id and severity to its check."""

    rule_id: str
    severity: Severity
    description: str
    check: RuleCheck

    def __call__(self, context: RuleContext) -> Violation | None:
        return self.check(context)

    def violation(self, context: RuleContext, reason: str) -> Violation:
        return Violation(
            dataset="op_billing",
            row=context.row,
            rule=self.rule_id,
            severity=self.severity,
            reason=reason,
        )


@dataclass(frozen=True)
class RankingEntry:
    rule: str
    severity: Severity
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"rule": self.rule, "severity": self.severity.value, "count": self.count}


@dataclass
class ComplianceSummaries:
    """Aggregates computed over one compliance run."""

    average_amount: float = 0.0
    payer_distribution: dict[str, int] = field(default_factory=dict)
    violation_ranking: list[RankingEntry] = field(default_factory=list)
    missing_columns: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "average_amount": self.average_amount,
            "payer_distribution": dict(self.payer_distribution),
            "violation_ranking": [entry.to_dict() for entry in self.violation_ranking],
            "missing_columns": {k: list(v) for k, v in self.missing_columns.items()},
        }


@dataclass
class ComplianceResult:
    """Container for all violations, the risk score and run summaries."""

    violations: list[Violation] = field(default_factory=list)
    risk_score: float = 0
    risk_level: str = "LOW"
    analysis_view: list[BillingRecord] = field(default_factory=list)
    summaries: ComplianceSummaries = field(default_factory=ComplianceSummaries)

    def analysis_rows(self) -> list[dict[str, Any]]:
        """Analysis view as plain dicts, for analytics helpers and export."""
        return [record.to_dict() for record in self.analysis_view]

    def to_dict(self) -> dict[str, Any]:
        return {
            "violations": [v.to_dict() for v in self.violations],
            "risk_score": self.risk_score,
            "risk_level": self.risk_level,
            "analysis_view": self.analysis_rows(),
            "summaries": self.summaries.to_dict(),
        }
