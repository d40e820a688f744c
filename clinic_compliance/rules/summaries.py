"""Risk scoring and summary aggregates for a compliance run.

Every function here depends only on its arguments, never on the order the
violations were produced in.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from clinic_compliance.mapping.models import BillingRecord

from .models import RankingEntry, Severity, Violation
from .thresholds import ComplianceConfig

UNKNOWN_PAYER = "Unknown"


def risk_score(
    violations: Iterable[Violation], config: ComplianceConfig | None = None
) -> float:
    """Severity-weighted violation count. 0 means no violations."""
    config = config or ComplianceConfig()
    counts = Counter(v.severity for v in violations)
    # Summing per severity tier keeps float weights order-independent
    return sum(counts[severity] * config.weight(severity) for severity in Severity)


def average_amount(records: Sequence[BillingRecord]) -> float:
    """Mean Total_Amount over rows with a readable amount; 0.0 when none."""
    amounts = [
        r.total_amount
        for r in records
        if r.total_amount is not None and math.isfinite(r.total_amount)
    ]
    if not amounts:
        return 0.0
    return math.fsum(amounts) / len(amounts)


def payer_distribution(records: Iterable[BillingRecord]) -> dict[str, int]:
    """Row count per payer type, with unresolved payers under ``Unknown``."""
    counts: dict[str, int] = {}
    for record in records:
        payer = record.payer_type or UNKNOWN_PAYER
        counts[payer] = counts.get(payer, 0) + 1
    return counts


def violation_ranking(violations: Iterable[Violation]) -> list[RankingEntry]:
    """Violations counted per (rule, severity), most frequent first.

    Ties are ordered by numeric rule id (R2 before R10).
    """
    counts = Counter((v.rule, v.severity) for v in violations)
    entries = [
        RankingEntry(rule=rule_id, severity=severity, count=count)
        for (rule_id, severity), count in counts.items()
    ]
    entries.sort(key=lambda e: (-e.count, rule_sort_key(e.rule), e.severity.value))
    return entries


def rule_sort_key(rule_id: str) -> tuple[float, str]:
    """Sort ``R<n>`` ids numerically; anything else sorts after, by name."""
    digits = rule_id[1:]
    if rule_id[:1] == "R" and digits.isdigit():
        return (int(digits), "")
    return (math.inf, rule_id)
