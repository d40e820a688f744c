"""Narrative dashboard insights derived from a billing upload and roster.

Each insight is a short sentence plus the metrics it was built from. The
set is ordered by priority, then by category (revenue first).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

from clinic_compliance.mapping import BillingRecord, DoctorRecord, RecordMapper

from .aggregations import top_n_by_sum
from .models import Insight, InsightCategory, InsightPriority

logger = logging.getLogger(__name__)

AGE_BANDS: list[tuple[str, int | None]] = [
    ("0-18", 18),
    ("19-35", 35),
    ("36-50", 50),
    ("51-65", 65),
    ("65+", None),
]

PRIORITY_ORDER = {
    InsightPriority.HIGH: 3,
    InsightPriority.MEDIUM: 2,
    InsightPriority.LOW: 1,
}

CATEGORY_ORDER = {
    InsightCategory.REVENUE: 4,
    InsightCategory.PERFORMANCE: 3,
    InsightCategory.COMPLIANCE: 2,
    InsightCategory.DATA_QUALITY: 1,
    InsightCategory.ANOMALY: 0,
}

PENDING_STATUSES = {"pending", "outstanding"}


def generate_insights(
    billing_rows: Sequence[Any] | None,
    doctor_rows: Sequence[Any] | None = None,
    mapper: RecordMapper | None = None,
) -> list[Insight]:
    """Summarize an upload as prioritized insights.

    Rows go through the same field mapping as the compliance run, so header
    aliases and amount parsing behave identically. Unreadable amounts count
    as zero revenue. An empty billing upload gives no insights at all; the
    roster only feeds names and the utilization insight.

    Args:
        billing_rows: Raw billing rows
        doctor_rows: Raw doctor roster rows, optional
        mapper: Field mapper, e.g. one carrying client-specific header aliases

    Returns:
        Insights sorted by priority, then category
    """
    if not billing_rows:
        return []

    mapper = mapper or RecordMapper()
    records = [mapper.billing(row, idx) for idx, row in enumerate(billing_rows, start=1)]
    roster = [mapper.doctor(row) for row in doctor_rows or []]
    rows = [record.to_dict() for record in records]

    candidates = (
        _data_volume(records),
        _top_payer(rows, records),
        _top_doctor(rows, records, roster),
        _top_procedure(rows),
        _age_distribution(records),
        _payment_rate(records),
        _consent_rate(records),
        _missing_patient_names(records),
        _date_range(records),
        _doctor_utilization(records, roster),
    )
    insights = [insight for insight in candidates if insight is not None]

    insights.sort(
        key=lambda i: (-PRIORITY_ORDER[i.priority], -CATEGORY_ORDER[i.category])
    )
    logger.debug(f"Generated {len(insights)} insight(s) from {len(records)} billing rows")
    return insights


def _data_volume(records: list[BillingRecord]) -> Insight:
    revenue = _revenue(records)
    return Insight(
        id="data_volume",
        title="Data Volume Analysis",
        description=(
            f"Successfully processed {len(records)} billing records "
            f"with total revenue of {_rupees(revenue)}"
        ),
        category=InsightCategory.DATA_QUALITY,
        priority=InsightPriority.HIGH,
        metrics={"records": len(records), "total_revenue": revenue},
    )


def _top_payer(rows: list[dict[str, Any]], records: list[BillingRecord]) -> Insight | None:
    top = top_n_by_sum(rows, "Payer_Type", "Total_Amount", n=1)
    if not top:
        return None
    revenue = _revenue(records)
    share = top[0].total / revenue * 100 if revenue else 0.0
    return Insight(
        id="top_payer",
        title="Top Revenue Source",
        description=(
            f"{top[0].key} generates the highest revenue at {_rupees(top[0].total)} "
            f"({share:.1f}% of total)"
        ),
        category=InsightCategory.REVENUE,
        priority=InsightPriority.HIGH,
        metrics={"payer": top[0].key, "revenue": top[0].total, "share_pct": share},
    )


def _top_procedure(rows: list[dict[str, Any]]) -> Insight | None:
    top = top_n_by_sum(rows, "Procedure_Code", "Total_Amount", n=1)
    if not top:
        return None
    return Insight(
        id="top_procedure",
        title="Most Profitable Procedure",
        description=(
            f"{top[0].key} generates {_rupees(top[0].total)} "
            f"from {top[0].count} procedures"
        ),
        category=InsightCategory.REVENUE,
        priority=InsightPriority.MEDIUM,
        metrics={"procedure": top[0].key, "revenue": top[0].total, "count": top[0].count},
    )


def _top_doctor(
    rows: list[dict[str, Any]],
    records: list[BillingRecord],
    roster: list[DoctorRecord],
) -> Insight | None:
    with_doctor = [row for row in rows if row["Doctor_ID"]]
    top = top_n_by_sum(with_doctor, "Doctor_ID", "Total_Amount", n=1)
    if not top:
        return None

    doctor_id = top[0].key
    visits = [r for r in records if r.doctor_id == doctor_id]
    patients = {r.patient_id for r in visits if r.patient_id}
    name = _doctor_name(doctor_id, visits, roster)
    return Insight(
        id="top_doctor",
        title="Top Performing Doctor",
        description=(
            f"{name} leads with {_rupees(top[0].total)} revenue "
            f"from {top[0].count} visits"
        ),
        category=InsightCategory.PERFORMANCE,
        priority=InsightPriority.HIGH,
        metrics={
            "doctor_id": doctor_id,
            "doctor_name": name,
            "revenue": top[0].total,
            "visits": top[0].count,
            "patients": len(patients),
        },
    )


def _age_distribution(records: list[BillingRecord]) -> Insight | None:
    counts = {label: 0 for label, _ in AGE_BANDS}
    for record in records:
        if record.age is None:
            continue
        for label, upper in AGE_BANDS:
            if upper is None or record.age <= upper:
                counts[label] += 1
                break

    # max() keeps the first band on ties
    band = max(counts, key=lambda label: counts[label])
    if counts[band] == 0:
        return None
    return Insight(
        id="age_distribution",
        title="Patient Demographics",
        description=(
            f"{band} age group represents the largest patient segment "
            f"with {counts[band]} patients"
        ),
        category=InsightCategory.DATA_QUALITY,
        priority=InsightPriority.MEDIUM,
        metrics={"band": band, "count": counts[band], "bands": counts},
    )


def _payment_rate(records: list[BillingRecord]) -> Insight | None:
    statuses = [(r.payment_status or "").lower() for r in records]
    paid = statuses.count("paid")
    pending = sum(1 for s in statuses if s in PENDING_STATUSES)
    rate = paid / len(records) * 100
    if rate <= 0:
        return None
    return Insight(
        id="payment_rate",
        title="Payment Performance",
        description=(
            f"{rate:.1f}% payment completion rate with {paid} paid "
            f"and {pending} pending bills"
        ),
        category=InsightCategory.PERFORMANCE,
        priority=InsightPriority.HIGH,
        metrics={"rate_pct": rate, "paid": paid, "pending": pending},
    )


def _consent_rate(records: list[BillingRecord]) -> Insight | None:
    flagged = [r.consent_flag for r in records if r.consent_flag is not None]
    consented = flagged.count("Y")
    if not consented:
        return None
    rate = consented / len(flagged) * 100
    return Insight(
        id="consent_rate",
        title="Consent Compliance",
        description=(
            f"{rate:.1f}% consent rate with {consented} out of {len(flagged)} "
            "records having consent"
        ),
        category=InsightCategory.COMPLIANCE,
        priority=InsightPriority.HIGH,
        metrics={"rate_pct": rate, "consented": consented, "with_flag": len(flagged)},
    )


def _missing_patient_names(records: list[BillingRecord]) -> Insight | None:
    missing = sum(1 for r in records if not r.patient_name)
    if not missing:
        return None
    return Insight(
        id="data_quality",
        title="Data Quality Alert",
        description=f"{missing} records are missing patient names, affecting data completeness",
        category=InsightCategory.DATA_QUALITY,
        priority=InsightPriority.MEDIUM,
        metrics={"missing_patient_names": missing},
    )


def _date_range(records: list[BillingRecord]) -> Insight | None:
    dates = [r.visit_date for r in records if r.visit_date is not None]
    if not dates:
        return None
    first, last = min(dates), max(dates)
    days = math.ceil((last - first).total_seconds() / 86400)
    return Insight(
        id="date_range",
        title="Data Coverage",
        description=(
            f"Data spans {days} days from {first.date().isoformat()} "
            f"to {last.date().isoformat()}"
        ),
        category=InsightCategory.DATA_QUALITY,
        priority=InsightPriority.LOW,
        metrics={
            "days": days,
            "start": first.date().isoformat(),
            "end": last.date().isoformat(),
        },
    )


def _doctor_utilization(
    records: list[BillingRecord], roster: list[DoctorRecord]
) -> Insight | None:
    if not roster:
        return None
    active = len({r.doctor_id for r in records if r.doctor_id})
    rate = active / len(roster) * 100
    return Insight(
        id="doctor_utilization",
        title="Doctor Utilization",
        description=(
            f"{active} out of {len(roster)} doctors are active "
            f"({rate:.1f}% utilization rate)"
        ),
        category=InsightCategory.PERFORMANCE,
        priority=InsightPriority.MEDIUM,
        metrics={"active": active, "roster": len(roster), "rate_pct": rate},
    )


def _doctor_name(
    doctor_id: str, visits: list[BillingRecord], roster: list[DoctorRecord]
) -> str:
    # Last roster entry wins, matching the compliance index
    for doctor in reversed(roster):
        if doctor.doctor_id == doctor_id and doctor.doctor_name:
            return doctor.doctor_name
    for record in visits:
        if record.doctor_name:
            return record.doctor_name
    return f"Doctor {doctor_id}"


def _revenue(records: list[BillingRecord]) -> float:
    return math.fsum(r.total_amount for r in records if r.total_amount is not None)


def _rupees(amount: float) -> str:
    return f"₹{amount:,.2f}"
