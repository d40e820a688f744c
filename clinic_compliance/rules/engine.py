"""Core compliance evaluation engine."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from clinic_compliance.mapping import BILLING_FIELDS, DOCTOR_FIELDS, RecordMapper
from clinic_compliance.mapping.models import BillingRecord, DoctorRecord
from clinic_compliance.utils import to_naive_utc

from . import ruleset
from .index import CrossReferenceIndex
from .models import ComplianceResult, ComplianceSummaries, RuleContext, Violation
from .registry import default_registry
from .summaries import average_amount, payer_distribution, risk_score, violation_ranking
from .thresholds import ComplianceConfig

logger = logging.getLogger(__name__)


class ComplianceInputError(TypeError):
    """Raised when a dataset argument is not a sequence of rows."""


def run_compliance(
    billing_rows: Iterable[Mapping[str, Any]] | None,
    doctor_rows: Iterable[Mapping[str, Any]] | None,
    *,
    now: datetime | None = None,
    config: ComplianceConfig | None = None,
    mapper: RecordMapper | None = None,
) -> ComplianceResult:
    """Evaluate billing rows against the doctor roster and score the result.

    Args:
        billing_rows: Raw outpatient billing rows, as produced by a CSV parser
        doctor_rows: Raw doctor roster rows
        now: Evaluation timestamp for future-date checks; defaults to the
             current UTC time
        config: Scoring weights, risk bands and disabled rules
        mapper: Field mapper, e.g. one carrying client-specific header aliases

    Returns:
        ComplianceResult with one analysis-view record per billing row

    Raises:
        ComplianceInputError: If either dataset is not a sequence of rows
    """
    billing = _as_rows(billing_rows, "billing_rows")
    roster = _as_rows(doctor_rows, "doctor_rows")
    config = config or ComplianceConfig()
    mapper = mapper or RecordMapper()
    now = to_naive_utc(now) if now is not None else _default_now()

    # ensure default registry is populated
    ruleset.register_default_rules(default_registry)
    rules = default_registry.active_rules(config.disabled_rules)

    missing_columns: dict[str, list[str]] = {}
    for dataset, rows, schema in (
        ("op_billing", billing, BILLING_FIELDS),
        ("doctor_roster", roster, DOCTOR_FIELDS),
    ):
        missing = mapper.missing_columns(rows, schema)
        if missing:
            missing_columns[dataset] = missing
            logger.warning(f"{dataset} upload is missing required columns: {', '.join(missing)}")

    index = CrossReferenceIndex.from_doctors(mapper.doctor(row) for row in roster)

    violations: list[Violation] = []
    analysis_view: list[BillingRecord] = []
    for row_number, row in enumerate(billing, start=1):
        record = mapper.billing(row, row_number)

        # Phase 1: resolve cross-references once for the row
        index.observe_visit(record)
        doctor = index.lookup_doctor(record.doctor_id)
        context = RuleContext(record=record, doctor=doctor, index=index, now=now)

        # Phase 2: every rule sees the same resolved context
        for definition in rules:
            violation = definition(context)
            if violation is not None:
                violations.append(violation)

        analysis_view.append(_analysis_record(record, doctor))

    score = risk_score(violations, config)
    result = ComplianceResult(
        violations=violations,
        risk_score=score,
        risk_level=config.risk_level(score),
        analysis_view=analysis_view,
        summaries=ComplianceSummaries(
            average_amount=average_amount(analysis_view),
            payer_distribution=payer_distribution(analysis_view),
            violation_ranking=violation_ranking(violations),
            missing_columns=missing_columns,
        ),
    )

    logger.info(
        f"Compliance run: {len(billing)} billing rows, {len(roster)} roster rows, "
        f"{len(violations)} violations, risk score {score} ({result.risk_level})"
    )
    return result


def _analysis_record(record: BillingRecord, doctor: DoctorRecord | None) -> BillingRecord:
    """Joined display record: roster name wins, then the row's, then a default."""
    n = record.row_number
    return replace(
        record,
        patient_name=record.patient_name or f"Patient {n}",
        doctor_name=(doctor.doctor_name if doctor else None)
        or record.doctor_name
        or f"Doctor {n}",
        doctor_specialization=doctor.specialization if doctor else None,
    )


def _as_rows(rows: Any, name: str) -> list[Any]:
    if rows is None:
        return []
    if isinstance(rows, (str, bytes, Mapping)):
        raise ComplianceInputError(f"{name} must be a sequence of rows, got {type(rows).__name__}")
    try:
        return list(rows)
    except TypeError as e:
        raise ComplianceInputError(
            f"{name} must be a sequence of rows, got {type(rows).__name__}"
        ) from e


def _default_now() -> datetime:
    return to_naive_utc(datetime.now(timezone.utc))
