"""Patient identity and demographic rules (R1, R2)."""

from __future__ import annotations

from clinic_compliance.rules.models import RuleContext, Severity, Violation
from clinic_compliance.rules.registry import rule

MIN_AGE = 0
MAX_AGE = 120


@rule("R1", Severity.HIGH, "Patient_ID must exist and be unique per Visit_ID")
def patient_identity_rule(context: RuleContext) -> Violation | None:
    """Flag rows with no Patient_ID, or a Visit_ID already billed to another patient."""
    record = context.record
    if not record.patient_id:
        return patient_identity_rule.violation(context, "Patient_ID is missing")

    expected = context.index.conflicting_patient(record)
    if expected is not None:
        return patient_identity_rule.violation(
            context,
            f"Patient_ID must be unique per Visit_ID {record.visit_id}. "
            f"Found {record.patient_id} but expected {expected}",
        )
    return None


@rule("R2", Severity.HIGH, "Age must be between 0 and 120")
def age_range_rule(context: RuleContext) -> Violation | None:
    """Flag missing, non-numeric or out-of-range ages."""
    age = context.record.age
    if age is not None and MIN_AGE <= age <= MAX_AGE:
        return None
    shown = context.record.raw_age if context.record.raw_age is not None else "N/A"
    return age_range_rule.violation(context, f"Invalid Age: {shown}")
