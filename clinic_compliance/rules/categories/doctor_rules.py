"""Doctor roster cross-reference rules (R4, R5, R9).

R5 and R9 need a roster match. When the lookup fails only R4 fires, so a
missing doctor is reported once instead of as three contradictory findings.
"""

from __future__ import annotations

import logging

from clinic_compliance.rules.models import RuleContext, Severity, Violation
from clinic_compliance.rules.registry import rule

logger = logging.getLogger(__name__)

# Procedure -> specialization required to perform it
PROCEDURE_SPECIALTY = {
    "OP100": "General Medicine",
    "OP200": "Orthopedics",
    "OP300": "Cardiology",
}


@rule("R4", Severity.HIGH, "Doctor_ID must exist in doctor roster")
def doctor_in_roster_rule(context: RuleContext) -> Violation | None:
    """Flag billing rows whose Doctor_ID has no roster entry."""
    if context.doctor is not None:
        return None
    return doctor_in_roster_rule.violation(
        context,
        f"Doctor_ID not found in roster: {context.record.doctor_id or 'N/A'}",
    )


@rule("R5", Severity.HIGH, "Doctor's License_Expiry must be on or after Visit_Date")
def license_valid_rule(context: RuleContext) -> Violation | None:
    """Flag visits performed after the doctor's license expired."""
    doctor = context.doctor
    visit_date = context.record.visit_date
    if doctor is None or visit_date is None:
        logger.debug(f"R5 skipped for row {context.row}: unresolved doctor or visit date")
        return None

    expiry = doctor.license_expiry
    if expiry is not None and expiry >= visit_date:
        return None
    return license_valid_rule.violation(
        context,
        "License expired before visit: "
        f"License_Expiry={doctor.raw_license_expiry or 'N/A'}, "
        f"Visit_Date={context.record.raw_visit_date}",
    )


@rule("R9", Severity.MEDIUM, "Doctor's specialty must match procedure mapping")
def specialty_match_rule(context: RuleContext) -> Violation | None:
    """Flag procedures billed by a doctor outside the required specialization."""
    doctor = context.doctor
    expected = PROCEDURE_SPECIALTY.get(context.record.procedure_code or "")
    if doctor is None or expected is None:
        logger.debug(f"R9 skipped for row {context.row}: unresolved doctor or procedure")
        return None

    actual = context.index.specialization_for(doctor.doctor_id)
    if actual and actual.strip().casefold() == expected.casefold():
        return None
    return specialty_match_rule.violation(
        context,
        f"Specialization mismatch. Expected {expected}, got {actual or 'N/A'}",
    )
