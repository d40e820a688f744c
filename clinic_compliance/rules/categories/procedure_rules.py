"""Procedure code and consent rules (R6, R8)."""

from __future__ import annotations

from clinic_compliance.rules.models import RuleContext, Severity, Violation
from clinic_compliance.rules.registry import rule

VALID_PROCEDURE_CODES = frozenset({"OP100", "OP200", "OP300"})
CONSENT_REQUIRED_CODES = frozenset({"OP300"})


@rule("R6", Severity.HIGH, "Procedure_Code must be OP100/OP200/OP300")
def procedure_code_rule(context: RuleContext) -> Violation | None:
    code = context.record.procedure_code
    if code in VALID_PROCEDURE_CODES:
        return None
    return procedure_code_rule.violation(
        context, f"Invalid Procedure_Code: {code or 'N/A'}"
    )


@rule("R8", Severity.HIGH, "If Procedure_Code=OP300, Consent_Flag must be Y")
def consent_rule(context: RuleContext) -> Violation | None:
    """Flag consent-gated procedures billed without a ``Y`` consent flag."""
    code = context.record.procedure_code
    if code not in CONSENT_REQUIRED_CODES or context.record.consent_flag == "Y":
        return None
    return consent_rule.violation(context, f"Consent_Flag must be Y for {code}")
