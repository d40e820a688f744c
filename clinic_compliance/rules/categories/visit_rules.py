"""Visit date rules (R3)."""

from __future__ import annotations

from clinic_compliance.rules.models import RuleContext, Severity, Violation
from clinic_compliance.rules.registry import rule


@rule("R3", Severity.HIGH, "Visit_Date cannot be in the future")
def future_visit_rule(context: RuleContext) -> Violation | None:
    """Flag visit dates after the evaluation timestamp, or unreadable dates.

    A row with no Visit_Date at all is not flagged: there is no date that
    could lie in the future.
    """
    record = context.record
    if record.visit_date is None:
        if record.raw_visit_date is None:
            return None
        return future_visit_rule.violation(
            context, f"Visit_Date invalid: {record.raw_visit_date}"
        )

    if record.visit_date > context.now:
        return future_visit_rule.violation(
            context, f"Visit_Date in future: {record.raw_visit_date}"
        )
    return None
