"""Billed amount and payer rules (R7, R10)."""

from __future__ import annotations

from clinic_compliance.rules.models import RuleContext, Severity, Violation
from clinic_compliance.rules.registry import rule

MAX_BILL_AMOUNT = 100_000
VALID_PAYER_TYPES = frozenset({"CASH", "INSURANCE", "GOVT"})


@rule("R7", Severity.HIGH, "Amount must be >0 and <=100000")
def amount_range_rule(context: RuleContext) -> Violation | None:
    """Flag non-positive, oversized or unreadable bill amounts."""
    amount = context.record.total_amount
    if amount is not None and 0 < amount <= MAX_BILL_AMOUNT:
        return None
    raw = context.record.raw_total_amount
    return amount_range_rule.violation(
        context, f"Invalid Total_Amount: {raw if raw is not None else 'N/A'}"
    )


@rule("R10", Severity.LOW, "Payer_Type must be CASH, INSURANCE, or GOVT")
def payer_type_rule(context: RuleContext) -> Violation | None:
    payer = context.record.payer_type
    if payer in VALID_PAYER_TYPES:
        return None
    return payer_type_rule.violation(context, f"Invalid Payer_Type: {payer or 'N/A'}")
