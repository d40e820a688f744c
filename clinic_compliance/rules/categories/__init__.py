"""Compliance rules organized by category."""

from __future__ import annotations

from .doctor_rules import (
    PROCEDURE_SPECIALTY,
    doctor_in_roster_rule,
    license_valid_rule,
    specialty_match_rule,
)
from .financial_rules import (
    MAX_BILL_AMOUNT,
    VALID_PAYER_TYPES,
    amount_range_rule,
    payer_type_rule,
)
from .patient_rules import MAX_AGE, MIN_AGE, age_range_rule, patient_identity_rule
from .procedure_rules import VALID_PROCEDURE_CODES, consent_rule, procedure_code_rule
from .visit_rules import future_visit_rule

__all__ = [
    # Patient rules
    "patient_identity_rule",
    "age_range_rule",
    "MIN_AGE",
    "MAX_AGE",
    # Visit rules
    "future_visit_rule",
    # Doctor rules
    "doctor_in_roster_rule",
    "license_valid_rule",
    "specialty_match_rule",
    "PROCEDURE_SPECIALTY",
    # Procedure rules
    "procedure_code_rule",
    "consent_rule",
    "VALID_PROCEDURE_CODES",
    # Financial rules
    "amount_range_rule",
    "payer_type_rule",
    "MAX_BILL_AMOUNT",
    "VALID_PAYER_TYPES",
]
