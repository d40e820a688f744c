"""Outpatient billing compliance rules.

Registers the fixed R1-R10 battery from ``rules/categories/`` in rule-id
order. Rules are independent of one another; order only determines the
order violations are listed within a row.
"""

from __future__ import annotations

from .categories import (
    age_range_rule,
    amount_range_rule,
    consent_rule,
    doctor_in_roster_rule,
    future_visit_rule,
    license_valid_rule,
    patient_identity_rule,
    payer_type_rule,
    procedure_code_rule,
    specialty_match_rule,
)
from .models import RuleDefinition
from .registry import RuleRegistry

DEFAULT_RULES: tuple[RuleDefinition, ...] = (
    patient_identity_rule,  # R1
    age_range_rule,  # R2
    future_visit_rule,  # R3
    doctor_in_roster_rule,  # R4
    license_valid_rule,  # R5
    procedure_code_rule,  # R6
    amount_range_rule,  # R7
    consent_rule,  # R8
    specialty_match_rule,  # R9
    payer_type_rule,  # R10
)

RULE_IDS: tuple[str, ...] = tuple(r.rule_id for r in DEFAULT_RULES)


def register_default_rules(registry: RuleRegistry) -> None:
    """Register the R1-R10 rules. Safe to call repeatedly."""
    registry.extend(DEFAULT_RULES)


def rule_catalog() -> list[dict[str, str]]:
    """Rule id, severity and description for every default rule."""
    return [
        {
            "rule_id": r.rule_id,
            "severity": r.severity.value,
            "description": r.description,
        }
        for r in DEFAULT_RULES
    ]


__all__ = ["DEFAULT_RULES", "RULE_IDS", "register_default_rules", "rule_catalog"]
