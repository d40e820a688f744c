"""Compliance rules engine for outpatient billing uploads."""

from .config_loader import (
    ConfigValidationError,
    get_compliance_config,
    load_compliance_config,
)
from .engine import ComplianceInputError, run_compliance
from .index import CrossReferenceIndex
from .models import (
    ComplianceResult,
    ComplianceSummaries,
    RankingEntry,
    RuleContext,
    RuleDefinition,
    Severity,
    Violation,
)
from .ruleset import RULE_IDS, rule_catalog
from .summaries import risk_score, violation_ranking
from .thresholds import ComplianceConfig

__all__ = [
    "run_compliance",
    "risk_score",
    "violation_ranking",
    "rule_catalog",
    "RULE_IDS",
    "ComplianceConfig",
    "ComplianceInputError",
    "ComplianceResult",
    "ComplianceSummaries",
    "ConfigValidationError",
    "CrossReferenceIndex",
    "RankingEntry",
    "RuleContext",
    "RuleDefinition",
    "Severity",
    "Violation",
    "get_compliance_config",
    "load_compliance_config",
]
