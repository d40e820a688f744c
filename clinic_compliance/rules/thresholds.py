"""Risk scoring weights and risk-level thresholds."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .models import Severity

# Per-violation weights. The 3/2/1 split is inferred from the dashboard's
# 30/20/10 risk bands; keep it overridable through configuration.
DEFAULT_SEVERITY_WEIGHTS: dict[Severity, float] = {
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}


@dataclass(frozen=True)
class ComplianceConfig:
    severity_weights: Mapping[Severity, float] = field(
        default_factory=lambda: dict(DEFAULT_SEVERITY_WEIGHTS)
    )
    critical_min: float = 30
    high_min: float = 20
    medium_min: float = 10
    disabled_rules: frozenset[str] = frozenset()

    def weight(self, severity: Severity) -> float:
        return self.severity_weights.get(severity, DEFAULT_SEVERITY_WEIGHTS[severity])

    def risk_level(self, score: float) -> str:
        if score >= self.critical_min:
            return "CRITICAL"
        if score >= self.high_min:
            return "HIGH"
        if score >= self.medium_min:
            return "MEDIUM"
        return "LOW"
