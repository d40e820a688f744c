"""Configuration file loader for compliance scoring.

Supports tuning severity weights, risk bands and disabled rules from a YAML
file, so scoring policy can change without a code release:

    severity_weights:
      HIGH: 3
      MEDIUM: 2
      LOW: 1
    risk_thresholds:
      critical: 30
      high: 20
      medium: 10
    disabled_rules: [R10]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from clinic_compliance.config import COMPLIANCE_CONFIG_PATH

from .models import Severity
from .ruleset import RULE_IDS
from .thresholds import DEFAULT_SEVERITY_WEIGHTS, ComplianceConfig

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


def load_compliance_config(file_path: str | Path) -> ComplianceConfig:
    """Load a compliance config from a YAML file.

    Args:
        file_path: Path to a ``.yaml``/``.yml`` file

    Returns:
        Validated ComplianceConfig

    Raises:
        ConfigValidationError: If the file is unreadable or fails validation
        FileNotFoundError: If file doesn't exist
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix.lower() not in (".yaml", ".yml"):
        raise ConfigValidationError(f"Unsupported config format: {path.suffix}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {path}: {e}") from e

    config = parse_compliance_config(data or {})
    logger.info(f"Loaded compliance config from {path}")
    return config


def parse_compliance_config(data: Any) -> ComplianceConfig:
    """Validate a decoded config mapping and build a ComplianceConfig."""
    if not isinstance(data, dict):
        raise ConfigValidationError("Compliance config must be a mapping")

    errors: list[dict[str, Any]] = []

    weights: dict[Severity, float] = dict(DEFAULT_SEVERITY_WEIGHTS)
    raw_weights = data.get("severity_weights") or {}
    if not isinstance(raw_weights, dict):
        errors.append({"field": "severity_weights", "error": "must be a mapping"})
        raw_weights = {}
    for name, value in raw_weights.items():
        try:
            severity = Severity(str(name).upper())
        except ValueError:
            errors.append({"field": f"severity_weights.{name}", "error": "unknown severity"})
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            errors.append(
                {"field": f"severity_weights.{name}", "error": "must be a non-negative number"}
            )
            continue
        weights[severity] = value

    thresholds: dict[str, float] = {}
    raw_thresholds = data.get("risk_thresholds") or {}
    if not isinstance(raw_thresholds, dict):
        errors.append({"field": "risk_thresholds", "error": "must be a mapping"})
        raw_thresholds = {}
    for name in ("critical", "high", "medium"):
        if name not in raw_thresholds:
            continue
        value = raw_thresholds[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append({"field": f"risk_thresholds.{name}", "error": "must be a number"})
            continue
        thresholds[f"{name}_min"] = value

    disabled = data.get("disabled_rules") or []
    if not isinstance(disabled, list):
        errors.append({"field": "disabled_rules", "error": "must be a list"})
        disabled = []
    unknown = [str(r) for r in disabled if str(r) not in RULE_IDS]
    if unknown:
        errors.append(
            {"field": "disabled_rules", "error": f"unknown rule ids: {', '.join(unknown)}"}
        )

    if errors:
        raise ConfigValidationError(
            f"Compliance config validation failed with {len(errors)} error(s)", errors
        )

    return ComplianceConfig(
        severity_weights=weights,
        disabled_rules=frozenset(str(r) for r in disabled),
        **thresholds,
    )


def get_compliance_config() -> ComplianceConfig:
    """Config from ``COMPLIANCE_CONFIG_PATH`` if set, otherwise defaults."""
    if not COMPLIANCE_CONFIG_PATH:
        return ComplianceConfig()
    return load_compliance_config(COMPLIANCE_CONFIG_PATH)
