"""Tests for compliance config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from clinic_compliance.rules import (
    ComplianceConfig,
    ConfigValidationError,
    Severity,
    load_compliance_config,
)
from clinic_compliance.rules import config_loader
from clinic_compliance.rules.config_loader import parse_compliance_config


def _write(tmp_path: Path, text: str, name: str = "compliance.yaml") -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


class TestLoadComplianceConfig:
    """Tests for YAML config files."""

    def test_full_config(self, tmp_path: Path):
        """Test that every section is applied."""
        path = _write(
            tmp_path,
            """
severity_weights:
  HIGH: 5
  low: 0.5
risk_thresholds:
  critical: 50
  high: 25
  medium: 5
disabled_rules: [R10, R9]
""",
        )
        config = load_compliance_config(path)

        assert config.weight(Severity.HIGH) == 5
        assert config.weight(Severity.MEDIUM) == 2
        assert config.weight(Severity.LOW) == 0.5
        assert (config.critical_min, config.high_min, config.medium_min) == (50, 25, 5)
        assert config.disabled_rules == frozenset({"R9", "R10"})
        assert config.risk_level(30) == "HIGH"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        """Test that an empty YAML file means default scoring."""
        config = load_compliance_config(_write(tmp_path, ""))
        assert config == ComplianceConfig()

    def test_yml_suffix(self, tmp_path: Path):
        """Test that .yml files are accepted."""
        config = load_compliance_config(_write(tmp_path, "disabled_rules: [R3]", "c.yml"))
        assert config.disabled_rules == frozenset({"R3"})

    def test_missing_file(self, tmp_path: Path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_compliance_config(tmp_path / "nope.yaml")

    def test_unsupported_suffix(self, tmp_path: Path):
        """Test that non-YAML files are rejected."""
        with pytest.raises(ConfigValidationError, match="Unsupported"):
            load_compliance_config(_write(tmp_path, "{}", "config.json"))

    def test_invalid_yaml(self, tmp_path: Path):
        """Test that malformed YAML is reported as a validation error."""
        with pytest.raises(ConfigValidationError, match="Invalid YAML"):
            load_compliance_config(_write(tmp_path, "severity_weights: [unclosed"))


class TestParseComplianceConfig:
    """Tests for config validation."""

    def test_unknown_severity(self):
        """Test that unknown severities are rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            parse_compliance_config({"severity_weights": {"EXTREME": 9}})
        assert exc_info.value.errors[0]["field"] == "severity_weights.EXTREME"

    def test_negative_weight(self):
        """Test that negative weights are rejected."""
        with pytest.raises(ConfigValidationError):
            parse_compliance_config({"severity_weights": {"HIGH": -1}})

    def test_unknown_rule_id(self):
        """Test that disabling an unknown rule is rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            parse_compliance_config({"disabled_rules": ["R1", "R42"]})
        assert "R42" in exc_info.value.errors[0]["error"]

    def test_errors_are_collected(self):
        """Test that every problem is reported at once."""
        with pytest.raises(ConfigValidationError) as exc_info:
            parse_compliance_config(
                {
                    "severity_weights": {"HIGH": "lots"},
                    "risk_thresholds": {"critical": "high"},
                    "disabled_rules": "R1",
                }
            )
        assert len(exc_info.value.errors) == 3

    def test_non_mapping(self):
        """Test that a top-level list is rejected."""
        with pytest.raises(ConfigValidationError):
            parse_compliance_config(["R1"])


class TestGetComplianceConfig:
    """Tests for environment-driven config lookup."""

    def test_defaults_without_path(self, monkeypatch: pytest.MonkeyPatch):
        """Test that no configured path means defaults."""
        monkeypatch.setattr(config_loader, "COMPLIANCE_CONFIG_PATH", "")
        assert config_loader.get_compliance_config() == ComplianceConfig()

    def test_loads_configured_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test that the configured path is loaded."""
        path = _write(tmp_path, "severity_weights: {MEDIUM: 4}")
        monkeypatch.setattr(config_loader, "COMPLIANCE_CONFIG_PATH", str(path))
        assert config_loader.get_compliance_config().weight(Severity.MEDIUM) == 4
