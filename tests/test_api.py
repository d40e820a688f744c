"""Tests for the FastAPI endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from clinic_compliance import config
from clinic_compliance.app import app


@pytest.fixture(scope="module")
def client():
    """Create test client."""
    with TestClient(app) as client:
        yield client


class TestHealthEndpoint:
    """Test the health check endpoint."""

    def test_health_returns_status(self, client: TestClient):
        """Test health endpoint returns status and timestamp."""
        response = client.get("/health")
        data = response.json()

        assert response.status_code == 200
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["rules"] == 10


class TestComplianceEndpoints:
    """Test compliance run, export and catalog routes."""

    def test_run(self, client: TestClient, billing_rows: list[dict], doctor_rows: list[dict]):
        """Test a full run over JSON rows."""
        response = client.post(
            "/api/compliance/run",
            json={
                "billing_rows": billing_rows,
                "doctor_rows": doctor_rows,
                "now": "2024-06-01T12:00:00",
            },
        )
        data = response.json()

        assert response.status_code == 200
        assert data["risk_score"] == 18
        assert data["risk_level"] == "MEDIUM"
        assert len(data["analysis_view"]) == 4
        assert data["violations"][0] == {
            "dataset": "op_billing",
            "row": 3,
            "rule": "R1",
            "severity": "HIGH",
            "reason": "Patient_ID must be unique per Visit_ID V100. Found P999 but expected P100",
        }
        assert data["summaries"]["payer_distribution"]["CASH"] == 2
        assert data["summaries"]["violation_ranking"][0]["rule"] == "R1"

    def test_run_with_empty_body(self, client: TestClient):
        """Test that omitted datasets are treated as empty."""
        response = client.post("/api/compliance/run", json={})
        data = response.json()

        assert response.status_code == 200
        assert data["violations"] == []
        assert data["risk_score"] == 0

    def test_run_rejects_non_list_rows(self, client: TestClient):
        """Test that a malformed body is a validation error."""
        response = client.post("/api/compliance/run", json={"billing_rows": "oops"})
        assert response.status_code == 422

    def test_run_rejects_oversized_upload(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ):
        """Test the upload row limit."""
        monkeypatch.setattr(config, "MAX_UPLOAD_ROWS", 2)
        response = client.post(
            "/api/compliance/run",
            json={"billing_rows": [{}, {}, {}], "doctor_rows": []},
        )
        assert response.status_code == 422
        assert "Too many rows" in response.text

    def test_export_violations_csv(
        self, client: TestClient, billing_rows: list[dict], doctor_rows: list[dict]
    ):
        """Test the violations CSV download."""
        response = client.post(
            "/api/compliance/export",
            json={
                "billing_rows": billing_rows,
                "doctor_rows": doctor_rows,
                "now": "2024-06-01T12:00:00",
            },
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        lines = response.text.strip().splitlines()
        assert lines[0] == "Dataset,Row,Rule,Severity,Reason"
        assert len(lines) == 8

    def test_export_analysis_csv(
        self, client: TestClient, billing_rows: list[dict], doctor_rows: list[dict]
    ):
        """Test the analysis view CSV download."""
        response = client.post(
            "/api/compliance/export?dataset=analysis",
            json={"billing_rows": billing_rows, "doctor_rows": doctor_rows},
        )

        assert response.status_code == 200
        assert response.text.startswith("Row,Visit_ID,Patient_ID")

    def test_export_rejects_unknown_dataset(self, client: TestClient):
        """Test that only known export kinds are accepted."""
        response = client.post("/api/compliance/export?dataset=doctors", json={})
        assert response.status_code == 422

    def test_rule_catalog(self, client: TestClient):
        """Test the rule catalog listing."""
        response = client.get("/api/compliance/rules")
        data = response.json()

        assert response.status_code == 200
        assert data["total"] == 10
        assert data["rules"][7] == {
            "rule_id": "R8",
            "severity": "HIGH",
            "description": "If Procedure_Code=OP300, Consent_Flag must be Y",
        }


class TestAnalyticsEndpoints:
    """Test analytics routes."""

    def test_monthly_series(self, client: TestClient):
        """Test monthly aggregation."""
        response = client.post(
            "/api/analytics/monthly-series",
            json={
                "points": [
                    {"date": "2024-01-05", "value": 100},
                    {"date": "2024-01-20", "value": 50},
                ]
            },
        )
        assert response.status_code == 200
        assert response.json() == {"series": [{"month": "2024-01", "value": 150.0}]}

    def test_forecast(self, client: TestClient):
        """Test a one-step moving-average forecast."""
        response = client.post(
            "/api/analytics/forecast",
            json={
                "series": [{"date": "m1", "value": 10}, {"date": "m2", "value": 20}],
                "window_size": 2,
                "horizon": 1,
            },
        )
        assert response.status_code == 200
        assert response.json() == {"forecast": [{"date": "m2+1", "value": 15.0}]}

    def test_forecast_invalid_window(self, client: TestClient):
        """Test that invalid forecast parameters return 422."""
        response = client.post(
            "/api/analytics/forecast",
            json={"series": [{"date": "2024-01", "value": 1}], "window_size": 0},
        )
        assert response.status_code == 422

    def test_anomalies(self, client: TestClient):
        """Test anomaly detection."""
        response = client.post(
            "/api/analytics/anomalies",
            json={"values": [10] * 9 + [100], "threshold_std_devs": 2},
        )
        data = response.json()

        assert response.status_code == 200
        assert data["total"] == 1
        assert data["anomalies"][0]["index"] == 9

    def test_top_n(self, client: TestClient):
        """Test top-N grouping."""
        response = client.post(
            "/api/analytics/top-n",
            json={
                "rows": [
                    {"Doctor_ID": "D1", "Total_Amount": 100},
                    {"Doctor_ID": "D2", "Total_Amount": 300},
                    {"Doctor_ID": "D1", "Total_Amount": 50},
                ],
                "group_field": "Doctor_ID",
                "sum_field": "Total_Amount",
                "n": 1,
            },
        )
        assert response.status_code == 200
        assert response.json() == {"groups": [{"key": "D2", "total": 300.0, "count": 1}]}

    def test_insights(self, client: TestClient, billing_rows: list[dict], doctor_rows: list[dict]):
        """Test prioritized insights for an upload."""
        response = client.post(
            "/api/analytics/insights",
            json={"billing_rows": billing_rows, "doctor_rows": doctor_rows},
        )
        data = response.json()

        assert response.status_code == 200
        assert data["total"] == 9
        assert data["insights"][0]["id"] == "top_payer"
        assert data["insights"][0]["category"] == "revenue"
        assert data["insights"][-1]["id"] == "date_range"

    def test_insights_empty(self, client: TestClient):
        """Test that an empty upload gives no insights."""
        response = client.post("/api/analytics/insights", json={})
        assert response.status_code == 200
        assert response.json() == {"insights": [], "total": 0}
