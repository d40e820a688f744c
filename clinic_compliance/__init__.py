"""Clinic Compliance Package.

Compliance rule engine and chart analytics behind an outpatient billing
dashboard, with a FastAPI service in front:

- Field resolution for loosely named CSV headers
- Cross-dataset rules R1-R10 over billing rows and the doctor roster
- Risk scoring and summary aggregates
- Monthly series, moving-average forecasts and anomaly detection

Usage:
    uvicorn clinic_compliance.app:app --reload --port 8080

Modules:
    app: FastAPI application entry point
    mapping: Field resolution and typed records
    rules: Compliance rules engine
    analytics: Time-series and grouping helpers
    utils: Date/amount parsing and CSV export
"""

__version__ = "0.1.0"
