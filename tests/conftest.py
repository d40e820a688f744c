"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

# Add project root to path for imports when the package isn't installed
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation timestamp so future-date checks are deterministic."""
    return datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def doctor_rows() -> list[dict[str, Any]]:
    """Doctor roster covering each procedure specialty."""
    return [
        {
            "Doctor_ID": "D1",
            "Doctor_Name": "Dr. Mehta",
            "Specialization": "Cardiology",
            "Department": "Cardiac Sciences",
            "License_Expiry": "2030-12-31",
            "Shift_Start": "09:00",
            "Shift_End": "17:00",
        },
        {
            "Doctor_ID": "D2",
            "Doctor_Name": "Dr. Rao",
            "Specialization": "Orthopedics",
            "Department": "Ortho",
            "License_Expiry": "2023-01-31",
            "Shift_Start": "10:00",
            "Shift_End": "18:00",
        },
        {
            "Doctor_ID": "D3",
            "Doctor_Name": "Dr. Iyer",
            "Specialization": "General Medicine",
            "Department": "OPD",
            "License_Expiry": "2027-06-30",
            "Shift_Start": "08:00",
            "Shift_End": "14:00",
        },
    ]


@pytest.fixture
def clean_billing_row() -> dict[str, Any]:
    """A billing row that passes every rule against ``doctor_rows``."""
    return {
        "Visit_ID": "V100",
        "Patient_ID": "P100",
        "Patient_Name": "Asha Kumar",
        "Doctor_ID": "D3",
        "Doctor_Name": "Dr. Iyer",
        "Age": 34,
        "Visit_Date": "2024-03-15",
        "Procedure_Code": "OP100",
        "Consent_Flag": "N",
        "Payer_Type": "CASH",
        "Total_Amount": 750,
        "Payment_Status": "PAID",
    }


@pytest.fixture
def billing_rows(clean_billing_row: dict[str, Any]) -> list[dict[str, Any]]:
    """Mixed upload: clean rows plus rows breaking several rules."""
    return [
        clean_billing_row,
        {
            **clean_billing_row,
            "Visit_ID": "V101",
            "Patient_ID": "P101",
            "Doctor_ID": "D1",
            "Procedure_Code": "OP300",
            "Consent_Flag": "Y",
            "Payer_Type": "INSURANCE",
            "Total_Amount": 12000,
        },
        {
            # Same visit billed to a different patient, future date, bad payer
            **clean_billing_row,
            "Patient_ID": "P999",
            "Visit_Date": "2024-09-01",
            "Payer_Type": "CREDIT",
        },
        {
            # Expired license and wrong specialty for OP100
            **clean_billing_row,
            "Visit_ID": "V102",
            "Patient_ID": "P102",
            "Doctor_ID": "D2",
            "Age": 200,
            "Total_Amount": 250000,
        },
    ]
