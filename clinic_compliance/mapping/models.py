"""Typed records produced at the mapping boundary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class BillingRecord:
    """One outpatient billing row after field resolution.

    Fields are None when the source row had no usable value. ``raw_*``
    fields keep the resolved cell as uploaded so violation reasons can quote
    what the user actually sent.
    """

    row_number: int
    visit_id: str | None = None
    patient_id: str | None = None
    patient_name: str | None = None
    doctor_id: str | None = None
    doctor_name: str | None = None
    doctor_specialization: str | None = None
    age: int | None = None
    visit_date: datetime | None = None
    procedure_code: str | None = None
    consent_flag: str | None = None
    payer_type: str | None = None
    total_amount: float | None = None
    payment_status: str | None = None
    raw_age: Any = None
    raw_visit_date: Any = None
    raw_total_amount: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Render the record with canonical column names for display/export."""
        return {
            "Row": self.row_number,
            "Visit_ID": self.visit_id,
            "Patient_ID": self.patient_id,
            "Patient_Name": self.patient_name,
            "Doctor_ID": self.doctor_id,
            "Doctor_Name": self.doctor_name,
            "Specialization": self.doctor_specialization,
            "Age": self.age,
            "Visit_Date": (
                self.visit_date.date().isoformat()
                if self.visit_date
                else _display(self.raw_visit_date)
            ),
            "Procedure_Code": self.procedure_code,
            "Consent_Flag": self.consent_flag,
            "Payer_Type": self.payer_type,
            "Total_Amount": self.total_amount,
            "Payment_Status": self.payment_status,
        }


@dataclass(frozen=True)
class DoctorRecord:
    """One doctor roster row after field resolution."""

    doctor_id: str | None = None
    doctor_name: str | None = None
    specialization: str | None = None
    department: str | None = None
    license_expiry: datetime | None = None
    raw_license_expiry: Any = None
    shift_start: str | None = None
    shift_end: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "Doctor_ID": self.doctor_id,
            "Doctor_Name": self.doctor_name,
            "Specialization": self.specialization,
            "Department": self.department,
            "License_Expiry": (
                self.license_expiry.date().isoformat()
                if self.license_expiry
                else _display(self.raw_license_expiry)
            ),
            "Shift_Start": self.shift_start,
            "Shift_End": self.shift_end,
        }


def _display(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
