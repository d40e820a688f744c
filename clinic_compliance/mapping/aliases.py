"""Canonical field definitions for billing and doctor roster uploads.

Each canonical column carries the header aliases seen across hospital
exports. Aliases are listed in priority order; the resolver tries exact
matches across all of them before any fuzzy matching.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

FieldType = Literal["str", "int", "float", "date"]


@dataclass
class CanonicalField:
    """Definition of a canonical column with mapping aliases."""

    name: str
    field_type: FieldType
    required: bool = False
    aliases: list[str] = field(default_factory=list)
    description: str = ""

    @property
    def candidates(self) -> list[str]:
        """Canonical name first, then aliases."""
        return [self.name, *self.aliases]


BILLING_FIELDS: dict[str, CanonicalField] = {
    "Visit_ID": CanonicalField(
        name="Visit_ID",
        field_type="str",
        required=True,
        aliases=["VisitId", "Visit_No", "Encounter_ID"],
        description="Visit identifier; must map to a single patient",
    ),
    "Patient_ID": CanonicalField(
        name="Patient_ID",
        field_type="str",
        required=True,
        aliases=["PatientId", "Patient_No", "MRN", "Patient_Code"],
        description="Patient identifier",
    ),
    "Patient_Name": CanonicalField(
        name="Patient_Name",
        field_type="str",
        aliases=["PatientName", "Full_Name", "Client_Name", "Customer_Name"],
    ),
    "Doctor_ID": CanonicalField(
        name="Doctor_ID",
        field_type="str",
        required=True,
        aliases=["DoctorId", "Doctor_Code", "Physician_ID", "Provider_ID"],
        description="Attending doctor; must exist in the roster",
    ),
    "Doctor_Name": CanonicalField(
        name="Doctor_Name",
        field_type="str",
        aliases=["DoctorName", "Dr_Name", "Physician_Name", "Provider_Name"],
    ),
    "Age": CanonicalField(
        name="Age",
        field_type="int",
        required=True,
        aliases=["Patient_Age", "Age_Years"],
    ),
    "Visit_Date": CanonicalField(
        name="Visit_Date",
        field_type="date",
        required=True,
        aliases=["VisitDate", "Date_Of_Visit", "Service_Date", "Bill_Date"],
    ),
    "Procedure_Code": CanonicalField(
        name="Procedure_Code",
        field_type="str",
        required=True,
        aliases=["ProcedureCode", "Proc_Code", "Service_Code", "Procedure"],
    ),
    "Consent_Flag": CanonicalField(
        name="Consent_Flag",
        field_type="str",
        required=True,
        aliases=["ConsentFlag", "Consent"],
    ),
    "Payer_Type": CanonicalField(
        name="Payer_Type",
        field_type="str",
        required=True,
        aliases=["PayerType", "Payer", "Payment_Mode"],
    ),
    "Total_Amount": CanonicalField(
        name="Total_Amount",
        field_type="float",
        required=True,
        aliases=["Amount", "TotalAmount", "Amount_Billed", "Bill_Amount", "Gross_Amount"],
    ),
    "Payment_Status": CanonicalField(
        name="Payment_Status",
        field_type="str",
        aliases=["PaymentStatus", "Payment_Status_Desc"],
    ),
}

DOCTOR_FIELDS: dict[str, CanonicalField] = {
    "Doctor_ID": CanonicalField(
        name="Doctor_ID",
        field_type="str",
        required=True,
        aliases=["DoctorId", "Doctor_Code", "Physician_ID", "Provider_ID"],
    ),
    "Doctor_Name": CanonicalField(
        name="Doctor_Name",
        field_type="str",
        required=True,
        aliases=["DoctorName", "Dr_Name", "Physician_Name", "Provider_Name"],
    ),
    "Specialization": CanonicalField(
        name="Specialization",
        field_type="str",
        required=True,
        aliases=["Specialty", "Speciality"],
    ),
    "Department": CanonicalField(
        name="Department",
        field_type="str",
        aliases=["Dept"],
    ),
    "License_Expiry": CanonicalField(
        name="License_Expiry",
        field_type="date",
        required=True,
        aliases=["LicenseExpiry", "License_Expiry_Date", "License_Valid_Until"],
    ),
    "Shift_Start": CanonicalField(
        name="Shift_Start",
        field_type="str",
        aliases=["ShiftStart", "Start_Time"],
    ),
    "Shift_End": CanonicalField(
        name="Shift_End",
        field_type="str",
        aliases=["ShiftEnd", "End_Time"],
    ),
}


def get_required_fields(schema: dict[str, CanonicalField]) -> list[str]:
    """Get the canonical names marked as required in a schema."""
    return [name for name, field_def in schema.items() if field_def.required]
