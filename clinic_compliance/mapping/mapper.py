"""Record mapper turning raw CSV rows into typed billing/doctor records.

This is the single normalization boundary of the compliance core: every
downstream rule works on ``BillingRecord`` / ``DoctorRecord`` fields and never
indexes raw rows directly.

Usage:
    mapper = RecordMapper()
    record = mapper.billing(raw_row, row_number=1)
    doctor = mapper.doctor(raw_roster_row)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from clinic_compliance.utils import parse_amount, parse_flexible_date, parse_int

from .aliases import BILLING_FIELDS, DOCTOR_FIELDS, CanonicalField, get_required_fields
from .models import BillingRecord, DoctorRecord
from .resolver import has_field, resolve

logger = logging.getLogger(__name__)


class RecordMapper:
    """Resolves canonical fields from raw rows using alias tables.

    The mapper uses a two-level alias lookup:
    1. Custom aliases (client-specific header names, highest priority)
    2. Built-in aliases from ``BILLING_FIELDS`` / ``DOCTOR_FIELDS``

    Attributes:
        custom_aliases: Optional mapping of canonical field -> extra header names
    """

    def __init__(self, custom_aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        """Initialize the record mapper.

        Args:
            custom_aliases: Optional dict of canonical name to header aliases.
                            Example: {"Patient_ID": ["UHID"]}
        """
        self.custom_aliases = {
            name: list(aliases) for name, aliases in (custom_aliases or {}).items()
        }

    def candidates(self, field_def: CanonicalField) -> list[str]:
        """Header names to try for a canonical field, in priority order."""
        return [*self.custom_aliases.get(field_def.name, []), *field_def.candidates]

    def _value(self, row: Any, schema: dict[str, CanonicalField], name: str) -> Any:
        return resolve(row, self.candidates(schema[name]))

    def billing(self, row: Any, row_number: int) -> BillingRecord:
        """Map one raw billing row. Never raises; unusable cells become None."""

        def value(name: str) -> Any:
            return self._value(row, BILLING_FIELDS, name)

        raw_age = value("Age")
        raw_visit_date = value("Visit_Date")
        raw_amount = value("Total_Amount")

        record = BillingRecord(
            row_number=row_number,
            visit_id=_text(value("Visit_ID")),
            patient_id=_text(value("Patient_ID")),
            patient_name=_text(value("Patient_Name")),
            doctor_id=_text(value("Doctor_ID")),
            doctor_name=_text(value("Doctor_Name")),
            age=parse_int(raw_age),
            visit_date=parse_flexible_date(raw_visit_date),
            procedure_code=_code(value("Procedure_Code")),
            consent_flag=_code(value("Consent_Flag")),
            payer_type=_code(value("Payer_Type")),
            total_amount=parse_amount(raw_amount),
            payment_status=_text(value("Payment_Status")),
            raw_age=raw_age,
            raw_visit_date=raw_visit_date,
            raw_total_amount=raw_amount,
        )

        if logger.isEnabledFor(logging.DEBUG):
            unresolved = [
                name
                for name in BILLING_FIELDS
                if BILLING_FIELDS[name].required and value(name) is None
            ]
            if unresolved:
                logger.debug(f"Billing row {row_number} unresolved fields: {', '.join(unresolved)}")

        return record

    def doctor(self, row: Any) -> DoctorRecord:
        """Map one raw doctor roster row. Never raises."""

        def value(name: str) -> Any:
            return self._value(row, DOCTOR_FIELDS, name)

        raw_expiry = value("License_Expiry")
        return DoctorRecord(
            doctor_id=_text(value("Doctor_ID")),
            doctor_name=_text(value("Doctor_Name")),
            specialization=_text(value("Specialization")),
            department=_text(value("Department")),
            license_expiry=parse_flexible_date(raw_expiry, max_year=None),
            raw_license_expiry=raw_expiry,
            shift_start=_text(value("Shift_Start")),
            shift_end=_text(value("Shift_End")),
        )

    def missing_columns(
        self,
        rows: Sequence[Any],
        schema: dict[str, CanonicalField],
    ) -> list[str]:
        """Required canonical columns that no header of the first row satisfies.

        Returns an empty list for an empty dataset: there are no headers to
        judge.
        """
        if not rows or not isinstance(rows[0], Mapping):
            return []
        headers = list(rows[0].keys())
        return [
            name
            for name in get_required_fields(schema)
            if not has_field(headers, self.candidates(schema[name]))
        ]


def normalize_billing_rows(
    rows: Iterable[Any],
    custom_aliases: Mapping[str, Sequence[str]] | None = None,
) -> list[BillingRecord]:
    """Convenience function to map a whole billing upload (1-based rows)."""
    mapper = RecordMapper(custom_aliases=custom_aliases)
    return [mapper.billing(row, idx) for idx, row in enumerate(rows, start=1)]


def normalize_doctor_rows(
    rows: Iterable[Any],
    custom_aliases: Mapping[str, Sequence[str]] | None = None,
) -> list[DoctorRecord]:
    """Convenience function to map a whole doctor roster upload."""
    mapper = RecordMapper(custom_aliases=custom_aliases)
    return [mapper.doctor(row) for row in rows]


def _text(value: Any) -> str | None:
    if value is None:
        return None
    # Spreadsheet exports turn numeric IDs into 101.0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _code(value: Any) -> str | None:
    text = _text(value)
    return text.upper() if text else None
