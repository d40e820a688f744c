"""Field resolution and record mapping for uploaded CSV data.

This module reconciles inconsistent CSV headers into typed records that the
compliance rules can evaluate consistently.

Usage:
    from clinic_compliance.mapping import RecordMapper, resolve

    # Resolve a single logical field from a raw row
    amount = resolve(row, ["Total_Amount", "Amount", "Bill_Amount"], fallback=0)

    # Map whole rows to typed records
    mapper = RecordMapper(custom_aliases={"Patient_ID": ["UHID"]})
    record = mapper.billing(row, row_number=1)
"""

from .aliases import (
    BILLING_FIELDS,
    DOCTOR_FIELDS,
    CanonicalField,
    get_required_fields,
)
from .mapper import RecordMapper, normalize_billing_rows, normalize_doctor_rows
from .models import BillingRecord, DoctorRecord
from .resolver import has_field, normalize_key, resolve, resolve_key

__all__ = [
    # Resolver
    "resolve",
    "resolve_key",
    "has_field",
    "normalize_key",
    # Schema
    "BILLING_FIELDS",
    "DOCTOR_FIELDS",
    "CanonicalField",
    "get_required_fields",
    # Records
    "BillingRecord",
    "DoctorRecord",
    "RecordMapper",
    "normalize_billing_rows",
    "normalize_doctor_rows",
]
