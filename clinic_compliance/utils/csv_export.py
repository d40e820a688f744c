"""CSV serialization for compliance results."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from clinic_compliance.rules.models import Violation

VIOLATION_COLUMNS = ["Dataset", "Row", "Rule", "Severity", "Reason"]


def violations_to_csv(violations: Iterable[Violation]) -> str:
    """Serialize violations as ``Dataset,Row,Rule,Severity,Reason`` rows.

    Returns an empty string when there are no violations.
    """
    rows = [
        [v.dataset, v.row, v.rule, _cell(v.severity), v.reason] for v in violations
    ]
    if not rows:
        return ""

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(VIOLATION_COLUMNS)
    writer.writerows(rows)
    return output.getvalue()


def records_to_csv(rows: Iterable[Any]) -> str:
    """Serialize mappings (or objects with ``to_dict``) to CSV.

    The header is the union of keys in first-seen order; rows missing a key
    get an empty cell.
    """
    records: list[Mapping[str, Any]] = [
        row.to_dict() if hasattr(row, "to_dict") else row for row in rows
    ]
    if not records:
        return ""

    columns: dict[str, None] = {}
    for record in records:
        columns.update(dict.fromkeys(record))

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(list(columns))
    for record in records:
        writer.writerow([_cell(record.get(column)) for column in columns])
    return output.getvalue()


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
