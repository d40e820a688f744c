"""Shared utility functions for the compliance core."""

from .csv_export import records_to_csv, violations_to_csv
from .date_parser import format_month, parse_flexible_date, to_naive_utc
from .numbers import is_blank, parse_amount, parse_int

__all__ = [
    "format_month",
    "is_blank",
    "parse_amount",
    "parse_flexible_date",
    "parse_int",
    "records_to_csv",
    "to_naive_utc",
    "violations_to_csv",
]
