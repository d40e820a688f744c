"""Grouping and reduction helpers for dashboard tables.

Field names are looked up with the same alias resolver the compliance engine
uses, so ``"Payer_Type"`` finds ``payer type`` or ``PayerType`` columns too.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from clinic_compliance.mapping import resolve
from clinic_compliance.utils import is_blank, parse_amount

from .models import GroupTotal

UNKNOWN_KEY = "Unknown"

KeyFunc = Callable[[Any], Any]


def group_by(rows: Iterable[Any], key: str | KeyFunc) -> dict[str, list[Any]]:
    """Group rows by a field name or a key function.

    Groups appear in first-seen order and rows keep their input order within
    a group. Rows with no value for the field land under ``Unknown``.
    """
    key_func = key if callable(key) else _field_key(key)
    groups: dict[str, list[Any]] = {}
    for row in rows:
        groups.setdefault(_as_key(key_func(row)), []).append(row)
    return groups


def total(values: Iterable[Any]) -> float:
    """Sum of the finite numeric values; anything unreadable is skipped."""
    return math.fsum(_finite(values))


def average(values: Iterable[Any]) -> float:
    """Arithmetic mean of the finite numeric values, 0.0 when there are none."""
    numbers = _finite(values)
    if not numbers:
        return 0.0
    return math.fsum(numbers) / len(numbers)


def top_n_by_sum(
    rows: Sequence[Any], group_field: str, sum_field: str, n: int = 5
) -> list[GroupTotal]:
    """Top ``n`` groups by summed ``sum_field``, largest first.

    Every row counts towards its group's ``count``; only readable amounts
    contribute to ``total``. Groups with equal totals keep first-seen order.

    Raises:
        ValueError: If ``n`` is negative
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    totals: list[GroupTotal] = []
    for key, members in group_by(rows, group_field).items():
        amounts = [resolve(row, [sum_field]) for row in members]
        totals.append(GroupTotal(key=key, total=total(amounts), count=len(members)))

    totals.sort(key=lambda g: -g.total)
    return totals[:n]


def _field_key(field: str) -> KeyFunc:
    return lambda row: resolve(row, [field])


def _as_key(value: Any) -> str:
    if is_blank(value):
        return UNKNOWN_KEY
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip() or UNKNOWN_KEY


def _finite(values: Iterable[Any]) -> list[float]:
    numbers = []
    for value in values:
        number = parse_amount(value)
        if number is not None:
            numbers.append(number)
    return numbers
