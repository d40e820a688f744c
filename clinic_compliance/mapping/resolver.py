"""Alias-based field resolution for loosely named CSV rows.

Uploaded files rarely agree on headers (``Doctor_ID`` vs ``doctorId`` vs
``Doctor ID``). ``resolve`` finds the value for a logical field given a list
of candidate header names, using a three-tier strategy:

1. Exact key match, in candidate order
2. Normalized match (case-insensitive, ignoring ``_``, ``-`` and spaces)
3. Normalized substring match in either direction, shortest candidate first

Blank values (``""``, ``None``, NaN) never count as a match; resolution keeps
looking and finally returns the fallback. The resolver never raises.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from clinic_compliance.utils.numbers import is_blank

_SEPARATORS = re.compile(r"[_\-\s]")


def normalize_key(name: Any) -> str:
    """Lower-case a header and strip ``_``, ``-`` and whitespace."""
    return _SEPARATORS.sub("", str(name).lower())


def resolve(
    row: Any,
    candidates: Sequence[str],
    fallback: Any = None,
) -> Any:
    """Return the first non-blank value whose key matches a candidate.

    Args:
        row: A raw record, typically one row from a CSV parser
        candidates: Header aliases in priority order
        fallback: Value returned when nothing matches

    Returns:
        The matched cell value, or ``fallback``
    """
    key = resolve_key(row, candidates)
    if key is None:
        return fallback
    return row[key]


def resolve_key(row: Any, candidates: Sequence[str]) -> Any:
    """Return the key in ``row`` that ``resolve`` would read, or None."""
    if not isinstance(row, Mapping) or not candidates:
        return None

    # 1. Exact match
    for name in candidates:
        if name in row and not is_blank(row[name]):
            return name

    normalized_keys = [(key, normalize_key(key)) for key in row]

    # 2. Case/separator-insensitive match
    for name in candidates:
        target = normalize_key(name)
        for key, normalized in normalized_keys:
            if normalized == target and not is_blank(row[key]):
                return key

    # 3. Substring match, shortest candidate first
    for name in sorted(candidates, key=lambda c: len(normalize_key(c))):
        target = normalize_key(name)
        if not target:
            continue
        for key, normalized in normalized_keys:
            if not normalized:
                continue
            if (target in normalized or normalized in target) and not is_blank(
                row[key]
            ):
                return key

    return None


def has_field(headers: Sequence[Any], candidates: Sequence[str]) -> bool:
    """Check whether any header would satisfy the candidate aliases.

    Used for header-level checks, where values are irrelevant.
    """
    probe = {header: True for header in headers}
    return resolve_key(probe, candidates) is not None
