"""Encoded-query construction for Table API filters."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Any

from .models import DateRange

CLAUSE_SEPARATOR = "^"
DATE_FIELD = "sys_created_on"

# Characters that would alter encoded-query logic
_UNSAFE_CHARS = re.compile(r"[\^=\n\r]")


def sanitize_query_value(val: Any) -> str:
    """Strip clause separators, equality signs, and newlines from a value.

    Integers are rendered as their decimal text; any other non-string input
    sanitizes to an empty string.
    """
    if isinstance(val, int) and not isinstance(val, bool):
        val = str(val)
    if not isinstance(val, str):
        return ""
    return _UNSAFE_CHARS.sub("", val)


def build_date_query(date_range: DateRange, field: str = DATE_FIELD) -> str:
    start = date_range.start.strftime("%Y-%m-%d")
    end = date_range.end.strftime("%Y-%m-%d")
    return f"{field}>={start} 00:00:00{CLAUSE_SEPARATOR}{field}<={end} 23:59:59"


def encode_query(
    date_range: DateRange,
    clauses: Iterable[tuple[str, Any]] = (),
    *,
    fixed_clauses: Sequence[str] = (),
) -> str:
    """Combine the date clause, fixed clauses, and user filter clauses.

    User values are sanitized; a clause whose value is empty afterwards is
    dropped rather than emitted malformed.
    """
    parts = [build_date_query(date_range)]
    parts.extend(fixed_clauses)
    for field, raw in clauses:
        cleaned = sanitize_query_value(raw)
        if cleaned:
            parts.append(f"{field}={cleaned}")
    return CLAUSE_SEPARATOR.join(parts)
