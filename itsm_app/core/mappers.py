"""Decoding raw Table API JSON into records and resolving field values."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

import pandas as pd

from .config import (
    CHANGE_STATE_ALIASES,
    DEFAULT_PRIORITY_LABEL,
    INCIDENT_STATE_ALIASES,
)
from .models import Display, FieldValue, Record, Scalar

logger = logging.getLogger(__name__)

_PRIORITY_RE = re.compile(r"^\s*P?([1-4])(?!\d)", re.IGNORECASE)


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_field(raw: Any) -> FieldValue | None:
    """Convert a raw JSON field into a :class:`FieldValue`.

    Accepts a bare scalar, a ``{"display_value", "value"}`` mapping, an
    already-decoded field value, or ``None`` (returned unchanged).
    """
    if raw is None or isinstance(raw, (Scalar, Display)):
        return raw
    if isinstance(raw, dict):
        return Display(display=_to_text(raw.get("display_value")), raw=_to_text(raw.get("value")))
    if isinstance(raw, (str, int, float, bool)):
        return Scalar(_to_text(raw))
    raise ValueError(f"Unsupported field value type: {type(raw).__name__}")


def display(field: Any) -> str:
    """Human-readable form of a field ('' when absent)."""
    fv = as_field(field)
    if isinstance(fv, Display):
        return fv.display
    if isinstance(fv, Scalar):
        return fv.text
    return ""


def value(field: Any) -> str:
    """Raw code of a field ('' when absent)."""
    fv = as_field(field)
    if isinstance(fv, Display):
        return fv.raw
    if isinstance(fv, Scalar):
        return fv.text
    return ""


def text(field: Any) -> str:
    """Display value, falling back to the raw code when the display is empty."""
    return display(field) or value(field)


def decode_record(raw: Any) -> Record:
    if not isinstance(raw, dict):
        raise ValueError(f"Record must be an object, got {type(raw).__name__}")
    out: Record = {}
    for name, item in raw.items():
        fv = as_field(item)
        if fv is not None:
            out[name] = fv
    return out


def decode_records(payload: Any) -> list[Record]:
    """Decode a Table API payload (``{"result": [...]}``) into records.

    Raises ``ValueError`` when the payload does not have the expected shape.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Payload must be an object, got {type(payload).__name__}")
    results = payload.get("result")
    if results is None:
        return []
    if not isinstance(results, list):
        raise ValueError("Payload 'result' must be a list")
    return [decode_record(r) for r in results]


def parse_timestamp(field: Any) -> pd.Timestamp | None:
    """Parse a timestamp field (raw value preferred) into a UTC Timestamp."""
    if isinstance(field, (datetime, date)):
        return pd.to_datetime(field, utc=True)
    for candidate in (value(field), display(field)):
        if not candidate:
            continue
        ts = pd.to_datetime(candidate, utc=True, errors="coerce")
        if ts is not None and not pd.isna(ts):
            return ts
    return None


def parse_bool(field: Any) -> bool:
    for candidate in (display(field), value(field)):
        if candidate.strip().lower() == "true":
            return True
    return False


def parse_float(field: Any) -> float | None:
    for candidate in (value(field), display(field)):
        try:
            return float(candidate)
        except (TypeError, ValueError):
            continue
    return None


def map_priority(field: Any) -> str:
    """Map a priority field to ``P1``-``P4``.

    Absent or unparseable priorities map to ``P4`` so every record is counted.
    """
    for candidate in (display(field), value(field)):
        match = _PRIORITY_RE.match(candidate)
        if match:
            return f"P{match.group(1)}"
    if field is not None:
        logger.warning("Unexpected priority value %r, defaulting to %s", field, DEFAULT_PRIORITY_LABEL)
    return DEFAULT_PRIORITY_LABEL


def _normalize_state(field: Any, aliases: dict[str, str]) -> str:
    for candidate in (display(field), value(field)):
        key = candidate.strip().lower()
        if key in aliases:
            return aliases[key]
    return display(field).strip() or "Unknown"


def normalize_incident_state(field: Any) -> str:
    return _normalize_state(field, INCIDENT_STATE_ALIASES)


def normalize_change_state(field: Any) -> str:
    return _normalize_state(field, CHANGE_STATE_ALIASES)


def records_to_dataframe(records: Iterable[dict[str, Any]], columns: Iterable[str]) -> pd.DataFrame:
    """Flatten records into a DataFrame of display text per requested column."""
    cols = list(columns)
    rows = [{col: text(rec.get(col)) for col in cols} for rec in records]
    return pd.DataFrame(rows, columns=cols)
