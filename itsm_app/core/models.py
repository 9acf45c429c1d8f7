"""Domain data models: field values, filters, and fetch results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Union

from .config import DEFAULT_DATE_WINDOW_DAYS, DEFAULT_RECORD_LIMIT, MAX_RECORD_LIMIT, MIN_RECORD_LIMIT


@dataclass(frozen=True, slots=True)
class Scalar:
    text: str


@dataclass(frozen=True, slots=True)
class Display:
    display: str
    raw: str


FieldValue = Union[Scalar, Display]
Record = dict[str, FieldValue]


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive day range: ``start 00:00:00`` through ``end 23:59:59``."""

    start: date
    end: date

    @classmethod
    def trailing(cls, days: int = DEFAULT_DATE_WINDOW_DAYS, today: date | None = None) -> DateRange:
        end = today or date.today()
        return cls(start=end - timedelta(days=days), end=end)


def clamp_record_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_RECORD_LIMIT
    return max(MIN_RECORD_LIMIT, min(MAX_RECORD_LIMIT, int(limit)))


@dataclass(frozen=True, slots=True)
class DashboardFilters:
    date_range: DateRange | None = None
    priority: str | None = None
    category: str | None = None
    assignment_group: str | None = None
    sla_type: str | None = None
    change_state: str | None = None
    change_type: str | None = None
    record_limit: int = DEFAULT_RECORD_LIMIT

    def __post_init__(self):
        object.__setattr__(self, "record_limit", clamp_record_limit(self.record_limit))

    def resolved_range(self) -> DateRange:
        return self.date_range or DateRange.trailing()


class FetchFailureKind(str, Enum):
    TRANSPORT = "transport"
    STATUS = "status"
    DECODE = "decode"
    TIMEOUT = "timeout"


@dataclass(frozen=True, slots=True)
class FetchFailure:
    kind: FetchFailureKind
    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(slots=True)
class FetchResult:
    """Outcome of exactly one remote fetch: records or a failure, never both."""

    records: list[dict[str, Any]] = field(default_factory=list)
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, records: list[dict[str, Any]]) -> FetchResult:
        return cls(records=list(records))

    @classmethod
    def failed(cls, kind: FetchFailureKind, message: str, status_code: int | None = None) -> FetchResult:
        return cls(failure=FetchFailure(kind, message, status_code))
