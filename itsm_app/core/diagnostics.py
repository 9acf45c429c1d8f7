"""Out-of-band diagnostics: data-source reports, refresh cycles, view loads.

Nothing in the computational path reads from these objects; they only
observe which path (``api`` or ``mock``) each accessor call took.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime

LOG_PREFIX = "[ITSM]"
SOURCE_API = "api"
SOURCE_MOCK = "mock"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FetchReport:
    service: str
    method: str
    source: str
    duration_ms: int
    record_count: int
    error: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_MOCK


DiagnosticsSink = Callable[[FetchReport], None]


class LoggingDiagnostics:
    """Default sink: one log line per accessor call."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def __call__(self, report: FetchReport) -> None:
        if report.error:
            self._log.warning(
                "%s ERROR %s.%s() failed: %s", LOG_PREFIX, report.service, report.method, report.error
            )
        label = "ServiceNow API" if report.source == SOURCE_API else "MOCK DATA"
        self._log.info(
            "%s %s %s.%s() -> %s records in %sms",
            LOG_PREFIX,
            label,
            report.service,
            report.method,
            report.record_count,
            report.duration_ms,
        )


@dataclass
class RecordingDiagnostics:
    """Collects reports in memory (views use it to flag demo data)."""

    reports: list[FetchReport] = field(default_factory=list)
    forward: DiagnosticsSink | None = None

    def __call__(self, report: FetchReport) -> None:
        self.reports.append(report)
        if self.forward is not None:
            self.forward(report)

    @property
    def used_fallback(self) -> bool:
        return any(r.is_fallback for r in self.reports)

    def sources(self) -> dict[str, str]:
        return {f"{r.service}.{r.method}": r.source for r in self.reports}


class RefreshCounter:
    """Process-wide refresh-cycle counter, created once at startup and injected."""

    def __init__(self, start: int = 0):
        self._count = start

    @property
    def count(self) -> int:
        return self._count

    def log_cycle(self, trigger: str) -> int:
        self._count += 1
        logger.info(
            "%s Refresh #%s triggered by: %s at %s",
            LOG_PREFIX,
            self._count,
            trigger,
            datetime.now().strftime("%H:%M:%S"),
        )
        return self._count


def log_view_load(view: str, duration_ms: int, summary: Mapping[str, object] | None = None) -> None:
    logger.info("%s View loaded: %s in %sms", LOG_PREFIX, view, duration_ms)
    for key, val in (summary or {}).items():
        logger.info("%s   %s: %s", LOG_PREFIX, key, val)
