"""TableService: the generic fetch-or-fallback primitive shared by every data source."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence

from .config import REQUEST_TIMEOUT_SECONDS
from .diagnostics import SOURCE_API, SOURCE_MOCK, DiagnosticsSink, FetchReport, LoggingDiagnostics
from .models import FetchFailureKind, FetchResult, Record
from .servicenow_client import ServiceNowAPI
from .synthetic import SyntheticRecordGenerator

logger = logging.getLogger(__name__)

FallbackFactory = Callable[[], list[Record]]


def records_or_fallback(result: FetchResult, fallback: FallbackFactory) -> list[Record]:
    """Return the fetched records, or the fallback's records on any failure."""
    if result.ok:
        return result.records
    return fallback()


class TableService:
    """Base class for one Table API entity.

    Subclasses expose base accessors built on :meth:`_fetch_or_fallback` and
    derived accessors that post-process exactly one base accessor call.
    """

    service_name = "TableService"
    table = ""

    def __init__(
        self,
        api: ServiceNowAPI,
        *,
        generator: SyntheticRecordGenerator | None = None,
        diagnostics: DiagnosticsSink | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.api = api
        self.generator = generator or SyntheticRecordGenerator()
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self.timeout = timeout

    # ------------------ Fetch Primitive ------------------
    async def _fetch(
        self,
        *,
        query: str | None,
        fields: Sequence[str],
        limit: int,
        table: str | None = None,
    ) -> FetchResult:
        """One network round trip raced against ``self.timeout``."""
        try:
            return await asyncio.wait_for(
                self.api.fetch_table(table or self.table, query=query, fields=fields, limit=limit),
                timeout=self.timeout,
            )
        except TimeoutError:
            return FetchResult.failed(FetchFailureKind.TIMEOUT, f"No response within {self.timeout:g}s")
        except Exception as exc:
            # Anything else raised while talking to the instance counts as transport failure
            return FetchResult.failed(FetchFailureKind.TRANSPORT, f"{type(exc).__name__}: {exc}")

    async def _fetch_or_fallback(
        self,
        method: str,
        *,
        query: str | None,
        fields: Sequence[str],
        limit: int,
        fallback: FallbackFactory,
        table: str | None = None,
    ) -> list[Record]:
        t0 = time.perf_counter()
        logger.debug("%s.%s() query=%s", self.service_name, method, query)
        result = await self._fetch(query=query, fields=fields, limit=limit, table=table)
        records = records_or_fallback(result, fallback)[:limit]
        self._report(
            FetchReport(
                service=self.service_name,
                method=method,
                source=SOURCE_API if result.ok else SOURCE_MOCK,
                duration_ms=round((time.perf_counter() - t0) * 1000),
                record_count=len(records),
                error=None if result.ok else str(result.failure),
            )
        )
        return records

    def _report(self, report: FetchReport) -> None:
        try:
            self.diagnostics(report)
        except Exception as exc:
            logger.warning("Diagnostics sink failed for %s.%s: %s", report.service, report.method, exc)
