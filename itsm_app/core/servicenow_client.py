"""ServiceNow Table API client wrapper (single-request async fetches)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from .config import REQUEST_TIMEOUT_SECONDS, TABLE_API_PATH
from .mappers import decode_records
from .models import FetchFailureKind, FetchResult

logger = logging.getLogger(__name__)


class ServiceNowAPI:
    def __init__(
        self,
        instance_url: str,
        token: str = "",
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.instance_url = instance_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        # Injected transport is used by tests (httpx.MockTransport)
        self._transport = transport

    def table_url(self, table: str) -> str:
        return f"{self.instance_url}{TABLE_API_PATH}/{table}"

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-UserToken": self.token or "",
        }

    async def fetch_table(
        self,
        table: str,
        *,
        query: str | None = None,
        fields: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> FetchResult:
        """Issue exactly one GET against ``table`` and decode the result.

        Every failure (transport, non-2xx status, undecodable payload) is
        returned as a failed :class:`FetchResult` instead of being raised.
        """
        url = self.table_url(table)
        params: dict[str, str | int] = {"sysparm_display_value": "all"}
        if query:
            params["sysparm_query"] = query
        if fields:
            params["sysparm_fields"] = ",".join(fields)
        if limit:
            params["sysparm_limit"] = limit
        logger.debug("GET %s params=%s", url, params)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(url, params=params, headers=self._headers())
        except httpx.TimeoutException as exc:
            return FetchResult.failed(FetchFailureKind.TIMEOUT, f"Request timed out: {exc}")
        except httpx.HTTPError as exc:
            return FetchResult.failed(FetchFailureKind.TRANSPORT, f"Request failed: {exc}")

        if not resp.is_success:
            return FetchResult.failed(
                FetchFailureKind.STATUS,
                f"HTTP {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )
        try:
            records = decode_records(resp.json())
        except ValueError as exc:
            return FetchResult.failed(FetchFailureKind.DECODE, f"Undecodable payload: {exc}")
        return FetchResult.success(records)
