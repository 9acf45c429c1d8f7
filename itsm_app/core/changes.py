"""ChangeService: change request accessors with synthetic fallback."""

from __future__ import annotations

from typing import Any

from itsm_app.analytics.metrics import changes as change_metrics

from .config import CHANGE_FIELDS, CHANGE_TABLE
from .models import DashboardFilters, Record
from .query import encode_query
from .service import TableService


class ChangeService(TableService):
    service_name = "ChangeService"
    table = CHANGE_TABLE

    # ------------------ Base Accessor ------------------
    async def get_changes(self, filters: DashboardFilters | None = None) -> list[Record]:
        filters = filters or DashboardFilters()
        query = encode_query(
            filters.resolved_range(),
            [
                ("state", filters.change_state),
                ("type", filters.change_type),
                ("assignment_group.name", filters.assignment_group),
            ],
        )
        return await self._fetch_or_fallback(
            "get_changes",
            query=query,
            fields=CHANGE_FIELDS,
            limit=filters.record_limit,
            fallback=self.generator.changes,
        )

    # ------------------ Derived Accessors ------------------
    async def get_changes_by_state(self, filters: DashboardFilters | None = None) -> dict[str, int]:
        return change_metrics.count_by_state(await self.get_changes(filters))

    async def get_change_type_breakdown(self, filters: DashboardFilters | None = None) -> dict[str, int]:
        return change_metrics.count_by_type(await self.get_changes(filters))

    async def get_successful_changes(self, filters: DashboardFilters | None = None) -> list[Record]:
        return change_metrics.successful(await self.get_changes(filters))

    async def get_change_success_rate(self, filters: DashboardFilters | None = None) -> int:
        return change_metrics.success_rate(await self.get_changes(filters))

    async def get_change_time_series(self, filters: DashboardFilters | None = None) -> list[dict[str, Any]]:
        return change_metrics.time_series_rows(await self.get_changes(filters))
