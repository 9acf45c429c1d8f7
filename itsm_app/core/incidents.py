"""IncidentService: open and resolved incident accessors with synthetic fallback."""

from __future__ import annotations

from typing import Any

from itsm_app.analytics.metrics import incidents as incident_metrics
from itsm_app.analytics.metrics import mttr

from .config import INCIDENT_RESOLVED_CODE, INCIDENT_TABLE, OPEN_INCIDENT_FIELDS, RESOLVED_INCIDENT_FIELDS
from .models import DashboardFilters, Record
from .query import encode_query
from .service import TableService


class IncidentService(TableService):
    service_name = "IncidentService"
    table = INCIDENT_TABLE

    # ------------------ Base Accessors ------------------
    async def get_open_incidents(self, filters: DashboardFilters | None = None) -> list[Record]:
        filters = filters or DashboardFilters()
        query = encode_query(
            filters.resolved_range(),
            [
                ("priority", filters.priority),
                ("category", filters.category),
                ("assignment_group.name", filters.assignment_group),
            ],
            fixed_clauses=["active=true"],
        )
        return await self._fetch_or_fallback(
            "get_open_incidents",
            query=query,
            fields=OPEN_INCIDENT_FIELDS,
            limit=filters.record_limit,
            fallback=self.generator.incidents,
        )

    async def get_resolved_incidents(self, filters: DashboardFilters | None = None) -> list[Record]:
        filters = filters or DashboardFilters()
        query = encode_query(
            filters.resolved_range(),
            [
                ("priority", filters.priority),
                ("category", filters.category),
            ],
            fixed_clauses=[f"state={INCIDENT_RESOLVED_CODE}"],
        )
        return await self._fetch_or_fallback(
            "get_resolved_incidents",
            query=query,
            fields=RESOLVED_INCIDENT_FIELDS,
            limit=filters.record_limit,
            fallback=self.generator.resolved_incidents,
        )

    # ------------------ Derived Accessors ------------------
    async def get_incident_counts_by_priority(self, filters: DashboardFilters | None = None) -> dict[str, int]:
        return incident_metrics.count_by_priority(await self.get_open_incidents(filters))

    async def get_incidents_by_category(self, filters: DashboardFilters | None = None) -> dict[str, int]:
        return incident_metrics.count_by_category(await self.get_open_incidents(filters))

    async def get_incident_time_series(self, filters: DashboardFilters | None = None) -> list[dict[str, Any]]:
        return incident_metrics.time_series_rows(await self.get_open_incidents(filters))

    async def get_resolution_durations(self, filters: DashboardFilters | None = None) -> list[float]:
        """Strictly positive resolution times in hours."""
        return [hours for _, hours in mttr.resolution_hours(await self.get_resolved_incidents(filters))]
