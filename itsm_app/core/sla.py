"""SLAService: SLA-tracking accessors with synthetic fallback."""

from __future__ import annotations

from typing import Any

from itsm_app.analytics.metrics import sla as sla_metrics

from .config import SLA_DEFINITION_FIELDS, SLA_DEFINITION_TABLE, SLA_FIELDS, SLA_TABLE, SLA_TYPES_LIMIT
from .models import DashboardFilters, Record
from .query import encode_query
from .service import TableService


class SLAService(TableService):
    service_name = "SLAService"
    table = SLA_TABLE

    # ------------------ Base Accessors ------------------
    async def get_sla_performance(self, filters: DashboardFilters | None = None) -> list[Record]:
        filters = filters or DashboardFilters()
        query = encode_query(
            filters.resolved_range(),
            [
                ("task.priority", filters.priority),
                ("sla.name", filters.sla_type),
            ],
            fixed_clauses=["task.sys_class_name=incident"],
        )
        return await self._fetch_or_fallback(
            "get_sla_performance",
            query=query,
            fields=SLA_FIELDS,
            limit=filters.record_limit,
            fallback=self.generator.sla_entries,
        )

    async def get_sla_types(self) -> list[Record]:
        """SLA definitions available for the SLA-type filter."""
        return await self._fetch_or_fallback(
            "get_sla_types",
            query=None,
            fields=SLA_DEFINITION_FIELDS,
            limit=SLA_TYPES_LIMIT,
            fallback=self.generator.sla_types,
            table=SLA_DEFINITION_TABLE,
        )

    # ------------------ Derived Accessors ------------------
    async def get_sla_breaches(self, filters: DashboardFilters | None = None) -> list[Record]:
        return sla_metrics.breaches(await self.get_sla_performance(filters))

    async def get_sla_compliance_rate(self, filters: DashboardFilters | None = None) -> dict[str, float | int]:
        """Compliance from one fetched batch (never separate numerator/denominator fetches)."""
        return sla_metrics.compliance_rate(await self.get_sla_performance(filters))

    async def get_sla_compliance_by_type(self, filters: DashboardFilters | None = None) -> list[dict[str, Any]]:
        return sla_metrics.compliance_by_type(await self.get_sla_performance(filters))
