"""Pure helpers to build the per-domain detail contexts (no Streamlit).

Each builder derives all of its metrics from one fetched batch per entity,
so counts shown side by side always describe the same snapshot.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from itsm_app.analytics.metrics import changes as change_metrics
from itsm_app.analytics.metrics import health, mttr
from itsm_app.analytics.metrics import incidents as incident_metrics
from itsm_app.analytics.metrics import sla as sla_metrics
from itsm_app.core.batch import error_messages, gather_settled
from itsm_app.core.bundle import ServiceBundle
from itsm_app.core.config import TOP_N_RESOLUTIONS
from itsm_app.core.mappers import display, map_priority, normalize_change_state, text
from itsm_app.core.models import DashboardFilters, Record


def _resolution_row(pair: mttr.ResolvedPair) -> dict[str, Any]:
    rec, hours = pair
    return {
        "number": display(rec.get("number")),
        "priority": map_priority(rec.get("priority")),
        "category": text(rec.get("category")) or "Unknown",
        "hours": hours,
    }


@dataclass(slots=True)
class IncidentContext:
    total: int
    open_count: int
    by_priority: dict[str, int]
    by_category: dict[str, int]
    records: list[Record] = field(default_factory=list)


async def build_incidents(services: ServiceBundle, filters: DashboardFilters) -> IncidentContext:
    records = await services.incident.get_open_incidents(filters)
    return IncidentContext(
        total=len(records),
        open_count=incident_metrics.count_open(records),
        by_priority=incident_metrics.count_by_priority(records),
        by_category=incident_metrics.count_by_category(records),
        records=records,
    )


@dataclass(slots=True)
class MTTRContext:
    summary: mttr.MTTRSummary
    by_priority: dict[str, dict[str, float | int]]
    by_category: dict[str, dict[str, float | int]]
    distribution: list[dict[str, Any]]
    fastest: list[dict[str, Any]]
    slowest: list[dict[str, Any]]
    score: int


async def build_mttr(services: ServiceBundle, filters: DashboardFilters) -> MTTRContext:
    pairs = mttr.resolution_hours(await services.incident.get_resolved_incidents(filters))
    summary = mttr.summarize(h for _, h in pairs)
    return MTTRContext(
        summary=summary,
        by_priority=mttr.mttr_by_priority(pairs),
        by_category=mttr.mttr_by_category(pairs),
        distribution=mttr.mttr_distribution(h for _, h in pairs),
        fastest=[_resolution_row(p) for p in mttr.fastest(pairs, TOP_N_RESOLUTIONS)],
        slowest=[_resolution_row(p) for p in mttr.slowest(pairs, TOP_N_RESOLUTIONS)],
        score=mttr.performance_score(summary),
    )


@dataclass(slots=True)
class SLAContext:
    compliance: dict[str, float | int]
    breach_count: int
    by_type: list[dict[str, Any]]
    sla_types: list[str]
    insights: list[health.Insight] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)


async def build_sla(services: ServiceBundle, filters: DashboardFilters) -> SLAContext:
    results = await gather_settled(
        {
            "performance": services.sla.get_sla_performance(filters),
            "types": services.sla.get_sla_types(),
        }
    )
    records = results["performance"].value_or([])
    compliance = sla_metrics.compliance_rate(records)
    breach_count = len(sla_metrics.breaches(records))
    return SLAContext(
        compliance=compliance,
        breach_count=breach_count,
        by_type=sla_metrics.compliance_by_type(records),
        sla_types=[text(rec.get("name")) for rec in results["types"].value_or([])],
        insights=health.sla_insights(compliance["rate"], breach_count),
        errors=error_messages(results),
    )


@dataclass(slots=True)
class ChangeContext:
    total: int
    by_state: dict[str, int]
    by_type: dict[str, int]
    successful_count: int
    success_rate: int
    insights: list[health.Insight] = field(default_factory=list)


def _is_active_change(rec: Mapping[str, Any]) -> bool:
    return normalize_change_state(rec.get("state")) in {"New", "Assess"}


async def build_changes(services: ServiceBundle, filters: DashboardFilters) -> ChangeContext:
    records = await services.change.get_changes(filters)
    rate = change_metrics.success_rate(records)
    by_type = change_metrics.count_by_type(records)
    active = sum(1 for rec in records if _is_active_change(rec))
    return ChangeContext(
        total=len(records),
        by_state=change_metrics.count_by_state(records),
        by_type=by_type,
        successful_count=len(change_metrics.successful(records)),
        success_rate=rate,
        insights=health.change_insights(rate, active, by_type.get("Emergency", 0)),
    )
