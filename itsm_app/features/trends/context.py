"""Pure helpers to build the Trends context (no Streamlit)."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from itsm_app.analytics.metrics import trends
from itsm_app.core.batch import error_messages, gather_settled
from itsm_app.core.bundle import ServiceBundle
from itsm_app.core.diagnostics import log_view_load
from itsm_app.core.models import DashboardFilters


@dataclass(slots=True)
class TrendsContext:
    interval: str
    incident_trends: list[trends.Point] = field(default_factory=list)
    change_trends: list[trends.Point] = field(default_factory=list)
    sla_trends: list[trends.Point] = field(default_factory=list)
    mttr_trends: list[trends.Point] = field(default_factory=list)
    classifications: dict[str, str] = field(default_factory=dict)
    totals: dict[str, int] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


async def _series(coro, builder, interval: str) -> list[trends.Point]:
    return builder(await coro, interval)


async def build_trends(services: ServiceBundle, filters: DashboardFilters, interval: str = "day") -> TrendsContext:
    """Four independent trend series issued as one batch.

    Each member fetches and reduces on its own, so a failing reduction only
    empties its own series.
    """
    t0 = time.perf_counter()
    results = await gather_settled(
        {
            "incidents": _series(services.incident.get_incident_time_series(filters), trends.count_series, interval),
            "changes": _series(services.change.get_change_time_series(filters), trends.count_series, interval),
            "sla": _series(services.sla.get_sla_performance(filters), trends.sla_compliance_series, interval),
            "mttr": _series(services.incident.get_resolved_incidents(filters), trends.mttr_series, interval),
        }
    )
    series = {name: settled.value_or([]) for name, settled in results.items()}
    ctx = TrendsContext(
        interval=interval,
        incident_trends=series["incidents"],
        change_trends=series["changes"],
        sla_trends=series["sla"],
        mttr_trends=series["mttr"],
        classifications={name: trends.classify_trend(points) for name, points in series.items()},
        totals={
            "incidents": sum(p["count"] for p in series["incidents"]),
            "changes": sum(p["count"] for p in series["changes"]),
        },
        errors=error_messages(results),
    )
    log_view_load(
        "Trends",
        round((time.perf_counter() - t0) * 1000),
        {name: f"{len(points)} data points" for name, points in series.items()},
    )
    return ctx
