"""Pure helpers to build the Overview context (no Streamlit)."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from itsm_app.analytics.metrics import health, mttr
from itsm_app.analytics.metrics.incidents import count_open
from itsm_app.core.batch import error_messages, gather_settled
from itsm_app.core.bundle import ServiceBundle
from itsm_app.core.diagnostics import log_view_load
from itsm_app.core.models import DashboardFilters


@dataclass(slots=True)
class OverviewContext:
    total_incidents: int = 0
    open_incidents: int = 0
    total_changes: int = 0
    sla_compliance: float = 0
    avg_mttr: float = 0
    median_mttr: float = 0
    health_score: int = 0
    insights: list[health.Insight] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)


async def build_overview(services: ServiceBundle, filters: DashboardFilters) -> OverviewContext:
    t0 = time.perf_counter()
    results = await gather_settled(
        {
            "incidents": services.incident.get_open_incidents(filters),
            "changes": services.change.get_changes(filters),
            "sla": services.sla.get_sla_compliance_rate(filters),
            "resolved": services.incident.get_resolved_incidents(filters),
        }
    )
    incidents = results["incidents"].value_or([])
    changes = results["changes"].value_or([])
    sla_rate = results["sla"].value_or({"rate": 0})["rate"]
    summary = mttr.summarize_mttr(results["resolved"].value_or([]))
    open_count = count_open(incidents)

    ctx = OverviewContext(
        total_incidents=len(incidents),
        open_incidents=open_count,
        total_changes=len(changes),
        sla_compliance=sla_rate,
        avg_mttr=summary.avg,
        median_mttr=summary.median,
        health_score=health.health_score(sla_rate, summary.avg, open_count),
        insights=health.overview_insights(sla_rate, summary.avg, summary.median, open_count),
        errors=error_messages(results),
    )
    log_view_load(
        "Overview",
        round((time.perf_counter() - t0) * 1000),
        {
            "incidents (open)": f"{len(incidents)} records",
            "changes": f"{len(changes)} records",
            "sla compliance": f"{sla_rate}%",
            "resolved incidents": f"{summary.count} with positive MTTR",
        },
    )
    return ctx
