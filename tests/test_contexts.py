import random

import httpx
import pytest

from itsm_app.analytics.metrics import trends
from itsm_app.core.bundle import build_services
from itsm_app.core.config import ServiceNowSettings
from itsm_app.core.diagnostics import RecordingDiagnostics
from itsm_app.core.models import DashboardFilters
from itsm_app.core.synthetic import SyntheticRecordGenerator
from itsm_app.features.details.context import build_changes, build_incidents, build_mttr, build_sla
from itsm_app.features.overview.context import build_overview
from itsm_app.features.trends.context import build_trends


def _offline_services():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    recorder = RecordingDiagnostics()
    services = build_services(
        ServiceNowSettings(instance_url="https://example.service-now.com"),
        diagnostics=recorder,
        generator=SyntheticRecordGenerator(rng=random.Random(42)),
        transport=httpx.MockTransport(handler),
    )
    return services, recorder


@pytest.mark.asyncio
async def test_overview_on_demo_data():
    services, recorder = _offline_services()
    ctx = await build_overview(services, DashboardFilters())

    assert ctx.total_incidents == 35
    assert ctx.total_changes == 25
    assert 0 <= ctx.open_incidents <= 35
    assert 0 <= ctx.sla_compliance <= 100
    assert 0 <= ctx.health_score <= 100
    assert ctx.avg_mttr > 0
    assert ctx.errors == {}
    assert recorder.used_fallback
    assert len(recorder.reports) == 4


@pytest.mark.asyncio
async def test_trends_on_demo_data():
    services, _ = _offline_services()
    ctx = await build_trends(services, DashboardFilters(), "week")

    assert ctx.interval == "week"
    assert ctx.totals == {"incidents": 35, "changes": 25}
    assert set(ctx.classifications) == {"incidents", "changes", "sla", "mttr"}
    dates = [p["date"] for p in ctx.incident_trends]
    assert dates == sorted(dates)
    assert all(d.weekday() == 0 for d in dates)


@pytest.mark.asyncio
async def test_trends_failing_calculator_only_empties_its_series(monkeypatch):
    def broken(records, interval):
        raise RuntimeError("bad reduction")

    monkeypatch.setattr(trends, "mttr_series", broken)
    services, _ = _offline_services()
    ctx = await build_trends(services, DashboardFilters())

    assert ctx.mttr_trends == []
    assert "mttr" in ctx.errors
    assert ctx.incident_trends
    assert ctx.change_trends


@pytest.mark.asyncio
async def test_detail_contexts_on_demo_data():
    services, _ = _offline_services()
    filters = DashboardFilters()

    mttr_ctx = await build_mttr(services, filters)
    assert mttr_ctx.summary.count == 25
    assert sum(b["count"] for b in mttr_ctx.distribution) == 25
    assert len(mttr_ctx.fastest) == 5
    assert mttr_ctx.fastest[0]["hours"] <= mttr_ctx.slowest[0]["hours"]

    sla_ctx = await build_sla(services, filters)
    assert sla_ctx.compliance["total"] == 50
    assert sla_ctx.compliance["compliant"] + sla_ctx.compliance["breached"] == 50
    assert sla_ctx.breach_count == sla_ctx.compliance["breached"]
    assert sla_ctx.sla_types == ["Response Time", "Resolution Time"]

    change_ctx = await build_changes(services, filters)
    assert change_ctx.total == 25
    assert sum(change_ctx.by_state.values()) == 25
    assert 0 <= change_ctx.success_rate <= 100

    incident_ctx = await build_incidents(services, filters)
    assert incident_ctx.total == 35
    assert sum(incident_ctx.by_priority.values()) == 35
