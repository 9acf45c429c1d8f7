from itsm_app.analytics.metrics import changes, health, mttr, sla
from itsm_app.analytics.metrics.incidents import count_by_category, count_by_priority, count_open
from itsm_app.core.config import SLA_COMPLIANCE_SENTINEL
from itsm_app.core.mappers import decode_records
from itsm_app.core.models import Display, Scalar


def _incident(priority, category="Network", state=("In Progress", "2")):
    return {
        "priority": Display(priority, priority[:1]) if priority else None,
        "category": Display(category, category.lower()),
        "state": Display(*state),
    }


def _resolved(created, resolved, priority="2", category="Software"):
    return {
        "sys_created_on": Scalar(created),
        "resolved_at": Scalar(resolved),
        "priority": Scalar(priority),
        "category": Scalar(category),
    }


def _sla(breached, name="Response Time", percentage=None):
    rec = {"has_breached": Scalar("true" if breached else "false"), "sla": Display(name, name.lower())}
    if percentage is not None:
        rec["percentage"] = Display(f"{percentage:.2f}", str(percentage))
    return rec


def test_count_by_priority_defaults_unparseable_to_p4():
    records = [_incident("1 - Critical"), _incident("3 - Moderate"), _incident("unknown")]
    counts = count_by_priority(records)
    assert counts == {"P1": 1, "P2": 0, "P3": 1, "P4": 1}
    assert sum(counts.values()) == len(records)


def test_count_by_priority_on_raw_json_fields():
    raw = [{"priority": "1"}, {"priority": None}, {"priority": {"display_value": "3"}}]
    expected = {"P1": 1, "P2": 0, "P3": 1, "P4": 1}
    assert count_by_priority(raw) == expected
    assert count_by_priority(decode_records({"result": raw})) == expected


def test_count_by_category_and_open():
    records = [_incident("1", "Network"), _incident("2", "Network"), _incident("3", "", ("Resolved", "6"))]
    assert count_by_category(records) == {"Network": 2, "Unknown": 1}
    assert count_open(records) == 2


def test_mttr_excludes_non_positive_and_missing():
    records = [
        _resolved("2024-01-01 00:00:00", "2024-01-01 04:00:00"),
        _resolved("2024-01-01 00:00:00", "2024-01-01 12:00:00"),
        _resolved("2024-01-01 00:00:00", "2024-01-01 00:00:00"),
        _resolved("2024-01-02 00:00:00", "2024-01-01 00:00:00"),
        {"sys_created_on": Scalar("2024-01-01 00:00:00")},
    ]
    pairs = mttr.resolution_hours(records)
    assert [h for _, h in pairs] == [4.0, 12.0]
    summary = mttr.summarize_mttr(records)
    assert summary.avg == 8.0
    assert summary.median == 8.0
    assert summary.count == 2


def test_mttr_breakdowns():
    records = [
        _resolved("2024-01-01 00:00:00", "2024-01-01 02:00:00", "1", "Network"),
        _resolved("2024-01-01 00:00:00", "2024-01-02 06:00:00", "3", "Software"),
        _resolved("2024-01-01 00:00:00", "2024-01-01 06:00:00", "3", "Software"),
    ]
    pairs = mttr.resolution_hours(records)
    by_priority = mttr.mttr_by_priority(pairs)
    assert list(by_priority) == ["P1", "P3"]
    assert by_priority["P3"]["avg"] == 18.0
    assert list(mttr.mttr_by_category(pairs)) == ["Software", "Network"]
    dist = mttr.mttr_distribution(h for _, h in pairs)
    assert sum(b["count"] for b in dist) == 3
    assert mttr.fastest(pairs, 1)[0][1] == 2.0
    assert mttr.slowest(pairs, 1)[0][1] == 30.0


def test_performance_score():
    assert mttr.performance_score(mttr.MTTRSummary(avg=4, median=4, count=3)) == 105
    assert mttr.performance_score(mttr.MTTRSummary(avg=30, median=10, count=3)) == 28
    assert mttr.performance_score(mttr.MTTRSummary(avg=100, median=100, count=3)) == 0


def test_compliance_rate_identity():
    records = [_sla(False)] * 7 + [_sla(True)] * 2
    out = sla.compliance_rate(records)
    assert out["total"] == 9
    assert out["breached"] == 2
    assert out["compliant"] + out["breached"] == out["total"]
    assert out["rate"] == 77.78


def test_compliance_rate_empty_is_sentinel_copy():
    out = sla.compliance_rate([])
    assert out == SLA_COMPLIANCE_SENTINEL
    out["rate"] = 0
    assert SLA_COMPLIANCE_SENTINEL["rate"] == 92.5


def test_compliance_by_type():
    records = [
        _sla(False, "Response Time", 80),
        _sla(True, "Response Time", 115.5),
        _sla(False, "Resolution Time"),
    ]
    by_type = {row["type"]: row for row in sla.compliance_by_type(records)}
    assert by_type["Response Time"]["compliance"] == 50
    assert by_type["Response Time"]["avg_percentage"] == 97.8
    assert by_type["Resolution Time"]["compliance"] == 100
    assert by_type["Resolution Time"]["avg_percentage"] == 0


def test_change_success_rate():
    records = [
        {"state": Display("Completed", "completed")},
        {"state": Display("Completed", "completed")},
        {"state": Display("Failed", "failed")},
        {"state": Display("New", "new")},
        {"state": Display("Scheduled", "scheduled")},
    ]
    assert changes.success_rate(records) == 67
    assert len(changes.successful(records)) == 2
    assert changes.count_by_state(records)["Completed"] == 2
    assert changes.success_rate([{"state": Display("New", "new")}]) == 0


def test_health_score_and_insights():
    assert health.health_score(99, 4, 10) == 100
    assert health.health_score(85, 34, 60) == 70
    assert health.health_level(95) == "success"
    assert health.health_level(75) == "warning"
    assert health.health_level(10) == "critical"
    insights = health.overview_insights(70, 40, 10, 150)
    assert len(insights) <= health.MAX_OVERVIEW_INSIGHTS
    assert insights[0].kind == "critical"
