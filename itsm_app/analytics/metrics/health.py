"""Service health score and threshold-based insight messages."""

from __future__ import annotations

from dataclasses import dataclass

from itsm_app.core.config import (
    MTTR_LIMIT_HOURS,
    MTTR_TARGET_HOURS,
    OPEN_INCIDENT_WARNING,
    SLA_TARGET_RATE,
    SLA_WARNING_RATE,
)

from .stats import round_half_up

MAX_OVERVIEW_INSIGHTS = 4


@dataclass(frozen=True, slots=True)
class Insight:
    kind: str  # success | warning | critical | info
    title: str
    description: str


def health_score(sla_rate: float, avg_mttr: float, open_incidents: int) -> int:
    score = 100.0
    if sla_rate < SLA_TARGET_RATE:
        score -= (SLA_TARGET_RATE - sla_rate) * 0.8
    if avg_mttr > MTTR_LIMIT_HOURS:
        score -= min((avg_mttr - MTTR_LIMIT_HOURS) * 2, 30)
    if open_incidents > OPEN_INCIDENT_WARNING:
        score -= min((open_incidents - OPEN_INCIDENT_WARNING) * 0.2, 15)
    return max(int(round_half_up(score)), 0)


def health_level(score: int) -> str:
    if score >= 90:
        return "success"
    if score >= 70:
        return "warning"
    return "critical"


def overview_insights(sla_rate: float, avg_mttr: float, median_mttr: float, open_incidents: int) -> list[Insight]:
    out: list[Insight] = []
    if sla_rate >= SLA_TARGET_RATE:
        out.append(Insight("success", "SLA On Target", f"{sla_rate:.1f}% compliance"))
    elif sla_rate < SLA_WARNING_RATE:
        out.append(
            Insight("critical", "SLA Below Target", f"{sla_rate:.1f}% compliance - below {SLA_WARNING_RATE}% threshold")
        )

    if avg_mttr <= MTTR_TARGET_HOURS:
        out.append(Insight("success", "Fast Resolution", f"{avg_mttr:.1f}h average MTTR"))
    elif avg_mttr > MTTR_LIMIT_HOURS:
        out.append(
            Insight(
                "critical",
                "Slow Resolution",
                f"{avg_mttr:.1f}h average MTTR - exceeds {MTTR_LIMIT_HOURS}h target",
            )
        )

    if open_incidents > 2 * OPEN_INCIDENT_WARNING:
        out.append(Insight("warning", "High Volume", f"{open_incidents} open incidents"))

    gap = abs(avg_mttr - median_mttr)
    if gap > 8:
        out.append(
            Insight("warning", "MTTR Variance", f"{gap:.1f}h gap between average and median - outliers present")
        )
    return out[:MAX_OVERVIEW_INSIGHTS]


def sla_insights(rate: float, breach_count: int) -> list[Insight]:
    out: list[Insight] = []
    if rate >= 99:
        out.append(Insight("success", "Outstanding Performance", "SLA compliance exceeds 99%"))
    elif rate >= SLA_TARGET_RATE:
        out.append(Insight("success", "Excellent Compliance", "SLA performance meets target"))
    elif rate < SLA_WARNING_RATE:
        out.append(
            Insight("critical", "Critical SLA Issues", f"Compliance below {SLA_WARNING_RATE}% requires action")
        )
    if breach_count == 0:
        out.append(Insight("success", "Zero Breaches", "No SLA breaches in the current period"))
    elif breach_count > 10:
        out.append(Insight("warning", "High Breach Volume", f"{breach_count} breaches indicate systemic issues"))
    return out


def change_insights(success_rate: float, active_changes: int, emergency_changes: int) -> list[Insight]:
    out: list[Insight] = []
    if success_rate >= SLA_TARGET_RATE:
        out.append(Insight("success", "Excellent Success Rate", f"{success_rate:.1f}% of changes completed"))
    elif success_rate < 80:
        out.append(Insight("warning", "Low Success Rate", f"{success_rate:.1f}% success rate needs improvement"))
    if active_changes > 20:
        out.append(Insight("info", "High Change Volume", f"{active_changes} changes currently in progress"))
    if emergency_changes > 5:
        out.append(
            Insight("critical", "High Emergency Changes", f"{emergency_changes} emergency changes this period")
        )
    return out
