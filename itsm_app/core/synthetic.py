"""Synthetic fallback records used when the Table API is unavailable.

Every generated field is a :class:`Display` pair so fallback records have
the same shape as ``sysparm_display_value=all`` responses. Values stay in
the real domain ranges (priorities 1-4, real state labels, resolution after
creation) so downstream statistics remain meaningful.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from .config import (
    CHANGE_TYPES,
    DEFAULT_DATE_WINDOW_DAYS,
    SYNTHETIC_BREACH_PROBABILITY,
    SYNTHETIC_CHANGE_COUNT,
    SYNTHETIC_INCIDENT_COUNT,
    SYNTHETIC_MAX_RESOLUTION_HOURS,
    SYNTHETIC_RESOLVED_COUNT,
    SYNTHETIC_SLA_COUNT,
)
from .models import Display, Record

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

CATEGORIES = ("Hardware", "Software", "Network", "Database")
ASSIGNEES = ("John Doe", "Jane Smith", "Bob Johnson")
CHANGE_ASSIGNEES = ("Alice Johnson", "Bob Wilson", "Carol Davis")
CHANGE_STATES = ("New", "Assess", "Scheduled", "Completed", "Failed")
SLA_DEFINITIONS = ("Response Time", "Resolution Time")


def _pair(display: str, raw: str | None = None) -> Display:
    return Display(display=display, raw=display if raw is None else raw)


def _stamp(ts: datetime) -> Display:
    return _pair(ts.strftime(TIMESTAMP_FORMAT))


class SyntheticRecordGenerator:
    def __init__(
        self,
        rng: random.Random | None = None,
        now: Callable[[], datetime] | None = None,
        window_days: int = DEFAULT_DATE_WINDOW_DAYS,
    ):
        self._rng = rng or random.Random()
        self._now = now or (lambda: datetime.now(UTC))
        self._window = timedelta(days=window_days)

    def _created(self, now: datetime) -> datetime:
        return now - self._window * self._rng.random()

    def _priority(self) -> Display:
        return _pair(str(self._rng.randint(1, 4)))

    def incidents(self, count: int = SYNTHETIC_INCIDENT_COUNT) -> list[Record]:
        now = self._now()
        out: list[Record] = []
        for i in range(count):
            resolved = self._rng.random() <= 0.3
            category = self._rng.choice(CATEGORIES)
            assignee_idx = self._rng.randrange(len(ASSIGNEES))
            out.append(
                {
                    "sys_id": _pair(f"mock_{i}"),
                    "number": _pair(f"INC000{1000 + i}"),
                    "short_description": _pair(f"Sample incident {i + 1} - System issue"),
                    "priority": self._priority(),
                    "state": _pair("Resolved", "6") if resolved else _pair("In Progress", "2"),
                    "category": _pair(category, category.lower()),
                    "assigned_to": _pair(ASSIGNEES[assignee_idx], f"user_{assignee_idx}"),
                    "sys_created_on": _stamp(self._created(now)),
                }
            )
        return out

    def resolved_incidents(self, count: int = SYNTHETIC_RESOLVED_COUNT) -> list[Record]:
        now = self._now()
        out: list[Record] = []
        for i in range(count):
            created = self._created(now)
            # Strictly positive offset, at least one minute
            hours = max(self._rng.random() * SYNTHETIC_MAX_RESOLUTION_HOURS, 1 / 60)
            resolved = created + timedelta(hours=hours)
            category = self._rng.choice(CATEGORIES[:3])
            out.append(
                {
                    "sys_id": _pair(f"resolved_{i}"),
                    "number": _pair(f"INC000{2000 + i}"),
                    "sys_created_on": _stamp(created),
                    "resolved_at": _stamp(resolved),
                    "priority": self._priority(),
                    "category": _pair(category, category.lower()),
                }
            )
        return out

    def changes(self, count: int = SYNTHETIC_CHANGE_COUNT) -> list[Record]:
        now = self._now()
        out: list[Record] = []
        for i in range(count):
            state = self._rng.choice(CHANGE_STATES)
            change_type = self._rng.choice(CHANGE_TYPES)
            assignee_idx = self._rng.randrange(len(CHANGE_ASSIGNEES))
            out.append(
                {
                    "sys_id": _pair(f"change_{i}"),
                    "number": _pair(f"CHG000{3000 + i}"),
                    "short_description": _pair(f"Change request {i + 1} - System upgrade"),
                    "state": _pair(state, state.lower()),
                    "type": _pair(change_type, change_type.lower()),
                    "assigned_to": _pair(CHANGE_ASSIGNEES[assignee_idx], f"user_{assignee_idx}"),
                    "sys_created_on": _stamp(self._created(now)),
                }
            )
        return out

    def sla_entries(self, count: int = SYNTHETIC_SLA_COUNT) -> list[Record]:
        now = self._now()
        out: list[Record] = []
        for i in range(count):
            breached = self._rng.random() < SYNTHETIC_BREACH_PROBABILITY
            base = 100 if breached else 70
            percentage = base + self._rng.random() * 30
            definition = SLA_DEFINITIONS[i % 2]
            out.append(
                {
                    "sys_id": _pair(f"sla_{i}"),
                    "task": _pair(f"INC000{4000 + i}", f"task_{i}"),
                    "sla": _pair(definition, f"sla_def_{i % 2}"),
                    "stage": _pair("Breached", "breached") if breached else _pair("Completed", "completed"),
                    "has_breached": _pair("true" if breached else "false"),
                    "percentage": _pair(f"{percentage:.2f}"),
                    "sys_created_on": _stamp(self._created(now)),
                }
            )
        return out

    def sla_types(self) -> list[Record]:
        return [{"name": _pair(name, name.lower().replace(" ", "_"))} for name in SLA_DEFINITIONS]
