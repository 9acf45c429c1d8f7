"""Central configuration, constants, and shared field definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# ServiceNow Connection Settings
# =============================================================================
SERVICENOW_DEFAULT_INSTANCE = "https://your-instance.service-now.com"
TABLE_API_PATH = "/api/now/table"
TIMEZONE = "UTC"

INCIDENT_TABLE = "incident"
CHANGE_TABLE = "change_request"
SLA_TABLE = "task_sla"
SLA_DEFINITION_TABLE = "contract_sla"

# =============================================================================
# Request Limits
# =============================================================================
DEFAULT_RECORD_LIMIT: int = 2000
MIN_RECORD_LIMIT: int = 500
MAX_RECORD_LIMIT: int = 10000
SLA_TYPES_LIMIT: int = 20
DEFAULT_DATE_WINDOW_DAYS: int = 120
REQUEST_TIMEOUT_SECONDS: float = 10.0

# =============================================================================
# Field Projections
# =============================================================================
OPEN_INCIDENT_FIELDS: Sequence[str] = (
    "sys_id",
    "number",
    "short_description",
    "priority",
    "state",
    "category",
    "assigned_to",
    "sys_created_on",
)

RESOLVED_INCIDENT_FIELDS: Sequence[str] = (
    "sys_id",
    "number",
    "sys_created_on",
    "resolved_at",
    "priority",
    "category",
)

CHANGE_FIELDS: Sequence[str] = (
    "sys_id",
    "number",
    "short_description",
    "state",
    "type",
    "assigned_to",
    "sys_created_on",
)

SLA_FIELDS: Sequence[str] = (
    "sys_id",
    "task",
    "sla",
    "stage",
    "has_breached",
    "percentage",
    "sys_created_on",
)

SLA_DEFINITION_FIELDS: Sequence[str] = ("name",)

# =============================================================================
# Synthetic Fallback Sizes
# =============================================================================
SYNTHETIC_INCIDENT_COUNT = 35
SYNTHETIC_RESOLVED_COUNT = 25
SYNTHETIC_CHANGE_COUNT = 25
SYNTHETIC_SLA_COUNT = 50
SYNTHETIC_MAX_RESOLUTION_HOURS = 72
SYNTHETIC_BREACH_PROBABILITY = 0.15

# =============================================================================
# Priority Configuration
# =============================================================================
PRIORITY_LABELS: Sequence[str] = ("P1", "P2", "P3", "P4")
DEFAULT_PRIORITY_LABEL = "P4"

# =============================================================================
# Workflow State Configuration
# =============================================================================
INCIDENT_RESOLVED_CODE = "6"

# Map incident state labels and codes to canonical names.
# Keys should be lowercase for case-insensitive matching
INCIDENT_STATE_ALIASES: dict[str, str] = {
    "1": "New",
    "new": "New",
    "2": "In Progress",
    "in progress": "In Progress",
    "3": "On Hold",
    "on hold": "On Hold",
    "6": "Resolved",
    "resolved": "Resolved",
    "7": "Closed",
    "closed": "Closed",
    "8": "Canceled",
    "canceled": "Canceled",
    "cancelled": "Canceled",
}

# Display labels are matched first; numeric keys are the ServiceNow change codes.
CHANGE_STATE_ALIASES: dict[str, str] = {
    "new": "New",
    "-5": "New",
    "assess": "Assess",
    "-4": "Assess",
    "authorize": "Authorize",
    "-3": "Authorize",
    "scheduled": "Scheduled",
    "-2": "Scheduled",
    "implement": "Implement",
    "-1": "Implement",
    "review": "Review",
    "0": "Review",
    "completed": "Completed",
    "complete": "Completed",
    "successful": "Completed",
    "closed": "Closed",
    "3": "Closed",
    "failed": "Failed",
    "unsuccessful": "Failed",
    "cancelled": "Cancelled",
    "canceled": "Cancelled",
    "4": "Cancelled",
}

# States eligible for a success/fail verdict
CHANGE_TERMINAL_STATES: frozenset[str] = frozenset({"Completed", "Closed", "Failed", "Cancelled"})
CHANGE_SUCCESS_STATE = "Completed"

CHANGE_TYPES: Sequence[str] = ("Standard", "Normal", "Emergency")

# =============================================================================
# Metric Constants
# =============================================================================
# Placeholder returned when no SLA records are available.
SLA_COMPLIANCE_SENTINEL: dict[str, float | int] = {
    "rate": 92.5,
    "total": 100,
    "breached": 7,
    "compliant": 93,
}

TREND_WINDOW = 5
TREND_THRESHOLD = 0.10

TIME_INTERVALS: Sequence[str] = ("day", "week", "month")

# (label, lower hours, upper hours); the last bucket is unbounded
MTTR_BUCKETS: Sequence[tuple[str, float, float]] = (
    ("0-4h", 0, 4),
    ("4-8h", 4, 8),
    ("8-16h", 8, 16),
    ("16-24h", 16, 24),
    ("1-2d", 24, 48),
    ("2-7d", 48, 168),
    ("7d+", 168, float("inf")),
)

MTTR_TARGET_HOURS = 8
MTTR_LIMIT_HOURS = 24
SLA_TARGET_RATE = 95
SLA_WARNING_RATE = 85
OPEN_INCIDENT_WARNING = 50
TOP_N_RESOLUTIONS = 5


@dataclass(slots=True)
class ServiceNowSettings:
    instance_url: str = SERVICENOW_DEFAULT_INSTANCE
    token: str = ""
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    record_limit: int = DEFAULT_RECORD_LIMIT


SETTINGS = ServiceNowSettings()
