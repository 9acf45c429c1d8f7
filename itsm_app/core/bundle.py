"""Wiring of the three data sources around one client, generator, and diagnostics sink."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from .changes import ChangeService
from .config import ServiceNowSettings
from .diagnostics import DiagnosticsSink, LoggingDiagnostics
from .incidents import IncidentService
from .servicenow_client import ServiceNowAPI
from .sla import SLAService
from .synthetic import SyntheticRecordGenerator


@dataclass(slots=True)
class ServiceBundle:
    incident: IncidentService
    change: ChangeService
    sla: SLAService


def build_services(
    settings: ServiceNowSettings,
    *,
    diagnostics: DiagnosticsSink | None = None,
    generator: SyntheticRecordGenerator | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceBundle:
    api = ServiceNowAPI(
        settings.instance_url,
        settings.token,
        timeout=settings.request_timeout,
        transport=transport,
    )
    sink = diagnostics or LoggingDiagnostics()
    gen = generator or SyntheticRecordGenerator()
    kwargs = {"generator": gen, "diagnostics": sink, "timeout": settings.request_timeout}
    return ServiceBundle(
        incident=IncidentService(api, **kwargs),
        change=ChangeService(api, **kwargs),
        sla=SLAService(api, **kwargs),
    )
