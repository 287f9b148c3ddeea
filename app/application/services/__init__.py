"""Application services: tenancy scope, chart projection, timeline filtering."""

from app.application.services.chart_projector import project_charts
from app.application.services.tenancy_scope import CompanyScope, resolve_scope
from app.application.services.timeline_filters import filter_entries

__all__ = [
    "CompanyScope",
    "filter_entries",
    "project_charts",
    "resolve_scope",
]
