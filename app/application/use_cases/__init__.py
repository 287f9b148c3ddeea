"""Application use cases: one entry point per workflow."""

from app.application.use_cases.analytics import GetDashboardAnalyticsUseCase
from app.application.use_cases.timeline import ListTimelineLogsUseCase

__all__ = [
    "GetDashboardAnalyticsUseCase",
    "ListTimelineLogsUseCase",
]
