"""Pydantic response schemas for the API."""

from app.schemas.dashboard import DashboardAnalyticsResponse
from app.schemas.health import HealthResponse
from app.schemas.timeline import TimelineLogListResponse

__all__ = [
    "DashboardAnalyticsResponse",
    "HealthResponse",
    "TimelineLogListResponse",
]
