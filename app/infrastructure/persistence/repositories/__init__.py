"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.fleet_metrics_repo import (
    FleetMetricsRepository,
)
from app.infrastructure.persistence.repositories.timeline_log_repo import (
    TimelineLogRepository,
)

__all__ = [
    "FleetMetricsRepository",
    "TimelineLogRepository",
]
