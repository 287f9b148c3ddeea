"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.deployment import Deployment
from app.infrastructure.persistence.models.driver import Driver
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    FleetRecordModel,
    SoftDeleteMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.timeline_log import TimelineLog
from app.infrastructure.persistence.models.truck import Truck
from app.infrastructure.persistence.models.user import User

__all__ = [
    "CuidMixin",
    "Deployment",
    "Driver",
    "FleetRecordModel",
    "SoftDeleteMixin",
    "TimelineLog",
    "TimestampMixin",
    "Truck",
    "User",
]
