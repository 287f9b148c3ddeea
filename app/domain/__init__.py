"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    ActorRole,
    DeploymentStatus,
    DriverStatus,
    TimelineSort,
    TruckStatus,
)
from app.domain.exceptions import (
    AuthenticationException,
    FleetViewException,
    SqlNotConfiguredException,
    StoreFailureException,
    ValidationException,
)

__all__ = [
    # Enums
    "ActorRole",
    "DeploymentStatus",
    "DriverStatus",
    "TimelineSort",
    "TruckStatus",
    # Exceptions
    "AuthenticationException",
    "FleetViewException",
    "SqlNotConfiguredException",
    "StoreFailureException",
    "ValidationException",
]
