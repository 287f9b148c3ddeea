"""Domain enumerations for the fleet.

Enums represent fixed sets of domain values (roles, fleet statuses). Status
columns are stored as plain strings so rows with values outside these sets are
still counted; the enums name the values the dashboard and timeline rely on.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ActorRole(_ValuesMixin, str, Enum):
    """Role of the authenticated actor. Decides tenancy visibility."""

    VISITOR = "visitor"
    ADMIN = "admin"
    HEAD_ADMIN = "head_admin"

    @property
    def is_administrative(self) -> bool:
        """True for roles that see every company's records."""
        return self in (ActorRole.ADMIN, ActorRole.HEAD_ADMIN)


class TruckStatus(_ValuesMixin, str, Enum):
    """Truck availability status."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    DEPLOYED = "deployed"
    MAINTENANCE = "maintenance"


class DriverStatus(_ValuesMixin, str, Enum):
    """Driver availability status."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    DEPLOYED = "deployed"


class DeploymentStatus(_ValuesMixin, str, Enum):
    """Deployment lifecycle status.

    display_name is the label shown on dashboard charts. Adding a member
    without a display name fails the enum tests.
    """

    PENDING = "pending"
    PREPARING = "preparing"
    ONGOING = "ongoing"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELED = "canceled"

    @property
    def display_name(self) -> str:
        """Human-readable label for charts."""
        return _DEPLOYMENT_STATUS_DISPLAY[self]

    @classmethod
    def label_for(cls, raw: str | None) -> str:
        """Return the display label for a raw status value.

        Known statuses map through the display table; unknown values fall back
        to the raw value, and a missing value becomes "Unknown".
        """
        if not raw:
            return "Unknown"
        try:
            return cls(raw).display_name
        except ValueError:
            return raw


_DEPLOYMENT_STATUS_DISPLAY: dict[DeploymentStatus, str] = {
    DeploymentStatus.COMPLETED: "Completed",
    DeploymentStatus.ONGOING: "Ongoing",
    DeploymentStatus.IN_PROGRESS: "In Progress",
    DeploymentStatus.PENDING: "Pending",
    DeploymentStatus.CANCELED: "Cancelled",
    DeploymentStatus.PREPARING: "Preparing",
}

# Statuses counted as "active" on the dashboard.
ACTIVE_DEPLOYMENT_STATUSES: tuple[DeploymentStatus, ...] = (
    DeploymentStatus.ONGOING,
    DeploymentStatus.IN_PROGRESS,
)

# Finalized statuses: the monthly trend and success rate only consider these.
FINALIZED_DEPLOYMENT_STATUSES: tuple[DeploymentStatus, ...] = (
    DeploymentStatus.COMPLETED,
    DeploymentStatus.CANCELED,
)

# Trucks in service (activeTrucks).
ACTIVE_TRUCK_STATUSES: tuple[TruckStatus, ...] = (
    TruckStatus.AVAILABLE,
    TruckStatus.DEPLOYED,
)


class TimelineSort(_ValuesMixin, str, Enum):
    """Timeline ordering by entry timestamp."""

    OLDEST = "oldest"
    LATEST = "latest"

    @classmethod
    def parse(cls, raw: str | None) -> "TimelineSort":
        """Return the sort for raw; anything unrecognised means LATEST."""
        try:
            return cls(raw) if raw else cls.LATEST
        except ValueError:
            return cls.LATEST
