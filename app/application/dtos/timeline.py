"""DTOs for the deployment timeline (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import TimelineSort


@dataclass(frozen=True)
class TruckSummary:
    """Resolved truck reference."""

    id: str
    plate_no: str
    truck_type: str | None
    status: str | None


@dataclass(frozen=True)
class DriverSummary:
    """Resolved driver reference."""

    id: str
    firstname: str
    lastname: str
    status: str | None
    phone_no: str | None = None


@dataclass(frozen=True)
class ActorSummary:
    """Actor who performed a timeline action. No credential fields."""

    id: str
    email: str
    role: str
    company: str | None
    firstname: str | None
    lastname: str | None


@dataclass(frozen=True)
class ReplacementSummary:
    """Substitute truck and/or driver attached to a deployment."""

    truck: TruckSummary | None = None
    driver: DriverSummary | None = None
    reason: str | None = None


@dataclass(frozen=True)
class DeploymentSummary:
    """Resolved target deployment with its truck, driver, and replacement."""

    id: str
    deployment_code: str
    status: str
    request_from: str
    destination: str | None
    sacks_count: int
    load_weight_kg: float
    created_at: datetime
    truck: TruckSummary | None = None
    driver: DriverSummary | None = None
    replacement: ReplacementSummary | None = None

    @property
    def effective_truck(self) -> TruckSummary | None:
        """Replacement truck when present, otherwise the original."""
        if self.replacement is not None and self.replacement.truck is not None:
            return self.replacement.truck
        return self.truck

    @property
    def effective_driver(self) -> DriverSummary | None:
        """Replacement driver when present, otherwise the original."""
        if self.replacement is not None and self.replacement.driver is not None:
            return self.replacement.driver
        return self.driver


@dataclass(frozen=True)
class TimelineEntryResult:
    """Timeline entry with actor and deployment resolved."""

    id: str
    action: str
    status: str | None
    timestamp: datetime
    performed_by: ActorSummary | None
    deployment: DeploymentSummary | None


@dataclass(frozen=True)
class TimelineQuery:
    """Parsed timeline request parameters.

    day_start/day_end are the UTC bounds of the requested calendar day
    (end exclusive); both None when no day filter was given.
    """

    status: str | None = None
    search: str | None = None
    sort: TimelineSort = TimelineSort.LATEST
    page: int = 1
    per_page: int = 40
    day_start: datetime | None = None
    day_end: datetime | None = None
    request_from: str | None = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True)
class TimelinePage:
    """One page of timeline entries plus pagination metadata."""

    total: int
    page: int
    total_pages: int
    entries: list[TimelineEntryResult] = field(default_factory=list)
