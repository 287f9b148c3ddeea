"""Timeline log API schemas."""

from datetime import datetime

from pydantic import Field

from app.application.dtos.timeline import (
    DeploymentSummary,
    TimelineEntryResult,
    TimelinePage,
)
from app.schemas.base import CamelModel


class TruckResponse(CamelModel):
    id: str
    plate_no: str
    truck_type: str | None = None
    status: str | None = None


class DriverResponse(CamelModel):
    id: str
    firstname: str
    lastname: str
    status: str | None = None
    phone_no: str | None = None


class ActorResponse(CamelModel):
    """Actor who performed the action. Never carries credentials."""

    id: str
    email: str
    role: str
    company: str | None = None
    firstname: str | None = None
    lastname: str | None = None


class ReplacementResponse(CamelModel):
    truck: TruckResponse | None = None
    driver: DriverResponse | None = None
    reason: str | None = None


class TargetDeploymentResponse(CamelModel):
    """Deployment the action targeted, with the effective truck and driver.

    displayTruck/displayDriver are the replacement when one is attached,
    otherwise the original assignment.
    """

    id: str
    deployment_code: str
    status: str
    request_from: str
    destination: str | None = None
    sacks_count: int = 0
    load_weight_kg: float = 0
    created_at: datetime
    truck: TruckResponse | None = None
    driver: DriverResponse | None = None
    replacement: ReplacementResponse | None = None
    display_truck: TruckResponse | None = None
    display_driver: DriverResponse | None = None

    @classmethod
    def from_summary(cls, d: DeploymentSummary) -> "TargetDeploymentResponse":
        return cls(
            id=d.id,
            deployment_code=d.deployment_code,
            status=d.status,
            request_from=d.request_from,
            destination=d.destination,
            sacks_count=d.sacks_count,
            load_weight_kg=d.load_weight_kg,
            created_at=d.created_at,
            truck=TruckResponse.model_validate(d.truck) if d.truck else None,
            driver=DriverResponse.model_validate(d.driver) if d.driver else None,
            replacement=(
                ReplacementResponse.model_validate(d.replacement)
                if d.replacement
                else None
            ),
            display_truck=(
                TruckResponse.model_validate(d.effective_truck)
                if d.effective_truck
                else None
            ),
            display_driver=(
                DriverResponse.model_validate(d.effective_driver)
                if d.effective_driver
                else None
            ),
        )


class TimelineLogResponse(CamelModel):
    """One timeline entry."""

    id: str
    action: str
    status: str | None = None
    timestamp: datetime
    performed_by: ActorResponse | None = None
    target_deployment: TargetDeploymentResponse | None = None

    @classmethod
    def from_result(cls, entry: TimelineEntryResult) -> "TimelineLogResponse":
        return cls(
            id=entry.id,
            action=entry.action,
            status=entry.status,
            timestamp=entry.timestamp,
            performed_by=(
                ActorResponse.model_validate(entry.performed_by)
                if entry.performed_by
                else None
            ),
            target_deployment=(
                TargetDeploymentResponse.from_summary(entry.deployment)
                if entry.deployment
                else None
            ),
        )


class TimelineLogListResponse(CamelModel):
    """Response for GET /timeline-logs."""

    total: int
    page: int
    total_pages: int
    timeline_logs: list[TimelineLogResponse] = Field(default_factory=list)

    @classmethod
    def from_page(cls, page: TimelinePage) -> "TimelineLogListResponse":
        return cls(
            total=page.total,
            page=page.page,
            total_pages=page.total_pages,
            timeline_logs=[TimelineLogResponse.from_result(e) for e in page.entries],
        )
