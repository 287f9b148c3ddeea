"""Timeline log repository. Read side; implements ITimelineLogRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ColumnElement, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.application.dtos.timeline import (
    ActorSummary,
    DeploymentSummary,
    DriverSummary,
    ReplacementSummary,
    TimelineEntryResult,
    TruckSummary,
)
from app.domain.enums import TimelineSort
from app.infrastructure.persistence.models.deployment import Deployment
from app.infrastructure.persistence.models.driver import Driver
from app.infrastructure.persistence.models.timeline_log import TimelineLog
from app.infrastructure.persistence.models.truck import Truck
from app.infrastructure.persistence.models.user import User
from app.shared.utils.datetime import ensure_utc


def _truck_to_summary(
    row: Truck | None, include_soft_deleted: bool = False
) -> TruckSummary | None:
    if row is None or (row.is_soft_deleted and not include_soft_deleted):
        return None
    return TruckSummary(
        id=row.id, plate_no=row.plate_no, truck_type=row.truck_type, status=row.status
    )


def _driver_to_summary(
    row: Driver | None, include_soft_deleted: bool = False
) -> DriverSummary | None:
    if row is None or (row.is_soft_deleted and not include_soft_deleted):
        return None
    return DriverSummary(
        id=row.id,
        firstname=row.firstname,
        lastname=row.lastname,
        status=row.status,
        phone_no=row.phone_no,
    )


def _actor_to_summary(row: User | None) -> ActorSummary | None:
    if row is None:
        return None
    return ActorSummary(
        id=row.id,
        email=row.email,
        role=row.role,
        company=row.company,
        firstname=row.firstname,
        lastname=row.lastname,
    )


def _deployment_to_summary(
    row: Deployment | None, include_soft_deleted: bool = False
) -> DeploymentSummary | None:
    """Map deployment ORM to DTO; soft-deleted rows resolve to None unless included."""
    if row is None or (row.is_soft_deleted and not include_soft_deleted):
        return None
    replacement = None
    if (
        row.replacement_truck_id is not None
        or row.replacement_driver_id is not None
        or row.replacement_reason
    ):
        replacement = ReplacementSummary(
            truck=_truck_to_summary(row.replacement_truck, include_soft_deleted),
            driver=_driver_to_summary(row.replacement_driver, include_soft_deleted),
            reason=row.replacement_reason,
        )
    return DeploymentSummary(
        id=row.id,
        deployment_code=row.deployment_code,
        status=row.status,
        request_from=row.request_from,
        destination=row.destination,
        sacks_count=row.sacks_count or 0,
        load_weight_kg=row.load_weight_kg or 0.0,
        created_at=ensure_utc(row.created_at),
        truck=_truck_to_summary(row.truck, include_soft_deleted),
        driver=_driver_to_summary(row.driver, include_soft_deleted),
        replacement=replacement,
    )


def _orm_to_result(
    row: TimelineLog, include_soft_deleted: bool = False
) -> TimelineEntryResult:
    """Map ORM to application DTO."""
    return TimelineEntryResult(
        id=row.id,
        action=row.action,
        status=row.status,
        timestamp=ensure_utc(row.timestamp),
        performed_by=_actor_to_summary(row.actor),
        deployment=_deployment_to_summary(row.deployment, include_soft_deleted),
    )


def _conditions(
    status: str | None,
    day_start: datetime | None,
    day_end: datetime | None,
    company: str | None = None,
) -> list[ColumnElement[bool]]:
    """Store-side filters. company keeps entries whose live deployment it requested."""
    conditions: list[ColumnElement[bool]] = []
    if company is not None:
        conditions.append(
            TimelineLog.deployment.has(
                and_(
                    Deployment.request_from == company,
                    Deployment.is_soft_deleted.is_(False),
                )
            )
        )
    if status is not None:
        conditions.append(TimelineLog.status == status)
    if day_start is not None:
        conditions.append(TimelineLog.timestamp >= day_start)
    if day_end is not None:
        conditions.append(TimelineLog.timestamp < day_end)
    return conditions


class TimelineLogRepository:
    """Timeline log reads with actor and deployment references resolved."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_entries(
        self,
        *,
        status: str | None = None,
        day_start: datetime | None = None,
        day_end: datetime | None = None,
        company: str | None = None,
        sort: TimelineSort = TimelineSort.LATEST,
        skip: int | None = None,
        limit: int | None = None,
        include_soft_deleted: bool = False,
    ) -> list[TimelineEntryResult]:
        """List entries ordered by timestamp then id; window only when given.

        company restricts to entries whose deployment that company requested.

        Soft-deleted deployments, trucks, and drivers resolve to None unless
        include_soft_deleted is set.
        """
        if sort is TimelineSort.OLDEST:
            order_by = (TimelineLog.timestamp.asc(), TimelineLog.id.asc())
        else:
            order_by = (TimelineLog.timestamp.desc(), TimelineLog.id.desc())
        stmt = (
            select(TimelineLog)
            .options(
                selectinload(TimelineLog.actor).load_only(
                    User.id,
                    User.email,
                    User.role,
                    User.company,
                    User.firstname,
                    User.lastname,
                ),
                selectinload(TimelineLog.deployment).options(
                    selectinload(Deployment.truck),
                    selectinload(Deployment.driver),
                    selectinload(Deployment.replacement_truck),
                    selectinload(Deployment.replacement_driver),
                ),
            )
            .where(*_conditions(status, day_start, day_end, company))
            .order_by(*order_by)
        )
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return [
            _orm_to_result(row, include_soft_deleted) for row in result.scalars().all()
        ]

    async def count_entries(
        self,
        *,
        status: str | None = None,
        day_start: datetime | None = None,
        day_end: datetime | None = None,
        company: str | None = None,
    ) -> int:
        """Count entries matching status, day window, and company."""
        stmt = (
            select(func.count())
            .select_from(TimelineLog)
            .where(*_conditions(status, day_start, day_end, company))
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()
