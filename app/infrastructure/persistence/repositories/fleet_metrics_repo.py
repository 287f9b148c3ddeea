"""Fleet metrics repository: read-only dashboard queries.

Implements IFleetMetricsRepository. Each method opens its own session from
the factory so the dashboard can run them concurrently; an AsyncSession is
not safe to share between tasks.

Monthly buckets take year and month from created_at as the database session
reports it (UTC for the stored timestamps). TIMEZONE only shapes the
timeline day filter, so a deployment created just after local midnight on
the first of a month can land in the previous month's bucket.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, Select, extract, false, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.analytics import (
    CargoTotals,
    CategoryCount,
    DriverRanking,
    MonthlyStatusCount,
    MonthlyTotal,
)
from app.application.services.tenancy_scope import CompanyScope
from app.domain.enums import DeploymentStatus
from app.infrastructure.persistence.models.deployment import Deployment
from app.infrastructure.persistence.models.driver import Driver
from app.infrastructure.persistence.models.truck import Truck


def scope_conditions(scope: CompanyScope) -> list[ColumnElement[bool]]:
    """WHERE conditions restricting deployments to scope."""
    if scope.unrestricted:
        return []
    if scope.company is None:
        return [false()]
    return [Deployment.request_from == scope.company]


class FleetMetricsRepository:
    """Counts, distributions, rankings, and monthly sums over the fleet."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def _scalar(self, stmt: Select[Any]) -> Any:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def _rows(self, stmt: Select[Any]) -> list[Any]:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.all())

    def _deployment_conditions(
        self, scope: CompanyScope, *extra: ColumnElement[bool]
    ) -> list[ColumnElement[bool]]:
        return [Deployment.is_soft_deleted.is_(False), *scope_conditions(scope), *extra]

    async def count_trucks(self, statuses: Sequence[str] | None = None) -> int:
        """Count live trucks, optionally only those with one of statuses."""
        conditions = [Truck.is_soft_deleted.is_(False)]
        if statuses is not None:
            conditions.append(Truck.status.in_(statuses))
        return await self._scalar(
            select(func.count()).select_from(Truck).where(*conditions)
        )

    async def count_drivers(self, statuses: Sequence[str] | None = None) -> int:
        """Count live drivers, optionally only those with one of statuses."""
        conditions = [Driver.is_soft_deleted.is_(False)]
        if statuses is not None:
            conditions.append(Driver.status.in_(statuses))
        return await self._scalar(
            select(func.count()).select_from(Driver).where(*conditions)
        )

    async def count_deployments(
        self,
        scope: CompanyScope,
        statuses: Sequence[str] | None = None,
        created_from: datetime | None = None,
        created_before: datetime | None = None,
    ) -> int:
        """Count in-scope deployments; created window is half-open."""
        conditions = self._deployment_conditions(scope)
        if statuses is not None:
            conditions.append(Deployment.status.in_(statuses))
        if created_from is not None:
            conditions.append(Deployment.created_at >= created_from)
        if created_before is not None:
            conditions.append(Deployment.created_at < created_before)
        return await self._scalar(
            select(func.count()).select_from(Deployment).where(*conditions)
        )

    async def _distribution(
        self, column: Any, *conditions: ColumnElement[bool]
    ) -> list[CategoryCount]:
        count = func.count().label("count")
        stmt = (
            select(column, count)
            .where(*conditions)
            .group_by(column)
            .order_by(count.desc(), column.asc())
        )
        return [CategoryCount(key=row[0], count=row[1]) for row in await self._rows(stmt)]

    async def truck_status_distribution(self) -> list[CategoryCount]:
        return await self._distribution(Truck.status, Truck.is_soft_deleted.is_(False))

    async def truck_type_distribution(self) -> list[CategoryCount]:
        return await self._distribution(
            Truck.truck_type, Truck.is_soft_deleted.is_(False)
        )

    async def driver_status_distribution(self) -> list[CategoryCount]:
        return await self._distribution(
            Driver.status, Driver.is_soft_deleted.is_(False)
        )

    async def deployment_status_distribution(
        self, scope: CompanyScope, statuses: Sequence[str]
    ) -> list[CategoryCount]:
        return await self._distribution(
            Deployment.status,
            *self._deployment_conditions(scope, Deployment.status.in_(statuses)),
        )

    async def top_drivers_by_trips(self, limit: int) -> list[DriverRanking]:
        """Live drivers by trip count descending; equal counts ordered by id."""
        stmt = (
            select(
                Driver.id,
                Driver.firstname,
                Driver.lastname,
                Driver.trip_count,
                Driver.status,
                Driver.phone_no,
                Driver.image_url,
            )
            .where(Driver.is_soft_deleted.is_(False))
            .order_by(Driver.trip_count.desc(), Driver.id.asc())
            .limit(limit)
        )
        return [
            DriverRanking(
                id=row.id,
                name=f"{row.firstname} {row.lastname}",
                trip_count=row.trip_count or 0,
                status=row.status,
                phone_no=row.phone_no,
                image_url=row.image_url,
            )
            for row in await self._rows(stmt)
        ]

    async def monthly_status_counts(
        self, scope: CompanyScope, statuses: Sequence[str]
    ) -> list[MonthlyStatusCount]:
        """In-scope deployments with one of statuses per (year, month, status)."""
        year = extract("year", Deployment.created_at).label("year")
        month = extract("month", Deployment.created_at).label("month")
        stmt = (
            select(year, month, Deployment.status, func.count().label("count"))
            .where(*self._deployment_conditions(scope, Deployment.status.in_(statuses)))
            .group_by(year, month, Deployment.status)
            .order_by(year.asc(), month.asc(), Deployment.status.asc())
        )
        return [
            MonthlyStatusCount(
                year=int(row.year),
                month=int(row.month),
                status=row.status,
                count=row.count,
            )
            for row in await self._rows(stmt)
        ]

    async def _monthly_totals(self, column: Any, scope: CompanyScope) -> list[MonthlyTotal]:
        year = extract("year", Deployment.created_at).label("year")
        month = extract("month", Deployment.created_at).label("month")
        stmt = (
            select(
                year,
                month,
                func.coalesce(func.sum(column), 0).label("total"),
                func.count().label("deployment_count"),
            )
            .where(
                *self._deployment_conditions(
                    scope, Deployment.status != DeploymentStatus.CANCELED.value
                )
            )
            .group_by(year, month)
            .order_by(year.asc(), month.asc())
        )
        return [
            MonthlyTotal(
                year=int(row.year),
                month=int(row.month),
                total=row.total,
                deployment_count=row.deployment_count,
            )
            for row in await self._rows(stmt)
        ]

    async def monthly_sacks(self, scope: CompanyScope) -> list[MonthlyTotal]:
        return await self._monthly_totals(Deployment.sacks_count, scope)

    async def monthly_weight(self, scope: CompanyScope) -> list[MonthlyTotal]:
        return await self._monthly_totals(Deployment.load_weight_kg, scope)

    async def top_destinations(
        self, scope: CompanyScope, limit: int
    ) -> list[CategoryCount]:
        """Most frequent non-empty destinations; equal counts ordered by name."""
        count = func.count().label("count")
        stmt = (
            select(Deployment.destination, count)
            .where(
                *self._deployment_conditions(
                    scope,
                    Deployment.destination.is_not(None),
                    Deployment.destination != "",
                )
            )
            .group_by(Deployment.destination)
            .order_by(count.desc(), Deployment.destination.asc())
            .limit(limit)
        )
        return [CategoryCount(key=row[0], count=row[1]) for row in await self._rows(stmt)]

    async def cargo_totals(self, scope: CompanyScope) -> CargoTotals:
        """Sacks and weight summed over non-canceled in-scope deployments."""
        stmt = select(
            func.coalesce(func.sum(Deployment.sacks_count), 0),
            func.coalesce(func.sum(Deployment.load_weight_kg), 0),
        ).where(
            *self._deployment_conditions(
                scope, Deployment.status != DeploymentStatus.CANCELED.value
            )
        )
        rows = await self._rows(stmt)
        total_sacks, total_weight = rows[0]
        return CargoTotals(total_sacks=total_sacks, total_weight=total_weight)
