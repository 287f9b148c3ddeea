"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from app.domain.enums import TimelineSort

if TYPE_CHECKING:
    from app.application.dtos.analytics import (
        CargoTotals,
        CategoryCount,
        DriverRanking,
        MonthlyStatusCount,
        MonthlyTotal,
    )
    from app.application.dtos.timeline import TimelineEntryResult
    from app.application.services.tenancy_scope import CompanyScope


class IFleetMetricsRepository(Protocol):
    """Read-only dashboard queries (DIP).

    Every method is an independent query that soft-deleted rows never
    reach. Deployment queries also take the caller's CompanyScope; trucks
    and drivers are shared across companies and are not scoped.
    Implementations must be safe to call concurrently.
    """

    async def count_trucks(self, statuses: Sequence[str] | None = None) -> int:
        """Count trucks, optionally only those with one of statuses."""

    async def count_drivers(self, statuses: Sequence[str] | None = None) -> int:
        """Count drivers, optionally only those with one of statuses."""

    async def count_deployments(
        self,
        scope: CompanyScope,
        statuses: Sequence[str] | None = None,
        created_from: datetime | None = None,
        created_before: datetime | None = None,
    ) -> int:
        """Count in-scope deployments; created window is [created_from, created_before)."""

    async def truck_status_distribution(self) -> list[CategoryCount]:
        """Trucks grouped by status."""

    async def truck_type_distribution(self) -> list[CategoryCount]:
        """Trucks grouped by truck type."""

    async def driver_status_distribution(self) -> list[CategoryCount]:
        """Drivers grouped by status."""

    async def deployment_status_distribution(
        self, scope: CompanyScope, statuses: Sequence[str]
    ) -> list[CategoryCount]:
        """In-scope deployments with one of statuses, grouped by status."""

    async def top_drivers_by_trips(self, limit: int) -> list[DriverRanking]:
        """Drivers by trip count descending (ties by id)."""

    async def monthly_status_counts(
        self, scope: CompanyScope, statuses: Sequence[str]
    ) -> list[MonthlyStatusCount]:
        """Deployments grouped by (year, month, status), ascending by month."""

    async def monthly_sacks(self, scope: CompanyScope) -> list[MonthlyTotal]:
        """Non-canceled deployments: sacks summed per (year, month)."""

    async def monthly_weight(self, scope: CompanyScope) -> list[MonthlyTotal]:
        """Non-canceled deployments: load weight summed per (year, month)."""

    async def top_destinations(
        self, scope: CompanyScope, limit: int
    ) -> list[CategoryCount]:
        """Most frequent non-empty destinations (ties by name)."""

    async def cargo_totals(self, scope: CompanyScope) -> CargoTotals:
        """Sacks and weight summed over non-canceled deployments."""


class ITimelineLogRepository(Protocol):
    """Storage-layer part of the timeline query (DIP)."""

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
        """Filtered, ordered entries with actor and deployment resolved.

        skip/limit None means the whole filtered set. company restricts to
        entries whose deployment (not soft-deleted) that company requested.
        Soft-deleted related rows resolve to None unless include_soft_deleted
        is set.
        """

    async def count_entries(
        self,
        *,
        status: str | None = None,
        day_start: datetime | None = None,
        day_end: datetime | None = None,
        company: str | None = None,
    ) -> int:
        """Count entries matching the storage-layer filters."""
