"""Analytics use case: fleet operations dashboard.

All rollups are independent reads issued concurrently in one task group;
derived rates are computed only after every read has returned. There is
no snapshot across the reads, so counts taken while deployments are being
written may be slightly out of step with each other.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from app.application.dtos.analytics import (
    DashboardAnalytics,
    DashboardMetrics,
    DashboardRollups,
)
from app.application.services.chart_projector import project_charts
from app.application.services.tenancy_scope import CompanyScope, resolve_scope
from app.domain.enums import (
    ACTIVE_DEPLOYMENT_STATUSES,
    ACTIVE_TRUCK_STATUSES,
    FINALIZED_DEPLOYMENT_STATUSES,
    DeploymentStatus,
    DriverStatus,
    TruckStatus,
)
from app.domain.exceptions import StoreFailureException
from app.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.dtos.actor import ActorContext
    from app.application.interfaces.repositories import IFleetMetricsRepository

logger = logging.getLogger(__name__)

ANALYTICS_ERROR_MESSAGE = "Error fetching analytics data"


def percentage(part: float, whole: float) -> float:
    """part / whole as a percentage, one decimal, clamped to [0, 100]; 0 if whole <= 0."""
    if whole <= 0:
        return 0.0
    return min(100.0, max(0.0, round(part / whole * 100, 1)))


def _values(statuses) -> list[str]:
    return [s.value for s in statuses]


class GetDashboardAnalyticsUseCase:
    """Build the operations dashboard for an actor."""

    def __init__(
        self,
        metrics_repo: "IFleetMetricsRepository",
        top_n: int = 10,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.metrics_repo = metrics_repo
        self.top_n = top_n
        self.clock = clock

    @traced("dashboard.get_analytics")
    async def get_dashboard_analytics(self, actor: "ActorContext") -> DashboardAnalytics:
        """Return metrics, charts, and top drivers visible to actor.

        Raises:
            StoreFailureException: If any rollup query fails. The other
                in-flight queries are cancelled; no partial result is returned.
        """
        scope = resolve_scope(actor)
        add_span_attributes(scope_unrestricted=scope.unrestricted)
        now = self.clock()
        try:
            rollups = await self._collect_rollups(scope, now)
        except ExceptionGroup as eg:
            cause = eg.exceptions[0]
            logger.error(
                "Dashboard rollup failed (%d of the queries raised): %s",
                len(eg.exceptions),
                cause,
                exc_info=cause,
            )
            raise StoreFailureException(ANALYTICS_ERROR_MESSAGE, error=str(cause)) from cause

        return DashboardAnalytics(
            metrics=derive_metrics(rollups),
            charts=project_charts(rollups),
            top_drivers=rollups.top_drivers,
            generated_at=now,
        )

    async def _collect_rollups(
        self, scope: CompanyScope, now: datetime
    ) -> DashboardRollups:
        """Fan out every rollup query and wait for all of them."""
        repo = self.metrics_repo
        last_7_days = now - timedelta(days=7)
        last_30_days = now - timedelta(days=30)
        logger.debug("Dashboard fan-out started (unrestricted=%s)", scope.unrestricted)

        async with asyncio.TaskGroup() as tg:
            total_trucks = tg.create_task(repo.count_trucks())
            total_drivers = tg.create_task(repo.count_drivers())
            active_deployments = tg.create_task(
                repo.count_deployments(scope, _values(ACTIVE_DEPLOYMENT_STATUSES))
            )
            available_trucks = tg.create_task(
                repo.count_trucks([TruckStatus.AVAILABLE.value])
            )
            available_drivers = tg.create_task(
                repo.count_drivers([DriverStatus.AVAILABLE.value])
            )
            unavailable_trucks = tg.create_task(
                repo.count_trucks([TruckStatus.UNAVAILABLE.value])
            )
            inactive_drivers = tg.create_task(
                repo.count_drivers([DriverStatus.UNAVAILABLE.value])
            )
            completed = tg.create_task(
                repo.count_deployments(scope, [DeploymentStatus.COMPLETED.value])
            )
            canceled = tg.create_task(
                repo.count_deployments(scope, [DeploymentStatus.CANCELED.value])
            )
            pending = tg.create_task(
                repo.count_deployments(scope, [DeploymentStatus.PENDING.value])
            )
            preparing = tg.create_task(
                repo.count_deployments(scope, [DeploymentStatus.PREPARING.value])
            )
            last_7 = tg.create_task(
                repo.count_deployments(
                    scope, created_from=last_7_days, created_before=now
                )
            )
            last_30 = tg.create_task(
                repo.count_deployments(
                    scope, created_from=last_30_days, created_before=now
                )
            )
            total_deployments = tg.create_task(repo.count_deployments(scope))
            active_trucks = tg.create_task(
                repo.count_trucks(_values(ACTIVE_TRUCK_STATUSES))
            )
            truck_status = tg.create_task(repo.truck_status_distribution())
            truck_types = tg.create_task(repo.truck_type_distribution())
            driver_status = tg.create_task(repo.driver_status_distribution())
            top_drivers = tg.create_task(repo.top_drivers_by_trips(self.top_n))
            deployment_status = tg.create_task(
                repo.deployment_status_distribution(scope, DeploymentStatus.values())
            )
            monthly_deployments = tg.create_task(
                repo.monthly_status_counts(
                    scope, _values(FINALIZED_DEPLOYMENT_STATUSES)
                )
            )
            monthly_sacks = tg.create_task(repo.monthly_sacks(scope))
            monthly_weight = tg.create_task(repo.monthly_weight(scope))
            top_destinations = tg.create_task(
                repo.top_destinations(scope, self.top_n)
            )
            cargo_totals = tg.create_task(repo.cargo_totals(scope))

        logger.debug("Dashboard fan-out finished")
        add_span_event("dashboard.rollups_collected")
        return DashboardRollups(
            total_trucks=total_trucks.result(),
            total_drivers=total_drivers.result(),
            active_deployments=active_deployments.result(),
            available_trucks=available_trucks.result(),
            available_drivers=available_drivers.result(),
            unavailable_trucks=unavailable_trucks.result(),
            inactive_drivers=inactive_drivers.result(),
            completed_deployments=completed.result(),
            canceled_deployments=canceled.result(),
            pending_deployments=pending.result(),
            preparing_deployments=preparing.result(),
            deployments_last_7_days=last_7.result(),
            deployments_last_30_days=last_30.result(),
            total_deployments=total_deployments.result(),
            active_trucks=active_trucks.result(),
            truck_status=truck_status.result(),
            truck_types=truck_types.result(),
            driver_status=driver_status.result(),
            deployment_status=deployment_status.result(),
            top_drivers=top_drivers.result(),
            monthly_deployments=monthly_deployments.result(),
            monthly_sacks=monthly_sacks.result(),
            monthly_weight=monthly_weight.result(),
            top_destinations=top_destinations.result(),
            cargo_totals=cargo_totals.result(),
        )


def derive_metrics(rollups: DashboardRollups) -> DashboardMetrics:
    """Compute rates and combined counts from the raw rollups."""
    completed = rollups.completed_deployments
    canceled = rollups.canceled_deployments
    total_ongoing = rollups.active_deployments + rollups.preparing_deployments
    return DashboardMetrics(
        total_trucks=rollups.total_trucks,
        total_drivers=rollups.total_drivers,
        active_trucks=rollups.active_trucks,
        available_trucks=rollups.available_trucks,
        available_drivers=rollups.available_drivers,
        unavailable_trucks=rollups.unavailable_trucks,
        inactive_drivers=rollups.inactive_drivers,
        total_deployments=rollups.total_deployments,
        active_deployments=rollups.active_deployments,
        total_ongoing_deployments=total_ongoing,
        completed_deployments=completed,
        canceled_deployments=canceled,
        pending_deployments=rollups.pending_deployments,
        preparing_deployments=rollups.preparing_deployments,
        deployments_last_7_days=rollups.deployments_last_7_days,
        deployments_last_30_days=rollups.deployments_last_30_days,
        total_sacks=rollups.cargo_totals.total_sacks or 0,
        total_weight=rollups.cargo_totals.total_weight or 0,
        completion_rate=percentage(completed, rollups.total_deployments),
        cancellation_rate=percentage(canceled, rollups.total_deployments),
        success_rate=percentage(completed, completed + canceled),
        utilization_rate=percentage(total_ongoing, rollups.available_trucks),
    )
