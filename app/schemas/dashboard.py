"""Dashboard analytics API schemas.

Key names follow the dashboard frontend contract (camelCase). The overview
block carries utilization, completion, and cancellation rates as one-decimal
strings ("66.7") when their denominator is positive and 0 otherwise;
performanceMetrics carries the same rates as numbers.
"""

from datetime import datetime

from pydantic import Field

from app.application.dtos.analytics import (
    CategorySeries,
    DashboardAnalytics,
    DashboardMetrics,
    DriverRanking,
    MonthlyDeploymentSeries,
    MonthlyTotalSeries,
)
from app.schemas.base import CamelModel


def rate_text(rate: float, denominator: int) -> str | float:
    """One-decimal string when denominator > 0, else 0."""
    if denominator > 0:
        return f"{rate:.1f}"
    return 0


class OverviewResponse(CamelModel):
    """Headline counts and rates."""

    total_trucks: int
    total_drivers: int
    active_deployments: int
    available_trucks: int
    available_drivers: int
    trucks_in_maintenance: int
    trucks_under_maintenance: int
    inactive_drivers: int
    completed_deployments: int
    cancelled_deployments: int
    pending_deployments: int
    preparing_deployments: int
    recent_deployments: int
    deployments_last_7_days: int
    deployments_last_30_days: int
    total_sacks: float
    total_weight: float
    utilization_rate: str | float
    completion_rate: str | float
    cancellation_rate: str | float
    success_rate: float

    @classmethod
    def from_metrics(cls, m: DashboardMetrics) -> "OverviewResponse":
        return cls(
            total_trucks=m.total_trucks,
            total_drivers=m.total_drivers,
            active_deployments=m.total_ongoing_deployments,
            available_trucks=m.available_trucks,
            available_drivers=m.available_drivers,
            trucks_in_maintenance=m.unavailable_trucks,
            trucks_under_maintenance=m.unavailable_trucks,
            inactive_drivers=m.inactive_drivers,
            completed_deployments=m.completed_deployments,
            cancelled_deployments=m.canceled_deployments,
            pending_deployments=m.pending_deployments,
            preparing_deployments=m.preparing_deployments,
            recent_deployments=m.deployments_last_7_days,
            deployments_last_7_days=m.deployments_last_7_days,
            deployments_last_30_days=m.deployments_last_30_days,
            total_sacks=m.total_sacks,
            total_weight=m.total_weight,
            utilization_rate=rate_text(m.utilization_rate, m.available_trucks),
            completion_rate=rate_text(m.completion_rate, m.total_deployments),
            cancellation_rate=rate_text(m.cancellation_rate, m.total_deployments),
            success_rate=m.success_rate,
        )


class PerformanceMetricsResponse(CamelModel):
    """Overview mirror with numeric rates."""

    total_deployments: int
    completed_deployments: int
    ongoing_deployments: int
    cancelled_deployments: int
    pending_deployments: int
    preparing_deployments: int
    total_trucks: int
    active_trucks: int
    available_trucks: int
    total_drivers: int
    available_drivers: int
    total_sacks: float
    total_weight: float
    completion_rate: float
    cancellation_rate: float
    success_rate: float
    utilization_rate: float

    @classmethod
    def from_metrics(cls, m: DashboardMetrics) -> "PerformanceMetricsResponse":
        return cls(
            total_deployments=m.total_deployments,
            completed_deployments=m.completed_deployments,
            ongoing_deployments=m.total_ongoing_deployments,
            cancelled_deployments=m.canceled_deployments,
            pending_deployments=m.pending_deployments,
            preparing_deployments=m.preparing_deployments,
            total_trucks=m.total_trucks,
            active_trucks=m.active_trucks,
            available_trucks=m.available_trucks,
            total_drivers=m.total_drivers,
            available_drivers=m.available_drivers,
            total_sacks=m.total_sacks,
            total_weight=m.total_weight,
            completion_rate=m.completion_rate,
            cancellation_rate=m.cancellation_rate,
            success_rate=m.success_rate,
            utilization_rate=m.utilization_rate,
        )


class CategorySeriesResponse(CamelModel):
    labels: list[str] = Field(default_factory=list)
    data: list[int] = Field(default_factory=list)


class MonthlyDeploymentSeriesResponse(CamelModel):
    labels: list[str] = Field(default_factory=list)
    completed_data: list[int] = Field(default_factory=list)
    canceled_data: list[int] = Field(default_factory=list)


class MonthlyTotalSeriesResponse(CamelModel):
    labels: list[str] = Field(default_factory=list)
    data: list[float] = Field(default_factory=list)
    deployment_counts: list[int] = Field(default_factory=list)


class ChartsResponse(CamelModel):
    """Chart series keyed by chart name."""

    monthly_deployments: MonthlyDeploymentSeriesResponse
    monthly_sacks: MonthlyTotalSeriesResponse
    monthly_weight: MonthlyTotalSeriesResponse
    deployment_status: CategorySeriesResponse
    destinations: CategorySeriesResponse
    truck_types: CategorySeriesResponse
    truck_status: CategorySeriesResponse
    driver_status: CategorySeriesResponse


class TopDriverResponse(CamelModel):
    """Driver ranked by completed trips."""

    id: str
    name: str
    trip_count: int
    status: str | None = None
    phone_no: str | None = None
    image_url: str | None = None


class DashboardDataResponse(CamelModel):
    overview: OverviewResponse
    charts: ChartsResponse
    top_drivers: list[TopDriverResponse] = Field(default_factory=list)
    performance_metrics: PerformanceMetricsResponse


class DashboardAnalyticsResponse(CamelModel):
    """Response for GET /dashboard/analytics."""

    success: bool = True
    data: DashboardDataResponse
    timestamp: datetime

    @classmethod
    def from_result(cls, result: DashboardAnalytics) -> "DashboardAnalyticsResponse":
        charts = result.charts
        return cls(
            data=DashboardDataResponse(
                overview=OverviewResponse.from_metrics(result.metrics),
                charts=ChartsResponse(
                    monthly_deployments=_monthly_deployments(charts.monthly_deployments),
                    monthly_sacks=_monthly_totals(charts.monthly_sacks),
                    monthly_weight=_monthly_totals(charts.monthly_weight),
                    deployment_status=_categories(charts.deployment_status),
                    destinations=_categories(charts.destinations),
                    truck_types=_categories(charts.truck_types),
                    truck_status=_categories(charts.truck_status),
                    driver_status=_categories(charts.driver_status),
                ),
                top_drivers=[_driver(d) for d in result.top_drivers],
                performance_metrics=PerformanceMetricsResponse.from_metrics(
                    result.metrics
                ),
            ),
            timestamp=result.generated_at,
        )


def _categories(series: CategorySeries) -> CategorySeriesResponse:
    return CategorySeriesResponse(labels=series.labels, data=series.data)


def _monthly_deployments(series: MonthlyDeploymentSeries) -> MonthlyDeploymentSeriesResponse:
    return MonthlyDeploymentSeriesResponse(
        labels=series.labels,
        completed_data=series.completed_data,
        canceled_data=series.canceled_data,
    )


def _monthly_totals(series: MonthlyTotalSeries) -> MonthlyTotalSeriesResponse:
    return MonthlyTotalSeriesResponse(
        labels=series.labels,
        data=series.data,
        deployment_counts=series.deployment_counts,
    )


def _driver(driver: DriverRanking) -> TopDriverResponse:
    return TopDriverResponse(
        id=driver.id,
        name=driver.name,
        trip_count=driver.trip_count,
        status=driver.status,
        phone_no=driver.phone_no,
        image_url=driver.image_url,
    )
