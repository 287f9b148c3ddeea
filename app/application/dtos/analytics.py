"""DTOs for the operations dashboard (no dependency on ORM).

Rollups are what the store returns; the chart and summary types are what
the dashboard use case assembles from them.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CategoryCount:
    """One row of a grouped count. key is None when the column was null."""

    key: str | None
    count: int


@dataclass(frozen=True)
class MonthlyStatusCount:
    """Deployments with one status created in one (year, month) bucket."""

    year: int
    month: int
    status: str
    count: int


@dataclass(frozen=True)
class MonthlyTotal:
    """Sum of a deployment quantity (sacks or weight) for one (year, month)."""

    year: int
    month: int
    total: float
    deployment_count: int


@dataclass(frozen=True)
class DriverRanking:
    """Driver row for the top-by-trips ranking."""

    id: str
    name: str
    trip_count: int
    status: str | None
    phone_no: str | None
    image_url: str | None


@dataclass(frozen=True)
class CargoTotals:
    """Sacks and weight summed over every non-canceled, in-scope deployment."""

    total_sacks: float = 0
    total_weight: float = 0


@dataclass
class DashboardRollups:
    """Raw results of the dashboard fan-out, one attribute per sub-query."""

    total_trucks: int = 0
    total_drivers: int = 0
    active_deployments: int = 0
    available_trucks: int = 0
    available_drivers: int = 0
    unavailable_trucks: int = 0
    inactive_drivers: int = 0
    completed_deployments: int = 0
    canceled_deployments: int = 0
    pending_deployments: int = 0
    preparing_deployments: int = 0
    deployments_last_7_days: int = 0
    deployments_last_30_days: int = 0
    total_deployments: int = 0
    active_trucks: int = 0
    truck_status: list[CategoryCount] = field(default_factory=list)
    truck_types: list[CategoryCount] = field(default_factory=list)
    driver_status: list[CategoryCount] = field(default_factory=list)
    deployment_status: list[CategoryCount] = field(default_factory=list)
    top_drivers: list[DriverRanking] = field(default_factory=list)
    monthly_deployments: list[MonthlyStatusCount] = field(default_factory=list)
    monthly_sacks: list[MonthlyTotal] = field(default_factory=list)
    monthly_weight: list[MonthlyTotal] = field(default_factory=list)
    top_destinations: list[CategoryCount] = field(default_factory=list)
    cargo_totals: CargoTotals = field(default_factory=CargoTotals)


@dataclass(frozen=True)
class CategorySeries:
    """Label/count series for a categorical chart."""

    labels: list[str] = field(default_factory=list)
    data: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class MonthlyDeploymentSeries:
    """Completed vs canceled per month, aligned on one label sequence."""

    labels: list[str] = field(default_factory=list)
    completed_data: list[int] = field(default_factory=list)
    canceled_data: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class MonthlyTotalSeries:
    """Monthly sums with the number of deployments behind each bucket."""

    labels: list[str] = field(default_factory=list)
    data: list[float] = field(default_factory=list)
    deployment_counts: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardCharts:
    """All chart series shown on the dashboard."""

    monthly_deployments: MonthlyDeploymentSeries
    monthly_sacks: MonthlyTotalSeries
    monthly_weight: MonthlyTotalSeries
    deployment_status: CategorySeries
    destinations: CategorySeries
    truck_types: CategorySeries
    truck_status: CategorySeries
    driver_status: CategorySeries


@dataclass(frozen=True)
class DashboardMetrics:
    """Counts plus the rates derived from them after the fan-out.

    Rates are percentages rounded to one decimal and clamped to [0, 100];
    a rate whose denominator is zero is 0.
    """

    total_trucks: int
    total_drivers: int
    active_trucks: int
    available_trucks: int
    available_drivers: int
    unavailable_trucks: int
    inactive_drivers: int
    total_deployments: int
    active_deployments: int
    total_ongoing_deployments: int
    completed_deployments: int
    canceled_deployments: int
    pending_deployments: int
    preparing_deployments: int
    deployments_last_7_days: int
    deployments_last_30_days: int
    total_sacks: float
    total_weight: float
    completion_rate: float
    cancellation_rate: float
    success_rate: float
    utilization_rate: float


@dataclass(frozen=True)
class DashboardAnalytics:
    """Dashboard result: metrics, charts, and top drivers."""

    metrics: DashboardMetrics
    charts: DashboardCharts
    top_drivers: list[DriverRanking]
    generated_at: datetime
