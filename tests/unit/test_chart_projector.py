"""Chart projection from dashboard rollups."""

from app.application.dtos.analytics import (
    CategoryCount,
    DashboardRollups,
    MonthlyStatusCount,
    MonthlyTotal,
)
from app.application.services.chart_projector import (
    month_label,
    project_categories,
    project_charts,
    project_monthly_deployments,
    project_monthly_totals,
)
from app.domain.enums import DeploymentStatus


def test_month_label_is_english_abbreviation() -> None:
    assert month_label(2025, 3) == "Mar 2025"
    assert month_label(2024, 12) == "Dec 2024"


def test_monthly_deployments_union_of_months_fills_missing_status() -> None:
    rows = [
        MonthlyStatusCount(year=2025, month=3, status="canceled", count=2),
        MonthlyStatusCount(year=2025, month=1, status="completed", count=4),
        MonthlyStatusCount(year=2025, month=3, status="completed", count=1),
        MonthlyStatusCount(year=2024, month=12, status="canceled", count=1),
    ]
    series = project_monthly_deployments(rows)
    assert series.labels == ["Dec 2024", "Jan 2025", "Mar 2025"]
    assert series.completed_data == [0, 4, 1]
    assert series.canceled_data == [1, 0, 2]


def test_monthly_totals_keep_bucket_order_and_counts() -> None:
    rows = [
        MonthlyTotal(year=2025, month=1, total=120, deployment_count=3),
        MonthlyTotal(year=2025, month=2, total=80.5, deployment_count=2),
    ]
    series = project_monthly_totals(rows)
    assert series.labels == ["Jan 2025", "Feb 2025"]
    assert series.data == [120, 80.5]
    assert series.deployment_counts == [3, 2]


def test_categories_label_missing_keys_unknown() -> None:
    rows = [
        CategoryCount(key="available", count=3),
        CategoryCount(key=None, count=2),
        CategoryCount(key="", count=1),
    ]
    series = project_categories(rows)
    assert series.labels == ["available", "Unknown", "Unknown"]
    assert series.data == [3, 2, 1]


def test_deployment_status_uses_display_names() -> None:
    rows = [
        CategoryCount(key="in-progress", count=2),
        CategoryCount(key="canceled", count=1),
        CategoryCount(key="archived", count=1),
    ]
    series = project_categories(rows, label=DeploymentStatus.label_for)
    assert series.labels == ["In Progress", "Cancelled", "archived"]


def test_empty_rollups_project_to_empty_arrays() -> None:
    charts = project_charts(DashboardRollups())
    for series in (
        charts.deployment_status,
        charts.destinations,
        charts.truck_types,
        charts.truck_status,
        charts.driver_status,
    ):
        assert series.labels == []
        assert series.data == []
    assert charts.monthly_deployments.labels == []
    assert charts.monthly_deployments.completed_data == []
    assert charts.monthly_deployments.canceled_data == []
    assert charts.monthly_sacks.deployment_counts == []
    assert charts.monthly_weight.data == []


def test_every_series_has_equal_length_arrays() -> None:
    rollups = DashboardRollups(
        monthly_deployments=[
            MonthlyStatusCount(year=2025, month=2, status="completed", count=1)
        ],
        monthly_sacks=[MonthlyTotal(year=2025, month=2, total=10, deployment_count=1)],
        truck_types=[CategoryCount(key="10-wheeler", count=2)],
    )
    charts = project_charts(rollups)
    md = charts.monthly_deployments
    assert len(md.labels) == len(md.completed_data) == len(md.canceled_data) == 1
    ms = charts.monthly_sacks
    assert len(ms.labels) == len(ms.data) == len(ms.deployment_counts) == 1
    assert charts.truck_types.labels == ["10-wheeler"]
