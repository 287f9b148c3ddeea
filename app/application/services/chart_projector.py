"""Project dashboard rollups into label/value series for charts.

Pure functions over DTOs; every series has equal-length arrays and an
empty rollup projects to empty arrays.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from app.application.dtos.analytics import (
    CategoryCount,
    CategorySeries,
    DashboardCharts,
    DashboardRollups,
    MonthlyDeploymentSeries,
    MonthlyStatusCount,
    MonthlyTotal,
    MonthlyTotalSeries,
)
from app.domain.enums import DeploymentStatus

UNKNOWN_LABEL = "Unknown"

# English abbreviations; calendar.month_abbr follows the process locale.
_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_label(year: int, month: int) -> str:
    """Short month name and year, e.g. 'Mar 2025'."""
    return f"{_MONTH_ABBR[month - 1]} {year}"


def project_monthly_deployments(
    rows: Sequence[MonthlyStatusCount],
) -> MonthlyDeploymentSeries:
    """Completed vs canceled per month over the union of months present.

    A month present for one status only gets 0 for the other. Months with
    no finalized deployment at all are not emitted.
    """
    buckets: dict[tuple[int, int], dict[str, int]] = {}
    for row in rows:
        counts = buckets.setdefault((row.year, row.month), {})
        counts[row.status] = counts.get(row.status, 0) + row.count
    ordered = sorted(buckets)
    return MonthlyDeploymentSeries(
        labels=[month_label(y, m) for y, m in ordered],
        completed_data=[
            buckets[key].get(DeploymentStatus.COMPLETED.value, 0) for key in ordered
        ],
        canceled_data=[
            buckets[key].get(DeploymentStatus.CANCELED.value, 0) for key in ordered
        ],
    )


def project_monthly_totals(rows: Sequence[MonthlyTotal]) -> MonthlyTotalSeries:
    """One label per populated month with its sum and deployment count."""
    return MonthlyTotalSeries(
        labels=[month_label(r.year, r.month) for r in rows],
        data=[r.total or 0 for r in rows],
        deployment_counts=[r.deployment_count or 0 for r in rows],
    )


def project_categories(
    rows: Sequence[CategoryCount],
    label: Callable[[str | None], str] | None = None,
) -> CategorySeries:
    """Labels and counts in row order; null or empty keys become 'Unknown'."""
    to_label = label or (lambda key: key or UNKNOWN_LABEL)
    return CategorySeries(
        labels=[to_label(r.key) for r in rows],
        data=[r.count or 0 for r in rows],
    )


def project_charts(rollups: DashboardRollups) -> DashboardCharts:
    """Build every dashboard chart from the fan-out rollups."""
    return DashboardCharts(
        monthly_deployments=project_monthly_deployments(rollups.monthly_deployments),
        monthly_sacks=project_monthly_totals(rollups.monthly_sacks),
        monthly_weight=project_monthly_totals(rollups.monthly_weight),
        deployment_status=project_categories(
            rollups.deployment_status, label=DeploymentStatus.label_for
        ),
        destinations=project_categories(rollups.top_destinations),
        truck_types=project_categories(rollups.truck_types),
        truck_status=project_categories(rollups.truck_status),
        driver_status=project_categories(rollups.driver_status),
    )
