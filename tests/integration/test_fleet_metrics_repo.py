"""FleetMetricsRepository integration tests on a per-test SQLite file database."""

from datetime import UTC, datetime

import pytest

from app.application.services.tenancy_scope import CompanyScope
from app.domain.enums import DeploymentStatus
from app.infrastructure.persistence.repositories import FleetMetricsRepository

pytestmark = pytest.mark.requires_db

ALL = CompanyScope.everything()


@pytest.fixture
def repo(session_factory) -> FleetMetricsRepository:
    return FleetMetricsRepository(session_factory)


async def test_truck_and_driver_counts_skip_soft_deleted(seed, repo) -> None:
    await seed.truck(plate_no="T1", status="available")
    await seed.truck(plate_no="T2", status="deployed")
    await seed.truck(plate_no="T3", status="unavailable")
    await seed.truck(plate_no="T4", status="available", is_soft_deleted=True)
    await seed.driver(status="available")
    await seed.driver(status="unavailable")

    assert await repo.count_trucks() == 3
    assert await repo.count_trucks(["available"]) == 1
    assert await repo.count_trucks(["available", "deployed"]) == 2
    assert await repo.count_drivers() == 2
    assert await repo.count_drivers(["unavailable"]) == 1


async def test_deployment_counts_respect_scope(seed, repo) -> None:
    await seed.deployment(status="completed", request_from="Acme")
    await seed.deployment(status="completed", request_from="Globex")
    await seed.deployment(status="canceled", request_from="Acme")
    await seed.deployment(status="completed", request_from="Acme", is_soft_deleted=True)

    assert await repo.count_deployments(ALL) == 3
    assert await repo.count_deployments(CompanyScope.only("Acme")) == 2
    assert await repo.count_deployments(CompanyScope.only("Acme"), ["completed"]) == 1
    assert await repo.count_deployments(CompanyScope.only("acme")) == 0
    assert await repo.count_deployments(CompanyScope.nothing()) == 0


async def test_deployment_created_window_is_half_open(seed, repo) -> None:
    start = datetime(2025, 3, 8, tzinfo=UTC)
    end = datetime(2025, 3, 15, tzinfo=UTC)
    await seed.deployment(created_at=start)
    await seed.deployment(created_at=datetime(2025, 3, 10, tzinfo=UTC))
    await seed.deployment(created_at=end)
    await seed.deployment(created_at=datetime(2025, 3, 1, tzinfo=UTC))

    count = await repo.count_deployments(ALL, created_from=start, created_before=end)
    assert count == 2


async def test_distributions_keep_null_keys(seed, repo) -> None:
    await seed.truck(plate_no="T1", truck_type="6-wheeler")
    await seed.truck(plate_no="T2", truck_type="6-wheeler")
    await seed.truck(plate_no="T3", truck_type=None)

    rows = await repo.truck_type_distribution()
    assert {(r.key, r.count) for r in rows} == {("6-wheeler", 2), (None, 1)}
    assert rows[0].key == "6-wheeler"


async def test_deployment_status_distribution_limited_to_known(seed, repo) -> None:
    await seed.deployment(status="pending")
    await seed.deployment(status="pending")
    await seed.deployment(status="archived")

    rows = await repo.deployment_status_distribution(ALL, DeploymentStatus.values())
    assert [(r.key, r.count) for r in rows] == [("pending", 2)]


async def test_top_drivers_ties_break_by_id(seed, repo) -> None:
    await seed.driver(firstname="B", lastname="Two", trip_count=5, id="drv-b")
    await seed.driver(firstname="A", lastname="One", trip_count=5, id="drv-a")
    await seed.driver(firstname="C", lastname="Three", trip_count=9, id="drv-c")
    await seed.driver(firstname="D", lastname="Gone", trip_count=50, is_soft_deleted=True)

    ranking = await repo.top_drivers_by_trips(limit=2)
    assert [d.id for d in ranking] == ["drv-c", "drv-a"]
    assert ranking[0].name == "C Three"
    assert ranking[0].trip_count == 9
    assert ranking[0].phone_no == "09170000000"


async def test_monthly_status_counts_grouped_and_ordered(seed, repo) -> None:
    await seed.deployment(status="completed", created_at=datetime(2025, 2, 3, tzinfo=UTC))
    await seed.deployment(status="completed", created_at=datetime(2025, 2, 20, tzinfo=UTC))
    await seed.deployment(status="canceled", created_at=datetime(2025, 1, 5, tzinfo=UTC))
    await seed.deployment(status="pending", created_at=datetime(2025, 1, 6, tzinfo=UTC))

    rows = await repo.monthly_status_counts(ALL, ["completed", "canceled"])
    assert [(r.year, r.month, r.status, r.count) for r in rows] == [
        (2025, 1, "canceled", 1),
        (2025, 2, "completed", 2),
    ]


async def test_monthly_sacks_and_weight_exclude_canceled(seed, repo) -> None:
    jan = datetime(2025, 1, 10, tzinfo=UTC)
    await seed.deployment(status="completed", sacks_count=10, load_weight_kg=500.0, created_at=jan)
    await seed.deployment(status="ongoing", sacks_count=5, load_weight_kg=250.5, created_at=jan)
    await seed.deployment(status="canceled", sacks_count=99, load_weight_kg=999.0, created_at=jan)

    sacks = await repo.monthly_sacks(ALL)
    weight = await repo.monthly_weight(ALL)
    assert [(r.year, r.month, r.total, r.deployment_count) for r in sacks] == [
        (2025, 1, 15, 2)
    ]
    assert weight[0].total == pytest.approx(750.5)


async def test_top_destinations_skip_empty_and_tie_break_by_name(seed, repo) -> None:
    for destination in ("Cebu", "Baguio", "Baguio", "Cebu", "Davao", "", None):
        await seed.deployment(destination=destination)

    rows = await repo.top_destinations(ALL, limit=10)
    assert [(r.key, r.count) for r in rows] == [("Baguio", 2), ("Cebu", 2), ("Davao", 1)]


async def test_cargo_totals(seed, repo) -> None:
    await seed.deployment(status="completed", sacks_count=10, load_weight_kg=100.0)
    await seed.deployment(status="canceled", sacks_count=7, load_weight_kg=70.0)
    await seed.deployment(status="pending", sacks_count=3, load_weight_kg=30.0, request_from="Globex")

    totals = await repo.cargo_totals(ALL)
    assert totals.total_sacks == 13
    assert totals.total_weight == pytest.approx(130.0)
    scoped = await repo.cargo_totals(CompanyScope.only("Globex"))
    assert scoped.total_sacks == 3


async def test_empty_database_gives_zeros(repo) -> None:
    assert await repo.count_deployments(ALL) == 0
    assert await repo.monthly_sacks(ALL) == []
    totals = await repo.cargo_totals(ALL)
    assert (totals.total_sacks, totals.total_weight) == (0, 0)


async def test_soft_deleted_rows_never_reach_any_rollup(seed, repo) -> None:
    jan = datetime(2025, 1, 10, tzinfo=UTC)
    await seed.truck(plate_no="GONE1", status="available", is_soft_deleted=True)
    await seed.driver(status="available", trip_count=12, is_soft_deleted=True)
    for status in ("completed", "canceled", "ongoing"):
        await seed.deployment(
            status=status,
            destination="Cebu",
            sacks_count=40,
            load_weight_kg=800.0,
            created_at=jan,
            is_soft_deleted=True,
        )
    statuses = DeploymentStatus.values()
    finalized = ["completed", "canceled"]

    assert await repo.truck_status_distribution() == []
    assert await repo.truck_type_distribution() == []
    assert await repo.driver_status_distribution() == []
    assert await repo.top_drivers_by_trips(limit=10) == []
    for scope in (ALL, CompanyScope.only("Acme")):
        assert await repo.deployment_status_distribution(scope, statuses) == []
        assert await repo.monthly_status_counts(scope, finalized) == []
        assert await repo.monthly_sacks(scope) == []
        assert await repo.monthly_weight(scope) == []
        assert await repo.top_destinations(scope, limit=10) == []
        totals = await repo.cargo_totals(scope)
        assert (totals.total_sacks, totals.total_weight) == (0, 0)
