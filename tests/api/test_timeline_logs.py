"""GET /api/v1/timeline-logs end to end on a SQLite file database."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.requires_db

URL = "/api/v1/timeline-logs"
T0 = datetime(2025, 3, 15, 8, 0, tzinfo=UTC)


async def test_requires_bearer_token(client: AsyncClient) -> None:
    response = await client.get(URL)
    assert response.status_code == 401


async def test_invalid_date_is_rejected(client: AsyncClient, auth_headers) -> None:
    response = await client.get(URL, params={"date": "15/03/2025"}, headers=auth_headers())
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "VALIDATION_ERROR"
    assert body["message"] == "Invalid date format. Use YYYY-MM-DD"


@pytest.mark.parametrize("params", [{"page": "0"}, {"perPage": "0"}, {"perPage": "501"}])
async def test_out_of_range_paging_is_rejected(
    client: AsyncClient, auth_headers, params: dict
) -> None:
    response = await client.get(URL, params=params, headers=auth_headers())
    assert response.status_code == 422


async def test_entry_shape(client: AsyncClient, seed, auth_headers) -> None:
    actor = await seed.user(firstname="John", lastname="Smith")
    truck = await seed.truck(plate_no="ABC123")
    substitute = await seed.truck(plate_no="XYZ123")
    driver = await seed.driver(firstname="Juan", lastname="Cruz")
    dep = await seed.deployment(
        deployment_code="DEP-007",
        truck_id=truck,
        driver_id=driver,
        replacement_truck_id=substitute,
        replacement_reason="Engine trouble",
    )
    await seed.log(action="Truck replaced", performed_by=actor, target_deployment=dep)

    response = await client.get(URL, headers=auth_headers())

    assert response.status_code == 200
    body = response.json()
    assert (body["total"], body["page"], body["totalPages"]) == (1, 1, 1)
    [entry] = body["timelineLogs"]
    assert entry["action"] == "Truck replaced"
    assert entry["performedBy"]["lastname"] == "Smith"
    assert "hashedPassword" not in entry["performedBy"]
    assert "hashed_password" not in entry["performedBy"]
    target = entry["targetDeployment"]
    assert target["deploymentCode"] == "DEP-007"
    assert target["truck"]["plateNo"] == "ABC123"
    assert target["replacement"]["truck"]["plateNo"] == "XYZ123"
    assert target["replacement"]["reason"] == "Engine trouble"
    assert target["displayTruck"]["plateNo"] == "XYZ123"
    assert target["displayDriver"]["lastname"] == "Cruz"


async def test_sort_and_pagination(client: AsyncClient, seed, auth_headers) -> None:
    for i in range(5):
        await seed.log(action=f"step {i}", timestamp=T0 + timedelta(minutes=i))

    latest = await client.get(URL, params={"perPage": 2}, headers=auth_headers())
    oldest = await client.get(
        URL, params={"perPage": 2, "page": 3, "sort": "oldest"}, headers=auth_headers()
    )
    beyond = await client.get(URL, params={"perPage": 2, "page": 9}, headers=auth_headers())

    assert [e["action"] for e in latest.json()["timelineLogs"]] == ["step 4", "step 3"]
    assert latest.json()["totalPages"] == 3
    assert [e["action"] for e in oldest.json()["timelineLogs"]] == ["step 4"]
    assert beyond.json()["timelineLogs"] == []
    assert (beyond.json()["total"], beyond.json()["totalPages"]) == (5, 3)


async def test_unknown_sort_means_latest(client: AsyncClient, seed, auth_headers) -> None:
    await seed.log(action="first", timestamp=T0)
    await seed.log(action="second", timestamp=T0 + timedelta(hours=1))

    response = await client.get(URL, params={"sort": "sideways"}, headers=auth_headers())

    assert [e["action"] for e in response.json()["timelineLogs"]] == ["second", "first"]


async def test_search_smith_respects_visitor_company(
    client: AsyncClient, seed, auth_headers
) -> None:
    smith = await seed.user(firstname="John", lastname="Smith", role="visitor", company="Acme")
    acme = await seed.deployment(request_from="Acme", deployment_code="DEP-A")
    globex = await seed.deployment(request_from="Globex", deployment_code="DEP-G")
    await seed.log(action="Created", performed_by=smith, target_deployment=acme)
    await seed.log(action="Created", performed_by=smith, target_deployment=globex)

    as_acme = await client.get(
        URL, params={"search": "smith"}, headers=auth_headers(role="visitor", company="Acme")
    )
    as_other = await client.get(
        URL, params={"search": "smith"}, headers=auth_headers(role="visitor", company="Initech")
    )

    assert as_acme.json()["total"] == 1
    assert as_acme.json()["timelineLogs"][0]["targetDeployment"]["deploymentCode"] == "DEP-A"
    assert as_other.json()["total"] == 0
    assert as_other.json()["timelineLogs"] == []


async def test_search_finds_replacement_plate(client: AsyncClient, seed, auth_headers) -> None:
    original = await seed.truck(plate_no="ORIG999")
    substitute = await seed.truck(plate_no="XYZ123")
    dep = await seed.deployment(truck_id=original, replacement_truck_id=substitute)
    await seed.log(target_deployment=dep)

    found = await client.get(URL, params={"search": "xyz"}, headers=auth_headers())
    hidden = await client.get(URL, params={"search": "orig999"}, headers=auth_headers())

    assert found.json()["total"] == 1
    assert hidden.json()["total"] == 0


async def test_search_paginates_filtered_set(client: AsyncClient, seed, auth_headers) -> None:
    for i in range(6):
        await seed.log(
            action="Loaded sacks" if i % 2 == 0 else "Departed",
            timestamp=T0 + timedelta(minutes=i),
        )

    page1 = await client.get(
        URL, params={"search": "sacks", "perPage": 2}, headers=auth_headers()
    )
    page2 = await client.get(
        URL, params={"search": "sacks", "perPage": 2, "page": 2}, headers=auth_headers()
    )

    assert page1.json()["total"] == 3
    assert page1.json()["totalPages"] == 2
    assert len(page1.json()["timelineLogs"]) == 2
    assert len(page2.json()["timelineLogs"]) == 1


async def test_request_from_override(client: AsyncClient, seed, auth_headers) -> None:
    acme = await seed.deployment(request_from="Acme")
    globex = await seed.deployment(request_from="Globex")
    await seed.log(target_deployment=acme)
    await seed.log(target_deployment=globex)
    await seed.log(target_deployment=None)

    admin_all = await client.get(URL, params={"requestFrom": "all"}, headers=auth_headers())
    admin_globex = await client.get(
        URL, params={"requestFrom": "Globex"}, headers=auth_headers()
    )
    visitor_all = await client.get(
        URL,
        params={"requestFrom": "all"},
        headers=auth_headers(role="visitor", company="Acme"),
    )

    assert admin_all.json()["total"] == 3
    assert admin_globex.json()["total"] == 1
    assert visitor_all.json()["total"] == 0


async def test_status_and_date_filters(client: AsyncClient, seed, auth_headers) -> None:
    await seed.log(status="ongoing", timestamp=datetime(2025, 3, 15, 0, 0, tzinfo=UTC))
    await seed.log(status="ongoing", timestamp=datetime(2025, 3, 15, 23, 59, tzinfo=UTC))
    await seed.log(status="ongoing", timestamp=datetime(2025, 3, 16, 0, 0, tzinfo=UTC))
    await seed.log(status="completed", timestamp=datetime(2025, 3, 15, 9, 0, tzinfo=UTC))

    response = await client.get(
        URL, params={"status": "ongoing", "date": "2025-03-15"}, headers=auth_headers()
    )

    assert response.json()["total"] == 2
