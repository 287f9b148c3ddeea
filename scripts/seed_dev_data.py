"""Seed a development database with a small fleet.

Creates the schema (create_all, no migrations) and inserts trucks, drivers,
two requesting companies, deployments spread over the last few months, and
their timeline logs, so the dashboard and the timeline have something to show.

Usage:
    uv run python -m scripts.seed_dev_data [--reset]

Requires: DATABASE_URL (postgresql+asyncpg://... or sqlite+aiosqlite:///...).
--reset drops every fleet table first.
"""

from __future__ import annotations

import asyncio
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from dotenv import load_dotenv

from app.domain.enums import DeploymentStatus, DriverStatus, TruckStatus
from app.infrastructure.persistence import database
from app.infrastructure.persistence.models import (
    Deployment,
    Driver,
    TimelineLog,
    Truck,
    User,
)

COMPANIES = ("Acme Rice Mill", "Globex Grains")
DESTINATIONS = ("Manila", "Cebu", "Davao", "Iloilo", "Baguio")
TRUCK_TYPES = ("6-wheeler", "10-wheeler", "Trailer")
DRIVER_NAMES = (
    ("Juan", "Cruz"),
    ("Maria", "Santos"),
    ("Jose", "Reyes"),
    ("Ana", "Garcia"),
    ("Pedro", "Bautista"),
)


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


def _build_rows(rng: random.Random, now: datetime) -> list[object]:
    admin = User(
        email="admin@fleet.local",
        hashed_password="!",
        role="admin",
        firstname="Fleet",
        lastname="Admin",
    )
    visitors = [
        User(
            email=f"visitor{i}@fleet.local",
            hashed_password="!",
            role="visitor",
            company=company,
            firstname="Visitor",
            lastname=company.split()[0],
        )
        for i, company in enumerate(COMPANIES, start=1)
    ]
    trucks = [
        Truck(
            plate_no=f"NBC-{1000 + i}",
            truck_type=TRUCK_TYPES[i % len(TRUCK_TYPES)],
            status=TruckStatus.AVAILABLE.value,
        )
        for i in range(6)
    ]
    trucks[-1].status = TruckStatus.MAINTENANCE.value
    drivers = [
        Driver(
            firstname=first,
            lastname=last,
            phone_no=f"0917{rng.randint(1000000, 9999999)}",
            status=DriverStatus.AVAILABLE.value,
            trip_count=0,
        )
        for first, last in DRIVER_NAMES
    ]

    statuses = [s.value for s in DeploymentStatus]
    deployments: list[Deployment] = []
    logs: list[TimelineLog] = []
    for n in range(40):
        created = now - timedelta(days=rng.randint(0, 150), hours=rng.randint(0, 23))
        truck = rng.choice(trucks[:-1])
        driver = rng.choice(drivers)
        status = rng.choice(statuses)
        dep = Deployment(
            deployment_code=f"DEP-{n + 1:04d}",
            status=status,
            request_from=rng.choice(COMPANIES),
            destination=rng.choice(DESTINATIONS),
            sacks_count=rng.randint(50, 400),
            load_weight_kg=round(rng.uniform(1000, 12000), 1),
            created_at=created,
            updated_at=created,
            truck=truck,
            driver=driver,
        )
        if n % 9 == 0:
            dep.replacement_truck = trucks[(trucks.index(truck) + 1) % 5]
            dep.replacement_reason = "Flat tire at origin"
        if status == DeploymentStatus.COMPLETED.value:
            driver.trip_count += 1
        deployments.append(dep)
        logs.append(
            TimelineLog(
                action="Deployment created",
                status=DeploymentStatus.PENDING.value,
                timestamp=created,
                actor=admin,
                deployment=dep,
            )
        )
        if status != DeploymentStatus.PENDING.value:
            logs.append(
                TimelineLog(
                    action=f"Status changed to {status}",
                    status=status,
                    timestamp=created + timedelta(hours=rng.randint(1, 48)),
                    actor=admin,
                    deployment=dep,
                )
            )
    return [admin, *visitors, *trucks, *drivers, *deployments, *logs]


async def main() -> None:
    _load_env()
    reset = "--reset" in sys.argv[1:]
    session_factory = database.get_session_factory()
    async with database.engine.begin() as conn:
        if reset:
            await conn.run_sync(database.Base.metadata.drop_all)
        await conn.run_sync(database.Base.metadata.create_all)

    rows = _build_rows(random.Random(7), datetime.now(timezone.utc))
    async with session_factory() as session:
        async with session.begin():
            session.add_all(rows)
    print(f"Seeded {len(rows)} rows ({', '.join(COMPANIES)})")
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
