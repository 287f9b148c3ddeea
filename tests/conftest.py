"""Pytest configuration and fixtures for fleetview.

Uses app.main:app for HTTP tests. Database fixtures build a fresh aiosqlite
file database per test (a file, not :memory:, so the dashboard's concurrent
sessions all see the same data).
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-fleetview-tests")

from collections.abc import AsyncIterator  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.api.v1.dependencies import get_fleet_session_factory  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.persistence import models  # noqa: E402
from app.infrastructure.persistence.database import Base, get_db  # noqa: E402
from app.infrastructure.security.jwt import create_access_token  # noqa: E402
from app.main import app  # noqa: E402

NOW = datetime(2025, 3, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_rate_limits() -> None:
    """Rate limit counters are in memory and shared by every test."""
    limiter.reset()


@pytest.fixture
async def session_factory(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory over a fresh schema in a per-test SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fleet.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Single session for repository tests that run one query after another."""
    async with session_factory() as session:
        yield session


class FleetSeeder:
    """Insert fleet rows for a test. Each helper commits and returns the row id."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def _add(self, row: Any) -> str:
        async with self.session_factory() as session:
            session.add(row)
            await session.commit()
            return row.id

    async def truck(
        self,
        plate_no: str = "ABC123",
        truck_type: str | None = "6-wheeler",
        status: str | None = "available",
        is_soft_deleted: bool = False,
    ) -> str:
        return await self._add(
            models.Truck(
                plate_no=plate_no,
                truck_type=truck_type,
                status=status,
                is_soft_deleted=is_soft_deleted,
            )
        )

    async def driver(
        self,
        firstname: str = "Juan",
        lastname: str = "Cruz",
        status: str | None = "available",
        trip_count: int = 0,
        id: str | None = None,
        is_soft_deleted: bool = False,
    ) -> str:
        row = models.Driver(
            firstname=firstname,
            lastname=lastname,
            status=status,
            trip_count=trip_count,
            phone_no="09170000000",
            image_url=None,
            is_soft_deleted=is_soft_deleted,
        )
        if id is not None:
            row.id = id
        return await self._add(row)

    async def user(
        self,
        firstname: str = "Ana",
        lastname: str = "Reyes",
        role: str = "admin",
        company: str | None = None,
        email: str | None = None,
    ) -> str:
        return await self._add(
            models.User(
                email=email or f"{firstname}.{lastname}@example.com".lower(),
                hashed_password="not-a-real-hash",
                role=role,
                company=company,
                firstname=firstname,
                lastname=lastname,
            )
        )

    async def deployment(
        self,
        status: str = "pending",
        request_from: str = "Acme",
        deployment_code: str = "DEP-001",
        destination: str | None = "Manila",
        sacks_count: int = 0,
        load_weight_kg: float = 0.0,
        created_at: datetime = NOW,
        truck_id: str | None = None,
        driver_id: str | None = None,
        replacement_truck_id: str | None = None,
        replacement_driver_id: str | None = None,
        replacement_reason: str | None = None,
        is_soft_deleted: bool = False,
    ) -> str:
        return await self._add(
            models.Deployment(
                status=status,
                request_from=request_from,
                deployment_code=deployment_code,
                destination=destination,
                sacks_count=sacks_count,
                load_weight_kg=load_weight_kg,
                created_at=created_at,
                updated_at=created_at,
                truck_id=truck_id,
                driver_id=driver_id,
                replacement_truck_id=replacement_truck_id,
                replacement_driver_id=replacement_driver_id,
                replacement_reason=replacement_reason,
                is_soft_deleted=is_soft_deleted,
            )
        )

    async def log(
        self,
        action: str = "Deployment created",
        status: str | None = "pending",
        timestamp: datetime = NOW,
        performed_by: str | None = None,
        target_deployment: str | None = None,
    ) -> str:
        return await self._add(
            models.TimelineLog(
                action=action,
                status=status,
                timestamp=timestamp,
                performed_by=performed_by,
                target_deployment=target_deployment,
            )
        )


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]) -> FleetSeeder:
    """Row builders bound to the per-test database."""
    return FleetSeeder(session_factory)


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI), wired to the test database."""

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_fleet_session_factory] = lambda: session_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def bearer(
    role: str = "admin",
    company: str | None = None,
    sub: str = "actor-1",
    **claims: Any,
) -> dict[str, str]:
    """Authorization header for an actor with the given claims."""
    data: dict[str, Any] = {"sub": sub, "role": role, **claims}
    if company is not None:
        data["company"] = company
    return {"Authorization": f"Bearer {create_access_token(data)}"}


@pytest.fixture
def auth_headers():
    """Build Authorization headers: auth_headers(role=..., company=...)."""
    return bearer
