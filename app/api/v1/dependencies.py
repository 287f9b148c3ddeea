"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the authenticated actor, DB sessions, and
application use cases. Use cases are built from infrastructure
implementations here; routes depend only on these dependencies, not on
infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.actor import ActorContext
from app.application.use_cases import (
    GetDashboardAnalyticsUseCase,
    ListTimelineLogsUseCase,
)
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.database import get_db, get_session_factory
from app.infrastructure.persistence.repositories import (
    FleetMetricsRepository,
    TimelineLogRepository,
)
from app.infrastructure.security.jwt import decode_actor

security = HTTPBearer(auto_error=False)


async def get_current_actor(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ],
) -> ActorContext:
    """Decode the bearer token into the requesting actor.

    Raises:
        AuthenticationException: If the header is missing or the token is
            invalid, expired, or lacks the actor claims.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authenticated")
    try:
        return decode_actor(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Could not validate credentials") from e


def get_fleet_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for repositories that open one session per query."""
    return get_session_factory()


def get_dashboard_analytics_use_case(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_fleet_session_factory)
    ],
) -> GetDashboardAnalyticsUseCase:
    """Dashboard use case over the fleet metrics repository (composition root)."""
    return GetDashboardAnalyticsUseCase(
        metrics_repo=FleetMetricsRepository(session_factory),
        top_n=get_settings().dashboard_top_n,
    )


def get_list_timeline_logs_use_case(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ListTimelineLogsUseCase:
    """Timeline use case over the timeline log repository (composition root)."""
    return ListTimelineLogsUseCase(timeline_repo=TimelineLogRepository(db))
