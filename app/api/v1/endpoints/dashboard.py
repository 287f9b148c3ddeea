"""Dashboard API: fleet operations analytics (counts, rates, charts, top drivers)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_current_actor,
    get_dashboard_analytics_use_case,
)
from app.application.dtos.actor import ActorContext
from app.application.use_cases.analytics import GetDashboardAnalyticsUseCase
from app.core.limiter import limit_dashboard
from app.schemas.dashboard import DashboardAnalyticsResponse

router = APIRouter()


@router.get("/analytics", response_model=DashboardAnalyticsResponse)
@limit_dashboard
async def get_dashboard_analytics(
    request: Request,
    actor: Annotated[ActorContext, Depends(get_current_actor)],
    use_case: Annotated[
        GetDashboardAnalyticsUseCase, Depends(get_dashboard_analytics_use_case)
    ],
):
    """Return dashboard analytics visible to the actor.

    Administrators see every company's deployments; a visitor sees their
    own company's. Trucks and drivers are shared and always counted in full.
    """
    result = await use_case.get_dashboard_analytics(actor)
    return DashboardAnalyticsResponse.from_result(result)
