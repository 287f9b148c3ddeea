"""Timeline log API: paginated, searchable log of actions taken on deployments."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_current_actor,
    get_list_timeline_logs_use_case,
)
from app.application.dtos.actor import ActorContext
from app.application.use_cases.timeline import (
    ListTimelineLogsUseCase,
    build_timeline_query,
)
from app.core.config import TIMELINE_PER_PAGE_LIMIT, get_settings
from app.core.limiter import limit_timeline
from app.domain.enums import TimelineSort
from app.schemas.timeline import TimelineLogListResponse

router = APIRouter()


@router.get("", response_model=TimelineLogListResponse)
@limit_timeline
async def list_timeline_logs(
    request: Request,
    actor: Annotated[ActorContext, Depends(get_current_actor)],
    use_case: Annotated[
        ListTimelineLogsUseCase, Depends(get_list_timeline_logs_use_case)
    ],
    status: str | None = Query(None, description="Exact entry status"),
    search: str | None = Query(
        None, description="Case-insensitive text matched against names, codes, action"
    ),
    sort: str | None = Query(None, description="'oldest' or 'latest' (default)"),
    page: int = Query(1, ge=1),
    per_page: int | None = Query(None, alias="perPage", ge=1, le=TIMELINE_PER_PAGE_LIMIT),
    date: str | None = Query(None, description="Calendar day, YYYY-MM-DD"),
    request_from: str | None = Query(
        None, alias="requestFrom", description="Company, or 'all' for administrators"
    ),
):
    """List timeline entries visible to the actor, newest first by default."""
    settings = get_settings()
    query = build_timeline_query(
        status=status,
        search=search,
        sort=TimelineSort.parse(sort),
        page=page,
        per_page=min(
            per_page or settings.timeline_default_per_page,
            settings.timeline_max_per_page,
        ),
        date=date,
        request_from=request_from,
        tz_name=settings.timezone,
    )
    result = await use_case.list_timeline(actor, query)
    return TimelineLogListResponse.from_page(result)
