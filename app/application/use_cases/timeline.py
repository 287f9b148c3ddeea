"""Timeline use case: paginated, searchable deployment action log.

Two phases. The store applies everything it can express: status, day
window, tenancy scope on the deployment's company, ordering, and the page
window when no search is given. Free-text search needs the resolved
deployment, truck, driver, and actor, so it runs in memory afterwards; the
page is then cut from the searched set, which keeps total and pages
consistent.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from app.application.dtos.timeline import TimelinePage, TimelineQuery
from app.application.services.tenancy_scope import resolve_scope
from app.application.services.timeline_filters import filter_entries, needs_post_filter
from app.domain.exceptions import (
    FleetViewException,
    StoreFailureException,
    ValidationException,
)
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import local_day_bounds, parse_iso_day

if TYPE_CHECKING:
    from app.application.dtos.actor import ActorContext
    from app.application.dtos.timeline import TimelineEntryResult
    from app.application.services.tenancy_scope import CompanyScope
    from app.application.interfaces.repositories import ITimelineLogRepository
    from app.domain.enums import TimelineSort

logger = logging.getLogger(__name__)

INVALID_DATE_MESSAGE = "Invalid date format. Use YYYY-MM-DD"
TIMELINE_ERROR_MESSAGE = "Error fetching timeline logs"


def build_timeline_query(
    *,
    status: str | None,
    search: str | None,
    sort: "TimelineSort",
    page: int,
    per_page: int,
    date: str | None,
    request_from: str | None,
    tz_name: str,
) -> TimelineQuery:
    """Validate raw request values into a TimelineQuery.

    Empty strings count as absent. The day filter becomes UTC bounds of
    that calendar day in tz_name.

    Raises:
        ValidationException: If date is not YYYY-MM-DD.
    """
    day_start = day_end = None
    if date:
        try:
            day = parse_iso_day(date)
        except ValueError as e:
            raise ValidationException(INVALID_DATE_MESSAGE, field="date") from e
        day_start, day_end = local_day_bounds(day, tz_name)
    return TimelineQuery(
        status=status or None,
        search=search or None,
        sort=sort,
        page=page,
        per_page=per_page,
        day_start=day_start,
        day_end=day_end,
        request_from=request_from or None,
    )


class ListTimelineLogsUseCase:
    """List timeline entries visible to an actor."""

    def __init__(self, timeline_repo: "ITimelineLogRepository") -> None:
        self.timeline_repo = timeline_repo

    @traced("timeline.list")
    async def list_timeline(
        self, actor: "ActorContext", query: TimelineQuery
    ) -> TimelinePage:
        """Return one page of entries plus total and total pages.

        Raises:
            StoreFailureException: If the store query or reference resolution fails.
        """
        scope = resolve_scope(actor, query.request_from)
        if scope.matches_nothing:
            return TimelinePage(total=0, page=query.page, total_pages=0)

        try:
            entries, total = await self._fetch_page(query, scope)
        except FleetViewException:
            raise
        except Exception as e:
            logger.exception("Timeline query failed: %s", e)
            raise StoreFailureException(TIMELINE_ERROR_MESSAGE, error=str(e)) from e

        return TimelinePage(
            total=total,
            page=query.page,
            total_pages=math.ceil(total / query.per_page),
            entries=entries,
        )

    async def _fetch_page(
        self, query: TimelineQuery, scope: "CompanyScope"
    ) -> tuple[list["TimelineEntryResult"], int]:
        filters = {
            "status": query.status,
            "day_start": query.day_start,
            "day_end": query.day_end,
            "company": None if scope.unrestricted else scope.company,
        }
        if not needs_post_filter(query.search):
            add_span_attributes(post_filter=False)
            entries = await self.timeline_repo.list_entries(
                **filters, sort=query.sort, skip=query.skip, limit=query.per_page
            )
            total = await self.timeline_repo.count_entries(**filters)
            logger.debug("Timeline page served from store window (total=%d)", total)
            return entries, total

        add_span_attributes(post_filter=True)
        resolved = await self.timeline_repo.list_entries(**filters, sort=query.sort)
        matched = filter_entries(resolved, scope, query.search)
        logger.debug(
            "Timeline post-filter kept %d of %d entries", len(matched), len(resolved)
        )
        return matched[query.skip : query.skip + query.per_page], len(matched)
