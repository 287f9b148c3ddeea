"""In-memory filtering of resolved timeline entries.

Free-text search spans the joined deployment, truck, driver, and actor with
replacement precedence, so it runs after resolution. Tenancy scope is applied
in the store; matches_scope is kept for entries resolved outside it. When the
search runs, page and total are both cut from the same filtered list.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.application.dtos.timeline import TimelineEntryResult
from app.application.services.tenancy_scope import CompanyScope


def searchable_fields(entry: TimelineEntryResult) -> list[str]:
    """Return the texts a search term is matched against.

    Truck and driver fields come from the replacement when one is attached
    (replacement overrides the original, it is not searched in addition).
    """
    fields = [entry.action]
    deployment = entry.deployment
    if deployment is not None:
        fields.append(deployment.deployment_code)
        fields.append(deployment.request_from)
        truck = deployment.effective_truck
        if truck is not None:
            fields.append(truck.plate_no)
        driver = deployment.effective_driver
        if driver is not None:
            fields.extend((driver.firstname, driver.lastname))
    actor = entry.performed_by
    if actor is not None:
        fields.extend((actor.firstname, actor.lastname))
    return [f for f in fields if f]


def matches_search(entry: TimelineEntryResult, search: str | None) -> bool:
    """Case-insensitive substring match on any searchable field."""
    if not search:
        return True
    needle = search.lower()
    return any(needle in field.lower() for field in searchable_fields(entry))


def matches_scope(entry: TimelineEntryResult, scope: CompanyScope) -> bool:
    """Entries are visible when their resolved deployment is in scope."""
    if scope.unrestricted:
        return True
    if entry.deployment is None:
        return False
    return scope.matches(entry.deployment.request_from)


def needs_post_filter(search: str | None) -> bool:
    """True when a search must be applied after resolution."""
    return bool(search)


def filter_entries(
    entries: Iterable[TimelineEntryResult],
    scope: CompanyScope,
    search: str | None,
) -> list[TimelineEntryResult]:
    """Apply scope then search, preserving order."""
    return [
        e for e in entries if matches_scope(e, scope) and matches_search(e, search)
    ]
