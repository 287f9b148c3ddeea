"""Tenancy scope: which companies' deployments an actor may see.

Fails closed by filtering, never by raising: an actor whose company is
missing or unknown gets a scope that matches nothing.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.application.dtos.actor import ActorContext

# Explicit requestFrom value that lifts the restriction for administrators.
ALL_COMPANIES = "all"


@dataclass(frozen=True)
class CompanyScope:
    """Visibility predicate over a deployment's request_from.

    unrestricted: every company is visible.
    company: the single visible company when restricted; None with
    unrestricted False means nothing is visible.
    """

    unrestricted: bool
    company: str | None = None

    @classmethod
    def everything(cls) -> CompanyScope:
        return cls(unrestricted=True)

    @classmethod
    def only(cls, company: str) -> CompanyScope:
        return cls(unrestricted=False, company=company)

    @classmethod
    def nothing(cls) -> CompanyScope:
        return cls(unrestricted=False, company=None)

    @property
    def matches_nothing(self) -> bool:
        return not self.unrestricted and self.company is None

    def matches(self, request_from: str | None) -> bool:
        """Return True if a deployment with this request_from is visible."""
        if self.unrestricted:
            return True
        if self.company is None or request_from is None:
            return False
        return request_from == self.company


def resolve_scope(
    actor: ActorContext, request_from: str | None = None
) -> CompanyScope:
    """Build the scope for actor, honouring an explicit requestFrom.

    - No explicit value: admins see everything, a visitor sees their own
      company, an actor without company sees nothing.
    - requestFrom == "all": everything, for admins only. For anyone else it
      is taken as a literal company name.
    - Any other value restricts to exactly that company, whoever asks.
    """
    if request_from:
        if request_from == ALL_COMPANIES and actor.is_administrative:
            return CompanyScope.everything()
        return CompanyScope.only(request_from)
    if actor.is_administrative:
        return CompanyScope.everything()
    if actor.company:
        return CompanyScope.only(actor.company)
    return CompanyScope.nothing()
