"""DTO for the requesting actor (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.enums import ActorRole


@dataclass(frozen=True)
class ActorContext:
    """Authenticated actor as decoded from the bearer token.

    role is kept as the raw claim so an unrecognised role is still
    representable; it is simply treated as non-administrative.
    """

    id: str
    role: str
    company: str | None = None
    firstname: str | None = None
    lastname: str | None = None

    @property
    def is_administrative(self) -> bool:
        """True for admin and head_admin."""
        try:
            return ActorRole(self.role).is_administrative
        except ValueError:
            return False
