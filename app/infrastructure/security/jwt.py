"""Bearer token handling for actor identity.

Tokens are issued by the auth service; this service only verifies them and
reads the actor claims (sub, role, company, firstname, lastname).
create_access_token exists for tests and local tooling.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.application.dtos.actor import ActorContext
from app.core.config import get_settings


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub, role, company, firstname, lastname).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta is not None:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
    to_encode["exp"] = expire
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


def decode_actor(token: str) -> ActorContext:
    """Verify token and build the actor it identifies.

    Raises:
        ValueError: If the token is invalid or carries no role claim.
    """
    payload = verify_token(token)
    role = payload.get("role")
    if not role:
        raise ValueError("Token missing required claim: role")
    return ActorContext(
        id=str(payload["sub"]),
        role=str(role),
        company=payload.get("company") or None,
        firstname=payload.get("firstname"),
        lastname=payload.get("lastname"),
    )
