"""Security: bearer token verification and actor decoding."""

from app.infrastructure.security.jwt import (
    create_access_token,
    decode_actor,
    verify_token,
)

__all__ = [
    "create_access_token",
    "decode_actor",
    "verify_token",
]
