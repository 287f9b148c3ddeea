"""Request context management using contextvars.

Holds the current request ID so log records emitted anywhere during the
request (including inside the dashboard fan-out tasks, which copy the
context when created) can carry it.

Usage:
    token = set_request_id("abc123")
    get_request_id()  # "abc123"
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request ID for the current context; return a reset token."""
    return _request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _request_id.get()


def reset_request_id(token: Token[str | None]) -> None:
    """Restore the request ID that was current before set_request_id."""
    _request_id.reset(token)
