"""Task-local correlation context — correlation id and reply-to address."""

from __future__ import annotations

from contextvars import ContextVar

# ContextVars keep each in-flight message's trace isolated across async tasks.
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_reply_to: ContextVar[str | None] = ContextVar("reply_to", default=None)


def get_correlation_id() -> str | None:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


def get_reply_to() -> str | None:
    """Get current reply-to address from context."""
    return _reply_to.get()


def set_reply_to(reply_to: str | None) -> None:
    """Set reply-to address in context."""
    _reply_to.set(reply_to)

