"""Correlation tracker port and implementations.

The tracker remembers which correlation chain and reply-to address belong to
each message identity, and exposes the values of the exchange currently being
processed so outbound messages can continue the chain.
"""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from .correlation import (
    get_correlation_id,
    get_reply_to,
    set_correlation_id,
    set_reply_to,
)


@runtime_checkable
class ITracker(Protocol):
    """
    Port for correlation bookkeeping keyed by message identity.

    Implementations must tolerate concurrent assign/read from many in-flight
    messages; writes to the same key are last-write-wins.
    """

    def assign_correlation_id(self, correlation_id: str, message_id: str) -> None:
        """Record *correlation_id* for *message_id* and make it current.

        Starts a new exchange: the current reply-to is cleared.
        """
        ...

    def assign_reply_to(self, reply_to: str, message_id: str) -> None:
        """Record *reply_to* for *message_id* and make it current."""
        ...

    def correlation_id(self) -> str | None:
        """Correlation id of the current exchange."""
        ...

    def reply_to(self) -> str | None:
        """Reply-to address of the current exchange, if one was assigned."""
        ...

    def correlation_id_for(self, message_id: str) -> str | None:
        ...

    def reply_to_for(self, message_id: str) -> str | None:
        ...


class InMemoryTracker(ITracker):
    """Process-wide tracker backed by plain dicts.

    "Current" values follow the most recent assignment. Assigning a correlation
    id opens a new exchange and drops the current reply-to, so a reply address
    never outlives the message that carried it. Suitable for tests and
    for workers that process one message at a time.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._correlation_ids: dict[str, str] = {}
        self._reply_tos: dict[str, str] = {}
        self._current_correlation_id: str | None = None
        self._current_reply_to: str | None = None

    def assign_correlation_id(self, correlation_id: str, message_id: str) -> None:
        with self._lock:
            self._correlation_ids[message_id] = correlation_id
            self._current_correlation_id = correlation_id
            self._current_reply_to = None

    def assign_reply_to(self, reply_to: str, message_id: str) -> None:
        with self._lock:
            self._reply_tos[message_id] = reply_to
            self._current_reply_to = reply_to

    def correlation_id(self) -> str | None:
        with self._lock:
            return self._current_correlation_id

    def reply_to(self) -> str | None:
        with self._lock:
            return self._current_reply_to

    def correlation_id_for(self, message_id: str) -> str | None:
        with self._lock:
            return self._correlation_ids.get(message_id)

    def reply_to_for(self, message_id: str) -> str | None:
        with self._lock:
            return self._reply_tos.get(message_id)

    def clear(self) -> None:
        """Forget every assignment (for test teardown)."""
        with self._lock:
            self._correlation_ids.clear()
            self._reply_tos.clear()
            self._current_correlation_id = None
            self._current_reply_to = None


class ContextTracker(InMemoryTracker):
    """Tracker whose current values live in the correlation ContextVars.

    Each asyncio task (or thread context) sees the exchange it decoded, so
    concurrent consumers do not leak correlation ids into each other's replies.
    Keyed lookups stay process-wide.
    """

    def assign_correlation_id(self, correlation_id: str, message_id: str) -> None:
        super().assign_correlation_id(correlation_id, message_id)
        set_correlation_id(correlation_id)
        set_reply_to(None)

    def assign_reply_to(self, reply_to: str, message_id: str) -> None:
        super().assign_reply_to(reply_to, message_id)
        set_reply_to(reply_to)

    def correlation_id(self) -> str | None:
        return get_correlation_id()

    def reply_to(self) -> str | None:
        return get_reply_to()

    def clear(self) -> None:
        super().clear()
        set_correlation_id(None)
        set_reply_to(None)
