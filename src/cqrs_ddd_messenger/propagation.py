"""TracePropagator — carries correlation, reply-to and retry count across hops."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from . import headers as h
from .envelope import RedeliveryStamp
from .exceptions import MessageDecodingFailedError
from .ids import UUID4Generator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .envelope import Envelope
    from .ids import IIDGenerator
    from .tracker import ITracker

logger = logging.getLogger("cqrs_ddd.messenger.propagation")


class TracePropagator:
    """Reads propagation headers on the way in and rebuilds them on the way out.

    Holds no state of its own: correlation bookkeeping goes to the injected
    tracker, fresh correlation ids come from the injected generator. Any codec
    can compose one regardless of its body format.
    """

    def __init__(
        self,
        tracker: ITracker,
        id_generator: IIDGenerator | None = None,
    ) -> None:
        self._tracker = tracker
        self._id_generator = id_generator or UUID4Generator()

    @property
    def tracker(self) -> ITracker:
        return self._tracker

    def resolve_correlation_id(self, headers: Mapping[str, Any]) -> str:
        """Return the inbound correlation id, or start a new chain."""
        if h.CORRELATION_ID in headers:
            return str(headers[h.CORRELATION_ID])
        correlation_id = self._id_generator.next_id()
        logger.debug(
            "No %s header; started chain %s", h.CORRELATION_ID, correlation_id
        )
        return correlation_id

    def resolve_reply_to(self, headers: Mapping[str, Any]) -> str | None:
        if h.REPLY_TO not in headers:
            return None
        return str(headers[h.REPLY_TO])

    def record_inbound(self, message_id: str, headers: Mapping[str, Any]) -> str:
        """Assign correlation (and reply-to, when present) to *message_id*.

        Returns the correlation id that was recorded.
        """
        correlation_id = self.resolve_correlation_id(headers)
        self._tracker.assign_correlation_id(correlation_id, message_id)

        reply_to = self.resolve_reply_to(headers)
        if reply_to is not None:
            self._tracker.assign_reply_to(reply_to, message_id)
        return correlation_id

    def inbound_retry_count(self, headers: Mapping[str, Any]) -> int:
        """Return ``x-retry-count`` as a non-negative int (0 when absent)."""
        if h.RETRY_COUNT not in headers:
            return 0
        raw = headers[h.RETRY_COUNT]
        if isinstance(raw, bool):
            raise MessageDecodingFailedError(f"Invalid {h.RETRY_COUNT}: {raw!r}")
        try:
            count = int(raw)
        except (TypeError, ValueError) as e:
            raise MessageDecodingFailedError(
                f"Invalid {h.RETRY_COUNT}: {raw!r}"
            ) from e
        if count < 0:
            raise MessageDecodingFailedError(f"Negative {h.RETRY_COUNT}: {count}")
        return count

    def outbound_retry_count(self, envelope: Envelope) -> int:
        stamp = envelope.last(RedeliveryStamp)
        return stamp.retry_count if stamp is not None else 0

    def outbound_headers(
        self,
        envelope: Envelope,
        *,
        content_type: str = h.JSON_CONTENT_TYPE,
    ) -> dict[str, str]:
        """Build transport headers from the tracker's current exchange.

        Correlation id and reply-to are omitted when the tracker holds none.
        """
        headers = {h.CONTENT_TYPE: content_type}
        correlation_id = self._tracker.correlation_id()
        if correlation_id is not None:
            headers[h.CORRELATION_ID] = correlation_id
        reply_to = self._tracker.reply_to()
        if reply_to is not None:
            headers[h.REPLY_TO] = reply_to
        headers[h.RETRY_COUNT] = str(self.outbound_retry_count(envelope))
        return headers
