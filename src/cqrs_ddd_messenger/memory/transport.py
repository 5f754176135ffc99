"""InMemoryTransport — encodes on send, decodes on get, no broker."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..envelope import RoutingKeyStamp

if TYPE_CHECKING:
    from ..codec import EncodedEnvelope, IEnvelopeCodec
    from ..envelope import Envelope


class InMemoryTransport:
    """Queue of encoded envelopes with assertion helpers for tests.

    ``send`` runs the codec's encode step and can be used directly as the
    terminal of ``build_pipeline``; ``get`` drains the queue through decode,
    exactly as a consumer on the other side of a broker would.
    """

    def __init__(self, codec: IEnvelopeCodec) -> None:
        self._codec = codec
        self._queue: list[EncodedEnvelope] = []
        self._sent: list[tuple[str | None, EncodedEnvelope]] = []

    async def send(self, envelope: Envelope) -> Envelope:
        """Encode *envelope* and queue it under its routing key."""
        encoded = self._codec.encode(envelope)
        stamp = envelope.last(RoutingKeyStamp)
        self._queue.append(encoded)
        self._sent.append((stamp.routing_key if stamp else None, encoded))
        return envelope

    async def __call__(self, envelope: Envelope) -> Envelope:
        return await self.send(envelope)

    def get(self) -> list[Envelope]:
        """Decode and remove every queued envelope, oldest first."""
        pending, self._queue = self._queue, []
        return [self._codec.decode(encoded) for encoded in pending]

    def push(self, encoded: EncodedEnvelope | dict[str, Any]) -> None:
        """Queue a raw wire envelope as if it arrived from a broker."""
        self._queue.append(encoded)  # type: ignore[arg-type]

    def sent(self) -> list[tuple[str | None, EncodedEnvelope]]:
        """Return all (routing_key, encoded) sent so far."""
        return list(self._sent)

    def assert_sent(self, routing_key: str, count: int = 1) -> None:
        """Assert that exactly `count` envelopes were sent with this routing key."""
        matching = [k for k, _ in self._sent if k == routing_key]
        assert len(matching) == count, (
            f"Expected {count} envelope(s) with routing_key={routing_key!r}, "
            f"got {len(matching)}. Sent: {[k for k, _ in self._sent]}"
        )

    def clear(self) -> None:
        """Clear queued and sent envelopes (for test teardown)."""
        self._queue.clear()
        self._sent.clear()
