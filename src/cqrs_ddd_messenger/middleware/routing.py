"""RoutingKeyMiddleware — stamps the message name as the broker routing key."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..envelope import MessageTypeStamp, RoutingKeyStamp
from .base import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..envelope import Envelope
    from ..message import SimpleMessage


class RoutingKeyMiddleware(IMiddleware):
    """Adds a ``RoutingKeyStamp`` equal to the message's logical type name.

    A message that was decoded keeps the type name it arrived under.

    Message and existing stamps are left as they are. An envelope that does
    not carry a SimpleMessage is an upstream bug and fails here unrecovered.
    """

    async def handle(
        self,
        envelope: Envelope,
        next_handler: Callable[[Envelope], Awaitable[Envelope]],
    ) -> Envelope:
        message = self._message_from_envelope(envelope)
        type_stamp = envelope.last(MessageTypeStamp)
        name = type_stamp.type_name if type_stamp else message.message_name()
        envelope = envelope.with_stamps(RoutingKeyStamp(routing_key=name))
        return await next_handler(envelope)

    async def __call__(
        self,
        envelope: Envelope,
        next_handler: Callable[[Envelope], Awaitable[Envelope]],
    ) -> Envelope:
        return await self.handle(envelope, next_handler)

    def _message_from_envelope(self, envelope: Envelope) -> SimpleMessage:
        return envelope.message
