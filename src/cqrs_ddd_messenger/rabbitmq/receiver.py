"""RabbitMQReceiver — decodes deliveries and hands envelopes to a handler."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .. import headers as h
from ..exceptions import MessageDecodingFailedError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aio_pika.abc import AbstractIncomingMessage

    from ..codec import IEnvelopeCodec
    from ..envelope import Envelope
    from .connection import RabbitMQConnectionManager

logger = logging.getLogger("cqrs_ddd.messenger.rabbitmq")


def _encoded_from_incoming(raw: AbstractIncomingMessage) -> dict[str, Any]:
    """Flatten an AMQP delivery into the ``{body, headers}`` shape the codec reads."""
    headers: dict[str, Any] = {}
    for key, value in (raw.headers or {}).items():
        headers[key] = value.decode("utf-8") if isinstance(value, bytes) else value
    if raw.content_type:
        headers.setdefault(h.CONTENT_TYPE, raw.content_type)
    return {"body": raw.body, "headers": headers}


class RabbitMQReceiver:
    """Binds a queue to a topic exchange and feeds decoded envelopes to a handler.

    Deliveries the codec cannot decode are rejected without requeue so the
    broker's dead-letter policy applies. Handler failures reject the delivery
    the same way and propagate to aio-pika.
    """

    def __init__(
        self,
        connection: RabbitMQConnectionManager,
        codec: IEnvelopeCodec,
        *,
        exchange_name: str = "amq.topic",
        prefetch_count: int = 10,
    ) -> None:
        self._connection = connection
        self._codec = codec
        self._exchange_name = exchange_name
        self._prefetch_count = prefetch_count

    async def subscribe(
        self,
        routing_key: str,
        handler: Callable[[Envelope], Awaitable[Any]],
        queue_name: str | None = None,
    ) -> None:
        """Declare and bind the queue for *routing_key*, then start consuming."""
        await self._connection.connect()
        channel = self._connection.channel
        await channel.set_qos(prefetch_count=self._prefetch_count)
        exchange = await self._connection.topic_exchange(self._exchange_name)
        queue = await channel.declare_queue(
            queue_name or f"cqrs.{routing_key}", durable=True
        )
        await queue.bind(exchange, routing_key=routing_key)

        async def on_message(raw: AbstractIncomingMessage) -> None:
            await self.receive(raw, handler)

        await queue.consume(on_message)

    async def receive(
        self,
        raw: AbstractIncomingMessage,
        handler: Callable[[Envelope], Awaitable[Any]],
    ) -> None:
        """Decode one delivery and run *handler* inside its ack/reject scope."""
        try:
            envelope = self._codec.decode(_encoded_from_incoming(raw))
        except MessageDecodingFailedError as e:
            logger.warning(
                "Rejecting undecodable delivery %s: %s", raw.message_id, e.reason
            )
            await raw.reject(requeue=False)
            return

        async with raw.process(requeue=False):
            await handler(envelope)

    async def health_check(self) -> bool:
        return await self._connection.health_check()
