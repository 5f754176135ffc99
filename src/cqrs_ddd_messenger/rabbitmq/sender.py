"""RabbitMQSender — publishes encoded envelopes using their routing key stamp."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import aio_pika

from .. import headers as h
from ..envelope import MessageTypeStamp, RoutingKeyStamp

if TYPE_CHECKING:
    from ..codec import IEnvelopeCodec
    from ..envelope import Envelope
    from .connection import RabbitMQConnectionManager

logger = logging.getLogger("cqrs_ddd.messenger.rabbitmq")


class RabbitMQSender:
    """Terminal pipeline stage that puts envelopes on a topic exchange.

    The routing key comes from the envelope's ``RoutingKeyStamp``; without one
    the decoded type name, then the message name, is used, so the sender also
    works without ``RoutingKeyMiddleware`` in the chain.
    """

    def __init__(
        self,
        connection: RabbitMQConnectionManager,
        codec: IEnvelopeCodec,
        *,
        exchange_name: str = "amq.topic",
    ) -> None:
        self._connection = connection
        self._codec = codec
        self._exchange_name = exchange_name

    async def send(self, envelope: Envelope) -> Envelope:
        await self._connection.connect()
        exchange = await self._connection.topic_exchange(self._exchange_name)
        encoded = self._codec.encode(envelope)
        headers = dict(encoded["headers"])
        content_type = headers.pop(h.CONTENT_TYPE, h.JSON_CONTENT_TYPE)
        routing_key = self._routing_key(envelope)

        await exchange.publish(
            aio_pika.Message(
                body=encoded["body"].encode("utf-8"),
                content_type=content_type,
                headers=headers,
                message_id=getattr(envelope.message, "message_id", None),
            ),
            routing_key=routing_key,
        )
        logger.debug(
            "Published to %s with routing key %s", self._exchange_name, routing_key
        )
        return envelope

    async def __call__(self, envelope: Envelope) -> Envelope:
        return await self.send(envelope)

    def _routing_key(self, envelope: Envelope) -> str:
        stamp = envelope.last(RoutingKeyStamp)
        if stamp is not None:
            return stamp.routing_key
        type_stamp = envelope.last(MessageTypeStamp)
        if type_stamp is not None:
            return type_stamp.type_name
        return envelope.message.message_name()

    async def health_check(self) -> bool:
        return await self._connection.health_check()
