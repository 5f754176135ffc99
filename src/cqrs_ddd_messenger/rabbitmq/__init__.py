"""RabbitMQ transport adapter (optional extra: cqrs-ddd-messenger[rabbitmq])."""

from __future__ import annotations

from .connection import RabbitMQConnectionManager
from .receiver import RabbitMQReceiver
from .sender import RabbitMQSender

__all__ = [
    "RabbitMQConnectionManager",
    "RabbitMQReceiver",
    "RabbitMQSender",
]
