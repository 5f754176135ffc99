"""Pytest fixtures for messenger tests."""

from __future__ import annotations

import pytest

from cqrs_ddd_messenger.codec import SimpleMessageCodec
from cqrs_ddd_messenger.message import MessageTypeRegistry, SimpleMessage
from cqrs_ddd_messenger.tracker import InMemoryTracker

ORDER_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"


class OrderPlaced(SimpleMessage):
    """Test message."""


class OrderShipped(SimpleMessage):
    __message_name__ = "shop.order_shipped"


class SequentialIdGenerator:
    """Deterministic correlation ids: gen-1, gen-2, ..."""

    def __init__(self, prefix: str = "gen") -> None:
        self._prefix = prefix
        self._count = 0

    def next_id(self) -> str:
        self._count += 1
        return f"{self._prefix}-{self._count}"


@pytest.fixture
def registry() -> MessageTypeRegistry:
    reg = MessageTypeRegistry()
    reg.register(OrderPlaced)
    reg.register(OrderShipped)
    return reg


@pytest.fixture
def tracker() -> InMemoryTracker:
    return InMemoryTracker()


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def codec(
    registry: MessageTypeRegistry,
    tracker: InMemoryTracker,
    id_generator: SequentialIdGenerator,
) -> SimpleMessageCodec:
    return SimpleMessageCodec.create(registry, tracker, id_generator=id_generator)


@pytest.fixture
def order_body() -> str:
    return (
        '{"data":{"message_id":"' + ORDER_ID + '",'
        '"type":"OrderPlaced","attributes":{"orderId":"42"}}}'
    )


@pytest.fixture
def order_id() -> str:
    return ORDER_ID
