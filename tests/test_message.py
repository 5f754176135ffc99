"""Tests for SimpleMessage and MessageTypeRegistry."""

from __future__ import annotations

import uuid

import pytest
from pydantic import ValidationError

from cqrs_ddd_messenger.message import MessageTypeRegistry, SimpleMessage


class OrderPlaced(SimpleMessage):
    """Test message."""


class OrderShipped(SimpleMessage):
    __message_name__ = "shop.order_shipped"


def test_message_defaults() -> None:
    msg = OrderPlaced()
    assert uuid.UUID(msg.message_id).version == 4
    assert msg.attributes == {}


def test_message_name_defaults_to_class_name() -> None:
    assert OrderPlaced.message_name() == "OrderPlaced"
    assert OrderPlaced(attributes={"a": 1}).message_name() == "OrderPlaced"


def test_message_name_override() -> None:
    assert OrderShipped.message_name() == "shop.order_shipped"


def test_message_frozen() -> None:
    msg = OrderPlaced(attributes={"orderId": "42"})
    with pytest.raises(ValidationError):
        msg.message_id = "other"  # type: ignore[misc]


def test_registry_register_and_get() -> None:
    registry = MessageTypeRegistry()
    registry.register(OrderPlaced)
    registry.register(OrderShipped)
    assert registry.get("OrderPlaced") is OrderPlaced
    assert registry.get("shop.order_shipped") is OrderShipped
    assert registry.has("OrderPlaced")
    assert not registry.has("OrderShipped")
    assert registry.get("Unknown") is None


def test_registry_explicit_name() -> None:
    registry = MessageTypeRegistry()
    registry.register(OrderPlaced, name="legacy.order")
    assert registry.list_registered() == ["legacy.order"]


def test_registry_clear() -> None:
    registry = MessageTypeRegistry()
    registry.register(SimpleMessage)
    registry.clear()
    assert registry.list_registered() == []
