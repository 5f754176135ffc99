"""Tests for SimpleMessage serializer, stream deserializer and result type."""

from __future__ import annotations

import json

import pytest

from cqrs_ddd_messenger.exceptions import MessageSerializationError
from cqrs_ddd_messenger.message import MessageTypeRegistry, SimpleMessage
from cqrs_ddd_messenger.serialization import (
    DeserializationFailure,
    DeserializationResult,
    SimpleMessageJsonSerializer,
    SimpleMessageStream,
    SimpleMessageStreamDeserializer,
)

MESSAGE_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"


class OrderPlaced(SimpleMessage):
    """Test message."""


@pytest.fixture
def deserializer() -> SimpleMessageStreamDeserializer:
    registry = MessageTypeRegistry()
    registry.register(OrderPlaced)
    return SimpleMessageStreamDeserializer(registry)


def test_serialize_produces_data_document() -> None:
    msg = OrderPlaced(message_id=MESSAGE_ID, attributes={"orderId": "42"})
    body = SimpleMessageJsonSerializer().serialize(msg)
    assert body == (
        '{"data":{"message_id":"' + MESSAGE_ID + '",'
        '"type":"OrderPlaced","attributes":{"orderId":"42"}}}'
    )


def test_serialize_non_json_attribute_raises() -> None:
    msg = OrderPlaced(attributes={"when": object()})
    with pytest.raises(MessageSerializationError) as exc_info:
        SimpleMessageJsonSerializer().serialize(msg)
    assert exc_info.value.__cause__ is not None


def test_deserialize_registered_type(
    deserializer: SimpleMessageStreamDeserializer,
) -> None:
    result = deserializer.deserialize(
        SimpleMessageStream(MESSAGE_ID, "OrderPlaced", '{"orderId":"42"}')
    )
    assert result.is_success
    assert isinstance(result.message, OrderPlaced)
    assert result.message.message_id == MESSAGE_ID
    assert result.message.attributes == {"orderId": "42"}


def test_deserialize_unknown_type_is_failure_not_exception(
    deserializer: SimpleMessageStreamDeserializer,
) -> None:
    result = deserializer.deserialize(
        SimpleMessageStream(MESSAGE_ID, "Unknown", "{}")
    )
    assert not result.is_success
    assert result.message is None
    assert result.failure_kind is DeserializationFailure.TYPE_NOT_FOUND
    assert "Unknown" in result.detail


@pytest.mark.parametrize("attributes", ["not json", "[1, 2]", "null"])
def test_deserialize_invalid_attributes(
    deserializer: SimpleMessageStreamDeserializer, attributes: str
) -> None:
    result = deserializer.deserialize(
        SimpleMessageStream(MESSAGE_ID, "OrderPlaced", attributes)
    )
    assert result.failure_kind is DeserializationFailure.INVALID_ATTRIBUTES


def test_deserialize_model_validation_failure() -> None:
    registry = MessageTypeRegistry()
    registry.register(OrderPlaced)

    class Tagged(SimpleMessage):
        attributes: dict[str, int]  # type: ignore[assignment]

    registry.register(Tagged)
    result = SimpleMessageStreamDeserializer(registry).deserialize(
        SimpleMessageStream(MESSAGE_ID, "Tagged", json.dumps({"n": "not-an-int"}))
    )
    assert result.failure_kind is DeserializationFailure.INVALID_ATTRIBUTES


def test_result_factories() -> None:
    msg = OrderPlaced()
    assert DeserializationResult.success(msg).message is msg
    failure = DeserializationResult.failure(
        DeserializationFailure.TYPE_NOT_FOUND, "nope"
    )
    assert not failure.is_success
    assert failure.detail == "nope"
