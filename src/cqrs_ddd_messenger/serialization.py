"""SimpleMessage wire serialization — JSON:API style ``{"data": {...}}`` bodies."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .exceptions import MessageSerializationError

if TYPE_CHECKING:
    from .message import MessageTypeRegistry, SimpleMessage


@dataclass(frozen=True)
class SimpleMessageStream:
    """Raw message fields as read off the wire, before type resolution."""

    message_id: str
    type: str
    attributes: str


class DeserializationFailure(str, enum.Enum):
    TYPE_NOT_FOUND = "type_not_found"
    INVALID_ATTRIBUTES = "invalid_attributes"


@dataclass(frozen=True)
class DeserializationResult:
    """Outcome of hydrating a stream into a message.

    Usage::

        result = DeserializationResult.success(message)
        result = DeserializationResult.failure(
            DeserializationFailure.TYPE_NOT_FOUND, "Unknown type 'X'"
        )
    """

    message: SimpleMessage | None = None
    failure_kind: DeserializationFailure | None = None
    detail: str = ""

    @property
    def is_success(self) -> bool:
        return self.failure_kind is None

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def success(cls, message: SimpleMessage) -> DeserializationResult:
        return cls(message=message)

    @classmethod
    def failure(
        cls, kind: DeserializationFailure, detail: str
    ) -> DeserializationResult:
        return cls(failure_kind=kind, detail=detail)


class SimpleMessageJsonSerializer:
    """Serialize a SimpleMessage to its JSON wire body."""

    def serialize(
        self, message: SimpleMessage, type_name: str | None = None
    ) -> str:
        """Encode *message* as ``{"data": {message_id, type, attributes}}``.

        *type_name* overrides the class's message name.
        """
        document = {
            "data": {
                "message_id": message.message_id,
                "type": type_name or message.message_name(),
                "attributes": message.attributes,
            },
        }
        try:
            return json.dumps(document, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise MessageSerializationError(str(e)) from e


class SimpleMessageStreamDeserializer:
    """Hydrate streams into registered SimpleMessage classes.

    Never raises for unknown types or bad attributes; callers inspect the
    returned DeserializationResult.
    """

    def __init__(self, registry: MessageTypeRegistry) -> None:
        self._registry = registry

    def deserialize(self, stream: SimpleMessageStream) -> DeserializationResult:
        message_class = self._registry.get(stream.type)
        if message_class is None:
            return DeserializationResult.failure(
                DeserializationFailure.TYPE_NOT_FOUND,
                f"No message class registered for type {stream.type!r}",
            )

        try:
            attributes = json.loads(stream.attributes)
        except json.JSONDecodeError as e:
            return DeserializationResult.failure(
                DeserializationFailure.INVALID_ATTRIBUTES, str(e)
            )
        if not isinstance(attributes, dict):
            return DeserializationResult.failure(
                DeserializationFailure.INVALID_ATTRIBUTES,
                "attributes must be a JSON object",
            )

        try:
            message = message_class.model_validate(
                {"message_id": stream.message_id, "attributes": attributes}
            )
        except ValidationError as e:
            return DeserializationResult.failure(
                DeserializationFailure.INVALID_ATTRIBUTES, str(e)
            )
        return DeserializationResult.success(message)
