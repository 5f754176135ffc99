"""SimpleMessageCodec — wire envelope ⇄ in-process Envelope."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Protocol, TypedDict, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import headers as h
from .envelope import Envelope, MessageTypeStamp, RedeliveryStamp
from .exceptions import MalformedPayloadError, MessageDecodingFailedError
from .propagation import TracePropagator
from .serialization import (
    SimpleMessageJsonSerializer,
    SimpleMessageStream,
    SimpleMessageStreamDeserializer,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .ids import IIDGenerator
    from .message import MessageTypeRegistry
    from .tracker import ITracker

logger = logging.getLogger("cqrs_ddd.messenger.codec")

# Canonical 8-4-4-4-12 hex, optionally as a urn:uuid: URN or wrapped in braces.
UUID_PATTERN = (
    r"^(?:urn:)?(?:uuid:)?\{?"
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
    r"\}?$"
)


class EncodedEnvelope(TypedDict):
    body: str
    headers: dict[str, str]


class WireMessage(BaseModel):
    """Shape of the ``data`` object inside a wire body. Extra keys are ignored."""

    model_config = ConfigDict(strict=True, frozen=True)

    message_id: str = Field(..., pattern=UUID_PATTERN)
    type: str = Field(..., min_length=1)
    attributes: dict[str, Any]


@runtime_checkable
class IEnvelopeCodec(Protocol):
    """
    Port used by transport adapters to move envelopes on and off the wire.
    """

    def decode(self, encoded_envelope: Mapping[str, Any]) -> Envelope:
        """
        Turn ``{"body": ..., "headers": {...}}`` into an Envelope.

        Raises:
            MessageDecodingFailedError: the delivery should be rejected.
        """
        ...

    def encode(self, envelope: Envelope) -> EncodedEnvelope:
        """Turn an Envelope into ``{"body": str, "headers": {...}}``."""
        ...


class SimpleMessageCodec(IEnvelopeCodec):
    """Codec for SimpleMessage bodies with correlation and retry propagation.

    Decoding is the trust boundary: the body is validated before anything is
    hydrated, and nothing is written to the tracker unless the whole envelope
    decodes. Encoding trusts the message and only reproduces headers.
    """

    def __init__(
        self,
        propagator: TracePropagator,
        serializer: SimpleMessageJsonSerializer,
        deserializer: SimpleMessageStreamDeserializer,
        *,
        content_type: str = h.JSON_CONTENT_TYPE,
    ) -> None:
        self._propagator = propagator
        self._serializer = serializer
        self._deserializer = deserializer
        self._content_type = content_type

    @classmethod
    def create(
        cls,
        registry: MessageTypeRegistry,
        tracker: ITracker,
        *,
        id_generator: IIDGenerator | None = None,
    ) -> SimpleMessageCodec:
        """Build a codec with the default JSON serializer and deserializer."""
        return cls(
            TracePropagator(tracker, id_generator),
            SimpleMessageJsonSerializer(),
            SimpleMessageStreamDeserializer(registry),
        )

    def decode(self, encoded_envelope: Mapping[str, Any]) -> Envelope:
        stream = self._stream_from_encoded_envelope(encoded_envelope)
        headers: Mapping[str, Any] = encoded_envelope.get("headers") or {}

        result = self._deserializer.deserialize(stream)
        if not result.is_success or result.message is None:
            logger.warning(
                "Rejected message %s of type %r: %s",
                stream.message_id,
                stream.type,
                result.detail,
            )
            raise MessageDecodingFailedError(
                result.detail, message_id=stream.message_id
            )
        message = result.message

        retry_count = self._propagator.inbound_retry_count(headers)
        correlation_id = self._propagator.record_inbound(message.message_id, headers)
        logger.debug(
            "Decoded %s %s (correlation_id=%s, retry_count=%d)",
            stream.type,
            message.message_id,
            correlation_id,
            retry_count,
        )
        return Envelope.wrap(
            message,
            MessageTypeStamp(type_name=stream.type),
            RedeliveryStamp(retry_count=retry_count),
        )

    def encode(self, envelope: Envelope) -> EncodedEnvelope:
        type_stamp = envelope.last(MessageTypeStamp)
        body = self._serializer.serialize(
            envelope.message,
            type_name=type_stamp.type_name if type_stamp is not None else None,
        )
        headers = self._propagator.outbound_headers(
            envelope, content_type=self._content_type
        )
        logger.debug(
            "Encoded %s (correlation_id=%s)",
            type(envelope.message).__name__,
            headers.get(h.CORRELATION_ID),
        )
        return {"body": body, "headers": headers}

    def _stream_from_encoded_envelope(
        self, encoded_envelope: Mapping[str, Any]
    ) -> SimpleMessageStream:
        content = self._parse_body(encoded_envelope.get("body"))

        if "data" not in content:
            raise MessageDecodingFailedError("data: key is missing")
        data = content["data"]
        if data is None:
            raise MalformedPayloadError("The body of message is null")

        try:
            wire = WireMessage.model_validate(data)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'data'}: {err['msg']}"
                for err in e.errors()
            )
            logger.warning("Rejected malformed envelope: %s", errors)
            raw_id = data.get("message_id") if isinstance(data, dict) else None
            raise MessageDecodingFailedError(
                errors,
                message_id=str(raw_id) if raw_id is not None else None,
            ) from e

        return SimpleMessageStream(
            message_id=wire.message_id,
            type=wire.type,
            attributes=json.dumps(wire.attributes),
        )

    def _parse_body(self, body: Any) -> dict[str, Any]:
        if isinstance(body, (bytes, bytearray)):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedPayloadError("Body is not valid UTF-8") from e
        if not isinstance(body, str):
            raise MalformedPayloadError("Encoded envelope has no body")
        try:
            content = json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(f"Body is not valid JSON: {e}") from e
        if not isinstance(content, dict):
            raise MalformedPayloadError("Body must be a JSON object")
        return content
