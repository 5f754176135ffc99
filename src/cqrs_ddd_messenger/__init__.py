"""Message-bus adaptation layer for CQRS/DDD — envelope codec, trace propagation,
routing middleware, and transport adapters."""

from __future__ import annotations

from .codec import EncodedEnvelope, IEnvelopeCodec, SimpleMessageCodec
from .envelope import (
    Envelope,
    MessageTypeStamp,
    RedeliveryStamp,
    RoutingKeyStamp,
    Stamp,
)
from .exceptions import (
    MalformedPayloadError,
    MessageDecodingFailedError,
    MessageSerializationError,
    MessengerConnectionError,
    MessengerError,
)
from .ids import IIDGenerator, UUID4Generator
from .memory import InMemoryTransport
from .message import MessageTypeRegistry, SimpleMessage
from .middleware import (
    IMiddleware,
    LoggingMiddleware,
    RoutingKeyMiddleware,
    build_pipeline,
)
from .propagation import TracePropagator
from .serialization import (
    DeserializationFailure,
    DeserializationResult,
    SimpleMessageJsonSerializer,
    SimpleMessageStream,
    SimpleMessageStreamDeserializer,
)
from .tracker import ContextTracker, InMemoryTracker, ITracker

__all__ = [
    "ContextTracker",
    "DeserializationFailure",
    "DeserializationResult",
    "EncodedEnvelope",
    "Envelope",
    "IEnvelopeCodec",
    "IIDGenerator",
    "IMiddleware",
    "ITracker",
    "InMemoryTracker",
    "InMemoryTransport",
    "LoggingMiddleware",
    "MalformedPayloadError",
    "MessageDecodingFailedError",
    "MessageSerializationError",
    "MessageTypeStamp",
    "MessageTypeRegistry",
    "MessengerConnectionError",
    "MessengerError",
    "RedeliveryStamp",
    "RoutingKeyMiddleware",
    "RoutingKeyStamp",
    "SimpleMessage",
    "SimpleMessageCodec",
    "SimpleMessageJsonSerializer",
    "SimpleMessageStream",
    "SimpleMessageStreamDeserializer",
    "Stamp",
    "TracePropagator",
    "UUID4Generator",
    "build_pipeline",
]
