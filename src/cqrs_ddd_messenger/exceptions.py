"""Messenger-specific exceptions for cqrs-ddd-messenger."""

from __future__ import annotations


class MessengerError(Exception):
    """Root exception for the messenger adaptation layer."""


class MessageDecodingFailedError(MessengerError):
    """Raised when an inbound wire envelope cannot be turned into a message.

    Covers structurally invalid bodies and logical types that resolve to no
    known message class. Transport adapters catch this to reject or
    dead-letter the delivery.
    """

    def __init__(
        self,
        reason: str = "Message decoding failed",
        *,
        message_id: str | None = None,
    ) -> None:
        self.reason = reason
        self.message_id = message_id
        super().__init__(reason)


class MalformedPayloadError(MessageDecodingFailedError):
    """Raised when the body is not structured data at all, or ``data`` is null."""


class MessageSerializationError(MessengerError):
    """Raised when a message cannot be serialized for the wire."""


class MessengerConnectionError(MessengerError):
    """Raised when connectivity to the message broker fails."""
