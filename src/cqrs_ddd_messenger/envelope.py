"""Envelope — immutable in-process wrapper pairing a message with its stamps."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

S = TypeVar("S", bound="Stamp")


class Stamp(BaseModel):
    """Base class for transport metadata attached to an envelope."""

    model_config = ConfigDict(frozen=True)


class RedeliveryStamp(Stamp):
    """Number of prior delivery attempts. Carried across hops, never computed."""

    retry_count: int = Field(default=0, ge=0)


class MessageTypeStamp(Stamp):
    """Logical type name the message arrived under on the wire.

    A class registered under an alias must be re-encoded with that alias, not
    with its default message name.
    """

    type_name: str = Field(..., min_length=1)


class RoutingKeyStamp(Stamp):
    """Routing key consumed by the broker transport when publishing."""

    routing_key: str = Field(..., min_length=1)


class Envelope(BaseModel):
    """Immutable unit of transport: a message plus its stamps.

    Adding a stamp returns a new envelope; the message is never touched.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message: Any
    stamps: tuple[Stamp, ...] = ()

    @classmethod
    def wrap(cls, message: Any, *stamps: Stamp) -> Envelope:
        """Wrap *message* (or restamp an existing envelope) with *stamps*."""
        envelope = message if isinstance(message, Envelope) else cls(message=message)
        return envelope.with_stamps(*stamps)

    def with_stamps(self, *stamps: Stamp) -> Envelope:
        if not stamps:
            return self
        return self.model_copy(update={"stamps": (*self.stamps, *stamps)})

    def without_stamps_of(self, stamp_type: type[Stamp]) -> Envelope:
        kept = tuple(s for s in self.stamps if not isinstance(s, stamp_type))
        return self.model_copy(update={"stamps": kept})

    def last(self, stamp_type: type[S]) -> S | None:
        """Return the most recently added stamp of *stamp_type*, if any."""
        for stamp in reversed(self.stamps):
            if isinstance(stamp, stamp_type):
                return stamp
        return None

    def all(self, stamp_type: type[S]) -> list[S]:
        return [s for s in self.stamps if isinstance(s, stamp_type)]
