"""SimpleMessage base class and the registry that resolves logical type names."""

from __future__ import annotations

import uuid
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class SimpleMessage(BaseModel):
    """Base class for application messages carried over the bus.

    A message is an identifier plus opaque business attributes. Its logical
    type name is a property of the class, not of the instance: it defaults to
    the class name and can be pinned with ``__message_name__`` so renaming the
    class does not change the wire contract.

    Usage::

        class OrderPlaced(SimpleMessage):
            __message_name__ = "shop.order_placed"
    """

    model_config = ConfigDict(frozen=True)

    __message_name__: ClassVar[str | None] = None

    message_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    attributes: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def message_name(cls) -> str:
        """Return the logical type name used for routing and hydration."""
        return cls.__message_name__ or cls.__name__


class MessageTypeRegistry:
    """Registry for mapping ``message_name: str`` → ``Type[SimpleMessage]``.

    Used to reconstruct messages from wire payloads.

    **Explicit registration** is required via ``register(cls)``.
    Create instances per application context for isolation.

    Usage::

        registry = MessageTypeRegistry()
        registry.register(OrderPlaced)
        registry.get("OrderPlaced")
    """

    def __init__(self) -> None:
        self._registry: dict[str, type[SimpleMessage]] = {}

    def register(
        self, message_class: type[SimpleMessage], name: str | None = None
    ) -> None:
        """Register *message_class* under *name* (default: its message name)."""
        self._registry[name or message_class.message_name()] = message_class

    def get(self, name: str) -> type[SimpleMessage] | None:
        """Look up a message class by logical type name."""
        return self._registry.get(name)

    def has(self, name: str) -> bool:
        """Return ``True`` if *name* is registered."""
        return name in self._registry

    def list_registered(self) -> list[str]:
        """Return all registered type names."""
        return list(self._registry.keys())

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._registry.clear()
