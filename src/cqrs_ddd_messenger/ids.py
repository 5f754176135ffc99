import uuid
from typing import Protocol


class IIDGenerator(Protocol):
    """
    Protocol for correlation ID generation strategies.
    Inject a deterministic implementation in tests.
    """

    def next_id(self) -> str:
        """Generates the next unique identifier."""
        ...


class UUID4Generator(IIDGenerator):
    """
    Default generator: every call starts a new correlation chain
    with a random UUIDv4.
    """

    def next_id(self) -> str:
        """Returns a string representation of a random UUIDv4."""
        return str(uuid.uuid4())
