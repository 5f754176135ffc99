"""IMiddleware — LIFO middleware protocol over envelopes."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Protocol,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..envelope import Envelope


@runtime_checkable
class IMiddleware(Protocol):
    """Protocol for middleware in the outbound dispatch pipeline.

    Middleware receives the in-flight envelope, may restamp it, and passes it
    on. The chain is applied in **LIFO** order (first registered = outermost).
    """

    async def __call__(
        self,
        envelope: Envelope,
        next_handler: Callable[[Envelope], Awaitable[Envelope]],
    ) -> Envelope:
        """Execute middleware logic and call next_handler to proceed.

        Parameters
        ----------
        envelope:
            The outbound envelope.
        next_handler:
            Async callable representing the rest of the pipeline.

        Returns
        -------
        The envelope returned by the rest of the chain.
        """
        ...
