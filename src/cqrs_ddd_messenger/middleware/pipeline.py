"""build_pipeline — construct the outbound middleware chain."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..envelope import Envelope

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .base import IMiddleware


def build_pipeline(
    middlewares: list[IMiddleware],
    terminal: Callable[[Envelope], Awaitable[Envelope]],
) -> Callable[[Any], Awaitable[Envelope]]:
    """Build a LIFO middleware chain ending at *terminal* (usually a transport).

    The first middleware in the list is the **outermost** wrapper. The returned
    callable accepts a bare message or an Envelope; bare messages are wrapped
    before the first stage runs.
    """
    chain: Callable[[Envelope], Awaitable[Envelope]] = terminal

    for mw in reversed(middlewares):
        current_next = chain  # capture for closure

        async def _wrapper(
            envelope: Envelope,
            _mw: IMiddleware = mw,
            _next: Callable[[Envelope], Awaitable[Envelope]] = current_next,
        ) -> Envelope:
            return await _mw(envelope, _next)

        chain = _wrapper

    async def dispatch(message: Any) -> Envelope:
        return await chain(Envelope.wrap(message))

    return dispatch
