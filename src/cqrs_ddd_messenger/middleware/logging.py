"""LoggingMiddleware — logs outbound dispatch details."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ..envelope import RedeliveryStamp, RoutingKeyStamp
from .base import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..envelope import Envelope

logger = logging.getLogger("cqrs_ddd.messenger.middleware")


class LoggingMiddleware(IMiddleware):
    """Logs dispatch — message name, routing key, retry count, duration."""

    async def __call__(
        self,
        envelope: Envelope,
        next_handler: Callable[[Envelope], Awaitable[Envelope]],
    ) -> Envelope:
        msg_name = type(envelope.message).__name__
        routing = envelope.last(RoutingKeyStamp)
        redelivery = envelope.last(RedeliveryStamp)
        logger.info(
            "Dispatching %s (routing_key=%s, retry_count=%d)",
            msg_name,
            routing.routing_key if routing else None,
            redelivery.retry_count if redelivery else 0,
        )
        start = time.perf_counter()
        try:
            result = await next_handler(envelope)
            elapsed = (time.perf_counter() - start) * 1000
            logger.info("%s dispatched in %.2fms", msg_name, elapsed)
            return result
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            logger.exception("%s failed after %.2fms", msg_name, elapsed)
            raise
