"""Wire header names shared by the codec and the transport adapters."""

from __future__ import annotations

CONTENT_TYPE = "Content-Type"
CORRELATION_ID = "x-correlation-id"
REPLY_TO = "x-reply-to"
RETRY_COUNT = "x-retry-count"

JSON_CONTENT_TYPE = "application/json"
