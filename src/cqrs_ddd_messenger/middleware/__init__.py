"""Outbound middleware components."""

from .base import IMiddleware
from .logging import LoggingMiddleware
from .pipeline import build_pipeline
from .routing import RoutingKeyMiddleware

__all__ = [
    "IMiddleware",
    "LoggingMiddleware",
    "RoutingKeyMiddleware",
    "build_pipeline",
]
