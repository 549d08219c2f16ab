"""Observability: structured logging and decode metrics."""

from dshk.observability.logging import configure_logging, get_logger
from dshk.observability.metrics import DecodeMetrics

__all__ = [
    "configure_logging",
    "get_logger",
    "DecodeMetrics",
]
