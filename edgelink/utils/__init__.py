"""Utility modules for edgelink."""

from edgelink.utils.timing import elapsed_ms, record_latency

__all__ = [
    "elapsed_ms",
    "record_latency",
]
