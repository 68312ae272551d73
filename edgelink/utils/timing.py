"""
Stage latency recording for the detection pipeline.
"""

import time
from contextlib import contextmanager
from typing import Any, Iterator


def elapsed_ms(start: float) -> float:
    """Milliseconds since a time.monotonic() reading."""
    return (time.monotonic() - start) * 1000.0


@contextmanager
def record_latency(metrics: Any, field_name: str) -> Iterator[None]:
    """
    Time the enclosed block and store the result on a metrics record.

    The latency is written even when the block raises, so a failed stage
    still reports how long it ran.

    Args:
        metrics: Object with a float attribute named field_name
        field_name: Attribute receiving the elapsed milliseconds

    Raises:
        AttributeError: If metrics has no such attribute

    Example:
        with record_latency(metrics, "blur_latency_ms"):
            blurred = convolve(image, kernel)
    """
    if not hasattr(metrics, field_name):
        raise AttributeError(f"{type(metrics).__name__} has no field '{field_name}'")

    start = time.monotonic()
    try:
        yield
    finally:
        setattr(metrics, field_name, elapsed_ms(start))
