"""
Telemetry for edgelink.

Provides per-run detection metrics and a JSON Lines logger for them.
"""

from .logger import MetricsLogger
from .metrics import DetectionMetrics

__all__ = [
    "MetricsLogger",
    "DetectionMetrics",
]
