"""
Per-run edge detection metrics.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass
class DetectionMetrics:
    """
    Metrics collected for a single Canny run.

    All latency values are in milliseconds.
    """
    shape: Tuple[int, ...] = ()

    # Stage latencies
    blur_latency_ms: float = 0.0
    gradient_latency_ms: float = 0.0
    suppression_latency_ms: float = 0.0
    linking_latency_ms: float = 0.0
    total_latency_ms: float = 0.0

    # Pixel counts
    strong_pixels: int = 0
    edge_pixels: int = 0

    @property
    def promoted_pixels(self) -> int:
        """Weak pixels that linking turned into edges."""
        return self.edge_pixels - self.strong_pixels

    @property
    def edge_density(self) -> float:
        """Fraction of cells marked as edges."""
        if len(self.shape) < 2 or self.shape[0] * self.shape[1] == 0:
            return 0.0
        return self.edge_pixels / (self.shape[0] * self.shape[1])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "shape": list(self.shape),
            "blur_latency_ms": round(self.blur_latency_ms, 2),
            "gradient_latency_ms": round(self.gradient_latency_ms, 2),
            "suppression_latency_ms": round(self.suppression_latency_ms, 2),
            "linking_latency_ms": round(self.linking_latency_ms, 2),
            "total_latency_ms": round(self.total_latency_ms, 2),
            "strong_pixels": self.strong_pixels,
            "promoted_pixels": self.promoted_pixels,
            "edge_pixels": self.edge_pixels,
            "edge_density": round(self.edge_density, 4),
        }

    def to_json(self) -> str:
        """Serialize to a compact JSON string."""
        return json.dumps(self.to_dict(), separators=(',', ':'))
