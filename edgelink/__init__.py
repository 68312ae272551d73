"""
edgelink - Canny edge detection over single-channel intensity grids.
"""

from edgelink.canny import (
    CannyBuilder,
    CannyParameters,
    CannyPipeline,
    apply_canny,
)
from edgelink.errors import (
    ChannelDimensionMismatch,
    DimensionMismatch,
    EdgeDetectionError,
    KernelConstructionError,
)

__version__ = "0.1.0"

__all__ = [
    "CannyBuilder",
    "CannyParameters",
    "CannyPipeline",
    "apply_canny",
    "ChannelDimensionMismatch",
    "DimensionMismatch",
    "EdgeDetectionError",
    "KernelConstructionError",
]
