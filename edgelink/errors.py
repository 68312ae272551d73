"""
Error types for the edge detection pipeline.

All errors derive from ValueError so callers that only care about bad input
can catch the builtin.
"""


class EdgeDetectionError(ValueError):
    """Base class for edge detection failures."""


class ChannelDimensionMismatch(EdgeDetectionError):
    """Raised when an image handed to the Canny pipeline has more than one channel."""

    def __init__(self, channels: int):
        super().__init__(f"Canny edge detection expects 1 channel, got {channels}")
        self.channels = channels


class DimensionMismatch(EdgeDetectionError):
    """Raised when array shapes are incompatible (kernel vs image, magnitude vs orientation)."""


class KernelConstructionError(EdgeDetectionError):
    """Raised when a smoothing kernel cannot be built from the given shape or covariance."""
