"""
Complete Canny edge detection pipeline.

Combines smoothing, gradient estimation, non-maximum suppression and
hysteresis linking into a single processing call.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from edgelink.config import CannyConfig
from edgelink.canny.hysteresis import HysteresisLinker
from edgelink.canny.parameters import (
    DEFAULT_BLUR_COVARIANCE,
    DEFAULT_BLUR_SHAPE,
    CannyBuilder,
    CannyParameters,
)
from edgelink.canny.suppression import DirectionalSuppressor
from edgelink.errors import ChannelDimensionMismatch
from edgelink.filters.convolution import convolve
from edgelink.filters.gradient import full_sobel
from edgelink.image import channel_count
from edgelink.telemetry.metrics import DetectionMetrics
from edgelink.utils.timing import record_latency

logger = logging.getLogger(__name__)


class CannyPipeline:
    """
    Canny edge detector.

    Processing stages:
    1. Gaussian blur (2-D convolution with the configured kernel)
    2. Sobel gradient magnitude and orientation
    3. Directional non-maximum suppression
    4. Hysteresis thresholding and edge linking

    The pipeline holds only its parameters; every call owns its
    intermediate arrays.
    """

    def __init__(self, params: Optional[CannyParameters] = None):
        """
        Initialize the pipeline.

        Args:
            params: Canny parameters (CannyBuilder defaults if None)
        """
        self._params = params if params is not None else CannyBuilder().build()
        self._suppressor = DirectionalSuppressor()
        self._linker = HysteresisLinker(self._params.lower, self._params.upper)

    @classmethod
    def from_config(cls, config: CannyConfig) -> "CannyPipeline":
        """Create a pipeline from the canny section of the configuration."""
        return cls(build_parameters(config))

    @property
    def params(self) -> CannyParameters:
        return self._params

    def apply(self, image: np.ndarray) -> np.ndarray:
        """
        Detect edges in a single-channel intensity grid.

        Args:
            image: (rows, cols) or (rows, cols, 1) array of intensities,
                ideally normalized to [0, 1]

        Returns:
            Boolean edge mask with the image's shape

        Raises:
            ChannelDimensionMismatch: If the image has more than one channel
            DimensionMismatch: If the kernel does not fit the image
        """
        mask, _ = self.apply_with_metrics(image)
        return mask

    def apply_with_metrics(self, image: np.ndarray) -> Tuple[np.ndarray, DetectionMetrics]:
        """
        Detect edges and report stage latencies and pixel counts.

        Returns:
            (mask, metrics) tuple
        """
        image = np.asarray(image)
        channels = channel_count(image)
        if channels > 1:
            raise ChannelDimensionMismatch(channels)

        metrics = DetectionMetrics(shape=tuple(image.shape))

        with record_latency(metrics, "total_latency_ms"):
            # Stage 1: Smoothing
            with record_latency(metrics, "blur_latency_ms"):
                blurred = convolve(image.astype(np.float64), self._params.kernel)

            # Stage 2: Gradient
            with record_latency(metrics, "gradient_latency_ms"):
                magnitude, orientation = full_sobel(blurred)

            # Stage 3: Non-maximum suppression
            with record_latency(metrics, "suppression_latency_ms"):
                suppressed = self._suppressor.suppress(magnitude, orientation)

            # Stage 4: Hysteresis linking
            with record_latency(metrics, "linking_latency_ms"):
                mask = self._linker.link(suppressed)

        metrics.strong_pixels = int(np.count_nonzero(suppressed >= self._params.upper))
        metrics.edge_pixels = int(np.count_nonzero(mask))

        logger.debug(
            f"Canny {image.shape}: blur={metrics.blur_latency_ms:.1f}ms "
            f"gradient={metrics.gradient_latency_ms:.1f}ms "
            f"nms={metrics.suppression_latency_ms:.1f}ms "
            f"link={metrics.linking_latency_ms:.1f}ms "
            f"edges={metrics.edge_pixels} (promoted {metrics.promoted_pixels})"
        )

        return mask, metrics


def build_parameters(config: CannyConfig) -> CannyParameters:
    """Translate a CannyConfig into CannyParameters via CannyBuilder."""
    builder = CannyBuilder()

    if config.blur_shape is not None or config.blur_covariance is not None:
        shape = config.blur_shape if config.blur_shape is not None else DEFAULT_BLUR_SHAPE
        covariance = (
            config.blur_covariance if config.blur_covariance is not None
            else DEFAULT_BLUR_COVARIANCE
        )
        builder.blur(shape, covariance)

    if config.lower_threshold is not None:
        builder.lower_threshold(config.lower_threshold)
    if config.upper_threshold is not None:
        builder.upper_threshold(config.upper_threshold)

    return builder.build()


def apply_canny(image: np.ndarray, params: CannyParameters) -> np.ndarray:
    """
    Apply Canny edge detection.

    Args:
        image: Single-channel intensity grid
        params: Canny parameters

    Returns:
        Boolean edge mask
    """
    return CannyPipeline(params).apply(image)
