"""
Canny configuration: immutable parameters and a fluent builder.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

from edgelink.errors import KernelConstructionError
from edgelink.filters.kernels import build_gaussian_kernel

logger = logging.getLogger(__name__)

DEFAULT_BLUR_SHAPE: Tuple[int, int] = (5, 5)
DEFAULT_BLUR_COVARIANCE: Tuple[float, float] = (2.0, 2.0)
DEFAULT_LOWER_THRESHOLD = 0.3
DEFAULT_UPPER_THRESHOLD = 0.7


@dataclass(frozen=True)
class CannyParameters:
    """
    Validated Canny settings.

    Attributes:
        kernel: 2-D smoothing kernel (read-only)
        lower: Weak edge threshold
        upper: Strong edge threshold, never below lower
    """
    kernel: np.ndarray = field(compare=False)
    lower: float
    upper: float

    def __post_init__(self):
        if self.lower > self.upper:
            raise ValueError(
                f"lower threshold {self.lower} exceeds upper threshold {self.upper}"
            )
        kernel = np.array(self.kernel, dtype=np.float64)
        kernel.setflags(write=False)
        object.__setattr__(self, "kernel", kernel)


class CannyBuilder:
    """
    Collects optional Canny settings and produces CannyParameters.

    Usage:
        params = (
            CannyBuilder()
            .blur((7, 7), [1.5, 1.5])
            .lower_threshold(0.2)
            .upper_threshold(0.6)
            .build()
        )
    """

    def __init__(self):
        self._kernel: Optional[np.ndarray] = None
        self._lower: Optional[float] = None
        self._upper: Optional[float] = None

    def lower_threshold(self, threshold: float) -> "CannyBuilder":
        """Set the weak edge threshold."""
        self._lower = float(threshold)
        return self

    def upper_threshold(self, threshold: float) -> "CannyBuilder":
        """Set the strong edge threshold."""
        self._upper = float(threshold)
        return self

    def blur(self, shape: Tuple[int, int], covariance: Sequence[float]) -> "CannyBuilder":
        """
        Use a Gaussian smoothing kernel of the given shape and covariance.

        If the kernel cannot be built the builder keeps whatever kernel it
        had before (possibly none). Validate the covariance up front if the
        failure matters.

        Args:
            shape: (rows, cols) kernel size, both odd
            covariance: (row variance, column variance)
        """
        try:
            self._kernel = build_gaussian_kernel(shape, covariance)
        except KernelConstructionError as e:
            logger.debug(f"Ignoring blur({shape}, {covariance}): {e}")
        return self

    def build(self) -> CannyParameters:
        """
        Materialize parameters, filling defaults for anything unset.

        Thresholds given in the wrong order are swapped.
        """
        kernel = self._kernel
        if kernel is None:
            kernel = build_gaussian_kernel(DEFAULT_BLUR_SHAPE, DEFAULT_BLUR_COVARIANCE)

        lower = self._lower if self._lower is not None else DEFAULT_LOWER_THRESHOLD
        upper = self._upper if self._upper is not None else DEFAULT_UPPER_THRESHOLD
        if upper < lower:
            lower, upper = upper, lower

        return CannyParameters(kernel=kernel, lower=lower, upper=upper)
