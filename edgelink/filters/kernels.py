"""
Smoothing kernel construction.
"""

import math
from typing import Sequence, Tuple

import cv2
import numpy as np

from edgelink.errors import KernelConstructionError


def _validate_size(size, axis: str) -> int:
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise KernelConstructionError(f"Kernel {axis} must be an integer, got {size!r}")
    if size <= 0 or size % 2 == 0:
        raise KernelConstructionError(f"Kernel {axis} must be positive and odd, got {size}")
    return int(size)


def _validate_variance(value, axis: str) -> float:
    try:
        variance = float(value)
    except (TypeError, ValueError):
        raise KernelConstructionError(f"Variance along {axis} must be a number, got {value!r}")
    if not math.isfinite(variance) or variance <= 0:
        raise KernelConstructionError(f"Variance along {axis} must be positive, got {value!r}")
    return variance


def build_gaussian_kernel(
    shape: Tuple[int, int],
    covariance: Sequence[float],
) -> np.ndarray:
    """
    Build a normalized 2-D Gaussian smoothing kernel.

    The kernel is the outer product of two 1-D Gaussians, so the covariance
    is diagonal: covariance[0] is the variance along rows, covariance[1]
    along columns.

    Args:
        shape: (rows, cols) kernel size, both positive and odd
        covariance: (row variance, column variance), both positive

    Returns:
        float64 kernel of the given shape summing to 1

    Raises:
        KernelConstructionError: If the shape or covariance is invalid
    """
    if len(shape) != 2:
        raise KernelConstructionError(f"Kernel shape must have 2 entries, got {shape!r}")
    if len(covariance) != 2:
        raise KernelConstructionError(f"Covariance must have 2 entries, got {covariance!r}")

    rows = _validate_size(shape[0], "rows")
    cols = _validate_size(shape[1], "cols")
    var_rows = _validate_variance(covariance[0], "rows")
    var_cols = _validate_variance(covariance[1], "cols")

    k_rows = cv2.getGaussianKernel(rows, math.sqrt(var_rows), cv2.CV_64F)
    k_cols = cv2.getGaussianKernel(cols, math.sqrt(var_cols), cv2.CV_64F)

    kernel = k_rows @ k_cols.T
    return kernel / kernel.sum()
