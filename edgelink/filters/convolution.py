"""
2-D convolution over intensity grids.
"""

import cv2
import numpy as np

from edgelink.errors import DimensionMismatch
from edgelink.image import channel_count


def _filter_plane(plane: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    # filter2D correlates, so flip the kernel for a true convolution
    flipped = np.ascontiguousarray(kernel[::-1, ::-1])
    return cv2.filter2D(np.ascontiguousarray(plane), cv2.CV_64F, flipped)


def convolve(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Convolve each channel of an image with a 2-D kernel.

    Borders are handled by reflection (OpenCV default), so the output has
    the same shape as the input.

    Args:
        image: (rows, cols) or (rows, cols, channels) grid
        kernel: (k_rows, k_cols) kernel, or (k_rows, k_cols, channels) with
            one plane per image channel

    Returns:
        float64 array with the image's shape

    Raises:
        DimensionMismatch: If the kernel does not fit the image
    """
    image = np.asarray(image, dtype=np.float64)
    kernel = np.asarray(kernel, dtype=np.float64)
    channels = channel_count(image)

    if kernel.ndim == 3:
        if kernel.shape[2] != channels:
            raise DimensionMismatch(
                f"Kernel has {kernel.shape[2]} channels, image has {channels}"
            )
    elif kernel.ndim != 2:
        raise DimensionMismatch(f"Kernel must be 2-D or 3-D, got shape {kernel.shape}")

    if kernel.size == 0:
        raise DimensionMismatch("Kernel is empty")

    if kernel.shape[0] > image.shape[0] or kernel.shape[1] > image.shape[1]:
        raise DimensionMismatch(
            f"Kernel {kernel.shape[:2]} is larger than image {image.shape[:2]}"
        )

    if image.ndim == 2:
        planar_kernel = kernel if kernel.ndim == 2 else kernel[:, :, 0]
        return _filter_plane(image, planar_kernel)

    result = np.empty_like(image)
    for ch in range(channels):
        planar_kernel = kernel if kernel.ndim == 2 else kernel[:, :, ch]
        result[:, :, ch] = _filter_plane(image[:, :, ch], planar_kernel)
    return result
