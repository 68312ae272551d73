"""
Image gradient estimation.
"""

from typing import Tuple

import cv2
import numpy as np

from edgelink.image import as_plane, restore_shape


def sobel_derivatives(image: np.ndarray, ksize: int = 3) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute horizontal and vertical Sobel derivatives of a single-channel grid.

    Args:
        image: (rows, cols) or (rows, cols, 1) grid
        ksize: Sobel kernel size (1, 3, 5, or 7)

    Returns:
        (gx, gy) float64 planes, gx along columns and gy along rows
    """
    plane = np.ascontiguousarray(as_plane(np.asarray(image, dtype=np.float64)))
    gx = cv2.Sobel(plane, cv2.CV_64F, 1, 0, ksize=ksize)
    gy = cv2.Sobel(plane, cv2.CV_64F, 0, 1, ksize=ksize)
    return gx, gy


def full_sobel(image: np.ndarray, ksize: int = 3) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute gradient magnitude and orientation.

    Orientation is arctan2(gy, gx) in radians. Rows grow downward, so an
    angle of pi/2 points to the next row.

    Args:
        image: (rows, cols) or (rows, cols, 1) grid
        ksize: Sobel kernel size

    Returns:
        (magnitude, orientation), both shaped like the input
    """
    image = np.asarray(image, dtype=np.float64)
    gx, gy = sobel_derivatives(image, ksize)

    magnitude = np.sqrt(gx ** 2 + gy ** 2)
    orientation = np.arctan2(gy, gx)

    return restore_shape(magnitude, image), restore_shape(orientation, image)
