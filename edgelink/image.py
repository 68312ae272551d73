"""
Intensity grid helpers and image file I/O.

Grids are numpy arrays shaped (rows, cols, channels). A 2-D array is treated
as a single-channel grid.
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from edgelink.errors import ChannelDimensionMismatch, DimensionMismatch

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def channel_count(image: np.ndarray) -> int:
    """Number of channels in a 2-D or 3-D grid."""
    if image.ndim == 2:
        return 1
    if image.ndim == 3:
        return image.shape[2]
    raise DimensionMismatch(f"Expected a 2-D or 3-D grid, got shape {image.shape}")


def as_plane(image: np.ndarray) -> np.ndarray:
    """
    Get a 2-D (rows, cols) view of a single-channel grid.

    Raises:
        ChannelDimensionMismatch: If the grid has more than one channel
        DimensionMismatch: If the grid is neither 2-D nor 3-D
    """
    channels = channel_count(image)
    if channels != 1:
        raise ChannelDimensionMismatch(channels)
    if image.ndim == 3:
        return image[:, :, 0]
    return image


def restore_shape(plane: np.ndarray, like: np.ndarray) -> np.ndarray:
    """Reshape a 2-D plane back to the layout of the grid it came from."""
    return plane.reshape(like.shape)


def to_intensity_grid(image: np.ndarray) -> np.ndarray:
    """
    Convert an array to a float64 (rows, cols, channels) intensity grid.

    Integer images are scaled to [0, 1] by the maximum of their dtype so the
    normalized Canny thresholds apply. Float images are only cast.

    Args:
        image: 2-D or 3-D array

    Returns:
        float64 grid with an explicit channel axis
    """
    data = np.asarray(image)
    if data.ndim == 2:
        data = data[:, :, np.newaxis]
    elif data.ndim != 3:
        raise DimensionMismatch(f"Expected a 2-D or 3-D image, got shape {data.shape}")

    if data.dtype == np.bool_:
        return data.astype(np.float64)
    if np.issubdtype(data.dtype, np.integer):
        return data.astype(np.float64) / float(np.iinfo(data.dtype).max)
    return data.astype(np.float64)


def load_grayscale(path: PathLike) -> np.ndarray:
    """
    Load an image file as a single-channel [0, 1] intensity grid.

    Args:
        path: Image file readable by OpenCV

    Returns:
        float64 array shaped (rows, cols, 1)

    Raises:
        FileNotFoundError: If OpenCV cannot read the file
    """
    path = Path(path)
    image = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if image is None:
        raise FileNotFoundError(f"Cannot read image: {path}")

    logger.debug(f"Loaded {path}: {image.shape[1]}x{image.shape[0]} {image.dtype}")
    return to_intensity_grid(image)


def mask_to_image(mask: np.ndarray) -> np.ndarray:
    """Convert a boolean edge mask to a 2-D uint8 image (edges 255, rest 0)."""
    plane = as_plane(np.asarray(mask))
    return np.where(plane, 255, 0).astype(np.uint8)


def save_mask(path: PathLike, mask: np.ndarray) -> Path:
    """
    Write a boolean edge mask as an 8-bit image.

    Parent directories are created if needed.

    Returns:
        Path written

    Raises:
        IOError: If OpenCV fails to encode or write the file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not cv2.imwrite(str(path), mask_to_image(mask)):
        raise IOError(f"Failed to write mask: {path}")

    return path
