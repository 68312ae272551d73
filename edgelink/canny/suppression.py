"""
Directional non-maximum suppression.

Thins the gradient magnitude to one-pixel ridges by comparing each cell with
the two neighbors that lie along its gradient direction.
"""

import logging
from typing import Tuple

import numpy as np

from edgelink.canny.neighbors import NeighborSampler
from edgelink.errors import DimensionMismatch
from edgelink.image import as_plane, restore_shape

logger = logging.getLogger(__name__)

# Neighbor offsets for each 45 degree bucket of [0, 180)
DIRECTION_OFFSETS: Tuple[Tuple[Tuple[int, int], Tuple[int, int]], ...] = (
    ((0, -1), (0, 1)),     # [0, 45): horizontal
    ((-1, -1), (1, 1)),    # [45, 90): diagonal
    ((-1, 0), (1, 0)),     # [90, 135): vertical
    ((-1, 1), (1, -1)),    # [135, 180): anti-diagonal
)


def normalize_orientation(orientation: np.ndarray) -> np.ndarray:
    """
    Convert radians to degrees folded into [0, 180).

    A direction and its opposite describe the same edge, so angles are
    taken modulo 180.
    """
    with np.errstate(invalid="ignore"):
        degrees = np.mod(np.degrees(orientation), 180.0)
    # np.mod can round tiny negatives up to exactly 180
    return np.where(degrees >= 180.0, 0.0, degrees)


def direction_buckets(orientation: np.ndarray) -> np.ndarray:
    """Map orientations (radians) to bucket indices 0..3 of DIRECTION_OFFSETS."""
    degrees = normalize_orientation(orientation)
    # NaN fails every lower-bound test and falls through to anti-diagonal
    degrees = np.nan_to_num(degrees, nan=135.0)
    return np.clip(np.floor(degrees / 45.0), 0, 3).astype(np.intp)


class DirectionalSuppressor:
    """
    Non-maximum suppression over magnitude and orientation grids.

    Every decision reads the unmodified input magnitude; results go to a
    separate output array, so the order in which cells are visited never
    matters.
    """

    def suppress(self, magnitude: np.ndarray, orientation: np.ndarray) -> np.ndarray:
        """
        Zero every cell that has a strictly larger neighbor along its gradient.

        Args:
            magnitude: (rows, cols) or (rows, cols, 1) gradient magnitude
            orientation: Gradient angle in radians, same shape as magnitude

        Returns:
            New array shaped like magnitude with non-maxima set to zero

        Raises:
            DimensionMismatch: If the two grids differ in shape
        """
        magnitude = np.asarray(magnitude)
        orientation = np.asarray(orientation)
        if magnitude.shape != orientation.shape:
            raise DimensionMismatch(
                f"Magnitude {magnitude.shape} and orientation {orientation.shape} differ"
            )

        plane = as_plane(magnitude)
        buckets = direction_buckets(as_plane(orientation))
        sampler = NeighborSampler(plane)

        result = plane.copy()
        for bucket, (first, second) in enumerate(DIRECTION_OFFSETS):
            selected = buckets == bucket
            if not selected.any():
                continue
            before = sampler.shifted(*first)
            after = sampler.shifted(*second)
            beaten = selected & ((before > plane) | (after > plane))
            result[beaten] = 0

        logger.debug(
            f"Suppression kept {np.count_nonzero(result)} of "
            f"{np.count_nonzero(plane)} non-zero cells"
        )
        return restore_shape(result, magnitude)


def suppress_non_maxima(magnitude: np.ndarray, orientation: np.ndarray) -> np.ndarray:
    """Functional form of DirectionalSuppressor.suppress."""
    return DirectionalSuppressor().suppress(magnitude, orientation)
