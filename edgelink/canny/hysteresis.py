"""
Hysteresis thresholding and edge linking.

Strong pixels (>= upper) seed a depth-first search that promotes connected
weak pixels (> lower). Weak pixels that no strong seed reaches are dropped.
"""

import logging
from typing import List, Set, Tuple

import numpy as np

from edgelink.image import as_plane, restore_shape

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


def expand_candidates(
    coord: Coord,
    shape: Tuple[int, int],
    visited: Set[Coord],
) -> List[Coord]:
    """
    List the unvisited neighbors of a cell in the rows above and below it.

    Up to six cells: (r-1, c-1), (r-1, c+1), (r-1, c) and the same three in
    row r+1. Cells outside the grid or already in visited are left out.
    Visited membership is read at call time only; the caller must still
    skip candidates that get visited before they are popped.

    Args:
        coord: (row, col) of the cell being expanded
        shape: (rows, cols) of the grid
        visited: Coordinates already linked in this run

    Returns:
        Candidate coordinates in no particular order
    """
    r, c = coord
    rows, cols = shape
    candidates: List[Coord] = []

    for nr in (r - 1, r + 1):
        if nr < 0 or nr >= rows:
            continue
        if c > 0 and (nr, c - 1) not in visited:
            candidates.append((nr, c - 1))
        if c < cols - 1 and (nr, c + 1) not in visited:
            candidates.append((nr, c + 1))
        if (nr, c) not in visited:
            candidates.append((nr, c))

    return candidates


class HysteresisLinker:
    """
    Double-threshold edge linking.

    Each call to link() uses its own visited set; nothing is carried over
    between calls.
    """

    def __init__(self, lower: float, upper: float):
        """
        Args:
            lower: Weak threshold; values must be strictly above it to link
            upper: Strong threshold; values at or above it seed edges
        """
        if lower > upper:
            raise ValueError(f"lower threshold {lower} exceeds upper threshold {upper}")
        self._lower = lower
        self._upper = upper

    @property
    def lower(self) -> float:
        return self._lower

    @property
    def upper(self) -> float:
        return self._upper

    def threshold(self, magnitude: np.ndarray) -> np.ndarray:
        """Clamp values below the lower threshold to zero."""
        return np.where(magnitude >= self._lower, magnitude, 0)

    def link(self, magnitude: np.ndarray) -> np.ndarray:
        """
        Build the edge mask from a (suppressed) magnitude grid.

        Args:
            magnitude: (rows, cols) or (rows, cols, 1) grid

        Returns:
            Boolean mask shaped like magnitude
        """
        magnitude = np.asarray(magnitude)
        plane = self.threshold(as_plane(magnitude))
        edges = plane >= self._upper
        shape = plane.shape

        visited: Set[Coord] = set()
        strong_count = 0

        # np.nonzero walks the strong cells in raster order
        for r, c in zip(*np.nonzero(edges)):
            seed = (int(r), int(c))
            if seed in visited:
                continue
            strong_count += 1
            visited.add(seed)

            stack = expand_candidates(seed, shape, visited)
            while stack:
                cand = stack.pop()
                if cand in visited:
                    continue
                if plane[cand] > self._lower:
                    visited.add(cand)
                    edges[cand] = True
                    stack.extend(expand_candidates(cand, shape, visited))

        logger.debug(
            f"Linked {np.count_nonzero(edges)} edge pixels from "
            f"{strong_count} unvisited strong seeds"
        )
        return restore_shape(edges, magnitude)


def link_edges(magnitude: np.ndarray, lower: float, upper: float) -> np.ndarray:
    """Functional form of HysteresisLinker.link."""
    return HysteresisLinker(lower, upper).link(magnitude)
