"""
Unit tests for candidate expansion and hysteresis edge linking.
"""

import numpy as np
import pytest

from edgelink.canny.hysteresis import HysteresisLinker, expand_candidates, link_edges


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def linker():
    """Linker with lower=0.3, upper=0.7."""
    return HysteresisLinker(lower=0.3, upper=0.7)


@pytest.fixture
def empty_grid():
    return np.zeros((5, 5))


# =============================================================================
# expand_candidates Tests
# =============================================================================

class TestExpandCandidates:
    """Tests for neighbor enumeration in the linking search."""

    def test_interior_cell_has_six_candidates(self):
        result = expand_candidates((1, 1), (3, 3), set())

        assert len(result) == 6
        assert set(result) == {(0, 0), (0, 1), (0, 2), (2, 0), (2, 1), (2, 2)}

    def test_same_row_cells_are_not_candidates(self):
        result = expand_candidates((1, 1), (3, 3), set())

        assert (1, 0) not in result
        assert (1, 2) not in result

    def test_top_left_corner(self):
        assert set(expand_candidates((0, 0), (3, 3), set())) == {(1, 0), (1, 1)}

    def test_bottom_right_corner(self):
        assert set(expand_candidates((2, 2), (3, 3), set())) == {(1, 1), (1, 2)}

    def test_right_edge(self):
        result = expand_candidates((1, 2), (3, 3), set())
        assert set(result) == {(0, 1), (0, 2), (2, 1), (2, 2)}

    def test_single_row_grid_has_no_candidates(self):
        assert expand_candidates((0, 2), (1, 5), set()) == []

    def test_visited_cells_are_excluded(self):
        visited = {(0, 0), (2, 1)}

        result = expand_candidates((1, 1), (3, 3), visited)

        assert set(result) == {(0, 1), (0, 2), (2, 0), (2, 2)}

    def test_each_diagonal_checks_its_own_visited_entry(self):
        """Visiting the upper-right cell must not hide the upper-left one."""
        result = expand_candidates((1, 1), (3, 3), {(0, 2)})

        assert (0, 0) in result
        assert (0, 2) not in result

    def test_does_not_modify_visited(self):
        visited = {(0, 0)}
        expand_candidates((1, 1), (3, 3), visited)
        assert visited == {(0, 0)}


# =============================================================================
# HysteresisLinker Tests
# =============================================================================

class TestHysteresisLinker:
    """Tests for double thresholding and connectivity-based promotion."""

    def test_strong_pixels_are_edges(self, linker, empty_grid):
        empty_grid[2, 2] = 0.9
        empty_grid[4, 0] = 0.7

        mask = linker.link(empty_grid)

        assert mask.dtype == np.bool_
        assert mask[2, 2]
        assert mask[4, 0]
        assert mask.sum() == 2

    def test_weak_diagonal_chain_is_promoted(self, linker, empty_grid):
        empty_grid[0, 0] = 0.9
        for i in (1, 2, 3):
            empty_grid[i, i] = 0.5

        mask = linker.link(empty_grid)

        assert all(mask[i, i] for i in range(4))
        assert mask.sum() == 4

    def test_weak_vertical_chain_is_promoted(self, linker, empty_grid):
        empty_grid[:, 2] = [0.5, 0.5, 0.9, 0.5, 0.5]

        mask = linker.link(empty_grid)

        assert mask[:, 2].all()
        assert mask.sum() == 5

    def test_isolated_weak_pixel_is_discarded(self, linker, empty_grid):
        empty_grid[0, 0] = 0.9
        empty_grid[4, 4] = 0.5

        mask = linker.link(empty_grid)

        assert mask[0, 0]
        assert not mask[4, 4]

    def test_weak_grid_without_strong_seed_is_empty(self, linker):
        mask = linker.link(np.full((4, 4), 0.5))
        assert not mask.any()

    def test_value_equal_to_lower_is_not_promoted(self, linker, empty_grid):
        empty_grid[0, 0] = 0.9
        empty_grid[1, 0] = 0.3

        mask = linker.link(empty_grid)

        assert not mask[1, 0]

    def test_zero_lower_does_not_admit_zero_cells(self, empty_grid):
        empty_grid[2, 2] = 0.9

        mask = link_edges(empty_grid, lower=0.0, upper=0.5)

        assert mask.sum() == 1

    def test_sub_threshold_gap_breaks_chain(self, linker, empty_grid):
        empty_grid[0, 0] = 0.9
        empty_grid[1, 0] = 0.2
        empty_grid[2, 0] = 0.5

        mask = linker.link(empty_grid)

        assert not mask[1, 0]
        assert not mask[2, 0]

    def test_same_row_weak_neighbor_is_not_linked(self, linker):
        mask = linker.link(np.array([[0.9, 0.5, 0.0]]))
        np.testing.assert_array_equal(mask, [[True, False, False]])

    def test_strong_pixels_always_in_mask(self, linker):
        magnitude = np.random.default_rng(3).uniform(0, 1, size=(15, 15))

        mask = linker.link(magnitude)

        assert mask[magnitude >= 0.7].all()
        assert not mask[magnitude <= 0.3].any()

    def test_raising_lower_never_adds_edges(self):
        magnitude = np.random.default_rng(0).uniform(0, 1, size=(20, 20))

        counts = [
            link_edges(magnitude, lower, 0.7).sum()
            for lower in np.linspace(0.0, 0.69, 12)
        ]

        assert all(a >= b for a, b in zip(counts, counts[1:]))

    def test_repeated_calls_are_independent(self, linker):
        magnitude = np.random.default_rng(1).uniform(0, 1, size=(10, 10))

        first = linker.link(magnitude)
        second = linker.link(magnitude)

        np.testing.assert_array_equal(first, second)

    def test_input_is_not_modified(self, linker):
        magnitude = np.random.default_rng(2).uniform(0, 1, size=(6, 6))
        original = magnitude.copy()

        linker.link(magnitude)

        np.testing.assert_array_equal(magnitude, original)

    def test_keeps_channel_axis(self, linker):
        mask = linker.link(np.full((3, 3, 1), 0.9))
        assert mask.shape == (3, 3, 1)
        assert mask.all()

    def test_inverted_thresholds_rejected(self):
        with pytest.raises(ValueError):
            HysteresisLinker(lower=0.8, upper=0.2)
