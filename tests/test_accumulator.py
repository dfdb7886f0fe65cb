"""Tests for the vote accumulator."""

import pytest
import numpy as np
from houghcircles.detection.accumulator import Accumulator
from houghcircles.errors import AllocationError


class TestAccumulator:
    """Test accumulator allocation, increments and clearing."""

    def test_initialization(self):
        """Test a new accumulator is zero-filled."""
        acc = Accumulator(10, 8, 3)
        assert acc.shape == (10, 8, 3)
        assert acc.width == 10
        assert acc.height == 8
        assert acc.radius_count == 3
        assert acc.total_votes() == 0
        assert acc.max_votes() == 0

    def test_increment(self):
        """Test a single increment."""
        acc = Accumulator(10, 10, 2)
        acc.increment(3, 4, 1)
        acc.increment(3, 4, 1)
        assert acc[3, 4, 1] == 2
        assert acc.total_votes() == 2

    @pytest.mark.parametrize("index", [
        (-1, 0, 0), (0, -1, 0), (0, 0, -1),
        (10, 0, 0), (0, 10, 0), (0, 0, 2),
    ])
    def test_increment_out_of_range_ignored(self, index):
        """Test out-of-range votes are dropped on both sides."""
        acc = Accumulator(10, 10, 2)
        acc.increment(*index)
        assert acc.total_votes() == 0

    def test_increment_many_counts_duplicates(self):
        """Test repeated coordinates each receive a vote."""
        acc = Accumulator(10, 10, 2)
        applied = acc.increment_many(np.array([1, 1, 2]), np.array([1, 1, 2]), 0)
        assert applied == 3
        assert acc[1, 1, 0] == 2
        assert acc[2, 2, 0] == 1
        assert acc[:, :, 1].sum() == 0

    def test_increment_many_drops_out_of_range(self):
        """Test vectorised votes follow the same bounds policy."""
        acc = Accumulator(5, 5, 1)
        xs = np.array([-1, 0, 4, 5, 2])
        ys = np.array([0, -1, 4, 2, 5])
        applied = acc.increment_many(xs, ys, 0)
        assert applied == 1
        assert acc[4, 4, 0] == 1
        assert acc.total_votes() == 1

    def test_increment_many_bad_plane(self):
        """Test votes on a missing radius plane are ignored."""
        acc = Accumulator(5, 5, 1)
        assert acc.increment_many(np.array([1]), np.array([1]), 1) == 0
        assert acc.increment_many(np.array([1]), np.array([1]), -1) == 0
        assert acc.total_votes() == 0

    def test_clear_region(self):
        """Test the half-open square window is zeroed on every plane."""
        acc = Accumulator(10, 10, 3)
        acc.votes[:] = 1

        acc.clear_region(5, 5, 2)

        assert acc.votes[3:7, 3:7, :].sum() == 0
        assert acc[7, 5, 0] == 1
        assert acc[5, 7, 2] == 1
        assert acc[2, 5, 1] == 1
        assert acc.total_votes() == (100 - 16) * 3

    def test_clear_region_clipped_at_border(self):
        """Test windows reaching outside the grid are clipped."""
        acc = Accumulator(10, 10, 2)
        acc.votes[:] = 1

        acc.clear_region(0, 9, 3)

        assert acc.votes[0:3, 6:10, :].sum() == 0
        assert acc[3, 9, 0] == 1
        assert acc[0, 5, 0] == 1

    def test_clear_region_includes_first_row_and_plane(self):
        """Test index 0 on every axis is cleared."""
        acc = Accumulator(6, 6, 2)
        acc.votes[:] = 4
        acc.clear_region(1, 1, 2)
        assert acc[0, 0, 0] == 0
        assert acc[0, 2, 0] == 0
        assert acc[2, 0, 1] == 0

    def test_clear_region_outside_grid(self):
        """Test a window entirely outside leaves the grid unchanged."""
        acc = Accumulator(5, 5, 1)
        acc.votes[:] = 2
        acc.clear_region(-10, -10, 3)
        acc.clear_region(20, 2, 3)
        assert acc.total_votes() == 50

    def test_non_negative_after_operations(self):
        """Test cells never go negative."""
        rng = np.random.default_rng(0)
        acc = Accumulator(20, 20, 4)
        for _ in range(200):
            x, y = rng.integers(-5, 25, size=2)
            p = int(rng.integers(-1, 5))
            if rng.random() < 0.8:
                acc.increment(int(x), int(y), p)
            else:
                acc.clear_region(int(x), int(y), int(rng.integers(0, 6)))
        assert (acc.votes >= 0).all()

    def test_allocation_error(self):
        """Test impossible sizes raise AllocationError."""
        with pytest.raises(AllocationError):
            Accumulator(-1, 5, 5)

    def test_allocation_error_too_large(self):
        """Test oversized grids raise AllocationError."""
        with pytest.raises(AllocationError):
            Accumulator(10 ** 6, 10 ** 6, 10 ** 4)

    def test_allocation_error_is_memory_error(self):
        """Test AllocationError can be caught as MemoryError."""
        with pytest.raises(MemoryError):
            Accumulator(-1, 1, 1)
