"""Vote accumulator for the circle Hough transform."""

import logging
import numpy as np
from typing import Tuple

from houghcircles.errors import AllocationError

logger = logging.getLogger(__name__)


class Accumulator:
    """
    Dense 3D vote grid addressed by (x, y, radius offset).

    Every access is bounds-checked on both sides; indices outside the grid
    are ignored.
    """

    def __init__(self, width: int, height: int, radius_count: int, dtype=np.int32):
        """
        Allocate a zero-filled grid.

        Args:
            width: Number of x positions
            height: Number of y positions
            radius_count: Number of tested radii

        Raises:
            AllocationError: if the grid does not fit in memory
        """
        try:
            self.votes = np.zeros((width, height, radius_count), dtype=dtype)
        except (MemoryError, ValueError) as e:
            raise AllocationError(
                f"Cannot allocate accumulator of size {width}x{height}x{radius_count}: {e}"
            ) from e

        logger.debug("Allocated accumulator %dx%dx%d (%d bytes)",
                     width, height, radius_count, self.votes.nbytes)

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.votes.shape

    @property
    def width(self) -> int:
        return self.votes.shape[0]

    @property
    def height(self) -> int:
        return self.votes.shape[1]

    @property
    def radius_count(self) -> int:
        return self.votes.shape[2]

    def __getitem__(self, index):
        return self.votes[index]

    def in_bounds(self, x: int, y: int, p: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= p < self.radius_count

    def increment(self, x: int, y: int, p: int):
        """Add one vote to a cell, ignoring indices outside the grid."""
        if not self.in_bounds(x, y, p):
            return
        self.votes[x, y, p] += 1

    def increment_many(self, xs: np.ndarray, ys: np.ndarray, p: int) -> int:
        """
        Add one vote per (x, y) pair on radius plane p.

        Repeated coordinates receive one vote each. Out-of-range pairs are
        dropped.

        Returns:
            Number of votes applied
        """
        if p < 0 or p >= self.radius_count:
            return 0

        xs = np.asarray(xs)
        ys = np.asarray(ys)
        inside = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        np.add.at(self.votes[:, :, p], (xs[inside], ys[inside]), 1)
        return int(np.count_nonzero(inside))

    def clear_region(self, center_x: int, center_y: int, half_width: int):
        """Zero [cx - r, cx + r) x [cy - r, cy + r) on every radius plane."""
        x0 = max(center_x - half_width, 0)
        x1 = min(center_x + half_width, self.width)
        y0 = max(center_y - half_width, 0)
        y1 = min(center_y + half_width, self.height)

        if x0 < x1 and y0 < y1:
            self.votes[x0:x1, y0:y1, :] = 0

    def total_votes(self) -> int:
        return int(self.votes.sum())

    def max_votes(self) -> int:
        return int(self.votes.max()) if self.votes.size else 0
