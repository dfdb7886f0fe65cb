"""Midpoint (Bresenham) circle rasterization used for voting."""

import numpy as np
from functools import lru_cache

from houghcircles.detection.accumulator import Accumulator


@lru_cache(maxsize=256)
def _midpoint_offsets(radius: int) -> np.ndarray:
    offsets = [(0, radius), (0, -radius), (radius, 0), (-radius, 0)]

    f = 1 - radius
    ddf_x = 0
    ddf_y = -2 * radius
    x = 0
    y = radius

    while x < y:
        if f >= 0:
            y -= 1
            ddf_y += 2
            f += ddf_y

        x += 1
        ddf_x += 2
        f += ddf_x + 1

        offsets.extend([
            (x, y), (-x, y), (x, -y), (-x, -y),
            (y, x), (-y, x), (y, -x), (-y, -x),
        ])

    result = np.array(offsets, dtype=np.int64).reshape(-1, 2)
    result.setflags(write=False)
    return result


def midpoint_circle(radius: int) -> np.ndarray:
    """
    Offsets (dx, dy) of a digital circle around the origin.

    The four axis points come first, followed by eight symmetric points per
    step of the first octant. Points on the octant seams (x == y) appear
    more than once and each occurrence counts as a vote.

    Args:
        radius: Circle radius in pixels (>= 0)

    Returns:
        Read-only int array of shape (n, 2)
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    return _midpoint_offsets(int(radius))


class CircleRasterizer:
    """Turns (center, radius) into accumulator votes."""

    def rasterize(self, center_x: int, center_y: int, radius: int) -> np.ndarray:
        """Absolute (x, y) coordinates of the circle boundary."""
        return midpoint_circle(radius) + np.array([center_x, center_y])

    def vote(self, accumulator: Accumulator, center_x: int, center_y: int,
             radius: int, radius_offset: int) -> int:
        """Cast one vote per boundary point on plane radius_offset."""
        points = self.rasterize(center_x, center_y, radius)
        return accumulator.increment_many(points[:, 0], points[:, 1], radius_offset)
