"""Voting pass: every edge pixel votes for every circle it could lie on."""

import logging
import numpy as np
from typing import Callable, Optional, Tuple

from houghcircles.config import RadiusBand
from houghcircles.detection.accumulator import Accumulator
from houghcircles.detection.rasterizer import CircleRasterizer
from houghcircles.errors import DetectionCancelled
from houghcircles.preprocessing.edges import EdgeMap

logger = logging.getLogger(__name__)


def voting_pixels(edge_map: EdgeMap, scan_size: Tuple[int, int],
                  band: RadiusBand) -> np.ndarray:
    """
    Edge pixels far enough from the border to vote.

    Only pixels with radius_max <= u < width - radius_max and
    radius_max <= v < height - radius_max take part, so no circle of the
    band reaches outside the searched area.

    Returns:
        Array of (u, v) pairs ordered by u, then v
    """
    width, height = scan_size
    margin = band.radius_max

    if width - margin <= margin or height - margin <= margin:
        return np.empty((0, 2), dtype=np.int64)

    window = edge_map.pixels[margin:height - margin, margin:width - margin]
    # transpose so nonzero() walks u (column) outer, v (row) inner
    us, vs = np.nonzero(window.T)
    return np.column_stack([us + margin, vs + margin]).astype(np.int64)


def count_voting_pixels(edge_map: EdgeMap, scan_size: Tuple[int, int],
                        band: RadiusBand) -> int:
    return len(voting_pixels(edge_map, scan_size, band))


class VotingPass:
    """Fills an accumulator from an edge map."""

    def __init__(self, rasterizer: Optional[CircleRasterizer] = None):
        self.rasterizer = rasterizer or CircleRasterizer()

    def vote(self, edge_map: EdgeMap, accumulator: Accumulator, band: RadiusBand,
             should_stop: Optional[Callable[[], bool]] = None) -> int:
        """
        Cast votes for all voting edge pixels and all radii of the band.

        Args:
            edge_map: Binary edges of the search region
            accumulator: Grid sized (width, height, band.radius_count)
            band: Tested radius band
            should_stop: Optional check called between edge pixels

        Returns:
            Number of edge pixels that voted

        Raises:
            DetectionCancelled: if should_stop() returned True
        """
        pixels = voting_pixels(edge_map, (accumulator.width, accumulator.height), band)
        radius_count = min(band.radius_count, accumulator.radius_count)

        for u, v in pixels:
            if should_stop is not None and should_stop():
                raise DetectionCancelled("Voting stopped by caller")
            for p in range(radius_count):
                self.rasterizer.vote(accumulator, int(u), int(v), band.radius_for(p), p)

        logger.debug("%d edge pixels voted over %d radii", len(pixels), radius_count)
        return len(pixels)
