"""Iterative peak extraction with square-window suppression."""

import logging
import numpy as np
from typing import Callable, List, Optional

from houghcircles.detection.accumulator import Accumulator
from houghcircles.detection.results import CircleCandidate
from houghcircles.errors import DetectionCancelled

logger = logging.getLogger(__name__)


class PeakExtractor:
    """Picks the strongest accumulator cells one at a time."""

    def __init__(self, margin_fraction: float = 0.01, suppression_padding: int = 3,
                 stop_when_exhausted: bool = False):
        """
        Initialize peak extractor.

        Args:
            margin_fraction: Share of the width skipped at each border when scanning
            suppression_padding: Added to radius offset + radius_max for the
                suppression half-width
            stop_when_exhausted: Stop at the first peak with no votes instead of
                reporting zero-vote candidates
        """
        self.margin_fraction = margin_fraction
        self.suppression_padding = suppression_padding
        self.stop_when_exhausted = stop_when_exhausted

    def scan_margin(self, accumulator: Accumulator) -> int:
        # same margin on both axes, taken from the width
        return int(accumulator.width * self.margin_fraction)

    def find_peak(self, accumulator: Accumulator) -> CircleCandidate:
        """
        Strongest cell inside the scan window.

        Ties go to the first cell in x, y, radius offset order. An empty
        window or grid gives a zero-vote candidate at the window origin.
        """
        margin = self.scan_margin(accumulator)
        window = accumulator.votes[margin:accumulator.width - margin,
                                   margin:accumulator.height - margin, :]

        if window.size == 0:
            return CircleCandidate(margin, margin, 0, 0)

        # argmax returns the first maximum in C order: x outer, y, p inner
        x, y, p = np.unravel_index(int(np.argmax(window)), window.shape)
        return CircleCandidate(int(x) + margin, int(y) + margin, int(p), int(window[x, y, p]))

    def suppress(self, accumulator: Accumulator, candidate: CircleCandidate, radius_max: int):
        half_width = candidate.radius_offset + radius_max + self.suppression_padding
        accumulator.clear_region(candidate.x, candidate.y, half_width)

    def extract(self, accumulator: Accumulator, max_circles: int, radius_max: int,
                should_stop: Optional[Callable[[], bool]] = None) -> List[CircleCandidate]:
        """
        Extract up to max_circles candidates in order of discovery.

        Without stop_when_exhausted exactly max_circles candidates are
        returned, including zero-vote ones once the votes run out.

        Args:
            accumulator: Filled vote grid, zeroed around each pick
            max_circles: Number of extraction rounds
            radius_max: Upper bound of the radius band
            should_stop: Optional check called between rounds

        Returns:
            List of CircleCandidate in region-local coordinates
        """
        candidates = []

        for _ in range(max_circles):
            if should_stop is not None and should_stop():
                raise DetectionCancelled("Extraction stopped by caller")

            candidate = self.find_peak(accumulator)
            if candidate.vote_count == 0 and self.stop_when_exhausted:
                logger.debug("Accumulator exhausted after %d candidates", len(candidates))
                break

            self.suppress(accumulator, candidate, radius_max)
            candidates.append(candidate)

        return candidates
