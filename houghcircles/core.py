"""
Circle Hough Processor
Main entry point for circle detection in a region of an image
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
import logging
import time

import cv2
import numpy as np

from houghcircles import __version__
from houghcircles.config import Configuration, SearchRegion
from houghcircles.detection.accumulator import Accumulator
from houghcircles.detection.peak_extractor import PeakExtractor
from houghcircles.detection.results import CircleCandidate, DetectedCircle, finalize
from houghcircles.detection.voting import VotingPass
from houghcircles.errors import ConfigurationError
from houghcircles.preprocessing.edges import EdgeDetector, EdgeMap
from houghcircles.utils.io_handler import report_circles
from houghcircles.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)

StopCheck = Optional[Callable[[], bool]]


@dataclass
class DetectionRun:
    """State of one detection run; owns its accumulator."""
    configuration: Configuration
    region: SearchRegion
    edge_map: EdgeMap
    accumulator: Accumulator
    voting_pixels: int = 0
    votes_cast: int = 0
    candidates: List[CircleCandidate] = field(default_factory=list)

    @classmethod
    def prepare(cls, configuration: Configuration, region: SearchRegion,
                edge_map: EdgeMap) -> "DetectionRun":
        """
        Validate settings for the region, then allocate the accumulator.

        Raises:
            ConfigurationError: if the settings or the edge map do not fit the region
            AllocationError: if the accumulator cannot be allocated
        """
        configuration.validate(region)
        if (edge_map.width, edge_map.height) != (region.width, region.height):
            raise ConfigurationError(
                f"Edge map is {edge_map.width}x{edge_map.height} but the search region "
                f"is {region.width}x{region.height}")
        width, height = configuration.scan_size(region)
        accumulator = Accumulator(width, height, configuration.band.radius_count)
        return cls(configuration, region, edge_map, accumulator)

    def vote(self, voting_pass: Optional[VotingPass] = None, should_stop: StopCheck = None) -> int:
        voting_pass = voting_pass or VotingPass()
        self.voting_pixels = voting_pass.vote(self.edge_map, self.accumulator,
                                              self.configuration.band, should_stop)
        self.votes_cast = self.accumulator.total_votes()
        return self.voting_pixels

    def extract(self, extractor: Optional[PeakExtractor] = None,
                should_stop: StopCheck = None) -> List[CircleCandidate]:
        config = self.configuration
        extractor = extractor or PeakExtractor(
            margin_fraction=config.margin_fraction,
            suppression_padding=config.suppression_padding,
            stop_when_exhausted=config.stop_when_exhausted
        )
        self.candidates = extractor.extract(self.accumulator, config.max_circles,
                                            config.radius_max, should_stop)
        return self.candidates

    def results(self) -> List[DetectedCircle]:
        return finalize(self.candidates, self.region, self.configuration.radius_min)


class CircleHoughProcessor:
    """Runs edge detection, voting and peak extraction on images."""

    def __init__(self, config: Union[Dict[str, Any], Configuration, None] = None):
        """
        Initialize circle processor

        Args:
            config: Configuration dictionary or Configuration (optional)

        Raises:
            ConfigurationError: if the settings are invalid
        """
        if isinstance(config, Configuration):
            self.configuration = config
        else:
            self.configuration = Configuration.from_dict(config)
        self.configuration.validate()
        self.version = __version__

        self.edge_detector = EdgeDetector(
            low_threshold=self.configuration.canny_low,
            high_threshold=self.configuration.canny_high,
            smooth=self.configuration.smooth
        )
        self.voting_pass = VotingPass()
        self.peak_extractor = PeakExtractor(
            margin_fraction=self.configuration.margin_fraction,
            suppression_padding=self.configuration.suppression_padding,
            stop_when_exhausted=self.configuration.stop_when_exhausted
        )

    def detect(self, edge_map: EdgeMap, region: Optional[SearchRegion] = None,
               should_stop: StopCheck = None,
               metrics: Optional[PerformanceMetrics] = None) -> DetectionRun:
        """
        Find circles in a binary edge map.

        Args:
            edge_map: Edges of the search region
            region: Placement of the edge map in the image (origin 0, 0 if omitted)
            should_stop: Optional check between edge pixels and extraction rounds
            metrics: Optional timer collecting 'voting' and 'extraction'

        Returns:
            Finished DetectionRun; results() gives the circles

        Raises:
            ConfigurationError: if the region leaves no voting area or does not
                match the edge map size
            AllocationError: if the accumulator cannot be allocated
            DetectionCancelled: if should_stop() returned True
        """
        if region is None:
            region = SearchRegion(0, 0, edge_map.width, edge_map.height)
        metrics = metrics or PerformanceMetrics()

        run = DetectionRun.prepare(self.configuration, region, edge_map)

        metrics.start_timer('voting')
        run.vote(self.voting_pass, should_stop)
        metrics.stop_timer('voting')
        logger.debug("Voting done: %d pixels, %d votes",
                     run.voting_pixels, run.votes_cast)

        metrics.start_timer('extraction')
        run.extract(self.peak_extractor, should_stop)
        metrics.stop_timer('extraction')

        return run

    def detect_circles(self, image: np.ndarray,
                       roi: Optional[Tuple[int, int, int, int]] = None,
                       should_stop: StopCheck = None) -> List[DetectedCircle]:
        """Edge detection plus circle detection; returns circles only."""
        region = SearchRegion.from_image(image, roi)
        edge_map = self.edge_detector.detect(image, region)
        return self.detect(edge_map, region, should_stop).results()

    def process_frame(self, frame_input: Union[str, np.ndarray],
                      roi: Optional[Tuple[int, int, int, int]] = None,
                      should_stop: StopCheck = None, return_run: bool = False):
        """
        Process a single frame for circle detection

        Args:
            frame_input: Path to image file or numpy array
            roi: Optional (x, y, width, height) search rectangle
            should_stop: Optional cancellation check
            return_run: Also return the DetectionRun (edge map, accumulator)

        Returns:
            Dictionary containing circles, report lines and metadata,
            or (dictionary, DetectionRun) when return_run is set
        """
        start_time = time.time()
        metrics = PerformanceMetrics()

        # Load frame
        if isinstance(frame_input, (str, Path)):
            frame = cv2.imread(str(frame_input))
            frame_id = Path(frame_input).stem
        else:
            frame = frame_input
            frame_id = f"frame_{int(time.time())}"

        if frame is None:
            raise ValueError(f"Failed to load frame from {frame_input}")

        region = SearchRegion.from_image(frame, roi)

        metrics.start_timer('edges')
        edge_map = self.edge_detector.detect(frame, region)
        metrics.stop_timer('edges')

        run = self.detect(edge_map, region, should_stop, metrics)
        circles = run.results()
        lines = report_circles(circles, logger)

        processing_time = (time.time() - start_time) * 1000

        result = {
            "system": "houghcircles",
            "version": self.version,
            "timestamp": datetime.now().isoformat(),
            "frame_id": frame_id,
            "circles": [c.to_dict() for c in circles],
            "report": lines,
            "configuration": {
                "radius_min": self.configuration.radius_min,
                "radius_max": self.configuration.radius_max,
                "max_circles": self.configuration.max_circles
            },
            "processing_metadata": {
                "processing_time_ms": round(processing_time, 2),
                "stage_times_ms": metrics.get_summary(),
                "image_size": {
                    "width": frame.shape[1],
                    "height": frame.shape[0]
                },
                "search_region": region.as_dict(),
                "edge_pixels": edge_map.count(),
                "voting_pixels": run.voting_pixels,
                "total_votes": run.votes_cast
            }
        }

        if return_run:
            return result, run
        return result
