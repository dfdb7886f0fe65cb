"""Circle candidates and their translation to image coordinates."""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List

from houghcircles.config import SearchRegion

FOUND_CIRCLE_MESSAGE = "Found circle (x, y, radius): ({}, {}, {})"


@dataclass(frozen=True)
class CircleCandidate:
    """Accumulator peak in region-local coordinates."""
    x: int
    y: int
    radius_offset: int
    vote_count: int


@dataclass(frozen=True)
class DetectedCircle:
    """Reported circle in image coordinates."""
    image_x: int
    image_y: int
    radius: int
    vote_count: int

    @property
    def center(self):
        return (self.image_x, self.image_y)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def finalize(candidates: Iterable[CircleCandidate], region: SearchRegion,
             radius_min: int) -> List[DetectedCircle]:
    """Translate candidates into image coordinates, keeping extraction order."""
    return [
        DetectedCircle(
            image_x=c.x + region.origin_x,
            image_y=c.y + region.origin_y,
            radius=c.radius_offset + radius_min,
            vote_count=c.vote_count
        )
        for c in candidates
    ]


def format_report_line(circle: DetectedCircle) -> str:
    return FOUND_CIRCLE_MESSAGE.format(circle.image_x, circle.image_y, circle.radius)


def report_lines(circles: Iterable[DetectedCircle]) -> List[str]:
    return [format_report_line(c) for c in circles]
