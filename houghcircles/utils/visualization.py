"""Visualization utilities for debugging and display."""

import cv2
import numpy as np
from typing import Iterable, Tuple

from houghcircles.detection.results import DetectedCircle


def draw_circles(image: np.ndarray, circles: Iterable[DetectedCircle],
                color: Tuple[int, int, int] = (0, 0, 255),
                thickness: int = 2) -> np.ndarray:
    """Draw detected circles on a BGR copy of the image."""
    output = image.copy()
    if output.ndim == 2:
        output = cv2.cvtColor(output, cv2.COLOR_GRAY2BGR)
    for circle in circles:
        cv2.circle(output, circle.center, circle.radius, color, thickness)
    return output


def draw_edges(edges: np.ndarray) -> np.ndarray:
    """Render a boolean edge grid as a white-on-black BGR image."""
    gray = np.where(edges, 255, 0).astype(np.uint8)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)
