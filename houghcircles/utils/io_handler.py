"""I/O handling for images, circle reports, and JSON output."""

import cv2
import json
import logging
import numpy as np
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from houghcircles.detection.results import DetectedCircle, format_report_line


class JSONWriter:
    """Write detection results to JSON."""

    @staticmethod
    def save_results(output_dict: Dict, output_path: str, indent: int = 2):
        """Save results to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(output_dict, f, indent=indent)

    @staticmethod
    def load_results(input_path: str) -> Dict:
        """Load results from JSON file."""
        with open(input_path, 'r') as f:
            return json.load(f)


def report_circles(circles: Iterable[DetectedCircle],
                   logger: Optional[logging.Logger] = None) -> List[str]:
    """Emit one 'Found circle' line per circle, in extraction order."""
    lines = []
    for circle in circles:
        line = format_report_line(circle)
        if logger is not None:
            logger.info(line)
        lines.append(line)
    return lines


def save_image(image: np.ndarray, output_path: str):
    """Save image to file."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(output_path, image)


def load_image(image_path: str) -> Optional[np.ndarray]:
    """Load image from file."""
    return cv2.imread(image_path)
