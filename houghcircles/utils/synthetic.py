"""Synthetic edge maps with known circles."""

import cv2
import numpy as np
from typing import Iterable, Tuple
from skimage.draw import circle_perimeter

from houghcircles.preprocessing.edges import EdgeMap


def circle_edges(width: int, height: int,
                 circles: Iterable[Tuple[int, int, int]]) -> np.ndarray:
    """
    Boolean grid of shape (height, width) with digital circle outlines.

    Args:
        width: Grid width
        height: Grid height
        circles: (x, y, radius) triples

    Returns:
        Boolean array, True on circle boundaries
    """
    pixels = np.zeros((height, width), dtype=bool)
    for x, y, radius in circles:
        rows, cols = circle_perimeter(y, x, radius, shape=pixels.shape)
        pixels[rows, cols] = True
    return pixels


def circle_edge_map(width: int, height: int,
                    circles: Iterable[Tuple[int, int, int]]) -> EdgeMap:
    return EdgeMap(circle_edges(width, height, circles))


def circle_image(width: int, height: int, circles: Iterable[Tuple[int, int, int]],
                 thickness: int = 1) -> np.ndarray:
    """Black BGR image with white circle outlines."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    for x, y, radius in circles:
        cv2.circle(image, (x, y), radius, (255, 255, 255), thickness)
    return image
