"""Binary edge maps for the voting pass."""

import cv2
import numpy as np
from typing import Optional

from houghcircles.config import SearchRegion
from houghcircles.preprocessing.enhancement import ImageEnhancer


class EdgeMap:
    """
    Read-only binary edge grid of a search region.

    Pixels are stored in image orientation, shape (height, width):
    column u and row v are pixels[v, u].
    """

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 2:
            raise ValueError(f"Edge map must be 2D, got shape {pixels.shape}")
        self.pixels = np.array(pixels, dtype=bool, copy=True)
        self.pixels.setflags(write=False)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def count(self) -> int:
        return int(np.count_nonzero(self.pixels))


class EdgeDetector:
    """Canny edge detection on a smoothed grayscale copy of the image."""

    def __init__(self, low_threshold: int = 50, high_threshold: int = 150,
                 smooth: bool = True, enhancer: Optional[ImageEnhancer] = None):
        self.low_threshold = low_threshold
        self.high_threshold = high_threshold
        self.smooth = smooth
        self.enhancer = enhancer or ImageEnhancer()

    def detect(self, image: np.ndarray, region: Optional[SearchRegion] = None) -> EdgeMap:
        """
        Detect edges inside a region of the image.

        Args:
            image: Input BGR or grayscale image
            region: Area to analyse (whole image when omitted)

        Returns:
            EdgeMap covering the region
        """
        if region is None:
            region = SearchRegion.from_image(image)

        if self.smooth:
            gray = self.enhancer.enhance(image)
        else:
            gray = self.enhancer.to_gray(image)

        edges = cv2.Canny(gray, self.low_threshold, self.high_threshold)
        return EdgeMap(region.crop(edges) > 0)
