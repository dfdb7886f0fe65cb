"""Image smoothing before edge detection."""

import cv2
import numpy as np


class ImageEnhancer:
    """Grayscale conversion and smoothing for edge detection."""

    def __init__(self, kernel_size: int = 3):
        """
        Initialize image enhancer.

        Args:
            kernel_size: Side of the mean filter window
        """
        self.kernel_size = kernel_size

    def enhance(self, image: np.ndarray) -> np.ndarray:
        """
        Apply full enhancement pipeline.

        Args:
            image: Input BGR or grayscale image

        Returns:
            Smoothed 8-bit grayscale image
        """
        return self.smooth(self.to_gray(image))

    def to_gray(self, image: np.ndarray) -> np.ndarray:
        """Convert to 8-bit single channel."""
        if image.ndim == 3:
            if image.shape[2] == 4:
                image = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
            else:
                image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        if image.dtype != np.uint8:
            image = cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
        return image

    def smooth(self, image: np.ndarray) -> np.ndarray:
        """Replace each pixel by the mean of its neighbourhood."""
        return cv2.blur(image, (self.kernel_size, self.kernel_size))
