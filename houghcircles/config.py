"""
Configuration management for circle detection
"""

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import yaml

from houghcircles.errors import ConfigurationError


DEFAULT_CONFIG = {
    "detection": {
        "radius_min": 10,
        "radius_max": 20,
        "max_circles": 2,
        # area which is searched for circles, 1.0 = 100%
        "search_area_fraction": 1.0
    },
    "edges": {
        "canny_low": 50,
        "canny_high": 150,
        "smooth": True
    },
    "extraction": {
        "margin_fraction": 0.01,
        "suppression_padding": 3,
        "stop_when_exhausted": False
    },
    "output": {
        "line_width": 2,
        "color": [0, 0, 255]
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None,
                overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file on top of the defaults.

    Args:
        config_path: Optional path to a YAML file with any subset of sections
        overrides: Optional dictionary merged last

    Returns:
        Complete configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        config = _merge(config, loaded)

    if overrides:
        config = _merge(config, overrides)

    return config


@dataclass(frozen=True)
class SearchRegion:
    """Rectangle of the image that is searched, in image coordinates."""
    origin_x: int
    origin_y: int
    width: int
    height: int

    @classmethod
    def from_image(cls, image: np.ndarray,
                   roi: Optional[Tuple[int, int, int, int]] = None) -> "SearchRegion":
        """
        Region for an (x, y, width, height) ROI, or the whole image.

        Raises:
            ConfigurationError: if the ROI is empty or not inside the image
        """
        image_height, image_width = int(image.shape[0]), int(image.shape[1])
        if roi is None:
            return cls(0, 0, image_width, image_height)

        if len(roi) != 4:
            raise ConfigurationError(f"ROI must be (x, y, width, height), got {roi}")
        x, y, w, h = (int(v) for v in roi)
        if w <= 0 or h <= 0:
            raise ConfigurationError(f"ROI must have positive size, got {w}x{h}")
        if x < 0 or y < 0 or x + w > image_width or y + h > image_height:
            raise ConfigurationError(
                f"ROI ({x}, {y}, {w}, {h}) is not inside the "
                f"{image_width}x{image_height} image")
        return cls(x, y, w, h)

    def crop(self, image: np.ndarray) -> np.ndarray:
        """Pixels of the image covered by this region."""
        return image[self.origin_y:self.origin_y + self.height,
                     self.origin_x:self.origin_x + self.width]

    def as_dict(self) -> Dict[str, int]:
        return {
            "x": self.origin_x,
            "y": self.origin_y,
            "width": self.width,
            "height": self.height
        }


@dataclass(frozen=True)
class RadiusBand:
    """Tested radii: radius_min + p for p in range(radius_max - radius_min)."""
    radius_min: int
    radius_max: int

    @property
    def radius_count(self) -> int:
        return self.radius_max - self.radius_min

    def radius_for(self, offset: int) -> int:
        return self.radius_min + offset

    def radii(self) -> range:
        return range(self.radius_min, self.radius_max)


@dataclass(frozen=True)
class Configuration:
    """Validated settings for one detection run."""
    radius_min: int = 10
    radius_max: int = 20
    max_circles: int = 2
    search_area_fraction: float = 1.0
    canny_low: int = 50
    canny_high: int = 150
    smooth: bool = True
    margin_fraction: float = 0.01
    suppression_padding: int = 3
    stop_when_exhausted: bool = False

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "Configuration":
        """Build from a nested config dictionary such as DEFAULT_CONFIG."""
        config = _merge(DEFAULT_CONFIG, config or {})
        detection = config["detection"]
        edges = config["edges"]
        extraction = config["extraction"]

        return cls(
            radius_min=int(detection["radius_min"]),
            radius_max=int(detection["radius_max"]),
            max_circles=int(detection["max_circles"]),
            search_area_fraction=float(detection["search_area_fraction"]),
            canny_low=int(edges["canny_low"]),
            canny_high=int(edges["canny_high"]),
            smooth=bool(edges["smooth"]),
            margin_fraction=float(extraction["margin_fraction"]),
            suppression_padding=int(extraction["suppression_padding"]),
            stop_when_exhausted=bool(extraction["stop_when_exhausted"])
        )

    @property
    def band(self) -> RadiusBand:
        return RadiusBand(self.radius_min, self.radius_max)

    def scan_size(self, region: SearchRegion) -> Tuple[int, int]:
        """Width and height of the accumulator for a region."""
        return (int(region.width * self.search_area_fraction),
                int(region.height * self.search_area_fraction))

    def validate(self, region: Optional[SearchRegion] = None) -> "Configuration":
        """
        Reject settings that leave nothing to vote on.

        Raises:
            ConfigurationError: if the band, counts or region are unusable
        """
        if self.radius_min < 0:
            raise ConfigurationError(f"radius_min must be >= 0, got {self.radius_min}")
        if self.radius_max <= 0:
            raise ConfigurationError(f"radius_max must be > 0, got {self.radius_max}")
        if self.radius_min > self.radius_max:
            raise ConfigurationError(
                f"radius_min ({self.radius_min}) is greater than radius_max ({self.radius_max})")
        if self.radius_min == self.radius_max:
            raise ConfigurationError(
                f"Radius band [{self.radius_min}, {self.radius_max}) contains no radius")
        if self.max_circles < 0:
            raise ConfigurationError(f"max_circles must be >= 0, got {self.max_circles}")
        if not 0.0 < self.search_area_fraction <= 1.0:
            raise ConfigurationError(
                f"search_area_fraction must be in (0, 1], got {self.search_area_fraction}")
        if not 0.0 <= self.margin_fraction < 0.5:
            raise ConfigurationError(
                f"margin_fraction must be in [0, 0.5), got {self.margin_fraction}")
        if self.suppression_padding < 0:
            raise ConfigurationError(
                f"suppression_padding must be >= 0, got {self.suppression_padding}")

        if region is not None:
            if region.width <= 0 or region.height <= 0:
                raise ConfigurationError(
                    f"Search region must have positive size, got {region.width}x{region.height}")
            width, height = self.scan_size(region)
            if width <= 2 * self.radius_max or height <= 2 * self.radius_max:
                raise ConfigurationError(
                    f"Search area {width}x{height} leaves no voting area "
                    f"for radius_max {self.radius_max}")

        return self
