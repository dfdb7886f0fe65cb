"""
houghcircles - circle detection with an accumulator-based Hough transform.
"""

__version__ = '1.0.0'

from .config import Configuration, RadiusBand, SearchRegion, load_config
from .core import CircleHoughProcessor, DetectionRun
from .errors import AllocationError, ConfigurationError, DetectionCancelled, HoughCirclesError

__all__ = [
    'CircleHoughProcessor',
    'DetectionRun',
    'Configuration',
    'RadiusBand',
    'SearchRegion',
    'load_config',
    'HoughCirclesError',
    'ConfigurationError',
    'AllocationError',
    'DetectionCancelled',
]
