"""Exceptions raised by the circle detection pipeline."""


class HoughCirclesError(Exception):
    """Base class for detection errors."""


class ConfigurationError(HoughCirclesError, ValueError):
    """Radius band, candidate count or search region cannot be used."""


class AllocationError(HoughCirclesError, MemoryError):
    """The accumulator grid could not be allocated."""


class DetectionCancelled(HoughCirclesError):
    """A caller-supplied stop check asked the run to end early."""
