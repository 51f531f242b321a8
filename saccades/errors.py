"""Exceptions raised by the fixation detection pipeline."""
from __future__ import annotations


class SaccadeDetectionError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SaccadeDetectionError, ValueError):
    """Invalid detection options or malformed sample input."""


class NoFixationsError(SaccadeDetectionError, RuntimeError):
    """Every sample was classified as saccade, so no fixation remains."""


__all__ = ["SaccadeDetectionError", "ConfigurationError", "NoFixationsError"]
