"""Velocity-based detection of saccades and fixations in eye-tracking data.

Implements the saccade detection algorithm of Engbert & Kliegl (2003).
Anything between two saccades is considered a fixation, so recordings with
smooth-pursuit movements are not supported.
"""

from .config import DetectionConfig
from .domain import Fixation, Sample
from .errors import ConfigurationError, NoFixationsError, SaccadeDetectionError
from .smoothing import CoordinateSmoother, moving_average
from .velocity import VelocityEstimator, central_difference
from .threshold import ThresholdCalculator, VelocityThreshold, median_sd
from .classifier import SaccadeClassifier, close_saccade_gaps, outside_ellipse
from .aggregation import FixationAggregator, aggregate_fixations
from .pipeline import (
    DetectionResult,
    FixationDetector,
    detect_fixation_records,
    detect_fixations,
    detect_fixations_parallel,
)
from .summary import calculate_summary, format_summary
from .io import read_fixations, read_samples, write_fixations

__all__ = [
    "DetectionConfig",
    "Fixation",
    "Sample",
    "ConfigurationError",
    "NoFixationsError",
    "SaccadeDetectionError",
    "CoordinateSmoother",
    "moving_average",
    "VelocityEstimator",
    "central_difference",
    "ThresholdCalculator",
    "VelocityThreshold",
    "median_sd",
    "SaccadeClassifier",
    "close_saccade_gaps",
    "outside_ellipse",
    "FixationAggregator",
    "aggregate_fixations",
    "DetectionResult",
    "FixationDetector",
    "detect_fixation_records",
    "detect_fixations",
    "detect_fixations_parallel",
    "calculate_summary",
    "format_summary",
    "read_fixations",
    "read_samples",
    "write_fixations",
]
