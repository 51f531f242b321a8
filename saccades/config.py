"""Configuration dataclasses for fixation detection."""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Literal

from .errors import ConfigurationError

ThresholdScope = Literal["dataset", "trial"]
THRESHOLD_SCOPES = ("dataset", "trial")


@dataclass(frozen=True)
class DetectionConfig:
    """Options for the Engbert & Kliegl saccade detector."""

    # Multiple of the median-based velocity SD used as detection radius.
    # Larger values detect fewer saccades.
    lam: float = 15.0

    # Centered moving average over x/y before velocity estimation
    smooth_coordinates: bool = True
    smoothing_window: int = 3

    # Join saccades separated by a single sample (e.g. swing-backs)
    smooth_saccades: bool = True

    # "dataset": one threshold over all samples passed in
    # "trial":   one threshold per trial
    threshold_scope: ThresholdScope = "dataset"

    def __post_init__(self) -> None:
        if not isinstance(self.lam, numbers.Real) or math.isnan(self.lam) or self.lam < 0:
            raise ConfigurationError(f"lam must be a non-negative number, got {self.lam!r}")
        window = self.smoothing_window
        is_integer = isinstance(window, numbers.Integral) and not isinstance(window, bool)
        if not is_integer or window < 1 or window % 2 == 0:
            raise ConfigurationError(
                f"smoothing_window must be a positive odd integer, got {window!r}"
            )
        if self.threshold_scope not in THRESHOLD_SCOPES:
            raise ConfigurationError(
                f"threshold_scope must be one of {', '.join(THRESHOLD_SCOPES)}, "
                f"got {self.threshold_scope!r}"
            )
