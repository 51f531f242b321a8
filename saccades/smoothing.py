"""Optional centered moving-average smoothing of gaze coordinates."""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .domain import X, Y
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def moving_average(values, window: int = 3) -> np.ndarray:
    """Centered, unweighted moving average of odd ``window``.

    Positions where the centered window does not fit keep their original
    value; for the default window these are the first and last element.
    """
    if window < 1 or window % 2 == 0:
        raise ConfigurationError(f"window must be a positive odd integer, got {window!r}")

    series = pd.Series(np.asarray(values, dtype=float))
    if window == 1 or len(series) < window:
        return series.to_numpy(copy=True)

    smoothed = series.rolling(window=window, center=True).mean().to_numpy(copy=True)
    half = window // 2
    smoothed[:half] = series.to_numpy()[:half]
    smoothed[-half:] = series.to_numpy()[-half:]
    return smoothed


class CoordinateSmoother:
    """Smooth x and y of a sample frame over the whole run."""

    def __init__(self, window: int = 3) -> None:
        self.window = window

    def apply(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.copy()
        df[X] = moving_average(df[X].to_numpy(), self.window)
        df[Y] = moving_average(df[Y].to_numpy(), self.window)
        logger.debug("Smoothed %s samples with window %s", len(df), self.window)
        return df
