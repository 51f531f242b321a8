"""Saccade classification against an elliptic velocity threshold."""
from __future__ import annotations

import logging
from typing import Dict, Hashable, Optional, Union

import numpy as np
import pandas as pd

from .config import DetectionConfig
from .domain import IS_SACCADE, TRIAL, VX, VY
from .errors import ConfigurationError
from .threshold import ThresholdCalculator, VelocityThreshold
from .velocity import VelocityEstimator

logger = logging.getLogger(__name__)

ThresholdInput = Union[VelocityThreshold, Dict[Hashable, VelocityThreshold]]


def outside_ellipse(vx, vy, radius_x, radius_y) -> np.ndarray:
    """Return True where ``(vx/rx)**2 + (vy/ry)**2 > 1``.

    Indeterminate results (NaN, e.g. 0/0 on a zero radius) count as False.
    """
    vx = np.asarray(vx, dtype=float)
    vy = np.asarray(vy, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        distance = (vx / radius_x) ** 2 + (vy / radius_y) ** 2
        return np.where(np.isnan(distance), False, distance > 1)


def close_saccade_gaps(flags) -> np.ndarray:
    """Round a 3-sample moving average of the saccade indicator.

    Single-sample gaps between saccades are closed and isolated
    single-sample saccades are dropped. The average is undefined for the
    first and last flag; unlike Engbert & Kliegl's reference code, which
    sets both to non-saccade, they keep their raw value here so that an
    input classified entirely as saccade stays that way.
    """
    indicator = np.asarray(flags, dtype=float)
    if len(indicator) < 3:
        return indicator.astype(bool)

    smoothed = indicator.copy()
    smoothed[1:-1] = (indicator[:-2] + indicator[1:-1] + indicator[2:]) / 3.0
    return np.round(smoothed).astype(bool)


class SaccadeClassifier:
    """Label each sample as saccade or non-saccade."""

    def __init__(self, config: Optional[DetectionConfig] = None) -> None:
        self.config = config or DetectionConfig()

    def classify(self, df: pd.DataFrame, threshold: Optional[ThresholdInput] = None) -> pd.DataFrame:
        """Return a copy of ``df`` with ``vx``, ``vy`` and ``is_saccade``.

        ``threshold`` may be a single pooled threshold or a mapping from
        trial to threshold. If omitted it is computed from ``df`` according
        to the configured scope.
        """
        cfg = self.config
        if VX not in df.columns or VY not in df.columns:
            df = VelocityEstimator().compute(df)
        else:
            df = df.copy()

        if threshold is None:
            calculator = ThresholdCalculator(cfg.lam)
            if cfg.threshold_scope == "trial":
                threshold = calculator.compute_per_trial(df)
            else:
                threshold = calculator.compute(df)

        radius_x, radius_y = self._radii(df, threshold)
        is_saccade = outside_ellipse(df[VX].to_numpy(), df[VY].to_numpy(), radius_x, radius_y)
        if cfg.smooth_saccades:
            is_saccade = close_saccade_gaps(is_saccade)

        df[IS_SACCADE] = is_saccade
        logger.debug("Classified %s of %s samples as saccade", int(is_saccade.sum()), len(df))
        return df

    @staticmethod
    def _radii(df: pd.DataFrame, threshold: ThresholdInput):
        if isinstance(threshold, VelocityThreshold):
            return threshold.radius_x, threshold.radius_y

        trials = df[TRIAL]
        missing = set(trials.unique()) - set(threshold)
        if missing:
            raise ConfigurationError(f"No threshold for trial(s): {sorted(map(str, missing))}")
        radius_x = trials.map({t: th.radius_x for t, th in threshold.items()})
        radius_y = trials.map({t: th.radius_y for t, th in threshold.items()})
        return radius_x.to_numpy(dtype=float), radius_y.to_numpy(dtype=float)
