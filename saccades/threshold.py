"""Adaptive, median-based velocity thresholds (Engbert & Kliegl, 2003).

The velocity distribution of a recording has heavy tails because saccades,
blinks and track-loss produce very large values. The dispersion is
therefore estimated from medians instead of the ordinary variance::

    msd = sqrt(median(v**2) - median(v)**2)

and the detection radius on each axis is ``msd * lam``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Hashable

import numpy as np
import pandas as pd

from .domain import TRIAL, VX, VY

logger = logging.getLogger(__name__)


def median_sd(values) -> float:
    """Median-based dispersion estimate; missing values are ignored.

    Returns NaN when no finite value is present or when the radicand is
    negative.
    """
    v = pd.Series(np.asarray(values, dtype=float))
    radicand = (v**2).median() - v.median() ** 2
    if pd.isna(radicand) or radicand < 0:
        return float("nan")
    return math.sqrt(radicand)


@dataclass(frozen=True)
class VelocityThreshold:
    """Elliptic velocity threshold with one radius per axis."""

    msd_x: float
    msd_y: float
    lam: float

    @property
    def radius_x(self) -> float:
        return self.msd_x * self.lam

    @property
    def radius_y(self) -> float:
        return self.msd_y * self.lam

    @property
    def is_degenerate(self) -> bool:
        """True if either radius is zero or undefined."""
        return any(math.isnan(r) or r == 0 for r in (self.radius_x, self.radius_y))


class ThresholdCalculator:
    """Derive velocity thresholds from the ``vx``/``vy`` columns of a frame."""

    def __init__(self, lam: float = 15.0) -> None:
        self.lam = lam

    def compute(self, df: pd.DataFrame) -> VelocityThreshold:
        threshold = VelocityThreshold(
            msd_x=median_sd(df[VX].to_numpy()),
            msd_y=median_sd(df[VY].to_numpy()),
            lam=self.lam,
        )
        if threshold.is_degenerate:
            logger.warning(
                "Degenerate velocity threshold (radius_x=%s, radius_y=%s); "
                "indeterminate samples will be treated as non-saccadic",
                threshold.radius_x,
                threshold.radius_y,
            )
        else:
            logger.debug(
                "Velocity threshold: radius_x=%.4f radius_y=%.4f",
                threshold.radius_x,
                threshold.radius_y,
            )
        return threshold

    def compute_per_trial(self, df: pd.DataFrame) -> Dict[Hashable, VelocityThreshold]:
        return {
            trial: self.compute(group)
            for trial, group in df.groupby(TRIAL, sort=False)
        }
