"""Sample-to-sample velocity via a central-difference filter.

Velocities are in coordinate units per sample interval. The sampling
frequency is assumed constant; the caller is responsible for uniform time
steps.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from .domain import VX, VY, X, Y


def central_difference(values) -> np.ndarray:
    """Return ``(c[i+1] - c[i-1]) / 2`` with both ends copied from their neighbour.

    Sequences shorter than three samples have no interior value and yield
    NaN throughout.
    """
    coords = np.asarray(values, dtype=float)
    n = len(coords)
    velocity = np.full(n, np.nan, dtype=float)
    if n < 3:
        return velocity

    velocity[1:-1] = (coords[2:] - coords[:-2]) / 2.0
    velocity[0] = velocity[1]
    velocity[-1] = velocity[-2]
    return velocity


class VelocityEstimator:
    """Add horizontal and vertical velocity columns to a sample frame."""

    def compute(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.copy()
        df[VX] = central_difference(df[X].to_numpy())
        df[VY] = central_difference(df[Y].to_numpy())
        return df
