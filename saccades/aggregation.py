"""Aggregation of classified samples into fixations."""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .domain import FIXATION_COLUMNS, FIXATION_ID, IS_SACCADE, TIME, TRIAL, VX, VY, X, Y, ensure_columns
from .errors import NoFixationsError

logger = logging.getLogger(__name__)

NO_FIXATIONS_MESSAGE = (
    "No fixations were detected: every sample was classified as saccade. "
    "The threshold is probably too aggressive (lam too small)."
)


def peak_value(values) -> float:
    """Signed value with the largest magnitude; NaN if none is defined."""
    arr = np.asarray(values, dtype=float)
    magnitude = np.abs(arr)
    if len(arr) == 0 or np.isnan(magnitude).all():
        return float("nan")
    return float(arr[np.nanargmax(magnitude)])


def assign_fixation_ids(df: pd.DataFrame) -> pd.DataFrame:
    """Number fixation groups in chronological order.

    A new group starts whenever a saccade ends (``is_saccade`` switches from
    True to False) or the trial identifier changes. Saccade samples carry
    the id of the group they follow and are discarded later.
    """
    df = df.copy()
    sacc = df[IS_SACCADE].astype(int)
    saccade_end = sacc.diff().eq(-1)
    trial_change = df[TRIAL].ne(df[TRIAL].shift())
    trial_change.iloc[0] = False
    df[FIXATION_ID] = (saccade_end | trial_change).cumsum()
    return df


class FixationAggregator:
    """Collapse non-saccade samples into one record per fixation."""

    def aggregate(self, df: pd.DataFrame, require_fixations: bool = True) -> pd.DataFrame:
        ensure_columns(df.columns, (TIME, TRIAL, X, Y, VX, VY, IS_SACCADE))
        df = assign_fixation_ids(df)
        members = df.loc[~df[IS_SACCADE].astype(bool)]

        if members.empty:
            if require_fixations:
                raise NoFixationsError(NO_FIXATIONS_MESSAGE)
            return pd.DataFrame(columns=list(FIXATION_COLUMNS))

        grouped = members.groupby(FIXATION_ID, sort=True)
        fixations = grouped.agg(
            trial=(TRIAL, "first"),
            start=(TIME, "min"),
            end=(TIME, "max"),
            x=(X, "mean"),
            y=(Y, "mean"),
            sd_x=(X, "std"),
            sd_y=(Y, "std"),
            peak_vx=(VX, peak_value),
            peak_vy=(VY, peak_value),
        ).reset_index(drop=True)
        fixations["dur"] = fixations["end"] - fixations["start"]

        single = int((grouped.size() == 1).sum())
        if single:
            logger.debug("%s of %s fixations consist of a single sample", single, len(fixations))
        return fixations


def aggregate_fixations(df: pd.DataFrame) -> pd.DataFrame:
    return FixationAggregator().aggregate(df)
