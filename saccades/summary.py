"""Descriptive statistics for a set of detected fixations."""
from __future__ import annotations

import pandas as pd

from .domain import FIXATION_COLUMNS, ensure_columns

SUMMARY_ROWS = (
    "Number of trials",
    "Duration of trials",
    "No. of fixations per trial",
    "Duration of fixations",
    "Dispersion horizontal",
    "Dispersion vertical",
    "Peak velocity horizontal",
    "Peak velocity vertical",
)


def calculate_summary(fixations: pd.DataFrame, verbose: bool = False) -> pd.DataFrame:
    """Mean and standard deviation of trial and fixation measures.

    Trial duration is the time from the first fixation onset to the last
    fixation offset of each trial. Missing dispersions (single-sample
    fixations) and peak velocities are ignored. With ``verbose`` the table
    is printed in addition to being returned.
    """
    ensure_columns(fixations.columns, FIXATION_COLUMNS)
    by_trial = fixations.groupby("trial", sort=False)

    trial_dur = by_trial["end"].max() - by_trial["start"].min()
    per_trial = by_trial.size()

    stats = pd.DataFrame(index=list(SUMMARY_ROWS), columns=["mean", "sd"], dtype=float)
    stats.loc["Number of trials"] = [float(fixations["trial"].nunique()), float("nan")]
    stats.loc["Duration of trials"] = _mean_sd(trial_dur)
    stats.loc["No. of fixations per trial"] = _mean_sd(per_trial)
    stats.loc["Duration of fixations"] = _mean_sd(fixations["dur"])
    stats.loc["Dispersion horizontal"] = _mean_sd(fixations["sd_x"])
    stats.loc["Dispersion vertical"] = _mean_sd(fixations["sd_y"])
    stats.loc["Peak velocity horizontal"] = _mean_sd(fixations["peak_vx"])
    stats.loc["Peak velocity vertical"] = _mean_sd(fixations["peak_vy"])

    if verbose:
        print(format_summary(stats))
    return stats


def format_summary(stats: pd.DataFrame, digits: int = 2) -> str:
    return stats.round(digits).to_string()


def _mean_sd(values) -> list:
    series = pd.to_numeric(pd.Series(values), errors="coerce")
    return [float(series.mean()), float(series.std())]
