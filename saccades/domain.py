"""Typed records for gaze samples and detected fixations.

The pipeline itself operates on pandas DataFrames (one column per field);
the records below are the typed view callers can use at the boundaries.
Column names are defined once here and used by every stage.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Hashable, Iterable, List, Union

import pandas as pd

from .errors import ConfigurationError

TIME = "time"
TRIAL = "trial"
X = "x"
Y = "y"
VX = "vx"
VY = "vy"
IS_SACCADE = "is_saccade"
FIXATION_ID = "fixation_id"

SAMPLE_COLUMNS = (TIME, TRIAL, X, Y)
FIXATION_COLUMNS = (
    "trial",
    "start",
    "end",
    "x",
    "y",
    "sd_x",
    "sd_y",
    "peak_vx",
    "peak_vy",
    "dur",
)


@dataclass(frozen=True)
class Sample:
    """Single gaze position recorded at ``time`` within ``trial``."""

    time: float
    trial: Hashable
    x: float
    y: float


@dataclass(frozen=True)
class Fixation:
    """Summary of one fixation episode."""

    trial: Hashable
    start: float
    end: float
    x: float
    y: float
    sd_x: float
    sd_y: float
    peak_vx: float
    peak_vy: float
    dur: float


SampleInput = Union[pd.DataFrame, Iterable[Sample]]


def ensure_columns(columns: Iterable[str], required: Iterable[str] = SAMPLE_COLUMNS) -> None:
    """Raise if any of the required columns is missing."""
    missing = set(required) - set(columns)
    if missing:
        raise ConfigurationError(f"Missing required columns: {', '.join(sorted(missing))}")


def samples_to_frame(samples: SampleInput) -> pd.DataFrame:
    """Return a working copy of the samples restricted to the input schema.

    The caller's data is never modified. Row order is preserved; the
    pipeline does not sort.
    """
    if isinstance(samples, pd.DataFrame):
        ensure_columns(samples.columns)
        frame = samples.loc[:, list(SAMPLE_COLUMNS)].copy()
    else:
        records = list(samples)
        for record in records:
            if not isinstance(record, Sample):
                raise ConfigurationError(
                    f"Expected Sample records, got {type(record).__name__}"
                )
        frame = pd.DataFrame([asdict(r) for r in records], columns=list(SAMPLE_COLUMNS))

    if frame.empty:
        raise ConfigurationError("No samples given.")

    frame = frame.reset_index(drop=True)
    for col in (TIME, X, Y):
        try:
            frame[col] = pd.to_numeric(frame[col]).astype(float)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Column '{col}' must be numeric.") from exc

    missing = [col for col in (TIME, TRIAL) if frame[col].isna().any()]
    if missing:
        raise ConfigurationError(f"Missing values in column(s): {', '.join(missing)}")
    return frame


def frame_to_fixations(frame: pd.DataFrame) -> List[Fixation]:
    ensure_columns(frame.columns, FIXATION_COLUMNS)
    names = [f.name for f in fields(Fixation)]
    return [
        Fixation(**{name: getattr(row, name) for name in names})
        for row in frame.itertuples(index=False)
    ]


def fixations_to_frame(fixations: Iterable[Fixation]) -> pd.DataFrame:
    return pd.DataFrame([asdict(f) for f in fixations], columns=list(FIXATION_COLUMNS))
