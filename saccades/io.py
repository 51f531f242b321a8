"""Read samples and read/write fixations as delimited text."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .domain import FIXATION_COLUMNS, SAMPLE_COLUMNS, ensure_columns

# Maps the pipeline's field names to column names in the source file
DEFAULT_SAMPLE_COLUMNS: Dict[str, str] = {name: name for name in SAMPLE_COLUMNS}


def read_samples(
    path: str | Path,
    columns: Optional[Dict[str, str]] = None,
    sep: str = "\t",
    decimal: str = ".",
) -> pd.DataFrame:
    """Load samples and rename the mapped source columns to ``time, trial, x, y``.

    Rows are kept in file order.
    """
    mapping = {**DEFAULT_SAMPLE_COLUMNS, **(columns or {})}
    df = pd.read_csv(path, sep=sep, decimal=decimal)
    ensure_columns(df.columns, mapping.values())
    df = df.rename(columns={source: name for name, source in mapping.items()})
    return df.loc[:, list(SAMPLE_COLUMNS)]


def write_fixations(fixations: pd.DataFrame, path: str | Path, sep: str = "\t") -> Path:
    ensure_columns(fixations.columns, FIXATION_COLUMNS)
    path = Path(path)
    fixations.loc[:, list(FIXATION_COLUMNS)].to_csv(path, sep=sep, index=False)
    return path


def read_fixations(path: str | Path, sep: str = "\t") -> pd.DataFrame:
    df = pd.read_csv(path, sep=sep)
    ensure_columns(df.columns, FIXATION_COLUMNS)
    return df
