import math

import numpy as np
import pandas as pd
import pytest

from saccades.aggregation import FixationAggregator, assign_fixation_ids, peak_value
from saccades.domain import FIXATION_COLUMNS
from saccades.errors import NoFixationsError


def classified(is_saccade, trials=None, xs=None, vx=None):
    n = len(is_saccade)
    return pd.DataFrame(
        {
            "time": np.arange(n, dtype=float) * 2.0,
            "trial": trials if trials is not None else [1] * n,
            "x": xs if xs is not None else np.arange(n, dtype=float),
            "y": np.full(n, 5.0),
            "vx": vx if vx is not None else np.zeros(n),
            "vy": np.zeros(n),
            "is_saccade": is_saccade,
        }
    )


def test_peak_value_keeps_sign():
    assert peak_value([1.0, -3.0, 2.0]) == -3.0
    assert peak_value([np.nan, 2.0, -1.0]) == 2.0
    assert math.isnan(peak_value([np.nan, np.nan]))


def test_fixation_ids_increment_on_saccade_end_and_trial_change():
    df = classified(
        [False, True, True, False, False, False, True, False],
        trials=[1, 1, 1, 1, 2, 2, 2, 2],
    )
    ids = assign_fixation_ids(df)["fixation_id"].tolist()
    assert ids == [0, 0, 0, 1, 2, 2, 2, 3]


def test_trial_change_back_to_earlier_identifier_still_splits():
    df = classified([False] * 6, trials=["b", "b", "a", "a", "b", "b"])
    fixations = FixationAggregator().aggregate(df)
    assert fixations["trial"].tolist() == ["b", "a", "b"]


def test_aggregate_fields():
    df = classified(
        [False, False, False, True, True, False, False],
        xs=[1.0, 2.0, 3.0, 50.0, 90.0, 100.0, 104.0],
        vx=[0.5, -1.5, 1.0, 40.0, 45.0, 2.0, -0.5],
    )
    fixations = FixationAggregator().aggregate(df)

    assert list(fixations.columns) == list(FIXATION_COLUMNS)
    assert len(fixations) == 2
    first, second = fixations.iloc[0], fixations.iloc[1]
    assert (first["start"], first["end"], first["dur"]) == (0.0, 4.0, 4.0)
    assert first["x"] == pytest.approx(2.0)
    assert first["sd_x"] == pytest.approx(1.0)
    assert first["sd_y"] == pytest.approx(0.0)
    assert first["peak_vx"] == -1.5
    assert (second["start"], second["end"]) == (10.0, 12.0)
    assert second["x"] == pytest.approx(102.0)
    assert second["peak_vx"] == 2.0


def test_single_sample_fixation_has_undefined_sd_and_zero_duration():
    df = classified([True, False, True])
    fixations = FixationAggregator().aggregate(df)

    assert len(fixations) == 1
    row = fixations.iloc[0]
    assert row["dur"] == 0
    assert row["start"] == row["end"] == 2.0
    assert math.isnan(row["sd_x"])
    assert math.isnan(row["sd_y"])


def test_all_saccade_raises():
    with pytest.raises(NoFixationsError):
        FixationAggregator().aggregate(classified([True] * 5))


def test_all_saccade_can_return_empty_frame():
    fixations = FixationAggregator().aggregate(classified([True] * 5), require_fixations=False)
    assert fixations.empty
    assert list(fixations.columns) == list(FIXATION_COLUMNS)


def test_leading_saccade_samples_are_dropped():
    fixations = FixationAggregator().aggregate(classified([True, True, False, False]))
    assert len(fixations) == 1
    assert fixations.iloc[0]["start"] == 4.0
