import math

import pandas as pd
import pytest

from saccades.summary import SUMMARY_ROWS, calculate_summary, format_summary


@pytest.fixture
def fixations() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "trial": [1, 1, 1, 2],
            "start": [0.0, 200.0, 500.0, 1000.0],
            "end": [150.0, 450.0, 700.0, 1400.0],
            "x": [10.0, 20.0, 30.0, 40.0],
            "y": [5.0, 6.0, 7.0, 8.0],
            "sd_x": [1.0, 3.0, float("nan"), 2.0],
            "sd_y": [0.5, 0.5, float("nan"), 0.5],
            "peak_vx": [1.0, -2.0, 3.0, 4.0],
            "peak_vy": [0.0, 0.0, 0.0, 0.0],
            "dur": [150.0, 250.0, 200.0, 400.0],
        }
    )


def test_summary_rows_and_values(fixations):
    stats = calculate_summary(fixations)

    assert list(stats.index) == list(SUMMARY_ROWS)
    assert list(stats.columns) == ["mean", "sd"]
    assert stats.loc["Number of trials", "mean"] == 2
    assert math.isnan(stats.loc["Number of trials", "sd"])
    assert stats.loc["Duration of trials", "mean"] == pytest.approx(550.0)
    assert stats.loc["No. of fixations per trial", "mean"] == pytest.approx(2.0)
    assert stats.loc["Duration of fixations", "mean"] == pytest.approx(250.0)
    # NaN dispersion of the single-sample fixation is ignored
    assert stats.loc["Dispersion horizontal", "mean"] == pytest.approx(2.0)
    assert stats.loc["Dispersion horizontal", "sd"] == pytest.approx(1.0)
    assert stats.loc["Peak velocity horizontal", "mean"] == pytest.approx(1.5)


def test_summary_is_silent_unless_verbose(fixations, capsys):
    calculate_summary(fixations)
    assert capsys.readouterr().out == ""

    calculate_summary(fixations, verbose=True)
    out = capsys.readouterr().out
    assert "Duration of fixations" in out
    assert "Peak velocity vertical" in out


def test_format_summary_rounds(fixations):
    text = format_summary(calculate_summary(fixations), digits=1)
    assert "550.0" in text
