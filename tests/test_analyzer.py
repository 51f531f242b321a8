import pandas as pd
import pytest

matplotlib = pytest.importorskip("matplotlib")
from conftest import synthetic_recording
from saccades.analyzer import DiagnosticPlotter, PlotConfig, diagnostic_plot
from saccades.cli import main
from saccades.io import write_fixations
from saccades.pipeline import detect_fixations


def test_plot_creates_image(tmp_path):
    samples = synthetic_recording()
    fixations = detect_fixations(samples)

    out_path = diagnostic_plot(samples, fixations, tmp_path / "plot.png")

    assert out_path.exists()
    assert out_path.stat().st_size > 0


def test_plot_requires_sample_columns():
    samples = pd.DataFrame({"time": [0.0, 4.0], "x": [1.0, 2.0]})
    fixations = pd.DataFrame({"start": [0.0], "end": [4.0], "x": [1.5], "y": [0.0]})
    with pytest.raises(ValueError):
        DiagnosticPlotter().plot(samples, fixations)


def test_plot_respects_config(tmp_path):
    samples = synthetic_recording()
    fixations = detect_fixations(samples)
    cfg = PlotConfig(max_fixations=2, figsize=(4.0, 3.0), dpi=80)

    out_path = DiagnosticPlotter(cfg).plot(samples, fixations, tmp_path / "plot.pdf")

    assert out_path.suffix == ".pdf"
    assert out_path.stat().st_size > 0


def test_plot_can_show(monkeypatch, tmp_path):
    samples = synthetic_recording()
    fixations = detect_fixations(samples)

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    called = []
    monkeypatch.setattr(plt, "show", lambda: called.append(True))

    DiagnosticPlotter(PlotConfig(show=True)).plot(samples, fixations, tmp_path / "plot.png")
    assert called == [True]


def test_cli_plot(tmp_path):
    samples = synthetic_recording()
    samples_path = tmp_path / "samples.tsv"
    fixations_path = tmp_path / "fixations.tsv"
    samples.to_csv(samples_path, sep="\t", index=False)
    write_fixations(detect_fixations(samples), fixations_path)

    out = tmp_path / "plot.png"
    assert main(["plot", str(samples_path), str(fixations_path), str(out)]) == 0
    assert out.exists()
