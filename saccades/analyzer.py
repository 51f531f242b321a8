"""Diagnostic plot of raw samples and detected fixations."""
from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from pathlib import Path

import numpy as np
import pandas as pd

from .domain import TIME, X, Y, ensure_columns
from .errors import ConfigurationError


@dataclass(frozen=True)
class PlotConfig:
    """Configuration for the diagnostic plot."""

    # The initial view spans this many fixations
    max_fixations: int = 20
    sample_color_x: str = "red"
    sample_color_y: str = "orange"
    boundary_color: str = "lightgrey"
    marker_size: float = 2.0
    figsize: tuple[float, float] = (12.0, 5.0)
    dpi: float | None = None
    tight_layout: bool = True
    show: bool = False


class DiagnosticPlotter:
    """Plot x/y positions over time with fixation positions and boundaries.

    Red dots are x-coordinates, orange dots y-coordinates. Horizontal black
    segments mark the fixation coordinates and grey vertical lines the
    fixation on- and offsets (i.e. the saccade off- and onsets).
    """

    def __init__(self, config: PlotConfig | None = None) -> None:
        self.config = config or PlotConfig()

    def plot(
        self,
        samples: pd.DataFrame,
        fixations: pd.DataFrame,
        output_path: str | Path | None = None,
    ) -> Path:
        ensure_columns(samples.columns, (TIME, X, Y))
        ensure_columns(fixations.columns, ("start", "end", "x", "y"))
        if fixations.empty:
            raise ConfigurationError("No fixations to plot.")
        cfg = self.config

        try:
            matplotlib = import_module("matplotlib")
            if not cfg.show:
                matplotlib.use("Agg")
            plt = import_module("matplotlib.pyplot")
        except ModuleNotFoundError as exc:  # pragma: no cover - dependency is optional in CI
            raise ModuleNotFoundError(
                "matplotlib is required for plotting; install via `pip install matplotlib`."
            ) from exc

        fig, ax = plt.subplots(figsize=cfg.figsize, dpi=cfg.dpi)

        ax.scatter(samples[TIME], samples[X], s=cfg.marker_size, color=cfg.sample_color_x, label="x")
        ax.scatter(samples[TIME], samples[Y], s=cfg.marker_size, color=cfg.sample_color_y, label="y")

        starts = fixations["start"].to_numpy(dtype=float)
        ends = fixations["end"].to_numpy(dtype=float)
        ax.hlines(fixations["x"], starts, ends, color="black")
        ax.hlines(fixations["y"], starts, ends, color="black")
        ax.vlines(np.concatenate([starts, ends]), 0, 1, transform=ax.get_xaxis_transform(),
                  color=cfg.boundary_color, linewidth=0.8)

        head = fixations.head(cfg.max_fixations)
        lo = float(np.nanmin([head["x"].min(), head["y"].min()]))
        hi = float(np.nanmax([head["x"].max(), head["y"].max()]))
        if hi > lo:
            ax.set_ylim(lo, hi)
        t0, t1 = float(head["start"].iloc[0]), float(head["end"].iloc[-1])
        if t1 > t0:
            ax.set_xlim(t0, t1)

        ax.set_xlabel("time")
        ax.set_ylabel("position")
        ax.legend(loc="upper right")

        if cfg.tight_layout:
            plt.tight_layout()

        output_path = Path(output_path or "fixations.png")
        fig.savefig(output_path)
        if cfg.show:  # pragma: no cover - UI-driven choice
            plt.show()
        plt.close(fig)
        return output_path


def diagnostic_plot(
    samples: pd.DataFrame,
    fixations: pd.DataFrame,
    output_path: str | Path | None = None,
    config: PlotConfig | None = None,
) -> Path:
    return DiagnosticPlotter(config).plot(samples, fixations, output_path)


__all__ = ["DiagnosticPlotter", "PlotConfig", "diagnostic_plot"]
