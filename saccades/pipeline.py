"""End-to-end fixation detection.

Stages run strictly in order, each materialising its output before the
next one starts::

    smoothing -> velocity -> threshold -> classification -> aggregation

No state is kept between runs, so independent recordings (or trials) can be
processed in parallel; see :func:`detect_fixations_parallel`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from importlib import import_module
from typing import Dict, Hashable, List, Optional, Union

import pandas as pd

from .aggregation import NO_FIXATIONS_MESSAGE, FixationAggregator
from .classifier import SaccadeClassifier
from .config import DetectionConfig, ThresholdScope
from .domain import IS_SACCADE, TRIAL, Fixation, SampleInput, frame_to_fixations, samples_to_frame
from .errors import NoFixationsError
from .smoothing import CoordinateSmoother
from .threshold import ThresholdCalculator, VelocityThreshold
from .velocity import VelocityEstimator

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    """Annotated samples, fixations and the threshold that produced them."""

    samples: pd.DataFrame
    fixations: pd.DataFrame
    threshold: Union[VelocityThreshold, Dict[Hashable, VelocityThreshold]]
    created_at: datetime

    def fixation_records(self) -> List[Fixation]:
        return frame_to_fixations(self.fixations)


class FixationDetector:
    """Pipeline composed of the five detection stages."""

    def __init__(self, config: Optional[DetectionConfig] = None) -> None:
        self.config = config or DetectionConfig()
        self.smoother = CoordinateSmoother(self.config.smoothing_window)
        self.velocity = VelocityEstimator()
        self.thresholds = ThresholdCalculator(self.config.lam)
        self.classifier = SaccadeClassifier(self.config)
        self.aggregator = FixationAggregator()

    def classify(self, samples: SampleInput, threshold=None) -> pd.DataFrame:
        """Run stages 1-4 and return the annotated sample frame."""
        df, _ = self._classify(samples, threshold)
        return df

    def run(self, samples: SampleInput, threshold=None) -> DetectionResult:
        df, threshold = self._classify(samples, threshold)
        fixations = self.aggregator.aggregate(df)
        logger.info(
            "Detected %s fixations in %s trial(s) from %s samples (%s saccade samples)",
            len(fixations),
            df[TRIAL].nunique(),
            len(df),
            int(df[IS_SACCADE].sum()),
        )
        return DetectionResult(
            samples=df,
            fixations=fixations,
            threshold=threshold,
            created_at=datetime.now(timezone.utc),
        )

    def _classify(self, samples: SampleInput, threshold):
        cfg = self.config
        df = samples_to_frame(samples)
        if cfg.smooth_coordinates:
            df = self.smoother.apply(df)
        df = self.velocity.compute(df)
        if threshold is None:
            if cfg.threshold_scope == "trial":
                threshold = self.thresholds.compute_per_trial(df)
            else:
                threshold = self.thresholds.compute(df)
        df = self.classifier.classify(df, threshold)
        return df, threshold


def detect_fixations(
    samples: SampleInput,
    lam: float = 15.0,
    smooth_coordinates: bool = True,
    smooth_saccades: bool = True,
    threshold_scope: ThresholdScope = "dataset",
) -> pd.DataFrame:
    """Detect fixations in chronologically ordered gaze samples.

    ``samples`` needs the fields ``time``, ``trial``, ``x`` and ``y``, sorted
    by time within each trial and recorded at a constant sampling rate.
    Returns one row per fixation with the columns ``trial, start, end, x, y,
    sd_x, sd_y, peak_vx, peak_vy, dur``.

    Raises :class:`~saccades.errors.NoFixationsError` if every sample is
    classified as saccade.
    """
    cfg = DetectionConfig(
        lam=lam,
        smooth_coordinates=smooth_coordinates,
        smooth_saccades=smooth_saccades,
        threshold_scope=threshold_scope,
    )
    return FixationDetector(cfg).run(samples).fixations


def detect_fixation_records(samples: SampleInput, **kwargs) -> List[Fixation]:
    return frame_to_fixations(detect_fixations(samples, **kwargs))


def _fixations_for_trial(trial_samples: pd.DataFrame, config: DetectionConfig, threshold) -> pd.DataFrame:
    detector = FixationDetector(config)
    df = detector.classify(trial_samples, threshold)
    return detector.aggregator.aggregate(df, require_fixations=False)


def detect_fixations_parallel(
    samples: SampleInput,
    config: Optional[DetectionConfig] = None,
    n_jobs: int = -1,
) -> pd.DataFrame:
    """Detect fixations with one joblib task per trial.

    A trial is a contiguous block of samples sharing one identifier; an
    identifier that recurs later in the input starts a separate block. Each
    block is smoothed, differentiated and classified as its own run.
    With the ``"dataset"`` scope one threshold is computed from the
    velocities of all trials and shared read-only by the workers.
    """
    try:
        joblib = import_module("joblib")
    except ModuleNotFoundError as exc:  # pragma: no cover - dependency is optional
        raise ModuleNotFoundError(
            "joblib is required for parallel detection; install via `pip install joblib`."
        ) from exc

    cfg = config or DetectionConfig()
    df = samples_to_frame(samples)
    block_id = df[TRIAL].ne(df[TRIAL].shift()).cumsum()
    trials = [group for _, group in df.groupby(block_id, sort=True)]

    threshold = None
    if cfg.threshold_scope == "dataset":
        detector = FixationDetector(cfg)
        velocities = []
        for group in trials:
            if cfg.smooth_coordinates:
                group = detector.smoother.apply(group)
            velocities.append(detector.velocity.compute(group))
        threshold = detector.thresholds.compute(pd.concat(velocities))

    parts = joblib.Parallel(n_jobs=n_jobs)(
        joblib.delayed(_fixations_for_trial)(group, cfg, threshold) for group in trials
    )
    fixations = pd.concat(parts, ignore_index=True)
    if fixations.empty:
        raise NoFixationsError(NO_FIXATIONS_MESSAGE)
    logger.info("Detected %s fixations in %s trial(s) using %s job(s)", len(fixations), len(trials), n_jobs)
    return fixations
