import numpy as np
import pandas as pd
import pytest

# Small zig-zag around a fixation point: velocities alternate between
# +-0.5 and +-1.5, so the median-based SD is about one unit.
NOISE = [0.0, 1.0, 3.0, 2.0, 0.0, 1.0, 3.0, 2.0, 0.0, 1.0]


def make_samples(xs, ys, trials=None, interval: float = 4.0) -> pd.DataFrame:
    n = len(xs)
    return pd.DataFrame(
        {
            "time": np.arange(n, dtype=float) * interval,
            "trial": trials if trials is not None else [1] * n,
            "x": np.asarray(xs, dtype=float),
            "y": np.asarray(ys, dtype=float),
        }
    )


def synthetic_recording(n_fixations: int = 6, samples_per_fixation: int = 40, seed: int = 0,
                        trials: int = 2) -> pd.DataFrame:
    """Noisy fixations joined by 4-sample saccades, split evenly into trials."""
    rng = np.random.default_rng(seed)
    xs, ys = [], []
    pos = np.array([500.0, 400.0])
    for _ in range(n_fixations):
        for _ in range(samples_per_fixation):
            xs.append(pos[0] + rng.normal(0, 1.0))
            ys.append(pos[1] + rng.normal(0, 1.0))
        target = pos + rng.choice([-1, 1], size=2) * rng.uniform(150, 300, size=2)
        for step in np.linspace(0.25, 1.0, 4):
            p = pos + (target - pos) * step
            xs.append(p[0])
            ys.append(p[1])
        pos = target
    n = len(xs)
    trial_ids = np.repeat(np.arange(1, trials + 1), int(np.ceil(n / trials)))[:n]
    return make_samples(xs, ys, trials=list(trial_ids))


@pytest.fixture
def spike_samples() -> pd.DataFrame:
    """Ten samples in one trial with a saccade at samples 5 and 6."""
    xs = [100.0, 101.0, 103.0, 102.0, 100.0, 400.0, 402.0, 401.0, 403.0, 400.0]
    ys = [200.0 + v for v in NOISE]
    return make_samples(xs, ys)


@pytest.fixture
def two_trial_samples() -> pd.DataFrame:
    """Ten samples without saccades, trial boundary between samples 5 and 6."""
    xs = [200.0 + v for v in NOISE]
    ys = [300.0 + v for v in NOISE]
    return make_samples(xs, ys, trials=[1] * 5 + [2] * 5)


@pytest.fixture
def recording() -> pd.DataFrame:
    return synthetic_recording()
