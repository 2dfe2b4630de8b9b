# scripts/run_timextime_local.py
from __future__ import annotations

import logging

import numpy as np

from timegen.api import TimeGenConfig, classify_timextime, simulate_time_resolved_data
from timegen.core.logging_utils import get_console_logger

# ==== EDIT THESE AS YOU LIKE ==================================================
N_SAMPLES = 80
N_FEATURES = 10
N_TIMES = 30
PEAK = 15          # time point of maximal class separation
SEED = 42

# Example A: cross-validated, single dataset
CFG = TimeGenConfig(
    classifier="lda",
    metric="accuracy",
    cv="kfold",
    k=5,
    repeat=2,
    normalise="zscore",
    balance="none",
    seed=SEED,
    n_jobs=1,
    feedback=True,
)

# Example B: train on one dataset, test on another
# CFG = TimeGenConfig(classifier="logreg", param={"C": 0.1}, metric="auc", seed=SEED)
USE_SECOND_DATASET = False
# ============================================================================


def main():
    get_console_logger(logging.INFO)

    data = simulate_time_resolved_data(N_SAMPLES, N_FEATURES, N_TIMES, peak=PEAK, rng=SEED)
    if USE_SECOND_DATASET:
        test = simulate_time_resolved_data(N_SAMPLES, N_FEATURES, N_TIMES, peak=PEAK, rng=SEED + 1)
        outcome = classify_timextime(CFG, data.X, data.clabel, test.X, test.clabel)
    else:
        outcome = classify_timextime(CFG, data.X, data.clabel)

    perf = np.asarray(outcome.perf, dtype=float)
    print("\n=== TIME x TIME RESULT ===")
    print(f"Mode: {outcome.result.mode}")
    print(f"Metric: {outcome.result.metric}")
    print(f"Shape: {perf.shape}")
    print(f"Mean diagonal: {np.mean(np.diag(perf)):.3f}")
    print(f"Peak (train, test): {np.unravel_index(np.nanargmax(perf), perf.shape)}")


if __name__ == "__main__":
    main()
