from __future__ import annotations

"""Batched test matrices for time generalisation.

A classifier trained at one time point is evaluated at every test time point
in a single ``predict`` call. The test data are flattened so that rows run
sample-major, time-minor::

    row  0 -> (sample 0, time 0)
    row  1 -> (sample 0, time 1)
    ...
    row  t -> (sample 1, time 0)

:func:`unflatten_predictions` is the exact inverse for the predicted rows.
"""

import numpy as np


def flatten_test_batch(X_test: np.ndarray) -> np.ndarray:
    """Reshape (n_samples, n_features, n_times) into (n_samples * n_times, n_features)."""

    X_test = np.asarray(X_test)
    if X_test.ndim != 3:
        raise ValueError(f"X_test must be 3D (n_samples, n_features, n_times); got {X_test.shape}")

    n_samples, n_features, n_times = X_test.shape
    # (n, f, t) -> (n, t, f): the feature axis must be last before reshaping
    return np.ascontiguousarray(np.transpose(X_test, (0, 2, 1))).reshape(n_samples * n_times, n_features)


def unflatten_predictions(outputs: np.ndarray, n_samples: int, n_times: int) -> np.ndarray:
    """Reshape per-row outputs (n_samples * n_times, ...) into (n_samples, n_times, ...)."""

    outputs = np.asarray(outputs)
    if outputs.shape[0] != n_samples * n_times:
        raise ValueError(
            f"Expected {n_samples * n_times} rows ({n_samples} samples x {n_times} times); "
            f"got {outputs.shape[0]}."
        )
    return outputs.reshape((n_samples, n_times) + outputs.shape[1:])


__all__ = ["flatten_test_batch", "unflatten_predictions"]
