from __future__ import annotations

"""Public shape/orientation utilities.

Conventions
-----------
- X is 3D: (n_samples, n_features, n_times)
- clabel is 1D: (n_samples,) with integer classes 1..C
- time index sets are 0-based positions into the time axis
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from timegen.core.errors import ConfigurationError, DataShapeError


def coerce_1d(a) -> np.ndarray:
    """Return ``a`` as a 1D array; (n, 1) and (1, n) column/row vectors are flattened."""

    arr = np.asarray(a)
    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.reshape(-1)
    if arr.ndim != 1:
        raise DataShapeError(f"Expected a 1D vector; got shape {arr.shape}.")
    return arr


def coerce_3d(X) -> np.ndarray:
    """Return X as a float64 array of shape (n_samples, n_features, n_times).

    A 2D array is read as (n_samples, n_features) with a single time point.
    """

    X = np.asarray(X, dtype=float)
    if X.ndim == 2:
        X = X[:, :, None]
    if X.ndim != 3:
        raise DataShapeError(
            f"X must be 3D (n_samples, n_features, n_times); got {X.shape}"
        )

    n_samples, n_features, n_times = X.shape
    if n_samples < 1 or n_features < 1 or n_times < 1:
        raise DataShapeError(f"X must not have an empty axis; got {X.shape}")

    return X


def check_clabel(clabel, n_samples: int) -> Tuple[np.ndarray, int]:
    """Validate a class label vector and return (labels as int array, n_classes).

    Labels must be integers 1..C, every class must occur at least once and the
    vector must align with the sample axis of X.
    """

    y = coerce_1d(clabel)

    if y.shape[0] != n_samples:
        raise DataShapeError(
            f"clabel has {y.shape[0]} entries but X has {n_samples} samples."
        )

    if y.dtype.kind == "f":
        if not np.all(np.isfinite(y)) or not np.all(np.mod(y, 1) == 0):
            raise DataShapeError("clabel must contain integer class labels 1..C.")
    elif y.dtype.kind not in "iu":
        raise DataShapeError(f"clabel must be numeric; got dtype {y.dtype}.")

    y = y.astype(int)
    classes = np.unique(y)
    n_classes = int(classes.max()) if classes.size else 0

    if classes.size == 0 or classes.min() < 1:
        raise DataShapeError("clabel must contain integer class labels 1..C.")

    missing = sorted(set(range(1, n_classes + 1)) - set(classes.tolist()))
    if missing:
        raise DataShapeError(
            f"clabel must contain every class 1..{n_classes}; missing {missing}."
        )

    return y, n_classes


def class_counts(y: np.ndarray, n_classes: int) -> np.ndarray:
    """Number of samples per class 1..n_classes."""

    return np.bincount(np.asarray(y, dtype=int), minlength=n_classes + 1)[1:]


def resolve_time_indices(
    times: Optional[Sequence[int]],
    n_times: int,
    *,
    name: str,
) -> np.ndarray:
    """Return a validated 0-based index array into a time axis of length ``n_times``.

    ``None`` selects every time point.
    """

    if times is None:
        return np.arange(n_times, dtype=int)

    idx = np.asarray(list(times), dtype=int).ravel()
    if idx.size == 0:
        raise ConfigurationError(f"{name} must select at least one time point.")
    if idx.min() < 0 or idx.max() >= n_times:
        raise ConfigurationError(
            f"{name} indices must lie in [0, {n_times - 1}]; got min={idx.min()}, max={idx.max()}."
        )
    return idx


__all__ = [
    "coerce_1d",
    "coerce_3d",
    "check_clabel",
    "class_counts",
    "resolve_time_indices",
]
