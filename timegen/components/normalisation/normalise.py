from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from timegen.contracts.choices import NormaliseName
from timegen.core.errors import ConfigurationError


def normalise(mode: NormaliseName, X: np.ndarray) -> np.ndarray:
    """
    Normalise X (n_samples, n_features, n_times) across samples, separately
    for every (feature, time) column.

    Parameters
    ----------
    mode : {"zscore", "demean", "none"}
        - zscore: subtract the mean and divide by the sample standard deviation
          (ddof=1). Constant columns stay at zero.
        - demean: subtract the mean only.
        - none: return X unchanged.
    X : np.ndarray

    Returns
    -------
    np.ndarray
        A new array; X itself is not modified.
    """
    X = np.asarray(X, dtype=float)
    if mode == "none":
        return X.copy()

    mean = X.mean(axis=0, keepdims=True)
    if mode == "demean":
        return X - mean

    if mode == "zscore":
        if X.shape[0] < 2:
            raise ConfigurationError("zscore normalisation needs at least 2 samples")
        std = X.std(axis=0, ddof=1, keepdims=True)
        std = np.where(std > 0, std, 1.0)
        return (X - mean) / std

    raise ConfigurationError(f"Unknown normalisation {mode!r}")


@dataclass
class SampleNormaliser:
    """Normaliser strategy bound to one mode."""
    mode: NormaliseName = "zscore"

    def normalise(self, X: np.ndarray) -> np.ndarray:
        return normalise(self.mode, X)
