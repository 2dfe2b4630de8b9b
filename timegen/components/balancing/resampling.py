from __future__ import annotations

"""Class balancing by over- or undersampling.

Policies
--------
- ``oversample``: every class is brought up to the size of the largest class
  (all original samples are kept; extra samples are drawn from the class).
- ``undersample``: every class is reduced to the size of the smallest class.
- ``int`` target: every class is resampled to exactly ``target`` samples.
  Concurrent over- and undersampling (a target strictly between the smallest
  and the largest class) is not supported.

``replace`` decides whether oversampling draws extra samples with
replacement. Without replacement, oversampling repeats the whole class as
often as it fits and draws the remainder without replacement. Reducing a
class always draws without replacement, so no sample appears twice.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from timegen.core.errors import ConfigurationError, DataShapeError
from timegen.core.shapes import class_counts

BalancePolicy = Union[str, int]


def check_balance_target(counts: np.ndarray, target: int) -> None:
    """Reject a target that would require over- and undersampling at the same time."""

    counts = np.asarray(counts, dtype=int)
    if np.any(counts > target) and np.any(counts < target):
        raise ConfigurationError(
            f"balance target [{target}] is in between the sample sizes in the classes "
            f"{counts.tolist()}. Concurrent over- and undersampling is currently not supported."
        )


def balanced_class_counts(counts: np.ndarray, policy: BalancePolicy) -> np.ndarray:
    """Per-class sample counts after applying ``policy``."""

    counts = np.asarray(counts, dtype=int)
    if isinstance(policy, (int, np.integer)) and not isinstance(policy, bool):
        check_balance_target(counts, int(policy))
        return np.full_like(counts, int(policy))
    if policy == "oversample":
        return np.full_like(counts, counts.max())
    if policy == "undersample":
        return np.full_like(counts, counts.min())
    if policy == "none":
        return counts.copy()
    raise ConfigurationError(f"Unknown balance policy {policy!r}")


def _resample_indices(
    idx: np.ndarray,
    target: int,
    *,
    replace: bool,
    rng: np.random.Generator,
) -> np.ndarray:
    n = idx.shape[0]
    if target == n:
        return idx
    if target < n:
        return rng.choice(idx, size=target, replace=False)

    extra = target - n
    if replace:
        return np.concatenate([idx, rng.choice(idx, size=extra, replace=True)])
    n_full, rest = divmod(target, n)
    parts = [idx] * n_full
    if rest:
        parts.append(rng.choice(idx, size=rest, replace=False))
    return np.concatenate(parts)


def balance_classes(
    X: np.ndarray,
    y: np.ndarray,
    policy: BalancePolicy,
    *,
    replace: bool = True,
    rng: np.random.Generator,
) -> Tuple[np.ndarray, np.ndarray]:
    """Resample samples (axis 0 of X) so that every class has the same count.

    Returns copies; the feature/time axes of X are untouched.
    """

    y = np.asarray(y, dtype=int).ravel()
    if X.shape[0] != y.shape[0]:
        raise ValueError(f"X and y length mismatch: {X.shape[0]} vs {y.shape[0]}")

    n_classes = int(y.max())
    counts = class_counts(y, n_classes)
    if np.any(counts == 0):
        missing = (np.flatnonzero(counts == 0) + 1).tolist()
        raise DataShapeError(f"Cannot balance classes: no samples of class(es) {missing}")
    targets = balanced_class_counts(counts, policy)

    keep = []
    for c, target in enumerate(targets, start=1):
        idx = np.flatnonzero(y == c)
        keep.append(_resample_indices(idx, int(target), replace=replace, rng=rng))

    order = np.sort(np.concatenate(keep), kind="stable")
    return X[order], y[order]


@dataclass
class ClassBalancer:
    """Resampler strategy bound to one policy."""

    policy: BalancePolicy
    replace: bool = True

    def balance(
        self,
        X: np.ndarray,
        y: np.ndarray,
        rng: np.random.Generator,
    ) -> Tuple[np.ndarray, np.ndarray]:
        return balance_classes(X, y, self.policy, replace=self.replace, rng=rng)


__all__ = [
    "BalancePolicy",
    "ClassBalancer",
    "balance_classes",
    "balanced_class_counts",
    "check_balance_target",
]
