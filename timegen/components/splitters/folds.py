from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np
from sklearn.model_selection import (
    KFold,
    LeaveOneOut,
    ShuffleSplit,
    StratifiedKFold,
    StratifiedShuffleSplit,
)

from timegen.components.splitters.types import FoldPartition
from timegen.core.errors import DataShapeError


def _partition(kind: str, y: np.ndarray, splits: Iterable[Tuple[np.ndarray, np.ndarray]]) -> FoldPartition:
    train_sets, test_sets = [], []
    for train_idx, test_idx in splits:
        train_sets.append(np.asarray(train_idx, dtype=int))
        test_sets.append(np.asarray(test_idx, dtype=int))
    return FoldPartition(
        kind=kind,
        n_samples=int(y.shape[0]),
        train_sets=tuple(train_sets),
        test_sets=tuple(test_sets),
    )


@dataclass
class KFoldGenerator:
    """k-fold CV; stratified folds approximately preserve the class proportions."""

    def make_folds(
        self,
        y: np.ndarray,
        *,
        k: int,
        stratify: bool,
        p: float,
        seed: Optional[int] = None,
    ) -> FoldPartition:
        y = np.asarray(y).ravel()
        splitter_cls = StratifiedKFold if stratify else KFold
        splitter = splitter_cls(n_splits=k, shuffle=True, random_state=seed)
        dummy = np.zeros((y.shape[0], 1))
        return _partition("kfold", y, splitter.split(dummy, y))


@dataclass
class LeaveOutGenerator:
    """Leave-one-out: k equals the number of samples."""

    def make_folds(
        self,
        y: np.ndarray,
        *,
        k: int,
        stratify: bool,
        p: float,
        seed: Optional[int] = None,
    ) -> FoldPartition:
        y = np.asarray(y).ravel()
        dummy = np.zeros((y.shape[0], 1))
        return _partition("leaveout", y, LeaveOneOut().split(dummy, y))


@dataclass
class HoldOutGenerator:
    """A single split holding out a fraction ``p`` of the samples as test set."""

    def make_folds(
        self,
        y: np.ndarray,
        *,
        k: int,
        stratify: bool,
        p: float,
        seed: Optional[int] = None,
    ) -> FoldPartition:
        y = np.asarray(y).ravel()
        splitter_cls = StratifiedShuffleSplit if stratify else ShuffleSplit
        splitter = splitter_cls(n_splits=1, test_size=p, random_state=seed)
        dummy = np.zeros((y.shape[0], 1))
        return _partition("holdout", y, splitter.split(dummy, y))


@dataclass
class NoSplitGenerator:
    """No cross-validation: one set that trains and tests on every sample."""

    def make_folds(
        self,
        y: np.ndarray,
        *,
        k: int,
        stratify: bool,
        p: float,
        seed: Optional[int] = None,
    ) -> FoldPartition:
        y = np.asarray(y).ravel()
        every = np.arange(y.shape[0], dtype=int)
        return _partition("none", y, [(every, every)])


def effective_num_sets(kind: str, n_samples: int, k: int) -> int:
    """Number of train/test sets per repeat for the given CV kind."""

    if kind == "kfold":
        return int(k)
    if kind == "leaveout":
        return int(n_samples)
    return 1


def check_fold_feasibility(
    kind: str,
    counts: np.ndarray,
    *,
    k: int,
    stratify: bool,
    p: float,
) -> None:
    """Raise DataShapeError when the class counts cannot support the requested CV.

    ``counts`` are the per-class sample counts the folds will be drawn from,
    i.e. after any repeat-level resampling.
    """

    counts = np.asarray(counts, dtype=int)
    n = int(counts.sum())
    n_classes = int(counts.shape[0])

    if kind == "kfold":
        if n < k:
            raise DataShapeError(f"{k}-fold cross-validation needs at least {k} samples; got {n}.")
        if stratify and counts.min() < k:
            raise DataShapeError(
                f"Stratified {k}-fold cross-validation needs at least {k} samples per class; "
                f"class counts are {counts.tolist()}."
            )
    elif kind == "leaveout":
        if n < 2:
            raise DataShapeError("Leave-one-out needs at least 2 samples.")
    elif kind == "holdout":
        n_test = int(math.ceil(p * n))
        n_train = n - n_test
        if n_test < 1 or n_train < 1:
            raise DataShapeError(f"Holdout with p={p} leaves an empty train or test set for {n} samples.")
        if stratify and (n_test < n_classes or n_train < n_classes or counts.min() < 2):
            raise DataShapeError(
                f"Stratified holdout with p={p} cannot represent all {n_classes} classes; "
                f"class counts are {counts.tolist()}."
            )
