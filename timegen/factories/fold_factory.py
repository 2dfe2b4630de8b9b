from __future__ import annotations

from typing import Optional

import numpy as np

from timegen.components.splitters.folds import check_fold_feasibility
from timegen.components.splitters.types import FoldPartition
from timegen.contracts.choices import CVName
from timegen.core.shapes import class_counts
from timegen.registries.splitters import make_fold_generator


def make_folds(
    kind: CVName,
    labels: np.ndarray,
    k: int = 5,
    stratify: bool = True,
    p: float = 0.1,
    *,
    seed: Optional[int] = None,
) -> FoldPartition:
    """Validate that ``labels`` support the requested CV, then partition them.

    leaveout forces k = n; holdout produces exactly one set with a fraction
    ``p`` of the samples held out; none trains and tests on everything.
    """
    labels = np.asarray(labels, dtype=int).ravel()
    counts = class_counts(labels, int(labels.max()))
    check_fold_feasibility(kind, counts, k=k, stratify=stratify, p=p)
    return make_fold_generator(kind).make_folds(labels, k=k, stratify=stratify, p=p, seed=seed)
