from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from timegen.contracts.choices import OutputType


def output_trailing_shape(output_type: OutputType, n_classes: int) -> Tuple[int, ...]:
    """Per-row shape of classifier outputs: class probabilities for multiclass prob."""

    if output_type == "prob" and n_classes > 2:
        return (int(n_classes),)
    return ()


@dataclass(frozen=True)
class OutputTensorShape:
    """Shape of the raw classifier output container, fixed before the loop starts.

    Cross-validated runs use an object container (n_repeats, n_folds, n_time1)
    whose cells hold (fold test size, n_time2, *trailing) arrays, since test
    fold sizes may differ. Other runs use one dense
    (n_test, n_time1, n_time2, *trailing) array.
    """

    cross_validated: bool
    n_time1: int
    n_time2: int
    n_repeats: int = 1
    n_folds: int = 1
    n_test: int = 0
    trailing: Tuple[int, ...] = ()
    output_type: OutputType = "clabel"

    @property
    def container_shape(self) -> Tuple[int, ...]:
        if self.cross_validated:
            return (self.n_repeats, self.n_folds, self.n_time1)
        return (self.n_test, self.n_time1, self.n_time2) + self.trailing

    @property
    def n_units(self) -> int:
        """Number of training-time-point fits the run will perform."""
        if self.cross_validated:
            return self.n_repeats * self.n_folds * self.n_time1
        return self.n_time1

    def allocate(self) -> np.ndarray:
        if self.cross_validated:
            return np.empty(self.container_shape, dtype=object)
        if self.output_type == "clabel":
            return np.zeros(self.container_shape, dtype=int)
        return np.full(self.container_shape, np.nan, dtype=float)

    def allocate_testlabels(self) -> np.ndarray:
        """(n_repeats, n_folds) container of test label vectors (cross-validated only)."""
        return np.empty((self.n_repeats, self.n_folds), dtype=object)
