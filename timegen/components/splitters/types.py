from __future__ import annotations

"""Fold partition contract.

Fold generators return a single, stable payload: index arrays into the
(possibly resampled) label vector they were given. Train and test indices of
one set are disjoint, except for ``cv="none"`` where both cover every sample.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class FoldPartition:
    """Train/test index sets of one cross-validation repeat."""

    kind: str
    n_samples: int
    train_sets: Tuple[np.ndarray, ...]
    test_sets: Tuple[np.ndarray, ...]

    def __post_init__(self) -> None:
        if len(self.train_sets) != len(self.test_sets):
            raise ValueError("train_sets and test_sets must have the same length")

    @property
    def num_sets(self) -> int:
        return len(self.test_sets)

    def train_indices(self, i: int) -> np.ndarray:
        return self.train_sets[i]

    def test_indices(self, i: int) -> np.ndarray:
        return self.test_sets[i]

    def training(self, i: int) -> np.ndarray:
        """Boolean mask of the training samples of set ``i``."""
        mask = np.zeros(self.n_samples, dtype=bool)
        mask[self.train_sets[i]] = True
        return mask

    def test(self, i: int) -> np.ndarray:
        """Boolean mask of the test samples of set ``i``."""
        mask = np.zeros(self.n_samples, dtype=bool)
        mask[self.test_sets[i]] = True
        return mask

    def test_size(self, i: int) -> int:
        return int(self.test_sets[i].shape[0])
