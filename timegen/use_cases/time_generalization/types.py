from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np


@dataclass
class FoldTask:
    """One (repeat, fold) unit of work of a cross-validated run.

    ``X_train`` is already restricted to the training time points and
    ``X_test`` to the test time points; both hold every sample of the repeat
    and are indexed with ``train_idx`` / ``test_idx`` inside the worker.
    """

    repeat: int
    fold: int
    X_train: np.ndarray
    X_test: np.ndarray
    y: np.ndarray
    train_idx: np.ndarray
    test_idx: np.ndarray
    oversample_stream: Optional[str] = None


@dataclass
class FoldRunOutputs:
    repeat: int
    fold: int
    # one (n_test, n_time2[, C]) array per training time point
    cells: List[np.ndarray] = field(default_factory=list)
    testlabel: Optional[np.ndarray] = None
