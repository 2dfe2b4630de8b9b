from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

import numpy as np

from timegen.components.interfaces import ClassifierAdapter, Resampler
from timegen.contracts.choices import OutputType
from timegen.core.batching import flatten_test_batch, unflatten_predictions
from timegen.core.errors import DataShapeError, TrainingError
from timegen.core.progress import CancellationToken, ProgressCallback
from timegen.runtime.random.rng import RngManager

from .types import FoldRunOutputs, FoldTask

logger = logging.getLogger(__name__)


class ProgressTicker:
    """Counts finished training time points and forwards them to a callback.

    Workers may run in threads, hence the lock.
    """

    def __init__(self, progress: Optional[ProgressCallback], *, total: int, label: str) -> None:
        self._progress = progress
        self._lock = threading.Lock()
        self._done = 0
        self.total = int(total)
        self.label = label
        if progress is not None:
            progress.init(total=self.total, label=label)

    def tick(self) -> None:
        with self._lock:
            self._done += 1
            if self._progress is not None:
                self._progress.update(current=self._done, label=self.label)

    def finalize(self) -> None:
        if self._progress is not None:
            self._progress.finalize(label=self.label)


def generalise_over_time(
    adapter: ClassifierAdapter,
    X_train: np.ndarray,
    y_train: np.ndarray,
    X_test: np.ndarray,
    output_type: OutputType,
    *,
    time1: np.ndarray,
    repeat: Optional[int] = None,
    fold: Optional[int] = None,
    cancel: Optional[CancellationToken] = None,
    on_time_point: Optional[Callable[[], None]] = None,
) -> List[np.ndarray]:
    """Train at every training time point and test at every test time point.

    ``X_train`` is (n_train, n_features, n_time1), ``X_test`` is
    (n_test, n_features, n_time2). Returns one (n_test, n_time2[, C]) array
    per training time point. Each model is applied to all test time points
    with a single predict call on the flattened test batch.
    """

    n_test, n_time2 = X_test.shape[0], X_test.shape[2]
    X_test_flat = flatten_test_batch(X_test)

    cells: List[np.ndarray] = []
    for t1 in range(X_train.shape[2]):
        if cancel is not None:
            cancel.raise_if_cancelled()
        try:
            model = adapter.fit(X_train[:, :, t1], y_train)
        except TrainingError as exc:
            raise exc.with_context(repeat=repeat, fold=fold, train_time=int(time1[t1])) from exc

        outputs = adapter.predict(model, X_test_flat, output_type)
        cells.append(unflatten_predictions(outputs, n_test, n_time2))
        if on_time_point is not None:
            on_time_point()
    return cells


def run_fold_task(
    task: FoldTask,
    *,
    adapter: ClassifierAdapter,
    output_type: OutputType,
    time1: np.ndarray,
    rngm: RngManager,
    oversampler: Optional[Resampler] = None,
    cancel: Optional[CancellationToken] = None,
    ticker: Optional[ProgressTicker] = None,
) -> FoldRunOutputs:
    """Fit/evaluate one (repeat, fold) unit over all training time points."""

    X_train = task.X_train[task.train_idx]
    y_train = task.y[task.train_idx]

    # oversampling touches the training fold only; the test fold stays untouched
    if oversampler is not None and task.oversample_stream is not None:
        try:
            X_train, y_train = oversampler.balance(X_train, y_train, rngm.child_generator(task.oversample_stream))
        except DataShapeError as exc:
            raise TrainingError(
                f"Training fold cannot be oversampled: {exc}", repeat=task.repeat, fold=task.fold
            ) from exc

    cells = generalise_over_time(
        adapter,
        X_train,
        y_train,
        task.X_test[task.test_idx],
        output_type,
        time1=time1,
        repeat=task.repeat,
        fold=task.fold,
        cancel=cancel,
        on_time_point=ticker.tick if ticker is not None else None,
    )
    logger.debug(
        "repeat %d fold %d: %d train / %d test samples",
        task.repeat,
        task.fold,
        y_train.shape[0],
        task.test_idx.shape[0],
    )

    return FoldRunOutputs(
        repeat=task.repeat,
        fold=task.fold,
        cells=cells,
        testlabel=task.y[task.test_idx],
    )
