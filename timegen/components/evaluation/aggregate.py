from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from timegen.contracts.choices import OutputType
from timegen.core.errors import ConfigurationError
from timegen.registries.metrics import MetricSpec, get_metric


def check_metric_output(metric: Optional[str], output_type: OutputType, n_classes: int) -> None:
    """Fail fast when ``metric`` cannot be computed from ``output_type`` outputs."""

    if output_type == "dval" and n_classes != 2:
        raise ConfigurationError(
            f"output_type='dval' needs a binary problem; the labels have {n_classes} classes."
        )
    if metric is None:
        return
    metric_spec = get_metric(metric)
    if output_type not in metric_spec.output_types:
        raise ConfigurationError(
            f"Metric {metric!r} cannot be computed from output_type={output_type!r}; "
            f"supported: {sorted(metric_spec.output_types)}."
        )
    if metric_spec.binary_only and n_classes != 2:
        raise ConfigurationError(f"Metric {metric!r} is only defined for two classes; got {n_classes}.")


def _stack_train_times(cells: np.ndarray) -> np.ndarray:
    """(n_time1,) object cells of (n_test, n_time2, ...) -> (n_test, n_time1, n_time2, ...)."""
    return np.stack([np.asarray(c) for c in cells], axis=1)


@dataclass
class MetricAggregator:
    """
    Reduce raw classifier outputs to a performance matrix.

    Cross-validated runs hand over an object container of shape
    (n_repeats, n_folds, n_time1) whose cells are (n_test, n_time2[, C])
    arrays, plus an (n_repeats, n_folds) container of test labels. The
    metric is computed per (repeat, fold), averaged over folds weighted by
    their test-set size, then averaged over repeats; the standard deviation
    across repeats is returned alongside (ddof=1, zero for a single repeat).

    Other runs hand over a dense (n_test, n_time1, n_time2[, C]) array and the
    plain label vector; the metric is computed once and the standard
    deviation is a zero matrix.
    """
    metric: str
    output_type: OutputType
    n_classes: int

    @property
    def metric_spec(self) -> MetricSpec:
        return get_metric(self.metric)

    def _score(self, outputs: np.ndarray, labels: np.ndarray) -> np.ndarray:
        return np.asarray(
            self.metric_spec.fn(outputs, labels, output_type=self.output_type, n_classes=self.n_classes),
            dtype=float,
        )

    def aggregate(
        self,
        raw: Any,
        testlabel: Any,
        *,
        cross_validated: bool,
    ) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        if not cross_validated:
            perf = self._score(np.asarray(raw), np.asarray(testlabel))
            return perf, np.zeros_like(perf)

        n_repeats, n_folds, _ = raw.shape
        per_repeat = []
        for rr in range(n_repeats):
            fold_perf = []
            weights = []
            for kk in range(n_folds):
                labels = np.asarray(testlabel[rr, kk])
                fold_perf.append(self._score(_stack_train_times(raw[rr, kk]), labels))
                weights.append(labels.shape[0])
            per_repeat.append(np.average(np.stack(fold_perf), axis=0, weights=np.asarray(weights, dtype=float)))

        per_repeat_arr = np.stack(per_repeat)
        perf = per_repeat_arr.mean(axis=0)
        if n_repeats > 1:
            perf_std = per_repeat_arr.std(axis=0, ddof=1)
        else:
            perf_std = np.zeros_like(perf)
        return perf, perf_std
