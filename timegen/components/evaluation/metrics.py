from __future__ import annotations

"""Classifier performance metrics, vectorised over the sample axis.

Every metric takes classifier outputs of shape (n_samples, *rest) and true
labels of shape (n_samples,) and reduces axis 0, returning an array of shape
``rest`` (``rest + (2,)`` for the ``dval`` metric). For multiclass
probabilities the trailing class axis of the outputs is consumed when they are
turned into labels.

Labels are integers 1..C. Binary scores (decision values or probabilities)
are oriented towards class 1.
"""

import numpy as np
from scipy import stats

from timegen.contracts.choices import OutputType


def _broadcast_labels(y: np.ndarray, ndim: int) -> np.ndarray:
    y = np.asarray(y, dtype=int).ravel()
    return y.reshape((y.shape[0],) + (1,) * (ndim - 1))


def _safe_divide(num: np.ndarray, den: np.ndarray) -> np.ndarray:
    num = np.asarray(num, dtype=float)
    den = np.asarray(den, dtype=float)
    out = np.zeros(np.broadcast(num, den).shape, dtype=float)
    np.divide(num, den, out=out, where=den > 0)
    return out


def labels_from_output(output: np.ndarray, output_type: OutputType, n_classes: int) -> np.ndarray:
    """Turn raw classifier outputs into predicted class labels."""

    output = np.asarray(output)
    if output_type == "clabel":
        return output.astype(int)
    if output_type == "dval":
        return np.where(output >= 0, 1, 2)
    if output_type == "prob":
        if n_classes == 2:
            return np.where(output >= 0.5, 1, 2)
        return np.argmax(output, axis=-1) + 1
    raise ValueError(f"Unknown output_type {output_type!r}")


def _per_class_counts(pred: np.ndarray, y: np.ndarray, n_classes: int):
    """Per-class (tp, n_pred, n_true), each stacked on a leading class axis."""

    yb = _broadcast_labels(y, pred.ndim)
    tp, n_pred, n_true = [], [], []
    for c in range(1, n_classes + 1):
        is_pred = pred == c
        is_true = yb == c
        tp.append(np.sum(is_pred & is_true, axis=0))
        n_pred.append(np.sum(is_pred, axis=0))
        n_true.append(np.broadcast_to(np.sum(is_true, axis=0), tp[-1].shape))
    return np.stack(tp), np.stack(n_pred), np.stack(n_true)


def _macro_mean(per_class: np.ndarray, present: np.ndarray) -> np.ndarray:
    """Mean over the class axis, restricted to the classes flagged in ``present``."""
    return _safe_divide(np.sum(per_class * present, axis=0), np.sum(present, axis=0))


# -----------------------------
# label-based metrics
# -----------------------------

def accuracy(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    pred = labels_from_output(output, output_type, n_classes)
    return np.mean(pred == _broadcast_labels(y, pred.ndim), axis=0)


def balanced_accuracy(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    pred = labels_from_output(output, output_type, n_classes)
    tp, _, n_true = _per_class_counts(pred, y, n_classes)
    return _macro_mean(_safe_divide(tp, n_true), n_true > 0)


def precision(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    """Macro-averaged precision.

    As in scikit-learn, the average runs over the classes that occur in the
    true or the predicted labels of each cell; a present class that is never
    predicted counts as 0.
    """
    pred = labels_from_output(output, output_type, n_classes)
    tp, n_pred, n_true = _per_class_counts(pred, y, n_classes)
    return _macro_mean(_safe_divide(tp, n_pred), (n_true > 0) | (n_pred > 0))


def recall(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    """Macro-averaged recall over the classes in the true or predicted labels."""
    pred = labels_from_output(output, output_type, n_classes)
    tp, n_pred, n_true = _per_class_counts(pred, y, n_classes)
    return _macro_mean(_safe_divide(tp, n_true), (n_true > 0) | (n_pred > 0))


def f1(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    """Macro-averaged F1 score."""
    pred = labels_from_output(output, output_type, n_classes)
    tp, n_pred, n_true = _per_class_counts(pred, y, n_classes)
    prec = _safe_divide(tp, n_pred)
    rec = _safe_divide(tp, n_true)
    return _macro_mean(_safe_divide(2 * prec * rec, prec + rec), (n_true > 0) | (n_pred > 0))


def kappa(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    """Cohen's kappa."""
    pred = labels_from_output(output, output_type, n_classes)
    tp, n_pred, n_true = _per_class_counts(pred, y, n_classes)
    n = float(pred.shape[0])
    p_observed = np.sum(tp, axis=0) / n
    p_chance = np.sum(n_pred * n_true, axis=0) / (n * n)
    return _safe_divide(p_observed - p_chance, 1.0 - p_chance)


# -----------------------------
# score-based metrics (binary)
# -----------------------------

def auc(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    """Area under the ROC curve via the Mann-Whitney U statistic (ties count 1/2).

    NaN where the test samples do not contain both classes.
    """
    scores = np.asarray(output, dtype=float)
    y = np.asarray(y, dtype=int).ravel()
    n1 = int(np.sum(y == 1))
    n2 = int(np.sum(y == 2))
    if n1 == 0 or n2 == 0:
        return np.full(scores.shape[1:], np.nan)

    ranks = stats.rankdata(scores, axis=0)
    rank_sum = np.sum(ranks[y == 1], axis=0)
    return (rank_sum - n1 * (n1 + 1) / 2.0) / (n1 * n2)


def tval(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    """Welch t statistic between the class 1 and class 2 scores."""
    scores = np.asarray(output, dtype=float)
    y = np.asarray(y, dtype=int).ravel()
    a = scores[y == 1]
    b = scores[y == 2]
    if a.shape[0] < 2 or b.shape[0] < 2:
        return np.full(scores.shape[1:], np.nan)
    return np.asarray(stats.ttest_ind(a, b, axis=0, equal_var=False).statistic, dtype=float)


def dval(output, y, *, output_type: OutputType, n_classes: int) -> np.ndarray:
    """Mean decision value per class; adds a trailing axis (class 1, class 2)."""
    scores = np.asarray(output, dtype=float)
    y = np.asarray(y, dtype=int).ravel()

    def _mean(mask: np.ndarray) -> np.ndarray:
        if not np.any(mask):
            return np.full(scores.shape[1:], np.nan)
        return np.mean(scores[mask], axis=0)

    return np.stack([_mean(y == 1), _mean(y == 2)], axis=-1)
