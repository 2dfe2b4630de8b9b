from __future__ import annotations

"""Literal-based "choice" types used across the config contracts.

Keep this file dependency-free (stdlib + typing only) and import choice sets
from here rather than repeating Literal[...] in multiple modules.
"""

from typing import Literal, TypeAlias


# -----------------------------
# Classifiers
# -----------------------------

ClassifierName: TypeAlias = Literal["lda", "logreg", "svm", "naive_bayes"]

LDASolver: TypeAlias = Literal["svd", "lsqr", "eigen"]
PenaltyName: TypeAlias = Literal["l2", "l1", "none"]
LogRegSolver: TypeAlias = Literal["lbfgs", "liblinear", "saga", "newton-cg", "sag"]
SVMKernel: TypeAlias = Literal["linear", "poly", "rbf", "sigmoid"]


# -----------------------------
# Classifier outputs / metrics
# -----------------------------

OutputType: TypeAlias = Literal["clabel", "dval", "prob"]

MetricName: TypeAlias = Literal[
    "accuracy",
    "balanced_accuracy",
    "precision",
    "recall",
    "f1",
    "kappa",
    "auc",
    "dval",
    "tval",
]

# metrics that default to decision values when no output_type is given
DVAL_METRICS = ("auc", "dval", "tval")


# -----------------------------
# Preprocessing / resampling
# -----------------------------

NormaliseName: TypeAlias = Literal["zscore", "demean", "none"]
BalanceName: TypeAlias = Literal["none", "oversample", "undersample"]


# -----------------------------
# Cross-validation
# -----------------------------

CVName: TypeAlias = Literal["kfold", "leaveout", "holdout", "none"]

ModeName: TypeAlias = Literal["cross_validated", "train_test_split", "no_cross_validation"]


__all__ = [
    "ClassifierName",
    "LDASolver",
    "PenaltyName",
    "LogRegSolver",
    "SVMKernel",
    "OutputType",
    "MetricName",
    "DVAL_METRICS",
    "NormaliseName",
    "BalanceName",
    "CVName",
    "ModeName",
]
