from __future__ import annotations

"""Evaluation modes.

The mode is selected once at entry and carries only the settings it needs:

- :class:`CrossValidated`: one dataset, repeated cross-validation.
- :class:`TrainTestSplit`: train on X, test on an independent X2 (no CV).
- :class:`NoCrossValidation`: train and test on the same dataset
  (prone to overfitting).
"""

from dataclasses import dataclass
from typing import Union

from timegen.contracts.choices import CVName, ModeName
from timegen.contracts.run_config import TimeGenConfig


@dataclass(frozen=True)
class CrossValidated:
    cv: CVName
    k: int
    p: float
    stratify: bool
    repeat: int

    name: ModeName = "cross_validated"


@dataclass(frozen=True)
class TrainTestSplit:
    name: ModeName = "train_test_split"


@dataclass(frozen=True)
class NoCrossValidation:
    name: ModeName = "no_cross_validation"


EvaluationMode = Union[CrossValidated, TrainTestSplit, NoCrossValidation]


def select_mode(cfg: TimeGenConfig, *, has_second_dataset: bool) -> EvaluationMode:
    """Pick the evaluation mode; a second dataset always disables cross-validation."""

    if has_second_dataset:
        return TrainTestSplit()
    if cfg.cv == "none":
        return NoCrossValidation()
    return CrossValidated(
        cv=cfg.cv,
        k=cfg.k,
        p=cfg.p,
        stratify=cfg.stratify,
        repeat=cfg.repeat,
    )
