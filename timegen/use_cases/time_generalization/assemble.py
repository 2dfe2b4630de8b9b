from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from timegen.contracts.choices import OutputType
from timegen.contracts.results import TimeGenResult
from timegen.contracts.run_config import TimeGenConfig

from .modes import CrossValidated, EvaluationMode


@dataclass(frozen=True)
class TimeGenOutcome:
    """Performance matrix of a run plus the descriptor of how it was obtained.

    ``perf`` is (n_time1, n_time2) for scalar metrics, with a trailing axis
    of 2 for the per-class ``dval`` metric. With metric ``None`` it holds the
    raw classifier outputs instead and ``perf_std`` is ``None``.
    """

    perf: Any
    perf_std: Optional[np.ndarray]
    testlabel: Any
    result: TimeGenResult


def build_result(
    *,
    cfg: TimeGenConfig,
    mode: EvaluationMode,
    output_type: OutputType,
    n: int,
    n_classes: int,
    n_folds: int,
    time1: np.ndarray,
    time2: np.ndarray,
) -> TimeGenResult:
    """Describe the settings that actually applied to the run."""

    cross_validated = isinstance(mode, CrossValidated)
    cv = mode.cv if cross_validated else "none"
    return TimeGenResult(
        mode=mode.name,
        metric=cfg.metric,
        output_type=output_type,
        classifier=cfg.classifier.algo,
        cv=cv,
        k=int(n_folds),
        p=float(mode.p) if cross_validated and cv == "holdout" else None,
        stratify=bool(mode.stratify) if cross_validated else False,
        repeat=int(mode.repeat) if cross_validated else 1,
        n=int(n),
        nclasses=int(n_classes),
        balance=cfg.balance,
        normalise=cfg.normalise,
        time1=[int(t) for t in time1],
        time2=[int(t) for t in time2],
    )


def assemble_outcome(
    *,
    perf: Any,
    perf_std: Optional[np.ndarray],
    testlabel: Any,
    result: TimeGenResult,
) -> TimeGenOutcome:
    return TimeGenOutcome(perf=perf, perf_std=perf_std, testlabel=testlabel, result=result)
