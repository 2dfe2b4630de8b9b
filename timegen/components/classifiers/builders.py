from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sklearn.discriminant_analysis import LinearDiscriminantAnalysis
from sklearn.linear_model import LogisticRegression
from sklearn.naive_bayes import GaussianNB
from sklearn.svm import SVC

from timegen.contracts.classifier_configs import (
    LDAConfig,
    LogRegConfig,
    NaiveBayesConfig,
    SVMConfig,
)


def _filtered_kwargs(estimator_cls: type, cfg_obj: Any, *, exclude: set[str] = {"algo"}) -> Dict[str, Any]:
    """Dump cfg to dict, drop None, remove 'algo', and keep only kwargs accepted by estimator."""
    raw = cfg_obj.model_dump(exclude=exclude, exclude_none=True)
    sig = inspect.signature(estimator_cls)
    allowed = set(sig.parameters.keys())
    return {k: v for k, v in raw.items() if k in allowed}


def _maybe_set_random_state(estimator_cls: type, kw: Dict[str, Any], seed: Optional[int]) -> None:
    if seed is None:
        return
    sig = inspect.signature(estimator_cls)
    if "random_state" in sig.parameters and "random_state" not in kw:
        kw["random_state"] = int(seed)


@dataclass
class LDABuilder:
    cfg: LDAConfig
    seed: Optional[int] = None

    def make_estimator(self) -> Any:
        kw = _filtered_kwargs(LinearDiscriminantAnalysis, self.cfg)
        # sklearn only shrinks the covariance with the lsqr/eigen solvers
        if self.cfg.solver == "svd":
            kw.pop("shrinkage", None)
        return LinearDiscriminantAnalysis(**kw)


@dataclass
class LogRegBuilder:
    cfg: LogRegConfig
    seed: Optional[int] = None

    def make_estimator(self) -> Any:
        kw = _filtered_kwargs(LogisticRegression, self.cfg)
        _maybe_set_random_state(LogisticRegression, kw, self.seed)

        penalty = self.cfg.penalty
        solver = self.cfg.solver
        sk_penalty: Optional[str] = None if penalty == "none" else penalty

        if sk_penalty is None:
            if solver == "liblinear":
                solver = "lbfgs"
        elif sk_penalty == "l1" and solver not in ("liblinear", "saga"):
            solver = "saga"

        kw.update({"penalty": sk_penalty, "solver": solver})
        return LogisticRegression(**kw)


@dataclass
class SVMBuilder:
    cfg: SVMConfig
    seed: Optional[int] = None

    def make_estimator(self) -> Any:
        kw = _filtered_kwargs(SVC, self.cfg)
        _maybe_set_random_state(SVC, kw, self.seed)
        return SVC(**kw)


@dataclass
class NaiveBayesBuilder:
    cfg: NaiveBayesConfig
    seed: Optional[int] = None

    def make_estimator(self) -> Any:
        return GaussianNB(**_filtered_kwargs(GaussianNB, self.cfg))
