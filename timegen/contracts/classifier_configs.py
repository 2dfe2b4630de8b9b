from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .choices import LDASolver, LogRegSolver, PenaltyName, SVMKernel


# -----------------------------
# Algo-specific classifier configs (unprefixed fields)
# -----------------------------

class LDAConfig(BaseModel):
    algo: Literal["lda"] = "lda"

    solver: LDASolver = "lsqr"
    # "auto" = Ledoit-Wolf shrinkage of the covariance; ignored by the svd solver
    shrinkage: Optional[Union[Literal["auto"], float]] = "auto"
    tol: float = 1e-4


class LogRegConfig(BaseModel):
    algo: Literal["logreg"] = "logreg"

    C: float = 1.0
    penalty: PenaltyName = "l2"
    solver: LogRegSolver = "lbfgs"
    max_iter: int = 1000
    tol: float = 1e-4


class SVMConfig(BaseModel):
    algo: Literal["svm"] = "svm"

    C: float = 1.0
    kernel: SVMKernel = "linear"
    degree: int = 3
    gamma: Union[Literal["scale", "auto"], float] = "scale"
    coef0: float = 0.0
    # needed for output_type="prob"
    probability: bool = False
    tol: float = 1e-3
    max_iter: int = -1


class NaiveBayesConfig(BaseModel):
    algo: Literal["naive_bayes"] = "naive_bayes"

    var_smoothing: float = 1e-9


ClassifierConfig = Annotated[
    Union[LDAConfig, LogRegConfig, SVMConfig, NaiveBayesConfig],
    Field(discriminator="algo"),
]


__all__ = [
    "LDAConfig",
    "LogRegConfig",
    "SVMConfig",
    "NaiveBayesConfig",
    "ClassifierConfig",
]
