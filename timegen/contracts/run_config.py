from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from .choices import DVAL_METRICS, BalanceName, CVName, MetricName, NormaliseName, OutputType
from .classifier_configs import ClassifierConfig, LDAConfig


class TimeGenConfig(BaseModel):
    """Settings of one time x time generalisation run.

    Accepts the short form used in scripts, e.g.::

        TimeGenConfig(classifier="logreg", param={"C": 0.1}, metric="auc")

    where ``classifier`` is an algo id and ``param`` holds its hyperparameters.
    """

    model_config = ConfigDict(extra="forbid")

    classifier: ClassifierConfig = Field(default_factory=LDAConfig)

    # "none" returns the raw classifier outputs instead of a performance matrix
    metric: Union[MetricName, None] = "accuracy"
    output_type: Optional[OutputType] = None

    # 0-based indices; None = all time points (of X2 for time2 when given)
    time1: Optional[List[int]] = None
    time2: Optional[List[int]] = None

    normalise: NormaliseName = "zscore"

    # int = resample every class to exactly this many samples
    balance: Union[BalanceName, PositiveInt] = "none"
    replace: bool = True

    cv: CVName = "kfold"
    k: int = Field(default=5, ge=2)
    p: float = Field(default=0.1, gt=0.0, lt=1.0)
    stratify: bool = True
    repeat: int = Field(default=5, ge=1)

    seed: Optional[int] = None
    n_jobs: int = 1
    feedback: bool = True

    @model_validator(mode="before")
    @classmethod
    def _expand_short_form(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        clf = data.get("classifier")
        param = data.pop("param", None)
        if isinstance(clf, str):
            clf = {"algo": clf}
        if param:
            if clf is None:
                clf = {"algo": "lda"}
            if isinstance(clf, BaseModel):
                clf = clf.model_dump()
            clf = {**dict(clf), **dict(param)}
        if clf is not None:
            data["classifier"] = clf

        if data.get("metric") == "none":
            data["metric"] = None
        if data.get("normalise") is None and "normalise" in data:
            data["normalise"] = "none"
        return data

    @model_validator(mode="after")
    def _check_n_jobs(self) -> "TimeGenConfig":
        if self.n_jobs == 0:
            raise ValueError("n_jobs must be a non-zero integer (joblib convention)")
        return self

    # ------------------------------------------------------------------
    # derived settings
    # ------------------------------------------------------------------

    @property
    def metric_requested(self) -> bool:
        return self.metric is not None

    @property
    def balance_target(self) -> Optional[int]:
        return self.balance if isinstance(self.balance, int) else None

    def resolved_output_type(self) -> OutputType:
        """Explicit output_type, else dval for decision-value metrics and clabel otherwise."""
        if self.output_type is not None:
            return self.output_type
        if self.metric in DVAL_METRICS:
            return "dval"
        return "clabel"
