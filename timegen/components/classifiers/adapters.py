from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from timegen.components.interfaces import ModelBuilder
from timegen.contracts.choices import OutputType
from timegen.core.errors import ConfigurationError, TrainingError


@dataclass
class SklearnClassifierAdapter:
    """Train/predict contract over a scikit-learn classifier.

    Output conventions (labels are 1..C):
    - ``clabel``: predicted class label per row
    - ``dval``: binary only; positive values favour class 1
    - ``prob``: P(class 1) per row for binary problems, otherwise an
      (n_rows, n_classes) matrix with column c-1 holding P(class c)
    """

    builder: ModelBuilder
    n_classes: int = 2

    def fit(self, X: np.ndarray, y: np.ndarray) -> Any:
        model = self.builder.make_estimator()
        try:
            model.fit(X, y)
        except (np.linalg.LinAlgError, FloatingPointError, ValueError) as e:
            raise TrainingError(f"{type(model).__name__} failed to fit: {e}") from e
        return model

    def predict(self, model: Any, X: np.ndarray, output_type: OutputType) -> np.ndarray:
        if output_type == "clabel":
            return np.asarray(model.predict(X)).astype(int)
        if output_type == "dval":
            return self._decision_values(model, X)
        if output_type == "prob":
            return self._probabilities(model, X)
        raise ConfigurationError(f"Unknown output_type {output_type!r}")

    def supports(self, output_type: OutputType) -> bool:
        est = self.builder.make_estimator()
        if output_type == "clabel":
            return True
        if output_type == "dval":
            if self.n_classes != 2:
                return False
            return hasattr(est, "decision_function") or hasattr(est, "predict_log_proba")
        if output_type == "prob":
            return hasattr(est, "predict_proba")
        return False

    def _decision_values(self, model: Any, X: np.ndarray) -> np.ndarray:
        classes = np.asarray(model.classes_)
        if classes.shape[0] != 2:
            raise ConfigurationError(
                f"Decision values need a binary problem; the model was fit on classes {classes.tolist()}."
            )
        if hasattr(model, "decision_function"):
            # sklearn orients the score towards classes_[1]
            return -np.asarray(model.decision_function(X), dtype=float).ravel()
        logp = np.asarray(model.predict_log_proba(X), dtype=float)
        return logp[:, 0] - logp[:, 1]

    def _probabilities(self, model: Any, X: np.ndarray) -> np.ndarray:
        proba = np.asarray(model.predict_proba(X), dtype=float)
        classes = np.asarray(model.classes_, dtype=int)

        full = np.zeros((proba.shape[0], self.n_classes), dtype=float)
        full[:, classes - 1] = proba
        if self.n_classes == 2:
            return full[:, 0]
        return full
