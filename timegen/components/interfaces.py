from __future__ import annotations
from typing import Any, Optional, Protocol, Tuple

import numpy as np

from timegen.components.splitters.types import FoldPartition
from timegen.contracts.choices import OutputType


class ModelBuilder(Protocol):
    def make_estimator(self) -> Any:
        """Return a configured, unfitted classifier."""
        ...


class ClassifierAdapter(Protocol):
    def fit(self, X: np.ndarray, y: np.ndarray) -> Any:
        """Fit a fresh model on X (n_samples, n_features) and labels y (n_samples,).

        Raises TrainingError on numerical failure (singular covariance, ...).
        """
        ...

    def predict(self, model: Any, X: np.ndarray, output_type: OutputType) -> np.ndarray:
        """Return predicted labels, decision values or probabilities for each row of X."""
        ...

    def supports(self, output_type: OutputType) -> bool:
        """Whether the configured classifier can produce ``output_type``."""
        ...


class FoldGenerator(Protocol):
    def make_folds(
        self,
        y: np.ndarray,
        *,
        k: int,
        stratify: bool,
        p: float,
        seed: Optional[int] = None,
    ) -> FoldPartition:
        """Partition the samples described by labels ``y`` into train/test sets."""
        ...


class Resampler(Protocol):
    def balance(
        self,
        X: np.ndarray,
        y: np.ndarray,
        rng: np.random.Generator,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Return (X', y') with equal class counts; feature/time axes untouched."""
        ...


class Normaliser(Protocol):
    def normalise(self, X: np.ndarray) -> np.ndarray:
        """Normalise (n_samples, n_features, n_times) per (feature, time) across samples."""
        ...


class PerformanceAggregator(Protocol):
    def aggregate(
        self,
        raw: Any,
        testlabel: Any,
        *,
        cross_validated: bool,
    ) -> Tuple[Any, Optional[np.ndarray]]:
        """Reduce raw classifier outputs + true labels to (perf, perf_std)."""
        ...
