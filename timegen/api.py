"""Public timegen API.

This module is the **stable public surface** of the package:

    from timegen.api import classify_timextime, TimeGenConfig

Scripts may depend on this module. The implementation lives under
:mod:`timegen.use_cases.time_generalization`.
"""

from __future__ import annotations

from timegen.use_cases.time_generalization import (
    EvaluationMode,
    TimeGenOutcome,
    classify_timextime,
    select_mode,
)

# Non-use-case helpers that are still part of the stable public surface.
from timegen.contracts.run_config import TimeGenConfig
from timegen.contracts.results import TimeGenResult
from timegen.core.errors import ConfigurationError, DataShapeError, RunCancelled, TrainingError
from timegen.core.progress import CancellationToken, ProgressCallback
from timegen.extras.simulation import SimulatedData, simulate_gaussian_data, simulate_time_resolved_data
from timegen.registries import list_classifiers, list_cv_kinds, list_metrics

__all__ = [
    "classify_timextime",
    "select_mode",
    "EvaluationMode",
    "TimeGenOutcome",
    "TimeGenConfig",
    "TimeGenResult",
    "ConfigurationError",
    "DataShapeError",
    "TrainingError",
    "RunCancelled",
    "CancellationToken",
    "ProgressCallback",
    "SimulatedData",
    "simulate_gaussian_data",
    "simulate_time_resolved_data",
    "list_classifiers",
    "list_cv_kinds",
    "list_metrics",
]
