from .assemble import TimeGenOutcome
from .modes import CrossValidated, EvaluationMode, NoCrossValidation, TrainTestSplit, select_mode
from .run import classify_timextime, coerce_config
from .shapes import OutputTensorShape

__all__ = [
    "TimeGenOutcome",
    "EvaluationMode",
    "CrossValidated",
    "TrainTestSplit",
    "NoCrossValidation",
    "select_mode",
    "classify_timextime",
    "coerce_config",
    "OutputTensorShape",
]
