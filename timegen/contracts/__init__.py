"""Config and result contracts.

Keep module imports explicit in most of the codebase:
    from timegen.contracts.run_config import TimeGenConfig
The names re-exported here are a small set of convenience imports.
"""

from .choices import (
    BalanceName,
    ClassifierName,
    CVName,
    MetricName,
    ModeName,
    NormaliseName,
    OutputType,
)
from .classifier_configs import (
    ClassifierConfig,
    LDAConfig,
    LogRegConfig,
    NaiveBayesConfig,
    SVMConfig,
)
from .results import ResultModel, TimeGenResult
from .run_config import TimeGenConfig

__all__ = [
    "BalanceName",
    "ClassifierName",
    "CVName",
    "MetricName",
    "ModeName",
    "NormaliseName",
    "OutputType",
    "ClassifierConfig",
    "LDAConfig",
    "LogRegConfig",
    "NaiveBayesConfig",
    "SVMConfig",
    "ResultModel",
    "TimeGenResult",
    "TimeGenConfig",
]
