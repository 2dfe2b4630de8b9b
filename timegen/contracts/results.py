from __future__ import annotations

"""Result contracts.

The descriptor is JSON-friendly (lists, scalars) and strict (extra fields
forbidden) so downstream consumers such as statistics or plotting code can
rely on its shape. Array payloads travel next to it in
:class:`timegen.use_cases.time_generalization.assemble.TimeGenOutcome`.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .choices import CVName, ModeName, NormaliseName, OutputType


class ResultModel(BaseModel):
    """Base class for result contracts (strict by default)."""

    model_config = ConfigDict(extra="forbid")


class TimeGenResult(ResultModel):
    """Describes how a performance matrix was obtained."""

    function: str = "classify_timextime"
    mode: ModeName
    metric: Optional[str]
    output_type: OutputType
    classifier: str

    cv: CVName
    # effective number of folds per repeat (n for leaveout, 1 for holdout/none)
    k: int
    p: Optional[float] = None
    stratify: bool
    repeat: int

    # number of test samples (samples of X2 when a second dataset was given)
    n: int
    nclasses: int

    balance: Union[str, int]
    normalise: NormaliseName
    time1: List[int]
    time2: List[int]
