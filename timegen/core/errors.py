from __future__ import annotations

"""Error taxonomy for time-generalisation runs.

All failures are fatal to the current invocation; nothing in the engine
retries. Callers can catch the base classes (``ValueError`` /
``RuntimeError``) or the specific types below.
"""

from typing import Optional


class ConfigurationError(ValueError):
    """Invalid or contradictory settings, detected before any fold is generated."""


class DataShapeError(ValueError):
    """Data and labels do not fit together (length mismatch, too few samples per class, ...)."""


class TrainingError(RuntimeError):
    """Numerical failure inside a classifier fit.

    ``repeat``, ``fold`` and ``train_time`` locate the failing unit of work so
    the run can be reproduced. They are ``None`` where the mode has no such
    axis (e.g. no cross-validation) or before the engine attached them.
    """

    def __init__(
        self,
        message: str,
        *,
        repeat: Optional[int] = None,
        fold: Optional[int] = None,
        train_time: Optional[int] = None,
    ) -> None:
        self.message = message
        self.repeat = repeat
        self.fold = fold
        self.train_time = train_time
        super().__init__(self._render())

    def _render(self) -> str:
        where = [
            f"{name}={value}"
            for name, value in (
                ("repeat", self.repeat),
                ("fold", self.fold),
                ("train_time", self.train_time),
            )
            if value is not None
        ]
        if not where:
            return self.message
        return f"{self.message} [{', '.join(where)}]"

    def with_context(
        self,
        *,
        repeat: Optional[int] = None,
        fold: Optional[int] = None,
        train_time: Optional[int] = None,
    ) -> "TrainingError":
        """Return a copy carrying the location of the failing fit."""
        return TrainingError(
            self.message,
            repeat=repeat if repeat is not None else self.repeat,
            fold=fold if fold is not None else self.fold,
            train_time=train_time if train_time is not None else self.train_time,
        )


class RunCancelled(RuntimeError):
    """Raised when a run was cancelled through its cancellation token."""


__all__ = ["ConfigurationError", "DataShapeError", "TrainingError", "RunCancelled"]
