from __future__ import annotations

"""Progress reporting and cancellation primitives.

The engine must remain runnable without any specific UI. Runs may optionally
accept a progress callback and a cancellation token; both are checked between
training time points, the smallest externally meaningful unit of work.
"""

import threading
from typing import Optional, Protocol

from timegen.core.errors import RunCancelled


class ProgressCallback(Protocol):
    """A minimal progress reporting interface."""

    def init(self, *, total: int, label: Optional[str] = None) -> None:  # pragma: no cover
        ...

    def update(self, *, current: int, label: Optional[str] = None) -> None:  # pragma: no cover
        ...

    def finalize(self, *, label: Optional[str] = None) -> None:  # pragma: no cover
        ...


class CancellationToken:
    """Thread-safe cooperative cancellation flag."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RunCancelled("time generalisation run was cancelled")


__all__ = ["ProgressCallback", "CancellationToken"]
