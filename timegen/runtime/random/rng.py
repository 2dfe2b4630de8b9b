from __future__ import annotations
import hashlib
from typing import Optional

import numpy as np
from numpy.random import Generator


class RngManager:
    """
    Single source of truth for randomness in a run.
    Creates named, order-independent child seeds/streams by hashing:
      child_seed(name)       -> stable int seed
      child_generator(name)  -> np.random.Generator seeded from that int

    Stream names used by the engine:
      repeat{r}/balance, repeat{r}/folds, repeat{r}/fold{k}/oversample,
      train/balance, classifier/...
    """
    def __init__(self, seed: Optional[int]):
        self._root = 0 if seed is None else int(seed) & 0xFFFFFFFF

    def _mix(self, name: str) -> int:
        # Stable across runs and Python versions
        h = hashlib.sha256(f"{self._root}:{name}".encode("utf-8")).digest()
        # 32 bits so sklearn accepts it as random_state
        return int.from_bytes(h[:4], "little", signed=False)

    def child_seed(self, name: str) -> int:
        return self._mix(name)

    def child_generator(self, name: str) -> Generator:
        return np.random.default_rng(self._mix(name))


def resolve_seed(seed: Optional[int], *, fallback: int = 0) -> int:
    """Return a deterministic seed.

    The config seed is optional; when absent we still want repeatable
    behaviour, hence a stable fallback.
    """

    return int(seed) if seed is not None else int(fallback)
