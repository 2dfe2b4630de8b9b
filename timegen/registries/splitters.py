from __future__ import annotations

from typing import Callable

from timegen.components.interfaces import FoldGenerator
from timegen.registries.base import Registry

FoldGeneratorFactory = Callable[[], FoldGenerator]

_FOLD_GENERATORS: Registry[str, FoldGeneratorFactory] = Registry(_name="fold_generators")

_BUILTINS_LOADED = False


def register_fold_generator(kind: str) -> Callable[[FoldGeneratorFactory], FoldGeneratorFactory]:
    return _FOLD_GENERATORS.register(kind.lower())


def _ensure_builtins() -> None:
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return
    # Import triggers registration side-effects.
    from timegen.registries.builtins import splitters as _  # noqa: F401
    _BUILTINS_LOADED = True


def make_fold_generator(kind: str) -> FoldGenerator:
    _ensure_builtins()
    return _FOLD_GENERATORS.get(str(kind).lower())()


def list_cv_kinds() -> list[str]:
    _ensure_builtins()
    return sorted(_FOLD_GENERATORS.keys())
