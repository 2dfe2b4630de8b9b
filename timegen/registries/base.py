from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Iterable, Optional, TypeVar

from timegen.core.errors import ConfigurationError

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class Registry(Generic[K, V]):
    """Small registry mapping identifiers to implementations.

    Typical usage:
        CLASSIFIERS = Registry[str, AdapterFactory](_name="classifiers")

        @CLASSIFIERS.register("lda")
        def _lda(cfg, seed):
            ...

        factory = CLASSIFIERS.get("lda")

    Looking up an unknown key is a configuration problem, so ``get`` raises
    :class:`~timegen.core.errors.ConfigurationError` listing the known keys.
    """

    _items: Dict[K, V] = field(default_factory=dict)
    _name: str = "registry"

    def register(self, key: K) -> Callable[[V], V]:
        def deco(value: V) -> V:
            if key in self._items and self._items[key] is not value:
                raise ValueError(f"{self._name}: key {key!r} is already registered")
            self._items[key] = value
            return value

        return deco

    def get(self, key: K) -> V:
        if key not in self._items:
            known = ", ".join(sorted(map(str, self._items)))
            raise ConfigurationError(f"{self._name}: unknown key {key!r} (known: {known})")
        return self._items[key]

    def try_get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._items.get(key, default)

    def keys(self) -> Iterable[K]:
        return self._items.keys()

    def __contains__(self, key: K) -> bool:  # pragma: no cover
        return key in self._items
