from __future__ import annotations

from typing import Callable, Optional, Type

from pydantic import BaseModel

from timegen.components.classifiers.adapters import SklearnClassifierAdapter
from timegen.components.interfaces import ClassifierAdapter, ModelBuilder
from timegen.core.errors import ConfigurationError
from timegen.registries.base import Registry


# Factory takes (cfg, seed) and returns a ModelBuilder.
ModelBuilderFactory = Callable[[BaseModel, Optional[int]], ModelBuilder]


_BUILDERS_BY_CONFIG: Registry[Type[BaseModel], ModelBuilderFactory] = Registry(
    _name="classifier_builders_by_config"
)
_BUILDERS_BY_ALGO: Registry[str, ModelBuilderFactory] = Registry(_name="classifier_builders_by_algo")

_BUILTINS_LOADED = False


def register_classifier(
    config_type: Type[BaseModel],
    *,
    algo: Optional[str] = None,
) -> Callable[[ModelBuilderFactory], ModelBuilderFactory]:
    """Decorator to register a ModelBuilder factory.

    Adding a classifier = define its config, register its builder; the engine
    resolves it through :func:`make_classifier_adapter`.

    Parameters
    ----------
    config_type:
        Pydantic config type (e.g. LDAConfig).
    algo:
        Optional classifier id (e.g. "lda"). If supplied, also registers by id.
    """

    def deco(factory: ModelBuilderFactory) -> ModelBuilderFactory:
        _BUILDERS_BY_CONFIG.register(config_type)(factory)
        if algo is not None:
            _BUILDERS_BY_ALGO.register(str(algo))(factory)
        return factory

    return deco


def _ensure_builtins() -> None:
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return
    # Import triggers registration side-effects.
    from timegen.registries.builtins import classifiers as _  # noqa: F401

    _BUILTINS_LOADED = True


def make_model_builder(cfg: BaseModel, *, seed: Optional[int] = None) -> ModelBuilder:
    """Return a ModelBuilder for the provided classifier config."""

    _ensure_builtins()

    t = type(cfg)
    factory = _BUILDERS_BY_CONFIG.try_get(t)

    # Allow config inheritance via MRO fallback.
    if factory is None:
        for base in t.mro()[1:]:
            factory = _BUILDERS_BY_CONFIG.try_get(base)
            if factory is not None:
                break

    if factory is None:
        algo = getattr(cfg, "algo", None)
        if algo is not None:
            factory = _BUILDERS_BY_ALGO.try_get(str(algo))

    if factory is None:
        raise ConfigurationError(f"Unsupported classifier: {getattr(cfg, 'algo', None)} ({t.__name__})")

    return factory(cfg, seed)


def make_classifier_adapter(
    cfg: BaseModel,
    *,
    seed: Optional[int] = None,
    n_classes: int = 2,
) -> ClassifierAdapter:
    """Return the train/predict adapter for a classifier config."""

    return SklearnClassifierAdapter(builder=make_model_builder(cfg, seed=seed), n_classes=int(n_classes))


def list_classifiers() -> list[str]:
    _ensure_builtins()
    return sorted(_BUILDERS_BY_ALGO.keys())
