"""Built-in classifier registrations."""

from __future__ import annotations

from typing import Optional

from timegen.registries.classifiers import register_classifier

from timegen.contracts.classifier_configs import (
    LDAConfig,
    LogRegConfig,
    NaiveBayesConfig,
    SVMConfig,
)
from timegen.components.classifiers.builders import (
    LDABuilder,
    LogRegBuilder,
    NaiveBayesBuilder,
    SVMBuilder,
)


@register_classifier(LDAConfig, algo="lda")
def _lda(cfg: LDAConfig, seed: Optional[int]):
    return LDABuilder(cfg=cfg, seed=seed)


@register_classifier(LogRegConfig, algo="logreg")
def _logreg(cfg: LogRegConfig, seed: Optional[int]):
    return LogRegBuilder(cfg=cfg, seed=seed)


@register_classifier(SVMConfig, algo="svm")
def _svm(cfg: SVMConfig, seed: Optional[int]):
    return SVMBuilder(cfg=cfg, seed=seed)


@register_classifier(NaiveBayesConfig, algo="naive_bayes")
def _naive_bayes(cfg: NaiveBayesConfig, seed: Optional[int]):
    return NaiveBayesBuilder(cfg=cfg, seed=seed)
