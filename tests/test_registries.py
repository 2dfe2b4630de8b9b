import numpy as np
import pytest

from timegen.contracts import LDAConfig, LogRegConfig, NaiveBayesConfig, SVMConfig
from timegen.core.errors import ConfigurationError
from timegen.registries import (
    get_metric,
    list_classifiers,
    list_cv_kinds,
    list_metrics,
    make_classifier_adapter,
    make_fold_generator,
)
from timegen.registries.base import Registry


def test_builtin_classifiers_are_registered():
    assert set(list_classifiers()) >= {"lda", "logreg", "svm", "naive_bayes"}


def test_builtin_cv_kinds_are_registered():
    assert list_cv_kinds() == ["holdout", "kfold", "leaveout", "none"]


def test_builtin_metrics_are_registered():
    assert set(list_metrics()) >= {
        "accuracy", "balanced_accuracy", "precision", "recall", "f1", "kappa", "auc", "dval", "tval",
    }
    assert get_metric("auc").binary_only
    assert "clabel" not in get_metric("tval").output_types


def test_unknown_keys_raise_configuration_error():
    with pytest.raises(ConfigurationError):
        get_metric("mse")
    with pytest.raises(ConfigurationError):
        make_fold_generator("bootstrap")


def test_registry_rejects_conflicting_registration():
    reg = Registry(_name="demo")

    def a():
        pass

    def b():
        pass

    reg.register("x")(a)
    reg.register("x")(a)  # same object again is fine
    with pytest.raises(ValueError):
        reg.register("x")(b)
    assert reg.try_get("y") is None


def _separable(n=20, seed=0):
    rng = np.random.default_rng(seed)
    y = np.repeat([1, 2], n // 2)
    X = rng.normal(size=(n, 3)) + np.where(y == 1, 2.0, -2.0)[:, None]
    return X, y


@pytest.mark.parametrize("cfg", [LDAConfig(), LogRegConfig(), SVMConfig(), NaiveBayesConfig()])
def test_adapters_predict_labels(cfg):
    X, y = _separable()
    adapter = make_classifier_adapter(cfg, seed=0, n_classes=2)
    model = adapter.fit(X, y)
    pred = adapter.predict(model, X, "clabel")
    assert set(np.unique(pred)) <= {1, 2}
    assert np.mean(pred == y) > 0.9


def test_decision_values_favour_class_one():
    X, y = _separable()
    adapter = make_classifier_adapter(LDAConfig(), n_classes=2)
    dv = adapter.predict(adapter.fit(X, y), X, "dval")
    assert dv.shape == (20,)
    assert np.all(dv[y == 1] > 0)
    assert np.all(dv[y == 2] < 0)


def test_naive_bayes_dval_from_log_probabilities():
    X, y = _separable()
    adapter = make_classifier_adapter(NaiveBayesConfig(), n_classes=2)
    dv = adapter.predict(adapter.fit(X, y), X, "dval")
    assert np.mean((dv > 0) == (y == 1)) > 0.9


def test_binary_prob_is_probability_of_class_one():
    X, y = _separable()
    adapter = make_classifier_adapter(LogRegConfig(), seed=0, n_classes=2)
    p = adapter.predict(adapter.fit(X, y), X, "prob")
    assert p.shape == (20,)
    assert np.all((p >= 0) & (p <= 1))
    assert p[y == 1].mean() > 0.5 > p[y == 2].mean()


def test_supports_output_type():
    assert not make_classifier_adapter(SVMConfig(probability=False)).supports("prob")
    assert make_classifier_adapter(SVMConfig(probability=True)).supports("prob")
    assert not make_classifier_adapter(LDAConfig(), n_classes=3).supports("dval")
