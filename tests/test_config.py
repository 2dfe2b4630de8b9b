import pytest
from pydantic import ValidationError

from timegen.contracts import LDAConfig, LogRegConfig, SVMConfig, TimeGenConfig
from timegen.core.errors import ConfigurationError
from timegen.use_cases.time_generalization import coerce_config


def test_defaults():
    cfg = TimeGenConfig()
    assert isinstance(cfg.classifier, LDAConfig)
    assert cfg.metric == "accuracy"
    assert cfg.normalise == "zscore"
    assert cfg.balance == "none"
    assert (cfg.cv, cfg.k, cfg.repeat, cfg.stratify) == ("kfold", 5, 5, True)
    assert cfg.resolved_output_type() == "clabel"


def test_short_form_classifier_and_param():
    cfg = TimeGenConfig(classifier="logreg", param={"C": 0.1, "penalty": "l1"})
    assert isinstance(cfg.classifier, LogRegConfig)
    assert cfg.classifier.C == pytest.approx(0.1)
    assert cfg.classifier.penalty == "l1"


def test_param_without_classifier_defaults_to_lda():
    cfg = TimeGenConfig(param={"solver": "svd"})
    assert isinstance(cfg.classifier, LDAConfig)
    assert cfg.classifier.solver == "svd"


def test_metric_none_requests_raw_outputs():
    cfg = TimeGenConfig(metric="none")
    assert cfg.metric is None
    assert not cfg.metric_requested


@pytest.mark.parametrize("metric,expected", [("auc", "dval"), ("tval", "dval"), ("f1", "clabel")])
def test_output_type_follows_metric(metric, expected):
    assert TimeGenConfig(metric=metric).resolved_output_type() == expected


def test_explicit_output_type_wins():
    cfg = TimeGenConfig(classifier="svm", param={"probability": True}, metric="auc", output_type="prob")
    assert isinstance(cfg.classifier, SVMConfig)
    assert cfg.resolved_output_type() == "prob"


def test_balance_target():
    assert TimeGenConfig(balance=12).balance_target == 12
    assert TimeGenConfig(balance="oversample").balance_target is None


def test_normalise_none_alias():
    assert TimeGenConfig(normalise=None).normalise == "none"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"unknown": 1},
        {"classifier": "tree"},
        {"k": 1},
        {"p": 1.5},
        {"n_jobs": 0},
        {"balance": -3},
        {"metric": "mse"},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        TimeGenConfig(**kwargs)
    with pytest.raises(ConfigurationError):
        coerce_config(kwargs)


def test_coerce_config_accepts_model_dict_and_none():
    cfg = TimeGenConfig(repeat=2)
    assert coerce_config(cfg) is cfg
    assert coerce_config({"repeat": 3}).repeat == 3
    assert coerce_config(None).repeat == 5
