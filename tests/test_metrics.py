import numpy as np
import pytest
from sklearn.metrics import cohen_kappa_score, f1_score, precision_score, recall_score, roc_auc_score

from timegen.components.evaluation import metrics as m
from timegen.components.evaluation.aggregate import MetricAggregator, check_metric_output
from timegen.core.errors import ConfigurationError


def test_accuracy_reduces_sample_axis_only():
    y = np.array([1, 1, 2, 2])
    pred = np.array([[1, 2], [1, 2], [2, 2], [1, 1]])
    acc = m.accuracy(pred, y, output_type="clabel", n_classes=2)
    np.testing.assert_allclose(acc, [0.75, 0.25])


def test_dval_sign_maps_to_class_one():
    out = np.array([2.0, -1.0, 0.5, -3.0])
    assert m.labels_from_output(out, "dval", 2).tolist() == [1, 2, 1, 2]


def test_multiclass_prob_argmax():
    out = np.array([[0.1, 0.7, 0.2], [0.6, 0.3, 0.1]])
    assert m.labels_from_output(out, "prob", 3).tolist() == [2, 1]


def test_balanced_accuracy():
    y = np.array([1, 1, 1, 2])
    pred = np.array([1, 1, 1, 1])
    assert m.balanced_accuracy(pred, y, output_type="clabel", n_classes=2) == pytest.approx(0.5)


def test_f1_and_kappa_match_sklearn():
    y = np.array([1, 1, 2, 2, 3, 3, 3, 1])
    pred = np.array([1, 2, 2, 2, 3, 1, 3, 1])
    assert m.f1(pred, y, output_type="clabel", n_classes=3) == pytest.approx(
        f1_score(y, pred, average="macro")
    )
    assert m.kappa(pred, y, output_type="clabel", n_classes=3) == pytest.approx(cohen_kappa_score(y, pred))


def test_macro_scores_average_over_observed_labels():
    # column 0 never sees class 3, column 1 predicts it without any true sample
    y = np.array([1, 1, 2, 2])
    pred = np.array([[1, 1], [1, 3], [1, 2], [2, 2]])
    for metric, reference in ((m.precision, precision_score), (m.recall, recall_score), (m.f1, f1_score)):
        got = metric(pred, y, output_type="clabel", n_classes=3)
        expected = [reference(y, pred[:, j], average="macro", zero_division=0) for j in range(2)]
        np.testing.assert_allclose(got, expected)


def test_auc_matches_sklearn_orientation():
    rng = np.random.default_rng(0)
    y = np.repeat([1, 2], 10)
    scores = rng.normal(size=(20, 3)) + np.where(y == 1, 1.0, 0.0)[:, None]
    got = m.auc(scores, y, output_type="dval", n_classes=2)
    for j in range(3):
        # class 1 is the positive class for our scores
        assert got[j] == pytest.approx(roc_auc_score(y == 1, scores[:, j]))


def test_auc_nan_without_both_classes():
    out = m.auc(np.array([[0.1], [0.4]]), np.array([1, 1]), output_type="dval", n_classes=2)
    assert np.isnan(out).all()


def test_tval_sign():
    y = np.repeat([1, 2], 5)
    scores = np.where(y == 1, 1.0, -1.0) + np.linspace(0, 0.1, 10)
    assert m.tval(scores, y, output_type="dval", n_classes=2) > 0


def test_dval_metric_adds_class_axis():
    y = np.array([1, 2, 1, 2])
    out = np.array([[1.0, 3.0], [-1.0, -3.0], [3.0, 1.0], [-3.0, -1.0]])
    res = m.dval(out, y, output_type="dval", n_classes=2)
    assert res.shape == (2, 2)
    np.testing.assert_allclose(res[:, 0], [2.0, 2.0])
    np.testing.assert_allclose(res[:, 1], [-2.0, -2.0])


def test_metric_output_compatibility():
    check_metric_output("accuracy", "prob", 3)
    check_metric_output(None, "clabel", 4)
    with pytest.raises(ConfigurationError):
        check_metric_output("auc", "clabel", 2)
    with pytest.raises(ConfigurationError):
        check_metric_output("auc", "prob", 3)
    with pytest.raises(ConfigurationError):
        check_metric_output(None, "dval", 3)


def test_aggregator_weights_folds_by_test_size():
    # one repeat, two folds of sizes 3 and 1, one train and one test time point
    raw = np.empty((1, 2, 1), dtype=object)
    raw[0, 0, 0] = np.array([[1], [1], [1]])
    raw[0, 1, 0] = np.array([[2]])
    testlabel = np.empty((1, 2), dtype=object)
    testlabel[0, 0] = np.array([1, 1, 2])
    testlabel[0, 1] = np.array([1])

    agg = MetricAggregator(metric="accuracy", output_type="clabel", n_classes=2)
    perf, std = agg.aggregate(raw, testlabel, cross_validated=True)
    # (2/3 * 3 + 0 * 1) / 4
    np.testing.assert_allclose(perf, [[0.5]])
    np.testing.assert_allclose(std, [[0.0]])


def test_aggregator_std_over_repeats():
    raw = np.empty((2, 1, 1), dtype=object)
    raw[0, 0, 0] = np.array([[1], [1]])
    raw[1, 0, 0] = np.array([[1], [2]])
    testlabel = np.empty((2, 1), dtype=object)
    testlabel[0, 0] = np.array([1, 1])
    testlabel[1, 0] = np.array([1, 1])

    agg = MetricAggregator(metric="accuracy", output_type="clabel", n_classes=2)
    perf, std = agg.aggregate(raw, testlabel, cross_validated=True)
    np.testing.assert_allclose(perf, [[0.75]])
    np.testing.assert_allclose(std, [[np.std([1.0, 0.5], ddof=1)]])


def test_aggregator_dense_input():
    raw = np.array([[[1, 2]], [[2, 2]]])  # (n=2, t1=1, t2=2)
    agg = MetricAggregator(metric="accuracy", output_type="clabel", n_classes=2)
    perf, std = agg.aggregate(raw, np.array([1, 2]), cross_validated=False)
    np.testing.assert_allclose(perf, [[1.0, 0.5]])
    assert np.all(std == 0)
