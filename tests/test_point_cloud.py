import json

import pytest

from conftest import run
from oos_intent.errors import ModelLoadingError, UntrainedClassifierError
from oos_intent.point_cloud import PointCloudClassifier, to_numeric
from oos_intent.svm import Point, SklearnSVMOptimizer, SVMOptions

SEPARABLE = [
    Point("a", [1.0, 0.0]), Point("a", [0.9, 0.1]), Point("a", [1.0, 0.2]),
    Point("b", [0.0, 1.0]), Point("b", [0.1, 0.9]), Point("b", [0.2, 1.0]),
]


@pytest.fixture
def clf():
    return PointCloudClassifier(SklearnSVMOptimizer(), name="Test Classifier")


def test_single_label_predicts_it_with_full_confidence(clf):
    progress = []
    blob = run(clf.train([Point("a", [1, 2]), Point("a", [2, 3])], SVMOptions(), progress=progress.append))
    assert blob is None
    assert progress == [1.0]
    for features in ([0, 0], [100, -3]):
        assert clf.predict(features) == [("a", 1.0)]


def test_no_points_and_no_labels_predicts_nothing(clf):
    run(clf.train([], SVMOptions(), labels=[]))
    assert clf.predict([1.0]) == []


def test_no_points_falls_back_to_first_label(clf):
    run(clf.train([], SVMOptions(), labels=["x", "y"]))
    assert clf.predict([1.0]) == [("x", 1.0)]


def test_single_trainable_label_comes_first(clf):
    run(clf.train([Point("y", [1.0])], SVMOptions(), labels=["x", "y"]))
    assert clf.predict([0.0]) == [("y", 1.0)]
    assert clf.model.labels == ["y", "x"]


def test_non_numeric_points_are_dropped(clf):
    points = [Point("a", [1.0, 2.0]), Point("b", [float("nan"), 1.0]), Point("c", ["x", 1.0])]
    assert run(clf.train(points, SVMOptions())) is None
    assert clf.predict([0.0, 0.0]) == [("a", 1.0)]


def test_to_numeric():
    assert to_numeric([1, 2]).tolist() == [1.0, 2.0]
    assert to_numeric([1, float("nan")]) is None
    assert to_numeric(["oops"]) is None
    assert to_numeric([[1, 2]]) is None


def test_train_and_predict_two_classes(clf):
    progress = []
    blob = run(clf.train(SEPARABLE, SVMOptions(c=1.0, seed=42), progress=progress.append))
    assert isinstance(blob, str)
    assert progress[-1] == 1.0

    preds = clf.predict([1.0, 0.0])
    assert preds[0].label == "a"
    assert {p.label for p in preds} == {"a", "b"}
    assert all(p.confidence >= 0 for p in preds)
    assert sum(p.confidence for p in preds) == pytest.approx(1.0)
    assert clf.predict([0.0, 1.0])[0].label == "b"


def test_serialize_load_round_trip(clf):
    run(clf.train(SEPARABLE, SVMOptions(seed=42)))
    loaded = PointCloudClassifier(SklearnSVMOptimizer())
    loaded.load(clf.serialize())
    for probe in ([1.0, 0.0], [0.5, 0.5], [0.0, 1.0]):
        assert loaded.predict(probe) == clf.predict(probe)


def test_degenerate_model_omits_svm_blob(clf):
    run(clf.train([Point("a", [1.0])], SVMOptions()))
    raw = json.loads(clf.serialize())
    assert "svm_model" not in raw
    assert raw["labels"] == ["a"]


def test_untrained_use_fails(clf):
    with pytest.raises(UntrainedClassifierError):
        clf.predict([1.0])
    with pytest.raises(UntrainedClassifierError):
        clf.serialize()


@pytest.mark.parametrize("serialized", [
    "not json",
    '{"labels": "a"}',
    '{"schema_version": 2, "labels": []}',
    '{"labels": [], "unexpected": 1}',
])
def test_load_malformed_model(clf, serialized):
    with pytest.raises(ModelLoadingError) as excinfo:
        clf.load(serialized)
    assert excinfo.value.component == "Test Classifier"
    assert "Test Classifier" in str(excinfo.value)


def test_load_corrupted_blob(clf):
    with pytest.raises(ModelLoadingError):
        clf.load('{"svm_model": "!!! not base64 !!!", "labels": ["a", "b"]}')


def test_load_error_reports_first_violation(clf):
    with pytest.raises(ModelLoadingError) as excinfo:
        clf.load('{"schema_version": 2, "labels": []}')
    assert "schema_version" in str(excinfo.value)
