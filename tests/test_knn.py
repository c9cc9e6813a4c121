import pytest

from scratchml.csvdata import LabelledSample
from scratchml.knn import classify_point, convert_csv_samples

ROWS = [
    ["1", "Male", "19", "15", "39"],
    ["2", "Male", "21", "15", "81"],
    ["3", "Female", "60", "70", "6"],
    ["4", "Female", "62", "72", "77"],
    ["5", "Male", "20", "16", "40"],
]


def test_convert_csv_samples_features_and_labels():
    class_map = {}
    samples = convert_csv_samples(ROWS, 1, class_map)
    assert set(class_map) == {"Male", "Female"}
    assert samples[0].features == [19.0, 15.0]
    assert [s.label for s in samples] == [class_map[r[1]] for r in ROWS]


def test_classify_point_picks_nearest_group():
    class_map = {}
    samples = convert_csv_samples(ROWS, 1, class_map)
    assert classify_point(samples, 2, 3, [20, 15, 94]) == class_map["Male"]
    assert classify_point(samples, 2, 1, [61, 71, 0]) == class_map["Female"]


def test_classify_point_uses_only_sample_dimensions():
    samples = [LabelledSample([0.0], 0), LabelledSample([10.0], 1)]
    assert classify_point(samples, 2, 1, [9.0, -1000.0]) == 1


def test_classify_point_tie_goes_to_lower_class():
    samples = [LabelledSample([0.0], 1), LabelledSample([1.0], 0)]
    assert classify_point(samples, 2, 2, [0.0]) == 0


def test_classify_point_rejects_large_k():
    with pytest.raises(ValueError):
        classify_point([LabelledSample([0.0], 0)], 1, 2, [0.0])


def test_classify_point_rejects_short_point():
    with pytest.raises(ValueError):
        classify_point([LabelledSample([0.0, 1.0], 0)], 1, 1, [0.0])