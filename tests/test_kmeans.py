import random

import pytest

from scratchml.kmeans import Point, k_means, read_points, write_clusters_csv


class _SequenceRng:
    def __init__(self, picks):
        self._picks = iter(picks)

    def randrange(self, n):
        return next(self._picks)


def _groups():
    return [
        Point(["0", "0"]),
        Point(["0", "1"]),
        Point(["10", "10"]),
        Point(["10", "11"]),
    ]


def test_distance():
    assert Point(["0.0", "0.0"]).distance(["3.0", "4.0"]) == pytest.approx(5.0)


def test_distance_is_symmetric():
    a, b = Point(["1", "7"]), Point(["-2", "3.5"])
    assert a.distance(b.features) == pytest.approx(b.distance(a.features))


def test_distance_rejects_short_features():
    with pytest.raises(ValueError):
        Point(["1", "2"]).distance(["1"])


def test_read_points(tmp_path):
    path = tmp_path / "mall.csv"
    path.write_text("id,g,age,income,score\n1,Male,19,15,39\n", encoding="utf-8")
    points = read_points(path)
    assert [p.features for p in points] == [["19", "15"]]
    assert points[0].cluster == -1


def test_read_points_missing_file(tmp_path):
    assert read_points(tmp_path / "none.csv") == []


def test_k_means_separates_groups():
    points = _groups()
    k_means(points, 5, 2, _SequenceRng([0, 2]))
    assert points[0].cluster == points[1].cluster == 0
    assert points[2].cluster == points[3].cluster == 1


def test_k_means_single_cluster_centroid_is_mean():
    points = _groups()
    centroids = k_means(points, 3, 1, random.Random(1))
    assert all(p.cluster == 0 for p in points)
    assert [float(v) for v in centroids[0].features] == pytest.approx([5.0, 5.5])


def test_k_means_clusters_within_range():
    points = _groups()
    k_means(points, 4, 3, random.Random(7))
    assert all(0 <= p.cluster < 3 for p in points)


def test_k_means_rejects_empty_input():
    with pytest.raises(ValueError):
        k_means([], 1, 1)


def test_write_clusters_csv(tmp_path):
    points = _groups()
    k_means(points, 2, 2, _SequenceRng([0, 2]))
    path = tmp_path / "results.csv"
    write_clusters_csv(points, path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Feat_1,Feat_2,Cluster"
    assert lines[1] == f"0,0,{points[0].cluster}"
    assert len(lines) == len(points) + 1