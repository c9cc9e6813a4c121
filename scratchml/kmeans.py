"""k-means clustering of points read from CSV files."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from scratchml.csvdata import split_line


@dataclass
class Point:
    """A point with text features, its cluster and its distance to that cluster."""

    features: list[str] = field(default_factory=list)
    cluster: int = -1
    min_dist: float = math.inf

    def distance(self, other_features: Sequence[str]) -> float:
        """Euclidean distance over this point's features."""
        if len(other_features) < len(self.features):
            raise ValueError("the other point has fewer features")
        return math.sqrt(
            sum(
                (float(a) - float(b)) ** 2
                for a, b in zip(self.features, other_features)
            )
        )


def read_points(path) -> list[Point]:
    """Read points from fields 2 and 3 of every line after the header.

    A file that does not exist yields an empty list.
    """
    try:
        handle = open(path, encoding="utf-8")
    except FileNotFoundError:
        return []
    points = []
    with handle:
        next(handle, None)
        for raw in handle:
            values = split_line(raw.rstrip("\n"))
            if len(values) < 4:
                raise ValueError(f"expected at least 4 fields, got {len(values)}")
            points.append(Point(values[2:4]))
    return points


def k_means(
    points: list[Point], epochs: int, k: int, rng: random.Random | None = None
) -> list[Point]:
    """Cluster ``points`` in place and return the final centroids.

    Initial centroids are ``k`` points drawn with replacement. Centroid
    coordinates are kept as text with six decimals; an empty cluster gets
    ``nan`` coordinates.
    """
    if not points:
        raise ValueError("no points to cluster")
    if k < 1:
        raise ValueError("k must be at least 1")
    rng = rng or random.Random()
    n_features = len(points[0].features)
    centroids = [
        Point(list(points[rng.randrange(len(points))].features)) for _ in range(k)
    ]

    for _ in range(epochs):
        for cluster_id, centroid in enumerate(centroids):
            for point in points:
                dist = centroid.distance(point.features)
                if dist < point.min_dist:
                    point.min_dist = dist
                    point.cluster = cluster_id

        counts = [0] * k
        sums = [[0.0] * n_features for _ in range(k)]
        for point in points:
            if 0 <= point.cluster < k:
                counts[point.cluster] += 1
                for index in range(n_features):
                    sums[point.cluster][index] += float(point.features[index])
            point.min_dist = math.inf

        for cluster_id, centroid in enumerate(centroids):
            count = counts[cluster_id]
            centroid.features = [
                f"{(total / count) if count else math.nan:.6f}"
                for total in sums[cluster_id]
            ]
    return centroids


def write_clusters_csv(points: Sequence[Point], path) -> None:
    """Write the features and cluster of every point under a ``Feat_n,...,Cluster`` header."""
    if not points:
        raise ValueError("no points to write")
    n_features = len(points[0].features)
    header = "".join(f"Feat_{k + 1}," for k in range(n_features)) + "Cluster"
    lines = [header]
    for point in points:
        lines.append(
            "".join(f"{value}," for value in point.features[:n_features])
            + str(point.cluster)
        )
    Path(path).write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")