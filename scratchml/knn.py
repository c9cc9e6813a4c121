"""k-nearest-neighbour classification."""

from __future__ import annotations

import math
from collections.abc import MutableMapping, Sequence

from scratchml.csvdata import LabelledSample, slice_floats


def convert_csv_samples(
    rows: Sequence[Sequence[str]], y_index: int, class_map: MutableMapping[str, int]
) -> list[LabelledSample]:
    """Build samples from fields 2 and 3 of every row, labelled by column ``y_index``.

    New class names are added to ``class_map`` in order of first appearance.
    """
    for row in rows:
        class_map.setdefault(row[y_index], len(class_map))
    return [
        LabelledSample(slice_floats(row, 2, 4), class_map[row[y_index]]) for row in rows
    ]


def _distance(sample: LabelledSample, features: Sequence[float]) -> float:
    if len(features) < len(sample.features):
        raise ValueError("the point has fewer features than the samples")
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(sample.features, features)))


def classify_point(
    samples: Sequence[LabelledSample], n_classes: int, k: int, features: Sequence[float]
) -> int:
    """Return the most frequent class among the ``k`` samples nearest to ``features``.

    Distances use as many features as the samples have. Ties go to the lower class.
    """
    if not 0 < k <= len(samples):
        raise ValueError(f"k must be between 1 and {len(samples)}")
    if n_classes < 1:
        raise ValueError("there must be at least one class")
    nearest = sorted(samples, key=lambda sample: _distance(sample, features))[:k]
    counts = [0] * n_classes
    for sample in nearest:
        if 0 <= sample.label < n_classes:
            counts[sample.label] += 1
    return max(range(n_classes), key=lambda cls: (counts[cls], -cls))