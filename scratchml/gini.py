"""Gini impurity and best single-feature splits over categorical data."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

DataFrame = Sequence[Sequence[int]]


@dataclass
class BestSplit:
    """The split with the lowest weighted impurity: feature column and category."""

    result_gini: float
    feature: int = 0
    category: int = 0


def gini_impurity(outcomes: Sequence[int]) -> float:
    """Return the Gini impurity of class outcomes.

    The class with the largest label does not contribute to the sum.
    """
    if not outcomes:
        return 0.0
    if min(outcomes) < 0:
        raise ValueError("outcomes must not be negative")
    max_outcome = max(outcomes)
    counts = [0] * (max_outcome + 1)
    for outcome in outcomes:
        counts[outcome] += 1
    total = len(outcomes)
    return sum((c / total) * (1 - c / total) for c in counts[:max_outcome])


def split_targets(data: DataFrame, feature: int, category: int) -> list[list[int]]:
    """Split the outcomes (last column) by whether ``feature`` equals ``category``.

    Returns the matching outcomes followed by the others.
    """
    outcomes = data[-1]
    matching: list[int] = []
    other: list[int] = []
    for value, outcome in zip(data[feature], outcomes):
        (matching if value == category else other).append(outcome)
    return [matching, other]


def best_split(data: DataFrame) -> BestSplit:
    """Find the feature and category whose split most lowers the impurity.

    ``data`` holds one column per feature followed by the outcome column. When
    no split improves on the unsplit impurity, feature 0 and category 0 are kept.
    """
    if not data:
        raise ValueError("data must hold at least the outcome column")
    outcomes = data[-1]
    best = BestSplit(gini_impurity(outcomes))
    total = len(outcomes)
    for feature, column in enumerate(data[:-1]):
        if not column:
            continue
        for category in range(max(column) + 1):
            matching, other = split_targets(data, feature, category)
            weighted = (
                gini_impurity(matching) * len(matching) / total
                + gini_impurity(other) * len(other) / total
            )
            if weighted < best.result_gini:
                best = BestSplit(weighted, feature, category)
    return best


@dataclass(init=False)
class Node:
    """A decision tree node holding its training data and best split."""

    training_data: DataFrame
    best_split: BestSplit
    left: Node | None = field(default=None)
    right: Node | None = field(default=None)

    def __init__(self, data: DataFrame) -> None:
        self.left = None
        self.right = None
        self.training_data = data
        self.best_split = best_split(data)