import pytest

from scratchml.gini import BestSplit, Node, best_split, gini_impurity, split_targets


def test_gini_empty_is_zero():
    assert gini_impurity([]) == 0.0


def test_gini_pure_outcomes():
    assert gini_impurity([0, 0, 0]) == 0.0
    assert gini_impurity([2, 2]) == 0.0


def test_gini_depends_only_on_proportions():
    assert gini_impurity([0, 1]) == pytest.approx(gini_impurity([0, 0, 1, 1]))


def test_gini_two_classes_value():
    assert gini_impurity([0, 1]) == pytest.approx(0.25)


def test_gini_rejects_negative():
    with pytest.raises(ValueError):
        gini_impurity([-1, 0])


def test_split_targets_partitions_outcomes():
    data = [[0, 1, 0, 2], [1, 0, 1, 0]]
    matching, other = split_targets(data, 0, 0)
    assert matching == [1, 1]
    assert other == [0, 0]
    assert sorted(matching + other) == sorted(data[-1])


def test_best_split_finds_separating_feature():
    data = [
        [0, 1, 0, 1],
        [0, 0, 1, 1],
        [1, 1, 0, 0],
    ]
    split = best_split(data)
    assert split.feature == 1
    assert split.result_gini < gini_impurity(data[-1])
    matching, other = split_targets(data, split.feature, split.category)
    assert len(set(matching)) == 1 and len(set(other)) == 1


def test_best_split_without_improvement_keeps_defaults():
    data = [[0, 0], [0, 0]]
    assert best_split(data) == BestSplit(0.0, 0, 0)


def test_node_holds_data_and_split():
    data = [[0, 1, 0, 1], [0, 0, 1, 1], [1, 1, 0, 0]]
    node = Node(data)
    assert node.training_data is data
    assert node.best_split == best_split(data)
    assert node.left is None and node.right is None