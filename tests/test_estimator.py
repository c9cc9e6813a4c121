import math

import pytest

from scratchml.estimator import (
    EvaluationMetrics,
    confusion_matrix,
    format_report,
    most_probable_states,
    state_metrics,
)
from scratchml.hmm_algorithms import forward_backward, viterbi
from scratchml.hmm_model import Observation, ObservationData, read_model, read_observations

FORCED = """4
<start> a b <eos>
2
4
<start> a 1.0
a b 1.0
b b 0.5
b <eos> 0.5
2
a x 1.0
b y 1.0
"""


@pytest.fixture
def model():
    return read_model(FORCED)


def test_most_probable_states_uses_product():
    probs = [[(0.1, 0.2), (0.5, 0.5)], [(1.0, 1.0), (0.5, 0.5)]]
    assert most_probable_states(probs) == [1, 0]


def test_most_probable_states_prefers_first_on_tie():
    assert most_probable_states([[(0.5, 0.5), (0.5, 0.5)]]) == [0]


def test_confusion_matrix_counts(model):
    data = ObservationData(
        [Observation(0, 1, 0), Observation(1, 2, 1), Observation(2, 2, 1)]
    )
    matrix = confusion_matrix(data, [1, 2, 1], model)
    assert len(matrix) == model.n_states
    assert all(len(row) == model.n_states for row in matrix)
    assert matrix[1][1] == 1
    assert matrix[2][2] == 1
    assert matrix[1][2] == 1
    assert sum(map(sum, matrix)) == 3


def test_confusion_matrix_rejects_extra_predictions(model):
    data = ObservationData([Observation(0, 1, 0)])
    with pytest.raises(ValueError):
        confusion_matrix(data, [1, 2], model)


def test_metrics_are_consistent_with_matrix():
    matrix = [[2, 1, 0], [0, 3, 1], [1, 0, 4]]
    total = sum(map(sum, matrix))
    for state, m in enumerate(state_metrics(matrix)):
        assert m.true_positives == matrix[state][state]
        assert m.true_positives + m.false_positives == sum(matrix[state])
        assert m.true_positives + m.false_negatives == sum(row[state] for row in matrix)
        assert (
            m.true_positives + m.false_positives + m.true_negatives + m.false_negatives
            == total
        )
        assert 0.0 <= m.f1_score <= 1.0


def test_perfect_predictions_score_one():
    for m in state_metrics([[3, 0], [0, 5]]):
        assert (m.precision, m.recall, m.f1_score) == (1.0, 1.0, 1.0)


def test_never_predicted_state_scores_zero():
    first = state_metrics([[0, 0], [1, 1]])[0]
    assert first.precision == 0.0
    assert first.recall == 0.0
    assert first.f1_score == 0.0


def test_absent_state_has_undefined_f1():
    first = state_metrics([[0, 0], [0, 2]])[0]
    assert first.true_positives == 0
    assert first.false_positives == 0
    assert first.false_negatives == 0
    assert first.true_negatives == 2
    assert math.isnan(first.f1_score) is True


def test_format_report():
    metrics = EvaluationMetrics(2, 1, 3, 0, 0.5, 1.0, 0.75)
    assert format_report("a", metrics) == (
        "Estimations Report for State: a\n"
        "\tTrue Class/PredictedClass\t\n"
        "True Positives= 2\tFalse Positives= 1\n"
        "True Negatives= 3\tFalse Negatives= 0\n"
        "Precision= 0.5\n"
        "Recall= 1\n"
        "F1-Score= 0.75\n"
        "\n"
    )


def test_viterbi_hits_match_true_positives(model):
    data = read_observations(model, "3\n0 a x\n1 b y\n2 b y\n")
    path = viterbi(model, data)
    metrics = state_metrics(confusion_matrix(data, path, model))
    hits = sum(p == obs.state for p, obs in zip(path, data))
    assert sum(m.true_positives for m in metrics) == hits


def test_forward_backward_states_recover_truth(model):
    data = read_observations(model, "3\n0 a x\n1 b y\n2 b y\n")
    states = most_probable_states(forward_backward(model, data))
    assert states == [obs.state for obs in data]