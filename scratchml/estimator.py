"""Confusion matrices and per-state prediction metrics."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from scratchml.hmm_model import HiddenMarkovModel, ObservationData


@dataclass
class EvaluationMetrics:
    """Prediction quality of one state."""

    true_positives: int = 0
    false_positives: int = 0
    true_negatives: int = 0
    false_negatives: int = 0
    precision: float = 0.0
    recall: float = 0.0
    f1_score: float = 0.0


def most_probable_states(
    forward_backward_probabilities: Sequence[Sequence[tuple[float, float]]],
) -> list[int]:
    """Return, per step, the state with the largest forward times backward product."""
    return [
        max(enumerate(step), key=lambda item: item[1][0] * item[1][1])[0] if step else 0
        for step in forward_backward_probabilities
    ]


def confusion_matrix(
    data: ObservationData, predicted_states: Sequence[int], model: HiddenMarkovModel
) -> list[list[int]]:
    """Count predictions: element ``[predicted][real]`` is how often they coincide."""
    if len(predicted_states) > len(data.observations):
        raise ValueError("more predictions than observations")
    n_states = model.n_states
    matrix = [[0] * n_states for _ in range(n_states)]
    for predicted, observation in zip(predicted_states, data.observations):
        matrix[predicted][observation.state] += 1
    return matrix


def state_metrics(matrix: Sequence[Sequence[int]]) -> list[EvaluationMetrics]:
    """Derive per-state counts, precision, recall and F1 score from a confusion matrix."""
    row_sums = [sum(row) for row in matrix]
    col_sums = [sum(col) for col in zip(*matrix)]
    total = sum(row_sums)

    metrics: list[EvaluationMetrics] = []
    for state, (row, row_sum, col_sum) in enumerate(zip(matrix, row_sums, col_sums)):
        hits = row[state]
        result = EvaluationMetrics(
            true_positives=hits,
            false_positives=row_sum - hits,
            true_negatives=total - row_sum - col_sum + hits,
            false_negatives=col_sum - hits,
        )
        if row_sum:
            result.precision = hits / row_sum
        if col_sum:
            result.recall = hits / col_sum
        if row_sum == 0 and col_sum:
            result.f1_score = 0.0
        else:
            denominator = result.precision + result.recall
            result.f1_score = (
                2.0 * result.precision * result.recall / denominator
                if denominator
                else math.nan
            )
        metrics.append(result)
    return metrics


def format_report(state_name: str, metrics: EvaluationMetrics) -> str:
    """Render the metrics of one state as a text report."""
    return (
        f"Estimations Report for State: {state_name}\n"
        "\tTrue Class/PredictedClass\t\n"
        f"True Positives= {metrics.true_positives}\t"
        f"False Positives= {metrics.false_positives}\n"
        f"True Negatives= {metrics.true_negatives}\t"
        f"False Negatives= {metrics.false_negatives}\n"
        f"Precision= {metrics.precision:g}\n"
        f"Recall= {metrics.recall:g}\n"
        f"F1-Score= {metrics.f1_score:g}\n"
        "\n"
    )