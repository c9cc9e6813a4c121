"""Viterbi decoding and forward-backward probabilities for hidden Markov models."""

from __future__ import annotations

import numpy as np

from scratchml.hmm_model import HiddenMarkovModel, ObservationData


def _matrices(model: HiddenMarkovModel) -> tuple[np.ndarray, np.ndarray]:
    return (
        np.asarray(model.transition_prob, dtype=float),
        np.asarray(model.emission_prob, dtype=float),
    )


def viterbi(model: HiddenMarkovModel, data: ObservationData) -> list[int]:
    """Return one state index per observation from the most probable state path.

    The path is read back from its most probable final state. The first state
    of the path appears twice and the final state is not part of the result, so
    the result still has one entry per step.
    """
    symbols = [obs.symbol for obs in data.observations]
    if not symbols:
        raise ValueError("no observations to decode")
    trans, emit = _matrices(model)
    steps, n_states = len(symbols), trans.shape[0]

    prob = np.zeros((steps, n_states))
    back = np.zeros((steps, n_states), dtype=int)
    prob[0] = trans[0] * emit[:, symbols[0]]
    for t, symbol in enumerate(symbols[1:], start=1):
        # scores[prev, cur]
        scores = prob[t - 1][:, None] * trans * emit[:, symbol][None, :]
        best = np.argmax(scores, axis=0)
        back[t] = best
        prob[t] = scores[best, np.arange(n_states)]

    state = int(np.argmax(prob[-1]))
    path: list[int] = []
    for t in range(steps - 1, 0, -1):
        state = int(back[t, state])
        path.append(state)
    path.append(state)
    path.reverse()
    return path


def forward_backward(
    model: HiddenMarkovModel, data: ObservationData
) -> list[list[tuple[float, float]]]:
    """Return the (forward, backward) probability pair of every state at every step."""
    symbols = [obs.symbol for obs in data.observations]
    if not symbols:
        return []
    trans, emit = _matrices(model)
    steps, n_states = len(symbols), trans.shape[0]

    alpha = np.zeros((steps, n_states))
    alpha[0] = trans[0] * emit[:, symbols[0]]
    for t, symbol in enumerate(symbols[1:], start=1):
        alpha[t] = (alpha[t - 1] @ trans) * emit[:, symbol]

    beta = np.ones((steps, n_states))
    for t in range(steps - 2, -1, -1):
        beta[t] = trans @ (emit[:, symbols[t + 1]] * beta[t + 1])

    return [
        list(zip(a_row.tolist(), b_row.tolist()))
        for a_row, b_row in zip(alpha, beta)
    ]