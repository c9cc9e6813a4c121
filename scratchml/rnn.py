"""A plain recurrent network trained by backpropagation through time."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

import numpy as np

from scratchml.activations import softmax, tanh, tanh_derivative
from scratchml.optimizers import Optimizer

_log = logging.getLogger(__name__)

WEIGHT_STD = 0.1
DEFAULT_MAX_NORM = 0.25
_LOG_EVERY = 5


def clip_gradient_norm(
    grads: Mapping[str, np.ndarray], max_norm: float = DEFAULT_MAX_NORM
) -> dict[str, np.ndarray]:
    """Scale all gradients down together so their joint norm is at most ``max_norm``."""
    arrays = {name: np.asarray(grad, dtype=float) for name, grad in grads.items()}
    total = math.sqrt(sum(float(np.sum(grad**2)) for grad in arrays.values()))
    coefficient = max_norm / (total + 1e-6)
    if coefficient < 1:
        return {name: grad * coefficient for name, grad in arrays.items()}
    return arrays


def _as_sequences(x, rows: int, what: str) -> np.ndarray:
    """Coerce data to shape (samples, steps, rows, 1)."""
    data = np.asarray(x, dtype=float)
    if data.ndim == 3:
        data = data[..., None]
    if data.ndim != 4 or data.shape[3] != 1:
        raise ValueError(f"{what} must have shape (samples, steps, {rows}, 1)")
    if data.shape[2] != rows:
        raise ValueError(f"{what} vectors must hold {rows} values, got {data.shape[2]}")
    return data


class RNN:
    """An Elman recurrent network with a softmax output at every step."""

    def __init__(
        self,
        hidden_units: int,
        output_units: int,
        optimizer: Optimizer,
        seed: int = 0,
    ) -> None:
        if hidden_units < 1 or output_units < 1:
            raise ValueError("unit counts must be positive")
        self.hidden_units = hidden_units
        self.output_units = output_units
        self.optimizer = optimizer

        def normal(offset: int, shape: tuple[int, int]) -> np.ndarray:
            return np.random.default_rng(seed + offset).normal(0.0, WEIGHT_STD, shape)

        self.parameters: dict[str, np.ndarray] = {
            "U": normal(0, (hidden_units, output_units)),
            "V": normal(1, (hidden_units, hidden_units)),
            "W": normal(2, (output_units, hidden_units)),
            "hidden_b": np.zeros((hidden_units, 1)),
            "out_b": np.zeros((output_units, 1)),
        }
        self.grads: dict[str, np.ndarray] = {}

    def _forward(self, inputs: np.ndarray) -> tuple[list[np.ndarray], list[np.ndarray]]:
        p = self.parameters
        hidden = np.zeros((self.hidden_units, 1))
        hidden_states: list[np.ndarray] = []
        outputs: list[np.ndarray] = []
        for x_t in inputs:
            hidden = tanh(p["U"] @ x_t + p["V"] @ hidden + p["hidden_b"])
            outputs.append(softmax(p["W"] @ hidden + p["out_b"]))
            hidden_states.append(hidden)
        return hidden_states, outputs

    def _backward(
        self,
        inputs: np.ndarray,
        targets: np.ndarray,
        hidden_states: list[np.ndarray],
        outputs: list[np.ndarray],
    ) -> float:
        p = self.parameters
        u_d = np.zeros_like(p["U"])
        v_d = np.zeros_like(p["V"])
        w_d = np.zeros_like(p["W"])
        hidden_b_d = np.zeros_like(p["hidden_b"])
        out_b_d = np.zeros_like(p["out_b"])
        h_next_d = np.zeros_like(hidden_states[0])

        loss = 0.0
        steps = len(outputs)
        for t in range(steps - 1, -1, -1):
            with np.errstate(divide="ignore", invalid="ignore"):
                loss += -float(np.mean(np.log(outputs[t]) * targets[t]))

            d_out = outputs[t].copy()
            d_out[int(np.argmax(targets[t][:, 0])), 0] -= 1.0

            # The output layer gradient is accumulated twice per step.
            w_d += 2 * (d_out @ hidden_states[t].T)
            out_b_d += 2 * d_out
            h_d = p["W"].T @ d_out + h_next_d

            f_d = tanh_derivative(hidden_states[t]) * h_d
            hidden_b_d += f_d
            u_d += f_d @ inputs[t].T
            previous = t - 1 if t >= 1 else steps - 1
            v_d += f_d @ hidden_states[previous].T
            h_next_d = p["V"].T @ f_d

        self.grads = clip_gradient_norm(
            {
                "U_d": u_d,
                "V_d": v_d,
                "W_d": w_d,
                "hidden_b_d": hidden_b_d,
                "out_b_d": out_b_d,
            },
            DEFAULT_MAX_NORM,
        )
        return loss

    def train(self, x, y, epochs: int) -> list[float]:
        """Train on one-hot sequences; return the summed loss of each epoch.

        ``x`` and ``y`` have shape (samples, steps, output_units[, 1]).
        """
        inputs = _as_sequences(x, self.output_units, "inputs")
        targets = _as_sequences(y, self.output_units, "targets")
        if targets.shape[0] < inputs.shape[0] or targets.shape[1] < inputs.shape[1]:
            raise ValueError("targets must cover every input sample and step")
        self.optimizer.initialize(self.parameters)
        history: list[float] = []
        for epoch in range(epochs):
            epoch_loss = 0.0
            for sample_x, sample_y in zip(inputs, targets):
                hidden_states, outputs = self._forward(sample_x)
                if outputs:
                    epoch_loss += self._backward(sample_x, sample_y, hidden_states, outputs)
                    self.optimizer.update(self.parameters, self.grads)
            history.append(epoch_loss)
            if epoch % _LOG_EVERY == 0:
                _log.info("Epoch %d, training loss: %g", epoch, epoch_loss)
        return history

    def predict(self, x) -> list[list[np.ndarray]]:
        """Return the (output_units, 1) probability column of every step of every sample."""
        inputs = _as_sequences(x, self.output_units, "inputs")
        return [self._forward(sample)[1] for sample in inputs]