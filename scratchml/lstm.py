"""A long short-term memory network with a softmax output at every step."""

from __future__ import annotations

import logging

import numpy as np

from scratchml.activations import sigmoid, sigmoid_derivative, softmax, tanh, tanh_derivative
from scratchml.optimizers import Optimizer

_log = logging.getLogger(__name__)

WEIGHT_STD = 0.1
_LOG_EVERY = 5
_GATES = ("f", "i", "g", "o")


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


class LSTM:
    """Forget, input, candidate and output gates over concatenated hidden state and input.

    Without embedding the inputs are one-hot vectors of ``output_units`` values;
    with embedding they are vectors of ``input_units`` values.
    """

    def __init__(
        self,
        input_units: int,
        hidden_units: int,
        output_units: int,
        optimizer: Optimizer,
        have_embedding: bool = False,
        seed: int = 0,
    ) -> None:
        if min(input_units, hidden_units, output_units) < 1:
            raise ValueError("unit counts must be positive")
        self.input_units = input_units
        self.hidden_units = hidden_units
        self.output_units = output_units
        self.optimizer = optimizer
        self.have_embedding = have_embedding
        self.input_size = input_units if have_embedding else output_units

        def normal(offset: int, shape: tuple[int, int]) -> np.ndarray:
            return np.random.default_rng(seed + offset).normal(0.0, WEIGHT_STD, shape)

        concat = hidden_units + self.input_size
        self.parameters: dict[str, np.ndarray] = {}
        for offset, gate in enumerate(_GATES):
            self.parameters[f"W_{gate}"] = normal(offset, (hidden_units, concat))
            self.parameters[f"b_{gate}"] = np.zeros((hidden_units, 1))
        self.parameters["W_v"] = normal(4, (output_units, hidden_units))
        self.parameters["b_v"] = np.zeros((output_units, 1))
        self.grads: dict[str, np.ndarray] = {}

    def _forward(self, sample: np.ndarray) -> dict[str, list[np.ndarray]]:
        p = self.parameters
        h = np.zeros((self.hidden_units, 1))
        c = np.zeros((self.hidden_units, 1))
        cache: dict[str, list[np.ndarray]] = {
            key: [] for key in ("z", "f", "i", "g", "c", "o", "h", "output")
        }
        cache["h"].append(h)
        cache["c"].append(c)
        for x_t in sample:
            z = np.vstack([h, x_t])
            f = sigmoid(p["W_f"] @ z + p["b_f"])
            i = sigmoid(p["W_i"] @ z + p["b_i"])
            g = tanh(p["W_g"] @ z + p["b_g"])
            c = f * c + i * g
            o = sigmoid(p["W_o"] @ z + p["b_o"])
            h = o * tanh(c)
            output = softmax(p["W_v"] @ h + p["b_v"])
            for key, value in (
                ("z", z), ("f", f), ("i", i), ("g", g), ("c", c),
                ("o", o), ("h", h), ("output", output),
            ):
                cache[key].append(value)
        return cache

    def _backward(self, targets: np.ndarray, cache: dict[str, list[np.ndarray]]) -> float:
        p = self.parameters
        grads = {f"{name}_d": np.zeros_like(value) for name, value in p.items()}
        z_s, f_s, i_s, g_s = cache["z"], cache["f"], cache["i"], cache["g"]
        c_s, o_s, h_s, output_s = cache["c"], cache["o"], cache["h"], cache["output"]
        # The recurrent terms are never carried back to earlier steps.
        dh_next = np.zeros_like(h_s[0])
        dc_next = np.zeros_like(c_s[0])

        loss = 0.0
        for t in range(len(output_s) - 1, -1, -1):
            with np.errstate(divide="ignore", invalid="ignore"):
                loss += -float(np.mean(np.log(output_s[t]) * targets[t]))
            c_prev = c_s[t]

            dv = output_s[t].copy()
            dv[int(np.argmax(targets[t][:, 0])), 0] -= 1.0
            grads["W_v_d"] += dv @ h_s[t].T
            grads["b_v_d"] += dv

            dh = p["W_v"].T @ dv + dh_next
            tanh_c = tanh(c_s[t + 1])
            d_o = sigmoid_derivative(o_s[t]) * (dh * tanh_c)
            grads["W_o_d"] += d_o @ z_s[t].T
            grads["b_o_d"] += d_o

            dc = dc_next + dh * o_s[t] * tanh_derivative(tanh_c)
            dg = tanh_derivative(g_s[t]) * (dc * i_s[t])
            grads["W_g_d"] += dg @ z_s[t].T
            grads["b_g_d"] += dg

            di = sigmoid_derivative(i_s[t]) * (dc * g_s[t])
            grads["W_i_d"] += di @ z_s[t].T
            grads["b_i_d"] += di

            df = sigmoid(f_s[t]) * (dc * c_prev)
            grads["W_f_d"] += df @ z_s[t].T
            grads["b_f_d"] += df

        self.grads = grads
        return loss

    def train(self, x, y, epochs: int) -> list[float]:
        """Train on sequences; return the summed loss of each epoch.

        ``x`` has shape (samples, steps, input size[, 1]) and ``y`` has shape
        (samples, steps, output_units[, 1]) holding one-hot targets.
        """
        inputs = _as_sequences(x, self.input_size, "inputs")
        targets = _as_sequences(y, self.output_units, "targets")
        if targets.shape[0] < inputs.shape[0] or targets.shape[1] < inputs.shape[1]:
            raise ValueError("targets must cover every input sample and step")
        self.optimizer.initialize(self.parameters)
        history: list[float] = []
        for epoch in range(epochs):
            epoch_loss = 0.0
            for sample_x, sample_y in zip(inputs, targets):
                cache = self._forward(sample_x)
                epoch_loss += self._backward(sample_y, cache)
                self.optimizer.update(self.parameters, self.grads)
            history.append(epoch_loss)
            if epoch % _LOG_EVERY == 0:
                _log.info("Epoch %d, training loss: %g", epoch, epoch_loss)
        return history

    def predict(self, x) -> list[list[np.ndarray]]:
        """Return the (output_units, 1) probability column of every step of every sample."""
        inputs = _as_sequences(x, self.input_size, "inputs")
        return [self._forward(sample)["output"] for sample in inputs]