"""A skip-gram style word embedding layer trained on one-hot sequences."""

from __future__ import annotations

import numpy as np

from scratchml.activations import softmax
from scratchml.optimizers import Optimizer


class Embedding:
    """Learns a ``vocab_size`` by ``num_embedding`` projection from context windows."""

    def __init__(
        self,
        vocab_size: int,
        num_embedding: int,
        window_size: int,
        optimizer: Optimizer,
    ) -> None:
        if vocab_size < 1 or num_embedding < 1:
            raise ValueError("vocabulary and embedding sizes must be positive")
        if window_size < 0:
            raise ValueError("window_size must not be negative")
        self.vocab_size = vocab_size
        self.num_embedding = num_embedding
        self.window_size = window_size
        self.optimizer = optimizer
        w1 = (np.arange(vocab_size * num_embedding) + 1) * 0.1
        w2 = (np.arange(num_embedding * vocab_size) + 1) * 0.05
        self.parameters: dict[str, np.ndarray] = {
            "W1": w1.reshape(vocab_size, num_embedding),
            "W2": w2.reshape(num_embedding, vocab_size),
        }
        self.grads: dict[str, np.ndarray] = {}
        self._cache: dict[str, np.ndarray] = {}

    def _forward(self, x: np.ndarray) -> None:
        a1 = x @ self.parameters["W1"]
        a2 = a1 @ self.parameters["W2"]
        self._cache = {"A1": a1, "A2": a2, "Z": softmax(a2.T).T}

    def _backward(self, x: np.ndarray, y: np.ndarray) -> float:
        z = self._cache["Z"]
        d_a2 = z - y
        self.grads = {
            "W1_d": x.T @ (d_a2 @ self.parameters["W2"].T),
            "W2_d": self._cache["A1"].T @ d_a2,
        }
        with np.errstate(divide="ignore"):
            return float(-np.sum(np.log(z) * y))

    def make_windows(self, x) -> tuple[np.ndarray, np.ndarray]:
        """Build (input, target) pairs from windows around each step of each sample.

        ``x`` has shape (samples, steps, vocab_size). For every step, each position
        ``k`` of its window other than the step itself yields the step as input and
        step ``k`` of the sample as target.
        """
        data = np.asarray(x, dtype=float)
        if data.ndim != 3:
            raise ValueError("expected an array of shape (samples, steps, vocab)")
        inputs, targets = [], []
        for sample in data:
            steps = sample.shape[0]
            xs, ys = [], []
            for j in range(steps):
                window = range(max(0, j - self.window_size), min(steps, j + self.window_size + 1))
                for k, position in enumerate(window):
                    if position == j:
                        continue
                    xs.append(sample[j])
                    ys.append(sample[k])
            inputs.append(xs)
            targets.append(ys)
        if len({len(xs) for xs in inputs}) > 1:
            raise ValueError("all samples must give the same number of window pairs")
        width = data.shape[2]
        shape = (len(inputs), len(inputs[0]) if inputs else 0, width)
        return (
            np.asarray(inputs, dtype=float).reshape(shape),
            np.asarray(targets, dtype=float).reshape(shape),
        )

    def train(self, x, epochs: int) -> list[float]:
        """Train on the window pairs of ``x``; return the summed loss of each epoch."""
        inputs, targets = self.make_windows(x)
        self.optimizer.initialize(self.parameters)
        history = []
        for _ in range(epochs):
            epoch_loss = 0.0
            for sample_x, sample_y in zip(inputs, targets):
                self._forward(sample_x)
                epoch_loss += self._backward(sample_x, sample_y)
                self.optimizer.update(self.parameters, self.grads)
            history.append(epoch_loss)
        return history

    def embed(self, x) -> np.ndarray:
        """Project every step of every sample: (samples, steps, vocab) to (samples, steps, num_embedding)."""
        data = np.asarray(x, dtype=float)
        if data.ndim != 3:
            raise ValueError("expected an array of shape (samples, steps, vocab)")
        return data @ self.parameters["W1"]