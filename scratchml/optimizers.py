"""Parameter update rules for gradient-trained models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping

import numpy as np

DEFAULT_LEARNING_RATE = 0.005
_EPSILON = 1e-6


def _paired(
    parameters: Mapping[str, np.ndarray], grads: Mapping[str, np.ndarray]
) -> list[tuple[str, np.ndarray]]:
    """Pair parameter names with gradients by the sorted order of both key sets."""
    if len(parameters) != len(grads):
        raise ValueError("parameters and gradients must have the same number of entries")
    return [
        (name, np.asarray(grads[grad_name], dtype=float))
        for name, grad_name in zip(sorted(parameters), sorted(grads))
    ]


class Optimizer(ABC):
    """Updates named parameter arrays in place from their gradients."""

    def __init__(self, learning_rate: float = DEFAULT_LEARNING_RATE) -> None:
        self.learning_rate = learning_rate

    @abstractmethod
    def initialize(self, parameters: Mapping[str, np.ndarray]) -> None:
        """Prepare any per-parameter state."""

    @abstractmethod
    def update(
        self,
        parameters: MutableMapping[str, np.ndarray],
        grads: Mapping[str, np.ndarray],
    ) -> None:
        """Apply one update step to ``parameters``.

        Gradients are matched to parameters by the sorted order of their names.
        """


class GradientDescent(Optimizer):
    """Plain gradient descent."""

    def initialize(self, parameters: Mapping[str, np.ndarray]) -> None:
        """Gradient descent keeps no state."""

    def update(
        self,
        parameters: MutableMapping[str, np.ndarray],
        grads: Mapping[str, np.ndarray],
    ) -> None:
        for name, grad in _paired(parameters, grads):
            parameters[name] = parameters[name] - grad * self.learning_rate


class Adam(Optimizer):
    """Adam with first and second moment estimates and no bias correction."""

    def __init__(
        self,
        beta1: float = 0.9,
        beta2: float = 0.99,
        learning_rate: float = DEFAULT_LEARNING_RATE,
    ) -> None:
        super().__init__(learning_rate)
        self.beta1 = beta1
        self.beta2 = beta2
        self._first: dict[str, np.ndarray] = {}
        self._second: dict[str, np.ndarray] = {}

    def initialize(self, parameters: Mapping[str, np.ndarray]) -> None:
        """Reset both moment estimates to zeros shaped like each parameter."""
        self._first = {name: np.zeros_like(value, dtype=float) for name, value in parameters.items()}
        self._second = {name: np.zeros_like(value, dtype=float) for name, value in parameters.items()}

    def update(
        self,
        parameters: MutableMapping[str, np.ndarray],
        grads: Mapping[str, np.ndarray],
    ) -> None:
        for name, grad in _paired(parameters, grads):
            first = self._first.get(name, np.zeros_like(grad))
            second = self._second.get(name, np.zeros_like(grad))
            self._first[name] = first * self.beta1 + grad * (1 - self.beta1)
            self._second[name] = second * self.beta2 + grad**2 * (1 - self.beta2)
        for name in list(parameters):
            if name not in self._first:
                continue
            step = self._first[name] / (np.sqrt(self._second[name]) + _EPSILON)
            parameters[name] = parameters[name] - step * self.learning_rate