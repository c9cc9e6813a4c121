"""Element-wise activation functions and their derivatives."""

from __future__ import annotations

import numpy as np

_OFFSET = 1e-12


def sigmoid(x) -> np.ndarray:
    """Logistic function, applied element-wise."""
    values = np.asarray(x, dtype=float)
    return 1.0 / (1.0 + np.exp(-(values + _OFFSET)))


def sigmoid_derivative(x) -> np.ndarray:
    """Derivative of the logistic function at ``x``."""
    s = sigmoid(x)
    return s * (1.0 - s)


def tanh(x) -> np.ndarray:
    """Hyperbolic tangent, applied element-wise."""
    return np.tanh(np.asarray(x, dtype=float) + _OFFSET)


def tanh_derivative(x) -> np.ndarray:
    """Derivative of the hyperbolic tangent at ``x``."""
    return 1.0 - tanh(x) ** 2


def softmax(x) -> np.ndarray:
    """Softmax over each column of a two-dimensional array."""
    values = np.asarray(x, dtype=float)
    if values.ndim != 2:
        raise ValueError("softmax expects a two-dimensional array")
    shifted = values - values.max(axis=0, keepdims=True)
    exps = np.exp(shifted)
    return exps / exps.sum(axis=0, keepdims=True)