"""Linear and logistic regression trained by normal equation or gradient descent."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

import numpy as np

from scratchml.csvdata import LabelledSample

COST_DIFFERENCE_THRESHOLD = 5e-6
PROBABILITY_THRESHOLD = 0.5
MAX_EPOCHS_SAME_COST = 10


class TrainingType(Enum):
    """How a regression model finds its parameters."""

    NORMAL_EQUATION = "normal_equation"
    GRADIENT_DESCENT = "gradient_descent"


def _sigmoid(z: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-z))


class _Regression:
    """Shared state and helpers of the regression models."""

    def _setup(self, x, y, regularization: float, rng: np.random.Generator | None) -> None:
        features = np.asarray(x, dtype=float)
        if features.ndim == 1:
            features = features[:, None]
        targets = np.asarray(y, dtype=float).ravel()
        if features.shape[0] != targets.shape[0]:
            raise ValueError("x and y must have the same number of rows")
        rng = rng if rng is not None else np.random.default_rng()
        self._x = np.hstack([np.ones((features.shape[0], 1)), features])
        self._y = targets
        self.regularization = float(regularization)
        self.theta = rng.random(self._x.shape[1])
        self.trained = False

    def _train(self, training_type: TrainingType | str, alpha: float, epochs: int) -> None:
        method = TrainingType(training_type)
        if method is TrainingType.NORMAL_EQUATION:
            self._normal_equation()
        else:
            self._gradient_descent(alpha, epochs)

    def _normal_equation(self) -> None:
        x2 = self._x.T @ self._x
        penalty = np.eye(*x2.shape)
        penalty[0, 0] = 0.0
        if np.linalg.matrix_rank(x2) != x2.shape[0]:
            return
        if self.regularization > 0:
            inverse = np.linalg.pinv(x2 - self.regularization * penalty)
        else:
            inverse = np.linalg.pinv(x2)
        self.theta = inverse @ self._x.T @ self._y
        self.trained = True

    def _forward(self, x) -> np.ndarray:
        if not self.trained:
            raise RuntimeError("This model hasn't been trained")
        inputs = np.atleast_2d(np.asarray(x, dtype=float))
        if self.theta.shape[0] > inputs.shape[1]:
            inputs = np.hstack([np.ones((inputs.shape[0], 1)), inputs])
        return inputs @ self.theta

    def _penalised_theta(self) -> np.ndarray:
        theta = self.theta.copy()
        theta[0] = 0.0
        return theta

    def _gradient(self, h: np.ndarray) -> np.ndarray:
        m = self._y.shape[0]
        derivative = self._x.T @ (h - self._y)
        return derivative / m + self.regularization / m * self._penalised_theta()

    def _gradient_descent(self, alpha: float, epochs: int) -> None:
        raise NotImplementedError


class LinearRegression(_Regression):
    """Least-squares linear regression with an optional ridge penalty."""

    def __init__(
        self,
        x,
        y,
        regularization: float = 0.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._setup(x, y, regularization, rng)

    def train(
        self, training_type: TrainingType | str, alpha: float = 0.0, epochs: int = 0
    ) -> None:
        """Fit the parameters with the chosen method."""
        self._train(training_type, alpha, epochs)

    def number_samples(self) -> int:
        """Return the number of training samples."""
        return int(self._x.shape[0])

    def predict(self, x) -> np.ndarray:
        """Return predicted values for the rows of ``x``."""
        return self._forward(x)

    def cost(self) -> float:
        """Return the cost of the model on its own training data."""
        return self._cost(self._forward(self._x), self._y)

    def _cost(self, h: np.ndarray, y_true: np.ndarray) -> float:
        error = h - y_true
        theta = self._penalised_theta()
        return float(
            0.5 * y_true.shape[0] * (error @ error)
            + self.regularization * (theta @ theta)
        )

    def _gradient_descent(self, alpha: float, epochs: int) -> None:
        self.trained = True
        prev_cost = np.inf
        for _ in range(epochs):
            h = self._forward(self._x)
            cost = self._cost(h, self._y)
            if prev_cost - cost < COST_DIFFERENCE_THRESHOLD:
                break
            self.theta = self.theta - alpha * self._gradient(h)
            prev_cost = cost


class LogisticRegression(_Regression):
    """Binary logistic regression with an optional L2 penalty."""

    def __init__(
        self,
        x,
        y,
        regularization: float = 0.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._setup(x, y, regularization, rng)

    def train(
        self, training_type: TrainingType | str, alpha: float = 0.0, epochs: int = 0
    ) -> None:
        """Fit the parameters with the chosen method."""
        self._train(training_type, alpha, epochs)

    def number_samples(self) -> int:
        """Return the number of training samples."""
        return int(self._x.shape[0])

    def predict(self, x) -> np.ndarray:
        """Return 1.0 or 0.0 for each row of ``x``."""
        prob = _sigmoid(self._forward(x))
        return np.where(prob >= PROBABILITY_THRESHOLD, 1.0, 0.0)

    def cost(self) -> float:
        """Return the cost of the model on its own training data."""
        return self._cost(_sigmoid(self._forward(self._x)), self._y)

    def _cost(self, h: np.ndarray, y_true: np.ndarray) -> float:
        m = y_true.shape[0]
        log_loss = -(y_true @ np.log(h)) - ((1 - y_true) @ np.log(1 - h))
        theta = self._penalised_theta()
        return float(log_loss / m + self.regularization / m * 2 * (theta @ theta))

    def _gradient_descent(self, alpha: float, epochs: int) -> None:
        self.trained = True
        prev_cost = np.inf
        stale_epochs = 0
        for _ in range(epochs):
            if stale_epochs >= MAX_EPOCHS_SAME_COST:
                break
            h = _sigmoid(self._forward(self._x))
            cost = self._cost(h, self._y)
            if prev_cost - cost < COST_DIFFERENCE_THRESHOLD:
                stale_epochs += 1
            self.theta = self.theta - alpha * self._gradient(h)
            prev_cost = cost


def min_max_scale(x) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Scale every column to [0, 1]; return the scaled data, column minima and maxima."""
    data = np.asarray(x, dtype=float)
    mins = data.min(axis=0)
    maxs = data.max(axis=0)
    with np.errstate(divide="ignore", invalid="ignore"):
        scaled = (data - mins) / (maxs - mins)
    return scaled, mins, maxs


def samples_to_arrays(samples: Sequence[LabelledSample]) -> tuple[np.ndarray, np.ndarray]:
    """Stack sample features into a matrix and labels into a vector."""
    if not samples:
        raise ValueError("no samples to convert")
    x = np.array([sample.features for sample in samples], dtype=float)
    y = np.array([sample.label for sample in samples], dtype=float)
    return x, y


def accuracy(y_true, y_hat) -> float:
    """Return the share of positions where both vectors agree."""
    truth = np.asarray(y_true).ravel()
    guess = np.asarray(y_hat).ravel()
    if truth.size == 0:
        raise ValueError("no values to compare")
    if guess.size < truth.size:
        raise ValueError("fewer predictions than true values")
    return float(np.count_nonzero(truth == guess[: truth.size]) / truth.size)