import numpy as np
import pytest

from scratchml.activations import (
    sigmoid,
    sigmoid_derivative,
    softmax,
    tanh,
    tanh_derivative,
)


def test_sigmoid_at_zero_is_half():
    assert sigmoid(0.0) == pytest.approx(0.5)


def test_sigmoid_is_symmetric():
    xs = np.linspace(-5, 5, 11)
    assert np.allclose(sigmoid(xs) + sigmoid(-xs), 1.0)


def test_sigmoid_stays_in_unit_interval():
    values = sigmoid(np.array([-30.0, -1.0, 2.0, 30.0]))
    assert np.all(values > 0) and np.all(values < 1)


def test_sigmoid_derivative_peaks_at_zero():
    xs = np.array([-2.0, -1.0, 0.0, 1.0, 2.0])
    deriv = sigmoid_derivative(xs)
    assert int(np.argmax(deriv)) == 2
    assert np.allclose(deriv, sigmoid(xs) * (1 - sigmoid(xs)))


def test_tanh_is_odd_and_bounded():
    xs = np.array([0.5, 1.0, 3.0])
    assert np.allclose(tanh(xs), -tanh(-xs))
    assert np.all(np.abs(tanh(np.array([-50.0, 50.0]))) <= 1.0)


def test_tanh_at_zero():
    assert tanh(0.0) == pytest.approx(0.0, abs=1e-9)


def test_tanh_derivative_matches_identity():
    xs = np.array([-1.5, 0.0, 0.7])
    assert np.allclose(tanh_derivative(xs) + tanh(xs) ** 2, 1.0)


def test_softmax_columns_sum_to_one():
    x = np.array([[1.0, 2.0], [3.0, -1.0], [0.0, 5.0]])
    probs = softmax(x)
    assert probs.shape == x.shape
    assert np.allclose(probs.sum(axis=0), 1.0)
    assert int(np.argmax(probs[:, 0])) == 1


def test_softmax_handles_large_values():
    probs = softmax(np.array([[1000.0], [1000.0]]))
    assert np.allclose(probs, 0.5)


def test_softmax_rejects_vectors():
    with pytest.raises(ValueError):
        softmax(np.array([1.0, 2.0]))