import numpy as np
import pytest

from scratchml.optimizers import Adam, GradientDescent, Optimizer


def test_optimizer_is_abstract():
    with pytest.raises(TypeError):
        Optimizer(0.1)


def test_default_learning_rate():
    assert GradientDescent().learning_rate == 0.005


def test_gradient_descent_moves_against_gradient():
    params = {"W": np.array([1.0, 2.0]), "b": np.array([0.0])}
    grads = {"W_d": np.array([0.5, -1.0]), "b_d": np.array([2.0])}
    optimizer = GradientDescent(0.1)
    optimizer.initialize(params)
    optimizer.update(params, grads)
    assert params["W"] == pytest.approx([0.95, 2.1])
    assert params["b"] == pytest.approx([-0.2])


def test_gradient_descent_zero_gradient_keeps_parameters():
    params = {"W": np.array([[1.0, -3.0]])}
    optimizer = GradientDescent(0.5)
    optimizer.update(params, {"W_d": np.zeros((1, 2))})
    assert params["W"].tolist() == [[1.0, -3.0]]


def test_mismatched_gradient_count_raises():
    params = {"a": np.array([1.0]), "b": np.array([1.0])}
    with pytest.raises(ValueError):
        GradientDescent(0.1).update(params, {"a_d": np.array([1.0])})
    with pytest.raises(ValueError):
        Adam(0.9, 0.99, 0.1).update(params, {"a_d": np.array([1.0])})


def test_adam_first_step_with_zero_betas_is_sign_step():
    params = {"W": np.array([1.0, 1.0])}
    optimizer = Adam(0.0, 0.0, 0.1)
    optimizer.initialize(params)
    optimizer.update(params, {"W_d": np.array([3.0, -5.0])})
    assert params["W"] == pytest.approx([0.9, 1.1], abs=1e-6)


def test_adam_moves_against_gradient_and_keeps_shape():
    params = {"U": np.zeros((2, 3)), "b": np.ones((2, 1))}
    grads = {"U_d": np.full((2, 3), 2.0), "b_d": np.full((2, 1), -1.0)}
    optimizer = Adam(0.9, 0.99, 0.05)
    optimizer.initialize(params)
    for _ in range(3):
        optimizer.update(params, grads)
    assert params["U"].shape == (2, 3)
    assert np.all(params["U"] < 0)
    assert np.all(params["b"] > 1)


def test_adam_zero_gradient_keeps_parameters():
    params = {"W": np.array([2.0, -1.0])}
    optimizer = Adam(0.9, 0.99, 0.1)
    optimizer.initialize(params)
    optimizer.update(params, {"W_d": np.zeros(2)})
    assert params["W"].tolist() == [2.0, -1.0]


def test_adam_pairs_gradients_by_sorted_names():
    params = {"b": np.array([0.0]), "a": np.array([0.0])}
    grads = {"b_grad": np.array([-1.0]), "a_grad": np.array([1.0])}
    optimizer = Adam(0.9, 0.99, 0.1)
    optimizer.initialize(params)
    optimizer.update(params, grads)
    assert params["a"][0] < 0
    assert params["b"][0] > 0