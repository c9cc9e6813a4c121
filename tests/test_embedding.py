import numpy as np
import pytest

from scratchml.embedding import Embedding
from scratchml.optimizers import Adam, GradientDescent


def _one_hot_samples():
    eye = np.eye(4)
    return np.array([[eye[0], eye[1], eye[2]], [eye[3], eye[2], eye[1]]])


def test_initial_weights_follow_fixed_pattern():
    emb = Embedding(4, 3, 1, GradientDescent(0.01))
    w1 = emb.parameters["W1"]
    w2 = emb.parameters["W2"]
    assert w1.shape == (4, 3)
    assert w2.shape == (3, 4)
    assert w1[0, 0] == pytest.approx(0.1)
    assert w2[0, 0] == pytest.approx(0.05)
    assert np.allclose(np.diff(w1.ravel()), 0.1)
    assert np.allclose(np.diff(w2.ravel()), 0.05)


def test_make_windows_shapes_and_inputs():
    emb = Embedding(4, 3, 1, GradientDescent(0.01))
    samples = _one_hot_samples()
    inputs, targets = emb.make_windows(samples)
    assert inputs.shape == (2, 4, 4)
    assert targets.shape == inputs.shape
    first = samples[0]
    assert np.array_equal(inputs[0], np.array([first[0], first[1], first[1], first[2]]))
    assert np.array_equal(targets[0][:3], np.array([first[1], first[0], first[2]]))


def test_make_windows_rejects_wrong_rank():
    emb = Embedding(4, 3, 1, GradientDescent(0.01))
    with pytest.raises(ValueError):
        emb.make_windows(np.zeros((3, 4)))


def test_embed_of_one_hot_selects_rows():
    emb = Embedding(4, 3, 1, GradientDescent(0.01))
    samples = _one_hot_samples()
    out = emb.embed(samples)
    assert out.shape == (2, 3, 3)
    assert np.allclose(out[0, 1], emb.parameters["W1"][1])
    assert np.allclose(out[1, 0], emb.parameters["W1"][3])


def test_train_returns_history_and_updates_weights():
    emb = Embedding(4, 3, 1, GradientDescent(0.01))
    before = emb.parameters["W1"].copy()
    history = emb.train(_one_hot_samples(), 3)
    assert len(history) == 3
    assert all(np.isfinite(loss) and loss > 0 for loss in history)
    assert not np.allclose(before, emb.parameters["W1"])


def test_train_with_adam_keeps_shapes():
    emb = Embedding(4, 2, 2, Adam(0.9, 0.99, 0.01))
    history = emb.train(_one_hot_samples(), 2)
    assert len(history) == 2
    assert emb.parameters["W1"].shape == (4, 2)
    assert emb.parameters["W2"].shape == (2, 4)


def test_invalid_sizes_raise():
    with pytest.raises(ValueError):
        Embedding(0, 3, 1, GradientDescent(0.01))
    with pytest.raises(ValueError):
        Embedding(4, 3, -1, GradientDescent(0.01))