from __future__ import annotations

import numpy as np
import pytest

from trieReservoir.config import ReadoutConfig
from trieReservoir.errors import InvalidLabel
from trieReservoir.readouts import SoftmaxLinearReadout, make_readout
from trieReservoir.readouts.svm_linear import make_linear_svm


def _readout(seed: int = 0) -> SoftmaxLinearReadout:
    return SoftmaxLinearReadout(rng=np.random.default_rng(seed))


def _state(seed: int = 1) -> np.ndarray:
    return np.random.default_rng(seed).uniform(-0.85, 0.85, size=64)


def test_initial_weights_are_small() -> None:
    readout = _readout()
    assert readout.weights.shape == (4, 64)
    assert np.all(np.abs(readout.weights) <= 0.01)


def test_forward_is_softmax_of_logits() -> None:
    readout = _readout()
    state = _state()
    logits = readout.weights @ state
    expected = np.exp(logits) / np.exp(logits).sum()
    probs = readout.forward(state)
    assert np.allclose(probs, expected)
    assert abs(probs.sum() - 1.0) < 1e-5
    assert np.all((probs > 0.0) & (probs < 1.0))


def test_zero_state_gives_uniform_probabilities() -> None:
    assert np.allclose(_readout().forward(np.zeros(64)), 0.25)


def test_train_step_applies_cross_entropy_gradient() -> None:
    readout = _readout()
    state = _state()
    before = readout.weights.copy()
    probs = readout.forward(state)
    loss = readout.train_step(state, 2, 0.1)
    grad = probs.copy()
    grad[2] -= 1.0
    assert np.allclose(readout.weights, before - 0.1 * np.outer(grad, state))
    assert np.isclose(loss, -np.log(probs[2]))


def test_two_steps_strictly_decrease_loss() -> None:
    readout = _readout()
    state = _state()
    loss0 = readout.loss(state, 1)
    readout.train_step(state, 1, 0.01)
    loss1 = readout.loss(state, 1)
    readout.train_step(state, 1, 0.01)
    loss2 = readout.loss(state, 1)
    assert loss0 > loss1 > loss2


def test_only_readout_weights_change() -> None:
    readout = _readout()
    state = _state()
    state_before = state.copy()
    readout.train_step(state, 0, 0.5)
    assert np.array_equal(state, state_before)


@pytest.mark.parametrize("label", [-1, 4, 1.5, True, "0", None])
def test_invalid_label_rejected_without_update(label) -> None:
    readout = _readout()
    before = readout.weights.copy()
    with pytest.raises(InvalidLabel):
        readout.train_step(_state(), label, 0.1)
    assert np.array_equal(readout.weights, before)


def test_invalid_label_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        _readout().loss(_state(), 9)


def test_numpy_integer_label_accepted() -> None:
    _readout().train_step(_state(), np.int64(3), 0.01)


def test_state_shape_checked() -> None:
    with pytest.raises(ValueError):
        _readout().forward(np.zeros(10))


def test_negative_learning_rate_rejected() -> None:
    with pytest.raises(ValueError):
        _readout().train_step(_state(), 0, -0.1)


def test_unstable_softmax_overflows_on_huge_logits() -> None:
    state = np.ones(64)
    plain = SoftmaxLinearReadout(rng=np.random.default_rng(0))
    plain.weights[:] = 0.0
    plain.weights[0] = 20.0
    hardened = SoftmaxLinearReadout(stable_softmax=True, rng=np.random.default_rng(0))
    hardened.weights[:] = plain.weights
    with np.errstate(over="ignore", invalid="ignore"):
        assert np.isnan(plain.forward(state)).any()
    probs = hardened.forward(state)
    assert np.isclose(probs[0], 1.0)


def test_fit_and_score_on_separable_states() -> None:
    rng = np.random.default_rng(0)
    X = rng.uniform(-0.85, 0.85, size=(4, 64))
    y = np.array([0, 1, 2, 3])
    readout = _readout().fit(X, y, epochs=50, learning_rate=0.05)
    assert readout.score(X, y) == 1.0
    probs = readout.predict_proba(X)
    assert probs.shape == (4, 4)
    assert np.allclose(probs.sum(axis=1), 1.0)
    assert readout.decision_function(X[0]).shape == (1, 4)


def test_fit_shape_mismatch() -> None:
    with pytest.raises(ValueError):
        _readout().fit(np.zeros((3, 64)), [0, 1])


def test_from_config() -> None:
    readout = SoftmaxLinearReadout.from_config(
        ReadoutConfig(out_dim=6, init_scale=0.5), reservoir_size=8, rng=np.random.default_rng(0)
    )
    assert readout.weights.shape == (6, 8)
    assert readout.out_dim == 6


def test_factory_kinds() -> None:
    readout = make_readout("softmax", {"out_dim": 3}, reservoir_size=16, rng=np.random.default_rng(0))
    assert isinstance(readout, SoftmaxLinearReadout)
    assert readout.weights.shape == (3, 16)
    svm = make_readout("svm", {"kernel": "rbf", "C": 2.0}, rng=np.random.default_rng(0))
    assert svm.kernel == "linear"
    assert svm.C == 2.0
    with pytest.raises(ValueError):
        make_readout("ridge")


def test_linear_svm_separates_states() -> None:
    rng = np.random.default_rng(0)
    X = rng.uniform(-0.85, 0.85, size=(8, 64))
    y = np.array([0, 1, 2, 3, 0, 1, 2, 3])
    svm = make_linear_svm().fit(X, y)
    assert svm.score(X, y) == 1.0


def test_linear_svm_is_one_vs_one_with_ovr_shaped_scores() -> None:
    rng = np.random.default_rng(1)
    X = rng.uniform(-0.85, 0.85, size=(8, 64))
    y = np.array([0, 1, 2, 3, 0, 1, 2, 3])
    svm = make_linear_svm({"decision_function_shape": "ovo"}).fit(X, y)
    # six pairwise classifiers for four classes
    assert svm.decision_function(X).shape == (8, 6)
    assert make_linear_svm().fit(X, y).decision_function(X).shape == (8, 4)
