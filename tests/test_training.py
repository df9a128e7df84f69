from __future__ import annotations

import json

import numpy as np
import pytest

from trieReservoir.config import TrainingConfig
from trieReservoir.readouts import SoftmaxLinearReadout
from trieReservoir.reservoirs import ReservoirBank, ReservoirEngine
from trieReservoir.training import train_readout
from trieReservoir.trie import PrefixTrie

CORPUS = ["hello", "help", "helium", "cat", "dog"]
SAMPLES = [("hello", 0), ("cat", 1), ("dog", 2), ("help", 3)]
WORD_SEEDS = {"hello": 10, "cat": 11, "dog": 12, "help": 13}


def _components(seed: int = 0):
    rng = np.random.default_rng(seed)
    trie = PrefixTrie.from_corpus(CORPUS, max_depth=16)
    bank = ReservoirBank.initialize(16, rng=rng)
    readout = SoftmaxLinearReadout(out_dim=4, rng=rng)
    engine = ReservoirEngine(rng=rng)
    return trie, bank, engine, readout


def test_hello_scenario_learns_label_zero() -> None:
    trie, bank, engine, readout = _components()

    def embed(word: str) -> np.ndarray:
        # A freshly seeded generator per word keeps each embedding fixed.
        return engine.forward(trie, bank, word, rng=np.random.default_rng(WORD_SEEDS[word]))

    lr = 0.01
    for epoch in range(100):
        for word, label in SAMPLES:
            readout.train_step(embed(word), label, lr)
        if epoch % 20 == 19:
            lr *= 0.9

    probs = readout.forward(embed("hello"))
    assert abs(probs.sum() - 1.0) < 1e-5
    assert int(np.argmax(probs)) == 0
    assert np.all(probs[0] > probs[1:])


def test_train_readout_schedule_and_history() -> None:
    trie, bank, engine, readout = _components()
    result = train_readout(trie, bank, engine, readout, SAMPLES, TrainingConfig(), noise_seed=0)

    assert len(result.loss_history) == 100
    assert len(result.lr_history) == 100
    assert result.n_samples == 4
    assert result.lr_history[0] == pytest.approx(0.01)
    assert result.lr_history[19] == pytest.approx(0.01)
    assert result.lr_history[20] == pytest.approx(0.009)
    assert result.final_learning_rate == pytest.approx(0.01 * 0.9**4)
    assert np.all(np.isfinite(result.loss_history))
    assert result.loss_history[-1] < result.loss_history[0]


def test_train_readout_reproducible_noise_predicts_training_labels() -> None:
    trie, bank, engine, readout = _components()
    train_readout(trie, bank, engine, readout, SAMPLES, TrainingConfig(), noise_seed=0)

    from trieReservoir.utils import input_rng

    probs = readout.forward(engine.forward(trie, bank, "hello", rng=input_rng(0, "hello")))
    assert int(np.argmax(probs)) == 0


def test_train_readout_with_fresh_noise_runs() -> None:
    trie, bank, engine, readout = _components()
    cfg = TrainingConfig(epochs=5, learning_rate=0.01, decay_every=2)
    result = train_readout(trie, bank, engine, readout, SAMPLES, cfg)
    assert result.lr_history == pytest.approx([0.01, 0.01, 0.009, 0.009, 0.0081])
    assert result.seed is None


def test_train_readout_rejects_bad_input() -> None:
    trie, bank, engine, readout = _components()
    with pytest.raises(ValueError):
        train_readout(trie, bank, engine, readout, [])
    with pytest.raises(ValueError):
        train_readout(trie, bank, engine, readout, [("hello", 7)], TrainingConfig(epochs=1))


def test_training_config_validation() -> None:
    with pytest.raises(ValueError):
        TrainingConfig(epochs=0)
    with pytest.raises(ValueError):
        TrainingConfig(learning_rate=0.0)
    with pytest.raises(ValueError):
        TrainingConfig(lr_decay=1.5)
    with pytest.raises(ValueError):
        TrainingConfig(decay_every=0)


def test_result_save_json(tmp_path) -> None:
    trie, bank, engine, readout = _components()
    result = train_readout(
        trie, bank, engine, readout, SAMPLES, TrainingConfig(epochs=3), noise_seed=1
    )
    path = tmp_path / "runs" / "history.json"
    result.save_json(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["config"]["epochs"] == 3
    assert len(data["loss_history"]) == 3
    assert data["seed"] == 1
    assert data["n_samples"] == 4
