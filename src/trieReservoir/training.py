"""Sequential training loop for the softmax readout."""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from .config import TrainingConfig
from .readouts.softmax_linear import SoftmaxLinearReadout
from .reservoirs.base import ReservoirOperator
from .reservoirs.engine import ReservoirEngine
from .results import TrainingResult
from .trie import PrefixTrie
from .utils import input_rng

logger = logging.getLogger(__name__)


def train_readout(
    trie: PrefixTrie,
    bank: ReservoirOperator,
    engine: ReservoirEngine,
    readout: SoftmaxLinearReadout,
    samples: Sequence[Tuple[str | bytes, int]],
    config: TrainingConfig | None = None,
    *,
    noise_seed: int | None = None,
) -> TrainingResult:
    """Train ``readout`` on ``(text, label)`` pairs, re-embedding every visit.

    Each epoch visits the samples in the given order. Every sample gets a
    fresh zero state and a fresh forward pass, then one SGD step. The
    learning rate is multiplied by ``config.lr_decay`` after every
    ``config.decay_every``-th epoch.

    Args:
        trie: Trie containing the corpus.
        bank: Frozen reservoir matrices.
        engine: Update engine (carries alpha and noise scale).
        readout: Readout to train in place.
        samples: ``(text, gold_index)`` pairs.
        config: Epoch count and learning-rate schedule.
        noise_seed: When set, each forward pass draws its noise from a
            generator seeded by ``(noise_seed, text)`` so a given input always
            maps to the same embedding.

    Returns:
        TrainingResult: Per-epoch mean loss and learning rate.
    """
    cfg = config if config is not None else TrainingConfig()
    if not samples:
        raise ValueError("samples must be non-empty")

    result = TrainingResult(config=cfg.to_dict(), n_samples=len(samples), seed=noise_seed)
    lr = float(cfg.learning_rate)
    for epoch in range(cfg.epochs):
        losses = []
        for text, label in samples:
            rng = input_rng(noise_seed, text) if noise_seed is not None else None
            state = engine.forward(trie, bank, text, rng=rng)
            losses.append(readout.train_step(state, label, lr))
        result.loss_history.append(float(np.mean(losses)))
        result.lr_history.append(lr)
        logger.debug("epoch %d: mean loss %.4f lr %.5f", epoch, result.loss_history[-1], lr)

        if epoch % cfg.decay_every == cfg.decay_every - 1:
            lr *= cfg.lr_decay
    return result


__all__ = ["train_readout"]
