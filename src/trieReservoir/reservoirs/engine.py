"""Trie-driven echo state update loop."""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

from ..config import ALPHA, NOISE_SCALE, ReservoirConfig
from ..trie import PrefixTrie
from ..utils import activate_tanh, matvec, uniform
from .base import ReservoirOperator


class ReservoirEngine:
    """Walks an input through a trie and applies one reservoir step per edge.

    The step for an edge leaving a node at depth ``l`` is

        h <- alpha * tanh(W[l] @ h + noise),   noise ~ U[-noise_scale, noise_scale]

    Fresh noise is drawn on every step, so ``forward`` is not deterministic
    unless ``noise_scale == 0`` or the caller passes an identically seeded
    ``rng`` to each call. Note that with zero noise the all-zero state is a
    fixed point of the update.
    """

    def __init__(
        self,
        *,
        alpha: float = ALPHA,
        noise_scale: float = NOISE_SCALE,
        rng: np.random.Generator | None = None,
    ) -> None:
        if noise_scale < 0.0:
            raise ValueError("noise_scale must be >= 0")
        self.alpha = float(alpha)
        self.noise_scale = float(noise_scale)
        self._rng = rng

    @classmethod
    def from_config(
        cls, config: ReservoirConfig, rng: np.random.Generator | None = None
    ) -> "ReservoirEngine":
        return cls(alpha=config.alpha, noise_scale=config.noise_scale, rng=rng)

    def _get_rng(self, rng: np.random.Generator | None) -> np.random.Generator:
        if rng is not None:
            return rng
        if self._rng is None:
            self._rng = np.random.default_rng()
        return self._rng

    def update(
        self,
        matrix: np.ndarray,
        state: np.ndarray,
        rng: np.random.Generator | None = None,
    ) -> np.ndarray:
        """Apply one depth step to ``state`` in place and return it."""
        if not isinstance(state, np.ndarray) or not np.issubdtype(state.dtype, np.floating):
            raise ValueError("state must be a float numpy array")
        raw = matvec(matrix, state)
        if raw.shape != state.shape:
            raise ValueError(f"matrix {matrix.shape} does not match state {state.shape}")
        if self.noise_scale > 0.0:
            raw = raw + uniform(self._get_rng(rng), raw.shape[0], self.noise_scale)
        state[:] = self.alpha * activate_tanh(raw)
        return state

    def forward(
        self,
        trie: PrefixTrie,
        bank: ReservoirOperator,
        text: str | bytes,
        state: np.ndarray | None = None,
        rng: np.random.Generator | None = None,
    ) -> np.ndarray:
        """Embed ``text`` as the reservoir state after walking it through ``trie``.

        Args:
            trie: Trie built from the training corpus.
            bank: Reservoir matrices indexed by depth.
            text: Input string or bytes.
            state: Initial state, updated in place. A fresh zero vector when omitted.
            rng: Noise generator for this call only.

        Returns:
            np.ndarray: Final state of shape (reservoir_size,). Inputs that leave
            the trie early (or immediately) simply receive fewer updates.
        """
        if state is None:
            state = np.zeros(bank.reservoir_size, dtype=float)
        elif state.shape != (bank.reservoir_size,):
            raise ValueError(
                f"state must have shape ({bank.reservoir_size},), got {state.shape}"
            )
        step_rng = self._get_rng(rng) if self.noise_scale > 0.0 else None
        for _, depth, _ in trie.walk(text):
            self.update(bank.matrix(depth), state, step_rng)
        return state

    @staticmethod
    def path_depths(trie: PrefixTrie, text: str | bytes) -> List[int]:
        """Depths whose matrices ``forward`` applies to ``text``, in order."""
        return [depth for _, depth, _ in trie.walk(text)]

    def embed_many(
        self,
        trie: PrefixTrie,
        bank: ReservoirOperator,
        texts: Iterable[str | bytes],
        rng: np.random.Generator | None = None,
    ) -> np.ndarray:
        """Stack one fresh embedding per input into shape (n, reservoir_size)."""
        rows = [self.forward(trie, bank, text, rng=rng) for text in texts]
        if not rows:
            return np.zeros((0, bank.reservoir_size), dtype=float)
        return np.vstack(rows)
