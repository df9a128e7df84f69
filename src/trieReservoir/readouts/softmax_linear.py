"""Linear softmax readout trained by single-example SGD."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from ..config import OUT_DIM, READOUT_INIT_SCALE, RESERVOIR_SIZE, ReadoutConfig
from ..errors import AllocationFailure
from ..utils import softmax, uniform
from .base import coerce_label, coerce_states


class SoftmaxLinearReadout:
    """Dense ``(out_dim, reservoir_size)`` map from embedding to class probabilities.

    This is the only trained state in the model. There is no bias term.
    """

    def __init__(
        self,
        *,
        reservoir_size: int = RESERVOIR_SIZE,
        out_dim: int = OUT_DIM,
        init_scale: float = READOUT_INIT_SCALE,
        stable_softmax: bool = False,
        rng: np.random.Generator | None = None,
    ) -> None:
        if reservoir_size < 1:
            raise ValueError("reservoir_size must be >= 1")
        if out_dim < 1:
            raise ValueError("out_dim must be >= 1")
        self.reservoir_size = int(reservoir_size)
        self.out_dim = int(out_dim)
        self.init_scale = float(init_scale)
        self.stable_softmax = bool(stable_softmax)
        rng = rng if rng is not None else np.random.default_rng()
        try:
            self.weights = uniform(rng, (self.out_dim, self.reservoir_size), self.init_scale)
        except MemoryError as exc:
            raise AllocationFailure(
                f"could not allocate readout of shape ({self.out_dim}, {self.reservoir_size})"
            ) from exc

    @classmethod
    def from_config(
        cls,
        config: ReadoutConfig,
        *,
        reservoir_size: int = RESERVOIR_SIZE,
        rng: np.random.Generator | None = None,
    ) -> "SoftmaxLinearReadout":
        return cls(
            reservoir_size=reservoir_size,
            out_dim=config.out_dim,
            init_scale=config.init_scale,
            stable_softmax=config.stable_softmax,
            rng=rng,
        )

    def _check_state(self, state: np.ndarray) -> np.ndarray:
        state = np.asarray(state, dtype=float)
        if state.shape != (self.reservoir_size,):
            raise ValueError(
                f"state must have shape ({self.reservoir_size},), got {state.shape}"
            )
        return state

    def forward(self, state: np.ndarray) -> np.ndarray:
        """Class probabilities for one embedding."""
        state = self._check_state(state)
        return softmax(self.weights @ state, stable=self.stable_softmax)

    def loss(self, state: np.ndarray, gold_index: int) -> float:
        """Cross-entropy ``-log p[gold]`` for one example."""
        gold = coerce_label(gold_index, self.out_dim)
        return float(-np.log(self.forward(state)[gold]))

    def train_step(self, state: np.ndarray, gold_index: int, learning_rate: float) -> float:
        """One SGD step on softmax cross-entropy.

        The gradient w.r.t. the logits is ``p - onehot(gold)``, so row ``i``
        moves by ``-learning_rate * (p_i - [i == gold]) * state``.

        Returns:
            float: Loss on this example before the update.
        """
        gold = coerce_label(gold_index, self.out_dim)
        if learning_rate < 0.0:
            raise ValueError("learning_rate must be >= 0")
        state = self._check_state(state)
        probs = self.forward(state)
        grad = probs.copy()
        grad[gold] -= 1.0
        self.weights -= float(learning_rate) * np.outer(grad, state)
        return float(-np.log(probs[gold]))

    def fit(
        self,
        X: np.ndarray,
        y: Iterable[int],
        *,
        epochs: int = 1,
        learning_rate: float = 0.01,
        rng: np.random.Generator | None = None,
    ):
        """Run ``epochs`` passes of :meth:`train_step` over precomputed embeddings.

        Rows are visited in order unless ``rng`` is given, in which case each
        epoch is shuffled.
        """
        X_arr = coerce_states(X, self.reservoir_size)
        y_arr = [coerce_label(label, self.out_dim) for label in np.asarray(y).reshape(-1)]
        if X_arr.shape[0] != len(y_arr):
            raise ValueError("X and y must have compatible shapes")

        indices = np.arange(X_arr.shape[0])
        for _ in range(int(epochs)):
            if rng is not None:
                rng.shuffle(indices)
            for idx in indices:
                self.train_step(X_arr[idx], y_arr[idx], learning_rate)
        return self

    def decision_function(self, X: np.ndarray) -> np.ndarray:
        return coerce_states(X, self.reservoir_size) @ self.weights.T

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        X_arr = coerce_states(X, self.reservoir_size)
        return np.vstack([self.forward(row) for row in X_arr])

    def predict(self, X: np.ndarray) -> np.ndarray:
        return np.argmax(self.decision_function(X), axis=1).astype(np.int64)

    def score(self, X: np.ndarray, y: Iterable[int]) -> float:
        y_arr = np.asarray(y, dtype=int).reshape(-1)
        if y_arr.size == 0:
            return 0.0
        return float((self.predict(X) == y_arr).mean())
