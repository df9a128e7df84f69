from __future__ import annotations

from typing import List

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.svm import SVC

from ..config import ReservoirConfig, TrainingConfig
from ..readouts.softmax_linear import SoftmaxLinearReadout
from ..readouts.factory import SOFTMAX_KINDS
from ..readouts.svm_linear import make_linear_svm
from ..reservoirs.bank import ReservoirBank
from ..reservoirs.engine import ReservoirEngine
from ..reservoirs.factory import make_bank, resolve_scaling
from ..results import TrainingResult
from ..training import train_readout
from ..trie import PrefixTrie
from ..utils import input_rng


class TrieReservoirClassifier(ClassifierMixin, BaseEstimator):
    """String classifier: trie walk -> frozen reservoir -> trained readout.

    Notes:
    - `fit` builds the trie from the training strings themselves, draws the
      reservoir bank once and trains only the readout.
    - With `reproducible_noise=True` every forward pass seeds its noise from
      `(seed, input bytes)`, so an input always gets the same embedding.
      Otherwise noise is fresh on every pass and embeddings of the same
      input differ between calls.
    - `readout="svm"` embeds every training string once and fits a linear
      SVC on the stacked embeddings instead of running SGD.
    """

    def __init__(
        self,
        reservoir_size: int = 64,
        max_depth: int = 16,
        alpha: float = 0.85,
        rho: float = 0.9,
        noise_scale: float = 0.01,
        scaling: str = "mean_abs",
        readout: str = "softmax",
        epochs: int = 100,
        learning_rate: float = 0.01,
        lr_decay: float = 0.9,
        decay_every: int = 20,
        init_scale: float = 0.01,
        stable_softmax: bool = False,
        reproducible_noise: bool = False,
        seed: int = 0,
    ):
        self.reservoir_size = int(reservoir_size)
        self.max_depth = int(max_depth)
        self.alpha = float(alpha)
        self.rho = float(rho)
        self.noise_scale = float(noise_scale)
        self.scaling = str(scaling)
        self.readout = str(readout)
        self.epochs = int(epochs)
        self.learning_rate = float(learning_rate)
        self.lr_decay = float(lr_decay)
        self.decay_every = int(decay_every)
        self.init_scale = float(init_scale)
        self.stable_softmax = bool(stable_softmax)
        self.reproducible_noise = bool(reproducible_noise)
        self.seed = int(seed)

        # learned / set during fit
        self.trie_: PrefixTrie | None = None
        self.bank_: ReservoirBank | None = None
        self.engine_: ReservoirEngine | None = None
        self.readout_: SoftmaxLinearReadout | SVC | None = None
        self.classes_: np.ndarray | None = None
        self.history_: TrainingResult | None = None

    @staticmethod
    def _as_texts(X) -> List[str | bytes]:
        if isinstance(X, (str, bytes, bytearray)):
            return [bytes(X) if isinstance(X, bytearray) else X]
        return list(X)

    def _noise_rng(self, text: str | bytes) -> np.random.Generator | None:
        return input_rng(self.seed, text) if self.reproducible_noise else None

    def embed(self, X) -> np.ndarray:
        """Reservoir embeddings of shape (n_samples, reservoir_size)."""
        if self.trie_ is None or self.bank_ is None or self.engine_ is None:
            raise RuntimeError("Model not fitted: call fit() before embed().")
        rows = [
            self.engine_.forward(self.trie_, self.bank_, text, rng=self._noise_rng(text))
            for text in self._as_texts(X)
        ]
        if not rows:
            return np.zeros((0, self.reservoir_size), dtype=float)
        return np.vstack(rows)

    def fit(self, X, y):
        texts = self._as_texts(X)
        y_arr = np.asarray(y).reshape(-1)
        if len(texts) != y_arr.shape[0]:
            raise ValueError("X and y must have the same number of samples")
        if not texts:
            raise ValueError("fit requires at least one sample")

        self.classes_, y_idx = np.unique(y_arr, return_inverse=True)
        rng = np.random.default_rng(self.seed)

        reservoir_cfg = ReservoirConfig(
            reservoir_size=self.reservoir_size,
            max_depth=self.max_depth,
            alpha=self.alpha,
            rho=self.rho,
            noise_scale=self.noise_scale,
            scaling=resolve_scaling(self.scaling),
        )
        self.trie_ = PrefixTrie.from_corpus(
            texts, max_depth=self.max_depth, alphabet_size=reservoir_cfg.alphabet_size
        )
        self.bank_ = make_bank(reservoir_config=reservoir_cfg, rng=rng)
        self.engine_ = ReservoirEngine.from_config(reservoir_cfg, rng=rng)

        kind = self.readout.lower().strip()
        if kind in SOFTMAX_KINDS:
            self.readout_ = SoftmaxLinearReadout(
                reservoir_size=self.reservoir_size,
                out_dim=len(self.classes_),
                init_scale=self.init_scale,
                stable_softmax=self.stable_softmax,
                rng=rng,
            )
            train_cfg = TrainingConfig(
                epochs=self.epochs,
                learning_rate=self.learning_rate,
                lr_decay=self.lr_decay,
                decay_every=self.decay_every,
            )
            self.history_ = train_readout(
                self.trie_,
                self.bank_,
                self.engine_,
                self.readout_,
                list(zip(texts, y_idx.tolist())),
                train_cfg,
                noise_seed=self.seed if self.reproducible_noise else None,
            )
        elif kind == "svm":
            self.readout_ = make_linear_svm(rng=rng)
            self.readout_.fit(self.embed(texts), y_idx)
            self.history_ = None
        else:
            raise ValueError("readout must be one of {'softmax', 'linear', 'sgd', 'svm'}")
        return self

    def predict_proba(self, X) -> np.ndarray:
        if self.readout_ is None:
            raise RuntimeError("Model not fitted: call fit() before predict_proba().")
        if not isinstance(self.readout_, SoftmaxLinearReadout):
            raise ValueError("predict_proba requires readout='softmax'")
        emb = self.embed(X)
        return np.vstack([self.readout_.forward(row) for row in emb])

    def predict(self, X) -> np.ndarray:
        if self.readout_ is None or self.classes_ is None:
            raise RuntimeError("Model not fitted: call fit() before predict().")
        idx = np.asarray(self.readout_.predict(self.embed(X)), dtype=int)
        return self.classes_[idx]
