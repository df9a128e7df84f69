"""Shared readout interfaces and helpers."""

from __future__ import annotations

from numbers import Integral
from typing import Protocol

import numpy as np

from ..errors import InvalidLabel


class Readout(Protocol):
    """Minimal interface shared by the online and offline readouts."""

    def fit(self, X: np.ndarray, y: np.ndarray): ...

    def predict(self, X: np.ndarray) -> np.ndarray: ...

    def decision_function(self, X: np.ndarray) -> np.ndarray: ...

    def score(self, X: np.ndarray, y: np.ndarray) -> float: ...


def coerce_label(label: object, out_dim: int) -> int:
    """Validate a gold class index against ``[0, out_dim)``."""
    if isinstance(label, (bool, np.bool_)) or not isinstance(label, (Integral, np.integer)):
        raise InvalidLabel(f"label must be an integer, got {label!r}")
    idx = int(label)
    if not (0 <= idx < out_dim):
        raise InvalidLabel(f"label {idx} outside [0, {out_dim})")
    return idx


def coerce_states(X: np.ndarray, width: int | None = None) -> np.ndarray:
    """Coerce one state or a stack of states to a 2D float array."""
    X_arr = np.asarray(X, dtype=float)
    if X_arr.ndim == 1:
        X_arr = X_arr.reshape(1, -1)
    if X_arr.ndim != 2:
        raise ValueError("states must be 1D or 2D")
    if width is not None and X_arr.shape[1] != width:
        raise ValueError(f"states must have {width} features, got {X_arr.shape[1]}")
    return X_arr
