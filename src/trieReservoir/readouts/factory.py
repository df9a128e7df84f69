"""Readout factory helpers."""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from ..config import RESERVOIR_SIZE
from .base import Readout
from .softmax_linear import SoftmaxLinearReadout
from .svm_linear import make_linear_svm

SOFTMAX_KINDS = frozenset({"softmax", "linear", "sgd"})


def make_readout(
    kind: str = "softmax",
    config: Mapping[str, Any] | None = None,
    *,
    reservoir_size: int = RESERVOIR_SIZE,
    rng: np.random.Generator | None = None,
) -> Readout:
    """Create a readout by kind (softmax, svm)."""
    kind = kind.lower().strip()
    if kind in SOFTMAX_KINDS:
        cfg = dict(config) if config is not None else {}
        cfg.setdefault("reservoir_size", reservoir_size)
        if rng is not None and "rng" not in cfg:
            cfg["rng"] = rng
        return SoftmaxLinearReadout(**cfg)
    if kind == "svm":
        return make_linear_svm(config, rng=rng)
    raise ValueError(f"Unknown readout kind: {kind}")
