"""Offline linear SVM readout over stacked embeddings."""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np
from sklearn.svm import SVC


def make_linear_svm(
    config: Mapping[str, Any] | None = None,
    *,
    rng: np.random.Generator | None = None,
) -> SVC:
    """Create a linear SVC (one-vs-one for multiclass); ``kernel`` overrides are ignored."""
    cfg = dict(config) if config is not None else {}
    cfg.pop("kernel", None)
    if rng is not None and "random_state" not in cfg:
        cfg["random_state"] = int(rng.integers(0, 2**31 - 1))
    return SVC(kernel="linear", **cfg)
