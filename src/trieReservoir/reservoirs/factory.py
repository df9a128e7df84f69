"""Reservoir bank factory."""

from __future__ import annotations

import numpy as np

from ..config import ReservoirConfig
from .bank import ReservoirBank

SCALING_ALIASES = {
    "mean_abs": "mean_abs",
    "mean-abs": "mean_abs",
    "heuristic": "mean_abs",
    "spectral": "spectral",
    "spectral_radius": "spectral",
    "eig": "spectral",
}


def resolve_scaling(kind: str) -> str:
    """Map a scaling name or alias to its canonical kind."""
    key = str(kind).strip().lower()
    if key not in SCALING_ALIASES:
        raise ValueError("scaling must be one of {'mean_abs', 'spectral'}")
    return SCALING_ALIASES[key]


def make_bank(
    *,
    depth_count: int | None = None,
    scaling: str | None = None,
    reservoir_config: ReservoirConfig | None = None,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> ReservoirBank:
    """Create a reservoir bank, resolving scaling aliases."""
    cfg = reservoir_config if reservoir_config is not None else ReservoirConfig()
    kind = resolve_scaling(scaling if scaling is not None else cfg.scaling)
    return ReservoirBank.initialize(
        cfg.max_depth if depth_count is None else depth_count,
        seed,
        rng=rng,
        reservoir_size=cfg.reservoir_size,
        rho=cfg.rho,
        scale_epsilon=cfg.scale_epsilon,
        scaling=kind,
    )
