"""Depth-indexed bank of frozen random reservoir matrices."""

from __future__ import annotations

import logging

import numpy as np

from ..config import RESERVOIR_SIZE, RHO, SCALE_EPSILON, SCALING_KINDS
from ..errors import AllocationFailure
from ..utils import uniform

logger = logging.getLogger(__name__)


class ReservoirBank:
    """One square random matrix per trie depth, never trained.

    Each matrix is drawn i.i.d. from ``U[-1, 1]`` and rescaled by a single
    scalar. With ``scaling="mean_abs"`` the scalar is ``rho / mean(|W|)``:
    a cheap proxy for spectral-radius normalisation that does NOT bound the
    true spectral radius (for a dense 64x64 matrix it ends up several times
    larger than ``rho``). ``scaling="spectral"`` computes the eigenvalues and
    rescales so the spectral radius equals ``rho`` exactly. In both cases no
    rescale is applied when the measured magnitude is below ``scale_epsilon``.
    """

    def __init__(
        self,
        matrices: np.ndarray,
        *,
        rho: float = RHO,
        scaling: str = "mean_abs",
    ) -> None:
        W = np.array(matrices, dtype=float)
        if W.ndim != 3 or W.shape[1] != W.shape[2]:
            raise ValueError("matrices must have shape (depth_count, n, n)")
        if W.shape[0] < 1:
            raise ValueError("bank needs at least one depth")
        W.flags.writeable = False
        self._W = W
        self.rho = float(rho)
        self.scaling = str(scaling)

    @property
    def depth_count(self) -> int:
        return int(self._W.shape[0])

    @property
    def reservoir_size(self) -> int:
        return int(self._W.shape[1])

    def __len__(self) -> int:
        return self.depth_count

    @classmethod
    def initialize(
        cls,
        depth_count: int,
        seed: int | None = None,
        *,
        rng: np.random.Generator | None = None,
        reservoir_size: int = RESERVOIR_SIZE,
        rho: float = RHO,
        scale_epsilon: float = SCALE_EPSILON,
        scaling: str = "mean_abs",
    ) -> "ReservoirBank":
        """Allocate and fill ``depth_count`` scaled random matrices.

        Args:
            depth_count: Number of depth levels (normally the trie's max depth).
            seed: Seed for a fresh generator; ignored when ``rng`` is given.
            rng: Generator to draw from.
            reservoir_size: Matrix dimension.
            rho: Target scale.
            scale_epsilon: Magnitude below which no rescale happens.
            scaling: ``"mean_abs"`` or ``"spectral"``.

        Returns:
            ReservoirBank: The frozen bank.
        """
        if depth_count < 1:
            raise ValueError("depth_count must be >= 1")
        if reservoir_size < 1:
            raise ValueError("reservoir_size must be >= 1")
        if scaling not in SCALING_KINDS:
            raise ValueError(f"scaling must be one of {set(SCALING_KINDS)}")
        if rng is None:
            rng = np.random.default_rng(seed)

        try:
            W = np.empty((depth_count, reservoir_size, reservoir_size), dtype=float)
        except MemoryError as exc:
            raise AllocationFailure(
                f"could not allocate {depth_count} reservoir matrices of size {reservoir_size}"
            ) from exc

        for depth in range(depth_count):
            W[depth] = uniform(rng, (reservoir_size, reservoir_size))
            if scaling == "spectral":
                magnitude = float(np.max(np.abs(np.linalg.eigvals(W[depth]))))
            else:
                magnitude = float(np.mean(np.abs(W[depth])))
            scale = rho / magnitude if magnitude > scale_epsilon else 1.0
            W[depth] *= scale
            logger.debug(
                "depth %d: %s=%.4f scale=%.4f", depth, scaling, magnitude, scale
            )

        return cls(W, rho=rho, scaling=scaling)

    def matrix(self, depth: int) -> np.ndarray:
        if not (0 <= depth < self.depth_count):
            raise ValueError(
                f"no reservoir matrix for depth {depth}; bank has {self.depth_count} levels"
            )
        return self._W[depth]

    def mean_abs(self) -> np.ndarray:
        """Mean absolute entry per depth, shape (depth_count,)."""
        return np.abs(self._W).mean(axis=(1, 2))

    def spectral_radius(self) -> np.ndarray:
        """Largest absolute eigenvalue per depth, shape (depth_count,)."""
        return np.array(
            [np.max(np.abs(np.linalg.eigvals(W))) for W in self._W], dtype=float
        )
