"""Reservoir operator protocol."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class ReservoirOperator(Protocol):
    """Minimal protocol for a depth-indexed bank of recurrent weights."""

    depth_count: int
    reservoir_size: int

    def matrix(self, depth: int) -> np.ndarray:
        """Return the read-only ``(reservoir_size, reservoir_size)`` matrix for ``depth``."""
