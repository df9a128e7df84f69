"""Constants and configuration dataclasses for the trie reservoir model."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

MAX_CHILDREN = 256
RESERVOIR_SIZE = 64
MAX_DEPTH = 16
ALPHA = 0.85
RHO = 0.9
OUT_DIM = 4
NOISE_SCALE = 0.01
SCALE_EPSILON = 1e-5
READOUT_INIT_SCALE = 0.01

SCALING_KINDS = ("mean_abs", "spectral")


@dataclass(frozen=True)
class ReservoirConfig:
    """Shape and dynamics of the trie and its reservoir bank."""

    alphabet_size: int = MAX_CHILDREN
    reservoir_size: int = RESERVOIR_SIZE
    max_depth: int = MAX_DEPTH
    alpha: float = ALPHA
    rho: float = RHO
    noise_scale: float = NOISE_SCALE
    scale_epsilon: float = SCALE_EPSILON
    scaling: str = "mean_abs"

    def __post_init__(self) -> None:
        if not (1 <= self.alphabet_size <= MAX_CHILDREN):
            raise ValueError(f"alphabet_size must be in [1, {MAX_CHILDREN}]")
        if self.reservoir_size < 1:
            raise ValueError("reservoir_size must be >= 1")
        if self.max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        if self.rho <= 0.0:
            raise ValueError("rho must be > 0")
        if self.noise_scale < 0.0:
            raise ValueError("noise_scale must be >= 0")
        if self.scale_epsilon < 0.0:
            raise ValueError("scale_epsilon must be >= 0")
        if self.scaling not in SCALING_KINDS:
            raise ValueError(f"scaling must be one of {set(SCALING_KINDS)}")


@dataclass(frozen=True)
class ReadoutConfig:
    """Size and initialisation of the softmax readout."""

    out_dim: int = OUT_DIM
    init_scale: float = READOUT_INIT_SCALE
    stable_softmax: bool = False

    def __post_init__(self) -> None:
        if self.out_dim < 1:
            raise ValueError("out_dim must be >= 1")
        if self.init_scale < 0.0:
            raise ValueError("init_scale must be >= 0")


@dataclass(frozen=True)
class TrainingConfig:
    """Schedule for the sequential SGD training loop.

    The learning rate is multiplied by ``lr_decay`` at the end of every
    ``decay_every``-th epoch.
    """

    epochs: int = 100
    learning_rate: float = 0.01
    lr_decay: float = 0.9
    decay_every: int = 20

    def __post_init__(self) -> None:
        if self.epochs < 1:
            raise ValueError("epochs must be >= 1")
        if self.learning_rate <= 0.0:
            raise ValueError("learning_rate must be > 0")
        if not (0.0 < self.lr_decay <= 1.0):
            raise ValueError("lr_decay must be in (0, 1]")
        if self.decay_every < 1:
            raise ValueError("decay_every must be >= 1")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "MAX_CHILDREN",
    "RESERVOIR_SIZE",
    "MAX_DEPTH",
    "ALPHA",
    "RHO",
    "OUT_DIM",
    "NOISE_SCALE",
    "SCALE_EPSILON",
    "READOUT_INIT_SCALE",
    "ReservoirConfig",
    "ReadoutConfig",
    "TrainingConfig",
]
