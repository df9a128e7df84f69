"""Reservoir bank and trie-driven update engine."""

from .bank import ReservoirBank
from .base import ReservoirOperator
from .engine import ReservoirEngine
from .factory import SCALING_ALIASES, make_bank, resolve_scaling

__all__ = [
    "SCALING_ALIASES",
    "ReservoirBank",
    "ReservoirEngine",
    "ReservoirOperator",
    "make_bank",
    "resolve_scaling",
]
