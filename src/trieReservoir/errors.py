"""Exception types raised by the trie reservoir components."""

from __future__ import annotations


class AllocationFailure(MemoryError):
    """Resource exhaustion while creating trie nodes or weight matrices."""


class InvalidLabel(ValueError):
    """Gold label outside ``[0, out_dim)`` passed to a readout."""


__all__ = ["AllocationFailure", "InvalidLabel"]
