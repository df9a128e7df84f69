"""Shared numeric helpers and input encoding."""

from __future__ import annotations

import numpy as np


def to_bytes(text: str | bytes | bytearray) -> bytes:
    """Encode an input string as the byte sequence the trie is keyed on.

    Args:
        text: ``str`` (encoded as UTF-8) or a bytes-like object.

    Returns:
        bytes: Raw byte values in input order.

    Example:
        >>> list(to_bytes("hi"))
        [104, 105]
    """
    if isinstance(text, str):
        return text.encode("utf-8")
    if isinstance(text, (bytes, bytearray)):
        return bytes(text)
    raise TypeError(f"expected str or bytes, got {type(text).__name__}")


def uniform(
    rng: np.random.Generator, size: int | tuple[int, ...] | None = None, scale: float = 1.0
) -> np.ndarray:
    """Draw values uniformly from ``[-scale, scale]``.

    Args:
        rng: NumPy random generator.
        size: Output shape.
        scale: Half-width of the interval.

    Returns:
        np.ndarray: Samples with dtype float64.
    """
    return scale * rng.uniform(-1.0, 1.0, size=size)


def activate_tanh(x: np.ndarray) -> np.ndarray:
    """Hyperbolic tangent written out as ``(e^x - e^-x) / (e^x + e^-x)``.

    Args:
        x: Pre-activation values.

    Returns:
        np.ndarray: Values in ``[-1, 1]`` for inputs within exp's finite range.
    """
    x = np.asarray(x, dtype=float)
    e1 = np.exp(x)
    e2 = np.exp(-x)
    return (e1 - e2) / (e1 + e2)


def matvec(W: np.ndarray, x: np.ndarray) -> np.ndarray:
    """Dense matrix-vector product ``W @ x``.

    Args:
        W: Matrix of shape (n_out, n_in).
        x: Vector of shape (n_in,).

    Returns:
        np.ndarray: Vector of shape (n_out,).
    """
    if W.ndim != 2 or x.ndim != 1 or W.shape[1] != x.shape[0]:
        raise ValueError(f"cannot multiply matrix {W.shape} by vector {x.shape}")
    return W @ x


def softmax(logits: np.ndarray, stable: bool = False) -> np.ndarray:
    """Normalise logits with ``exp(z_i) / sum_k exp(z_k)``.

    Args:
        logits: 1D array of logits.
        stable: Subtract the max logit before exponentiating. The result is
            mathematically unchanged but cannot overflow.

    Returns:
        np.ndarray: Probabilities summing to 1.
    """
    z = np.asarray(logits, dtype=float)
    if stable:
        z = z - np.max(z)
    e = np.exp(z)
    return e / e.sum()


def input_rng(seed: int, text: str | bytes | bytearray) -> np.random.Generator:
    """Generator seeded by ``seed`` together with the input's bytes.

    Two calls with the same ``(seed, text)`` produce identical streams, and
    different inputs get unrelated streams.
    """
    if seed < 0:
        raise ValueError("seed must be >= 0")
    data = to_bytes(text)
    # length first, so trailing zero bytes cannot alias a shorter input
    return np.random.default_rng([int(seed), len(data), *data])


__all__ = ["to_bytes", "uniform", "activate_tanh", "matvec", "softmax", "input_rng"]
