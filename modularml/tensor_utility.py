"""Comparison and weight initialisation helpers for tensors."""

from __future__ import annotations

import math

import numpy as np

from .tensor import Tensor


def tensors_are_close(
    t1: Tensor, t2: Tensor, tolerance=0.01, verbose: bool = False
) -> bool:
    """Whether every pair of elements differs by at most ``tolerance``.

    The tolerance is taken in the element type of ``t1``, so for integer
    tensors the default demands exact equality.
    """
    if t1.shape != t2.shape:
        if verbose:
            print(f"Shape mismatch: {list(t1.shape)} vs {list(t2.shape)}")
        return False
    limit = float(np.asarray(tolerance).astype(t1.dtype))
    first = np.asarray(list(t1.data), dtype=np.float64)
    second = np.asarray(list(t2.data), dtype=np.float64)
    close = True
    for index, (a, b) in enumerate(zip(first, second)):
        if abs(a - b) > limit:
            if not verbose:
                return False
            print(f"Mismatch at index {index}: {a} vs {b}")
            close = False
    return close


def kaiming_uniform(
    w: Tensor,
    in_channels: int,
    kernel_size: int,
    rng: np.random.Generator | None = None,
) -> None:
    """Fill ``w`` in place with Kaiming-uniform values for a ReLU layer."""
    if not np.issubdtype(w.dtype, np.floating):
        raise TypeError("Kaiming initialisation needs a floating-point tensor")
    fan_in = in_channels * kernel_size
    if fan_in <= 0:
        raise ValueError("in_channels and kernel_size must be positive")
    bound = math.sqrt(6.0 / fan_in)
    rng = np.random.default_rng() if rng is None else rng
    values = rng.uniform(-bound, bound, size=w.size)
    w.assign(Tensor(w.shape, values, w.dtype))