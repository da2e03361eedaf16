"""Creation of tensors through a replaceable constructor."""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

from .tensor import Tensor

TensorConstructor = Callable[..., Tensor]


def _default_constructor(shape, data=None, dtype=None) -> Tensor:
    return Tensor(shape, data, dtype)


_constructor: TensorConstructor = _default_constructor


def set_tensor_constructor(constructor: TensorConstructor) -> None:
    """Use ``constructor(shape, data, dtype)`` for every tensor created here."""
    global _constructor
    if not callable(constructor):
        raise TypeError("A tensor constructor must be callable")
    _constructor = constructor


def reset_tensor_constructor() -> None:
    """Go back to the built-in tensor constructor."""
    global _constructor
    _constructor = _default_constructor


def create_tensor(shape, data=None, dtype=None) -> Tensor:
    """Create a tensor of ``shape``, filled from ``data`` or with zeros."""
    return _constructor(shape, data, dtype)


def random_tensor(
    shape,
    lo_v=0,
    hi_v=1,
    dtype=None,
    rng: np.random.Generator | None = None,
) -> Tensor:
    """Create a tensor of uniformly drawn values in ``[lo_v, hi_v]``."""
    if lo_v > hi_v:
        raise ValueError(f"Invalid value range [{lo_v}, {hi_v}]")
    dt = np.dtype(np.float32 if dtype is None else dtype)
    rng = np.random.default_rng() if rng is None else rng
    count = math.prod(tuple(shape))
    if dt == np.bool_ or np.issubdtype(dt, np.integer):
        values = rng.integers(int(lo_v), int(hi_v), size=count, endpoint=True)
    else:
        values = rng.uniform(float(lo_v), float(hi_v), size=count)
    return create_tensor(shape, values.astype(dt), dt)