"""Per-channel normalisation of image batches."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .factory import create_tensor
from .tensor import Tensor

_CHANNELS = 3


def _channel_values(values: Sequence[float], name: str) -> np.ndarray:
    array = np.asarray(list(values), dtype=np.float32)
    if array.shape != (_CHANNELS,):
        raise ValueError(f"{name} must hold exactly {_CHANNELS} values.")
    return array


def normalize(tensor: Tensor, mean: Sequence[float], std: Sequence[float]) -> Tensor:
    """Return ``(x - mean[c]) / std[c]`` for an (N, 3, H, W) tensor.

    The input is left untouched; the result is a new float32 tensor of the
    same shape.
    """
    shape = tensor.shape
    if len(shape) != 4:
        raise ValueError("Input tensor must have 4 dimensions.")
    if shape[1] != _CHANNELS:
        raise ValueError("Input tensor must have 3 channels (C == 3).")
    means = _channel_values(mean, "mean").reshape(1, _CHANNELS, 1, 1)
    stds = _channel_values(std, "std").reshape(1, _CHANNELS, 1, 1)

    values = np.asarray(list(tensor.data), dtype=np.float32).reshape(shape)
    with np.errstate(divide="ignore", invalid="ignore"):
        normalized = ((values - means) / stds).astype(np.float32)
    return create_tensor(shape, normalized, np.float32)