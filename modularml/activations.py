"""Element-wise activation nodes: ReLU, sigmoid, swish and tanh."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import MutableMapping

import numpy as np

from .operations import elementwise
from .tensor import Tensor

_FLOAT_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


def _first_name(node: dict, key: str) -> str:
    names = node.get(key)
    if isinstance(names, list) and names:
        return names[0]
    return ""


def _sigmoid(value: float) -> float:
    if value >= 0:
        return 1.0 / (1.0 + math.exp(-value))
    exp_value = math.exp(value)
    return exp_value / (1.0 + exp_value)


class ActivationNode(ABC):
    """A graph node that applies one scalar function to every element of X."""

    supported_dtypes: tuple[np.dtype, ...] = _FLOAT_DTYPES

    def __init__(self, x: str, y: str):
        self.x = x
        self.y = y

    @classmethod
    def from_json(cls, node: dict) -> "ActivationNode":
        """Build the node from its JSON description."""
        return cls(_first_name(node, "input"), _first_name(node, "output"))

    @staticmethod
    @abstractmethod
    def _apply(value):
        """The scalar function applied to each element."""

    def forward(self, iomap: MutableMapping[str, Tensor]) -> None:
        """Compute Y from X, creating Y in ``iomap`` when it is missing."""
        label = type(self).__name__
        x = iomap.get(self.x)
        if x is None:
            raise KeyError(f"{label}: Input tensor X not found in iomap")
        if not isinstance(x, Tensor) or x.dtype not in self.supported_dtypes:
            raise TypeError(f"{label}: Unsupported data type for tensor X")
        y = iomap.get(self.y)
        if y is None:
            y = x.copy()
            iomap[self.y] = y
        elif not isinstance(y, Tensor) or y.dtype != x.dtype:
            raise TypeError(f"{label}: Output tensor Y has incorrect type")
        elementwise(x, self._apply, y)

    def inputs(self) -> list[str]:
        return [self.x]

    def outputs(self) -> list[str]:
        return [self.y]


class ReLUNode(ActivationNode):
    """y = max(x, 0)."""

    @staticmethod
    def _apply(value):
        return value if value > 0 else 0


class SigmoidNode(ActivationNode):
    """y = 1 / (1 + exp(-x))."""

    @staticmethod
    def _apply(value):
        return _sigmoid(value)


class SwishNode(ActivationNode):
    """y = x * sigmoid(x)."""

    @staticmethod
    def _apply(value):
        return value * _sigmoid(value)


class TanHNode(ActivationNode):
    """y = tanh(x)."""

    @staticmethod
    def _apply(value):
        return math.tanh(value)