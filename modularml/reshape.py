"""The Reshape graph node."""

from __future__ import annotations

import math
from collections.abc import MutableMapping

import numpy as np

from .tensor import Tensor

_DATA_DTYPES = (
    np.dtype(np.float32),
    np.dtype(np.float64),
    np.dtype(np.int32),
    np.dtype(np.int64),
)
_SHAPE_DTYPE = np.dtype(np.int64)


class ReshapeNode:
    """Gives the data tensor the shape held in a one-dimensional int64 tensor.

    One entry of the shape may be -1, in which case it is inferred from the
    element count. With ``allowzero`` set to 1 a zero entry takes the size of
    the matching input dimension.
    """

    def __init__(self, data: str, shape: str, reshaped: str, allowzero: int = 0):
        if allowzero not in (0, 1):
            raise ValueError("Invalid value for allowzero. Must be 0 or 1.")
        self.data = data
        self.shape = shape
        self.reshaped = reshaped
        self.allowzero = allowzero

    @classmethod
    def from_json(cls, node: dict) -> "ReshapeNode":
        """Build the node from its JSON description."""
        inputs = node.get("input")
        data, shape = "", ""
        if isinstance(inputs, list):
            data = inputs[0] if len(inputs) > 0 else ""
            shape = inputs[1] if len(inputs) > 1 else ""
        outputs = node.get("output")
        reshaped = outputs[0] if isinstance(outputs, list) and outputs else ""
        allowzero = 0
        attributes = node.get("attribute")
        if isinstance(attributes, list):
            for attr in attributes:
                if attr.get("name") == "allowzero":
                    allowzero = int(attr["i"])
        return cls(data, shape, reshaped, allowzero)

    def _target_shape(self, data: Tensor, requested: list[int]) -> list[int]:
        new_shape: list[int] = []
        inferred_at: int | None = None
        known = 1
        for position, dim in enumerate(requested):
            if dim == -1:
                if inferred_at is not None:
                    raise ValueError(
                        "Invalid reshape: multiple -1 values in shape tensor."
                    )
                inferred_at = position
                new_shape.append(-1)
            elif dim == 0 and self.allowzero == 1:
                if position >= len(data.shape):
                    raise ValueError(
                        f"Invalid reshape: no input dimension {position} to copy."
                    )
                new_shape.append(data.shape[position])
                known *= data.shape[position]
            elif dim < 0:
                raise ValueError(f"Invalid reshape: negative dimension {dim}.")
            else:
                new_shape.append(dim)
                known *= dim
        if inferred_at is not None:
            if known == 0 or data.size % known != 0:
                raise ValueError(
                    "Invalid reshape: inferred dimension does not match total elements."
                )
            new_shape[inferred_at] = data.size // known
        return new_shape

    def forward(self, iomap: MutableMapping[str, Tensor]) -> None:
        """Write the reshaped data to the output, creating it when missing."""
        data = iomap.get(self.data)
        if data is None:
            raise KeyError("ReshapeNode: Input tensor data not found in iomap")
        shape = iomap.get(self.shape)
        if shape is None:
            raise KeyError("ReshapeNode: Input tensor shape not found in iomap")
        if (
            not isinstance(data, Tensor)
            or not isinstance(shape, Tensor)
            or data.dtype not in _DATA_DTYPES
            or shape.dtype != _SHAPE_DTYPE
        ):
            raise TypeError("ReshapeNode: Unsupported data type for tensor data")

        output = iomap.get(self.reshaped)
        if output is None:
            output = data.copy()
            iomap[self.reshaped] = output
        elif not isinstance(output, Tensor) or output.dtype != data.dtype:
            raise TypeError("ReshapeNode: Output tensor has incorrect type")

        new_shape = self._target_shape(data, [int(v) for v in shape.data])
        if math.prod(new_shape) != data.size:
            raise ValueError(
                f"Cannot reshape {list(data.shape)} into {new_shape}: sizes differ"
            )
        output.assign(data)
        output.reshape(new_shape)

    def inputs(self) -> list[str]:
        return [self.data, self.shape]

    def outputs(self) -> list[str]:
        return [self.reshaped]