"""The Transpose graph node."""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence

from .tensor import Tensor


class TransposeNode:
    """Permutes the dimensions of A into Y; an empty ``perm`` reverses them."""

    def __init__(self, a: str, y: str, perm: Sequence[int] = ()):
        self.a = a
        self.y = y
        self.perm = list(perm)

    @classmethod
    def from_json(cls, node: dict) -> "TransposeNode":
        """Build the node from its JSON description."""
        inputs = node.get("input")
        a = inputs[0] if isinstance(inputs, list) and inputs else ""
        outputs = node.get("output")
        y = outputs[0] if isinstance(outputs, list) and outputs else ""
        perm: list[int] = []
        attributes = node.get("attribute")
        if isinstance(attributes, list):
            for attr in attributes:
                if attr.get("name") == "perm":
                    perm.extend(int(value) for value in attr.get("ints", []))
        return cls(a, y, perm)

    def forward(self, iomap: MutableMapping[str, Tensor]) -> None:
        """Store the permuted copy of A under Y."""
        a = iomap.get(self.a)
        if a is None:
            raise KeyError("Transpose: Input tensor A not found in iomap")
        if not isinstance(a, Tensor):
            raise TypeError("Transpose: Unsupported data type for tensor A")
        existing = iomap.get(self.y)
        if existing is not None and (
            not isinstance(existing, Tensor) or existing.dtype != a.dtype
        ):
            raise TypeError("Transpose: Output tensor Y has incorrect type")
        iomap[self.y] = a.permute(self.perm)

    def inputs(self) -> list[str]:
        return [self.a]

    def outputs(self) -> list[str]:
        return [self.y]