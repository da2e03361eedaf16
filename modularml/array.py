"""Fixed-size one-dimensional arrays of real numbers."""

from __future__ import annotations

import numbers
import random
from collections.abc import Iterable, Iterator

_SHORT_LIMIT = 50
_EDGE_COUNT = 10


def _check_number(value):
    if not isinstance(value, numbers.Real):
        raise TypeError(
            f"Array elements must be real numbers, got {type(value).__name__}"
        )
    return value


def _format_value(value) -> str:
    if isinstance(value, numbers.Integral):
        return str(int(value))
    return f"{float(value):.6f}"


class Array:
    """A sized sequence of real numbers with bounds-checked access."""

    __slots__ = ("_items",)

    def __init__(self, data: Iterable = ()):
        self._items = [_check_number(value) for value in data]

    @classmethod
    def zeros(cls, size: int) -> "Array":
        """Return an array of ``size`` zeros."""
        if size < 0:
            raise ValueError(f"Array size must be non-negative, got {size}")
        return cls([0] * size)

    def __len__(self) -> int:
        return len(self._items)

    def _check_index(self, index) -> int:
        if not isinstance(index, numbers.Integral) or isinstance(index, bool):
            raise TypeError(f"Array index must be an integer, got {index!r}")
        if not 0 <= index < len(self._items):
            raise IndexError(
                f"Invalid array index: {index}. Array size: {len(self._items)}"
            )
        return int(index)

    def __getitem__(self, index):
        return self._items[self._check_index(index)]

    def __setitem__(self, index, value) -> None:
        self._items[self._check_index(index)] = _check_number(value)

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __str__(self) -> str:
        if len(self._items) > _SHORT_LIMIT:
            head = ", ".join(map(_format_value, self._items[:_EDGE_COUNT]))
            tail = ", ".join(map(_format_value, self._items[-_EDGE_COUNT:]))
            return f"[{head}, ..., {tail}]"
        return "[" + ", ".join(map(_format_value, self._items)) + "]"

    def __repr__(self) -> str:
        return f"Array({self._items!r})"

    def subarray(self, start: int, end: int) -> "Array":
        """Return a copy of the elements in ``[start, end)``."""
        size = len(self._items)
        if start < 0 or start >= size or end > size or start > end:
            raise IndexError("Invalid array subarray index")
        return Array(self._items[start:end])

    def fill(self, value) -> None:
        """Set every element to ``value``."""
        _check_number(value)
        self._items = [value] * len(self._items)


def _check_bounds(lo_sz, hi_sz, lo_v, hi_v) -> None:
    if lo_sz < 0 or lo_sz > hi_sz:
        raise ValueError(f"Invalid size range [{lo_sz}, {hi_sz}]")
    if lo_v > hi_v:
        raise ValueError(f"Invalid value range [{lo_v}, {hi_v}]")


def generate_random_array_integral(
    lo_sz: int = 1,
    hi_sz: int = 5,
    lo_v: int = 1,
    hi_v: int = 10,
    rng: random.Random | None = None,
) -> Array:
    """Random-length array of random integers, both bounds inclusive."""
    if not all(isinstance(v, numbers.Integral) for v in (lo_v, hi_v)):
        raise TypeError("Integral random arrays need integral value bounds")
    _check_bounds(lo_sz, hi_sz, lo_v, hi_v)
    rng = random.Random() if rng is None else rng
    size = rng.randint(lo_sz, hi_sz)
    return Array(rng.randint(lo_v, hi_v) for _ in range(size))


def generate_random_array_real(
    lo_sz: int = 1,
    hi_sz: int = 5,
    lo_v: float = 1.0,
    hi_v: float = 100.0,
    rng: random.Random | None = None,
) -> Array:
    """Random-length array of uniformly drawn floats within the bounds."""
    _check_bounds(lo_sz, hi_sz, lo_v, hi_v)
    rng = random.Random() if rng is None else rng
    size = rng.randint(lo_sz, hi_sz)
    return Array(rng.uniform(float(lo_v), float(hi_v)) for _ in range(size))