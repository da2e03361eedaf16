"""Dense n-dimensional tensors stored in row-major order."""

from __future__ import annotations

import math
import numbers
import operator
from itertools import accumulate

import numpy as np

from .array import Array

_DEFAULT_DTYPE = np.float32


def _as_dtype(dtype) -> np.dtype:
    dt = np.dtype(dtype)
    if dt == np.bool_ or np.issubdtype(dt, np.integer) or np.issubdtype(dt, np.floating):
        return dt
    raise TypeError(f"Tensor elements must be of an arithmetic type, got {dt}")


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _as_shape(shape) -> tuple[int, ...]:
    dims = tuple(shape)
    for dim in dims:
        if not _is_int(dim):
            raise TypeError(f"Shape dimensions must be integers, got {dim!r}")
        if dim < 0:
            raise ValueError(f"Shape dimensions must be non-negative, got {dim}")
    return tuple(int(dim) for dim in dims)


class Tensor:
    """A multi-dimensional array of numbers with a fixed element type."""

    __slots__ = ("_array",)

    def __init__(self, shape, data=None, dtype=None):
        dims = _as_shape(shape)
        if data is None:
            dt = _as_dtype(_DEFAULT_DTYPE if dtype is None else dtype)
            self._array = np.zeros(dims, dtype=dt)
            return
        values = data if isinstance(data, np.ndarray) else np.asarray(list(data))
        dt = _as_dtype(values.dtype if dtype is None else dtype)
        flat = values.astype(dt).ravel()
        expected = math.prod(dims)
        if flat.size != expected:
            raise ValueError(
                f"Data holds {flat.size} elements but shape {list(dims)} needs {expected}"
            )
        self._array = flat.reshape(dims)

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "Tensor":
        tensor = cls.__new__(cls)
        tensor._array = array
        return tensor

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(int(d) for d in self._array.shape)

    @property
    def size(self) -> int:
        return int(self._array.size)

    @property
    def dtype(self) -> np.dtype:
        return self._array.dtype

    @property
    def data(self) -> Array:
        """The elements in row-major order."""
        return Array(self._array.ravel().tolist())

    @property
    def offsets(self) -> Array:
        """Row-major element offsets of each dimension."""
        shape = self.shape
        if not shape:
            return Array()
        strides = list(accumulate(reversed(shape[1:]), operator.mul, initial=1))
        return Array(reversed(strides))

    def _locate(self, index) -> tuple[int, ...]:
        if _is_int(index):
            if not 0 <= index < self.size:
                raise IndexError(
                    f"Invalid tensor index: {index}. Tensor size: {self.size}"
                )
            if not self.shape:
                return ()
            return tuple(int(i) for i in np.unravel_index(int(index), self.shape))
        if isinstance(index, (tuple, list, Array)):
            indices = tuple(index)
            if len(indices) != self._array.ndim:
                raise IndexError(
                    f"Expected {self._array.ndim} indices, got {len(indices)}"
                )
            for position, dim in zip(indices, self.shape):
                if not _is_int(position) or not 0 <= position < dim:
                    raise IndexError(
                        f"Invalid tensor indices {list(indices)} for shape {list(self.shape)}"
                    )
            return tuple(int(i) for i in indices)
        raise TypeError(f"Unsupported tensor index: {index!r}")

    def __getitem__(self, index):
        return self._array[self._locate(index)].item()

    def __setitem__(self, index, value) -> None:
        self._array[self._locate(index)] = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._array, other._array))

    __hash__ = None

    def __str__(self) -> str:
        return f"Tensor(shape={list(self.shape)}, dtype={self.dtype}, data={self.data})"

    __repr__ = __str__

    def assign(self, other: "Tensor") -> None:
        """Replace shape and contents with a deep copy of ``other``."""
        if not isinstance(other, Tensor):
            raise TypeError("Only a tensor can be assigned to a tensor")
        self._array = np.array(other._array, dtype=self.dtype, copy=True)

    def copy(self) -> "Tensor":
        return Tensor._wrap(self._array.copy())

    def fill(self, value) -> None:
        self._array.fill(value)

    def reverse_buffer(self) -> None:
        """Reverse the order of the elements in memory, keeping the shape."""
        reversed_values = self._array.ravel()[::-1].copy()
        self._array[...] = reversed_values.reshape(self._array.shape)

    def slice(self, slice_indices) -> "Tensor":
        """Return a view fixing the leading indices; writes reach this tensor."""
        indices = tuple(slice_indices)
        if len(indices) >= self._array.ndim:
            raise IndexError(
                f"A slice of a rank {self._array.ndim} tensor takes fewer than "
                f"{self._array.ndim} indices, got {len(indices)}"
            )
        for position, dim in zip(indices, self.shape):
            if not _is_int(position) or not 0 <= position < dim:
                raise IndexError(
                    f"Invalid slice indices {list(indices)} for shape {list(self.shape)}"
                )
        return Tensor._wrap(self._array[tuple(int(i) for i in indices)])

    def reshape(self, new_shape) -> None:
        """Change the shape in place; the element count must not change."""
        dims = _as_shape(new_shape)
        if math.prod(dims) != self.size:
            raise ValueError(
                f"Cannot reshape {list(self.shape)} into {list(dims)}: sizes differ"
            )
        self._array = self._array.reshape(dims)

    def is_matrix(self) -> bool:
        return self._array.ndim == 2

    def transpose(self, dim0=None, dim1=None) -> "Tensor":
        """Swap two dimensions; by default the last two."""
        ndim = self._array.ndim
        if dim0 is None and dim1 is None:
            if ndim < 2:
                raise ValueError("Transpose needs a tensor of rank 2 or more")
            dim0, dim1 = ndim - 2, ndim - 1
        elif dim0 is None or dim1 is None:
            raise ValueError("Give both dimensions to transpose, or neither")
        for dim in (dim0, dim1):
            if not _is_int(dim) or not 0 <= dim < ndim:
                raise ValueError(f"Invalid dimension {dim} for rank {ndim}")
        return Tensor._wrap(np.swapaxes(self._array, dim0, dim1).copy())

    def permute(self, perm) -> "Tensor":
        """Reorder dimensions by ``perm``; an empty permutation reverses them."""
        order = [int(p) if _is_int(p) else p for p in perm]
        ndim = self._array.ndim
        if not order:
            order = list(range(ndim))[::-1]
        if sorted(order, key=lambda p: (not _is_int(p), p if _is_int(p) else 0)) != list(range(ndim)):
            raise ValueError(f"Invalid permutation {list(perm)} for rank {ndim}")
        return Tensor._wrap(np.transpose(self._array, order).copy())

    def broadcast_reshape(self, target_shape) -> "Tensor":
        """Return a new tensor broadcast to ``target_shape``."""
        dims = _as_shape(target_shape)
        try:
            broadcast = np.broadcast_to(self._array, dims)
        except ValueError as error:
            raise ValueError(
                f"Cannot broadcast shape {list(self.shape)} to {list(dims)}"
            ) from error
        return Tensor._wrap(broadcast.copy())