"""Arithmetic on tensors, with a replaceable matrix multiplication kernel."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from itertools import product

import numpy as np

from .tensor import Tensor

GemmFunc = Callable[..., None]
WindowFunc = Callable[[list, list], None]

_BLOCK = 32


def _values(tensor: Tensor) -> np.ndarray:
    return np.asarray(list(tensor.data), dtype=tensor.dtype)


def _require_tensor(tensor, name: str) -> Tensor:
    if not isinstance(tensor, Tensor):
        raise TypeError(f"{name} must be a tensor, got {type(tensor).__name__}")
    return tensor


def _check_shape(tensor, expected: tuple[int, int], name: str) -> None:
    _require_tensor(tensor, name)
    if tensor.shape != expected:
        raise ValueError(
            f"Matrix {name} has shape {list(tensor.shape)}, expected {list(expected)}"
        )


def _operand(tensor: Tensor, rows: int, cols: int, ld: int, name: str) -> np.ndarray:
    """Read a ``rows`` x ``cols`` matrix from the tensor's buffer with stride ``ld``."""
    flat = _values(tensor)
    if rows == 0 or cols == 0:
        return np.zeros((rows, cols), dtype=flat.dtype)
    if ld < 0:
        raise ValueError(f"Leading dimension of {name} must be non-negative, got {ld}")
    index = np.arange(rows)[:, None] * ld + np.arange(cols)[None, :]
    if index.max() >= flat.size:
        raise ValueError(
            f"Leading dimension {ld} reads past the end of matrix {name}"
        )
    return flat[index]


def _inner_kernel(op_a: np.ndarray, op_b: np.ndarray) -> np.ndarray:
    return op_a @ op_b


def _outer_kernel(op_a: np.ndarray, op_b: np.ndarray) -> np.ndarray:
    out = np.zeros((op_a.shape[0], op_b.shape[1]), dtype=np.result_type(op_a, op_b))
    for column, row in zip(op_a.T, op_b):
        out += np.outer(column, row)
    return out


def _row_wise_kernel(op_a: np.ndarray, op_b: np.ndarray) -> np.ndarray:
    out = np.zeros((op_a.shape[0], op_b.shape[1]), dtype=np.result_type(op_a, op_b))
    for i, row in enumerate(op_a):
        out[i] = row @ op_b
    return out


def _col_wise_kernel(op_a: np.ndarray, op_b: np.ndarray) -> np.ndarray:
    out = np.zeros((op_a.shape[0], op_b.shape[1]), dtype=np.result_type(op_a, op_b))
    for j, column in enumerate(op_b.T):
        out[:, j] = op_a @ column
    return out


def _blocked_kernel(op_a: np.ndarray, op_b: np.ndarray) -> np.ndarray:
    m, k = op_a.shape
    n = op_b.shape[1]
    out = np.zeros((m, n), dtype=np.result_type(op_a, op_b))
    for i0 in range(0, m, _BLOCK):
        for j0 in range(0, n, _BLOCK):
            for p0 in range(0, k, _BLOCK):
                out[i0:i0 + _BLOCK, j0:j0 + _BLOCK] += (
                    op_a[i0:i0 + _BLOCK, p0:p0 + _BLOCK]
                    @ op_b[p0:p0 + _BLOCK, j0:j0 + _BLOCK]
                )
    return out


def _run_gemm(kernel, ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc) -> None:
    for name, dim in (("M", m), ("N", n), ("K", k)):
        if dim < 0:
            raise ValueError(f"{name} must be non-negative, got {dim}")
    _check_shape(a, (k, m) if ta else (m, k), "A")
    _check_shape(b, (n, k) if tb else (k, n), "B")
    _check_shape(c, (m, n), "C")

    op_a = _operand(a, m, k, lda, "A")
    op_b = _operand(b, k, n, ldb, "B")
    result = alpha * kernel(op_a, op_b)

    c_flat = _values(c)
    if m and n:
        if ldc < 0:
            raise ValueError(f"Leading dimension of C must be non-negative, got {ldc}")
        index = np.arange(m)[:, None] * ldc + np.arange(n)[None, :]
        if index.max() >= c_flat.size:
            raise ValueError(f"Leading dimension {ldc} reads past the end of matrix C")
        if beta != 0:
            result = result + beta * c_flat[index]
        c_flat[index] = np.asarray(result).astype(c.dtype)
    c.assign(Tensor(c.shape, c_flat, c.dtype))


def gemm_inner_product(ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc) -> None:
    """C := alpha*op(A)*op(B) + beta*C, one dot product per output element.

    The transpose flags select the stored shape accepted for A and B; the
    operands are read from the row-major buffers through the leading
    dimensions, ``op(A)[i, p] = A[i*lda + p]`` and ``op(B)[p, j] = B[p*ldb + j]``.
    """
    _run_gemm(_inner_kernel, ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc)


def gemm_outer_product(ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc) -> None:
    """Same as :func:`gemm_inner_product`, accumulating rank-one updates."""
    _run_gemm(_outer_kernel, ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc)


def gemm_row_wise_product(ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc) -> None:
    """Same as :func:`gemm_inner_product`, one output row at a time."""
    _run_gemm(_row_wise_kernel, ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc)


def gemm_col_wise_product(ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc) -> None:
    """Same as :func:`gemm_inner_product`, one output column at a time."""
    _run_gemm(_col_wise_kernel, ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc)


def gemm_blocked(ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc) -> None:
    """Same as :func:`gemm_inner_product`, working on square tiles."""
    _run_gemm(_blocked_kernel, ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc)


_gemm_impl: GemmFunc = gemm_inner_product


def set_gemm(func: GemmFunc) -> None:
    """Choose the implementation that :func:`gemm` dispatches to."""
    global _gemm_impl
    if not callable(func):
        raise TypeError("A gemm implementation must be callable")
    _gemm_impl = func


def gemm(ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc) -> None:
    """C := alpha*op(A)*op(B) + beta*C using the selected implementation."""
    _gemm_impl(ta, tb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc)


def gemm_onnx(a=None, b=None, alpha=1.0, beta=1.0, trans_a=0, trans_b=0, c=None) -> Tensor:
    """Y = alpha * op(A) @ op(B) + beta * C, with C broadcast to (M, N)."""
    if a is None or b is None:
        raise ValueError("gemm_onnx needs both A and B")
    _require_tensor(a, "A")
    _require_tensor(b, "B")
    if not a.is_matrix() or not b.is_matrix():
        raise ValueError("gemm_onnx needs A and B to be matrices")
    op_a = a.transpose() if trans_a else a.copy()
    op_b = b.transpose() if trans_b else b.copy()
    m, k = op_a.shape
    k_b, n = op_b.shape
    if k != k_b:
        raise ValueError(
            f"Inner dimensions differ: op(A) is {list(op_a.shape)}, op(B) is {list(op_b.shape)}"
        )
    if c is None:
        y = Tensor((m, n), dtype=a.dtype)
        beta = 0
    else:
        y = _require_tensor(c, "C").broadcast_reshape((m, n))
    gemm(0, 0, m, n, k, alpha, op_a, k, op_b, n, beta, y, n)
    return y


def _same_shape(a: Tensor, b: Tensor) -> None:
    _require_tensor(a, "a")
    _require_tensor(b, "b")
    if a.shape != b.shape:
        raise ValueError(
            f"Tensor shapes differ: {list(a.shape)} and {list(b.shape)}"
        )


def add(a: Tensor, b: Tensor, c: Tensor) -> None:
    """c = a + b, element by element."""
    _same_shape(a, b)
    _require_tensor(c, "c")
    c.assign(Tensor(a.shape, _values(a) + _values(b), c.dtype))


def subtract(a: Tensor, b: Tensor, c: Tensor) -> None:
    """c = a - b, element by element."""
    _same_shape(a, b)
    _require_tensor(c, "c")
    c.assign(Tensor(a.shape, _values(a) - _values(b), c.dtype))


def multiply(a: Tensor, scalar, c: Tensor) -> None:
    """c = a * scalar."""
    _require_tensor(a, "a")
    _require_tensor(c, "c")
    c.assign(Tensor(a.shape, _values(a) * scalar, c.dtype))


def equals(a: Tensor, b: Tensor) -> bool:
    """Whether both tensors have the same shape and elements."""
    _require_tensor(a, "a")
    _require_tensor(b, "b")
    return a == b


def elementwise(a: Tensor, func: Callable, c: Tensor) -> None:
    """c[i] = func(a[i]) for every element."""
    _require_tensor(a, "a")
    _require_tensor(c, "c")
    c.assign(Tensor(a.shape, [func(value) for value in a.data], c.dtype))


def elementwise_in_place(a: Tensor, func: Callable) -> None:
    """a[i] = func(a[i]) for every element."""
    elementwise(a, func, a)


def arg_max(a: Tensor) -> int:
    """Flat index of the first largest element."""
    _require_tensor(a, "a")
    if a.size == 0:
        raise ValueError("arg_max of an empty tensor")
    return int(np.argmax(_values(a)))


def sliding_window(
    in_shape: Sequence[int],
    out_shape: Sequence[int],
    kernel_shape: Sequence[int],
    strides: Sequence[int],
    dilations: Sequence[int],
    pads: Sequence[tuple[int, int]],
    window_f: WindowFunc,
) -> None:
    """Call ``window_f(window_indices, output_index)`` for every output position.

    Shapes are (N, C, D1, ..., Dk). Each window holds the full input indices
    that lie inside the input after padding, in row-major kernel order.
    """
    in_dims = tuple(in_shape)
    out_dims = tuple(out_shape)
    spatial = len(in_dims) - 2
    if spatial < 0 or len(out_dims) != len(in_dims):
        raise ValueError("Input and output shapes need the same rank, at least 2")
    if in_dims[:2] != out_dims[:2]:
        raise ValueError("Input and output must agree on batch and channel sizes")
    for name, values in (
        ("kernel_shape", kernel_shape),
        ("strides", strides),
        ("dilations", dilations),
        ("pads", pads),
    ):
        if len(values) != spatial:
            raise ValueError(f"{name} needs {spatial} entries, got {len(values)}")

    kernel_offsets = list(product(*(range(size) for size in kernel_shape)))
    for n, ch in product(range(in_dims[0]), range(in_dims[1])):
        for position in product(*(range(size) for size in out_dims[2:])):
            window = []
            for offset in kernel_offsets:
                coords = [
                    o * stride - pad[0] + kk * dilation
                    for o, stride, pad, kk, dilation in zip(
                        position, strides, pads, offset, dilations
                    )
                ]
                if all(0 <= x < dim for x, dim in zip(coords, in_dims[2:])):
                    window.append([n, ch, *coords])
            window_f(window, [n, ch, *position])