# modularml

A small tensor library for neural-network style computations: a
row-major `Tensor` type backed by numpy, a tensor factory with a
swappable constructor, tensor operations with a swappable GEMM kernel,
and ONNX-style graph nodes that read and write named tensors in a
shared dictionary.

## Installation

Install the package from the project directory with pip. The `test`
extra adds pytest for running the test suite in `tests/`.

## Arrays and tensors

`modularml.array.Array` is a fixed-size, bounds-checked sequence of real
numbers. It supports `len`, indexing, iteration, equality, `subarray`,
`fill` and `Array.zeros(size)`. `generate_random_array_integral` and
`generate_random_array_real` build arrays of random length and contents,
optionally from a given `random.Random`.

`modularml.tensor.Tensor` holds a shape, an element type (boolean,
integer or floating point; float32 by default) and its elements in
row-major order.

```python
from modularml.factory import create_tensor

a = create_tensor([2, 3], [1, 2, 3, 4, 5, 6], dtype=float)
a.shape        # (2, 3)
a[[1, 2]]      # multi-dimensional index -> 6.0
a[4]           # flat index -> 5.0
a.offsets      # row-major offsets per dimension: [3, 1]
t = a.permute([1, 0])   # new tensor of shape (3, 2)
a.reshape([3, 2])       # in place; the element count must not change
```

Tensors also offer `copy`, `assign`, `fill`, `reverse_buffer`, `slice`
(a view fixing leading indices, whose writes reach the original),
`is_matrix`, `transpose(dim0, dim1)` (the last two dimensions by
default) and `broadcast_reshape`.

`modularml.factory` provides `create_tensor(shape, data, dtype)`,
`random_tensor(shape, lo_v, hi_v, dtype, rng)`, and
`set_tensor_constructor` / `reset_tensor_constructor` to route tensor
creation through a different callable.

## Operations

```python
from modularml.factory import create_tensor
from modularml import operations

a = create_tensor([2, 3], [1, 2, 3, 4, 5, 6], dtype=float)
b = create_tensor([3, 2], [4, 5, 6, 7, 8, 9], dtype=float)
c = create_tensor([2, 2], dtype=float)

operations.gemm(0, 0, 2, 2, 3, 1.0, a, 3, b, 2, 0.0, c, 2)
# c now holds 40, 46, 94, 109

operations.set_gemm(operations.gemm_outer_product)  # swap the kernel
```

GEMM kernels: `gemm_inner_product` (the default), `gemm_outer_product`,
`gemm_row_wise_product`, `gemm_col_wise_product` and `gemm_blocked`.
They check that A, B and C have the shapes the transpose flags and
`m`, `n`, `k` call for and raise `ValueError` otherwise.

Also available: `gemm_onnx`, `add`, `subtract`, `multiply`, `equals`,
`elementwise`, `elementwise_in_place`, `arg_max` and `sliding_window`.

## Graph nodes

Nodes take the names of their input and output tensors and run on a
dictionary mapping names to tensors. A missing output is created.

```python
from modularml.activations import ReLUNode
from modularml.factory import create_tensor

iomap = {"X": create_tensor([4], [-1.0, 2.0, -3.0, 4.0], dtype=float)}
ReLUNode("X", "Y").forward(iomap)
list(iomap["Y"].data)  # [0.0, 2.0, 0.0, 4.0]
```

Available nodes:

- `ReLUNode`, `SigmoidNode`, `SwishNode`, `TanHNode` in
  `modularml.activations` (float32 and float64 inputs).
- `ReshapeNode` in `modularml.reshape`: the target shape comes from a
  one-dimensional int64 tensor; one entry may be -1, and with
  `allowzero=1` a zero copies the matching input dimension.
- `TransposeNode` in `modularml.transpose`: permutes dimensions; an
  empty permutation reverses them.

Each node has `inputs()` and `outputs()`, and can be built from a JSON
node description (a dict with `input`, `output` and `attribute` lists)
with `from_json`.

## Utilities

- `modularml.normalizer.normalize(tensor, mean, std)` returns a new
  float32 tensor with `(x - mean[c]) / std[c]` for an N×3×H×W input.
- `modularml.tensor_utility.tensors_are_close(t1, t2, tolerance, verbose)`
  compares tensors element by element within a tolerance;
  `kaiming_uniform(w, in_channels, kernel_size, rng)` fills a float
  tensor with Kaiming-uniform values.
- `modularml.profiler.Profiler` times named sections and prints their
  duration in whole milliseconds; `end_timing` also returns it.

```python
from modularml.profiler import Profiler

profiler = Profiler()
with profiler.section("inference"):
    ...
# prints: Section: [ inference ] took 0 ms.
```

## What it does not do

The package has no command-line program, no model file parser and no
image loading: it cannot read a whole network description and run
inference on it. Graph nodes other than the four activations, Reshape
and Transpose (convolution, pooling, Gemm, Add and so on) are not
provided; operations such as `gemm_onnx` and `sliding_window` are there
to build them on.