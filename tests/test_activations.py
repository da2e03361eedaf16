import numpy as np
import pytest

from modularml.activations import ReLUNode, SigmoidNode, SwishNode, TanHNode
from modularml.factory import create_tensor

VALUES = [-3.0, -1.5, -0.25, 0.0, 0.5, 2.0]


def _input(dtype=np.float32):
    return create_tensor((2, 3), VALUES, dtype)


def _run(node_cls, x):
    iomap = {"X": x}
    node_cls("X", "Y").forward(iomap)
    return iomap["Y"]


@pytest.mark.parametrize("node_cls", [ReLUNode, SigmoidNode, SwishNode, TanHNode])
def test_output_created_with_input_shape_and_dtype(node_cls):
    x = _input(np.float64)
    y = _run(node_cls, x)
    assert y.shape == (2, 3)
    assert y.dtype == np.float64
    assert y is not x


def test_relu_clamps_negatives_and_keeps_positives():
    y = _run(ReLUNode, _input())
    values = list(y.data)
    assert all(v >= 0 for v in values)
    assert values[3:] == [0.0, 0.5, 2.0]
    assert values[:3] == [0.0, 0.0, 0.0]


def test_relu_does_not_change_input():
    x = _input()
    _run(ReLUNode, x)
    assert list(x.data) == VALUES


def test_sigmoid_of_zero_is_half():
    y = _run(SigmoidNode, _input())
    assert y[3] == pytest.approx(0.5)


def test_sigmoid_bounded_and_symmetric():
    x = create_tensor((4,), [-2.0, -0.5, 0.5, 2.0], np.float64)
    y = _run(SigmoidNode, x)
    assert all(0.0 < v < 1.0 for v in y.data)
    assert y[0] + y[3] == pytest.approx(1.0)
    assert y[1] + y[2] == pytest.approx(1.0)


def test_sigmoid_extreme_inputs_saturate():
    x = create_tensor((2,), [-1000.0, 1000.0], np.float64)
    y = _run(SigmoidNode, x)
    assert y[0] == pytest.approx(0.0)
    assert y[1] == pytest.approx(1.0)


def test_sigmoid_is_increasing():
    y = _run(SigmoidNode, _input(np.float64))
    values = list(y.data)
    assert values == sorted(values)


def test_swish_equals_x_times_sigmoid():
    x = _input(np.float64)
    sig = _run(SigmoidNode, x)
    swish = _run(SwishNode, x)
    for value, s, w in zip(x.data, sig.data, swish.data):
        assert w == pytest.approx(value * s)


def test_swish_sign_follows_input():
    y = _run(SwishNode, _input(np.float64))
    for value, out in zip(VALUES, y.data):
        assert (out > 0) == (value > 0)


def test_tanh_is_odd_and_bounded():
    x = create_tensor((4,), [-2.0, -0.5, 0.5, 2.0], np.float64)
    y = _run(TanHNode, x)
    assert all(-1.0 < v < 1.0 for v in y.data)
    assert y[0] == pytest.approx(-y[3])
    assert y[1] == pytest.approx(-y[2])


def test_tanh_of_zero_is_zero():
    y = _run(TanHNode, _input())
    assert y[3] == 0.0


def test_existing_output_is_overwritten_in_place():
    x = _input()
    y = create_tensor((2, 3), [9.0] * 6, np.float32)
    iomap = {"X": x, "Y": y}
    ReLUNode("X", "Y").forward(iomap)
    assert iomap["Y"] is y
    assert list(y.data) == [0.0, 0.0, 0.0, 0.0, 0.5, 2.0]


def test_missing_input_raises():
    with pytest.raises(KeyError):
        ReLUNode("X", "Y").forward({})


@pytest.mark.parametrize("node_cls", [ReLUNode, SigmoidNode, SwishNode, TanHNode])
def test_integer_input_is_rejected(node_cls):
    x = create_tensor((2,), [1, 2], np.int32)
    with pytest.raises(TypeError):
        node_cls("X", "Y").forward({"X": x})


def test_output_of_other_dtype_is_rejected():
    iomap = {"X": _input(np.float32), "Y": create_tensor((2, 3), dtype=np.float64)}
    with pytest.raises(TypeError):
        TanHNode("X", "Y").forward(iomap)


def test_from_json_reads_names():
    node = SigmoidNode.from_json({"input": ["in0"], "output": ["out0"]})
    assert node.inputs() == ["in0"]
    assert node.outputs() == ["out0"]


def test_from_json_without_names():
    node = SwishNode.from_json({})
    assert node.inputs() == [""]
    assert node.outputs() == [""]