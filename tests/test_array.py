import random

import pytest

from modularml.array import (
    Array,
    generate_random_array_integral,
    generate_random_array_real,
)


def test_iteration_round_trip():
    assert list(Array([1, 2, 3])) == [1, 2, 3]
    assert len(Array([4, 5])) == 2


def test_empty_array():
    arr = Array()
    assert len(arr) == 0
    assert str(arr) == "[]"


def test_getitem_out_of_range():
    arr = Array([1, 2, 3])
    with pytest.raises(IndexError):
        arr.subarray(0, 1)[1]
    with pytest.raises(IndexError):
        arr[3]
    with pytest.raises(IndexError):
        arr[-1]
    assert list(arr) == [1, 2, 3]
    assert arr[2] == 3


def test_setitem_then_getitem():
    arr = Array([1, 2, 3])
    arr[1] = 42
    assert arr[1] == 42
    assert list(arr) == [1, 42, 3]


def test_setitem_out_of_range():
    arr = Array([1])
    with pytest.raises(IndexError):
        arr[1] = 5
    assert list(arr) == [1]
    assert len(arr) == 1


def test_equality():
    assert Array([1, 2, 3]) == Array([1, 2, 3])
    assert not Array([1, 2, 3]) == Array([1, 2])
    assert not Array([1, 2, 3]) == Array([1, 2, 4])


def test_subarray():
    arr = Array([1, 2, 3, 4, 5])
    assert arr.subarray(1, 4) == Array([2, 3, 4])
    assert arr.subarray(0, 5) == arr


@pytest.mark.parametrize("start,end", [(5, 5), (0, 6), (3, 2)])
def test_subarray_invalid(start, end):
    with pytest.raises(IndexError):
        Array([1, 2, 3, 4, 5]).subarray(start, end)


def test_fill():
    arr = Array([1, 2, 3, 4])
    arr.fill(7)
    assert list(arr) == [7, 7, 7, 7]


def test_zeros():
    arr = Array.zeros(4)
    assert len(arr) == 4
    assert all(v == 0 for v in arr)


def test_zeros_negative_size():
    with pytest.raises(ValueError):
        Array.zeros(-1)


def test_str_short_integers():
    assert str(Array([1, 2, 3])) == "[1, 2, 3]"


def test_str_float_formatting():
    assert str(Array([1.5])) == "[1.500000]"


def test_str_long_is_truncated():
    text = str(Array(range(60)))
    assert text.startswith("[0, 1, 2")
    assert text.endswith("58, 59]")
    assert "..." in text
    parts = text.strip("[]").split(", ")
    assert "30" not in parts


def test_non_numeric_rejected():
    with pytest.raises(TypeError):
        Array(["a", "b"])
    with pytest.raises(TypeError):
        Array([1, 2])[0] = "x"


def test_copy_construction_is_independent():
    original = Array([1, 2, 3])
    duplicate = Array(original)
    duplicate[0] = 9
    assert original[0] == 1


def test_random_integral_within_bounds():
    rng = random.Random(1)
    for _ in range(50):
        arr = generate_random_array_integral(2, 6, -3, 3, rng)
        assert 2 <= len(arr) <= 6
        assert all(isinstance(v, int) and -3 <= v <= 3 for v in arr)


def test_random_integral_defaults():
    arr = generate_random_array_integral(rng=random.Random(3))
    assert 1 <= len(arr) <= 5
    assert all(1 <= v <= 10 for v in arr)


def test_random_integral_fixed_size_and_deterministic():
    a = generate_random_array_integral(7, 7, 0, 100, random.Random(5))
    b = generate_random_array_integral(7, 7, 0, 100, random.Random(5))
    assert len(a) == 7
    assert a == b


def test_random_real_within_bounds():
    rng = random.Random(2)
    arr = generate_random_array_real(10, 10, 0.0, 1.0, rng)
    assert len(arr) == 10
    assert all(isinstance(v, float) and 0.0 <= v <= 1.0 for v in arr)


def test_random_invalid_bounds():
    with pytest.raises(ValueError):
        generate_random_array_integral(5, 2)
    with pytest.raises(ValueError):
        generate_random_array_real(1, 2, 10.0, 1.0)
    with pytest.raises(TypeError):
        generate_random_array_integral(1, 2, 0.5, 3)