# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import logging
import operator
import warnings

import numpy as np
import pytest

import gridtensor as gt


def _assert_all(t, value, shape=(3, 3)):
    assert t.shape == shape
    np.testing.assert_array_equal(t.numpy(), np.full(shape, value))


def test_add_sub_mul_div_filled():
    a = gt.new(3, 3, 1.0)
    b = gt.new(3, 3, 2.0)
    _assert_all(a + b, 3.0)
    _assert_all(a - b, -1.0)
    _assert_all(a * b, 2.0)
    _assert_all(a / b, 0.5)


def test_negation_filled():
    _assert_all(-gt.new(3, 3, 1.0), -1.0)


def test_float32_operations_keep_dtype():
    a = gt.new(3, 3, 1.0, dtype="float32")
    b = gt.new(3, 3, 2.0, dtype="float32")
    for result in (a + b, a - b, a * b, a / b, -a):
        assert result.dtype == "float32"
    _assert_all(a / b, 0.5)


def test_method_forms_match_operators():
    a = gt.from_rows([[1.0, 2.0], [3.0, 4.0]])
    b = gt.from_rows([[5.0, 6.0], [7.0, 8.0]])
    assert a.add(b).array_equal(a + b)
    assert a.sub(b).array_equal(a - b)
    assert a.mul(b).array_equal(a * b)
    assert a.div(b).array_equal(a / b)
    assert a.neg().array_equal(-a)


def test_basic_ops_values():
    a = gt.from_rows([[1.0, 2.0], [3.0, 4.0]])
    b = gt.from_rows([[5.0, 6.0], [7.0, 8.0]])
    np.testing.assert_allclose((a + b).numpy(), [[6.0, 8.0], [10.0, 12.0]])
    np.testing.assert_allclose((a - b).numpy(), [[-4.0, -4.0], [-4.0, -4.0]])
    np.testing.assert_allclose((a * b).numpy(), [[5.0, 12.0], [21.0, 32.0]])
    np.testing.assert_allclose((a / b).numpy(), [[0.2, 1.0 / 3.0], [3.0 / 7.0, 0.5]])


@pytest.mark.parametrize(
    "op", [operator.add, operator.sub, operator.mul, operator.truediv]
)
def test_elementwise_identity(op):
    rng = np.random.default_rng(0)
    lhs = rng.uniform(-10.0, 10.0, size=(4, 5))
    rhs = rng.uniform(1.0, 10.0, size=(4, 5))
    a = gt.from_numpy(lhs)
    b = gt.from_numpy(rhs)
    result = op(a, b)
    for i in range(4):
        for j in range(5):
            assert result.get(i, j) == op(a.get(i, j), b.get(i, j))


def test_division_by_zero_is_ieee():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        result = gt.new(1, 1, 1.0) / gt.new(1, 1, 0.0)
        assert result.get(0, 0) == float("inf")

        signed = gt.from_rows([[-1.0, 0.0]]) / gt.from_rows([[0.0, 0.0]])
    assert signed.get(0, 0) == float("-inf")
    assert np.isnan(signed.get(0, 1))


def test_nan_and_inf_propagation():
    a = gt.from_rows([[np.nan, np.inf]])
    b = gt.from_rows([[1.0, np.inf]])
    result = (a - b).numpy()
    assert np.isnan(result).all()


def test_integer_division_truncates_toward_zero():
    a = gt.from_rows([[7, -7, 7, -7, 6]])
    b = gt.from_rows([[2, 2, -2, -2, -2]])
    result = a / b
    assert result.dtype == "int64"
    assert result.tolist() == [[3, -3, -3, 3, -3]]


def test_integer_division_by_zero_raises():
    a = gt.from_rows([[1, 2]])
    b = gt.from_rows([[1, 0]])
    with pytest.raises(ZeroDivisionError):
        _ = a / b


def test_integer_ops_stay_integer():
    a = gt.from_rows([[1, 2]], dtype="int32")
    b = gt.from_rows([[3, 4]], dtype="int32")
    assert (a + b).dtype == "int32"
    assert (a * b).tolist() == [[3, 8]]
    assert (-a).tolist() == [[-1, -2]]


def test_mixed_dtype_promotion():
    a = gt.from_rows([[1.0, 2.0]], dtype="float32")
    b = gt.from_rows([[1.0, 2.0]], dtype="float64")
    assert (a + b).dtype == "float64"
    c = gt.from_rows([[1, 2]])
    d = gt.from_rows([[0.5, 0.5]])
    result = c * d
    assert result.dtype == "float64"
    assert result.tolist() == [[0.5, 1.0]]


def test_smaller_right_operand_raises_shape_mismatch():
    a = gt.new(3, 3, 1.0)
    with pytest.raises(gt.ShapeMismatchError) as excinfo:
        _ = a + gt.new(2, 3, 1.0)
    assert excinfo.value.left_shape == (3, 3)
    assert excinfo.value.right_shape == (2, 3)
    assert excinfo.value.op == "add"

    with pytest.raises(IndexError):
        _ = a / gt.new(3, 2, 1.0)


@pytest.mark.parametrize(
    "op", [operator.add, operator.sub, operator.mul, operator.truediv]
)
def test_shape_mismatch_for_every_operator(op):
    with pytest.raises(gt.ShapeMismatchError):
        op(gt.new(2, 2, 1.0), gt.new(1, 1, 1.0))


def test_larger_right_operand_reads_matching_window():
    a = gt.from_rows([[1.0, 2.0], [3.0, 4.0]])
    b = gt.from_rows([[10.0, 20.0, 99.0], [30.0, 40.0, 99.0], [99.0, 99.0, 99.0]])
    result = a + b
    assert result.shape == (2, 2)
    assert result.tolist() == [[11.0, 22.0], [33.0, 44.0]]


def test_empty_tensor_arithmetic():
    a = gt.new(0, 3, 1.0)
    b = gt.new(0, 3, 2.0)
    assert (a + b).shape == (0, 3)
    assert (a * b).tolist() == []
    assert (-gt.new(2, 0, 1.0)).shape == (2, 0)


def test_operands_unchanged_and_not_aliased():
    a = gt.from_rows([[1.0, 2.0]])
    b = gt.from_rows([[3.0, 4.0]])
    result = a + b
    assert a.tolist() == [[1.0, 2.0]]
    assert b.tolist() == [[3.0, 4.0]]
    assert not np.shares_memory(result._data, a._data)
    assert not np.shares_memory(result._data, b._data)
    negated = -a
    assert not np.shares_memory(negated._data, a._data)


@pytest.mark.parametrize("other", [1.0, 2, [[1.0, 2.0]], np.ones((1, 2))])
def test_non_tensor_operand_raises_type_error(other):
    t = gt.from_rows([[1.0, 2.0]])
    with pytest.raises(TypeError):
        _ = t + other
    with pytest.raises(TypeError):
        _ = other * t
    with pytest.raises(TypeError):
        t.div(other)


def test_shape_mismatch_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="gridtensor.tensor"):
        with pytest.raises(gt.ShapeMismatchError, match=r"\(1, 1\)"):
            _ = gt.new(2, 2, 1.0) - gt.new(1, 1, 1.0)
    assert "sub rejected" in caplog.text


def test_integer_division_overflow_raises():
    lowest = np.iinfo(np.int64).min
    a = gt.from_rows([[lowest, lowest]])
    b = gt.from_rows([[1, -1]])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        with pytest.raises(OverflowError):
            _ = a / b
        assert (a / gt.from_rows([[1, 2]])).tolist() == [[lowest, lowest // 2]]
