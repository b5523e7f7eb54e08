# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Dense two-dimensional Tensor with elementwise arithmetic.
"""

from __future__ import annotations

import logging
import operator
from numbers import Integral
from typing import Any, Callable, Optional, Sequence, Tuple, Union

import numpy as np

from ._dtype import cast_values, dtype_name, is_integer_dtype, to_numpy_dtype
from .errors import InvalidShapeError, ShapeMismatchError

logger = logging.getLogger(__name__)

Scalar = Union[float, int]


def _check_dim(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidShapeError(f"{name} must be a non-negative integer, got {value!r}")
    value = int(value)
    if value < 0:
        raise InvalidShapeError(f"{name} must be a non-negative integer, got {value}")
    return value


def _rows_to_array(data: Any, dtype: Optional[str]) -> np.ndarray:
    """Validate nested row data and copy it into a 2-D array."""

    try:
        rows = list(data)
    except TypeError:
        raise TypeError(
            f"Tensor data must be a sequence of rows, got {type(data).__name__}"
        ) from None

    if not rows:
        raise InvalidShapeError("cannot build a tensor from zero rows")

    try:
        ncols = len(rows[0])
    except TypeError:
        raise InvalidShapeError("each row must be a sequence of values") from None

    for index, row in enumerate(rows):
        try:
            length = len(row)
        except TypeError:
            raise InvalidShapeError("each row must be a sequence of values") from None
        if length != ncols:
            raise InvalidShapeError(
                f"row {index} has {length} elements, expected {ncols} "
                "(the length of row 0)"
            )

    try:
        values = np.asarray(rows)
    except ValueError as exc:
        raise InvalidShapeError(f"rows do not form a rectangular grid: {exc}") from exc

    if values.ndim != 2:
        raise InvalidShapeError(
            f"rows must contain scalar values, got data with {values.ndim} dimensions"
        )

    return cast_values(values, dtype)


# Elementwise kernels. Floating point follows IEEE 754 (inf/nan instead of
# errors), so NumPy's floating point warnings are silenced here.
def _add(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    with np.errstate(over="ignore", invalid="ignore"):
        return np.add(lhs, rhs)


def _subtract(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    with np.errstate(over="ignore", invalid="ignore"):
        return np.subtract(lhs, rhs)


def _multiply(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    with np.errstate(over="ignore", invalid="ignore"):
        return np.multiply(lhs, rhs)


def _divide(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    if is_integer_dtype(lhs.dtype) and is_integer_dtype(rhs.dtype):
        if (rhs == 0).any():
            raise ZeroDivisionError("integer division by zero")
        lowest = np.iinfo(np.result_type(lhs, rhs)).min
        if ((lhs == lowest) & (rhs == -1)).any():
            raise OverflowError("integer division overflow")
        # Integer quotients truncate toward zero, not toward -inf.
        quotient = np.floor_divide(lhs, rhs)
        quotient += (np.remainder(lhs, rhs) != 0) & ((lhs < 0) != (rhs < 0))
        return quotient

    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        return np.true_divide(lhs, rhs)


class Tensor:
    """
    A dense grid of ``nrows`` x ``ncols`` numbers of a single dtype.

    Every arithmetic operation returns a new Tensor; operands are never
    modified and results never share storage with them.
    """

    # Keep NumPy from claiming mixed Tensor/ndarray arithmetic.
    __array_ufunc__ = None

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "Tensor":
        """Instantiate a ``Tensor`` that takes ownership of ``array``."""

        instance = cls.__new__(cls)
        instance._data = array
        return instance

    def __init__(self, data: Any, dtype: Optional[str] = None):
        """
        Initialize a tensor from row data.

        Args:
            data: A sequence of rows (each a sequence of numbers), a 2-D
                NumPy array, or another Tensor. The data is copied.
            dtype: Element type ('float32', 'float64', 'int32', 'int64').
                Defaults to the global default for floats and 'int64' for
                integers.

        Raises:
            InvalidShapeError: ``data`` has no rows or its rows differ in length.

        Examples:
            >>> t1 = Tensor([[1, 2, 3], [4, 5, 6]])
            >>> t2 = Tensor([[1.0, 2.0]], dtype='float32')
        """
        if isinstance(data, Tensor):
            array = data._data
            self._data = cast_values(array, dtype) if dtype is not None else array.copy()
        elif isinstance(data, np.ndarray):
            self._data = _array_to_grid(data, dtype)
        else:
            self._data = _rows_to_array(data, dtype)
        logger.debug("built %s tensor of shape %s", self.dtype, self.shape)

    # Construction
    @classmethod
    def new(
        cls, nrows: int, ncols: int, initial: Scalar, dtype: Optional[str] = None
    ) -> "Tensor":
        """Create an ``nrows`` x ``ncols`` tensor with every cell set to ``initial``.

        Zero rows or zero columns give an empty grid.
        """
        nrows = _check_dim(nrows, "nrows")
        ncols = _check_dim(ncols, "ncols")

        fill = np.asarray(initial)
        if fill.ndim != 0:
            raise TypeError(f"initial value must be a scalar, got {type(initial).__name__}")

        fill = cast_values(fill, dtype)
        logger.debug("new %s tensor of shape (%d, %d)", fill.dtype, nrows, ncols)
        return cls._wrap(np.full((nrows, ncols), fill, dtype=fill.dtype))

    @classmethod
    def from_rows(cls, data: Sequence[Sequence[Scalar]], dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor from a sequence of equally long rows.

        ``nrows`` is the number of rows and ``ncols`` the length of the
        first row. Empty or jagged input raises ``InvalidShapeError``.
        """
        return cls(data, dtype=dtype)

    @classmethod
    def zeros(cls, nrows: int, ncols: int, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with zeros."""
        return cls.new(nrows, ncols, 0.0, dtype=dtype)

    @classmethod
    def ones(cls, nrows: int, ncols: int, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with ones."""
        return cls.new(nrows, ncols, 1.0, dtype=dtype)

    @classmethod
    def full(
        cls, nrows: int, ncols: int, fill_value: Scalar, dtype: Optional[str] = None
    ) -> "Tensor":
        """Create a tensor filled with a specific value."""
        return cls.new(nrows, ncols, fill_value, dtype=dtype)

    @classmethod
    def from_numpy(cls, array: np.ndarray, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor from a copy of a 2-D NumPy array."""
        return cls._wrap(_array_to_grid(array, dtype))

    # Core properties
    @property
    def nrows(self) -> int:
        """Number of rows."""
        return self._data.shape[0]

    @property
    def ncols(self) -> int:
        """Number of columns."""
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """Get tensor shape as an ``(nrows, ncols)`` tuple."""
        return (self.nrows, self.ncols)

    @property
    def dtype(self) -> str:
        """Get tensor data type."""
        return dtype_name(self._data.dtype)

    @property
    def size(self) -> int:
        """Total number of elements."""
        return int(self._data.size)

    @property
    def data(self) -> list:
        """The grid as a list of row lists."""
        return self.tolist()

    def numel(self) -> int:
        return self.size

    # Element access
    def get(self, row: int, col: int) -> Optional[Scalar]:
        """Return the value at ``(row, col)``, or ``None`` when out of range.

        Indices are zero based. Negative indices are out of range.
        """
        row = operator.index(row)
        col = operator.index(col)
        if 0 <= row < self.nrows and 0 <= col < self.ncols:
            return self._data[row, col].item()
        return None

    # Data conversion methods
    def tolist(self) -> list:
        """Convert to nested Python lists."""
        return self._data.tolist()

    def numpy(self) -> np.ndarray:
        """Return a copy of the grid as a NumPy array."""
        return self._data.copy()

    def __array__(self, dtype: Optional[Any] = None, copy: Optional[bool] = None) -> np.ndarray:
        """Support NumPy's array protocol.

        The grid is always copied, so ``copy=False`` raises ``ValueError``.
        """
        if copy is False:
            raise ValueError("Tensor storage cannot be exposed without a copy")
        array = self.numpy()
        if dtype is not None:
            return array.astype(dtype, copy=False)
        return array

    def clone(self) -> "Tensor":
        """Return an independent copy."""
        return self._wrap(self._data.copy())

    def copy(self) -> "Tensor":
        """Alias for :meth:`clone`."""
        return self.clone()

    # Elementwise arithmetic
    def _elementwise(
        self,
        other: "Tensor",
        op: str,
        kernel: Callable[[np.ndarray, np.ndarray], np.ndarray],
    ) -> "Tensor":
        """Apply ``kernel`` over the left operand's shape.

        The right operand is read at the same coordinates. Cells beyond the
        left operand's shape are ignored; a right operand too small to cover
        it raises ``ShapeMismatchError``.
        """
        if not isinstance(other, Tensor):
            raise TypeError(f"{op} requires another Tensor, got {type(other).__name__}")

        nrows, ncols = self.shape
        if other.nrows < nrows or other.ncols < ncols:
            logger.debug("%s rejected: %s against %s", op, self.shape, other.shape)
            raise ShapeMismatchError(op, self.shape, other.shape)

        result = kernel(self._data, other._data[:nrows, :ncols])
        logger.debug("%s over shape %s -> %s", op, self.shape, result.dtype)
        return self._wrap(result)

    def add(self, other: "Tensor") -> "Tensor":
        """Elementwise sum."""
        return self._elementwise(other, "add", _add)

    def sub(self, other: "Tensor") -> "Tensor":
        """Elementwise difference."""
        return self._elementwise(other, "sub", _subtract)

    def mul(self, other: "Tensor") -> "Tensor":
        """Elementwise product."""
        return self._elementwise(other, "mul", _multiply)

    def div(self, other: "Tensor") -> "Tensor":
        """Elementwise quotient.

        Floating point division by zero gives ``inf`` or ``nan``. Integer
        tensors use truncating division and raise ``ZeroDivisionError`` on a
        zero divisor.
        """
        return self._elementwise(other, "div", _divide)

    def neg(self) -> "Tensor":
        """Elementwise negation."""
        return self._wrap(np.negative(self._data))

    def __neg__(self) -> "Tensor":
        """Unary negation returning a Tensor."""
        return self.neg()

    def __add__(self, other: "Tensor") -> "Tensor":
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Tensor") -> "Tensor":
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: "Tensor") -> "Tensor":
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: "Tensor") -> "Tensor":
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.div(other)

    # Comparison with other tensors
    def array_equal(self, other: "Tensor") -> bool:
        """Check if tensors have the same shape and exactly equal values."""
        if not isinstance(other, Tensor):
            return False
        return bool(np.array_equal(self._data, other._data))

    def allclose(self, other: "Tensor", rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        """Check if tensors have the same shape and approximately equal values."""
        if not isinstance(other, Tensor) or self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    # String representations
    def __repr__(self) -> str:
        return (
            f"Tensor(data={self.tolist()!r}, nrows={self.nrows}, "
            f"ncols={self.ncols}, dtype={self.dtype!r})"
        )

    def __len__(self) -> int:
        return self.nrows


def _array_to_grid(array: Any, dtype: Optional[str]) -> np.ndarray:
    if not isinstance(array, np.ndarray):
        raise TypeError(f"expected a NumPy array, got {type(array).__name__}")
    if array.ndim != 2:
        raise InvalidShapeError(f"expected a 2-D array, got {array.ndim} dimensions")
    if dtype is None:
        return np.array(array, dtype=to_numpy_dtype(dtype_name(array.dtype)))
    return cast_values(array, dtype)


# Convenience functions for tensor creation
def new(nrows: int, ncols: int, initial: Scalar, dtype: Optional[str] = None) -> Tensor:
    """Create an ``nrows`` x ``ncols`` tensor filled with ``initial``."""
    return Tensor.new(nrows, ncols, initial, dtype=dtype)


def from_rows(data: Sequence[Sequence[Scalar]], dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from a sequence of equally long rows."""
    return Tensor.from_rows(data, dtype=dtype)


def zeros(nrows: int, ncols: int, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor filled with zeros."""
    return Tensor.zeros(nrows, ncols, dtype=dtype)


def ones(nrows: int, ncols: int, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor filled with ones."""
    return Tensor.ones(nrows, ncols, dtype=dtype)


def full(nrows: int, ncols: int, fill_value: Scalar, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor filled with a specific value."""
    return Tensor.full(nrows, ncols, fill_value, dtype=dtype)


def from_numpy(array: np.ndarray, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from a 2-D NumPy array."""
    return Tensor.from_numpy(array, dtype=dtype)


# Export all public symbols
__all__ = [
    "Tensor",
    "new",
    "from_rows",
    "zeros",
    "ones",
    "full",
    "from_numpy",
]
