# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exceptions raised by gridtensor."""

from __future__ import annotations

from typing import Tuple


class TensorError(Exception):
    """Base class for errors raised by gridtensor."""


class InvalidShapeError(TensorError, ValueError):
    """Row data or dimensions that cannot describe a rectangular grid."""


class ShapeMismatchError(TensorError, IndexError):
    """Right operand of an elementwise operation is too small for the left.

    Subclasses ``IndexError`` because the failure is an out-of-range read of
    the right operand at coordinates the left operand defines.
    """

    def __init__(self, op: str, left_shape: Tuple[int, int], right_shape: Tuple[int, int]):
        self.op = op
        self.left_shape = tuple(left_shape)
        self.right_shape = tuple(right_shape)
        super().__init__(
            f"{op}: right operand of shape {self.right_shape} does not cover "
            f"left operand of shape {self.left_shape}"
        )


__all__ = [
    "TensorError",
    "InvalidShapeError",
    "ShapeMismatchError",
]
