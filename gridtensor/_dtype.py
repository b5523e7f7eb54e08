# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Element dtype names and the process-wide default dtype."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, Iterator, Optional

import numpy as np

logger = logging.getLogger(__name__)

_DEFAULT_DTYPE_ENV = "GRIDTENSOR_DEFAULT_DTYPE"

_TENSOR_TO_NP_DTYPE: Dict[str, np.dtype] = {
    "float32": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
    "int32": np.dtype(np.int32),
    "int64": np.dtype(np.int64),
}
_NP_TO_TENSOR_DTYPE: Dict[np.dtype, str] = {v: k for k, v in _TENSOR_TO_NP_DTYPE.items()}

_SUPPORTED_DTYPES = frozenset(_TENSOR_TO_NP_DTYPE)
_FLOAT_DTYPES = frozenset({"float32", "float64"})

_DTYPE_LOCK = RLock()
_default_dtype = "float64"


def _check_dtype(dtype: Any) -> str:
    if not isinstance(dtype, str) or dtype not in _SUPPORTED_DTYPES:
        raise ValueError(f"Unsupported dtype '{dtype}'")
    return dtype


def set_default_dtype(dtype: str) -> None:
    """Set the global default data type for new floating-point tensors."""

    global _default_dtype

    if dtype not in _FLOAT_DTYPES:
        raise ValueError(
            f"Unsupported dtype '{dtype}'; the default must be one of "
            f"{sorted(_FLOAT_DTYPES)}"
        )
    with _DTYPE_LOCK:
        _default_dtype = dtype
    logger.debug("default dtype set to %s", dtype)


def get_default_dtype() -> str:
    """Get the current global default data type."""

    with _DTYPE_LOCK:
        return _default_dtype


@contextmanager
def default_dtype(dtype: str) -> Iterator[str]:
    """Temporarily override the default dtype, restoring it on exit."""

    previous = get_default_dtype()
    set_default_dtype(dtype)
    try:
        yield dtype
    finally:
        set_default_dtype(previous)


def to_numpy_dtype(dtype: str) -> np.dtype:
    """Map a dtype name to its NumPy dtype."""

    return _TENSOR_TO_NP_DTYPE[_check_dtype(dtype)]


def dtype_name(np_dtype: Any) -> str:
    """Map a NumPy dtype back to its gridtensor name."""

    try:
        return _NP_TO_TENSOR_DTYPE[np.dtype(np_dtype)]
    except KeyError:
        raise ValueError(f"Unsupported dtype '{np.dtype(np_dtype)}'") from None


def infer_dtype(values: np.ndarray, dtype: Optional[str] = None) -> np.dtype:
    """Pick the storage dtype for ``values``.

    An explicit ``dtype`` wins. Otherwise floats take the default dtype and
    integers are stored as ``int64``; booleans and non-numeric data are
    rejected.
    """

    if dtype is not None:
        return to_numpy_dtype(dtype)

    kind = values.dtype.kind
    if kind == "f":
        return to_numpy_dtype(get_default_dtype())
    if kind == "i":
        return to_numpy_dtype("int64")
    if kind == "u":
        # NumPy only picks an unsigned type for ints above the int64 range.
        raise TypeError(f"Integer values exceed the int64 range (got {values.dtype})")
    raise TypeError(f"Unsupported element type '{values.dtype}'")


def cast_values(values: np.ndarray, dtype: Optional[str] = None) -> np.ndarray:
    """Copy ``values`` into its storage dtype, refusing integer overflow."""

    np_dtype = infer_dtype(values, dtype)
    if np_dtype.kind == "i" and values.dtype.kind in "iu" and values.size:
        info = np.iinfo(np_dtype)
        if int(values.min()) < info.min or int(values.max()) > info.max:
            raise OverflowError(
                f"Integer values do not fit in {dtype_name(np_dtype)} "
                f"(range {info.min}..{info.max})"
            )
    return np.array(values, dtype=np_dtype)


def is_integer_dtype(np_dtype: np.dtype) -> bool:
    return np_dtype.kind in "iu"


def _seed_default_from_env() -> None:
    value = os.environ.get(_DEFAULT_DTYPE_ENV)
    if not value:
        return
    try:
        set_default_dtype(value.strip())
    except ValueError:
        logger.warning(
            "ignoring %s=%r; expected one of %s",
            _DEFAULT_DTYPE_ENV,
            value,
            sorted(_FLOAT_DTYPES),
        )


_seed_default_from_env()


__all__ = [
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "to_numpy_dtype",
    "dtype_name",
    "infer_dtype",
    "cast_values",
    "is_integer_dtype",
]
