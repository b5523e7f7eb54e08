# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import logging

from ._dtype import default_dtype, get_default_dtype, set_default_dtype
from .errors import InvalidShapeError, ShapeMismatchError, TensorError
from .tensor import Tensor, from_numpy, from_rows, full, new, ones, zeros

try:
    from ._version import __version__, __version_tuple__
except ImportError:  # pragma: no cover - fallback for source checkouts
    __version__ = "0.1.0"
    __version_tuple__ = (0, 1, 0)

logging.getLogger(__name__).addHandler(logging.NullHandler())

tensor = Tensor

__all__ = [
    "Tensor",
    "tensor",
    "new",
    "from_rows",
    "zeros",
    "ones",
    "full",
    "from_numpy",
    "TensorError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "__version__",
]
