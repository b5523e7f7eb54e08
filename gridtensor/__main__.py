# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Print a few sample tensors.

Usage: python -m gridtensor [--dtype float32] [--log-level DEBUG]
"""

import argparse
import logging

from . import Tensor
from ._dtype import _FLOAT_DTYPES
from ._logging import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="gridtensor", description="Print sample gridtensor values."
    )
    parser.add_argument(
        "--dtype",
        default="float32",
        choices=sorted(_FLOAT_DTYPES),
        help="Element dtype for the filled sample tensors (default: float32)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def run_demo(dtype: str = "float32") -> list:
    """Build the sample tensors and return the values that get printed."""
    t1 = Tensor.new(3, 3, 1.0, dtype=dtype)
    t2 = Tensor.new(3, 3, 2.0, dtype=dtype)
    t3 = t1 + t2

    # Row data keeps the default float dtype whatever --dtype selects.
    t4 = Tensor.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    missing = t4.get(10, 0)
    return [t3, t4, missing]


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    logger.info("running demo with dtype %s", args.dtype)

    for value in run_demo(args.dtype):
        print(repr(value))
    print("Hello, world!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
