"""
inverse_matrix
==============

Square matrix inversion by Gauss-Jordan elimination with row interchange on
near-zero pivots.

>>> import inverse_matrix
>>> inverse_matrix.inv([[2.0, 0.0], [0.0, 2.0]])
array([[0.5, 0. ],
       [0. , 0.5]])

``invert`` returns an ``InversionResult`` whose ``degenerate`` flag tells a
true inverse apart from the damped approximation produced for singular input.
The PyTorch variant lives in ``inverse_matrix.torch_backend`` and is only
importable when torch is installed.
"""

import logging
from importlib.metadata import PackageNotFoundError, version as _pkg_version

from .errors import (
    AllocationError,
    InvalidDimensionError,
    InversionError,
    SingularMatrixError,
)
from .gauss_jordan import (
    PIVOT_TOLERANCE,
    InversionResult,
    augment,
    extract,
    find_and_swap,
    inv,
    invert,
    reduce,
)

__all__ = [
    "invert",
    "inv",
    "augment",
    "reduce",
    "find_and_swap",
    "extract",
    "InversionResult",
    "PIVOT_TOLERANCE",
    "InversionError",
    "InvalidDimensionError",
    "AllocationError",
    "SingularMatrixError",
]

try:
    __version__ = _pkg_version("inverse-matrix")
except PackageNotFoundError:  # running from a checkout
    __version__ = "0.0.0.dev0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
