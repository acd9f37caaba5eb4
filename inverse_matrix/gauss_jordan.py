"""Gauss-Jordan inversion on a contiguous NumPy buffer.

The working matrix is the N x 2N augmented block ``[A | I]``. Each pivot row
is scaled so its diagonal entry becomes 1, and every other row is reduced
against it. After N pivot steps the right half holds the inverse.

Near-zero pivots are replaced by the first later row whose entry in the
pivot column is usable. When no such row exists the pivot is forced to the
tolerance value, so singular input still yields a finite (meaningless) result.
Such results are flagged through ``InversionResult.degenerate``.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .errors import (
    AllocationError,
    InvalidDimensionError,
    SingularMatrixError,
)

logger = logging.getLogger(__name__)

# Pivots with |value| below this are treated as zero. Also used as the
# damping value when no row can be swapped in.
PIVOT_TOLERANCE = 1e-15


@dataclass(frozen=True)
class InversionResult:
    inverse: np.ndarray
    damped_pivots: Tuple[int, ...] = ()

    @property
    def degenerate(self) -> bool:
        """True when at least one pivot was damped (input is singular)."""
        return bool(self.damped_pivots)


def as_square_matrix(a, order: Optional[int] = None) -> np.ndarray:
    """Return ``a`` as a float64 ndarray, checking that it is N x N with N > 0."""
    try:
        A = np.asarray(a)
    except ValueError as exc:
        # ragged nested sequences
        raise InvalidDimensionError(f"Input is not a rectangular matrix: {exc}") from exc

    if A.dtype.kind == "c":
        raise TypeError("Matrix entries must be real numbers, got complex input")
    try:
        A = A.astype(np.float64, copy=False)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Matrix entries must be real numbers: {exc}") from exc

    if A.ndim != 2:
        raise InvalidDimensionError(f"Expected a 2-D matrix, got {A.ndim}-D input")
    n, m = A.shape
    if n != m:
        raise InvalidDimensionError(f"Matrix must be square, got {n}x{m}")
    if n == 0:
        raise InvalidDimensionError("Matrix order must be positive")
    if order is not None and order != n:
        raise InvalidDimensionError(f"order={order} does not match matrix size {n}")
    return A


def check_tolerance(tol: float) -> float:
    """Reject a pivot tolerance that could never flag a zero pivot."""
    if not (np.isfinite(tol) and tol > 0):
        raise ValueError(f"Pivot tolerance must be finite and positive, got {tol!r}")
    return float(tol)


def _check_out(out, n: int) -> None:
    if not isinstance(out, np.ndarray):
        raise InvalidDimensionError("out must be a numpy.ndarray")
    if out.shape != (n, n):
        raise InvalidDimensionError(f"out has shape {out.shape}, expected {(n, n)}")
    if not np.can_cast(np.float64, out.dtype, casting="same_kind"):
        raise InvalidDimensionError(f"out dtype {out.dtype} cannot hold float64 results")


def augment(A: np.ndarray) -> np.ndarray:
    """Build the N x 2N working matrix ``[A | I]``."""
    n = A.shape[0]
    work = np.empty((n, 2 * n), dtype=np.float64)
    work[:, :n] = A
    work[:, n:] = np.eye(n)
    return work


def find_and_swap(pivot_row: int, work: np.ndarray, tol: float = PIVOT_TOLERANCE) -> bool:
    """
    Swap the first usable row below ``pivot_row`` into its place.

    Rows ``pivot_row + 1 .. R - 1`` are scanned in order; the first one with
    ``|work[r, pivot_row]| > tol`` is exchanged with ``pivot_row`` across the
    full augmented width.

    Returns:
        True if a swap happened, False if no candidate row exists.
    """
    R = work.shape[0]
    for r in range(pivot_row + 1, R):
        if abs(work[r, pivot_row]) > tol:
            work[[pivot_row, r]] = work[[r, pivot_row]]
            return True
    return False


def reduce(work: np.ndarray, tol: float = PIVOT_TOLERANCE) -> List[int]:
    """
    Gauss-Jordan reduction of ``work`` in place.

    Args:
        work: Augmented matrix [R, C], C >= R
        tol: Pivot tolerance and damping value

    Returns:
        Indices of the pivots that had to be damped (empty for a regular matrix)
    """
    R = work.shape[0]
    damped = []

    for i in range(R):
        pivot = work[i, i]

        # Near-zero pivot: swap a later row in, or damp
        if abs(pivot) < tol:
            if not find_and_swap(i, work, tol):
                logger.debug("No usable pivot in column %d, damping to %g", i, tol)
                work[i, i] = tol
                damped.append(i)
            pivot = work[i, i]

        # Normalize row
        work[i] /= pivot

        # Eliminate column
        for k in range(R):
            if k != i:
                factor = work[k, i]
                work[k] -= factor * work[i]

    return damped


def extract(work: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Copy the right half of the reduced augmented matrix into ``out``."""
    n = work.shape[0]
    if out is None:
        return work[:, n:].copy()
    out[...] = work[:, n:]
    return out


def invert(a, order: Optional[int] = None, *, out: Optional[np.ndarray] = None,
           tol: float = PIVOT_TOLERANCE, strict: bool = False) -> InversionResult:
    """
    Invert a square matrix with Gauss-Jordan elimination.

    ``out`` is only written after elimination has completed, so it is left
    untouched whenever an exception is raised.

    A damped pivot is set to ``tol``, so with a non-default tolerance the
    result for singular input differs from the default-mode result.

    Args:
        a: Square matrix (array-like) of order N
        order: Expected order, checked against the shape of ``a`` if given
        out: Optional preallocated [N, N] array receiving the inverse
        tol: Pivot tolerance, also used as the damping value
        strict: Raise SingularMatrixError instead of returning a damped result

    Returns:
        InversionResult with the inverse and the damped pivot indices

    Raises:
        InvalidDimensionError: bad input/output shape
        TypeError: non-numeric or complex entries
        ValueError: ``tol`` is not finite and positive
        AllocationError: the working buffer could not be allocated
        SingularMatrixError: only when ``strict`` and the matrix is singular
    """
    tol = check_tolerance(tol)
    A = as_square_matrix(a, order)
    n = A.shape[0]
    if out is not None:
        _check_out(out, n)

    try:
        work = augment(A)
        damped = reduce(work, tol)
    except MemoryError as exc:
        raise AllocationError(f"Could not allocate working matrix for order {n}") from exc

    if damped:
        if strict:
            raise SingularMatrixError(damped)
        logger.warning(
            "Matrix of order %d is singular or ill-conditioned; "
            "damped pivots %s, result is not a true inverse", n, damped
        )

    return InversionResult(inverse=extract(work, out), damped_pivots=tuple(damped))


def inv(a, *, out: Optional[np.ndarray] = None, tol: float = PIVOT_TOLERANCE) -> np.ndarray:
    """Shortcut for ``invert(a).inverse``."""
    return invert(a, out=out, tol=tol).inverse
