import logging
from typing import List

import torch

from .errors import AllocationError, InvalidDimensionError
from .gauss_jordan import PIVOT_TOLERANCE, InversionResult, check_tolerance

logger = logging.getLogger(__name__)


class GaussJordanTorch:
    """
    Gauss-Jordan inversion on PyTorch tensors.

    Same pivot, swap and damping procedure as ``inverse_matrix.gauss_jordan``,
    with the row operations dispatched to the selected device.
    """

    def __init__(self, device: str = 'cuda', dtype: torch.dtype = torch.float64,
                 tol: float = PIVOT_TOLERANCE):
        """
        Args:
            device: 'cuda' for GPU, 'cpu' for CPU comparison
            dtype: Floating dtype of the working matrix
            tol: Pivot tolerance, also used as the damping value
        """
        wants_cuda = torch.device(device).type == 'cuda'
        self.device = torch.device(device if not wants_cuda or torch.cuda.is_available() else 'cpu')
        if wants_cuda and self.device.type == 'cpu':
            logger.warning("CUDA not available, falling back to CPU")
        self.dtype = dtype
        self.tol = check_tolerance(tol)

    def _as_tensor(self, A) -> torch.Tensor:
        try:
            A = torch.as_tensor(A, dtype=self.dtype, device=self.device)
        except ValueError as exc:
            # ragged nested sequences
            raise InvalidDimensionError(f"Input is not a rectangular matrix: {exc}") from exc
        if A.dim() != 2 or A.shape[0] != A.shape[1]:
            raise InvalidDimensionError(f"Matrix must be square, got shape {tuple(A.shape)}")
        if A.shape[0] == 0:
            raise InvalidDimensionError("Matrix order must be positive")
        return A

    def augment(self, A: torch.Tensor) -> torch.Tensor:
        """Build [A | I] on self.device."""
        n = A.shape[0]
        I = torch.eye(n, dtype=self.dtype, device=self.device)
        return torch.cat([A, I], dim=1)

    def find_and_swap(self, pivot_row: int, work: torch.Tensor) -> bool:
        """Swap the first row below ``pivot_row`` with a usable pivot into place."""
        column = work[pivot_row + 1:, pivot_row].abs() > self.tol
        candidates = torch.nonzero(column)
        if candidates.numel() == 0:
            return False
        r = pivot_row + 1 + int(candidates[0, 0])
        work[[pivot_row, r]] = work[[r, pivot_row]]
        return True

    def reduce(self, work: torch.Tensor) -> List[int]:
        """
        In-place Gauss-Jordan reduction.

        Returns:
            damped: pivot indices forced to ``self.tol``
        """
        R = work.shape[0]
        damped = []
        for i in range(R):
            pivot = work[i, i].item()
            if abs(pivot) < self.tol:
                if not self.find_and_swap(i, work):
                    logger.debug("No usable pivot in column %d, damping to %g", i, self.tol)
                    work[i, i] = self.tol
                    damped.append(i)
                pivot = work[i, i].item()

            work[i] /= pivot

            # All rows except i at once: row_k -= work[k, i] * row_i
            others = torch.arange(R, device=self.device) != i
            work[others] -= work[others, i:i + 1] * work[i]
        return damped

    def invert(self, A) -> InversionResult:
        """
        Invert matrix with Gauss-Jordan elimination.

        Args:
            A: Input matrix [n, n] (tensor, ndarray or nested lists)

        Returns:
            InversionResult whose ``inverse`` is a tensor on self.device
        """
        A = self._as_tensor(A)
        n = A.shape[0]
        try:
            work = self.augment(A)
            damped = self.reduce(work)
        except (MemoryError, torch.cuda.OutOfMemoryError) as exc:
            raise AllocationError(f"Could not allocate working matrix for order {n}") from exc

        if damped:
            logger.warning("Matrix of order %d is singular; damped pivots %s", n, damped)
        return InversionResult(inverse=work[:, n:].clone(), damped_pivots=tuple(damped))

    def invert_direct(self, A) -> torch.Tensor:
        """
        Direct inversion using PyTorch's built-in (for comparison).
        """
        A = self._as_tensor(A)
        return torch.linalg.inv(A)
