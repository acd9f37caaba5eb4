"""Exceptions raised by the inversion routines."""


class InversionError(Exception):
    """Base class for every error raised by ``inverse_matrix``."""


class InvalidDimensionError(InversionError, ValueError):
    """Input or output matrix does not have a usable N x N shape."""


class AllocationError(InversionError, MemoryError):
    """The working buffer could not be allocated."""


class SingularMatrixError(InversionError, ArithmeticError):
    """Raised in strict mode when elimination had to damp a pivot."""

    def __init__(self, damped_pivots):
        self.damped_pivots = tuple(damped_pivots)
        super().__init__(
            f"Singular matrix: no usable pivot in column(s) {list(self.damped_pivots)}"
        )
