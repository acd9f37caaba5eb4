# Pure Python Gauss-Jordan inversion
#
# Scalar loops over lists of lists, in the same order as the NumPy version.
# Used as the reference result in tests and as the slow baseline in benchmarks.

from .errors import InvalidDimensionError
from .gauss_jordan import PIVOT_TOLERANCE, check_tolerance


def identity(n):
    return [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]


def swap_rows(row_num, M, tol=PIVOT_TOLERANCE):
    # Find a later row with a usable entry in the pivot column
    for i in range(row_num + 1, len(M)):
        if abs(M[i][row_num]) > tol:
            M[i], M[row_num] = M[row_num], M[i]
            return True
    return False


def gauss_jordan(M, tol=PIVOT_TOLERANCE):
    n = len(M)
    C = len(M[0])
    damped = []

    for i in range(n):
        pivot = M[i][i]
        if abs(pivot) < tol:
            if not swap_rows(i, M, tol):
                M[i][i] = tol
                damped.append(i)
            pivot = M[i][i]

        # Normalize row
        for j in range(C):
            M[i][j] /= pivot

        # Eliminate column
        for k in range(n):
            if k != i:
                factor = M[k][i]
                for j in range(C):
                    M[k][j] -= factor * M[i][j]

    return damped


def invert_matrix(A, tol=PIVOT_TOLERANCE):
    tol = check_tolerance(tol)
    if not hasattr(A, "__len__") or any(
        isinstance(row, str) or not hasattr(row, "__len__") for row in A
    ):
        raise InvalidDimensionError("Expected a 2-D matrix (sequence of rows)")
    n = len(A)
    if n == 0 or any(len(row) != n for row in A):
        raise InvalidDimensionError("Matrix must be square with positive order")

    I = identity(n)
    M = [[float(x) for x in A[i]] + I[i] for i in range(n)]

    damped = gauss_jordan(M, tol)

    # Extract inverse
    return [row[n:] for row in M], damped
