"""Linear algebra over a finite field given through its arithmetic interface."""
from typing import List, Sequence

from .exceptions import SingularMatrixError

Matrix = List[List[int]]


def _copy(matrix: Sequence[Sequence[int]]) -> Matrix:
    return [[int(v) for v in row] for row in matrix]


def solve_linear_system(matrix: Sequence[Sequence[int]], rhs: Sequence[int], field) -> List[int]:
    """
    Solve matrix * sol = rhs by Gauss-Jordan elimination.

    `field` must provide add, subtract, multiply and inverse. The inputs are
    not modified. Raises SingularMatrixError when some column has no nonzero
    pivot at or below the diagonal, and ValueError on shape mismatch.
    """
    size = len(matrix)
    if any(len(row) != size for row in matrix):
        raise ValueError("matrix must be square")
    if len(rhs) != size:
        raise ValueError("rhs length must match the matrix size")

    # augmented matrix [A | b]
    aug = [row + [int(b)] for row, b in zip(_copy(matrix), rhs)]

    for col in range(size):
        pivot = next((r for r in range(col, size) if aug[r][col] != 0), None)
        if pivot is None:
            raise SingularMatrixError(f"No nonzero pivot in column {col}")
        aug[col], aug[pivot] = aug[pivot], aug[col]

        inv = field.inverse(aug[col][col])
        aug[col] = [field.multiply(v, inv) for v in aug[col]]

        for r in range(size):
            f = aug[r][col]
            if r == col or f == 0:
                continue
            aug[r] = [field.subtract(v, field.multiply(f, p)) for v, p in zip(aug[r], aug[col])]

    return [row[size] for row in aug]

