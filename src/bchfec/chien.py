from typing import Sequence, Tuple

from .galoisfield import GaloisField
from .polynomial import poly_evaluate


def chien_search(locator: Sequence[int], field: GaloisField, n: int) -> Tuple[int, ...]:
    """
    Error positions of a locator polynomial: position i is in error when
    Lambda(omega^-i) == 0, for i in [0, n). Roots that correspond to
    positions outside the codeword are simply not found, so the caller
    compares the result size with deg(Lambda).
    """
    positions = []
    for i in range(n):
        if poly_evaluate(locator, field.alpha_power(-i), field) == 0:
            positions.append(i)
    return tuple(positions)
