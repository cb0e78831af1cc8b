import numpy as np
from typing import Sequence

from .mathutils import as_bit_array


def apply_bsc(
    bits: Sequence[int],
    p: float,
    rng: np.random.Generator
) -> np.ndarray:
    """
    Pass bits through a binary symmetric channel.

    Parameters
    ----------
    bits
        Transmitted bits (0/1).
    p
        Crossover probability, in [0, 1].
    rng
        Numpy random Generator for reproducibility.

    Returns
    -------
    received : np.ndarray
        Copy of `bits` with each bit flipped independently with probability p.

    Raises
    ------
    ValueError
        If p is outside [0, 1].
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Crossover probability must be in [0, 1], got {p}")
    arr = as_bit_array(bits)
    flips = (rng.random(arr.shape) < p).astype(np.uint8)
    return arr ^ flips


def apply_error_pattern(
    bits: Sequence[int],
    positions: Sequence[int]
) -> np.ndarray:
    """
    Flip the bits at the given positions (a position listed twice cancels).
    """
    arr = as_bit_array(bits)
    for pos in positions:
        if not 0 <= pos < arr.size:
            raise ValueError(f"Position {pos} outside [0, {arr.size})")
        arr[pos] ^= 1
    return arr


def random_error_pattern(
    n: int,
    weight: int,
    rng: np.random.Generator
) -> np.ndarray:
    """Sorted array of `weight` distinct positions in [0, n)."""
    if not 0 <= weight <= n:
        raise ValueError(f"weight must be in [0, {n}], got {weight}")
    return np.sort(rng.choice(n, size=weight, replace=False))
