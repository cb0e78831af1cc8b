from typing import Sequence

import numpy as np


def as_bit_array(bits: Sequence[int]) -> np.ndarray:
    """
    Copy `bits` into a fresh 1D uint8 array, rejecting anything but 0/1.
    Raises ValueError for other values or shapes.
    """
    arr = np.asarray(bits)
    if arr.ndim != 1:
        raise ValueError("bits must be a 1D sequence")
    if arr.size and not np.isin(arr, (0, 1)).all():
        raise ValueError("bits must contain only 0 and 1")
    return arr.astype(np.uint8, copy=True)


def hamming_weight(bits: Sequence[int]) -> int:
    """Number of nonzero entries."""
    return int(np.count_nonzero(np.asarray(bits)))
