import numpy as np
from typing import Sequence
from scipy.stats import binom


def bit_error_rate(
    tx_bits: Sequence[int],
    rx_bits: Sequence[int]
) -> float:
    """
    Compute the Bit Error Rate (BER) between transmitted and received bit sequences.

    Parameters
    ----------
    tx_bits
        Original bit sequence (0/1).
    rx_bits
        Decoded bit sequence (0/1), same length as tx_bits.

    Returns
    -------
    ber : float
        Ratio of bit errors to total bits.

    Raises
    ------
    ValueError
        If tx_bits and rx_bits lengths differ or are empty.
    """
    if len(tx_bits) != len(rx_bits):
        raise ValueError("tx_bits and rx_bits must have the same length")
    if len(tx_bits) == 0:
        raise ValueError("Cannot compute BER of an empty sequence")
    return hamming_distance(tx_bits, rx_bits) / len(tx_bits)


def hamming_distance(
    a: Sequence[int],
    b: Sequence[int]
) -> int:
    """Number of positions at which a and b differ."""
    if len(a) != len(b):
        raise ValueError("Sequences must have the same length")
    return int(np.count_nonzero(np.asarray(a) != np.asarray(b)))


def word_error_bound(
    n: int,
    t: int,
    p: float
) -> float:
    """
    Probability that a BSC with crossover p puts more than t errors into an
    n-bit word. Bounded-distance decoding fails at most this often.

    Parameters
    ----------
    n
        Codeword length.
    t
        Designed error-correcting radius.
    p
        Crossover probability.

    Returns
    -------
    p_word : float
        P[weight(e) > t] for e ~ Binomial(n, p).
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Crossover probability must be in [0, 1], got {p}")
    return float(binom.sf(t, n, p))
