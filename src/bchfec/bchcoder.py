# src/bchfec/bchcoder.py

import logging
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .bchcodegenerator import BchCodeGenerator
from .chien import chien_search
from .exceptions import (
    ConsistencyError,
    DecodingInputLengthMismatch,
    EncodingInputLengthMismatch,
    InvalidCodeParameters,
)
from .galoisfield import GaloisField, build_field
from .locator import LocatorStatus, compute_syndromes, locate_errors
from .mathutils import as_bit_array, hamming_weight
from .polynomial import (
    bits_to_poly,
    poly_add,
    poly_divmod,
    poly_mod,
    poly_multiply,
    poly_shift,
    poly_to_bits,
    poly_to_str,
    poly_to_sympy,
)

log = logging.getLogger(__name__)

# minimum_distance() enumerates 2^k codewords
MAX_BRUTE_FORCE_K = 20


class DecodeStatus(Enum):
    NO_ERROR = "no_error"
    CORRECTED = "corrected"
    UNCORRECTABLE = "uncorrectable"


class DecodeResult(NamedTuple):
    status: DecodeStatus
    message: Optional[np.ndarray] = None
    positions: Tuple[int, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is not DecodeStatus.UNCORRECTABLE


class BchCoder:
    """
    BCH encoder/decoder for binary (n, k, t) codes over GF(2).
    Corrects up to t errors via Peterson-Gorenstein-Zierler + Chien search.

    n may be smaller than 2^m - 1 (shortened code). The field tables and the
    generator polynomial are built once here and never modified.
    """

    def __init__(
        self,
        field: GaloisField,
        n: int,
        k: int,
        t: int,
        systematic: bool = True
    ):
        # parameter checks
        if not all(isinstance(v, int) for v in (n, k, t)):
            raise InvalidCodeParameters("n, k and t must be integers")
        if n <= 0 or k <= 0 or t < 0:
            raise InvalidCodeParameters(f"Need n > 0, k > 0, t >= 0, got n={n}, k={k}, t={t}")
        if k > n:
            raise InvalidCodeParameters(f"k={k} must not exceed n={n}")
        if n > field.order:
            raise InvalidCodeParameters(
                f"Codeword length n={n} exceeds field order 2^{field.m} - 1 = {field.order}")

        self.field = field
        self.n, self.k, self.t = n, k, t
        self.systematic = bool(systematic)

        self.generator = BchCodeGenerator(field, t)
        g = self.generator.compute_generator_poly()
        if len(g) - 1 > n - k:
            raise InvalidCodeParameters(
                f"Generator degree {len(g) - 1} exceeds n - k = {n - k} for t={t}")
        self.g_poly = tuple(g)

        log.info(f"BchCoder(n={n},k={k},d={self.d},t={t},m={field.m},"
                 f"systematic={self.systematic})")

    # -- properties --------------------------------------------------------

    @property
    def d(self) -> int:
        """Designed minimum distance."""
        return 2 * self.t + 1

    @property
    def rate(self) -> float:
        return self.k / self.n

    @property
    def generator_degree(self) -> int:
        return len(self.g_poly) - 1

    @property
    def generator_polynomial(self) -> List[int]:
        return list(self.g_poly)

    def generator_sympy(self):
        """g(x) as a sympy Poly over GF(2)."""
        return poly_to_sympy(self.g_poly)

    def __repr__(self) -> str:
        return (f"BchCoder(n={self.n}, k={self.k}, t={self.t}, field={self.field!r}, "
                f"g={poly_to_str(self.g_poly)})")

    # -- input validation --------------------------------------------------

    def _check_message(self, message: Sequence[int]) -> np.ndarray:
        msg = as_bit_array(message)
        if msg.size != self.k:
            raise EncodingInputLengthMismatch(f"Message has {msg.size} bits, expected k={self.k}")
        return msg

    def _check_received(self, received: Sequence[int]) -> np.ndarray:
        recv = as_bit_array(received)
        if recv.size != self.n:
            raise DecodingInputLengthMismatch(f"Received word has {recv.size} bits, expected n={self.n}")
        return recv

    # -- encoding ----------------------------------------------------------

    def encode(self, message: Sequence[int]) -> np.ndarray:
        """
        Encode k message bits into an n-bit codeword.

        Systematic: c(x) = m(x) x^(n-k) + (m(x) x^(n-k) mod g(x)), so the
        message sits unchanged in positions n-k .. n-1.
        Non-systematic: c(x) = m(x) g(x).
        """
        msg = self._check_message(message)
        m_poly = bits_to_poly(msg)
        if self.systematic:
            shifted = poly_shift(m_poly, self.n - self.k)
            c_poly = poly_add(shifted, poly_mod(shifted, self.g_poly))
        else:
            c_poly = poly_multiply(m_poly, self.g_poly)
        if poly_mod(c_poly, self.g_poly):
            raise ConsistencyError("Encoded word is not a multiple of g(x)")
        return poly_to_bits(c_poly, self.n)

    def encode_stream(self, bits: Sequence[int]) -> np.ndarray:
        """Encode a flat bit array whose length is a multiple of k, block by block."""
        arr = as_bit_array(bits)
        if arr.size % self.k:
            raise EncodingInputLengthMismatch(f"Stream length {arr.size} is not a multiple of k={self.k}")
        blocks = arr.reshape(-1, self.k)
        if blocks.shape[0] == 0:
            return np.zeros(0, dtype=np.uint8)
        return np.concatenate([self.encode(block) for block in blocks])

    def generator_matrix(self) -> np.ndarray:
        """k x n matrix whose row i encodes the i-th unit message."""
        eye = np.eye(self.k, dtype=np.uint8)
        return np.array([self.encode(row) for row in eye], dtype=np.uint8)

    # -- decoding ----------------------------------------------------------

    def syndromes(self, received: Sequence[int]) -> List[int]:
        """s_1..s_2t of a received word."""
        return compute_syndromes(self._check_received(received), self.field, self.t)

    def is_codeword(self, bits: Sequence[int]) -> bool:
        word = self._check_received(bits)
        return self._extract_message(word) is not None

    def correct(self, received: Sequence[int], positions: Sequence[int]) -> np.ndarray:
        """Flip the bit at every position; returns a new array."""
        word = self._check_received(received)
        for pos in positions:
            if not 0 <= pos < self.n:
                raise ValueError(f"Error position {pos} outside [0, {self.n})")
            word[pos] ^= 1
        return word

    def _extract_message(self, codeword: np.ndarray) -> Optional[np.ndarray]:
        """
        Message bits of a word in the code, or None when the word is not a
        codeword (nonzero remainder mod g, or a multiple of g outside the
        span of the k message bits).
        """
        quotient, remainder = poly_divmod(bits_to_poly(codeword), self.g_poly)
        if remainder:
            return None
        if self.systematic:
            # positions deg(g) .. n-k-1 are always zero in a codeword
            if np.any(codeword[self.generator_degree:self.n - self.k]):
                return None
            return codeword[self.n - self.k:].copy()
        if len(quotient) > self.k:
            return None
        return poly_to_bits(quotient, self.k)

    def _uncorrectable(self, reason: str) -> DecodeResult:
        log.info(f"Uncorrectable word: {reason}")
        return DecodeResult(DecodeStatus.UNCORRECTABLE)

    def decode(self, received: Sequence[int]) -> DecodeResult:
        """
        Decode an n-bit received word.

        Returns NO_ERROR with the message, CORRECTED with the message and the
        flipped positions, or UNCORRECTABLE. A correction is only reported
        when the number of located roots equals deg(Lambda) and the corrected
        word is divisible by g(x).
        """
        recv = self._check_received(received)

        # 1) syndromes S1..S2t
        S = compute_syndromes(recv, self.field, self.t)
        log.debug(f"Syndromes: {S}")

        # 2) no errors?
        locator, status = locate_errors(S, self.field, self.t)
        if status is LocatorStatus.NO_ERROR:
            msg = self._extract_message(recv)
            if msg is None:
                return self._uncorrectable("zero syndromes but word is not in the code")
            return DecodeResult(DecodeStatus.NO_ERROR, msg, ())
        if status is LocatorStatus.INCONCLUSIVE:
            return self._uncorrectable("no nonsingular PGZ system")

        # 3) Chien search
        positions = chien_search(locator, self.field, self.n)
        degree = len(locator) - 1
        if len(positions) != degree:
            return self._uncorrectable(
                f"locator of degree {degree} has {len(positions)} roots in range")

        # 4) flip bits and re-derive the message
        corrected = self.correct(recv, positions)
        msg = self._extract_message(corrected)
        if msg is None:
            return self._uncorrectable("corrected word is not in the code")
        log.debug(f"Corrected positions {positions}")
        return DecodeResult(DecodeStatus.CORRECTED, msg, positions)

    def decode_stream(self, bits: Sequence[int]) -> Tuple[np.ndarray, List[DecodeResult]]:
        """
        Decode a flat bit array of whole codewords. Uncorrectable blocks
        contribute their raw systematic bits (zeros for a non-systematic
        code) so the output keeps its length.
        """
        arr = as_bit_array(bits)
        if arr.size % self.n:
            raise DecodingInputLengthMismatch(f"Stream length {arr.size} is not a multiple of n={self.n}")
        results = []
        out = np.zeros((arr.size // self.n, self.k), dtype=np.uint8)
        for i, block in enumerate(arr.reshape(-1, self.n)):
            res = self.decode(block)
            results.append(res)
            if res.message is not None:
                out[i] = res.message
            elif self.systematic:
                out[i] = block[self.n - self.k:]
        return out.reshape(-1), results

    # -- code properties ---------------------------------------------------

    def minimum_distance(self) -> int:
        """
        True minimum distance by enumerating every nonzero codeword
        (Gray-code walk over the generator matrix rows).
        """
        if self.k > MAX_BRUTE_FORCE_K:
            raise ValueError(f"k={self.k} too large for brute force (max {MAX_BRUTE_FORCE_K})")
        G = self.generator_matrix()
        word = np.zeros(self.n, dtype=np.uint8)
        best = self.n
        prev_gray = 0
        for i in range(1, 1 << self.k):
            gray = i ^ (i >> 1)
            row = (gray ^ prev_gray).bit_length() - 1
            word ^= G[row]
            prev_gray = gray
            best = min(best, hamming_weight(word))
        return best


# -- module-level API --------------------------------------------------------

def build_code(field: GaloisField, n: int, k: int, t: int, systematic: bool = True) -> BchCoder:
    return BchCoder(field, n, k, t, systematic=systematic)


def encode(code: BchCoder, message: Sequence[int]) -> np.ndarray:
    return code.encode(message)


def decode(code: BchCoder, received: Sequence[int]) -> DecodeResult:
    return code.decode(received)


def bch_code(n: int, t: int, m: int = None, systematic: bool = True) -> BchCoder:
    """
    Narrow-sense BCH code of length n correcting t errors with the largest
    possible k = n - deg(g). m defaults to the smallest degree with
    2^m - 1 >= n; the field uses the tabulated primitive polynomial.
    """
    if not isinstance(n, int) or n < 3:
        raise InvalidCodeParameters(f"n must be an integer >= 3, got {n!r}")
    if m is None:
        m = n.bit_length()
    field = build_field(m)
    g = BchCodeGenerator(field, t).compute_generator_poly()
    k = n - (len(g) - 1)
    if k <= 0:
        raise InvalidCodeParameters(f"t={t} leaves no message bits for n={n} (deg g = {len(g) - 1})")
    return BchCoder(field, n, k, t, systematic=systematic)
