import logging
from typing import Sequence, Union

import numpy as np
from sympy import Poly, ZZ
from sympy.polys.galoistools import gf_irreducible_p

from .exceptions import DivisionByZero, InvalidFieldParameters

log = logging.getLogger(__name__)

# Largest supported extension degree; tables hold 2^m entries.
MAX_M = 16

# Default primitive polynomial per extension degree, as bit masks
# (bit i = coefficient of x^i).
PRIMITIVE_POLYNOMIALS = {
    2: 0x7,        # x^2 + x + 1
    3: 0xb,        # x^3 + x + 1
    4: 0x13,       # x^4 + x + 1
    5: 0x25,       # x^5 + x^2 + 1
    6: 0x43,       # x^6 + x + 1
    7: 0x89,       # x^7 + x^3 + 1
    8: 0x11d,      # x^8 + x^4 + x^3 + x^2 + 1
    9: 0x211,      # x^9 + x^4 + 1
    10: 0x409,     # x^10 + x^3 + 1
    11: 0x805,     # x^11 + x^2 + 1
    12: 0x1053,    # x^12 + x^6 + x^4 + x + 1
    13: 0x201b,    # x^13 + x^4 + x^3 + x + 1
    14: 0x4443,    # x^14 + x^10 + x^6 + x + 1
    15: 0x8003,    # x^15 + x + 1
    16: 0x1100b,   # x^16 + x^12 + x^3 + x + 1
}

PolySpec = Union[int, Sequence[int], Poly]


def _poly_mask(poly: PolySpec) -> int:
    """
    Normalize a GF(2) polynomial given as a bit mask, an ascending
    coefficient list or a sympy Poly into a bit mask.
    """
    if isinstance(poly, Poly):
        coeffs = [int(c) for c in reversed(poly.all_coeffs())]
    elif isinstance(poly, (int, np.integer)):
        if poly < 0:
            raise InvalidFieldParameters("Polynomial mask must be non-negative")
        return int(poly)
    else:
        coeffs = [int(c) for c in poly]
    if any(c not in (0, 1) for c in coeffs):
        raise InvalidFieldParameters("Field polynomial coefficients must be 0 or 1")
    mask = 0
    for i, c in enumerate(coeffs):
        if c:
            mask |= 1 << i
    return mask


def _is_irreducible(mask: int) -> bool:
    # sympy wants dense coefficients, highest degree first
    dense = [int(b) for b in bin(mask)[2:]]
    return bool(gf_irreducible_p(dense, 2, ZZ))


class BinaryField:
    """
    The prime field GF(2), exposing the same arithmetic interface as
    GaloisField so polynomial code can run over either coefficient field.
    """
    m = 1
    size = 2
    order = 1

    def add(self, a: int, b: int) -> int:
        return a ^ b

    subtract = add

    def multiply(self, a: int, b: int) -> int:
        return a & b

    def inverse(self, a: int) -> int:
        if a == 0:
            raise DivisionByZero()
        return 1

    def divide(self, a: int, b: int) -> int:
        return self.multiply(a, self.inverse(b))

    def power(self, a: int, e: int) -> int:
        if a == 0:
            if e < 0:
                raise DivisionByZero()
            return 1 if e == 0 else 0
        return 1

    def __repr__(self) -> str:
        return "GF(2)"


GF2 = BinaryField()


class GaloisField:
    """
    GF(2^m) built from a primitive polynomial.

    Elements are ints in [0, 2^m) holding the polynomial-basis bit vector
    (bit j is the coefficient of alpha^j). Addition is XOR; multiplication,
    inverse and power go through log/antilog tables. The primitive root
    omega used by the codec is alpha = x mod p(x), i.e. the element 2.
    """

    def __init__(self, m: int, primitive_poly: PolySpec):
        if not isinstance(m, (int, np.integer)) or not 2 <= m <= MAX_M:
            raise InvalidFieldParameters(f"m must be an integer in [2, {MAX_M}], got {m!r}")
        m = int(m)
        mask = _poly_mask(primitive_poly)
        if mask.bit_length() - 1 != m:
            raise InvalidFieldParameters(
                f"Field polynomial must have degree {m}, got degree {mask.bit_length() - 1}")
        if not _is_irreducible(mask):
            raise InvalidFieldParameters(f"Polynomial 0x{mask:x} is reducible over GF(2)")

        self.m = m
        self.size = 1 << m
        self.order = self.size - 1
        self.primitive_poly = mask

        # exp is doubled so log[a] + log[b] never needs a modulo
        exp = [0] * (2 * self.order)
        logs = [-1] * self.size
        x = 1
        for i in range(self.order):
            if logs[x] != -1:
                raise InvalidFieldParameters(
                    f"Polynomial 0x{mask:x} is irreducible but not primitive: "
                    f"root has order {i}, expected {self.order}")
            exp[i] = x
            logs[x] = i
            x <<= 1
            if x & self.size:
                x ^= mask
        exp[self.order:] = exp[:self.order]

        # tuples: the field is shared read-only by every coder built on it
        self._exp = tuple(exp)
        self._log = tuple(logs)
        log.info(f"Built GF(2^{m}) from primitive polynomial 0x{mask:x}")

    # -- narrow arithmetic interface ---------------------------------------

    def add(self, a: int, b: int) -> int:
        return a ^ b

    subtract = add

    def multiply(self, a: int, b: int) -> int:
        if a == 0 or b == 0:
            return 0
        return self._exp[self._log[a] + self._log[b]]

    def inverse(self, a: int) -> int:
        if a == 0:
            raise DivisionByZero()
        return self._exp[(self.order - self._log[a]) % self.order]

    def divide(self, a: int, b: int) -> int:
        if b == 0:
            raise DivisionByZero()
        if a == 0:
            return 0
        return self._exp[(self._log[a] - self._log[b]) % self.order]

    def power(self, a: int, e: int) -> int:
        if a == 0:
            if e < 0:
                raise DivisionByZero()
            return 1 if e == 0 else 0
        return self._exp[(self._log[a] * e) % self.order]

    def alpha_power(self, i: int) -> int:
        """omega^i for any integer i (negative exponents included)."""
        return self._exp[i % self.order]

    def log(self, a: int) -> int:
        """Discrete logarithm of a nonzero element to base omega."""
        if a == 0:
            raise DivisionByZero("Logarithm of zero in GF field")
        return self._log[a]

    def __eq__(self, other) -> bool:
        if not isinstance(other, GaloisField):
            return NotImplemented
        return self.m == other.m and self.primitive_poly == other.primitive_poly

    def __hash__(self) -> int:
        return hash((self.m, self.primitive_poly))

    def __repr__(self) -> str:
        return f"GaloisField(m={self.m}, primitive_poly=0x{self.primitive_poly:x})"


def build_field(m: int, primitive_poly: PolySpec = None) -> GaloisField:
    """
    Build GF(2^m). When `primitive_poly` is omitted the tabulated default
    for m is used.
    """
    if primitive_poly is None:
        try:
            primitive_poly = PRIMITIVE_POLYNOMIALS[m]
        except (KeyError, TypeError):
            raise InvalidFieldParameters(f"No default primitive polynomial for m={m!r}")
    return GaloisField(m, primitive_poly)


def is_primitive(mask: int, m: int) -> bool:
    """True if the bit-mask polynomial is primitive of degree m."""
    try:
        GaloisField(m, mask)
    except InvalidFieldParameters:
        return False
    return True


def find_primitive_polynomial(m: int) -> int:
    """
    Deterministic search for a primitive polynomial of degree m.
    Tries x^m + x + 1 first, then every odd mask of degree m in order.
    """
    if not 2 <= m <= MAX_M:
        raise InvalidFieldParameters(f"m must be in [2, {MAX_M}], got {m}")
    first = (1 << m) | 0b11
    candidates = [first] + [c for c in range((1 << m) + 1, 1 << (m + 1), 2) if c != first]
    for cand in candidates:
        # the cheap irreducibility test filters before building tables
        if not _is_irreducible(cand):
            continue
        log.debug(f"Testing irreducible candidate 0x{cand:x}")
        if is_primitive(cand, m):
            log.info(f"Selected primitive polynomial 0x{cand:x} for m={m}")
            return cand
    raise InvalidFieldParameters(f"No primitive polynomial of degree {m} found")
