import logging
from typing import Dict, List, Tuple

from .exceptions import InvalidFieldParameters
from .galoisfield import GaloisField
from .polynomial import poly_multiply, poly_to_str

log = logging.getLogger(__name__)


class MinimalPolynomialResolver:
    """
    Minimal polynomials over GF(2) of elements of GF(2^m).

    Results are memoised per conjugacy class: once an orbit is resolved,
    every conjugate maps to the same cached tuple.
    """

    def __init__(self, field: GaloisField):
        self.field = field
        self._cache: Dict[int, Tuple[int, ...]] = {}
        self._orbit_key: Dict[int, int] = {}

    def conjugates(self, root: int) -> List[int]:
        """
        Frobenius orbit root, root^2, root^4, ... up to the first repeat.
        Squaring has order m, so the loop runs at most m times.
        """
        seen = set()
        orbit = []
        e = root
        while e not in seen:
            seen.add(e)
            orbit.append(e)
            e = self.field.multiply(e, e)
        if len(orbit) > self.field.m:
            raise InvalidFieldParameters(f"Orbit of {root} exceeds m={self.field.m}")
        return orbit

    def orbit_key(self, root: int) -> int:
        """Smallest element of the orbit; equal for all conjugates."""
        if root not in self._orbit_key:
            self.minimal_polynomial(root)
        return self._orbit_key[root]

    def minimal_polynomial(self, root: int) -> Tuple[int, ...]:
        """
        Minimal polynomial of `root` as an ascending tuple of bits.
        """
        cached = self._cache.get(root)
        if cached is not None:
            return cached

        orbit = self.conjugates(root)
        poly = [1]
        for c in orbit:
            # x - c == x + c in characteristic 2
            poly = poly_multiply(poly, [c, 1], self.field)
        if any(coef not in (0, 1) for coef in poly):
            raise InvalidFieldParameters("Minimal polynomial factor has coefficients outside GF(2)")

        result = tuple(poly)
        key = min(orbit)
        for c in orbit:
            self._cache[c] = result
            self._orbit_key[c] = key
        log.debug(f"Minimal polynomial of orbit {orbit}: {poly_to_str(result)}")
        return result

    def alpha_minimal_polynomial(self, i: int) -> Tuple[int, ...]:
        """Minimal polynomial of omega^i."""
        return self.minimal_polynomial(self.field.alpha_power(i))
