import logging
from typing import List, Optional, Tuple

from .exceptions import InvalidCodeParameters
from .galoisfield import GaloisField
from .minpoly import MinimalPolynomialResolver
from .polynomial import poly_multiply, poly_to_str

log = logging.getLogger(__name__)


class BchCodeGenerator:
    """
    Generator polynomial of a narrow-sense binary BCH code correcting t
    errors: g(x) = lcm(m_1(x), ..., m_2t(x)) where m_i is the minimal
    polynomial of omega^i.
    """

    def __init__(self, field: GaloisField, t: int,
                 resolver: Optional[MinimalPolynomialResolver] = None):
        if not isinstance(t, int) or t < 0:
            raise InvalidCodeParameters(f"t must be a non-negative integer, got {t!r}")
        # omega must have order >= 2t+1 so that omega^1..omega^2t are distinct
        if 2 * t + 1 > field.order:
            raise InvalidCodeParameters(
                f"t={t} needs a root of order >= {2 * t + 1}, field order is {field.order}")
        self.field = field
        self.t = t
        self.resolver = resolver or MinimalPolynomialResolver(field)
        self.factors: List[Tuple[int, ...]] = []
        log.info(f"Initialized BCH gen m={field.m}, t={t}, d={2 * t + 1}")

    def compute_generator_poly(self) -> List[int]:
        """
        Multiply in each minimal polynomial the first time its conjugacy
        class shows up; later conjugates already divide g.
        """
        g = [1]
        used = set()
        factors = []
        for i in range(1, 2 * self.t + 1):
            root = self.field.alpha_power(i)
            key = self.resolver.orbit_key(root)
            if key in used:
                continue
            used.add(key)
            mp = self.resolver.minimal_polynomial(root)
            factors.append(mp)
            g = poly_multiply(g, mp)
        self.factors = factors
        log.info(f"Computed generator poly g(x): {poly_to_str(g)} (degree {len(g) - 1})")
        return g

    def gen(self) -> Tuple[GaloisField, List[int]]:
        """Return (field, generator_poly)."""
        return self.field, self.compute_generator_poly()


def build_generator(field: GaloisField, t: int,
                    resolver: Optional[MinimalPolynomialResolver] = None) -> List[int]:
    return BchCodeGenerator(field, t, resolver).compute_generator_poly()
