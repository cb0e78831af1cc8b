"""
Polynomial algebra over GF(2) and GF(2^m).

Polynomials are plain lists of coefficients, index = power of x, with
trailing zeros trimmed; the zero polynomial is ``[]`` (degree -1). Every
function takes the coefficient field as ``field`` (default GF(2)) and only
uses its add/multiply/inverse interface, so the same code serves the binary
message polynomials and the extension-field locator polynomials.
"""
from typing import List, Sequence, Tuple

import numpy as np
from sympy import Poly
from sympy.abc import x
from sympy.polys.domains import GF

from .exceptions import ConsistencyError, DivisionByZeroPolynomial
from .galoisfield import GF2

Polynomial = List[int]


def poly_trim(p: Sequence[int]) -> Polynomial:
    """Copy of `p` without trailing zero coefficients."""
    out = [int(c) for c in p]
    while out and out[-1] == 0:
        out.pop()
    return out


def poly_degree(p: Sequence[int]) -> int:
    return len(poly_trim(p)) - 1


def poly_add(a: Sequence[int], b: Sequence[int], field=GF2) -> Polynomial:
    if len(a) < len(b):
        a, b = b, a
    out = [int(c) for c in a]
    for i, c in enumerate(b):
        out[i] = field.add(out[i], int(c))
    return poly_trim(out)


# characteristic 2
poly_subtract = poly_add


def poly_scale(p: Sequence[int], c: int, field=GF2) -> Polynomial:
    return poly_trim([field.multiply(int(a), c) for a in p])


def poly_shift(p: Sequence[int], s: int) -> Polynomial:
    """Multiply by x^s."""
    p = poly_trim(p)
    if not p:
        return []
    return [0] * s + p


def poly_multiply(a: Sequence[int], b: Sequence[int], field=GF2) -> Polynomial:
    a, b = poly_trim(a), poly_trim(b)
    if not a or not b:
        return []
    out = [0] * (len(a) + len(b) - 1)
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        for j, bj in enumerate(b):
            if bj:
                out[i + j] = field.add(out[i + j], field.multiply(ai, bj))
    return poly_trim(out)


def poly_divmod(a: Sequence[int], b: Sequence[int], field=GF2) -> Tuple[Polynomial, Polynomial]:
    """
    Long division a = q*b + r with deg r < deg b.
    Raises DivisionByZeroPolynomial if b is the zero polynomial.
    """
    b = poly_trim(b)
    if not b:
        raise DivisionByZeroPolynomial()
    rem = poly_trim(a)
    db = len(b) - 1
    if len(rem) - 1 < db:
        return [], rem
    lead_inv = field.inverse(b[-1])
    quot = [0] * (len(rem) - db)
    for i in range(len(rem) - 1, db - 1, -1):
        c = rem[i]
        if c == 0:
            continue
        f = field.multiply(c, lead_inv)
        quot[i - db] = f
        # subtract f * x^(i-db) * b; the leading term cancels exactly
        for j, bj in enumerate(b):
            if bj:
                rem[i - db + j] = field.subtract(rem[i - db + j], field.multiply(f, bj))
    return poly_trim(quot), poly_trim(rem[:db])


def poly_mod(a: Sequence[int], b: Sequence[int], field=GF2) -> Polynomial:
    return poly_divmod(a, b, field)[1]


def poly_evaluate(p: Sequence[int], value: int, field=GF2) -> int:
    """Horner evaluation of p at `value`."""
    acc = 0
    for c in reversed(p):
        acc = field.add(field.multiply(acc, value), int(c))
    return acc


def poly_monic(p: Sequence[int], field=GF2) -> Polynomial:
    p = poly_trim(p)
    if not p:
        return []
    return poly_scale(p, field.inverse(p[-1]), field)


def poly_gcd(a: Sequence[int], b: Sequence[int], field=GF2) -> Polynomial:
    """Monic greatest common divisor (Euclid; degrees strictly decrease)."""
    a, b = poly_trim(a), poly_trim(b)
    while b:
        a, b = b, poly_mod(a, b, field)
    return poly_monic(a, field)


def poly_lcm(a: Sequence[int], b: Sequence[int], field=GF2) -> Polynomial:
    """Monic least common multiple; lcm with the zero polynomial is zero."""
    a, b = poly_trim(a), poly_trim(b)
    if not a or not b:
        return []
    q, r = poly_divmod(poly_multiply(a, b, field), poly_gcd(a, b, field), field)
    if r:
        raise ConsistencyError("gcd must divide a*b")
    return poly_monic(q, field)


# -- conversions -------------------------------------------------------------

def bits_to_poly(bits: Sequence[int]) -> Polynomial:
    """Bit position i becomes the coefficient of x^i."""
    return poly_trim(np.asarray(bits, dtype=np.int64).tolist())


def poly_to_bits(p: Sequence[int], length: int) -> np.ndarray:
    p = poly_trim(p)
    if len(p) > length:
        raise ValueError(f"Polynomial of degree {len(p) - 1} does not fit in {length} bits")
    out = np.zeros(length, dtype=np.uint8)
    out[:len(p)] = p
    return out


def poly_to_sympy(p: Sequence[int]) -> Poly:
    """GF(2) polynomial as a sympy Poly in x over GF(2)."""
    p = poly_trim(p)
    return Poly(list(reversed(p)) or [0], x, domain=GF(2))


def poly_from_sympy(p: Poly) -> Polynomial:
    return poly_trim([int(c) % 2 for c in reversed(p.all_coeffs())])


def poly_to_str(p: Sequence[int]) -> str:
    p = poly_trim(p)
    if not p:
        return "0"
    terms = []
    for i in range(len(p) - 1, -1, -1):
        c = p[i]
        if c == 0:
            continue
        if i == 0:
            mono = ""
        elif i == 1:
            mono = "x"
        else:
            mono = f"x^{i}"
        if c == 1:
            terms.append(mono or "1")
        else:
            terms.append(f"{c}{'*' + mono if mono else ''}")
    return " + ".join(terms)
