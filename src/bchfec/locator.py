"""
Syndrome computation and the Peterson-Gorenstein-Zierler error-locator
search.
"""
import logging
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np

from .exceptions import SingularMatrixError
from .galoisfield import GaloisField
from .linalg import solve_linear_system
from .polynomial import poly_trim

log = logging.getLogger(__name__)


class LocatorStatus(Enum):
    NO_ERROR = "no_error"
    FOUND = "found"
    INCONCLUSIVE = "inconclusive"


def compute_syndromes(received: Sequence[int], field: GaloisField, t: int) -> List[int]:
    """
    s_i = r(omega^i) for i = 1..2t, where r(x) has coefficient received[j]
    at x^j. Only the set bits contribute, each as omega^(i*j).
    """
    positions = np.flatnonzero(np.asarray(received)).tolist()
    syndromes = []
    for i in range(1, 2 * t + 1):
        s = 0
        for j in positions:
            s ^= field.alpha_power(i * j)
        syndromes.append(s)
    return syndromes


def pgz_system(syndromes: Sequence[int], mu: int) -> Tuple[List[List[int]], List[int]]:
    """
    The mu x mu system for Lambda_mu..Lambda_1:
        M[r][c] = s_(r+c+1),  b[r] = s_(mu+r+1)    (syndromes 1-indexed)
    The right-hand side is -s, which is s in characteristic 2.
    """
    matrix = [[syndromes[r + c] for c in range(mu)] for r in range(mu)]
    rhs = [syndromes[mu + r] for r in range(mu)]
    return matrix, rhs


def locate_errors(syndromes: Sequence[int], field: GaloisField, t: int) -> Tuple[List[int], LocatorStatus]:
    """
    Find the error-locator polynomial Lambda(x) = 1 + L_1 x + ... + L_mu x^mu.

    The true number of errors is unknown, so the trial degree mu goes from t
    down to 1 and the first nonsingular system wins. Returns ([1], NO_ERROR)
    for all-zero syndromes and ([1], INCONCLUSIVE) when every system is
    singular.
    """
    if len(syndromes) != 2 * t:
        raise ValueError(f"Expected {2 * t} syndromes, got {len(syndromes)}")
    if not any(syndromes):
        return [1], LocatorStatus.NO_ERROR

    for mu in range(t, 0, -1):
        matrix, rhs = pgz_system(syndromes, mu)
        try:
            sol = solve_linear_system(matrix, rhs, field)
        except SingularMatrixError:
            log.debug(f"PGZ: system of size {mu} is singular")
            continue
        # sol = [L_mu, ..., L_1]
        locator = poly_trim([1] + sol[::-1])
        log.debug(f"PGZ: accepted mu={mu}, locator={locator}")
        return locator, LocatorStatus.FOUND

    log.debug("PGZ: every trial system is singular")
    return [1], LocatorStatus.INCONCLUSIVE
