import itertools
import logging

import numpy as np
import pytest

import bchfec.bchcoder
from bchfec.bchcoder import (
    BchCoder,
    DecodeStatus,
    bch_code,
    build_code,
    decode,
    encode,
)
from bchfec.exceptions import (
    ConsistencyError,
    DecodingInputLengthMismatch,
    EncodingInputLengthMismatch,
    InvalidCodeParameters,
)
from bchfec.galoisfield import build_field
from bchfec.locator import LocatorStatus, locate_errors
from bchfec.polynomial import bits_to_poly, poly_mod, poly_shift, poly_to_bits, poly_to_sympy


def make_coder(n=15, k=7, t=2, m=4, systematic=True):
    return build_code(build_field(m), n, k, t, systematic=systematic)


def flip(word, positions):
    out = word.copy()
    for pos in positions:
        out[pos] ^= 1
    return out


# -------------------------------------------------------------------------
# Classic (15, 7) scenario over GF(2^4), x^4 + x + 1
# -------------------------------------------------------------------------

MSG = [1, 0, 1, 1, 0, 0, 0]


def test_reference_codeword():
    coder = make_coder()
    assert coder.generator_polynomial == [1, 0, 0, 0, 1, 0, 1, 1, 1]
    cw = encode(coder, MSG)
    assert cw.shape == (15,) and cw.dtype == np.uint8
    assert not poly_mod(bits_to_poly(cw), coder.g_poly)
    # systematic: message in the high-order positions
    assert list(cw[8:]) == MSG
    res = decode(coder, cw)
    assert res.status is DecodeStatus.NO_ERROR
    assert list(res.message) == MSG
    assert res.positions == ()


@pytest.mark.parametrize("weight", [1, 2])
def test_reference_all_correctable_patterns(weight):
    coder = make_coder()
    cw = coder.encode(MSG)
    for errs in itertools.combinations(range(coder.n), weight):
        res = coder.decode(flip(cw, errs))
        assert res.status is DecodeStatus.CORRECTED, f"Failed to correct errors {errs}"
        assert list(res.message) == MSG
        assert res.positions == errs


def test_reference_three_errors_never_inconsistent():
    coder = make_coder()
    cw = coder.encode(MSG)
    outcomes = {DecodeStatus.UNCORRECTABLE: 0, DecodeStatus.CORRECTED: 0}
    for errs in itertools.combinations(range(coder.n), 3):
        received = flip(cw, errs)
        res = coder.decode(received)
        assert res.status is not DecodeStatus.NO_ERROR
        outcomes[res.status] += 1
        if res.status is DecodeStatus.UNCORRECTABLE:
            assert res.message is None
            continue
        # miscorrection onto another codeword: consistent but wrong
        fixed = coder.correct(received, res.positions)
        assert len(res.positions) <= coder.t
        assert coder.is_codeword(fixed)
        assert np.array_equal(coder.encode(res.message), fixed)
        assert list(res.message) != MSG
    assert outcomes[DecodeStatus.UNCORRECTABLE] > 0
    assert outcomes[DecodeStatus.CORRECTED] > 0


# -------------------------------------------------------------------------
# Round trips and correction for several codes
# -------------------------------------------------------------------------

CODES = [
    # n, k, t, m
    (7, 4, 1, 3),
    (15, 11, 1, 4),
    (15, 7, 2, 4),
    (15, 5, 3, 4),
    (31, 16, 3, 5),
    (12, 4, 2, 4),     # shortened (15, 7)
    (15, 5, 2, 4),     # deg g = 8 < n - k
]


@pytest.mark.parametrize("systematic", [True, False])
@pytest.mark.parametrize("n,k,t,m", CODES)
def test_no_error_roundtrip(n, k, t, m, systematic):
    coder = make_coder(n, k, t, m, systematic)
    for _ in range(5):
        msg = np.random.randint(0, 2, size=k)
        cw = coder.encode(msg)
        assert not poly_mod(bits_to_poly(cw), coder.g_poly)
        res = coder.decode(cw)
        assert res.status is DecodeStatus.NO_ERROR
        assert np.array_equal(res.message, msg)
        assert res.positions == ()


@pytest.mark.parametrize("systematic", [True, False])
@pytest.mark.parametrize("n,k,t,m", CODES)
def test_random_roundtrip_within_capacity(n, k, t, m, systematic):
    coder = make_coder(n, k, t, m, systematic)
    for _ in range(2):
        msg = np.random.randint(0, 2, size=k)
        cw = coder.encode(msg)
        # test *all* error-patterns of weight up to t
        for weight in range(1, t + 1):
            for errs in itertools.combinations(range(n), weight):
                res = coder.decode(flip(cw, errs))
                assert res.status is DecodeStatus.CORRECTED, f"Failed to correct errors {errs} for {(n, k, t)}"
                assert np.array_equal(res.message, msg)
                assert res.positions == errs


def test_bch_255_239_random():
    coder = bch_code(255, 2)
    assert coder.k == 239
    assert coder.generator_degree == 16
    for _ in range(5):
        msg = np.random.randint(0, 2, size=coder.k)
        cw = coder.encode(msg)
        assert coder.decode(cw).status is DecodeStatus.NO_ERROR
        errs = tuple(sorted(np.random.choice(range(255), 2, replace=False).tolist()))
        res = coder.decode(flip(cw, errs))
        assert res.status is DecodeStatus.CORRECTED
        assert np.array_equal(res.message, msg)
        assert res.positions == errs


# -------------------------------------------------------------------------
# Code properties
# -------------------------------------------------------------------------

@pytest.mark.parametrize("n,k,t,m,dmin", [
    (7, 4, 1, 3, 3),
    (15, 7, 2, 4, 5),
    (15, 5, 3, 4, 7),
])
def test_minimum_distance(n, k, t, m, dmin):
    coder = make_coder(n, k, t, m)
    assert coder.minimum_distance() == dmin
    assert coder.minimum_distance() >= 2 * t + 1


def test_distinct_codewords_are_far_apart():
    coder = make_coder()
    words = [coder.encode([(i >> j) & 1 for j in range(coder.k)]) for i in range(1 << coder.k)]
    for a, b in itertools.combinations(words, 2):
        assert np.count_nonzero(a != b) >= coder.d


def test_generator_matrix():
    coder = make_coder(systematic=False)
    G = coder.generator_matrix()
    assert G.shape == (7, 15)
    # non-systematic rows are shifts of g
    assert list(G[0][:9]) == coder.generator_polynomial
    assert list(G[1][1:10]) == coder.generator_polynomial


def test_bch_code_defaults():
    coder = bch_code(15, 2)
    assert (coder.n, coder.k, coder.t, coder.field.m) == (15, 7, 2, 4)
    assert coder.d == 5
    assert coder.rate == pytest.approx(7 / 15)
    assert coder.generator_sympy() == poly_to_sympy([1, 0, 0, 0, 1, 0, 1, 1, 1])
    assert bch_code(31, 3).k == 16


# -------------------------------------------------------------------------
# Streams
# -------------------------------------------------------------------------

def test_stream_roundtrip_with_errors():
    coder = make_coder()
    bits = np.random.randint(0, 2, size=coder.k * 4)
    stream = coder.encode_stream(bits)
    assert stream.size == coder.n * 4
    stream[3] ^= 1
    stream[coder.n + 10] ^= 1
    stream[coder.n + 11] ^= 1
    out, results = coder.decode_stream(stream)
    assert np.array_equal(out, bits)
    assert [r.status for r in results] == [
        DecodeStatus.CORRECTED, DecodeStatus.CORRECTED, DecodeStatus.NO_ERROR, DecodeStatus.NO_ERROR]


def test_stream_keeps_length_on_failure():
    coder = make_coder()
    stream = coder.encode_stream(np.zeros(coder.k * 2, dtype=np.uint8))
    cw = coder.encode(MSG)
    bad = None
    for errs in itertools.combinations(range(coder.n), 3):
        candidate = flip(cw, errs)
        if coder.decode(candidate).status is DecodeStatus.UNCORRECTABLE:
            bad = candidate
            break
    assert bad is not None
    stream[:coder.n] = bad
    out, results = coder.decode_stream(stream)
    assert out.size == coder.k * 2
    assert results[0].status is DecodeStatus.UNCORRECTABLE
    assert np.array_equal(out[:coder.k], bad[coder.n - coder.k:])


def test_stream_length_checks():
    coder = make_coder()
    with pytest.raises(EncodingInputLengthMismatch):
        coder.encode_stream([0] * (coder.k + 1))
    with pytest.raises(DecodingInputLengthMismatch):
        coder.decode_stream([0] * (coder.n - 1))
    assert coder.encode_stream([]).size == 0


# -------------------------------------------------------------------------
# Words the decoder must refuse
# -------------------------------------------------------------------------

def assert_uncorrectable(coder, word, reason, caplog):
    caplog.set_level(logging.INFO, logger="bchfec.bchcoder")
    res = coder.decode(word)
    assert res.status is DecodeStatus.UNCORRECTABLE
    assert res.message is None
    assert res.positions == ()
    assert not res.ok
    assert reason in caplog.text


def test_multiple_of_g_outside_message_span(caplog):
    # deg g = 8 but n - k = 10: x*g(x) sets bit 9, which no codeword uses
    coder = make_coder(15, 5, 2)
    word = poly_to_bits(poly_shift(coder.g_poly, 1), 15)
    assert coder.syndromes(word) == [0, 0, 0, 0]
    assert not coder.is_codeword(word)
    assert_uncorrectable(coder, word, "zero syndromes but word is not in the code", caplog)


def test_every_pgz_system_singular(caplog):
    # r(x) = x^4 + x + 1 vanishes at omega, so s1 = s2 = s4 = 0 while s3 != 0
    coder = make_coder()
    word = np.zeros(15, dtype=np.uint8)
    word[[0, 1, 4]] = 1
    S = coder.syndromes(word)
    assert S[0] == S[1] == S[3] == 0 and S[2] != 0
    _, status = locate_errors(S, coder.field, coder.t)
    assert status is LocatorStatus.INCONCLUSIVE
    assert_uncorrectable(coder, word, "no nonsingular PGZ system", caplog)


def test_shortened_code_root_past_last_position(caplog):
    # same syndromes as a single error at x^13, beyond n = 12
    coder = make_coder(12, 4, 2)
    word = poly_to_bits(poly_mod(poly_shift([1], 13), coder.g_poly), 12)
    locator, status = locate_errors(coder.syndromes(word), coder.field, coder.t)
    assert status is LocatorStatus.FOUND
    assert len(locator) - 1 == 1
    assert_uncorrectable(coder, word, "locator of degree 1 has 0 roots in range", caplog)


def test_corrected_word_outside_the_code(caplog):
    # one flip away from x*g(x), which is divisible by g but not a codeword
    coder = make_coder(15, 5, 2)
    word = flip(poly_to_bits(poly_shift(coder.g_poly, 1), 15), [0])
    locator, status = locate_errors(coder.syndromes(word), coder.field, coder.t)
    assert status is LocatorStatus.FOUND
    assert locator == [1, 1]
    assert_uncorrectable(coder, word, "corrected word is not in the code", caplog)


def test_encode_checks_divisibility(monkeypatch):
    coder = make_coder()
    real_mod = bchfec.bchcoder.poly_mod
    calls = []

    def skewed_mod(a, b):
        calls.append(a)
        # the second call is the final divisibility check
        return [1] if len(calls) == 2 else real_mod(a, b)

    monkeypatch.setattr(bchfec.bchcoder, "poly_mod", skewed_mod)
    with pytest.raises(ConsistencyError):
        coder.encode(MSG)


# -------------------------------------------------------------------------
# Invalid-parameter and input checks
# -------------------------------------------------------------------------

def test_invalid_code_params():
    field = build_field(4)
    # deg g = 8 > n - k = 7
    with pytest.raises(InvalidCodeParameters):
        BchCoder(field, 15, 8, 2)
    # longer than the field supports
    with pytest.raises(InvalidCodeParameters):
        BchCoder(field, 16, 7, 2)
    with pytest.raises(InvalidCodeParameters):
        BchCoder(field, 7, 8, 0)
    with pytest.raises(InvalidCodeParameters):
        BchCoder(field, 15, 0, 1)
    with pytest.raises(InvalidCodeParameters):
        bch_code(15, 8)
    # deg g = 6 leaves no room in a length-5 word
    with pytest.raises(InvalidCodeParameters):
        bch_code(5, 2, m=3)
    with pytest.raises(ValueError):
        BchCoder(field, 15, 7, 8)


def test_input_length_mismatch():
    coder = make_coder()
    with pytest.raises(EncodingInputLengthMismatch):
        coder.encode([1, 0, 1])
    with pytest.raises(DecodingInputLengthMismatch):
        coder.decode([0] * 14)
    with pytest.raises(ValueError):
        coder.decode([0] * 16)
    with pytest.raises(ValueError):
        coder.encode([0, 1, 2, 0, 0, 0, 0])


def test_correct_rejects_out_of_range_position():
    coder = make_coder()
    with pytest.raises(ValueError):
        coder.correct(np.zeros(15, dtype=np.uint8), [15])


def test_decode_does_not_modify_input():
    coder = make_coder()
    received = flip(coder.encode(MSG), [1, 9])
    before = received.copy()
    coder.decode(received)
    assert np.array_equal(received, before)


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
