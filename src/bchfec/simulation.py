"""
Monte Carlo evaluation of a BCH code over a binary symmetric channel.

Encode/decode calls share nothing but the immutable coder, so chunks of
codewords are farmed out to joblib workers without coordination.
"""
import logging
from typing import Dict, Iterable, List, Optional

import numpy as np
from joblib import Parallel, delayed

from .bchcoder import BchCoder
from .channel import apply_bsc
from .metrics import hamming_distance, word_error_bound

log = logging.getLogger(__name__)


def single_run(seed, coder: BchCoder, p: float, n_words: int) -> Dict[str, int]:
    """Raw error counts for `n_words` random messages."""
    rng_run = np.random.default_rng(seed)
    # generate random bit payload
    bits = rng_run.integers(0, 2, size=n_words * coder.k).astype(np.uint8)
    cw = coder.encode_stream(bits)
    rx = apply_bsc(cw, p, rng_run)
    dec, results = coder.decode_stream(rx)

    msgs = bits.reshape(-1, coder.k)
    decs = dec.reshape(-1, coder.k)
    word_errors = 0
    miscorrections = 0
    uncorrectable = 0
    for msg, out, res in zip(msgs, decs, results):
        wrong = bool(np.any(msg != out))
        word_errors += wrong
        if not res.ok:
            uncorrectable += 1
        elif wrong:
            miscorrections += 1

    return {
        'words': n_words,
        'channel_bit_errors': hamming_distance(cw, rx),
        'bit_errors': hamming_distance(bits, dec),
        'word_errors': word_errors,
        'uncorrectable': uncorrectable,
        'miscorrections': miscorrections,
    }


def simulate_bsc(
    coder: BchCoder,
    p: float,
    n_words: int = 1000,
    seed: Optional[int] = None,
    n_jobs: int = 1,
    chunk_size: int = 250
) -> Dict[str, float]:
    """
    Estimate coded performance at crossover probability p.

    Returns a dict with ber_uncoded, ber_coded, word_error_rate,
    uncorrectable_rate, miscorrection_rate and the analytic
    word_error_bound.
    """
    if n_words <= 0 or chunk_size <= 0:
        raise ValueError("n_words and chunk_size must be positive")
    sizes = [chunk_size] * (n_words // chunk_size)
    if n_words % chunk_size:
        sizes.append(n_words % chunk_size)
    seeds = np.random.SeedSequence(seed).spawn(len(sizes))

    runs = Parallel(n_jobs=n_jobs)(
        delayed(single_run)(s, coder, p, size) for s, size in zip(seeds, sizes)
    )
    total = {key: sum(run[key] for run in runs) for key in runs[0]}

    row = {
        'p': p,
        'ber_uncoded': total['channel_bit_errors'] / (n_words * coder.n),
        'ber_coded': total['bit_errors'] / (n_words * coder.k),
        'word_error_rate': total['word_errors'] / n_words,
        'uncorrectable_rate': total['uncorrectable'] / n_words,
        'miscorrection_rate': total['miscorrections'] / n_words,
        'word_error_bound': word_error_bound(coder.n, coder.t, p),
    }
    log.info(f"BSC p={p:.3g}: coded BER={row['ber_coded']:.3e}, WER={row['word_error_rate']:.3e}")
    return row


def sweep_bsc(
    coder: BchCoder,
    ps: Iterable[float],
    n_words: int = 1000,
    seed: Optional[int] = None,
    n_jobs: int = 1
) -> List[Dict[str, float]]:
    """One simulate_bsc row per crossover probability."""
    return [simulate_bsc(coder, p, n_words=n_words, seed=seed, n_jobs=n_jobs) for p in ps]
