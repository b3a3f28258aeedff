"""
SIMD optimizations for trial division.

This module contains the NumPy-vectorized candidate scan used by the
factorizer once the remaining cofactor is large enough that a pure Python
loop over odd divisors becomes the bottleneck.

OPTIMIZATION TARGETS:
1. Odd-candidate scan: NumPy block modulo (10-30x speedup near 2^53)
2. Block sizing: fixed-size int64 blocks keep memory flat
"""

import logging
import math
from typing import List, Optional

import numpy as np

logger = logging.getLogger(__name__)

# Candidates tested per vectorized block
_BLOCK_SIZE: int = 1 << 16

# int64 holds every value in the factorizer's domain exactly
_INT64_MAX: int = int(np.iinfo(np.int64).max)


# ============================================================================
# PART 1: ODD-CANDIDATE SCAN (NumPy Vectorization)
# ============================================================================

def _smallest_odd_divisor(n: int, start: int, block_size: int = _BLOCK_SIZE) -> Optional[int]:
    """
    Find the smallest odd divisor d of n with start <= d and d*d <= n.

    Equivalent to the scalar loop ``d = start; while d*d <= n: ...; d += 2``
    but evaluates ``n % d`` for a whole block of candidates at once.

    Args:
        n: Odd number to scan (must fit in int64)
        start: First odd candidate to test
        block_size: Number of candidates per block

    Returns:
        The divisor, or None when no candidate up to isqrt(n) divides n
    """
    if start % 2 == 0:
        raise ValueError(f"start must be odd, got {start}")
    if n > _INT64_MAX:
        raise OverflowError(f"{n} does not fit in int64")

    limit = math.isqrt(n)
    step = 2 * block_size
    lo = start
    while lo <= limit:
        hi = min(lo + step, limit + 1)
        candidates = np.arange(lo, hi, 2, dtype=np.int64)
        hits = np.flatnonzero(n % candidates == 0)
        if hits.size:
            return int(candidates[hits[0]])
        lo += step
    return None


def _trial_division_simd(n: int, start: int = 3, block_size: int = _BLOCK_SIZE) -> List[int]:
    """
    Divide out every odd prime factor of n using the vectorized scan.

    Args:
        n: Odd number with no factors below start
        start: First odd candidate

    Returns:
        Ascending list of prime factors (with multiplicity), product == n
    """
    factors: List[int] = []
    d = start
    while n > 1:
        p = _smallest_odd_divisor(n, d, block_size)
        if p is None:
            break
        while n % p == 0:
            factors.append(p)
            n //= p
        d = p + 2
    if n > 1:
        factors.append(n)
    logger.debug("vectorized scan produced %d factors", len(factors))
    return factors


__all__: List[str] = [
    '_smallest_odd_divisor',
    '_trial_division_simd',
]
