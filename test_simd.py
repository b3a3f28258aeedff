"""
Tests for the vectorized trial-division scan.

Tests verify:
1. Correctness: block scan finds the same divisor as the scalar loop
2. Block boundaries: divisors at the first/last candidate of a block
3. Edge cases: primes, squares of primes, start past sqrt(n), bad arguments
4. Integration: the factorizer uses it for large inputs
"""

import math

import pytest

from factorization import factorize, _trial_division
from simd_operations import _smallest_odd_divisor, _trial_division_simd


def _scalar_smallest_odd_divisor(n, start):
    d = start
    while d * d <= n:
        if n % d == 0:
            return d
        d += 2
    return None


# ============================================================================
# PART 1: SMALLEST ODD DIVISOR
# ============================================================================

class TestSmallestOddDivisor:
    """Test the block scan for the next odd divisor."""

    def test_basic(self):
        assert _smallest_odd_divisor(1155, 3) == 3
        assert _smallest_odd_divisor(385, 3) == 5
        assert _smallest_odd_divisor(77, 3) == 7

    def test_prime_has_none(self):
        assert _smallest_odd_divisor(2147483647, 3) is None
        assert _smallest_odd_divisor(23, 3) is None

    def test_square_of_prime(self):
        """d*d == n is inside the scanned range"""
        assert _smallest_odd_divisor(1009 * 1009, 3) == 1009
        assert _smallest_odd_divisor(9, 3) == 3

    def test_start_past_sqrt(self):
        assert _smallest_odd_divisor(15, 5) is None
        assert _smallest_odd_divisor(1000003, 999985) is None

    def test_respects_start(self):
        """Divisors below start are skipped"""
        assert _smallest_odd_divisor(3 * 5 * 7 * 11, 9) == 11

    @pytest.mark.parametrize("block_size", [1, 2, 3, 7, 64, 1 << 16])
    def test_matches_scalar_for_block_sizes(self, block_size):
        for n in range(3, 5000, 2):
            assert _smallest_odd_divisor(n, 3, block_size) == _scalar_smallest_odd_divisor(n, 3), n

    @pytest.mark.parametrize("block_size", [4, 5])
    def test_divisor_at_block_edges(self, block_size):
        """Blocks of size k cover [lo, lo + 2k); divisor on either edge is found"""
        # with start=3, block 1 is 3..(3 + 2k - 2), block 2 starts at 3 + 2k
        first_of_second = 3 + 2 * block_size
        last_of_first = first_of_second - 2
        for d in (last_of_first, first_of_second):
            if all(d % p for p in range(3, d, 2)):
                n = d * d
                assert _smallest_odd_divisor(n, 3, block_size) == d

    def test_large_semiprime(self):
        assert _smallest_odd_divisor(999983 * 1000003, 3) == 999983

    def test_even_start_rejected(self):
        with pytest.raises(ValueError):
            _smallest_odd_divisor(15, 4)

    def test_int64_overflow_rejected(self):
        with pytest.raises(OverflowError):
            _smallest_odd_divisor(2**63 + 1, 3)

    def test_returns_python_int(self):
        assert type(_smallest_odd_divisor(1155, 3)) is int


# ============================================================================
# PART 2: FULL VECTORIZED TRIAL DIVISION
# ============================================================================

class TestTrialDivisionSIMD:
    """Test the odd-factor loop built on the block scan."""

    def test_basic(self):
        assert _trial_division_simd(1155) == [3, 5, 7, 11]

    def test_prime(self):
        assert _trial_division_simd(23) == [23]
        assert _trial_division_simd(2147483647) == [2147483647]

    def test_prime_power(self):
        assert _trial_division_simd(3**5) == [3, 3, 3, 3, 3]

    def test_one(self):
        assert _trial_division_simd(1) == []

    def test_start_offset(self):
        """Callers pass the first untested candidate"""
        assert _trial_division_simd(1009 * 1013, 1001) == [1009, 1013]

    def test_matches_scalar(self):
        for n in range(3, 20000, 2):
            assert _trial_division_simd(n) == _trial_division(n), n

    def test_product(self):
        n = 3**4 * 7919 * 104729
        factors = _trial_division_simd(n)
        assert math.prod(factors) == n
        assert factors == sorted(factors)


# ============================================================================
# PART 3: INTEGRATION
# ============================================================================

class TestIntegration:

    def test_factorize_forced_vectorized(self):
        n = 2**3 * 1009**2 * 1013
        assert factorize(n, vectorized=True) == [2, 2, 2, 1009, 1009, 1013]

    def test_mersenne_semiprime(self):
        assert factorize(524287 * 2147483647) == [524287, 2147483647]
