"""
Benchmark suite for the trial-division factorizer.

Benchmarks:
1. Trial Division: scalar loop vs NumPy block scan
2. Worst Case: primes and semiprimes near the 2^53 bound
3. Cache Performance: repeated calls with and without memoization
4. Grouping & Formatting: group_factors + format_factorization
5. History: append/remove throughput
"""

import time
import sys
import random
import statistics
from typing import List, Callable

from factorization import (
    MAX_SAFE_INTEGER, factorize, group_factors, clear_caches, _trial_division,
    _trial_division_vectorized,
)
from history import HistoryStore, format_factorization


# ============================================================================
# BENCHMARK UTILITIES
# ============================================================================

class BenchmarkResult:
    """Store benchmark results with statistics."""

    def __init__(self, name: str, times: List[float], operations: int = 1):
        self.name = name
        self.times = sorted(times)
        self.operations = operations

        self.min = min(times)
        self.max = max(times)
        self.mean = statistics.mean(times)
        self.median = statistics.median(times)
        self.stdev = statistics.stdev(times) if len(times) > 1 else 0

    @property
    def per_operation(self) -> float:
        """Mean seconds per operation when one call covers several."""
        return self.mean / self.operations

    def __str__(self):
        return (f"{self.name:40} | "
                f"Mean: {self.mean*1000:8.3f}ms | "
                f"Median: {self.median*1000:8.3f}ms | "
                f"StdDev: {self.stdev*1000:8.3f}ms | "
                f"Min: {self.min*1000:8.3f}ms | "
                f"Max: {self.max*1000:8.3f}ms"
                + (f" | Per op: {self.per_operation*1e6:8.3f}us" if self.operations > 1 else ""))


def benchmark(func: Callable, *args, iterations: int = 5, **kwargs) -> BenchmarkResult:
    """
    Benchmark a function and return statistics.

    Args:
        func: Function to benchmark
        *args: Positional arguments to function
        iterations: Number of iterations to run
        **kwargs: Keyword arguments to function

    Returns:
        BenchmarkResult with timing statistics
    """
    times = []

    # Warm up
    func(*args, **kwargs)

    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        times.append(elapsed)

    return BenchmarkResult(func.__name__, times)


def _header(title: str):
    print("\n" + "="*100)
    print(title)
    print("="*100)


# ============================================================================
# 1. TRIAL DIVISION BENCHMARKS
# ============================================================================

def benchmark_trial_division():
    """Compare the scalar loop with the vectorized scan (uncached)."""
    _header("TRIAL DIVISION BENCHMARKS")

    test_cases = [
        (360, "Small composite (360)"),
        (30030, "Product of primes (2*3*5*7*11*13)"),
        (2147483647, "Mersenne prime 2^31-1"),
        (999983 * 1000003, "Semiprime ~10^12"),
    ]

    for n, description in test_cases:
        scalar = benchmark(_trial_division, n, iterations=5)
        scalar.name = f"{description:30} (scalar)"
        print(scalar)

        vectorized = benchmark(_trial_division_vectorized, n, iterations=5)
        vectorized.name = f"{description:30} (numpy)"
        print(vectorized)

        print(f"  → NumPy speedup: {scalar.mean / vectorized.mean:.1f}x\n")


# ============================================================================
# 2. WORST CASE NEAR THE BOUND
# ============================================================================

def benchmark_worst_case():
    """Large inputs where the scan runs to sqrt(n)."""
    _header("WORST CASE BENCHMARKS (auto path)")

    test_cases = [
        (MAX_SAFE_INTEGER, "2^53 - 1 = 6361 * 69431 * 20394401"),
        (2147483647 * 524287, "Mersenne semiprime ~10^15"),
        (2**53 - 111, "Largest prime below 2^53"),
    ]

    for n, description in test_cases:
        clear_caches()
        result = benchmark(factorize, n, iterations=1)
        result.name = description
        print(result)


# ============================================================================
# 3. CACHE PERFORMANCE
# ============================================================================

def benchmark_caching_impact():
    """Measure memoization speedup on repeated inputs."""
    _header("CACHING IMPACT")

    n = 999983 * 1000003

    clear_caches()
    start = time.perf_counter()
    factorize(n)
    first = time.perf_counter() - start

    times = []
    for _ in range(100):
        start = time.perf_counter()
        factorize(n)
        times.append(time.perf_counter() - start)

    cached = BenchmarkResult("Semiprime ~10^12 (cached)", times)
    print(f"{'Semiprime ~10^12 (first call)':40} | {first*1000:8.3f}ms")
    print(cached)
    print(f"  → Cache speedup: {first / cached.mean:.1f}x\n")


# ============================================================================
# 4. GROUPING & FORMATTING
# ============================================================================

def benchmark_grouping():
    _header("GROUPING & FORMATTING")

    numbers = [random.randint(2, 10**6) for _ in range(1000)]
    factor_lists = [factorize(n) for n in numbers]

    def group_all():
        for factors in factor_lists:
            format_factorization(group_factors(factors))

    result = benchmark(group_all, iterations=10)
    result.name = "1000 group + format"
    result.operations = len(factor_lists)
    print(result)


# ============================================================================
# 5. HISTORY
# ============================================================================

def benchmark_history():
    _header("HISTORY STORE")

    def fill_and_drain():
        store = HistoryStore()
        for n in range(1000):
            store.append(n, str(n))
        while len(store):
            store.remove_at(0)

    result = benchmark(fill_and_drain, iterations=10)
    result.name = "1000 append + 1000 remove_at(0)"
    result.operations = 2000
    print(result)


# ============================================================================
# MAIN BENCHMARK SUITE
# ============================================================================

def run_all_benchmarks():
    """Run all benchmarks."""
    print("\n")
    print("╔" + "="*98 + "╗")
    print("║" + " "*25 + "TRIAL DIVISION FACTORIZER BENCHMARK SUITE" + " "*32 + "║")
    print("╚" + "="*98 + "╝")

    try:
        benchmark_trial_division()
        benchmark_worst_case()
        benchmark_caching_impact()
        benchmark_grouping()
        benchmark_history()

        print("\n" + "="*100)
        print("BENCHMARK COMPLETE")
        print("="*100 + "\n")

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run_all_benchmarks()
