"""
Benchmark suite for the factorization library.

Benchmarks:
1. Primality Testing: Miller-Rabin with memoization
2. Pollard-Brent: single factor of semiprimes of growing size
3. Dixon: single factor against factor bases of growing size
4. GF(2) Reduction: row echelon form of random bit matrices (Numba JIT)
5. Complete Factorization: factor() with and without caching
"""

import logging
import random
import statistics
import sys
import time
from typing import Callable, List

import numpy as np

from factorization import (
    DixonFactorizer,
    Factor,
    PollardBrentFactorizer,
    clear_caches,
    factor,
    is_prime,
    primes_upto,
)
from gf2_operations import BitMatrix


# ============================================================================
# BENCHMARK UTILITIES
# ============================================================================

class BenchmarkResult:
    """Store benchmark results with statistics."""

    def __init__(self, name: str, times: List[float]):
        self.name = name
        self.times = sorted(times)
        self.min = min(times)
        self.max = max(times)
        self.mean = statistics.mean(times)
        self.median = statistics.median(times)
        self.stdev = statistics.stdev(times) if len(times) > 1 else 0

    def __str__(self):
        return (f"{self.name:40} | "
                f"Mean: {self.mean*1000:8.3f}ms | "
                f"Median: {self.median*1000:8.3f}ms | "
                f"StdDev: {self.stdev*1000:8.3f}ms | "
                f"Min: {self.min*1000:8.3f}ms | "
                f"Max: {self.max*1000:8.3f}ms")


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
        times.append(time.perf_counter() - start)

    return BenchmarkResult(getattr(func, "__name__", "call"), times)


def _header(title: str):
    print("\n" + "="*100)
    print(title)
    print("="*100)


# ============================================================================
# 1. PRIMALITY TESTING BENCHMARKS
# ============================================================================

def benchmark_primality():
    """Benchmark Miller-Rabin primality testing."""
    _header("PRIMALITY TESTING BENCHMARKS")

    for prime in [104729, 1299709, 15485863, 982451653]:
        clear_caches()
        result = benchmark(is_prime, prime, iterations=10)
        result.name = f"is_prime({prime})"
        print(result)


# ============================================================================
# 2. POLLARD-BRENT BENCHMARKS
# ============================================================================

def benchmark_pollard_brent():
    """Benchmark one Pollard-Brent call on semiprimes."""
    _header("POLLARD-BRENT BENCHMARKS")

    rho = PollardBrentFactorizer(random.Random(0))
    test_cases = [
        (101 * 103, "4+4 digit semiprime"),
        (1000003 * 1000033, "7+7 digit semiprime"),
        (1000000007 * 1000000009, "10+10 digit semiprime"),
    ]

    for n, description in test_cases:
        result = benchmark(rho.get_factor, n, iterations=5)
        result.name = description
        print(result)


# ============================================================================
# 3. DIXON BENCHMARKS
# ============================================================================

def benchmark_dixon():
    """Benchmark Dixon's method as the factor base grows."""
    _header("DIXON BENCHMARKS")

    n = 1009 * 1013
    for bound in [100, 200, 400]:
        dixon = DixonFactorizer(primes_upto(bound), rng=random.Random(bound))

        times = []
        successes = 0
        for _ in range(10):
            start = time.perf_counter()
            outcome = dixon.find_factor(n)
            times.append(time.perf_counter() - start)
            if isinstance(outcome, Factor):
                successes += 1

        result = BenchmarkResult(f"factor base primes <= {bound}", times)
        print(result)
        print(f"  → Split {successes}/10 times\n")


# ============================================================================
# 4. GF(2) REDUCTION BENCHMARKS
# ============================================================================

def benchmark_row_echelon():
    """Benchmark JIT row echelon reduction."""
    _header("GF(2) ROW ECHELON BENCHMARKS")

    rng = np.random.default_rng(0)
    for size in [50, 200, 500]:
        elements = rng.integers(0, 2, size=(size + 5, size), dtype=np.uint8)
        indices = np.eye(size + 5, dtype=np.uint8)

        times = []
        for _ in range(5):
            matrix = BitMatrix(elements.copy(), indices.copy())
            start = time.perf_counter()
            matrix.to_row_echelon()
            times.append(time.perf_counter() - start)

        print(BenchmarkResult(f"{size + 5}x{size} matrix", times))


# ============================================================================
# 5. COMPLETE FACTORIZATION BENCHMARKS
# ============================================================================

def benchmark_complete_factorization():
    """Benchmark factor() cold and cached."""
    _header("COMPLETE FACTORIZATION BENCHMARKS")

    for n in [123456789101112, 1000003 * 1000033, 2**64 + 1]:
        clear_caches()
        start = time.perf_counter()
        factors = factor(n)
        cold = time.perf_counter() - start

        start = time.perf_counter()
        factor(n)
        cached = time.perf_counter() - start

        print(f"{n} = {' * '.join(map(str, factors))}")
        print(f"  cold: {cold*1000:8.3f}ms | cached: {cached*1000:8.3f}ms")


# ============================================================================
# MAIN BENCHMARK SUITE
# ============================================================================

def run_all_benchmarks():
    """Run all benchmarks."""
    logging.basicConfig(level=logging.WARNING)

    try:
        benchmark_primality()
        benchmark_pollard_brent()
        benchmark_dixon()
        benchmark_row_echelon()
        benchmark_complete_factorization()

        print("\n" + "="*100)
        print("BENCHMARK COMPLETE")
        print("="*100 + "\n")

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run_all_benchmarks()
