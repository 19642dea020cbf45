"""
Integer helpers shared by the factorizers.

Provides gcd / integer square root, a memoized Miller-Rabin primality test,
a NumPy sieve of Eratosthenes and small-prime trial division.
"""
import math
from functools import lru_cache

import numpy as np

# Pre-computed primes below this limit are kept in memory
_SMALL_PRIMES_LIMIT = 10000
_small_primes_cache = None


def gcd(a: int, b: int) -> int:
    """Euclidean GCD; the result is always non-negative."""
    return math.gcd(a, b)


def isqrt(x: int) -> int:
    """Floor of the square root of a non-negative integer."""
    if x < 0:
        raise ValueError(f"isqrt of negative number {x}")
    return math.isqrt(x)


def primes_upto(limit: int) -> list[int]:
    """
    Collect all primes up to a limit (inclusive).

    Uses a NumPy vectorized sieve of Eratosthenes.

    Args:
        limit: Largest value to consider

    Returns:
        Primes in increasing order, e.g. primes_upto(17) == [2, 3, 5, 7, 11, 13, 17]
    """
    if limit < 2:
        return []

    sieve = np.ones(limit + 1, dtype=np.uint8)
    sieve[0] = sieve[1] = 0
    sieve[4::2] = 0

    # Mark odd multiples as composite
    for i in range(3, math.isqrt(limit) + 1, 2):
        if sieve[i]:
            sieve[i*i::2*i] = 0

    return [int(p) for p in np.nonzero(sieve)[0]]


def _init_small_primes():
    """Initialize the small primes cache."""
    global _small_primes_cache
    if _small_primes_cache is None:
        _small_primes_cache = primes_upto(_SMALL_PRIMES_LIMIT - 1)
    return _small_primes_cache


@lru_cache(maxsize=1)
def get_small_primes() -> tuple[int, ...]:
    """Get pre-computed small primes (memoized)."""
    return tuple(_init_small_primes())


# Miller–Rabin primality test (memoized)
@lru_cache(maxsize=128)
def is_prime(n: int, bases: tuple[int, ...] = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)) -> bool:
    if n < 2:
        return False
    # small primes check
    for p in (2, 3, 5, 7, 11, 13, 17, 19, 23):
        if n == p:
            return True
        if n % p == 0:
            return False

    # write n-1 as d * 2^s
    d: int = n - 1
    s: int = 0
    while (d & 1) == 0:
        d >>= 1
        s += 1

    def check(a):
        x: int = pow(a, d, n)
        if x == 1 or x == n - 1:
            return True
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                return True
        return False

    for a in bases:
        if a % n == 0:
            continue
        if not check(a):
            return False
    return True


def trial_division(n: int, bound: int = 10000) -> tuple[list[int], int]:
    """
    Divide out every prime factor of n not exceeding bound.

    Args:
        n: Positive integer to reduce
        bound: Largest prime to try

    Returns:
        (list of prime factors found with multiplicity, remaining cofactor)
    """
    factors: list[int] = []
    if n < 2:
        return factors, n

    while (n & 1) == 0:
        factors.append(2)
        n >>= 1
    if n == 1:
        return factors, n

    if bound <= _SMALL_PRIMES_LIMIT:
        primes = get_small_primes()
    else:
        primes = primes_upto(bound)

    for p in primes:
        if p > bound:
            break
        if p == 2:
            continue
        while n % p == 0:
            factors.append(p)
            n //= p
        if n == 1:
            break

    return factors, n


def clear_caches():
    """Clear memoization caches held by this module."""
    global _small_primes_cache
    is_prime.cache_clear()
    get_small_primes.cache_clear()
    _small_primes_cache = None
