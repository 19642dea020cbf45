"""
Integer factorization using trial division, Pollard's Rho (Brent's variant)
and Dixon's congruence-of-squares method.

Each factorizer finds a single factor per call (see factorizer.Factorizer);
the functions here compose them into full prime factorizations.

- TrialDivisionFactorizer: deterministic, smallest prime factor
- PollardBrentFactorizer: randomized, cost ~ sqrt(smallest prime factor)
- DixonFactorizer: randomized, for composites smooth over a small factor base
- DefaultFactorizer: trial division by small primes, then repeated Pollard-Brent

Results of factor() are memoized; call clear_caches() between independent runs.

DEPENDENCIES:
- NumPy: prime sieve and GF(2) bit matrices
- Numba: JIT-compiled GF(2) row operations
"""
import logging
import random
from functools import lru_cache

import number_utils
from dixon import DixonFactorizer, factorize_limited
from factorizer import (
    AttemptsExhausted,
    AttemptsExhaustedError,
    Factor,
    FactorizationError,
    FactorOutcome,
    Factorizer,
    LooksPrime,
    StubbornFactorizer,
    TrialDivisionFactorizer,
    outcome_for,
)
from factors import Factorization
from gf2_operations import BitMatrix, BitRow
from number_utils import gcd, get_small_primes, is_prime, isqrt, primes_upto, trial_division
from pollard_brent import PollardBrentFactorizer

logger = logging.getLogger(__name__)


class DefaultFactorizer(Factorizer):
    """
    Trial division by the cached small primes, then Pollard-Brent retried
    until it produces a nontrivial factor.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rho = StubbornFactorizer(PollardBrentFactorizer(rng))

    def find_factor(self, x: int) -> FactorOutcome:
        if x < 4:
            return LooksPrime(x)

        for p in get_small_primes():
            if p * p > x:
                return LooksPrime(x)
            if x % p == 0:
                return Factor(p)

        return self._rho.find_factor(x)


@lru_cache(maxsize=256)
def _factor_impl(n: int) -> tuple[int, ...]:
    """Cached factorization implementation (returns tuple for hashability)."""
    small_factors, rem = trial_division(n)
    result = Factorization.from_factors(small_factors)
    if rem > 1:
        logger.debug("factoring cofactor %d of %d", rem, n)
        result = result * DefaultFactorizer().factorize(rem)

    factors: list[int] = []
    for p, k in sorted(result.items()):
        factors.extend([p] * k)
    return tuple(factors)


def factorize(n: int) -> Factorization:
    """
    Factorize n into a prime -> exponent mapping.

    Args:
        n: Positive integer

    Returns:
        Factorization of n (empty for n == 1)
    """
    if n < 1:
        raise ValueError(f"cannot factorize {n}")
    return Factorization.from_factors(_factor_impl(n))


def factor(n: int) -> list[int]:
    """
    Factorize n into prime factors.

    Args:
        n: Integer to factorize; the sign is ignored

    Returns:
        Sorted list of prime factors with multiplicity
    """
    n = abs(n)
    if n == 0:
        raise ValueError("cannot factor 0")
    if n == 1:
        return []
    return list(_factor_impl(n))


def clear_caches():
    """Clear all memoization caches. Useful between independent factorization runs."""
    _factor_impl.cache_clear()
    number_utils.clear_caches()


__all__ = [
    "AttemptsExhausted",
    "AttemptsExhaustedError",
    "BitMatrix",
    "BitRow",
    "DefaultFactorizer",
    "DixonFactorizer",
    "Factor",
    "FactorOutcome",
    "Factorization",
    "FactorizationError",
    "Factorizer",
    "LooksPrime",
    "PollardBrentFactorizer",
    "StubbornFactorizer",
    "TrialDivisionFactorizer",
    "clear_caches",
    "factor",
    "factorize",
    "factorize_limited",
    "gcd",
    "get_small_primes",
    "is_prime",
    "isqrt",
    "outcome_for",
    "primes_upto",
    "trial_division",
]

# Example usage
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    n = 123456789101112  # test number
    print("Factors of", n, ":", factor(n))
    print("Dixon factor of 84923:", DixonFactorizer(primes_upto(100)).find_factor(84923))
