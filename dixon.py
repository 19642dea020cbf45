"""
Dixon's factorization method (congruence of squares).

Step 1 collects congruences a^2 = b (mod x) where b is smooth over a fixed
factor base. Step 2 reduces the exponent-parity matrix of the b values
over GF(2); every all-zero row names a subset of congruences whose b
product is a perfect square, giving (Π a)^2 = (sqrt Π b)^2 (mod x) and a
chance that gcd(Π a - sqrt Π b, x) splits x.
"""
import logging
import random
from typing import Sequence

from factorizer import AttemptsExhausted, Factor, FactorOutcome, Factorizer, LooksPrime
from factors import Factorization
from gf2_operations import BitMatrix
from number_utils import gcd, isqrt

logger = logging.getLogger(__name__)

# Congruences collected beyond the factor base size
DEFAULT_EXTRA_COUNT = 3
# Samples tried per congruence before giving up
DEFAULT_MAX_ATTEMPTS = 100


def factorize_limited(value: int, primes: Sequence[int]) -> Factorization | None:
    """
    Factor value using only the given primes.

    Args:
        value: Strictly positive integer
        primes: Factor base, walked in order

    Returns:
        The factorization if value is smooth over primes, None otherwise
    """
    if value <= 0:
        raise ValueError(f"cannot factor non-positive value {value}")

    f = Factorization()
    remaining = value
    for p in primes:
        count = 0
        while remaining % p == 0:
            remaining //= p
            count += 1
        f.set(p, count)

    # Only report complete factorizations
    if remaining == 1:
        return f
    return None


class DixonFactorizer(Factorizer):
    """
    Randomized congruence-of-squares factorizer over a fixed factor base.

    Composites whose prime factors are small relative to the factor base
    split quickly; a LooksPrime outcome only means this attempt failed.
    """

    def __init__(
        self,
        primes: Sequence[int],
        extra_count: int = DEFAULT_EXTRA_COUNT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: random.Random | None = None
    ):
        if extra_count < 1:
            raise ValueError("extra_count must be at least 1")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.primes = tuple(primes)
        self.extra_count = extra_count
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else random.Random()

    def find_factor(self, x: int) -> FactorOutcome:
        if x < 2:
            return LooksPrime(x)

        # Step 1: collect congruences a^2 = b (mod x) with b smooth
        a_min = isqrt(x)
        a_count = len(self.primes) + self.extra_count
        a_values: list[int] = []
        b_factorizations: list[Factorization] = []

        for _ in range(a_count):
            for _ in range(self.max_attempts):
                # isqrt(x) <= a < x
                a = self.rng.randrange(a_min, x)
                b = a * a % x

                # x divides a*a but not a, so gcd(a, x) is a nontrivial factor
                if b == 0:
                    candidate = gcd(a, x)
                    assert candidate != 1 and candidate != x
                    logger.debug("early exit: %d^2 = 0 (mod %d)", a, x)
                    return Factor(candidate)

                b_factorization = factorize_limited(b, self.primes)
                if b_factorization is not None:
                    a_values.append(a)
                    b_factorizations.append(b_factorization)
                    break
            else:
                logger.warning(
                    "no smooth residue mod %d after %d attempts (%d of %d congruences)",
                    x, self.max_attempts, len(a_values), a_count
                )
                return AttemptsExhausted(x, self.max_attempts, len(a_values))

        logger.debug("collected %d congruences mod %d", len(a_values), x)

        # Step 2: find products of b values which are square
        matrix = BitMatrix.from_factorizations(b_factorizations, self.primes)
        rank = matrix.to_row_echelon()
        dependencies = matrix.zero_rows()
        logger.debug("matrix rank %d, %d dependencies", rank, len(dependencies))

        for row in dependencies:
            candidate = self._candidate_from_dependency(
                x, sorted(row.indices), a_values, b_factorizations
            )
            if candidate != 1 and candidate != x:
                return Factor(candidate)

        # x *looks* like a prime
        return LooksPrime(x)

    @staticmethod
    def _candidate_from_dependency(
        x: int,
        indices: list[int],
        a_values: list[int],
        b_factorizations: list[Factorization]
    ) -> int:
        """gcd(Π a - sqrt(Π b), x) over the congruences named by indices."""
        a_prod = 1
        b_prod_factors = Factorization()
        for i in indices:
            a_prod = a_prod * a_values[i] % x
            b_prod_factors = b_prod_factors * b_factorizations[i]

        # every exponent is even since the row sums to zero mod 2
        b_prodsqrt = b_prod_factors.sqrt().product(x)
        return gcd((a_prod - b_prodsqrt) % x, x)
