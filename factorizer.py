"""
Common interface for single-factor finders.

A factorizer produces one factor of x per call. Full factorization is the
recursive composition performed by Factorizer.factorize().

Outcomes of find_factor():
- Factor(d): d is a nontrivial divisor of x
- LooksPrime(x): no split was found; x may be prime or the attempt was unlucky
- AttemptsExhausted: the search ran out of attempts (an internal resource
  fault, distinct from LooksPrime)
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from factors import Factorization
from number_utils import is_prime, isqrt

logger = logging.getLogger(__name__)

# Default number of retries for StubbornFactorizer
DEFAULT_MAX_TRIES = 20


@dataclass(frozen=True)
class Factor:
    value: int


@dataclass(frozen=True)
class LooksPrime:
    value: int


@dataclass(frozen=True)
class AttemptsExhausted:
    x: int
    attempts: int
    collected: int


FactorOutcome = Factor | LooksPrime | AttemptsExhausted


class FactorizationError(Exception):
    """Base class for factorization errors."""


class AttemptsExhaustedError(FactorizationError):
    """A randomized search gave up before collecting enough data."""

    def __init__(self, x: int, attempts: int, collected: int):
        super().__init__(
            f"exhausted {attempts} attempts while factoring {x} "
            f"({collected} congruences collected)"
        )
        self.x = x
        self.attempts = attempts
        self.collected = collected


def outcome_for(d: int, x: int) -> FactorOutcome:
    """Wrap a divisor candidate: d == x means no split was found."""
    if d == x:
        return LooksPrime(x)
    return Factor(d)


class Factorizer(ABC):
    """Base class for algorithms producing one factor of x per call."""

    @abstractmethod
    def find_factor(self, x: int) -> FactorOutcome:
        """Search for a single factor of x."""

    def get_factor(self, x: int) -> int:
        """
        Produce a single factor of x.

        Returns x itself when no split was found.

        Raises:
            AttemptsExhaustedError: if the search gave up
        """
        outcome = self.find_factor(x)
        if isinstance(outcome, AttemptsExhausted):
            raise AttemptsExhaustedError(outcome.x, outcome.attempts, outcome.collected)
        return outcome.value

    def factorize(self, x: int) -> Factorization:
        """
        Factorize x by repeatedly splitting with get_factor().

        A factor equal to the number being split is recorded as prime, so the
        result is only fully prime when the factorizer never gives up on a
        composite.
        """
        if x < 1:
            raise ValueError(f"cannot factorize {x}")

        result = Factorization()
        pending = [x]
        while pending:
            n = pending.pop()
            if n == 1:
                continue
            d = self.get_factor(n)
            if d == n:
                result.set(n, result.get(n) + 1)
            else:
                pending.append(d)
                pending.append(n // d)
        return result


class TrialDivisionFactorizer(Factorizer):
    """
    Deterministic factorizer; always produces the smallest nontrivial
    factor of a composite number, which is therefore prime.

    The runtime scales linearly with the size of the smallest factor.
    """

    def find_factor(self, x: int) -> FactorOutcome:
        if x < 4:
            return LooksPrime(x)
        if (x & 1) == 0:
            return Factor(2)

        limit = isqrt(x)
        d = 3
        while d <= limit:
            if x % d == 0:
                return Factor(d)
            d += 2
        return LooksPrime(x)


class StubbornFactorizer(Factorizer):
    """
    Retry policy around a randomized factorizer.

    Probable primes are reported immediately; composites are retried with
    fresh randomness until a nontrivial factor appears or max_tries runs out.
    """

    def __init__(self, inner: Factorizer, max_tries: int = DEFAULT_MAX_TRIES):
        if max_tries < 1:
            raise ValueError("max_tries must be positive")
        self.inner = inner
        self.max_tries = max_tries

    def find_factor(self, x: int) -> FactorOutcome:
        if x < 4 or is_prime(x):
            return LooksPrime(x)

        outcome = None
        for attempt in range(1, self.max_tries + 1):
            outcome = self.inner.find_factor(x)
            if isinstance(outcome, Factor):
                return outcome
            logger.debug("attempt %d on %d gave %r", attempt, x, outcome)

        logger.warning("no factor of composite %d after %d tries", x, self.max_tries)
        return outcome
