"""
Pollard's rho factorization with Brent's cycle detection.

Iterates y -> y^2 + c (mod x) with doubling segment lengths and batches the
differences against the segment checkpoint into one running product, so
only one gcd is taken per batch. When a batch product collapses to a
multiple of x the batch is replayed one step at a time.
"""
import logging
import random

from factorizer import FactorOutcome, Factorizer, LooksPrime, outcome_for
from number_utils import gcd

logger = logging.getLogger(__name__)


def _next_in_sequence(y: int, x: int, c: int) -> int:
    return (y * y + c) % x


class PollardBrentFactorizer(Factorizer):
    """
    Randomized factorizer; runtime scales with the square root of the
    smallest prime factor of x.

    The returned divisor is nontrivial but not guaranteed prime. A prime
    x comes back unchanged.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng if rng is not None else random.Random()

    def find_factor(self, x: int) -> FactorOutcome:
        if x < 2:
            return LooksPrime(x)
        if (x & 1) == 0:
            return outcome_for(2, x)
        if x % 3 == 0:
            return outcome_for(3, x)

        rng = self.rng
        y: int = rng.randrange(1, x)  # current value in the sequence
        c: int = rng.randrange(1, x)  # parameter of the sequence
        m: int = rng.randrange(1, x)  # batch size for the running product

        g: int = 1
        r: int = 1
        q: int = 1
        z: int = y       # value of y at the start of the current r segment
        y_prev: int = y  # value of y at the start of the current batch

        # Coarse search
        while g == 1:
            z = y
            for _ in range(r):
                y = _next_in_sequence(y, x, c)

            k = 0
            while k < r and g == 1:
                y_prev = y
                for _ in range(min(m, r - k)):
                    y = _next_in_sequence(y, x, c)
                    # (x + z - y) % x in place of |z - y|; gcd(a, n) == gcd(-a mod n, n)
                    q = q * ((x + z - y) % x) % x
                g = gcd(x, q)
                k += m

            r *= 2

        # q == 0 (mod x): the batch hid the factor, so replay it step by step
        if g == x:
            logger.debug("batch product collapsed mod %d, replaying from %d", x, y_prev)
            y = y_prev
            while True:
                y = _next_in_sequence(y, x, c)
                g = gcd(x, (x + z - y) % x)
                if g > 1:
                    break

        # g may be x (no split) or a composite divisor
        return outcome_for(g, x)
