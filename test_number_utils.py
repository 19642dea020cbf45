import unittest

from number_utils import (
    clear_caches,
    gcd,
    get_small_primes,
    is_prime,
    isqrt,
    primes_upto,
    trial_division,
)


class TestPrimalityTesting(unittest.TestCase):
    """Test the Miller-Rabin primality test"""

    def test_small_primes(self):
        """Test known small primes"""
        for p in [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]:
            self.assertTrue(is_prime(p), f"{p} should be prime")

    def test_small_composites(self):
        """Test known small composites"""
        for c in [4, 6, 8, 9, 10, 12, 14, 15, 16, 18, 20, 21, 22, 24, 25]:
            self.assertFalse(is_prime(c), f"{c} should be composite")

    def test_edge_cases(self):
        """Test edge cases"""
        self.assertFalse(is_prime(0))
        self.assertFalse(is_prime(1))
        self.assertFalse(is_prime(-5))
        self.assertTrue(is_prime(2))

    def test_large_primes(self):
        """Test some larger known primes"""
        for p in [104729, 1299709, 15485863, 982451653, 2147483647]:
            self.assertTrue(is_prime(p), f"{p} should be prime")

    def test_carmichael_numbers(self):
        """Carmichael numbers fool the Fermat test but not Miller-Rabin"""
        for c in [561, 1105, 1729, 2465, 2821, 6601, 8911]:
            self.assertFalse(is_prime(c), f"{c} is Carmichael number, should be composite")

    def test_mersenne_composites(self):
        """Test composite Mersenne numbers"""
        self.assertFalse(is_prime(2047))
        self.assertFalse(is_prime(8388607))


class TestIntegerHelpers(unittest.TestCase):

    def test_gcd(self):
        self.assertEqual(gcd(12, 18), 6)
        self.assertEqual(gcd(0, 7), 7)
        self.assertEqual(gcd(-4, 6), 2)

    def test_isqrt(self):
        self.assertEqual(isqrt(0), 0)
        self.assertEqual(isqrt(15), 3)
        self.assertEqual(isqrt(16), 4)
        self.assertEqual(isqrt(10**40 + 1), 10**20)

    def test_isqrt_negative(self):
        with self.assertRaises(ValueError):
            isqrt(-1)


class TestPrimesUpto(unittest.TestCase):

    def test_limits(self):
        self.assertEqual(primes_upto(0), [])
        self.assertEqual(primes_upto(1), [])
        self.assertEqual(primes_upto(2), [2])
        self.assertEqual(primes_upto(3), [2, 3])  # first odd prime
        self.assertEqual(primes_upto(4), [2, 3])  # even between odd primes
        self.assertEqual(primes_upto(17), [2, 3, 5, 7, 11, 13, 17])

    def test_count(self):
        self.assertEqual(len(primes_upto(10000)), 1229)

    def test_small_primes_cache(self):
        """Small primes are cached and returned as the same object"""
        clear_caches()
        primes = get_small_primes()
        self.assertEqual(len(primes), 1229)
        self.assertEqual(primes[0], 2)
        self.assertEqual(primes[-1], 9973)
        self.assertIs(primes, get_small_primes())


class TestTrialDivision(unittest.TestCase):
    """Test trial division factorization"""

    def test_small_number(self):
        factors, remainder = trial_division(360, bound=10000)
        self.assertEqual(remainder, 1)
        self.assertEqual(sorted(factors), [2, 2, 2, 3, 3, 5])

    def test_small_prime_within_bound(self):
        factors, remainder = trial_division(97, bound=10000)
        self.assertEqual(factors, [97])
        self.assertEqual(remainder, 1)

    def test_large_prime_beyond_bound(self):
        factors, remainder = trial_division(100003, bound=1000)
        self.assertEqual(factors, [])
        self.assertEqual(remainder, 100003)

    def test_mixed_factors(self):
        factors, remainder = trial_division(6000018, bound=10000)
        self.assertEqual(sorted(factors), [2, 3])
        self.assertEqual(remainder, 1000003)

    def test_bound_above_cache(self):
        factors, remainder = trial_division(2 * 10007, bound=20000)
        self.assertEqual(factors, [2, 10007])
        self.assertEqual(remainder, 1)

    def test_power_of_small_prime(self):
        factors, remainder = trial_division(1024, bound=10000)
        self.assertEqual(factors, [2] * 10)
        self.assertEqual(remainder, 1)

    def test_degenerate_inputs(self):
        self.assertEqual(trial_division(0), ([], 0))
        self.assertEqual(trial_division(1), ([], 1))


if __name__ == "__main__":
    unittest.main()
