import math
import random
import unittest

from factorization import (
    DefaultFactorizer,
    DixonFactorizer,
    Factor,
    Factorization,
    LooksPrime,
    PollardBrentFactorizer,
    StubbornFactorizer,
    TrialDivisionFactorizer,
    clear_caches,
    factor,
    factorize,
    is_prime,
    primes_upto,
)


def _product(factors):
    product = 1
    for f in factors:
        product *= f
    return product


class TestFactorization(unittest.TestCase):
    """Test the complete factorization function"""

    def test_factor_one(self):
        """Test factoring 1"""
        self.assertEqual(factor(1), [])

    def test_factor_zero_rejected(self):
        """0 has no factorization"""
        with self.assertRaises(ValueError):
            factor(0)

    def test_factor_prime(self):
        """Test factoring a prime number"""
        self.assertEqual(factor(17), [17])
        self.assertEqual(factor(104729), [104729])

    def test_factor_power_of_two(self):
        """Test factoring powers of 2"""
        self.assertEqual(factor(16), [2, 2, 2, 2])
        self.assertEqual(factor(1024), [2] * 10)

    def test_factor_small_composite(self):
        """Test factoring small composite numbers"""
        self.assertEqual(factor(12), [2, 2, 3])
        self.assertEqual(factor(100), [2, 2, 5, 5])
        self.assertEqual(factor(360), [2, 2, 2, 3, 3, 5])

    def test_factor_semiprimes(self):
        """Test factoring semiprimes (product of two primes)"""
        self.assertEqual(factor(143), [11, 13])
        self.assertEqual(factor(1073), [29, 37])
        self.assertEqual(factor(10403), [101, 103])

    def test_factor_large_number(self):
        """Test the example from the module"""
        n = 123456789101112
        factors = factor(n)
        for f in factors:
            self.assertTrue(is_prime(f), f"{f} should be prime")
        self.assertEqual(_product(factors), n)

    def test_factor_various_sizes(self):
        """Test factoring numbers of various sizes"""
        test_cases = [
            (1234567, [127, 9721]),
            (1000, [2, 2, 2, 5, 5, 5]),
            (1000000007, [1000000007]),
            (999999, [3, 3, 3, 7, 11, 13, 37]),
        ]
        for n, expected in test_cases:
            self.assertEqual(factor(n), expected, f"Factors of {n} don't match expected")

    def test_factor_negative_numbers(self):
        """Test that negative numbers are handled (converted to absolute value)"""
        self.assertEqual(factor(-12), factor(12))
        self.assertEqual(factor(-1073), factor(1073))

    def test_large_semiprime(self):
        """Both factors beyond the trial division bound"""
        p1, p2 = 1000003, 1000033
        self.assertEqual(factor(p1 * p2), [p1, p2])

    def test_square_of_large_prime(self):
        p = 1000003
        self.assertEqual(factor(p * p), [p, p])

    def test_correctness_comprehensive(self):
        """Random numbers factor into primes whose product is the input"""
        rng = random.Random(42)
        test_numbers = [2, 4, 15, 100, 1001, 9999, 65536, 999983]
        test_numbers += [rng.randint(2, 10**7) for _ in range(10)]

        for n in test_numbers:
            factors = factor(n)
            for f in factors:
                self.assertTrue(is_prime(f), f"{f} (factor of {n}) should be prime")
            self.assertEqual(_product(factors), n, f"Product of factors should equal {n}")

    def test_factorials_minus_one(self):
        """(n! - 1) often has large prime factors"""
        for k in range(3, 12):
            n = math.factorial(k) - 1
            self.assertEqual(_product(factor(n)), n)


class TestFactorize(unittest.TestCase):
    """Test factorize() returning a Factorization"""

    def test_exponents(self):
        self.assertEqual(factorize(2450), Factorization({2: 1, 5: 2, 7: 2}))

    def test_one(self):
        self.assertTrue(factorize(1).is_one())

    def test_rejects_non_positive(self):
        with self.assertRaises(ValueError):
            factorize(0)

    def test_product_round_trip(self):
        n = 2 ** 5 * 3 ** 3 * 1000003
        self.assertEqual(factorize(n).product(), n)


class TestFactorizers(unittest.TestCase):
    """Every factorizer composes into a full factorization"""

    def test_trial_division_smallest_factor(self):
        f = TrialDivisionFactorizer()
        self.assertEqual(f.get_factor(91), 7)
        self.assertEqual(f.get_factor(1024), 2)
        self.assertEqual(f.get_factor(97), 97)
        self.assertEqual(f.find_factor(97), LooksPrime(97))

    def test_trial_division_factorize(self):
        f = TrialDivisionFactorizer()
        self.assertEqual(f.factorize(360), Factorization({2: 3, 3: 2, 5: 1}))

    def test_default_factorizer(self):
        f = DefaultFactorizer(rng=random.Random(7))
        self.assertEqual(f.find_factor(17), LooksPrime(17))
        self.assertEqual(f.find_factor(35), Factor(5))
        d = f.get_factor(1000003 * 1000033)
        self.assertIn(d, (1000003, 1000033))

    def test_stubborn_pollard_factorize(self):
        f = StubbornFactorizer(PollardBrentFactorizer(random.Random(3)))
        n = 2 ** 3 * 3 * 10403
        self.assertEqual(f.factorize(n), Factorization({2: 3, 3: 1, 101: 1, 103: 1}))

    def test_stubborn_dixon_factorize(self):
        dixon = DixonFactorizer(primes_upto(30), rng=random.Random(11))
        f = StubbornFactorizer(dixon)
        n = 23 * 29 * 13
        self.assertEqual(f.factorize(n), Factorization({13: 1, 23: 1, 29: 1}))

    def test_stubborn_reports_primes_without_searching(self):
        f = StubbornFactorizer(PollardBrentFactorizer(random.Random(0)))
        self.assertEqual(f.find_factor(1000003), LooksPrime(1000003))

    def test_stubborn_rejects_bad_max_tries(self):
        with self.assertRaises(ValueError):
            StubbornFactorizer(TrialDivisionFactorizer(), max_tries=0)


class TestOptimizations(unittest.TestCase):
    """Test caching"""

    def test_cache_clearing(self):
        """Test cache clearing functionality"""
        clear_caches()
        factor(1000003 * 1000033)

        self.assertGreater(is_prime.cache_info().currsize, 0)

        clear_caches()
        self.assertEqual(is_prime.cache_info().currsize, 0)

    def test_repeated_calls_agree(self):
        first = factor(1000003 * 1000033)
        second = factor(1000003 * 1000033)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
