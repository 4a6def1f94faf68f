from __future__ import annotations

import unittest

from primetime.core.controller import is_prime

PRIMES_TO_50 = {2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47}


class TestIsPrime(unittest.TestCase):
    def test_matches_known_primes_up_to_50(self):
        for n in range(1, 51):
            with self.subTest(n=n):
                self.assertEqual(is_prime(n), n in PRIMES_TO_50)

    def test_spot_values(self):
        self.assertFalse(is_prime(1))
        self.assertTrue(is_prime(2))
        self.assertTrue(is_prime(3))
        self.assertFalse(is_prime(4))
        self.assertTrue(is_prime(17))
        self.assertFalse(is_prime(49))

    def test_large_values_do_not_recurse(self):
        self.assertTrue(is_prime(7919))
        self.assertFalse(is_prime(7917))

    def test_rejects_non_positive(self):
        with self.assertRaises(ValueError):
            is_prime(0)
        with self.assertRaises(ValueError):
            is_prime(-7)


if __name__ == "__main__":
    unittest.main()
