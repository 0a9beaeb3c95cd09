"""
Unit tests for Residue (integers mod N).

Checks ring arithmetic against Python big-int reference, inversion,
exponentiation with any sign, equality against ints and rationals, hashing,
and promotion to Gaussian residues.
"""

import random
import sys
import os
import unittest
from fractions import Fraction

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from zmod import (
    Residue, GaussianResidue, ArithConfig, set_config, crt,
    ConfigurationError, ModulusMismatchError, InvertibilityError,
)
from zmod.config import WORD_BITS, MAX_MODULUS


class TestConstruction(unittest.TestCase):

    def test_reduces_into_canonical_range(self):
        self.assertEqual(Residue(10, 13).value, 3)
        self.assertEqual(Residue(10, -7).value, 3)
        self.assertEqual(Residue(10, 2**100).value, 2**100 % 10)

    def test_default_is_zero(self):
        x = Residue(10)
        self.assertEqual(x.value, 0)
        self.assertEqual(x, Residue.zero(10))
        self.assertEqual(Residue.one(10).value, 1)

    def test_modulus_accessor(self):
        self.assertEqual(Residue(17, 5).modulus, 17)

    def test_rejects_small_modulus(self):
        for n in [1, 0, -5]:
            with self.assertRaises(ConfigurationError):
                Residue(n, 1)

    def test_rejects_non_integer_modulus(self):
        for n in [2.5, "7", True]:
            with self.assertRaises(ConfigurationError):
                Residue(n, 1)

    def test_word_size_bound(self):
        Residue(2**64 - 1, 5)
        with self.assertRaises(ConfigurationError):
            Residue(2**64, 5)

    def test_word_size_fixed_for_process(self):
        x = Residue(MAX_MODULUS, 5)
        with self.assertRaises(ConfigurationError):
            set_config(ArithConfig(word_bits=16 if WORD_BITS != 16 else 32))
        self.assertEqual(x, Residue(x.modulus, 5))
        self.assertEqual(Residue(MAX_MODULUS, 5) * x, Residue(MAX_MODULUS, 25))

    def test_values_survive_strategy_change(self):
        n = 2**64 - 59
        x = Residue(n, n - 2)
        previous = set_config(ArithConfig(mul_strategy="double_and_add"))
        try:
            self.assertEqual(x, Residue(n, -2))
            self.assertEqual(x * x, Residue(n, 4))
            self.assertEqual(crt(Residue(7, 3), Residue(11, 5)).value, 38)
        finally:
            set_config(previous)

    def test_rejects_float_value(self):
        with self.assertRaises(TypeError):
            Residue(10, 2.5)

    def test_numpy_integer(self):
        self.assertEqual(Residue(np.int64(10), np.int64(13)).value, 3)

    def test_rational_value(self):
        # 1/2 mod 7 = 4
        self.assertEqual(Residue(7, Fraction(1, 2)).value, 4)
        self.assertEqual(Residue(7, Fraction(-3, 4)).value, (-3 * 2) % 7)

    def test_rational_non_invertible_denominator(self):
        with self.assertRaises(InvertibilityError):
            Residue(10, Fraction(1, 2))

    def test_integral_complex(self):
        self.assertEqual(Residue(10, complex(13, 0)).value, 3)
        with self.assertRaises(TypeError):
            Residue(10, 1 + 2j)

    def test_from_residue(self):
        x = Residue(10, 3)
        self.assertEqual(Residue(10, x), x)
        with self.assertRaises(ModulusMismatchError):
            Residue(11, x)

    def test_immutable(self):
        x = Residue(10, 3)
        y = x
        x += 1
        self.assertEqual(y.value, 3)
        self.assertEqual(x.value, 4)
        with self.assertRaises(AttributeError):
            y.value = 5


class TestArithmetic(unittest.TestCase):
    """Residue arithmetic against Python big-int reference."""

    def setUp(self):
        self.rng = random.Random(42)

    def test_random_against_reference(self):
        for _ in range(300):
            n = self.rng.randint(2, 10**18)
            a = self.rng.randint(-10**20, 10**20)
            b = self.rng.randint(-10**20, 10**20)
            x, y = Residue(n, a), Residue(n, b)
            self.assertEqual((x + y).value, (a + b) % n)
            self.assertEqual((x - y).value, (a - b) % n)
            self.assertEqual((x * y).value, (a * b) % n)

    def test_overflow_exactness(self):
        n = 10**18
        a = Residue(n, 10**15)
        self.assertEqual((a * a).value, 0)

    def test_near_word_size(self):
        n = 2**64 - 59
        x = Residue(n, n - 1)
        self.assertEqual(x * x, Residue(n, 1))
        self.assertEqual((x + x).value, n - 2)

    def test_double_and_add_strategy(self):
        previous = set_config(ArithConfig(mul_strategy="double_and_add"))
        try:
            n = 2**64 - 59
            a, b = n - 12345, n - 67890
            self.assertEqual((Residue(n, a) * Residue(n, b)).value, (a * b) % n)
        finally:
            set_config(previous)

    def test_mixed_with_int(self):
        x = Residue(10, 3)
        self.assertEqual(x + 9, Residue(10, 2))
        self.assertEqual(9 + x, Residue(10, 2))
        self.assertEqual(x - 5, Residue(10, 8))
        self.assertEqual(5 - x, Residue(10, 2))
        self.assertEqual(x * 4, Residue(10, 2))
        self.assertEqual(4 * x, Residue(10, 2))
        self.assertIsInstance(x + 1, Residue)

    def test_mixed_with_rational(self):
        self.assertEqual(Residue(7, 1) + Fraction(1, 2), Residue(7, 5))

    def test_negation(self):
        self.assertEqual(-Residue(10, 3), Residue(10, 7))
        self.assertEqual(-Residue(10, 0), Residue(10, 0))
        self.assertEqual(+Residue(10, 3), Residue(10, 3))

    def test_mismatched_moduli(self):
        x, y = Residue(10, 3), Residue(11, 3)
        for op in (lambda: x + y, lambda: x - y, lambda: x * y, lambda: x / y):
            with self.assertRaises(ModulusMismatchError):
                op()

    def test_unsupported_operand(self):
        with self.assertRaises(TypeError):
            Residue(10, 3) + 1.5
        with self.assertRaises(TypeError):
            Residue(10, 3) + "1"


class TestInversion(unittest.TestCase):

    def test_inverse(self):
        self.assertEqual(Residue(10, 3).inverse(), Residue(10, 7))

    def test_inverse_times_self_is_one(self):
        rng = random.Random(5)
        for _ in range(200):
            n = rng.randint(2, 10**18)
            x = Residue(n, rng.randint(0, n - 1))
            if x.is_invertible():
                self.assertEqual((x.inverse() * x).value, 1)
            else:
                with self.assertRaises(InvertibilityError):
                    x.inverse()

    def test_not_invertible(self):
        for v in [0, 2, 4, 5, 6, 8]:
            x = Residue(10, v)
            self.assertFalse(x.is_invertible())
            with self.assertRaises(InvertibilityError):
                x.inverse()

    def test_invertibility_error_is_zero_division(self):
        with self.assertRaises(ZeroDivisionError):
            Residue(10, 1) / Residue(10, 0)

    def test_division(self):
        self.assertEqual(Residue(10, 3) / Residue(10, 7), Residue(10, 9))
        self.assertEqual(Residue(10, 3) / 7, Residue(10, 9))
        self.assertEqual(1 / Residue(10, 3), Residue(10, 7))
        with self.assertRaises(InvertibilityError):
            Residue(10, 3) / 4


class TestPower(unittest.TestCase):

    def test_zero_exponent(self):
        self.assertEqual(Residue(10, 0) ** 0, Residue(10, 1))
        self.assertEqual(Residue(10, 7) ** 0, Residue(10, 1))

    def test_positive_exponent(self):
        self.assertEqual(Residue(7, 3) ** 6, Residue(7, 1))
        n = 1000003
        self.assertEqual((Residue(n, 2) ** 10**18).value, pow(2, 10**18, n))

    def test_negative_exponent(self):
        x = Residue(10, 3)
        self.assertEqual(x ** -1, Residue(10, 7))
        for k in range(1, 8):
            self.assertEqual(x ** -k, (x ** k).inverse())

    def test_negative_exponent_not_invertible(self):
        with self.assertRaises(InvertibilityError):
            Residue(10, 2) ** -1

    def test_numpy_exponent(self):
        self.assertEqual(Residue(10, 3) ** np.int64(2), Residue(10, 9))

    def test_bool_exponent(self):
        self.assertEqual(Residue(10, 3) ** True, Residue(10, 3))
        self.assertEqual(Residue(10, 3) ** False, Residue(10, 1))

    def test_non_integer_exponent(self):
        with self.assertRaises(TypeError):
            Residue(10, 3) ** 0.5


class TestEquality(unittest.TestCase):

    def test_against_int(self):
        self.assertTrue(Residue(10, 3) == -7)
        self.assertTrue(Residue(10, 3) == 13)
        self.assertFalse(Residue(10, 3) == 7)
        self.assertTrue(-7 == Residue(10, 3))

    def test_different_moduli_not_equal(self):
        self.assertFalse(Residue(10, 3) == Residue(11, 3))
        self.assertTrue(Residue(10, 3) != Residue(11, 3))

    def test_against_rational(self):
        self.assertTrue(Residue(7, 4) == Fraction(1, 2))
        self.assertFalse(Residue(10, 5) == Fraction(1, 2))

    def test_against_other_types(self):
        self.assertFalse(Residue(10, 3) == "3")
        self.assertFalse(Residue(10, 3) == None)  # noqa: E711

    def test_hash_consistent(self):
        s = {Residue(10, 3), Residue(10, 13), Residue(11, 3)}
        self.assertEqual(len(s), 2)
        d = {Residue(10, 3): "a"}
        self.assertEqual(d[Residue(10, -7)], "a")

    def test_hash_matches_real_gaussian(self):
        self.assertEqual(hash(Residue(10, 3)), hash(GaussianResidue(10, 3, 0)))
        self.assertEqual(len({Residue(10, 3), GaussianResidue(10, 3)}), 1)


class TestPromotion(unittest.TestCase):

    def test_with_gaussian(self):
        z = Residue(10, 3) + GaussianResidue(10, 1, 2)
        self.assertIsInstance(z, GaussianResidue)
        self.assertEqual(z.value, (4, 2))
        self.assertEqual((Residue(10, 3) - GaussianResidue(10, 1, 2)).value, (2, 8))
        self.assertEqual((Residue(10, 3) * GaussianResidue(10, 1, 2)).value, (3, 6))

    def test_with_complex(self):
        z = Residue(10, 3) + 2j
        self.assertIsInstance(z, GaussianResidue)
        self.assertEqual(z.value, (3, 2))
        self.assertEqual(((1 + 1j) - Residue(10, 3)).value, (8, 1))
        self.assertEqual((Residue(10, 3) * (1 + 1j)).value, (3, 3))

    def test_mismatched_gaussian(self):
        with self.assertRaises(ModulusMismatchError):
            Residue(10, 3) + GaussianResidue(11, 1, 2)

    def test_equality_with_complex(self):
        self.assertTrue(Residue(10, 3) == complex(13, 0))
        self.assertFalse(Residue(10, 3) == 3 + 1j)


class TestConversion(unittest.TestCase):

    def test_int_and_bool(self):
        self.assertEqual(int(Residue(10, 13)), 3)
        self.assertTrue(Residue(10, 3))
        self.assertFalse(Residue(10, 10))

    def test_repr_str(self):
        self.assertEqual(repr(Residue(10, 3)), "Residue(10, 3)")
        self.assertEqual(str(Residue(10, 3)), "3 mod 10")


if __name__ == "__main__":
    unittest.main()
