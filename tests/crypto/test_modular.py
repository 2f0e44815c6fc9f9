"""Unit tests for modular arithmetic helpers."""

import pytest

from discrete_lab.crypto.modular import is_generator, is_prime, mod_pow, multiplicative_order

# Test constants
DEMO_P = 23
DEMO_G = 5


def naive_pow(base: int, exponent: int, modulus: int) -> int:
    result = 1 % modulus
    for _ in range(exponent):
        result = (result * base) % modulus
    return result


class TestModPow:
    """Test square-and-multiply exponentiation."""

    def test_known_value(self):
        """Test a hand-computed value."""
        assert mod_pow(DEMO_G, 6, DEMO_P) == 8

    @pytest.mark.parametrize("modulus", [2, 7, 23, 1000])
    def test_zero_exponent_is_one(self, modulus):
        """Test that x^0 mod m is 1 for every m > 1."""
        assert mod_pow(12345, 0, modulus) == 1

    def test_modulus_one_is_zero(self):
        """Test that everything is 0 modulo 1."""
        assert mod_pow(7, 0, 1) == 0
        assert mod_pow(7, 5, 1) == 0

    def test_matches_naive_multiplication(self):
        """Test agreement with repeated multiplication on a grid of inputs."""
        for modulus in (2, 3, 13, 47, 100):
            for base in range(0, 30, 7):
                for exponent in range(0, 40, 3):
                    assert mod_pow(base, exponent, modulus) == naive_pow(base, exponent, modulus)

    def test_matches_builtin_for_large_values(self):
        """Test big exponents against the builtin three-argument pow."""
        assert mod_pow(3, 10**18 + 7, 10**9 + 7) == pow(3, 10**18 + 7, 10**9 + 7)

    def test_negative_base_reduced(self):
        """Test that negative bases behave like their residue."""
        assert mod_pow(-4, 6, DEMO_P) == mod_pow(19, 6, DEMO_P)

    def test_negative_exponent_rejected(self):
        """Test that negative exponents raise."""
        with pytest.raises(ValueError, match="Exponent"):
            mod_pow(2, -1, 7)

    def test_non_positive_modulus_rejected(self):
        """Test that zero or negative moduli raise."""
        with pytest.raises(ValueError, match="Modulus"):
            mod_pow(2, 3, 0)


class TestPrimesAndGenerators:
    """Test primality and generator checks."""

    def test_is_prime(self):
        """Test small primes and composites."""
        primes = [n for n in range(50) if is_prime(n)]

        assert primes == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]

    def test_multiplicative_order(self):
        """Test orders of a few residues mod 23."""
        assert multiplicative_order(1, DEMO_P) == 1
        assert multiplicative_order(22, DEMO_P) == 2
        assert multiplicative_order(DEMO_G, DEMO_P) == 22
        assert multiplicative_order(0, DEMO_P) is None

    @pytest.mark.parametrize("modulus", [-5, 0, 1])
    def test_multiplicative_order_degenerate_modulus(self, modulus):
        """Test that moduli below 2 have no orders instead of raising."""
        assert multiplicative_order(3, modulus) is None

    def test_is_generator(self):
        """Test that 5 generates Z_23* while 2 does not."""
        assert is_generator(DEMO_G, DEMO_P)
        assert not is_generator(2, DEMO_P)
        assert not is_generator(DEMO_G, 21)
