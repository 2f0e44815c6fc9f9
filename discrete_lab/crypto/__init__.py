"""Modular arithmetic and the toy Diffie-Hellman key exchange."""

from discrete_lab.crypto.key_exchange import (
    DEMO_PRIMES,
    KeyExchange,
    KeyExchangeResult,
    check_parameters,
    random_parameters,
)
from discrete_lab.crypto.modular import is_generator, is_prime, mod_pow, multiplicative_order

__all__ = [
    "DEMO_PRIMES",
    "KeyExchange",
    "KeyExchangeResult",
    "check_parameters",
    "is_generator",
    "is_prime",
    "mod_pow",
    "multiplicative_order",
    "random_parameters",
]
