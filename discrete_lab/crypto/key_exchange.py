"""Toy Diffie-Hellman key exchange over a small prime field.

Pedagogical only: the moduli are tiny and the generator is chosen at random
without checking that it is a primitive root.
"""

import random
from dataclasses import dataclass

import structlog

from discrete_lab.crypto.modular import is_generator, is_prime, mod_pow

logger = structlog.get_logger(__name__)

DEMO_PRIMES = (5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)


@dataclass(frozen=True)
class KeyExchangeResult:
    """Values derived by both parties.

    Attributes:
        public_a: g^a mod p, sent by party A
        public_b: g^b mod p, sent by party B
        shared_a: public_b^a mod p, computed by A
        shared_b: public_a^b mod p, computed by B
    """

    public_a: int
    public_b: int
    shared_a: int
    shared_b: int

    @property
    def keys_match(self) -> bool:
        return self.shared_a == self.shared_b


@dataclass(frozen=True)
class KeyExchange:
    """Public parameters (p, g) and the two private keys."""

    p: int = 23
    g: int = 5
    private_a: int = 6
    private_b: int = 15

    def derive(self) -> KeyExchangeResult:
        """Derive public and shared keys for both parties.

        Raises:
            ValueError: If p is not positive or a private key is negative
        """
        public_a = mod_pow(self.g, self.private_a, self.p)
        public_b = mod_pow(self.g, self.private_b, self.p)
        result = KeyExchangeResult(
            public_a=public_a,
            public_b=public_b,
            shared_a=mod_pow(public_b, self.private_a, self.p),
            shared_b=mod_pow(public_a, self.private_b, self.p),
        )

        logger.debug(
            "key_exchange_derived",
            p=self.p,
            g=self.g,
            public_a=result.public_a,
            public_b=result.public_b,
            keys_match=result.keys_match,
        )
        return result

    def check(self) -> list[str]:
        """Return warnings about parameters outside the textbook ranges."""
        return check_parameters(self.p, self.g, self.private_a, self.private_b)


def check_parameters(p: int, g: int, private_a: int, private_b: int) -> list[str]:
    """List the ways the parameters depart from a proper Diffie-Hellman setup.

    Nothing here is enforced; the demo still derives keys for any input.
    """
    warnings = []

    if not is_prime(p):
        warnings.append(f"p={p} is not prime")
    if not 2 <= g <= p - 1:  # noqa: PLR2004
        warnings.append(f"g={g} is outside [2, {p - 1}]")
    elif is_prime(p) and not is_generator(g, p):
        warnings.append(f"g={g} does not generate the multiplicative group mod {p}")
    for label, key in (("a", private_a), ("b", private_b)):
        if not 1 <= key <= p - 1:
            warnings.append(f"private key {label}={key} is outside [1, {p - 1}]")

    for warning in warnings:
        logger.warning("key_exchange_parameter_warning", message=warning)
    return warnings


def random_parameters(
    rng: random.Random | None = None,
    primes: tuple[int, ...] | list[int] = DEMO_PRIMES,
) -> KeyExchange:
    """Pick a random demo prime, then g and both private keys from [2, p-1].

    Args:
        rng: Random source, a fresh unseeded Random when omitted
        primes: Candidate moduli

    Returns:
        New KeyExchange parameters
    """
    rng = rng or random.Random()  # noqa: S311
    p = rng.choice(list(primes))
    params = KeyExchange(
        p=p,
        g=rng.randint(2, p - 1),
        private_a=rng.randint(2, p - 1),
        private_b=rng.randint(2, p - 1),
    )

    logger.info("random_key_exchange_parameters", p=params.p, g=params.g)
    return params
