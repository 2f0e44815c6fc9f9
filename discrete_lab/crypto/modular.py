"""Modular arithmetic helpers for the key-exchange demo."""

import structlog

logger = structlog.get_logger(__name__)


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Compute ``base ** exponent % modulus`` by square-and-multiply.

    The exponent is halved on every step while the base is squared modulo
    ``modulus``; the accumulator picks up the base whenever the low bit of
    the exponent is set. Intermediate values never exceed ``modulus ** 2``.

    Args:
        base: Any integer (negative bases are reduced modulo ``modulus`` first)
        exponent: Non-negative exponent
        modulus: Positive modulus

    Returns:
        The residue in ``[0, modulus)``; always 0 when ``modulus == 1``

    Raises:
        ValueError: If exponent is negative or modulus is not positive

    Example:
        >>> mod_pow(5, 6, 23)
        8
    """
    if modulus <= 0:
        msg = f"Modulus must be positive, got {modulus}"
        raise ValueError(msg)
    if exponent < 0:
        msg = f"Exponent must be non-negative, got {exponent}"
        raise ValueError(msg)
    if modulus == 1:
        return 0

    result = 1
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus

    return result


def is_prime(n: int) -> bool:
    """Trial-division primality test, fine for demo-sized numbers."""
    if n < 2:  # noqa: PLR2004
        return False
    if n % 2 == 0:
        return n == 2  # noqa: PLR2004
    divisor = 3
    while divisor * divisor <= n:
        if n % divisor == 0:
            return False
        divisor += 2
    return True


def multiplicative_order(g: int, p: int) -> int | None:
    """Smallest ``k >= 1`` with ``g ** k % p == 1``, or None if g is not a unit mod p."""
    if p < 2:  # noqa: PLR2004
        return None
    g %= p
    if g == 0:
        return None

    value = g
    for k in range(1, p):
        if value == 1:
            return k
        value = (value * g) % p
    return None


def is_generator(g: int, p: int) -> bool:
    """Check that g generates the whole multiplicative group modulo prime p."""
    return is_prime(p) and multiplicative_order(g, p) == p - 1
