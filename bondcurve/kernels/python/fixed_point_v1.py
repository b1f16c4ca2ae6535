"""
Fixed-point integer kernel (v1 semantics).

This implements the arithmetic the bonding-curve formula is enforced with on-chain:
- Division is floor by default, ceil when `round_up` is requested and inexact.
- Exponentiation is square-and-multiply over a 1e19 fixed-point multiplier,
  rounding after *every* multiply and every squaring (not once at the end).

Python ints are arbitrary precision, so intermediate products (which exceed 1e40
for exponent 4) never overflow. The per-step rounding is part of the enforced
formula and must not be "improved" to a single final rounding.
"""

from __future__ import annotations


MULTIPLIER = 10**19
SUPPLY_MULTIPLIER = 10**4


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def ceil_div(a: int, b: int) -> int:
    """
    Compute `ceil(a / b)` for non-negative `a` and positive `b`.
    """
    _require_int("a", a)
    _require_int("b", b)
    if b <= 0:
        raise ValueError("b must be positive")
    if a < 0:
        raise ValueError("a must be non-negative")
    r = a // b
    return r if r * b == a else r + 1


def div_with_rounding(numerator: int, denominator: int, round_up: bool) -> int:
    """
    Integer division, rounded up iff `round_up` and the remainder is non-zero.
    """
    _require_int("numerator", numerator)
    _require_int("denominator", denominator)
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    quotient, remainder = divmod(numerator, denominator)
    if round_up and remainder != 0:
        return quotient + 1
    return quotient


def pow_scaled(base_scaled: int, exponent: int, round_up: bool) -> int:
    """
    Compute `base_scaled ** exponent / MULTIPLIER ** (exponent - 1)` by square-and-multiply.

    `base_scaled` is already expressed in MULTIPLIER units. The accumulator starts at
    MULTIPLIER (fixed-point 1) and every product is rescaled immediately:

        result = div(result * base, MULTIPLIER)   when the low exponent bit is set
        base   = div(base * base, MULTIPLIER)     every iteration
    """
    _require_int("base_scaled", base_scaled)
    _require_int("exponent", exponent)
    if base_scaled < 0:
        raise ValueError("base_scaled must be non-negative")
    if exponent < 0:
        raise ValueError("exponent must be non-negative")

    result = MULTIPLIER
    base = base_scaled
    n = exponent
    while n > 0:
        if n % 2 == 1:
            result = div_with_rounding(result * base, MULTIPLIER, round_up)
        base = div_with_rounding(base * base, MULTIPLIER, round_up)
        n //= 2
    return result
