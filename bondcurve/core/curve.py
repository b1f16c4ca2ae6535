"""
Curve evaluation and inversion within a single segment.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Forward: y(x) = k / x^n - c, rounding chosen by the caller (buy: up, sell: down)
- Inverse, terminal segment (n = 1): closed form, ceil rounding on the target supply
- Inverse, other segments: bisection to within FIND_ROOT_MAX_ERROR base units,
  always returning the *affordable* side of the bracket

Display pricing (`calculate_price`, `calculate_market_cap`) is the only place
that leaves integer arithmetic; it uses `decimal` at 15 significant digits with
ROUND_DOWN and is never used for settlement.
"""

from __future__ import annotations

import logging
from decimal import ROUND_DOWN, Context, Decimal
from typing import Sequence

from ..kernels.python.fixed_point_v1 import (
    SUPPLY_MULTIPLIER,
    ceil_div,
    div_with_rounding,
    pow_scaled,
)
from .curve_table import CURVES, MAX_SUPPLY, NATIVE_UNIT, TOKEN_UNIT, Amount, CurveSegment
from .errors import BuyAmountTooLarge

logger = logging.getLogger(__name__)

# Accepted imprecision of the bisection path, in token base units.
FIND_ROOT_MAX_ERROR = 10**5

PRICE_PRECISION = 15
_PRICE_CONTEXT = Context(prec=PRICE_PRECISION, rounding=ROUND_DOWN)


def calculate_curve(target_supply: Amount, round_up: bool, segment: CurveSegment) -> Amount:
    """
    Native amount at `target_supply` on `segment`.

    For buying pass `round_up=True` (the trader pays at least this much); for
    selling pass `round_up=False` (the trader receives at most this much).
    """
    if not isinstance(target_supply, int) or isinstance(target_supply, bool):
        raise TypeError("target_supply must be an int")
    if not (1 <= target_supply <= MAX_SUPPLY):
        raise ValueError(f"target_supply must be in [1, {MAX_SUPPLY}]: {target_supply}")

    if segment.exponent > 1:
        pow_x = pow_scaled(target_supply * SUPPLY_MULTIPLIER, segment.exponent, round_up)
    else:
        pow_x = target_supply * SUPPLY_MULTIPLIER

    y = div_with_rounding(segment.k_scaled, pow_x, round_up) - segment.c_offset
    if y < 0:
        raise ValueError(f"target_supply {target_supply} lies above the domain of the segment")
    return y


def find_root(
    current_supply: Amount,
    current_native_amount: Amount,
    pay_amount: Amount,
    segment: CurveSegment,
) -> Amount:
    """
    Tokens obtainable on `segment` for `pay_amount` on top of `current_native_amount`.

    `current_native_amount` is the native amount associated with `current_supply`.
    The result never crosses the segment's lower boundary.

    Raises:
        BuyAmountTooLarge: terminal segment only, if the payment buys no supply decrease.
    """
    for name, v in (
        ("current_supply", current_supply),
        ("current_native_amount", current_native_amount),
        ("pay_amount", pay_amount),
    ):
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{name} must be an int")
        if v < 0:
            raise ValueError(f"{name} must be non-negative: {v}")

    target_native_amount = current_native_amount + pay_amount

    if segment.is_terminal:
        # y = k / (x * S) - c  =>  x = k / ((y + c) * S)
        denominator = (target_native_amount + segment.c_offset) * SUPPLY_MULTIPLIER
        target_supply = ceil_div(segment.k_scaled, denominator)
        if target_supply >= current_supply:
            raise BuyAmountTooLarge(
                f"no supply decrease for payment {pay_amount} at supply {current_supply}"
            )
        return current_supply - target_supply

    low = segment.supply_at_boundary
    high = current_supply
    steps = 0
    while high - low > FIND_ROOT_MAX_ERROR:
        mid = (low + high) >> 1
        # Round up so `high` only moves onto supplies that are strictly affordable.
        y = calculate_curve(mid, True, segment)
        if target_native_amount > y:
            high = mid
        else:
            low = mid
        steps += 1
    logger.debug("find_root: exponent=%d steps=%d high=%d", segment.exponent, steps, high)
    return current_supply - high


def search_segment(target_supply: Amount, curves: Sequence[CurveSegment] = CURVES) -> CurveSegment:
    """First segment whose boundary lies below `target_supply` (terminal segment otherwise)."""
    for segment in curves:
        if target_supply > segment.supply_at_boundary:
            return segment
    return curves[-1]


def calculate_price(target_supply: Amount, native_amount: Amount, segment: CurveSegment) -> Decimal:
    """
    Spot price in whole native units per whole token at `target_supply`.

    The curve's derivative is `n * k / x^(n+1)`, i.e. `n * (y + c) / x`.
    """
    if target_supply <= 0:
        raise ValueError(f"target_supply must be positive: {target_supply}")
    ctx = _PRICE_CONTEXT
    x_dec = ctx.divide(Decimal(target_supply), Decimal(TOKEN_UNIT))
    y_dec = ctx.divide(Decimal(native_amount + segment.c_offset), Decimal(NATIVE_UNIT))
    return ctx.divide(ctx.multiply(Decimal(segment.exponent), y_dec), x_dec)


def calculate_market_cap(price: Decimal) -> Decimal:
    """Fully diluted market cap in whole native units."""
    ctx = _PRICE_CONTEXT
    return ctx.multiply(price, ctx.divide(Decimal(MAX_SUPPLY), Decimal(TOKEN_UNIT)))


def format_price(value: Decimal, places: int = PRICE_PRECISION) -> str:
    """Fixed-point rendering truncated (not rounded) to `places` decimals."""
    if places < 0:
        raise ValueError("places must be non-negative")
    quantum = Decimal(1).scaleb(-places)
    return format(value.quantize(quantum, rounding=ROUND_DOWN), "f")
