"""
Curve sampling for charts (display only, never used for settlement).

Samples are cumulative buys from a fresh curve (remaining supply = MAX_SUPPLY),
evenly spaced in token space. The x-axis extent follows the current position:
a multiple of the native amount already raised, capped at the full curve and
floored at a minimum native amount so early charts stay legible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import List

from ..kernels.python.fixed_point_v1 import ceil_div
from .curve import calculate_market_cap, calculate_price, search_segment
from .curve_table import MAX_SUPPLY, NATIVE_UNIT, Amount
from .swap import compute_buy_token_exact_in, compute_swap

logger = logging.getLogger(__name__)

DEFAULT_MAX_POINTS = 1000
DEFAULT_X_AXIS_MAX_THRESHOLD_PCT = 300  # 3x the native amount raised so far
DEFAULT_X_AXIS_MIN_NATIVE = 200 * NATIVE_UNIT


@dataclass(frozen=True)
class CurvePoint:
    buy_amount: Amount
    native_amount: Amount
    price: Decimal
    market_cap: Decimal
    current: bool = False


def _point(buy_amount: Amount, *, current: bool = False) -> CurvePoint:
    native_amount = compute_swap(buy_amount, MAX_SUPPLY, True) if buy_amount > 0 else 0
    supply = MAX_SUPPLY - buy_amount
    price = calculate_price(supply, native_amount, search_segment(supply))
    return CurvePoint(
        buy_amount=buy_amount,
        native_amount=native_amount,
        price=price,
        market_cap=calculate_market_cap(price),
        current=current,
    )


def curve_points(
    remaining_supply: Amount,
    max_points: int = DEFAULT_MAX_POINTS,
    x_axis_max_threshold_pct: int = DEFAULT_X_AXIS_MAX_THRESHOLD_PCT,
    x_axis_min_native: Amount = DEFAULT_X_AXIS_MIN_NATIVE,
) -> List[CurvePoint]:
    """
    Return exactly `max_points` samples with strictly increasing `buy_amount`.

    Exactly one sample has `current=True`: the first sample at or beyond the
    amount already sold, replaced by the exact current point when it does not
    land on it.
    """
    for name, v in (
        ("remaining_supply", remaining_supply),
        ("max_points", max_points),
        ("x_axis_max_threshold_pct", x_axis_max_threshold_pct),
        ("x_axis_min_native", x_axis_min_native),
    ):
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{name} must be an int")
    if not (1 <= remaining_supply <= MAX_SUPPLY):
        raise ValueError(f"remaining_supply must be in [1, {MAX_SUPPLY}]: {remaining_supply}")
    if x_axis_max_threshold_pct < 100:
        raise ValueError(f"x_axis_max_threshold_pct must be >= 100: {x_axis_max_threshold_pct}")
    if max_points < 2:
        raise ValueError(f"max_points must be >= 2: {max_points}")
    if x_axis_min_native < 0:
        raise ValueError(f"x_axis_min_native must be non-negative: {x_axis_min_native}")

    current_sold = MAX_SUPPLY - remaining_supply
    current_native = compute_swap(current_sold, MAX_SUPPLY, True)

    max_native = current_native * x_axis_max_threshold_pct // 100
    max_native = min(max_native, compute_swap(MAX_SUPPLY - 1, MAX_SUPPLY, True))
    max_native = max(max_native, x_axis_min_native)

    max_buy_amount = compute_buy_token_exact_in(max_native, MAX_SUPPLY)
    step = max(ceil_div(max_buy_amount, max_points - 1), 1)

    points: List[CurvePoint] = []
    current_index = None
    for i in range(max_points):
        buy_amount = min(step * i, MAX_SUPPLY - 1)
        points.append(_point(buy_amount))
        if current_index is None and buy_amount >= current_sold:
            current_index = i

    if current_index is None:
        logger.warning("curve_points: no sample reached sold amount %d; marking last sample", current_sold)
        current_index = max_points - 1

    point = points[current_index]
    if point.buy_amount == current_sold:
        points[current_index] = replace(point, current=True)
    else:
        points[current_index] = _point(current_sold, current=True)
    return points
