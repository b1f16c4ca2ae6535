"""
Swap engine: walks the segmented bonding curve for buys, sells and exact-in buys.

Rounding rules (consensus-critical, must match on-chain enforcement bit for bit):
- buy:  start = y(remaining, down), end = y(target, up)   => trader pays at least the exact cost
- sell: end = y(remaining, down), start = y(target, up)   => trader receives at most the exact value
- exact-in buys delegate to `find_root`, which only returns affordable token amounts

A trade whose span crosses one or more segment boundaries is priced by moving
the cursor onto each crossed boundary; boundary native values are exact, so the
per-segment deltas telescope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .curve import calculate_curve, find_root
from .curve_table import CURVES, MAX_SUPPLY, Amount, segment_upper_supply
from .errors import CannotBuyAllRemainingSupply, CannotExceedMaxSupply, TooMuchNativeTokenRequired
from .fees import _require_amount, compute_fee

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapQuote:
    """Fixed token amount quote: native delta, fee and fee-adjusted total."""

    native_amount: Amount
    fee: Amount
    total: Amount

    def __post_init__(self) -> None:
        for name, v in (("native_amount", self.native_amount), ("fee", self.fee), ("total", self.total)):
            _require_amount(name, v)


@dataclass(frozen=True)
class ExactInQuote:
    """Fixed payment quote: tokens out for `native_amount` in, plus fee on top."""

    buy_amount: Amount
    native_amount: Amount
    fee: Amount
    total: Amount

    def __post_init__(self) -> None:
        for name, v in (
            ("buy_amount", self.buy_amount),
            ("native_amount", self.native_amount),
            ("fee", self.fee),
            ("total", self.total),
        ):
            _require_amount(name, v)


def _buy_native_amount(amount: Amount, remaining_supply: Amount) -> Amount:
    target_supply = remaining_supply - amount
    if target_supply == 0:
        raise CannotBuyAllRemainingSupply(f"cannot buy all remaining supply ({remaining_supply})")

    cursor = remaining_supply
    start_native: Optional[Amount] = None
    end_native: Amount = 0
    for segment in CURVES:
        if cursor <= segment.supply_at_boundary:
            continue
        if start_native is None:
            start_native = calculate_curve(cursor, False, segment)
        if target_supply >= segment.supply_at_boundary:
            end_native = calculate_curve(target_supply, True, segment)
            break
        logger.debug("buy: crossing boundary at supply %d", segment.supply_at_boundary)
        cursor = segment.supply_at_boundary

    return end_native - (start_native or 0)


def _sell_native_amount(amount: Amount, remaining_supply: Amount) -> Amount:
    target_supply = remaining_supply + amount
    if target_supply > MAX_SUPPLY:
        raise CannotExceedMaxSupply(f"sell would raise supply to {target_supply} > {MAX_SUPPLY}")

    cursor = remaining_supply
    end_native: Optional[Amount] = None
    start_native: Amount = 0
    for i in reversed(range(len(CURVES))):
        segment = CURVES[i]
        upper_supply = segment_upper_supply(i)
        if cursor >= upper_supply:
            continue
        if end_native is None:
            end_native = calculate_curve(cursor, False, segment)
        if target_supply <= upper_supply:
            start_native = calculate_curve(target_supply, True, segment)
            break
        logger.debug("sell: crossing boundary at supply %d", upper_supply)
        cursor = upper_supply

    end_native = end_native or 0
    # Boundary-walk rounding can leave start above end by dust; proceeds are never negative.
    if end_native > start_native:
        return end_native - start_native
    return 0


def compute_swap(
    amount: Amount,
    remaining_supply: Amount,
    buy: bool,
    *,
    max_native: Optional[Amount] = None,
) -> Amount:
    """
    Native amount paid (buy) or received (sell) for exactly `amount` tokens.

    Args:
        amount: Token base units to buy or sell
        remaining_supply: Remaining supply on the curve before the trade
        buy: True to buy (supply decreases), False to sell (supply increases)
        max_native: Optional settlement width; results above it are rejected

    Raises:
        CannotBuyAllRemainingSupply: buy would leave zero supply
        CannotExceedMaxSupply: sell would exceed MAX_SUPPLY
        TooMuchNativeTokenRequired: result exceeds `max_native`
        ValueError: invalid amounts
    """
    _require_amount("amount", amount)
    _require_amount("remaining_supply", remaining_supply)
    if remaining_supply > MAX_SUPPLY:
        raise ValueError(f"remaining_supply must be <= {MAX_SUPPLY}: {remaining_supply}")

    if buy:
        if amount > remaining_supply:
            raise ValueError(f"amount ({amount}) exceeds remaining_supply ({remaining_supply})")
        native_amount = _buy_native_amount(amount, remaining_supply)
    else:
        native_amount = _sell_native_amount(amount, remaining_supply)

    if max_native is not None and native_amount > max_native:
        raise TooMuchNativeTokenRequired(native_amount, max_native)
    return native_amount


def compute_buy_token_exact_in(pay_amount: Amount, remaining_supply: Amount) -> Amount:
    """
    Token base units obtainable for exactly `pay_amount` native units (fee excluded).

    Whole segments are consumed while the payment covers their remaining native
    budget; the remainder is inverted inside the segment where it runs out.

    Raises:
        BuyAmountTooLarge: the terminal-segment inversion buys nothing
        ValueError: invalid amounts
    """
    _require_amount("pay_amount", pay_amount)
    _require_amount("remaining_supply", remaining_supply)
    if remaining_supply > MAX_SUPPLY:
        raise ValueError(f"remaining_supply must be <= {MAX_SUPPLY}: {remaining_supply}")

    cursor = remaining_supply
    start_native: Optional[Amount] = None
    buy_amount: Amount = 0
    for segment in CURVES:
        if cursor <= segment.supply_at_boundary:
            continue
        if start_native is None:
            start_native = calculate_curve(cursor, False, segment)

        segment_budget = segment.native_at_boundary - start_native
        if pay_amount < segment_budget or segment.is_terminal:
            # Round up so the inversion starts from the costlier side.
            start_native = calculate_curve(cursor, True, segment)
            buy_amount += find_root(cursor, start_native, pay_amount, segment)
            break
        buy_amount += cursor - segment.supply_at_boundary
        if pay_amount == segment_budget:
            break
        logger.debug("buy exact-in: consumed segment down to supply %d", segment.supply_at_boundary)
        pay_amount -= segment_budget
        cursor = segment.supply_at_boundary
        start_native = segment.native_at_boundary

    return buy_amount


def compute_swap_with_fee(
    amount: Amount,
    remaining_supply: Amount,
    buy: bool,
    *,
    max_native: Optional[Amount] = None,
) -> SwapQuote:
    """
    Fixed token amount quote with the 1% fee applied.

    Buys pay `native + fee`; sells receive `native - fee`.
    """
    native_amount = compute_swap(amount, remaining_supply, buy, max_native=max_native)
    fee = compute_fee(native_amount)
    total = native_amount + fee if buy else native_amount - fee
    return SwapQuote(native_amount=native_amount, fee=fee, total=total)


def compute_buy_token_exact_in_with_fee(pay_amount: Amount, remaining_supply: Amount) -> ExactInQuote:
    """
    Fixed payment quote. The fee is charged on top of `pay_amount`, not out of it.
    """
    buy_amount = compute_buy_token_exact_in(pay_amount, remaining_supply)
    fee = compute_fee(pay_amount)
    return ExactInQuote(
        buy_amount=buy_amount,
        native_amount=pay_amount,
        fee=fee,
        total=pay_amount + fee,
    )
