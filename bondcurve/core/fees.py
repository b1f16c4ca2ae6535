"""
Trade fee kernels (deterministic, integer-only).

The fee is a flat 1% rounded up, so rounding always favours the protocol.
"""

from __future__ import annotations

from ..kernels.python.fixed_point_v1 import ceil_div
from .curve_table import Amount


FEE_DIVISOR = 100  # 1%


def _require_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


def compute_fee(amount: Amount) -> Amount:
    """`fee = ceil(amount / 100)`."""
    _require_amount("amount", amount)
    return ceil_div(amount, FEE_DIVISOR)


def split_pay_amount(max_pay_amount: Amount) -> tuple[Amount, Amount]:
    """
    Split a total budget into `(pay_amount, fee_amount)`.

    Solves `x * (1 + 1/100) = max_pay_amount` with ceil rounding on `x`:
        pay = ceil(max_pay_amount * 100 / 101)
        fee = max_pay_amount - pay
    """
    _require_amount("max_pay_amount", max_pay_amount)
    pay_amount = ceil_div(max_pay_amount * FEE_DIVISOR, FEE_DIVISOR + 1)
    return pay_amount, max_pay_amount - pay_amount
