"""Exception types for the bonding-curve engine.

Every engine error is a ``ValueError`` subclass so callers that guard the
pricing functions with ``except ValueError`` keep working; the subclasses let
the settlement layer map each condition to its own error code.
"""

from __future__ import annotations


class BondingCurveError(ValueError):
    """Base class for typed pricing failures."""


class CannotBuyAllRemainingSupply(BondingCurveError):
    """Raised when a buy would drive the remaining supply to exactly zero."""


class CannotExceedMaxSupply(BondingCurveError):
    """Raised when a sell would push the remaining supply above max supply."""


class BuyAmountTooLarge(BondingCurveError):
    """Raised when the terminal-segment inversion yields no supply decrease."""


class TooMuchNativeTokenRequired(BondingCurveError):
    """Raised when a native amount exceeds the settlement layer's amount width."""

    def __init__(self, native_amount: int, max_native: int) -> None:
        self.native_amount = native_amount
        self.max_native = max_native
        super().__init__(f"native amount {native_amount} exceeds max {max_native}")


class CurveTableError(ValueError):
    """Raised when the curve table (or its YAML kernel spec) violates an invariant."""
