"""
Core bonding-curve pricing algorithms
"""

from .curve_table import (
    CURVES,
    MAX_NATIVE_AMOUNT,
    MAX_SUPPLY,
    CurveSegment,
    validate_curve_table,
)
from .curve import (
    FIND_ROOT_MAX_ERROR,
    calculate_curve,
    calculate_market_cap,
    calculate_price,
    find_root,
    format_price,
    search_segment,
)
from .errors import (
    BondingCurveError,
    BuyAmountTooLarge,
    CannotBuyAllRemainingSupply,
    CannotExceedMaxSupply,
    CurveTableError,
    TooMuchNativeTokenRequired,
)
from .fees import compute_fee, split_pay_amount
from .sampler import CurvePoint, curve_points
from .swap import (
    ExactInQuote,
    SwapQuote,
    compute_buy_token_exact_in,
    compute_buy_token_exact_in_with_fee,
    compute_swap,
    compute_swap_with_fee,
)

__all__ = [
    "CURVES",
    "MAX_NATIVE_AMOUNT",
    "MAX_SUPPLY",
    "CurveSegment",
    "validate_curve_table",
    "FIND_ROOT_MAX_ERROR",
    "calculate_curve",
    "calculate_market_cap",
    "calculate_price",
    "find_root",
    "format_price",
    "search_segment",
    "BondingCurveError",
    "BuyAmountTooLarge",
    "CannotBuyAllRemainingSupply",
    "CannotExceedMaxSupply",
    "CurveTableError",
    "TooMuchNativeTokenRequired",
    "compute_fee",
    "split_pay_amount",
    "CurvePoint",
    "curve_points",
    "ExactInQuote",
    "SwapQuote",
    "compute_buy_token_exact_in",
    "compute_buy_token_exact_in_with_fee",
    "compute_swap",
    "compute_swap_with_fee",
]
