"""
Segmented bonding-curve table (three regimes of remaining supply).

Each segment prices native amount as a function of remaining supply `x`:

    y(x) = k / x^n - c

with `k` pre-scaled by the fixed-point multiplier and native decimals, and `c`
chosen so adjacent segments meet exactly at their shared boundary. Segments are
ordered from the highest remaining-supply regime to the lowest (steepest).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..kernels.python.fixed_point_v1 import MULTIPLIER, SUPPLY_MULTIPLIER
from .errors import CurveTableError


# Type aliases
Amount = int  # Non-negative integer (arbitrary precision)

TOKEN_DECIMALS = 6
NATIVE_DECIMALS = 9
NATIVE_UNIT = 10**NATIVE_DECIMALS
TOKEN_UNIT = 10**TOKEN_DECIMALS

MAX_SUPPLY: Amount = 1_000_000_000 * TOKEN_UNIT
# Width of native amounts in the settlement layer (u64).
MAX_NATIVE_AMOUNT: Amount = 2**64 - 1

if MULTIPLIER // MAX_SUPPLY != SUPPLY_MULTIPLIER:
    raise CurveTableError("SUPPLY_MULTIPLIER must equal MULTIPLIER // MAX_SUPPLY")


@dataclass(frozen=True)
class CurveSegment:
    exponent: int
    k_scaled: int
    c_offset: int
    supply_at_boundary: Amount
    native_at_boundary: Amount

    def __post_init__(self) -> None:
        for name, v in (
            ("exponent", self.exponent),
            ("k_scaled", self.k_scaled),
            ("c_offset", self.c_offset),
            ("supply_at_boundary", self.supply_at_boundary),
            ("native_at_boundary", self.native_at_boundary),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if self.exponent < 1:
            raise ValueError(f"exponent must be positive: {self.exponent}")
        if self.k_scaled <= 0:
            raise ValueError("k_scaled must be positive")
        if self.c_offset < 0:
            raise ValueError("c_offset must be non-negative")
        if not (1 <= self.supply_at_boundary < MAX_SUPPLY):
            raise ValueError(f"supply_at_boundary must be in [1, {MAX_SUPPLY}): {self.supply_at_boundary}")
        if self.native_at_boundary < 0:
            raise ValueError("native_at_boundary must be non-negative")

    @property
    def is_terminal(self) -> bool:
        return self.exponent == 1


SEGMENT_1 = CurveSegment(
    exponent=4,
    k_scaled=7 * MULTIPLIER * NATIVE_UNIT,
    c_offset=7_000_000_000,
    supply_at_boundary=MAX_SUPPLY * 80 // 100,
    native_at_boundary=10_089_843_750,
)
SEGMENT_2 = CurveSegment(
    exponent=2,
    k_scaled=21_875 * MULTIPLIER * NATIVE_UNIT // 1_000,  # 21.875
    c_offset=24_089_843_750,
    supply_at_boundary=MAX_SUPPLY * 5 // 100,
    native_at_boundary=8_725_910_156_250,
)
SEGMENT_3 = CurveSegment(
    exponent=1,
    k_scaled=875 * MULTIPLIER * NATIVE_UNIT,
    c_offset=8_774_089_843_750,
    # The last base unit can never be bought; y(1) is the curve's ceiling.
    supply_at_boundary=1,
    native_at_boundary=874_999_999_999_991_225_910_156_250,
)

CURVES: Tuple[CurveSegment, ...] = (SEGMENT_1, SEGMENT_2, SEGMENT_3)
TERMINAL_SEGMENT = CURVES[-1]


def validate_curve_table(curves: Sequence[CurveSegment]) -> None:
    """
    Check ordering invariants of a curve table.

    - boundaries strictly decrease and native values strictly increase
    - only the last segment is terminal, and it ends at supply 1
    """
    if not curves:
        raise CurveTableError("curve table must be non-empty")
    for i, seg in enumerate(curves):
        if not isinstance(seg, CurveSegment):
            raise CurveTableError(f"curves[{i}] must be a CurveSegment")
        if seg.is_terminal != (i == len(curves) - 1):
            raise CurveTableError(f"curves[{i}]: only the last segment may be terminal (exponent 1)")
    for i in range(1, len(curves)):
        prev, cur = curves[i - 1], curves[i]
        if not cur.supply_at_boundary < prev.supply_at_boundary:
            raise CurveTableError(f"curves[{i}]: supply_at_boundary must strictly decrease")
        if not cur.native_at_boundary > prev.native_at_boundary:
            raise CurveTableError(f"curves[{i}]: native_at_boundary must strictly increase")
    if curves[-1].supply_at_boundary != 1:
        raise CurveTableError("terminal segment must end at supply 1")


def segment_upper_supply(index: int, curves: Sequence[CurveSegment] = CURVES) -> Amount:
    """Upper end (inclusive) of segment `index`'s supply domain."""
    if not (0 <= index < len(curves)):
        raise IndexError(f"segment index out of range: {index}")
    return MAX_SUPPLY if index == 0 else curves[index - 1].supply_at_boundary


validate_curve_table(CURVES)
