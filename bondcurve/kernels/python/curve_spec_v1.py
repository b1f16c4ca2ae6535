"""
Loader for the curve kernel spec (`bondcurve/kernels/dex/bonding_curve_v1.yaml`).

The Python table in `bondcurve.core.curve_table` is what the engine prices with;
the YAML spec is the reviewable statement of the same numbers. `verify_curve_table`
fails closed on any drift between the two, and also re-derives every cached
boundary value from the curve formula.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence, Tuple

import yaml

from ...core.curve import FIND_ROOT_MAX_ERROR, calculate_curve
from ...core.curve_table import (
    CURVES,
    MAX_SUPPLY,
    NATIVE_DECIMALS,
    TOKEN_DECIMALS,
    CurveSegment,
    validate_curve_table,
)
from ...core.errors import CurveTableError
from ...core.fees import FEE_DIVISOR
from .fixed_point_v1 import MULTIPLIER, SUPPLY_MULTIPLIER


SCHEMA = "bondcurve/curve-spec/v1"


def default_spec_path() -> Path:
    # bondcurve/kernels/python/curve_spec_v1.py -> bondcurve/kernels/dex/bonding_curve_v1.yaml
    return Path(__file__).resolve().parents[1] / "dex" / "bonding_curve_v1.yaml"


@dataclass(frozen=True)
class CurveSpec:
    token_decimals: int
    native_decimals: int
    max_supply: int
    multiplier: int
    supply_multiplier: int
    find_root_max_error: int
    fee_divisor: int
    segments: Tuple[CurveSegment, ...]


def _require_mapping(obj: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise CurveTableError(f"{name} must be a mapping")
    return obj


def _require_int(obj: Any, *, name: str) -> int:
    if not isinstance(obj, int) or isinstance(obj, bool):
        raise CurveTableError(f"{name} must be an int")
    return obj


def _supply_from_spec(obj: Any, *, name: str, max_supply: int) -> int:
    m = _require_mapping(obj, name=name)
    if "pct_of_max" in m:
        return max_supply * _require_int(m["pct_of_max"], name=f"{name}.pct_of_max") // 100
    if "absolute" in m:
        return _require_int(m["absolute"], name=f"{name}.absolute")
    raise CurveTableError(f"{name} must define pct_of_max or absolute")


def segments_from_spec(
    raw_segments: Sequence[Any],
    *,
    max_supply: int,
    multiplier: int,
    native_decimals: int,
) -> Tuple[CurveSegment, ...]:
    out = []
    for i, raw in enumerate(raw_segments):
        seg = _require_mapping(raw, name=f"segments[{i}]")
        k = _require_mapping(seg.get("k"), name=f"segments[{i}].k")
        numerator = _require_int(k.get("numerator"), name=f"segments[{i}].k.numerator")
        denominator = _require_int(k.get("denominator"), name=f"segments[{i}].k.denominator")
        if denominator <= 0:
            raise CurveTableError(f"segments[{i}].k.denominator must be positive")
        k_scaled, rem = divmod(numerator * multiplier * 10**native_decimals, denominator)
        if rem != 0:
            raise CurveTableError(f"segments[{i}].k does not scale to an integer")
        try:
            out.append(
                CurveSegment(
                    exponent=_require_int(seg.get("exponent"), name=f"segments[{i}].exponent"),
                    k_scaled=k_scaled,
                    c_offset=_require_int(seg.get("c_offset"), name=f"segments[{i}].c_offset"),
                    supply_at_boundary=_supply_from_spec(
                        seg.get("supply_at_boundary"), name=f"segments[{i}].supply_at_boundary", max_supply=max_supply
                    ),
                    native_at_boundary=_require_int(
                        seg.get("native_at_boundary"), name=f"segments[{i}].native_at_boundary"
                    ),
                )
            )
        except (TypeError, ValueError) as exc:
            if isinstance(exc, CurveTableError):
                raise
            raise CurveTableError(f"segments[{i}]: {exc}") from exc
    return tuple(out)


def parse_curve_spec(root_obj: Any) -> CurveSpec:
    root = _require_mapping(root_obj, name="spec")
    schema = root.get("schema")
    if schema != SCHEMA:
        raise CurveTableError(f"unsupported spec schema: {schema}")

    consts = _require_mapping(root.get("constants"), name="constants")
    token_decimals = _require_int(consts.get("token_decimals"), name="constants.token_decimals")
    native_decimals = _require_int(consts.get("native_decimals"), name="constants.native_decimals")
    max_supply = _require_int(consts.get("max_supply_tokens"), name="constants.max_supply_tokens") * 10**token_decimals
    multiplier = 10 ** _require_int(consts.get("multiplier_exp10"), name="constants.multiplier_exp10")
    supply_multiplier = 10 ** _require_int(
        consts.get("supply_multiplier_exp10"), name="constants.supply_multiplier_exp10"
    )

    raw_segments = root.get("segments")
    if not isinstance(raw_segments, list) or not raw_segments:
        raise CurveTableError("segments must be a non-empty list")

    return CurveSpec(
        token_decimals=token_decimals,
        native_decimals=native_decimals,
        max_supply=max_supply,
        multiplier=multiplier,
        supply_multiplier=supply_multiplier,
        find_root_max_error=_require_int(consts.get("find_root_max_error"), name="constants.find_root_max_error"),
        fee_divisor=_require_int(consts.get("fee_divisor"), name="constants.fee_divisor"),
        segments=segments_from_spec(
            raw_segments,
            max_supply=max_supply,
            multiplier=multiplier,
            native_decimals=native_decimals,
        ),
    )


def load_curve_spec(path: Path | None = None) -> CurveSpec:
    p = path or default_spec_path()
    return parse_curve_spec(yaml.safe_load(p.read_text(encoding="utf-8")))


def verify_curve_table(spec: CurveSpec, curves: Sequence[CurveSegment] = CURVES) -> None:
    """
    Raise CurveTableError unless `spec` matches the engine's constants and `curves`.
    """
    for name, got, want in (
        ("token_decimals", spec.token_decimals, TOKEN_DECIMALS),
        ("native_decimals", spec.native_decimals, NATIVE_DECIMALS),
        ("max_supply", spec.max_supply, MAX_SUPPLY),
        ("multiplier", spec.multiplier, MULTIPLIER),
        ("supply_multiplier", spec.supply_multiplier, SUPPLY_MULTIPLIER),
        ("find_root_max_error", spec.find_root_max_error, FIND_ROOT_MAX_ERROR),
        ("fee_divisor", spec.fee_divisor, FEE_DIVISOR),
    ):
        if got != want:
            raise CurveTableError(f"{name} mismatch: spec={got} engine={want}")

    validate_curve_table(spec.segments)
    if len(spec.segments) != len(curves):
        raise CurveTableError(f"segment count mismatch: spec={len(spec.segments)} engine={len(curves)}")
    for i, (got_seg, want_seg) in enumerate(zip(spec.segments, curves)):
        if got_seg != want_seg:
            raise CurveTableError(f"segments[{i}] mismatch: spec={got_seg} engine={want_seg}")

    # Cached boundary values must equal the formula in both rounding directions.
    for i, seg in enumerate(curves):
        for round_up in (True, False):
            y = calculate_curve(seg.supply_at_boundary, round_up, seg)
            if y != seg.native_at_boundary:
                raise CurveTableError(
                    f"segments[{i}].native_at_boundary={seg.native_at_boundary} but curve gives {y}"
                )
        if i + 1 < len(curves):
            y_next = calculate_curve(seg.supply_at_boundary, True, curves[i + 1])
            if y_next != seg.native_at_boundary:
                raise CurveTableError(f"segments[{i}] and segments[{i + 1}] are discontinuous at the boundary")
