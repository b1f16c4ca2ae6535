#!/usr/bin/env python3
"""
Offline bonding-curve quotes as JSON.

Examples:
  python tools/curve_quote.py buy --amount 1000000 --remaining 1000000000000000
  python tools/curve_quote.py sell --amount 1000000 --remaining 900000000000000
  python tools/curve_quote.py buy-exact-in --pay 1000000000 --remaining 1000000000000000
  python tools/curve_quote.py split-pay --max-pay 10000
  python tools/curve_quote.py points --remaining 700000000000000 --max-points 50
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bondcurve.core import (
    MAX_NATIVE_AMOUNT,
    MAX_SUPPLY,
    BondingCurveError,
    compute_buy_token_exact_in_with_fee,
    compute_swap_with_fee,
    curve_points,
    format_price,
    split_pay_amount,
)
from bondcurve.integration.settings import LOG_LEVELS, SamplerSettings


def _non_negative_int(raw: str) -> int:
    try:
        v = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {raw}") from exc
    if v < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {raw}")
    return v


def build_parser(settings: SamplerSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Quote trades against the segmented bonding curve.")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level (default from env)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("buy", "sell"):
        p = sub.add_parser(name, help=f"{name} an exact token amount")
        p.add_argument("--amount", type=_non_negative_int, required=True, help="token base units")
        p.add_argument("--remaining", type=_non_negative_int, default=MAX_SUPPLY, help="remaining supply")
        p.add_argument(
            "--settlement-bound",
            action="store_true",
            help=f"reject native amounts above {MAX_NATIVE_AMOUNT}",
        )

    p = sub.add_parser("buy-exact-in", help="buy with an exact native payment")
    p.add_argument("--pay", type=_non_negative_int, required=True, help="native base units (fee excluded)")
    p.add_argument("--remaining", type=_non_negative_int, default=MAX_SUPPLY, help="remaining supply")

    p = sub.add_parser("split-pay", help="split a max payment into pay + fee")
    p.add_argument("--max-pay", type=_non_negative_int, required=True, help="native base units")

    p = sub.add_parser("points", help="sample the curve for charting")
    p.add_argument("--remaining", type=_non_negative_int, default=MAX_SUPPLY, help="remaining supply")
    p.add_argument("--max-points", type=int, default=settings.max_points)
    p.add_argument("--max-threshold-pct", type=int, default=settings.x_axis_max_threshold_pct)
    p.add_argument("--min-native", type=_non_negative_int, default=settings.x_axis_min_native)
    return parser


def run(args: argparse.Namespace) -> dict[str, Any]:
    if args.command in ("buy", "sell"):
        quote = compute_swap_with_fee(
            args.amount,
            args.remaining,
            args.command == "buy",
            max_native=MAX_NATIVE_AMOUNT if args.settlement_bound else None,
        )
        return {
            "command": args.command,
            "amount": args.amount,
            "remaining_supply": args.remaining,
            "native_amount": quote.native_amount,
            "fee": quote.fee,
            "total": quote.total,
        }
    if args.command == "buy-exact-in":
        q = compute_buy_token_exact_in_with_fee(args.pay, args.remaining)
        return {
            "command": args.command,
            "remaining_supply": args.remaining,
            "buy_amount": q.buy_amount,
            "native_amount": q.native_amount,
            "fee": q.fee,
            "total": q.total,
        }
    if args.command == "split-pay":
        pay, fee = split_pay_amount(args.max_pay)
        return {"command": args.command, "max_pay": args.max_pay, "pay_amount": pay, "fee": fee}
    if args.command == "points":
        points = curve_points(
            args.remaining,
            max_points=args.max_points,
            x_axis_max_threshold_pct=args.max_threshold_pct,
            x_axis_min_native=args.min_native,
        )
        return {
            "command": args.command,
            "remaining_supply": args.remaining,
            "points": [
                {
                    "buy_amount": pt.buy_amount,
                    "native_amount": pt.native_amount,
                    "price": format_price(pt.price),
                    "market_cap": str(pt.market_cap),
                    "current": pt.current,
                }
                for pt in points
            ],
        }
    raise ValueError(f"unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    settings = SamplerSettings.from_env()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        out = run(args)
    except BondingCurveError as exc:
        print(json.dumps({"ok": False, "error": type(exc).__name__, "message": str(exc)}))
        return 1
    except ValueError as exc:
        print(f"invalid input: {exc}", file=sys.stderr)
        return 2
    print(json.dumps({"ok": True, **out}, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
