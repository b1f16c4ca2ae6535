#!/usr/bin/env python3
"""
Fail-closed check that the YAML curve kernel spec matches the engine's table.

CI-friendly: prints `ok` and exits 0, or prints the first mismatch and exits 1.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bondcurve.core.errors import CurveTableError
from bondcurve.kernels.python.curve_spec_v1 import default_spec_path, load_curve_spec, verify_curve_table


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--spec", type=Path, default=default_spec_path(), help="path to curve spec YAML")
    args = parser.parse_args(argv)

    if not args.spec.exists():
        print(f"missing curve spec: {args.spec}", file=sys.stderr)
        return 2
    try:
        verify_curve_table(load_curve_spec(args.spec))
    except (CurveTableError, yaml.YAMLError) as exc:
        print(f"curve spec invalid: {exc}", file=sys.stderr)
        return 1
    print("ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
