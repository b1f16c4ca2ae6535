"""
Environment-driven settings for the curve tools.

The engine itself takes every input explicitly; these settings only supply
defaults for chart sampling and CLI logging. Unparseable values fall back to
the field default and out-of-range values are clamped to the field's bounds,
so a bad environment never changes settlement math.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

from ..core.sampler import DEFAULT_MAX_POINTS, DEFAULT_X_AXIS_MAX_THRESHOLD_PCT, DEFAULT_X_AXIS_MIN_NATIVE


ENV_CURVE_POINTS = "BONDCURVE_CURVE_POINTS"
ENV_X_AXIS_MAX_THRESHOLD_PCT = "BONDCURVE_X_AXIS_MAX_THRESHOLD_PCT"
ENV_X_AXIS_MIN_NATIVE = "BONDCURVE_X_AXIS_MIN_NATIVE"
ENV_LOG_LEVEL = "BONDCURVE_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"


def _lookup(env_name: str) -> Optional[str]:
    raw = os.environ.get(env_name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


@dataclass(frozen=True)
class SamplerSettings:
    max_points: int = DEFAULT_MAX_POINTS
    x_axis_max_threshold_pct: int = DEFAULT_X_AXIS_MAX_THRESHOLD_PCT
    x_axis_min_native: int = DEFAULT_X_AXIS_MIN_NATIVE
    log_level: str = DEFAULT_LOG_LEVEL

    # field -> (env var, lowest accepted, highest accepted)
    BOUNDS = {
        "max_points": (ENV_CURVE_POINTS, 2, 100_000),
        "x_axis_max_threshold_pct": (ENV_X_AXIS_MAX_THRESHOLD_PCT, 100, 100_000),
        "x_axis_min_native": (ENV_X_AXIS_MIN_NATIVE, 0, 2**64 - 1),
    }

    @classmethod
    def _int_field_from_env(cls, field: str) -> int:
        env_name, lo, hi = cls.BOUNDS[field]
        default = getattr(cls, field)
        raw = _lookup(env_name)
        if raw is None:
            return default
        try:
            v = int(raw)
        except ValueError:
            return default
        return min(max(v, lo), hi)

    @classmethod
    def from_env(cls) -> "SamplerSettings":
        ints: Dict[str, int] = {field: cls._int_field_from_env(field) for field in cls.BOUNDS}
        level = (_lookup(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()
        if level not in LOG_LEVELS:
            level = DEFAULT_LOG_LEVEL
        return cls(log_level=level, **ints)

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)
