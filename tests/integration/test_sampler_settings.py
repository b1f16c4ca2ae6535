from __future__ import annotations

import logging

import pytest

from bondcurve.integration.settings import (
    ENV_CURVE_POINTS,
    ENV_LOG_LEVEL,
    ENV_X_AXIS_MAX_THRESHOLD_PCT,
    ENV_X_AXIS_MIN_NATIVE,
    SamplerSettings,
)

_ALL_ENV = (ENV_CURVE_POINTS, ENV_LOG_LEVEL, ENV_X_AXIS_MAX_THRESHOLD_PCT, ENV_X_AXIS_MIN_NATIVE)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ALL_ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_env() -> None:
    s = SamplerSettings.from_env()
    assert s == SamplerSettings()
    assert s.max_points == 1000
    assert s.x_axis_max_threshold_pct == 300
    assert s.x_axis_min_native == 200 * 10**9
    assert s.log_level_value == logging.WARNING


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_CURVE_POINTS, " 250 ")
    monkeypatch.setenv(ENV_X_AXIS_MAX_THRESHOLD_PCT, "500")
    monkeypatch.setenv(ENV_X_AXIS_MIN_NATIVE, "0")
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
    s = SamplerSettings.from_env()
    assert (s.max_points, s.x_axis_max_threshold_pct, s.x_axis_min_native) == (250, 500, 0)
    assert s.log_level == "DEBUG"
    assert s.log_level_value == logging.DEBUG


def test_out_of_range_values_are_clamped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_CURVE_POINTS, "1")
    monkeypatch.setenv(ENV_X_AXIS_MAX_THRESHOLD_PCT, "10")
    monkeypatch.setenv(ENV_X_AXIS_MIN_NATIVE, "-5")
    s = SamplerSettings.from_env()
    assert s.max_points == 2
    assert s.x_axis_max_threshold_pct == 100
    assert s.x_axis_min_native == 0

    monkeypatch.setenv(ENV_CURVE_POINTS, str(10**9))
    assert SamplerSettings.from_env().max_points == 100_000


def test_garbage_falls_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_CURVE_POINTS, "lots")
    monkeypatch.setenv(ENV_LOG_LEVEL, "chatty")
    monkeypatch.setenv(ENV_X_AXIS_MIN_NATIVE, "   ")
    s = SamplerSettings.from_env()
    assert s.max_points == 1000
    assert s.log_level == "WARNING"
    assert s.x_axis_min_native == 200 * 10**9


@pytest.mark.parametrize("field", sorted(SamplerSettings.BOUNDS))
def test_each_bounded_field_clamps_to_its_range(monkeypatch: pytest.MonkeyPatch, field: str) -> None:
    env_name, lo, hi = SamplerSettings.BOUNDS[field]
    monkeypatch.setenv(env_name, str(lo - 1))
    assert getattr(SamplerSettings.from_env(), field) == lo
    monkeypatch.setenv(env_name, str(hi + 1))
    assert getattr(SamplerSettings.from_env(), field) == hi
    monkeypatch.setenv(env_name, str(lo))
    assert getattr(SamplerSettings.from_env(), field) == lo
