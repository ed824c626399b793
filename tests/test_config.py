"""Tests for option resolution."""

from dataclasses import asdict

import pytest

from stl_loess.core.config.settings import StlConfig, default_trend_width, resolve_config
from stl_loess.core.errors import ConfigurationError


class TestResolveConfig:
    """Tests for resolve_config()."""

    def test_defaults(self):
        resolved = resolve_config(StlConfig(periodicity=12, seasonal_width=7), 120)
        assert resolved.periodicity == 12
        assert (resolved.seasonal.width, resolved.seasonal.degree, resolved.seasonal.jump) == (7, 1, 1)
        assert (resolved.trend.width, resolved.trend.degree, resolved.trend.jump) == (23, 1, 3)
        assert (resolved.lowpass.width, resolved.lowpass.degree, resolved.lowpass.jump) == (13, 1, 2)
        assert (resolved.inner_iterations, resolved.outer_iterations) == (2, 0)
        assert not resolved.periodic
        assert not resolved.post_smooth_trend

    def test_default_trend_width(self):
        assert default_trend_width(12, 7) == 23
        assert default_trend_width(52, 7) == 99

    def test_robust_iterations(self):
        resolved = resolve_config(StlConfig(periodicity=12, seasonal_width=7, robust=True), 120)
        assert (resolved.inner_iterations, resolved.outer_iterations) == (1, 15)

    def test_explicit_iterations_win(self):
        config = StlConfig(periodicity=12, seasonal_width=7, robust=True, inner_iterations=3, outer_iterations=2)
        resolved = resolve_config(config, 120)
        assert (resolved.inner_iterations, resolved.outer_iterations) == (3, 2)

    def test_explicit_settings_kept(self):
        config = StlConfig(
            periodicity=12, seasonal_width=9, seasonal_degree=0, seasonal_jump=2,
            trend_width=30, trend_degree=2, trend_jump=1, lowpass_width=15, lowpass_degree=2,
        )
        resolved = resolve_config(config, 120)
        assert (resolved.seasonal.width, resolved.seasonal.degree, resolved.seasonal.jump) == (9, 0, 2)
        assert (resolved.trend.width, resolved.trend.degree, resolved.trend.jump) == (31, 2, 1)
        assert (resolved.lowpass.width, resolved.lowpass.degree) == (15, 2)

    def test_periodic(self):
        resolved = resolve_config(StlConfig(periodicity=12, periodic=True), 120)
        assert resolved.seasonal.width == 12001
        assert resolved.seasonal.degree == 0
        assert resolved.periodic

    def test_periodic_accepts_consistent_settings(self):
        config = StlConfig(periodicity=12, periodic=True, seasonal_width=12000, seasonal_degree=0)
        assert resolve_config(config, 120).seasonal.width == 12001

    @pytest.mark.parametrize("kwargs", [
        dict(seasonal_width=7),
        dict(seasonal_degree=1),
        dict(seasonal_jump=1),
    ])
    def test_periodic_conflicts(self, kwargs):
        with pytest.raises(ConfigurationError):
            resolve_config(StlConfig(periodicity=12, periodic=True, **kwargs), 120)

    def test_flat_trend(self):
        resolved = resolve_config(StlConfig(periodicity=12, seasonal_width=7, flat_trend=True), 120)
        assert resolved.trend.width == 144001
        assert resolved.trend.degree == 0

    def test_linear_trend(self):
        resolved = resolve_config(StlConfig(periodicity=12, seasonal_width=7, linear_trend=True), 120)
        assert resolved.trend.width == 144001
        assert resolved.trend.degree == 1

    @pytest.mark.parametrize("kwargs", [
        dict(flat_trend=True, linear_trend=True),
        dict(flat_trend=True, trend_degree=1),
        dict(flat_trend=True, trend_width=23),
        dict(linear_trend=True, trend_jump=2),
        dict(linear_trend=True, trend_degree=0),
    ])
    def test_trend_conflicts(self, kwargs):
        with pytest.raises(ConfigurationError):
            resolve_config(StlConfig(periodicity=12, seasonal_width=7, **kwargs), 120)

    @pytest.mark.parametrize("kwargs", [
        dict(),
        dict(periodicity=1, seasonal_width=7),
        dict(periodicity=12),
        dict(periodicity=12, seasonal_width=7, inner_iterations=0),
        dict(periodicity=12, seasonal_width=7, outer_iterations=-1),
        dict(periodicity=12, seasonal_width=7, seasonal_degree=3),
        dict(periodicity=12, seasonal_width=0),
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            resolve_config(StlConfig(**kwargs), 120)

    def test_config_not_mutated(self):
        config = StlConfig(periodicity=12, periodic=True, robust=True)
        before = asdict(config)
        resolve_config(config, 120)
        assert asdict(config) == before
