"""
Pytest configuration and shared fixtures for the STL tests.
"""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def constant_data():
    """100 copies of the same value."""
    return np.full(100, 2.0 * np.pi)


@pytest.fixture
def linear_data():
    """Straight line through 100 points."""
    return -0.25 * np.arange(100) + 3.0


@pytest.fixture
def quadratic_data():
    """Parabola sampled at 100 points."""
    x = np.arange(100)
    return 3.7 - 0.25 * x + 0.7 * x * x


@pytest.fixture
def seasonal_components():
    """Trend, seasonal and noise of 10 years of monthly data."""
    np.random.seed(42)
    n = 120
    t = np.arange(n)
    trend = 100 + 0.5 * t
    seasonal = 10 * np.sin(2 * np.pi * t / 12)
    noise = np.random.randn(n) * 0.5
    return trend, seasonal, noise


@pytest.fixture
def seasonal_series(seasonal_components):
    """Time series with trend and seasonality."""
    trend, seasonal, noise = seasonal_components
    return trend + seasonal + noise


@pytest.fixture
def monthly_series(seasonal_series):
    """The seasonal series as a pandas series with a monthly DatetimeIndex."""
    index = pd.date_range("2015-01-01", periods=len(seasonal_series), freq="MS")
    return pd.Series(seasonal_series, index=index, name="demand")


@pytest.fixture
def series_with_outlier(seasonal_series):
    """The seasonal series with one large spike."""
    y = seasonal_series.copy()
    y[60] += 100.0
    return y


@pytest.fixture
def trending_sinusoid():
    """Two periods of a sinusoid whose amplitude drops by one per period."""
    period = 24
    i = np.arange(2 * period)
    amplitude = 10 - i // period
    return period, amplitude * np.sin(i * 2 * np.pi / period)
