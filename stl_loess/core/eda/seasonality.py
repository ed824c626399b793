"""Seasonality diagnostics: period detection and component strength."""

from __future__ import annotations

import numpy as np
import pandas as pd
from statsmodels.tsa.stattools import acf


def detect_seasonal_period(
    series: pd.Series | np.ndarray,
    max_period: int = 104,
    min_correlation: float = 0.1,
) -> int | None:
    """Detect the dominant seasonal period from autocorrelation peaks.

    The ACF is taken of the first differences, so a trend does not smear the
    peaks. Returns the lag of the highest local maximum beyond lag 2, or None
    when the series is too short or shows no clear peak.
    """
    valid = pd.Series(np.asarray(series, dtype=float)).dropna().diff().dropna()
    nlags = min(max_period, len(valid) // 2 - 1)
    if nlags < 4:
        return None

    acf_vals = acf(valid, nlags=nlags)

    # Find local maxima in ACF beyond lag 2
    peaks = []
    for i in range(3, len(acf_vals) - 1):
        if acf_vals[i] > acf_vals[i - 1] and acf_vals[i] > acf_vals[i + 1] and acf_vals[i] > min_correlation:
            peaks.append((i, acf_vals[i]))

    if not peaks:
        return None

    peaks.sort(key=lambda x: x[1], reverse=True)
    return int(peaks[0][0])


def _strength(component, residual) -> float:
    component = pd.Series(np.asarray(component, dtype=float))
    residual = pd.Series(np.asarray(residual, dtype=float))
    var_cr = (component + residual).var()
    var_r = residual.var()
    if not var_cr > 0:
        return 0.0
    return float(max(0.0, 1.0 - var_r / var_cr))


def seasonal_strength(trend, seasonal, residual) -> float:
    """Compute seasonal strength as 1 - Var(residual) / Var(seasonal + residual)."""
    return _strength(seasonal, residual)


def trend_strength(trend, seasonal, residual) -> float:
    """Compute trend strength as 1 - Var(residual) / Var(trend + residual)."""
    return _strength(trend, residual)
