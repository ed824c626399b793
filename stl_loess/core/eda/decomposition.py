"""Time series decomposition on pandas series."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..config.settings import StlConfig, resolve_config
from ..decomposition.engine import SeasonalTrendLoess
from ..decomposition.result import Decomposition
from ..errors import ConfigurationError
from .seasonality import detect_seasonal_period

logger = logging.getLogger(__name__)

DEFAULT_SEASONAL_WIDTH = 7


@dataclass
class DecompositionResult:
    observed: pd.Series
    trend: pd.Series
    seasonal: pd.Series
    residual: pd.Series
    weights: pd.Series
    period: int
    method: str = "STL"
    decomposition: Decomposition | None = None


def _usable_times(index: pd.Index):
    if isinstance(index, pd.RangeIndex):
        return None
    if index.is_monotonic_increasing and index.is_unique:
        return index
    logger.warning(
        f"Series index ({type(index).__name__}) is not strictly increasing; "
        "using positions as time labels."
    )
    return None


def decompose_stl(
    series: pd.Series | np.ndarray,
    period: int | None = None,
    seasonal_width: int | None = None,
    robust: bool = False,
    periodic: bool = False,
    **options,
) -> DecompositionResult:
    """Decompose using STL (Seasonal and Trend decomposition using LOESS).

    Args:
        series: Evenly spaced observations without gaps.
        period: Observations per seasonal cycle. Detected from the
            autocorrelation function when omitted.
        seasonal_width: Width of the seasonal LOESS; defaults to 7 unless
            ``periodic`` is set.
        robust: Run robustness iterations to down-weight outliers.
        periodic: Force a strictly periodic seasonal component.
        **options: Any other :class:`StlConfig` field, e.g. ``trend_width``
            or ``outer_iterations``.
    """
    if not isinstance(series, pd.Series):
        series = pd.Series(np.asarray(series, dtype=float))

    if period is None:
        period = detect_seasonal_period(series)
        if period is None:
            raise ConfigurationError("No seasonal period could be detected; pass period explicitly.")
        logger.info(f"Detected seasonal period {period}")

    if seasonal_width is None and not periodic:
        seasonal_width = DEFAULT_SEASONAL_WIDTH

    config = StlConfig(
        periodicity=period,
        seasonal_width=seasonal_width,
        robust=robust,
        periodic=periodic,
        **options,
    )
    resolved = resolve_config(config, len(series))
    times = _usable_times(series.index)
    result = SeasonalTrendLoess.from_config(resolved).decompose(series.to_numpy(dtype=float), times=times)

    index = series.index
    return DecompositionResult(
        observed=pd.Series(result.data, index=index, name="observed"),
        trend=pd.Series(result.trend, index=index, name="trend"),
        seasonal=pd.Series(result.seasonal, index=index, name="seasonal"),
        residual=pd.Series(result.remainder, index=index, name="residual"),
        weights=pd.Series(result.weights, index=index, name="weights"),
        period=period,
        method="STL (robust)" if resolved.outer_iterations > 0 else "STL",
        decomposition=result,
    )
