"""STL: Seasonal-Trend decomposition procedure based on LOESS.

Cleveland, R. B., Cleveland, W. S., McRae, J. E. and Terpenning, I. (1990).
STL: A Seasonal-Trend Decomposition Procedure Based on Loess. Journal of
Official Statistics 6(1), 3-73.
"""

from __future__ import annotations

import logging
import time

import numpy as np

from ..data.validation import ensure_valid, validate_input
from ..errors import ConfigurationError
from ..loess.settings import LoessSettings
from ..loess.smoother import LoessSmoother
from ..robustness.weights import robustness_weights
from ..seasonal.cyclic_subseries import CyclicSubSeriesSmoother
from ..seasonal.lowpass import LowPassFilter
from .result import Decomposition

logger = logging.getLogger(__name__)


class SeasonalTrendLoess:
    """Configured STL decomposer.

    One instance can decompose any number of series; no state is kept
    between calls to :meth:`decompose`.
    """

    def __init__(
        self,
        periodicity: int,
        seasonal: LoessSettings,
        trend: LoessSettings,
        lowpass: LoessSettings,
        inner_iterations: int = 2,
        outer_iterations: int = 0,
        periodic: bool = False,
        post_smooth_trend: bool = False,
    ):
        if periodicity is None or periodicity < 2:
            raise ConfigurationError(f"periodicity must be at least 2, but is {periodicity}.")
        if inner_iterations < 1:
            raise ConfigurationError(
                f"At least one inner iteration is required, got {inner_iterations}."
            )
        if outer_iterations < 0:
            raise ConfigurationError(
                f"The number of outer iterations cannot be negative, got {outer_iterations}."
            )

        self.periodicity = int(periodicity)
        self.seasonal = seasonal
        self.trend = trend
        self.lowpass = lowpass
        self.inner_iterations = int(inner_iterations)
        self.outer_iterations = int(outer_iterations)
        self.periodic = periodic
        self.post_smooth_trend = post_smooth_trend

    @classmethod
    def from_config(cls, config) -> SeasonalTrendLoess:
        """Build from a :class:`~stl_loess.core.config.settings.ResolvedConfig`."""
        return cls(
            periodicity=config.periodicity,
            seasonal=config.seasonal,
            trend=config.trend,
            lowpass=config.lowpass,
            inner_iterations=config.inner_iterations,
            outer_iterations=config.outer_iterations,
            periodic=config.periodic,
            post_smooth_trend=config.post_smooth_trend,
        )

    def decompose(self, data, times=None) -> Decomposition:
        """Split ``data`` into trend, seasonal and remainder.

        Args:
            data: Evenly spaced, gap-free observations.
            times: Optional strictly increasing labels (integers or
                datetimes) carried into the result. They do not affect the
                arithmetic, which always works on positions ``0..n-1``.

        Raises:
            InputShapeError: If the data cannot be decomposed with this
                periodicity or the labels do not match the data.
        """
        ensure_valid(validate_input(data, self.periodicity, times=times))
        data = np.asarray(data, dtype=float)
        started = time.perf_counter()

        n = len(data)
        p = self.periodicity
        cyclic = CyclicSubSeriesSmoother(self.seasonal, n, p, backward_periods=1, forward_periods=1)
        lowpass = LowPassFilter(p, self.lowpass)

        trend = np.zeros(n)
        seasonal = np.zeros(n)
        weights = np.ones(n)

        outer = 0
        while True:
            external = weights if outer > 0 else None

            for inner in range(self.inner_iterations):
                extended = cyclic.smooth(data - trend, external)
                deseasonalised = lowpass.filter(extended)
                seasonal = extended[p:p + n] - deseasonalised
                trend = LoessSmoother(data - seasonal, self.trend, external_weights=external).smooth()
                logger.debug(f"Outer pass {outer}, inner pass {inner} done")

            remainder = data - trend - seasonal

            outer += 1
            if outer > self.outer_iterations:
                break

            weights = robustness_weights(remainder)

        if self.post_smooth_trend:
            settings = LoessSettings(int(1.5 * self.trend.width + 1), degree=self.trend.degree)
            external = weights if self.outer_iterations > 0 else None
            trend = LoessSmoother(trend, settings, external_weights=external).smooth()
            remainder = data - trend - seasonal
            logger.debug(f"Post-smoothed trend with width {settings.width}")

        if self.periodic:
            phase_means = np.array([seasonal[phase::p].mean() for phase in range(p)])
            seasonal = phase_means[np.arange(n) % p]
            remainder = data - trend - seasonal
            logger.debug("Enforced strictly periodic seasonal component")

        logger.debug(
            f"Decomposed {n} points (period {p}, {self.inner_iterations} inner / "
            f"{self.outer_iterations} outer iterations) in {time.perf_counter() - started:.3f}s"
        )

        return Decomposition(
            data=data,
            trend=trend,
            seasonal=seasonal,
            remainder=remainder,
            weights=weights,
            times=times,
            robust=self.outer_iterations > 0,
        )


def decompose(
    series,
    periodicity: int,
    inner_iterations: int,
    outer_iterations: int,
    seasonal_settings: LoessSettings,
    trend_settings: LoessSettings,
    lowpass_settings: LoessSettings,
    enforce_strict_periodicity: bool = False,
    times=None,
    post_smooth_trend: bool = False,
) -> Decomposition:
    """Decompose ``series`` with explicit, already resolved settings."""
    stl = SeasonalTrendLoess(
        periodicity,
        seasonal_settings,
        trend_settings,
        lowpass_settings,
        inner_iterations=inner_iterations,
        outer_iterations=outer_iterations,
        periodic=enforce_strict_periodicity,
        post_smooth_trend=post_smooth_trend,
    )
    return stl.decompose(series, times=times)
