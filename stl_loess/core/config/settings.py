"""Decomposition options and the rules that turn them into concrete settings."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ConfigurationError
from ..loess.settings import LoessSettings

# Widths this large make a LOESS pass a global fit over the whole series.
MASSIVE_WIDTH_FACTOR = 100

ROBUST_ITERATIONS = (1, 15)
NON_ROBUST_ITERATIONS = (2, 0)


@dataclass
class StlConfig:
    """User-facing STL options.

    Only ``periodicity`` is always required. ``seasonal_width`` is required
    unless ``periodic`` is set. Everything else has a default that may
    depend on the other options and on the data length; see
    :func:`resolve_config`.
    """

    periodicity: int | None = None
    seasonal_width: int | None = None
    seasonal_degree: int | None = None
    seasonal_jump: int | None = None
    trend_width: int | None = None
    trend_degree: int | None = None
    trend_jump: int | None = None
    lowpass_width: int | None = None
    lowpass_degree: int = 1
    lowpass_jump: int | None = None
    inner_iterations: int | None = None
    outer_iterations: int | None = None
    robust: bool = False
    periodic: bool = False
    flat_trend: bool = False
    linear_trend: bool = False
    post_smooth_trend: bool = False


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully determined settings consumed by the decomposition engine."""

    periodicity: int
    seasonal: LoessSettings
    trend: LoessSettings
    lowpass: LoessSettings
    inner_iterations: int
    outer_iterations: int
    periodic: bool = False
    post_smooth_trend: bool = False


def default_trend_width(periodicity: int, seasonal_width: int) -> int:
    """Smallest trend width that keeps trend and seasonal frequencies apart.

    Cleveland et al. (1990) recommend
    ``1.5 p / (1 - 1.5 / n_s) <= n_t``.
    """
    return int(1.5 * periodicity / (1.0 - 1.5 / seasonal_width) + 0.5)


def _check_forced(name: str, flag: str, width, degree, jump, forced_width: int, forced_degree: int):
    if jump is not None:
        raise ConfigurationError(f"{name}_jump cannot be combined with {flag}.")
    if degree is not None and degree != forced_degree:
        raise ConfigurationError(
            f"{name}_degree={degree} conflicts with {flag}, which uses degree {forced_degree}."
        )
    if width is not None and width != forced_width:
        raise ConfigurationError(
            f"{name}_width={width} conflicts with {flag}, which uses width {forced_width}."
        )


def resolve_config(config: StlConfig, data_length: int) -> ResolvedConfig:
    """Apply defaults and reject contradictory options.

    ``config`` is left untouched.
    """
    p = config.periodicity
    if p is None:
        raise ConfigurationError("periodicity must be set.")
    if p < 2:
        raise ConfigurationError(f"periodicity must be at least 2, but is {p}.")

    # Seasonal
    if config.periodic:
        seasonal_width = MASSIVE_WIDTH_FACTOR * data_length
        _check_forced(
            "seasonal", "periodic", config.seasonal_width, config.seasonal_degree,
            config.seasonal_jump, seasonal_width, 0,
        )
        seasonal_degree = 0
    else:
        if config.seasonal_width is None:
            raise ConfigurationError("seasonal_width must be set unless periodic=True.")
        seasonal_width = config.seasonal_width
        seasonal_degree = 1 if config.seasonal_degree is None else config.seasonal_degree

    seasonal = LoessSettings(seasonal_width, seasonal_degree, config.seasonal_jump)

    # Trend
    if config.flat_trend and config.linear_trend:
        raise ConfigurationError("flat_trend and linear_trend cannot both be set.")

    if config.flat_trend or config.linear_trend:
        flag = "flat_trend" if config.flat_trend else "linear_trend"
        trend_width = MASSIVE_WIDTH_FACTOR * p * data_length
        trend_degree = 0 if config.flat_trend else 1
        _check_forced(
            "trend", flag, config.trend_width, config.trend_degree,
            config.trend_jump, trend_width, trend_degree,
        )
    else:
        trend_degree = 1 if config.trend_degree is None else config.trend_degree
        trend_width = config.trend_width
        if trend_width is None:
            trend_width = default_trend_width(p, seasonal.width)

    trend = LoessSettings(trend_width, trend_degree, config.trend_jump)

    # Low-pass
    lowpass_width = p if config.lowpass_width is None else config.lowpass_width
    lowpass = LoessSettings(lowpass_width, config.lowpass_degree, config.lowpass_jump)

    # Iterations
    inner, outer = ROBUST_ITERATIONS if config.robust else NON_ROBUST_ITERATIONS
    if config.inner_iterations is not None:
        inner = config.inner_iterations
    if config.outer_iterations is not None:
        outer = config.outer_iterations
    if inner < 1:
        raise ConfigurationError(f"inner_iterations must be at least 1, but is {inner}.")
    if outer < 0:
        raise ConfigurationError(f"outer_iterations cannot be negative, but is {outer}.")

    return ResolvedConfig(
        periodicity=p,
        seasonal=seasonal,
        trend=trend,
        lowpass=lowpass,
        inner_iterations=inner,
        outer_iterations=outer,
        periodic=config.periodic,
        post_smooth_trend=config.post_smooth_trend,
    )
