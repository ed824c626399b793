"""Cyclic sub-series smoothing with extrapolation at both ends."""

from __future__ import annotations

import numpy as np

from ..errors import ConfigurationError, InputShapeError
from ..loess.settings import LoessSettings
from ..loess.smoother import LoessSmoother

# Floor for the robustness weights of a sub-series that has no usable weight left.
MIN_SUBSERIES_WEIGHT = 0.001


def floor_subseries_weights(weights: np.ndarray) -> np.ndarray:
    """Raise the weights of a fully rejected sub-series to MIN_SUBSERIES_WEIGHT.

    A sub-series with at least one usable weight is returned unchanged.
    """
    if np.all(weights < MIN_SUBSERIES_WEIGHT):
        return np.maximum(weights, MIN_SUBSERIES_WEIGHT)
    return weights


class CyclicSubSeriesSmoother:
    """Smooth each phase of a periodic series separately.

    For periodicity ``p`` the series is split into ``p`` sub-series (the
    Januaries, the Februaries, ...). Each is LOESS-smoothed and extended by
    ``backward_periods`` points before its start and ``forward_periods``
    points after its end. The result is interleaved back into position order,
    giving an array of ``data_length + (backward + forward) * p`` values.
    """

    def __init__(
        self,
        settings: LoessSettings,
        data_length: int,
        periodicity: int,
        backward_periods: int = 1,
        forward_periods: int = 1,
    ):
        if periodicity < 1:
            raise ConfigurationError(f"periodicity must be positive, but is {periodicity}.")
        if backward_periods < 0 or forward_periods < 0:
            raise ConfigurationError("The number of extrapolated periods cannot be negative.")
        if data_length < periodicity:
            raise InputShapeError(
                f"{data_length} data points do not cover one period of {periodicity}."
            )

        self.settings = settings
        self.data_length = data_length
        self.periodicity = periodicity
        self.backward_periods = backward_periods
        self.forward_periods = forward_periods

    @property
    def extended_length(self) -> int:
        return self.data_length + (self.backward_periods + self.forward_periods) * self.periodicity

    def smooth(self, data: np.ndarray, weights: np.ndarray | None = None) -> np.ndarray:
        """Return the extended seasonal array for ``data``.

        ``weights`` are the robustness weights of the outer loop, or None for
        an unweighted pass.
        """
        data = np.asarray(data, dtype=float)
        if len(data) != self.data_length:
            raise InputShapeError(
                f"Expected {self.data_length} data points, got {len(data)}."
            )
        if weights is not None:
            weights = np.asarray(weights, dtype=float)
            if len(weights) != self.data_length:
                raise InputShapeError(
                    f"Expected {self.data_length} weights, got {len(weights)}."
                )

        p = self.periodicity
        extended = np.empty(self.extended_length)
        for phase in range(p):
            sub_weights = None if weights is None else floor_subseries_weights(weights[phase::p])
            extended[phase::p] = self._smooth_subseries(data[phase::p], sub_weights)

        return extended

    def _smooth_subseries(self, values, weights):
        length = len(values)
        backward = self.backward_periods
        width = self.settings.width

        smoother = LoessSmoother(values, self.settings, external_weights=weights)
        out = np.empty(backward + length + self.forward_periods)
        out[backward:backward + length] = smoother.smooth()

        interpolator = smoother.interpolator

        if backward:
            right = min(width - 1, length - 1)
            xs = -np.arange(1, backward + 1, dtype=float)
            fitted, defined = interpolator.smooth_many(
                xs, np.zeros(backward, dtype=np.intp), right + 1
            )
            out[backward - 1::-1] = np.where(defined, fitted, out[backward])

        if self.forward_periods:
            right = length - 1
            left = max(0, right - width + 1)
            xs = right + np.arange(1, self.forward_periods + 1, dtype=float)
            fitted, defined = interpolator.smooth_many(
                xs, np.full(self.forward_periods, left, dtype=np.intp), right - left + 1
            )
            out[backward + length:] = np.where(defined, fitted, out[backward + right])

        return out
