"""Weighted local polynomial regression (LOESS) evaluated at arbitrary abscissae.

The data are assumed to sit on the regular grid ``0, 1, ..., n - 1``. For a
target abscissa ``x`` and a window ``[left, right]`` the fit is recast as a
linear operation on the data: neighbourhood weights are computed with the
tri-cube kernel, normalised, then corrected for the degree of the local
polynomial so that ``sum(weights * data)`` is the fitted value.

Many windows of the same span are evaluated at once as rows of a 2-D block,
which keeps the per-point work inside numpy.
"""

from __future__ import annotations

import numpy as np

from ..errors import ConfigurationError, InputShapeError
from ..maths.weighting import tricube

# Upper bound on window cells held in memory for one vectorised block.
_BLOCK_CELLS = 1 << 20


def _flat_update(weights, positions, xs, fit, data_range):
    """Degree 0: the normalised neighbourhood weights are the fit."""


def _linear_update(weights, positions, xs, fit, data_range):
    """Degree 1: first-moment correction of the neighbourhood weights."""
    x_mean = np.sum(weights * positions, axis=1)
    centred = positions - x_mean[:, None]
    variance = np.sum(weights * centred ** 2, axis=1)

    # Points too bunched up to estimate a slope keep the moving average.
    apply = fit & (variance > 1e-6 * data_range ** 2)
    if not apply.any():
        return

    beta = (xs[apply] - x_mean[apply]) / variance[apply]
    weights[apply] *= 1.0 + beta[:, None] * centred[apply]


def _quadratic_update(weights, positions, xs, fit, data_range):
    """Degree 2: solve the 2x2 system of centred moments for the correction.

    Positions are centred on their weighted mean before the moments are formed.
    """
    x_mean = np.sum(weights * positions, axis=1)
    centred = positions - x_mean[:, None]
    c2 = centred * centred
    m2 = np.sum(weights * c2, axis=1)
    m3 = np.sum(weights * c2 * centred, axis=1)
    m4 = np.sum(weights * c2 * c2, axis=1) - m2 * m2
    denominator = m2 * m4 - m3 * m3

    apply = fit & (denominator > 1e-6 * data_range * data_range)
    if not apply.any():
        return

    det = denominator[apply]
    beta2 = m4[apply] / det
    beta3 = m3[apply] / det
    beta4 = m2[apply] / det

    dx1 = xs[apply] - x_mean[apply]
    dx2 = dx1 * dx1 - m2[apply]

    a1 = beta2 * dx1 - beta3 * dx2
    a2 = beta4 * dx2 - beta3 * dx1

    c1 = centred[apply]
    weights[apply] *= (
        1.0
        + a1[:, None] * c1
        + a2[:, None] * (c1 * c1 - m2[apply][:, None])
    )


_WEIGHT_UPDATES = {
    0: _flat_update,
    1: _linear_update,
    2: _quadratic_update,
}


class LoessInterpolator:
    """LOESS fit of degree 0, 1 or 2 over a series on the integer grid.

    Args:
        data: Values at positions ``0..n-1``.
        width: Smoothing width. Only matters on its own when it exceeds the
            number of data points, in which case it widens the kernel.
        degree: Degree of the local polynomial (0, 1 or 2).
        external_weights: Optional per-point weights multiplied into the
            neighbourhood weights (robustness weights in STL).
    """

    def __init__(
        self,
        data: np.ndarray,
        width: int,
        degree: int = 1,
        external_weights: np.ndarray | None = None,
    ):
        if degree not in _WEIGHT_UPDATES:
            raise ConfigurationError(f"Degree must be 0, 1 or 2, but is {degree}.")

        self.data = np.asarray(data, dtype=float)
        if self.data.ndim != 1:
            raise InputShapeError("LOESS data must be one-dimensional.")

        if external_weights is not None:
            external_weights = np.asarray(external_weights, dtype=float)
            if len(external_weights) < len(self.data):
                raise InputShapeError(
                    f"{len(self.data)} data points have been provided, "
                    f"but only {len(external_weights)} external weights."
                )

        self.width = int(width)
        self.degree = degree
        self.external_weights = external_weights
        self._update_weights = _WEIGHT_UPDATES[degree]

    def smooth(self, x: float, left: int, right: int) -> float | None:
        """Fitted value at ``x`` from the window ``[left, right]``.

        Returns None when every point in the window has zero weight.
        """
        if not 0 <= left <= right < len(self.data):
            raise InputShapeError(
                f"Invalid window [{left}, {right}] for {len(self.data)} data points."
            )

        values, defined = self.smooth_many(
            np.array([x], dtype=float), np.array([left]), right - left + 1
        )
        return float(values[0]) if defined[0] else None

    def smooth_many(
        self,
        xs: np.ndarray,
        lefts: np.ndarray,
        span: int,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Fit at every ``xs[k]`` using the window ``[lefts[k], lefts[k] + span - 1]``.

        Returns the fitted values and a boolean mask that is False where the
        fit is undefined (those values are NaN).
        """
        xs = np.asarray(xs, dtype=float)
        lefts = np.asarray(lefts, dtype=np.intp)
        values = np.empty(len(xs))
        defined = np.zeros(len(xs), dtype=bool)

        rows = max(1, _BLOCK_CELLS // max(span, 1))
        for start in range(0, len(xs), rows):
            block = slice(start, start + rows)
            values[block], defined[block] = self._smooth_block(xs[block], lefts[block], span)

        return values, defined

    def _smooth_block(self, xs, lefts, span):
        n = len(self.data)
        indices = lefts[:, None] + np.arange(span)
        positions = indices.astype(float)

        lam = np.maximum(xs - lefts, lefts + (span - 1) - xs)
        # Let the kernel shape follow the configured width, not the amount of data.
        if self.width > n:
            lam = lam + (self.width - n) // 2

        delta = np.abs(xs[:, None] - positions)
        lam_col = lam[:, None]
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            weights = np.where(delta <= 0.001 * lam_col, 1.0, tricube(delta / lam_col))
        weights = np.where(delta <= 0.999 * lam_col, weights, 0.0)

        if self.external_weights is not None:
            weights = weights * self.external_weights[indices]

        total = weights.sum(axis=1)
        defined = total > 0.0
        weights[defined] /= total[defined, None]

        # lambda == 0 is a single point: plain weighted average.
        fit = defined & (lam > 0.0)
        self._update_weights(weights, positions, xs, fit, float(n - 1))

        values = np.einsum("ij,ij->i", weights, self.data[indices])
        values[~defined] = np.nan
        return values, defined
