"""Drive a LOESS interpolator across a whole series."""

from __future__ import annotations

import numpy as np

from .interpolator import LoessInterpolator
from .settings import LoessSettings


class LoessSmoother:
    """Smooth every point of ``data`` with a LOESS fit of the given settings.

    Windows hold ``width`` points and slide right once the evaluation index
    passes the half-width, stopping when they reach the end of the data. With
    ``jump > 1`` only every ``jump``-th point (and the last one) is fitted and
    the points in between are linearly interpolated.
    """

    def __init__(
        self,
        data: np.ndarray,
        settings: LoessSettings,
        external_weights: np.ndarray | None = None,
    ):
        self.data = np.asarray(data, dtype=float)
        self.settings = settings
        self.interpolator = LoessInterpolator(
            self.data,
            settings.width,
            degree=settings.degree,
            external_weights=external_weights,
        )
        self.jump = max(1, min(settings.jump, len(self.data) - 1))

    @property
    def width(self) -> int:
        return self.settings.width

    def smooth(self) -> np.ndarray:
        """Return a new array with the smoothed series."""
        n = len(self.data)
        if n <= 1:
            return self.data.copy()

        width = self.width
        jump = self.jump
        knots = np.arange(0, n, jump)

        if width >= n:
            span = n
            lefts = np.zeros(len(knots), dtype=np.intp)
        else:
            span = width
            half_width = (width + 1) // 2
            lefts = np.clip(knots - half_width + 1, 0, n - width)

        smoothed = np.empty(n)
        values, defined = self.interpolator.smooth_many(knots, lefts, span)
        smoothed[knots] = np.where(defined, values, self.data[knots])

        if jump == 1:
            return smoothed

        last = n - 1
        if knots[-1] != last:
            # The last point reuses the window of the last fitted knot.
            value, ok = self.interpolator.smooth_many(
                np.array([last], dtype=float), lefts[-1:], span
            )
            smoothed[last] = value[0] if ok[0] else self.data[last]
            knots = np.append(knots, last)

        skipped = np.setdiff1d(np.arange(n), knots, assume_unique=True)
        smoothed[skipped] = np.interp(skipped, knots, smoothed[knots])
        return smoothed
