"""Immutable result of an STL decomposition."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np
import pandas as pd

from ..eda.seasonality import seasonal_strength, trend_strength
from ..errors import InputShapeError
from ..loess.settings import LoessSettings
from ..loess.smoother import LoessSmoother

COMPONENTS = ("data", "trend", "seasonal", "remainder", "weights")


def _frozen_copy(values, dtype=float) -> np.ndarray:
    array = np.array(values, dtype=dtype)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Decomposition:
    """Trend, seasonal and remainder of a series, plus the robustness weights.

    All arrays have the length of ``data`` and are read-only.
    ``data == trend + seasonal + remainder`` holds element-wise because the
    remainder is always computed as ``data - trend - seasonal``.
    """

    data: np.ndarray
    trend: np.ndarray
    seasonal: np.ndarray
    remainder: np.ndarray
    weights: np.ndarray
    times: np.ndarray | None = None
    robust: bool = False

    def __post_init__(self):
        for name in COMPONENTS:
            object.__setattr__(self, name, _frozen_copy(getattr(self, name)))

        n = len(self.data)
        for name in COMPONENTS[1:]:
            if len(getattr(self, name)) != n:
                raise InputShapeError(
                    f"The {name} component has {len(getattr(self, name))} values, expected {n}."
                )

        if self.times is not None:
            times = _frozen_copy(self.times, dtype=None)
            if len(times) != n:
                raise InputShapeError(f"Got {len(times)} time labels for {n} data points.")
            object.__setattr__(self, "times", times)

    def __len__(self) -> int:
        return len(self.data)

    def to_frame(self) -> pd.DataFrame:
        """Components as columns, indexed by the time labels when present."""
        index = pd.Index(self.times, name="time") if self.times is not None else None
        return pd.DataFrame(
            {
                "observed": self.data,
                "trend": self.trend,
                "seasonal": self.seasonal,
                "remainder": self.remainder,
                "weights": self.weights,
            },
            index=index,
        )

    def seasonal_strength(self) -> float:
        return seasonal_strength(self.trend, self.seasonal, self.remainder)

    def trend_strength(self) -> float:
        return trend_strength(self.trend, self.seasonal, self.remainder)

    def smooth_seasonal(self, width: int, restore_end_points: bool = True) -> Decomposition:
        """Return a copy whose seasonal component is smoothed by quadratic LOESS.

        Every point is fitted (jump 1) so peaks are not cut off by linear
        interpolation. The smoother tends to over-modify the two end points;
        with ``restore_end_points`` they keep their original values.
        """
        settings = LoessSettings(width, degree=2, jump=1)
        seasonal = LoessSmoother(self.seasonal, settings).smooth()

        if restore_end_points:
            seasonal[0] = self.seasonal[0]
            seasonal[-1] = self.seasonal[-1]

        return replace(
            self,
            seasonal=seasonal,
            remainder=self.data - self.trend - seasonal,
        )
