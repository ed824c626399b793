"""Eroding simple moving average used by the low-pass filter."""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..errors import ConfigurationError, InputShapeError


def simple_moving_average(values: np.ndarray, window: int) -> np.ndarray:
    """Rolling mean over complete windows only.

    The result has ``len(values) - window + 1`` elements; element ``i`` is the
    mean of ``values[i:i + window]``.
    """
    values = np.asarray(values, dtype=float)
    if window < 1:
        raise ConfigurationError(f"window must be positive, but is {window}.")
    if window > len(values):
        raise InputShapeError(
            f"window ({window}) exceeds the number of values ({len(values)})."
        )

    rolled = pd.Series(values).rolling(window).mean()
    return rolled.to_numpy()[window - 1:]
