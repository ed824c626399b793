"""Low-pass filter applied to the extended seasonal array."""

from __future__ import annotations

import numpy as np

from ..errors import InputShapeError
from ..loess.settings import LoessSettings
from ..loess.smoother import LoessSmoother
from ..maths.moving_average import simple_moving_average


class LowPassFilter:
    """Moving averages of ``p``, ``p`` and 3 points followed by a LOESS pass.

    The three averages erode ``2p`` points in total, so an extended seasonal
    of ``n + 2p`` values (one period extrapolated at each end) filters down
    to exactly ``n`` values.
    """

    def __init__(self, periodicity: int, settings: LoessSettings):
        self.periodicity = periodicity
        self.settings = settings

    def filter(self, extended: np.ndarray) -> np.ndarray:
        extended = np.asarray(extended, dtype=float)
        if len(extended) < 2 * self.periodicity + 1:
            raise InputShapeError(
                f"The low-pass filter needs more than {2 * self.periodicity} values, "
                f"got {len(extended)}."
            )

        averaged = simple_moving_average(extended, self.periodicity)
        averaged = simple_moving_average(averaged, self.periodicity)
        averaged = simple_moving_average(averaged, 3)
        return LoessSmoother(averaged, self.settings).smooth()
