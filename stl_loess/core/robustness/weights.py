"""Bisquare robustness weights for the outer STL loop."""

from __future__ import annotations

import logging

import numpy as np

from ..maths.weighting import bisquare, median

logger = logging.getLogger(__name__)


def robustness_weights(remainder: np.ndarray) -> np.ndarray:
    """Weights in ``[0, 1]`` that shrink as ``|remainder|`` grows.

    The scale is ``h = 6 * median(|remainder|)``. Residuals up to ``0.001 h``
    get weight 1, residuals beyond ``0.999 h`` get weight 0 and the rest get
    the bisquare ``(1 - (r / h)^2)^2``.

    When ``h`` is zero (more than half of the remainder vanishes) there is no
    scale to measure outliers against and unit weights are returned.
    """
    residuals = np.abs(np.asarray(remainder, dtype=float))
    h = 6.0 * median(residuals)

    if not np.isfinite(h) or h <= 0.0:
        logger.warning(
            f"Robustness scale is {h}; using unit weights for {len(residuals)} points."
        )
        return np.ones(len(residuals))

    weights = bisquare(np.minimum(residuals / h, 1.0))
    weights = np.atleast_1d(weights).astype(float)
    weights[residuals <= 0.001 * h] = 1.0
    weights[residuals > 0.999 * h] = 0.0
    return weights
