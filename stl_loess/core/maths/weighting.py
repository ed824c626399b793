"""Kernel functions and order statistics shared by the smoothers."""

from __future__ import annotations

import numpy as np


def tricube(u: float | np.ndarray) -> float | np.ndarray:
    """Tri-cube kernel: (1 - |u|^3)^3 for |u| < 1, else 0."""
    a = np.abs(np.asarray(u, dtype=float))
    result = np.where(a < 1.0, (1.0 - a ** 3) ** 3, 0.0)
    if result.ndim == 0:
        return float(result)
    return result


def bisquare(t: float | np.ndarray) -> float | np.ndarray:
    """Bisquare kernel: (1 - t^2)^2 for 0 <= t < 1, else 0.

    Negative arguments are rejected; the robustness weights only ever pass
    scaled absolute residuals.
    """
    t = np.asarray(t, dtype=float)
    if np.any(t < 0):
        raise ValueError("bisquare() is only defined for non-negative values.")
    result = np.where(t < 1.0, (1.0 - t ** 2) ** 2, 0.0)
    if result.ndim == 0:
        return float(result)
    return result


def median(values: np.ndarray) -> float:
    """Median by selection rather than a full sort.

    Even-length input yields the mean of the two central order statistics.
    """
    values = np.asarray(values, dtype=float).ravel()
    n = len(values)
    if n == 0:
        raise ValueError("median() of an empty sequence is undefined.")

    lo = (n - 1) // 2
    hi = n // 2
    part = np.partition(values, (lo, hi))
    return float(0.5 * (part[lo] + part[hi]))
