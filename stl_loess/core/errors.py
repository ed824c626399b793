"""Error taxonomy for the decomposition core."""

from __future__ import annotations


class StlError(ValueError):
    """Base class for every error raised by the decomposition core."""


class ConfigurationError(StlError):
    """Invalid smoother or decomposition settings (degree, width, jump, iterations)."""


class InputShapeError(StlError):
    """Input data that cannot be decomposed with the given periodicity."""
