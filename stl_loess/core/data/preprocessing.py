"""Data preprocessing: frequency inference and binning onto an even grid."""

from __future__ import annotations

import logging

import pandas as pd

logger = logging.getLogger(__name__)


def space_evenly(
    series: pd.Series,
    freq: str | pd.Timedelta | None = None,
    how: str = "sum",
    fill_value: float = 0.0,
) -> pd.Series:
    """Bin a time-indexed series into consecutive intervals of length ``freq``.

    Bins start at the first timestamp. Values falling into the same bin are
    aggregated with ``how`` (any pandas resample aggregation, e.g. "sum" or
    "mean"); bins without observations get ``fill_value``. The result is
    indexed by the start of each bin and is ready for decomposition.

    When ``freq`` is omitted it is inferred from the index with
    :func:`infer_frequency`.
    """
    if not isinstance(series.index, pd.DatetimeIndex):
        raise TypeError("space_evenly() needs a series with a DatetimeIndex.")

    out = series.dropna().sort_index()
    if out.empty:
        return out.astype(float)

    if freq is None:
        freq = infer_frequency(out.index)
        if freq is None:
            raise ValueError("Could not infer a bin width from the index; pass freq explicitly.")
        logger.info(f"Binning {len(out)} observations with inferred frequency {freq}")

    resampler = out.resample(freq, origin="start")
    binned = resampler.agg(how).astype(float)
    counts = resampler.size()
    binned[counts == 0] = fill_value
    binned.name = series.name
    return binned


def infer_frequency(date_index: pd.DatetimeIndex) -> str | pd.Timedelta | None:
    """Infer the spacing of a DatetimeIndex.

    Regular indexes give a pandas offset alias. Irregular ones fall back to the
    median gap between distinct timestamps, returned as a Timedelta.
    """
    stamps = pd.DatetimeIndex(date_index).dropna().unique().sort_values()
    if len(stamps) < 3:
        return None

    try:
        freq = pd.infer_freq(stamps)
        if freq:
            return freq
    except (ValueError, TypeError):
        pass

    # Fallback: median difference
    return pd.Series(stamps).diff().dropna().median()
