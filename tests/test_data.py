"""Tests for input validation and even spacing."""

import numpy as np
import pandas as pd
import pytest

from stl_loess.core.data.preprocessing import infer_frequency, space_evenly
from stl_loess.core.data.validation import ensure_valid, validate_input
from stl_loess.core.errors import InputShapeError


class TestValidateInput:
    """Tests for validate_input() and ensure_valid()."""

    def test_valid(self, seasonal_series):
        report = validate_input(seasonal_series, 12)
        assert report.is_valid
        assert report.errors == []
        assert report.stats["n_points"] == 120
        assert ensure_valid(report) is report

    def test_short_series_warns(self):
        report = validate_input(np.arange(30.0), 12)
        assert report.is_valid
        assert len(report.warnings) == 1

    @pytest.mark.parametrize("data,periodicity", [
        (np.arange(24.0), 12),
        (np.arange(30.0), 1),
        (np.ones((10, 3)), 2),
        (np.array([1.0, np.inf] * 20), 4),
        (["a", "b", "c"], 1),
    ])
    def test_invalid(self, data, periodicity):
        report = validate_input(data, periodicity)
        assert not report.is_valid
        with pytest.raises(InputShapeError):
            ensure_valid(report)

    def test_times(self, seasonal_series):
        assert validate_input(seasonal_series, 12, times=np.arange(120)).is_valid
        assert not validate_input(seasonal_series, 12, times=np.arange(119)).is_valid
        assert not validate_input(seasonal_series, 12, times=np.arange(120)[::-1]).is_valid

    def test_datetime_times(self, monthly_series):
        report = validate_input(monthly_series.to_numpy(), 12, times=monthly_series.index)
        assert report.is_valid

    def test_all_errors_reported(self):
        report = validate_input(np.array([np.nan] * 10), 12, times=np.arange(3))
        assert len(report.errors) == 3
        with pytest.raises(InputShapeError, match="too few"):
            ensure_valid(report)


class TestSpaceEvenly:
    """Tests for space_evenly()."""

    @pytest.fixture
    def events(self):
        index = pd.to_datetime([
            "2024-01-01 00:00", "2024-01-01 00:30", "2024-01-01 01:10", "2024-01-01 03:05",
        ])
        return pd.Series([1.0, 2.0, 3.0, 4.0], index=index, name="events")

    def test_sum_with_empty_bins(self, events):
        binned = space_evenly(events, pd.Timedelta(hours=1))
        assert binned.tolist() == [3.0, 3.0, 0.0, 4.0]
        assert binned.index[0] == pd.Timestamp("2024-01-01 00:00")
        assert binned.name == "events"

    def test_mean_with_fill_value(self, events):
        binned = space_evenly(events, pd.Timedelta(hours=1), how="mean", fill_value=-1.0)
        assert binned.tolist() == [1.5, 3.0, -1.0, 4.0]

    def test_bins_anchored_at_first_timestamp(self):
        index = pd.to_datetime(["2024-01-01 00:20", "2024-01-01 01:10", "2024-01-01 01:25"])
        binned = space_evenly(pd.Series([1.0, 2.0, 5.0], index=index), pd.Timedelta(hours=1))
        assert binned.tolist() == [3.0, 5.0]
        assert binned.index[0] == pd.Timestamp("2024-01-01 00:20")

    def test_unsorted_input(self, events):
        shuffled = events.iloc[[2, 0, 3, 1]]
        assert space_evenly(shuffled, pd.Timedelta(hours=1)).tolist() == [3.0, 3.0, 0.0, 4.0]

    def test_inferred_bin_width(self, events):
        """Without freq the bins are as wide as the median gap (40 minutes here)."""
        binned = space_evenly(events)
        assert binned.tolist() == [3.0, 3.0, 0.0, 0.0, 4.0]
        assert binned.index[1] - binned.index[0] == pd.Timedelta(minutes=40)

    def test_bin_width_not_inferable(self):
        index = pd.to_datetime(["2024-01-01", "2024-01-02"])
        with pytest.raises(ValueError, match="freq"):
            space_evenly(pd.Series([1.0, 2.0], index=index))

    def test_requires_datetime_index(self):
        with pytest.raises(TypeError):
            space_evenly(pd.Series([1.0, 2.0]), pd.Timedelta(hours=1))

    def test_empty(self):
        empty = pd.Series([], index=pd.DatetimeIndex([]), dtype=float)
        assert space_evenly(empty, pd.Timedelta(days=1)).empty


class TestInferFrequency:
    """Tests for infer_frequency()."""

    def test_regular_daily(self):
        assert infer_frequency(pd.date_range("2024-01-01", periods=10, freq="D")) == "D"

    def test_irregular_uses_median_gap(self):
        index = pd.DatetimeIndex(["2024-01-01", "2024-01-08", "2024-01-16", "2024-01-22", "2024-01-29"])
        assert infer_frequency(index) == pd.Timedelta(days=7)

    def test_duplicates_and_order_ignored(self):
        index = pd.DatetimeIndex(["2024-01-03", "2024-01-01", "2024-01-02", "2024-01-02"])
        assert infer_frequency(index) == "D"

    def test_too_short(self):
        assert infer_frequency(pd.date_range("2024-01-01", periods=2, freq="D")) is None
