"""Generate a sample series for trying out the decomposition.

Run: python -m stl_loess.data.generate_sample
Creates: stl_loess/data/sample_demand.csv
"""

import numpy as np
import pandas as pd
from pathlib import Path


def generate_sample_series(
    start_date: str = "2019-01-07",
    n_weeks: int = 260,  # 5 years
    base_level: float = 1000,
    trend_slope: float = 2.0,
    seasonal_amplitude: float = 200,
    noise_std: float = 50,
    n_outliers: int = 5,
    seed: int = 42,
) -> pd.Series:
    """Generate weekly data with trend, annual seasonality, noise and a few outliers."""
    rng = np.random.default_rng(seed)

    dates = pd.date_range(start=start_date, periods=n_weeks, freq="W-MON")
    t = np.arange(n_weeks)

    # Trend
    trend = base_level + trend_slope * t

    # Annual seasonality (52-week cycle)
    seasonal = seasonal_amplitude * np.sin(2 * np.pi * t / 52)

    # Holiday effects on fixed weeks of the cycle
    week = t % 52
    holiday_boost = np.zeros(n_weeks)
    holiday_boost[(week >= 47) | (week == 0)] = 150
    holiday_boost[(week >= 31) & (week <= 35)] = 80
    holiday_boost[(week >= 23) & (week <= 29)] = -60

    # Noise
    noise = rng.normal(0, noise_std, n_weeks)

    values = trend + seasonal + holiday_boost + noise

    # Add a few outliers
    if n_outliers:
        outlier_idx = rng.choice(n_weeks, size=n_outliers, replace=False)
        values[outlier_idx] *= rng.uniform(1.5, 2.5, size=n_outliers)

    return pd.Series(np.round(values, 1), index=pd.DatetimeIndex(dates, name="date"), name="sales")


if __name__ == "__main__":
    output_path = Path(__file__).parent / "sample_demand.csv"
    series = generate_sample_series()
    series.to_csv(output_path)
    print(f"Sample data generated: {output_path}")
    print(f"  Length: {len(series)}")
    print(f"  Date range: {series.index.min()} to {series.index.max()}")
    print(f"  Mean: {series.mean():.0f}")
    print(series.head())
