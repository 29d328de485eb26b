"""
lswtpy.ops
==========
Unit conversion and calendar summaries of a daily LSWT series.

Functions
---------
kelvin_to_celsius   — affine K → °C conversion
add_celsius         — append a °C column to a daily table
monthly_means       — mean per (year, month), for the seasonal plot
"""

from __future__ import annotations

import pandas as pd

KELVIN_OFFSET = 273.15


def kelvin_to_celsius(x):
    """Convert Kelvin to degrees Celsius: x - 273.15.

    Works on scalars, numpy arrays, pandas and xarray objects alike.
    """
    return x - KELVIN_OFFSET


def add_celsius(
    daily: pd.DataFrame,
    src: str = "mean_k",
    dst: str = "mean_c",
) -> pd.DataFrame:
    """Return a copy of ``daily`` with ``dst`` = ``src`` converted to °C."""
    return daily.assign(**{dst: kelvin_to_celsius(daily[src])})


def monthly_means(
    daily: pd.DataFrame,
    value: str = "mean_c",
) -> pd.DataFrame:
    """Mean of ``value`` for every (year, month) present in ``daily``.

    Returns a frame with columns year, month and ``value``, sorted by
    year then month.
    """
    dates = pd.to_datetime(daily["date"])
    return (
        daily.assign(year=dates.dt.year, month=dates.dt.month)
        .groupby(["year", "month"], sort=True)[value]
        .mean()
        .reset_index()
    )
