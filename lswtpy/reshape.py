"""
lswtpy.reshape
==============
From a (lon, lat, time) cube to a daily mean series.

Functions
---------
subset_region       — inclusive lat/lon bounding box and time window
build_observations  — expand-grid of the axes paired with flat values
flatten_cube        — long-format table of every cube cell
drop_absent         — remove rows without a value
drop_spatial        — remove the lon/lat columns
daily_means         — mean value per calendar date
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pandas as pd
import xarray as xr

from .errors import ShapeMismatchError

logger = logging.getLogger(__name__)

OBS_COLUMNS = ["lon", "lat", "time", "value"]


# ── Spatial and temporal subsetting ──────────────────────────────────

def _between(coord: np.ndarray, bounds: tuple) -> np.ndarray:
    lo, hi = sorted((float(bounds[0]), float(bounds[1])))
    return (coord >= lo) & (coord <= hi)


def subset_region(
    cube: xr.DataArray,
    lat: Optional[tuple] = None,
    lon: Optional[tuple] = None,
    time: Optional[tuple] = None,
) -> xr.DataArray:
    """Keep only grid cells inside an inclusive box and time window.

    Unlike label slicing, this works whatever the sort order of the
    coordinates. Omitted bounds leave that axis untouched.

    Example
    -------
    >>> atitlan = subset_region(cube, lat=(14.61, 14.75), lon=(-91.30, -91.10))
    """
    sel = {}
    if lat is not None:
        sel["lat"] = _between(cube["lat"].values, lat)
    if lon is not None:
        sel["lon"] = _between(cube["lon"].values, lon)
    if time is not None:
        t = pd.DatetimeIndex(cube["time"].values)
        sel["time"] = np.asarray(
            (t >= pd.Timestamp(time[0])) & (t <= pd.Timestamp(time[1]))
        )
    if not sel:
        return cube

    out = cube.isel(sel)
    logger.info(f"Region subset: {dict(cube.sizes)} -> {dict(out.sizes)}")
    return out


# ── Long format ───────────────────────────────────────────────────────

def build_observations(lon, lat, time, values) -> pd.DataFrame:
    """Pair every (lon, lat, time) combination with one flat value.

    Combinations are enumerated with lon varying fastest, then lat, then
    time, so ``values`` must be flattened in that same order.

    Raises
    ------
    ShapeMismatchError
        If the number of combinations differs from the number of values.
    """
    lon = np.asarray(lon)
    lat = np.asarray(lat)
    time = np.asarray(time)
    values = np.asarray(values).ravel()

    nlon, nlat, nt = len(lon), len(lat), len(time)
    n = nlon * nlat * nt
    if n != values.size:
        raise ShapeMismatchError(
            f"{nlon} lon x {nlat} lat x {nt} time = {n} coordinate triples, "
            f"but {values.size} values."
        )

    return pd.DataFrame({
        "lon"  : np.tile(lon, nlat * nt),
        "lat"  : np.tile(np.repeat(lat, nlon), nt),
        "time" : np.repeat(time, nlon * nlat),
        "value": values,
    })


def flatten_cube(cube: xr.DataArray) -> pd.DataFrame:
    """One row per cube cell: columns lon, lat, time, value."""
    data = cube.transpose("lon", "lat", "time").values
    return build_observations(
        cube["lon"].values,
        cube["lat"].values,
        cube["time"].values,
        data.ravel(order="F"),
    )


def drop_absent(table: pd.DataFrame) -> pd.DataFrame:
    """Remove rows whose value is NaN."""
    out = table.dropna(subset=["value"])
    logger.debug(f"Dropped {len(table) - len(out)} absent rows, {len(out)} left")
    return out


def drop_spatial(table: pd.DataFrame) -> pd.DataFrame:
    """Remove the lon/lat columns once the region is fixed."""
    return table.drop(columns=["lon", "lat"])


# ── Aggregation ───────────────────────────────────────────────────────

def daily_means(table: pd.DataFrame) -> pd.DataFrame:
    """Mean value per calendar date.

    daily[d] = mean(value[k] for every row k whose timestamp falls on date d)

    Returns a frame with columns ``date`` and ``mean_k``, sorted by date.
    Dates with no rows are simply missing; nothing is interpolated.
    """
    dates = pd.to_datetime(table["time"]).dt.normalize()
    daily = (
        table.assign(date=dates)
        .groupby("date", sort=True)["value"]
        .mean()
        .rename("mean_k")
        .reset_index()
    )
    return daily
