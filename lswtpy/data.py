"""
lswtpy.data
===========
Loading and cleaning of gridded LSWT files.

The container is opened raw (no CF masking, no time decoding) so that the
fill-value sentinel and the time units can be checked and applied explicitly.
Everything needed is read into memory before the file handle is released.

Typical workflow
----------------
>>> import lswtpy.data as ld
>>> ld.summarise("GloboLakes/LAKE00001479-GloboLakes-L3S-LSWT-v4.0-fv01.0.nc")
>>> cube = ld.load_nc("GloboLakes/LAKE00001479-GloboLakes-L3S-LSWT-v4.0-fv01.0.nc")
>>> cube.dims
('lon', 'lat', 'time')
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd
import xarray as xr

from .errors import FormatError, MetadataError

logger = logging.getLogger(__name__)

LSWT_VAR = "lake_surface_water_temperature"

# CF attributes consumed while decoding; they no longer describe the cube
_DECODED_ATTRS = ("_FillValue", "missing_value", "scale_factor", "add_offset")

_UNITS_RE = re.compile(r"^\s*([A-Za-z]+)\s+since\s+(.+?)\s*$", re.IGNORECASE)

_TIME_UNITS = {
    "seconds": "s", "second": "s", "secs": "s", "sec": "s", "s": "s",
    "minutes": "min", "minute": "min", "mins": "min", "min": "min",
    "hours": "h", "hour": "h", "hrs": "h", "hr": "h", "h": "h",
    "days": "D", "day": "D", "d": "D",
}


# ── Container access ──────────────────────────────────────────────────

@contextmanager
def open_container(path: Union[str, Path]):
    """Open a NetCDF file raw and close it on exit, whatever happens.

    Values keep their stored representation (fill values and packed
    integers untouched) and the time axis stays numeric.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        ds = xr.open_dataset(path, mask_and_scale=False, decode_times=False)
    except (OSError, ValueError) as exc:
        raise FormatError(f"Cannot read {path} as a NetCDF container: {exc}") from exc

    try:
        yield ds
    finally:
        ds.close()


def _require(ds: xr.Dataset, name: str) -> xr.DataArray:
    if name not in ds.variables:
        raise FormatError(
            f"Variable '{name}' not found. "
            f"Available: {list(ds.variables)}"
        )
    return ds[name]


def get_attr(ds: xr.Dataset, var: str, name: str):
    """Look up attribute ``name`` of variable ``var``."""
    da = _require(ds, var)
    if name in da.attrs:
        return da.attrs[name]
    # some backends move CF attributes into .encoding even when not decoding
    if name in da.encoding:
        return da.encoding[name]
    raise MetadataError(f"Variable '{var}' has no '{name}' attribute.")


def summarise(path: Union[str, Path]) -> dict:
    """Dimension sizes, variable names and global attributes of a file."""
    with open_container(path) as ds:
        info = {
            "dims": dict(ds.sizes),
            "variables": list(ds.data_vars),
            "coords": list(ds.coords),
            "attrs": dict(ds.attrs),
        }
    logger.info(f"{Path(path).name}: dims={info['dims']} variables={info['variables']}")
    return info


# ── Fill values ───────────────────────────────────────────────────────

def fill_value(value, var: str = LSWT_VAR):
    """Validate a ``_FillValue`` attribute and return it as a numpy scalar."""
    arr = np.asarray(value)
    if arr.size != 1 or not np.issubdtype(arr.dtype, np.number):
        raise MetadataError(
            f"_FillValue of '{var}' must be a numeric scalar, got {value!r}."
        )
    return arr.ravel()[0]


def mask_fill_values(values: np.ndarray, fill) -> np.ndarray:
    """Replace every element equal to ``fill`` with NaN.

    The sentinel is cast to the array's own dtype and compared exactly, so a
    float32 cube is matched against the float32 rendering of the attribute.
    NaN already present in the data stays NaN and is treated as absent too.
    The result is always float64.
    """
    values = np.asarray(values)
    sentinel = np.array(fill).astype(values.dtype)
    is_fill = values == sentinel

    out = values.astype("float64")
    out[is_fill] = np.nan
    logger.debug(f"Masked {int(is_fill.sum())} fill cells out of {values.size}")
    return out


def apply_packing(values: np.ndarray, attrs: dict) -> np.ndarray:
    """Apply CF ``scale_factor`` / ``add_offset`` if present."""
    scale = attrs.get("scale_factor")
    offset = attrs.get("add_offset")
    if scale is not None:
        values = values * float(scale)
    if offset is not None:
        values = values + float(offset)
    return values


# ── Time axis ─────────────────────────────────────────────────────────

def parse_time_units(units) -> tuple:
    """Split ``'<unit> since <timestamp>'`` into ``(epoch, pandas unit)``.

    The epoch is returned as a tz-naive UTC ``pd.Timestamp``.

    >>> parse_time_units("seconds since 1981-01-01T00:00:00Z")
    (Timestamp('1981-01-01 00:00:00'), 's')
    """
    if not isinstance(units, str):
        raise MetadataError(f"Time units must be a string, got {units!r}.")

    match = _UNITS_RE.match(units)
    if match is None:
        raise MetadataError(
            f"Time units '{units}' are not of the form '<unit> since <timestamp>'."
        )

    unit = _TIME_UNITS.get(match.group(1).lower())
    if unit is None:
        raise MetadataError(
            f"Unsupported time unit '{match.group(1)}' in '{units}'. "
            f"Use one of: seconds, minutes, hours, days."
        )

    try:
        epoch = pd.Timestamp(match.group(2))
    except (ValueError, TypeError) as exc:
        raise MetadataError(f"Cannot parse epoch in time units '{units}'.") from exc
    if pd.isna(epoch):
        raise MetadataError(f"Cannot parse epoch in time units '{units}'.")

    if epoch.tzinfo is not None:
        epoch = epoch.tz_convert("UTC").tz_localize(None)
    return epoch, unit


def decode_time(ticks, units: str) -> pd.DatetimeIndex:
    """Convert raw time ticks to calendar timestamps (UTC, tz-naive).

    timestamp[k] = epoch + ticks[k] * unit
    """
    epoch, unit = parse_time_units(units)
    ticks = np.asarray(ticks, dtype="float64")
    return pd.DatetimeIndex(epoch + pd.to_timedelta(ticks, unit=unit), name="time")


# ── Extraction ────────────────────────────────────────────────────────

def load_nc(
    path: Union[str, Path],
    var: str = LSWT_VAR,
    lon: str = "lon",
    lat: str = "lat",
    time: str = "time",
) -> xr.DataArray:
    """Read ``var`` from a NetCDF file as a cleaned (lon, lat, time) cube.

    Parameters
    ----------
    path : str or Path
    var : str
        3-D data variable (default 'lake_surface_water_temperature').
    lon, lat, time : str
        Names of the coordinate variables in the file. The returned cube
        always uses 'lon', 'lat' and 'time'.

    Returns
    -------
    xr.DataArray, float64, dims ('lon', 'lat', 'time'). Fill values are NaN,
    packing is applied and the time coordinate holds decoded timestamps.
    The original fill value is kept in ``cube.encoding['_FillValue']``.

    Raises
    ------
    FileNotFoundError, FormatError, MetadataError
    """
    with open_container(path) as ds:
        for name in (lon, lat, time):
            _require(ds, name)
        da = _require(ds, var)
        if da.ndim != 3 or set(da.dims) != {lon, lat, time}:
            raise FormatError(
                f"Variable '{var}' has dims {da.dims}; "
                f"expected a permutation of ({lon}, {lat}, {time})."
            )

        fill = fill_value(get_attr(ds, var, "_FillValue"), var)
        units = get_attr(ds, time, "units")

        lon_vals = np.asarray(ds[lon].values, dtype="float64")
        lat_vals = np.asarray(ds[lat].values, dtype="float64")
        ticks = np.asarray(ds[time].values)
        raw = da.transpose(lon, lat, time).values
        attrs = dict(da.attrs)

    logger.info(
        f"Read '{var}' from {Path(path).name}: "
        f"{len(lon_vals)} lon x {len(lat_vals)} lat x {len(ticks)} time steps"
    )

    times = decode_time(ticks, units)
    values = apply_packing(mask_fill_values(raw, fill), attrs)

    cube = xr.DataArray(
        values,
        coords={"lon": lon_vals, "lat": lat_vals, "time": times},
        dims=("lon", "lat", "time"),
        name=var,
        attrs={k: v for k, v in attrs.items() if k not in _DECODED_ATTRS},
    )
    cube.encoding["_FillValue"] = fill
    return cube
