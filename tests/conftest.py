"""
Pytest configuration and shared fixtures for all tests.

NetCDF inputs are synthesised with xarray into ``tmp_path``; nothing is read
from the network or from real GloboLakes files.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
import xarray as xr

LSWT = "lake_surface_water_temperature"
FILL = -999.0
SECONDS_1981 = "seconds since 1981-01-01 00:00:00"


def write_lswt_file(
    path,
    data,
    lon,
    lat,
    ticks,
    *,
    units=SECONDS_1981,
    fill=FILL,
    dims=("time", "lat", "lon"),
    dtype="float32",
):
    """Write a GloboLakes-like file with ``data`` laid out along ``dims``.

    ``fill=None`` omits the _FillValue attribute, ``units=None`` the time
    units attribute.
    """
    time_attrs = {} if units is None else {"units": units}
    encoding = {"dtype": dtype, "_FillValue": None if fill is None else fill}
    ds = xr.Dataset(
        {LSWT: (dims, np.asarray(data, dtype=dtype), {"units": "kelvin"})},
        coords={
            "time": ("time", np.asarray(ticks, dtype="float64"), time_attrs),
            "lat": ("lat", np.asarray(lat, dtype="float64")),
            "lon": ("lon", np.asarray(lon, dtype="float64")),
        },
    )
    ds.to_netcdf(path, encoding={LSWT: encoding})
    return path


@pytest.fixture
def scenario_arrays():
    """2 lon x 2 lat x 3 days, one fill cell on day 1, day 3 entirely fill.

    Stored as (time, lat, lon), the usual on-disk order.
    """
    data = np.array([
        [[290.0, 292.0],
         [FILL, 294.0]],
        [[280.0, 282.0],
         [284.0, 286.0]],
        [[FILL, FILL],
         [FILL, FILL]],
    ])
    return {
        "data": data,
        "lon": [-91.3, -91.2],
        "lat": [14.6, 14.7],
        "ticks": [0, 86400, 172800],
    }


@pytest.fixture
def scenario_nc(tmp_path, scenario_arrays):
    """The 2x2x3 scenario written to disk."""
    return write_lswt_file(tmp_path / "scenario.nc", **{
        "data": scenario_arrays["data"],
        "lon": scenario_arrays["lon"],
        "lat": scenario_arrays["lat"],
        "ticks": scenario_arrays["ticks"],
    })


@pytest.fixture
def lake_nc(tmp_path):
    """A 6x5 grid over 40 days with a 2x2 lake in the middle.

    Lake pixels hold 290 K + day index; everything else is fill.
    Lake pixels on days divisible by 7 are cloudy (fill).
    """
    lon = np.linspace(-91.35, -91.05, 6)
    lat = np.linspace(14.55, 14.80, 5)
    nt = 40
    ticks = np.arange(nt) * 86400.0 + 15 * 3600.0
    data = np.full((nt, len(lat), len(lon)), FILL)
    for t in range(nt):
        if t % 7 == 0:
            continue
        data[t, 2:4, 2:4] = 290.0 + t
    return write_lswt_file(tmp_path / "lake.nc", data, lon, lat, ticks)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end runs that write NetCDF, CSV and PNG files"
    )
