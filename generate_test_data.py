"""
generate_test_data.py
=====================
Writes a small synthetic GloboLakes-style LSWT file, so the example can run
without downloading anything.

File produced:
  GloboLakes/LAKE00001479-GloboLakes-L3S-LSWT-v4.0-fv01.0.nc

Layout follows the real product:
  lon, lat    — 0.0125° grid around Lake Atitlán
  time        — seconds since 1981-01-01 00:00:00, one overpass on a
                subset of days between 1995-06-28 and 2016-12-31
  lake_surface_water_temperature (time, lat, lon)
              — int16, scale_factor 0.01, add_offset 273.15,
                _FillValue -32768 over land and under cloud

Usage
-----
    python generate_test_data.py
"""

from pathlib import Path
import numpy as np
import pandas as pd
import xarray as xr

# ── Configuration ─────────────────────────────────────────────────────

OUT_FILE  = Path("GloboLakes/LAKE00001479-GloboLakes-L3S-LSWT-v4.0-fv01.0.nc")
SEED      = 42
CLEAR_SKY = 0.35      # fraction of days with an overpass
CLOUD     = 0.30      # fraction of lake pixels cloudy on those days

OUT_FILE.parent.mkdir(parents=True, exist_ok=True)
rng = np.random.default_rng(SEED)

# ── Grid ──────────────────────────────────────────────────────────────

lon = np.round(np.arange(-91.3500, -91.0499, 0.0125), 4)     # 25 points
lat = np.round(np.arange(14.5500, 14.8001, 0.0125), 4)       # 21 points
lon2d, lat2d = np.meshgrid(lon, lat)

# Elliptical lake, roughly where Atitlán is
lake = (((lon2d + 91.20) / 0.09) ** 2 + ((lat2d - 14.68) / 0.06) ** 2) <= 1.0

# ── Time axis ─────────────────────────────────────────────────────────

days = pd.date_range("1995-06-28", "2016-12-31", freq="D")
days = days[rng.random(len(days)) < CLEAR_SKY]
overpass = days + pd.to_timedelta(rng.uniform(14, 17, len(days)), unit="h")
ticks = (overpass - pd.Timestamp("1981-01-01")).total_seconds().to_numpy()
T = len(ticks)

# ── Field ─────────────────────────────────────────────────────────────

doy = overpass.dayofyear.to_numpy()
seasonal = 295.5 + 1.5 * np.sin(2 * np.pi * (doy - 80) / 365.25)

lswt = np.full((T, len(lat), len(lon)), np.nan)
for t in range(T):
    field = seasonal[t] + 0.3 * rng.standard_normal(lake.shape)
    cloudy = rng.random(lake.shape) < CLOUD
    lswt[t] = np.where(lake & ~cloudy, field, np.nan)

ds = xr.Dataset(
    {
        "lake_surface_water_temperature": (
            ("time", "lat", "lon"), lswt,
            {"long_name": "lake surface skin temperature",
             "standard_name": "lake_surface_water_temperature",
             "units": "kelvin"},
        ),
    },
    coords={
        "time": ("time", ticks, {"units": "seconds since 1981-01-01 00:00:00",
                                 "calendar": "gregorian",
                                 "standard_name": "time"}),
        "lat": ("lat", lat, {"units": "degrees_north"}),
        "lon": ("lon", lon, {"units": "degrees_east"}),
    },
    attrs={"title": "Synthetic GloboLakes L3S LSWT (Lake Atitlán)",
           "lake_id": "1479"},
)

encoding = {
    "lake_surface_water_temperature": {
        "dtype": "int16", "scale_factor": 0.01, "add_offset": 273.15,
        "_FillValue": np.int16(-32768),
    },
}
ds.to_netcdf(OUT_FILE, encoding=encoding)

print(f"✓  {OUT_FILE}  ({T} time steps, {len(lon)} lon x {len(lat)} lat, "
      f"{int(lake.sum())} lake pixels)")
