"""
lswtpy.pipeline
===============
The whole extraction in one call.

>>> import lswtpy
>>> result = lswtpy.extract_daily_lswt(
...     "GloboLakes/LAKE00001479-GloboLakes-L3S-LSWT-v4.0-fv01.0.nc",
...     lat=(14.61, 14.75), lon=(-91.30, -91.10),
... )
>>> result["daily"].head()

or, with output files and plots:

>>> cfg = lswtpy.PipelineConfig(input_file=..., output_file=..., plot_dir="figures")
>>> daily = lswtpy.run(cfg)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .config import PipelineConfig
from .data import LSWT_VAR, load_nc
from .export import write_csv
from .log import LoggerContext
from .ops import add_celsius
from .plot import plot_monthly_means, plot_timeseries
from .reshape import (
    daily_means,
    drop_absent,
    drop_spatial,
    flatten_cube,
    subset_region,
)
from .style import style_context

logger = logging.getLogger(__name__)

MONTHLY_PLOT = "lswt_monthly_means.png"
TIMESERIES_PLOT = "lswt_timeseries.png"


def extract_daily_lswt(
    path: Union[str, Path],
    *,
    var: str = LSWT_VAR,
    lon_name: str = "lon",
    lat_name: str = "lat",
    time_name: str = "time",
    lat: Optional[tuple] = None,
    lon: Optional[tuple] = None,
    time: Optional[tuple] = None,
) -> dict:
    """Load, clean, flatten and aggregate one file.

    Returns dict with keys:
        'cube'         : cleaned (lon, lat, time) DataArray, after subsetting
        'observations' : long table of present values (time, value)
        'daily'        : daily means, columns date, mean_k, mean_c

    Without ``lat``/``lon`` every grid cell of the file contributes to the
    daily mean, i.e. the file is assumed to cover only the lake.
    """
    # 1. Load and clean
    cube = load_nc(path, var=var, lon=lon_name, lat=lat_name, time=time_name)

    # 2. Restrict to the lake
    cube = subset_region(cube, lat=lat, lon=lon, time=time)

    # 3. Long format, absent values out, location no longer needed
    observations = drop_spatial(drop_absent(flatten_cube(cube)))
    logger.info(
        f"{len(observations)} present observations out of {cube.size} cells"
    )

    # 4. Daily means, K and °C
    daily = add_celsius(daily_means(observations))
    logger.info(f"{len(daily)} distinct dates with data")

    return {"cube": cube, "observations": observations, "daily": daily}


def render_plots(daily: pd.DataFrame, plot_dir: Union[str, Path], style: str) -> list:
    """Write the seasonal scatter and the time-series plot into ``plot_dir``.

    Each chart is attempted on its own; a failure is logged with its
    traceback and does not stop the other chart. Returns the written paths.
    """
    plot_dir = Path(plot_dir)
    charts = [
        (plot_monthly_means, plot_dir / MONTHLY_PLOT),
        (plot_timeseries, plot_dir / TIMESERIES_PLOT),
    ]
    written = []
    with style_context(style):
        for plot, path in charts:
            try:
                written.append(plot(daily, path))
            except Exception:
                logger.exception(f"Plotting failed for {path.name}")
    return written


def run(config: PipelineConfig) -> pd.DataFrame:
    """Run extraction, CSV export and (optionally) plotting.

    Errors from extraction or export propagate. Plotting happens after the
    CSV is written and its errors are logged only, so a broken figure never
    costs the data.
    """
    logger.info(f"Processing: {config.input_file}")

    with LoggerContext(logger, "extraction"):
        result = extract_daily_lswt(
            config.input_file,
            var=config.var,
            lon_name=config.lon_name,
            lat_name=config.lat_name,
            time_name=config.time_name,
            lat=config.lat_range,
            lon=config.lon_range,
            time=config.time_range,
        )
    daily = result["daily"]

    with LoggerContext(logger, "CSV export"):
        write_csv(daily, config.output_file)

    if config.plot_dir is not None:
        render_plots(daily, config.plot_dir, config.style)

    return daily
