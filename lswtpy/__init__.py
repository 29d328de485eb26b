"""
lswtpy
======
Daily lake surface water temperature series from gridded NetCDF files
(GloboLakes / Lake CCI style), with CSV export and quick-look plots.

Quick start
-----------
>>> import lswtpy

# 1. Extract
>>> result = lswtpy.extract_daily_lswt(
...     "GloboLakes/LAKE00001479-GloboLakes-L3S-LSWT-v4.0-fv01.0.nc",
...     lat=(14.61, 14.75), lon=(-91.30, -91.10),
... )
>>> daily = result["daily"]          # date, mean_k, mean_c

# 2. Save
>>> lswtpy.write_csv(daily, "GloboLakes_Atitlan_TS_95_16.csv")

# 3. Plot
>>> with lswtpy.style_context('globolakes'):
...     lswtpy.plot_timeseries(daily, "figures/atitlan_ts.png")
"""

# ── Errors ────────────────────────────────────────────────────────────
from .errors import (
    LSWTError,
    FormatError,
    MetadataError,
    ShapeMismatchError,
)

# ── Style ─────────────────────────────────────────────────────────────
from .style import (
    use_style,
    style_context,
    available_styles,
)

# ── Loading and cleaning ──────────────────────────────────────────────
from .data import (
    open_container,
    get_attr,
    summarise,
    load_nc,
    fill_value,
    mask_fill_values,
    apply_packing,
    parse_time_units,
    decode_time,
)

# ── Reshaping and aggregation ─────────────────────────────────────────
from .reshape import (
    subset_region,
    build_observations,
    flatten_cube,
    drop_absent,
    drop_spatial,
    daily_means,
)

# ── Conversion and export ─────────────────────────────────────────────
from .ops import (
    kelvin_to_celsius,
    add_celsius,
    monthly_means,
)
from .export import write_csv

# ── Plotting ──────────────────────────────────────────────────────────
from .plot import (
    LakePlot,
    Map,
    plot_monthly_means,
    plot_timeseries,
    plot_slice,
)

# ── Pipeline ──────────────────────────────────────────────────────────
from .config import PipelineConfig
from .log import setup_logger, LoggerContext
from .pipeline import extract_daily_lswt, render_plots, run

__version__ = "0.1.0"

__all__ = [
    # Errors
    "LSWTError", "FormatError", "MetadataError", "ShapeMismatchError",
    # Style
    "use_style", "style_context", "available_styles",
    # Data
    "open_container", "get_attr", "summarise", "load_nc",
    "fill_value", "mask_fill_values", "apply_packing",
    "parse_time_units", "decode_time",
    # Reshape
    "subset_region", "build_observations", "flatten_cube",
    "drop_absent", "drop_spatial", "daily_means",
    # Ops / export
    "kelvin_to_celsius", "add_celsius", "monthly_means", "write_csv",
    # Plotting
    "LakePlot", "Map", "plot_monthly_means", "plot_timeseries", "plot_slice",
    # Pipeline
    "PipelineConfig", "setup_logger", "LoggerContext",
    "extract_daily_lswt", "render_plots", "run",
]
