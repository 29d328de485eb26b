"""
lswtpy.plot
===========
Figures for a daily LSWT series (seasonal scatter, time series) and for
single time slices of the gridded cube.

Quick start
-----------
>>> import lswtpy
>>> lswtpy.use_style('globolakes')
>>>
>>> fig = lswtpy.LakePlot(nrows=1, ncols=2, w=12, h=4)
>>> fig[0].monthly(lswtpy.monthly_means(daily), title='Monthly means')
>>> fig[1].ts(daily, title='Daily mean LSWT')
>>> fig.label_subplots()
>>> fig.savefig('figures/atitlan.png')

The short-hand ``fig[i].monthly(...)`` / ``fig[i].ts(...)`` /
``fig[i].slice(...)`` API delegates to the full ``LakePlot.fill_with_*``
methods, which accept every keyword argument.

For one-panel figures written straight to disk use
:func:`plot_monthly_means`, :func:`plot_timeseries` and :func:`plot_slice`.
"""

from __future__ import annotations

import calendar
import logging
import string
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd
import xarray as xr
import matplotlib as mpl
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
import cartopy.crs as ccrs
from cartopy.mpl.ticker import LongitudeFormatter, LatitudeFormatter

from .ops import monthly_means
from .style import MAP_PANEL, SINGLE_PANEL, WIDE_PANEL

logger = logging.getLogger(__name__)


# ── Projection helpers ────────────────────────────────────────────────

def Map(central_longitude: float = 0) -> ccrs.PlateCarree:
    """Plate Carrée projection, for slices of the lon/lat grid."""
    return ccrs.PlateCarree(central_longitude=central_longitude)


# ── _AxProxy ─────────────────────────────────────────────────────────

class _AxProxy:
    """Thin proxy returned by LakePlot[i] that exposes short-hand methods."""

    def __init__(self, parent: "LakePlot", ax: mpl.axes.Axes, idx: int):
        self._p = parent
        self.ax = ax
        self._idx = idx

    def monthly(self, monthly: pd.DataFrame, **kwargs):
        """Short-hand for fill_with_monthly_means on this axis."""
        self._p.fill_with_monthly_means(monthly, ax=self.ax, **kwargs)
        return self

    def ts(self, daily: pd.DataFrame, **kwargs):
        """Short-hand for fill_with_time_series on this axis."""
        self._p.fill_with_time_series(daily, ax=self.ax, **kwargs)
        return self

    def slice(self, X: xr.DataArray, **kwargs):
        """Short-hand for fill_with_slice on this axis."""
        self._p.fill_with_slice(X, ax=self.ax, **kwargs)
        return self


# ── LakePlot ──────────────────────────────────────────────────────────

class LakePlot:
    """Multi-panel figure for a lake temperature series.

    Parameters
    ----------
    nrows, ncols : int
        Grid dimensions.
    w, h : float
        Figure width and height in inches.
    map_proj : tuple, optional
        One entry per subplot: a cartopy projection (e.g. ``Map()``) for
        slice maps, or the string ``'ts'`` for ordinary axes.
        Default: ordinary axes everywhere.
    layout : str
        Matplotlib layout engine, 'constrained' (default) or 'tight'.
    """

    def __init__(
        self,
        nrows: int = 1,
        ncols: int = 1,
        w: float = 7.2,
        h: float = 3.6,
        map_proj: tuple = None,
        layout: str = "constrained",
    ):
        n = nrows * ncols
        if map_proj is None:
            map_proj = ("ts",) * n
        if len(map_proj) != n:
            raise ValueError(
                f"map_proj has {len(map_proj)} entries for {n} subplots."
            )

        self._transf = ccrs.PlateCarree()
        self._fig = plt.figure(figsize=(w, h), layout=layout)

        self.axes: list[mpl.axes.Axes] = []
        for i, proj in enumerate(map_proj):
            if isinstance(proj, str):
                ax = self._fig.add_subplot(nrows, ncols, i + 1)
            else:
                ax = self._fig.add_subplot(nrows, ncols, i + 1, projection=proj)
            self.axes.append(ax)

    def __getitem__(self, idx: int) -> _AxProxy:
        """fig[i] returns a proxy with .monthly(), .ts() and .slice()."""
        return _AxProxy(self, self.axes[idx], idx)

    # ── Seasonal scatter ──────────────────────────────────────────────

    def fill_with_monthly_means(
        self,
        monthly: pd.DataFrame,
        ax: mpl.axes.Axes,
        *,
        value: str = "mean_c",
        title: str = "",
        xlabel: str = "Month",
        ylabel: str = "Mean Temperature (°C)",
        cmap=None,
        size: float = 12,
        cbar_label: str = "Year",
    ) -> "LakePlot":
        """One point per (month, year), coloured by year.

        Parameters
        ----------
        monthly : pd.DataFrame
            Output of :func:`lswtpy.ops.monthly_means` (year, month, value).
        value : str
            Column to plot on the y axis.
        cmap : Colormap, optional
            Year colour scale (default viridis).
        """
        if cmap is None:
            cmap = plt.cm.viridis

        years = monthly["year"].to_numpy()
        if len(years):
            norm = mcolors.Normalize(vmin=years.min(), vmax=max(years.max(), years.min() + 1))
        else:
            norm = mcolors.Normalize(vmin=0, vmax=1)

        ax.scatter(
            monthly["month"], monthly[value],
            c=years, cmap=cmap, norm=norm, s=size, zorder=2,
        )

        sm = mpl.cm.ScalarMappable(norm=norm, cmap=cmap)
        cbar = self._fig.colorbar(sm, ax=ax, label=cbar_label)
        cbar.ax.yaxis.set_major_formatter(mpl.ticker.FormatStrFormatter("%d"))

        ax.set_xticks(range(1, 13))
        ax.set_xticklabels([calendar.month_abbr[m] for m in range(1, 13)])
        ax.set_xlabel(xlabel)
        ax.set_ylabel(ylabel)
        ax.set_title(title)
        return self

    # ── Time series ───────────────────────────────────────────────────

    def fill_with_time_series(
        self,
        daily: pd.DataFrame,
        ax: mpl.axes.Axes,
        *,
        value: str = "mean_c",
        title: str = "",
        xlabel: str = "Year",
        ylabel: str = "Mean Temperature (°C)",
        color: str = None,
        markersize: float = 1.5,
        linewidth: float = 0.5,
        xlim: Optional[tuple] = None,
        ylim: Optional[tuple] = None,
        caption: str = None,
    ) -> "LakePlot":
        """Daily series drawn as points joined by a thin line, ordered by date.

        Example
        -------
        >>> fig[0].ts(daily, ylim=(5, 30), caption='Data: GloboLakes')
        """
        ordered = daily.sort_values("date")
        if color is None:
            color = plt.rcParams["axes.prop_cycle"].by_key()["color"][0]

        ax.plot(
            pd.to_datetime(ordered["date"]), ordered[value],
            color=color, marker="o", ms=markersize,
            linewidth=linewidth, linestyle="-",
        )

        if xlim is not None:
            ax.set_xlim(pd.Timestamp(xlim[0]), pd.Timestamp(xlim[1]))
        if ylim is not None:
            ax.set_ylim(*ylim)

        if caption:
            ax.annotate(
                caption, xy=(1.0, -0.12), xycoords="axes fraction",
                ha="right", va="top",
                fontsize=mpl.rcParams.get("font.size", 8), color="0.6",
            )

        ax.set_xlabel(xlabel)
        ax.set_ylabel(ylabel)
        ax.set_title(title)
        return self

    # ── Single time slice ─────────────────────────────────────────────

    def fill_with_slice(
        self,
        X: xr.DataArray,
        ax: mpl.axes.Axes,
        *,
        title: str = None,
        cmap=None,
        vmin=None,
        vmax=None,
        cbar_label: str = "LSWT (K)",
        grid: bool = True,
        grid_lw: float = 0.3,
    ) -> "LakePlot":
        """Raw pixels of one time step, on lon/lat axes.

        Useful to see where the lake sits in the grid before choosing a
        bounding box. Empty (NaN) pixels are left blank.

        Parameters
        ----------
        X : xr.DataArray
            2-D field with 'lon' and 'lat' coordinates, e.g.
            ``cube.isel(time=2122)``.
        ax : GeoAxes
            Axes created with a cartopy projection (``map_proj=(Map(),)``).
        """
        if cmap is None:
            cmap = plt.cm.RdYlBu_r
        X = X.transpose("lat", "lon")
        lon = X["lon"].values
        lat = X["lat"].values

        if vmin is None:
            vmin = float(X.min()) if X.notnull().any() else None
        if vmax is None:
            vmax = float(X.max()) if X.notnull().any() else None

        mesh = ax.pcolormesh(
            lon, lat, np.ma.masked_invalid(X.values),
            cmap=cmap, vmin=vmin, vmax=vmax,
            transform=self._transf, shading="auto",
        )
        self._fig.colorbar(mesh, ax=ax, label=cbar_label, shrink=0.8)

        if len(lon) > 1 and len(lat) > 1:
            ax.set_extent(
                [lon.min(), lon.max(), lat.min(), lat.max()], crs=self._transf
            )

        if grid:
            gl = ax.gridlines(
                crs=self._transf, draw_labels=True,
                linewidth=grid_lw, color="gray", alpha=0.5, linestyle="--",
            )
            gl.top_labels = False
            gl.right_labels = False
            gl.xformatter = LongitudeFormatter()
            gl.yformatter = LatitudeFormatter()

        if title is None and "time" in X.coords:
            title = pd.Timestamp(X["time"].values[()]).strftime("%Y-%m-%d %H:%M")
        ax.set_title(title or "")
        return self

    # ── Subplot labels ────────────────────────────────────────────────

    def label_subplots(
        self,
        labels=None,
        x: float = -0.06,
        y: float = 1.02,
        fontsize: int = None,
        fontweight: str = "bold",
    ) -> "LakePlot":
        """Add (a), (b), (c)... labels to each subplot."""
        if fontsize is None:
            fontsize = mpl.rcParams.get("axes.titlesize", 9)
        if labels is None:
            labels = [f"({c})" for c in string.ascii_lowercase[:len(self.axes)]]

        for ax, label in zip(self.axes, labels):
            ax.text(
                x, y, label,
                transform=ax.transAxes,
                fontsize=fontsize,
                fontweight=fontweight,
                ha="right", va="bottom",
            )
        return self

    # ── Save / close ──────────────────────────────────────────────────

    def savefig(
        self,
        path: Union[str, Path],
        fmt: str = None,
        dpi: int = 200,
    ) -> "LakePlot":
        """Save figure to file; the format follows the extension unless given."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt is None:
            fmt = path.suffix.lstrip(".")
        if not fmt:
            fmt = "png"
            path = path.with_suffix(".png")
        self._fig.savefig(str(path), format=fmt, dpi=dpi, bbox_inches="tight")
        logger.info(f"Figure saved → {path}")
        return self

    def close(self) -> None:
        """Release the figure."""
        plt.close(self._fig)

    @property
    def fig(self) -> mpl.figure.Figure:
        """The underlying matplotlib Figure."""
        return self._fig


# ── One-figure helpers ────────────────────────────────────────────────

def plot_monthly_means(
    daily: pd.DataFrame,
    path: Union[str, Path],
    title: str = "Average temperature (°C) per month and year",
    **kwargs,
) -> Path:
    """Seasonal scatter of a daily series, written to ``path``."""
    fig = LakePlot(w=SINGLE_PANEL[0], h=SINGLE_PANEL[1])
    try:
        fig[0].monthly(monthly_means(daily), title=title, **kwargs)
        fig.savefig(path)
    finally:
        fig.close()
    return Path(path)


def plot_timeseries(
    daily: pd.DataFrame,
    path: Union[str, Path],
    title: str = "Time series of daily mean LSWT (°C)",
    **kwargs,
) -> Path:
    """Full daily series as connected points, written to ``path``."""
    fig = LakePlot(w=WIDE_PANEL[0], h=WIDE_PANEL[1])
    try:
        fig[0].ts(daily, title=title, **kwargs)
        fig.savefig(path)
    finally:
        fig.close()
    return Path(path)


def plot_slice(
    cube: xr.DataArray,
    index: int,
    path: Union[str, Path],
    **kwargs,
) -> Path:
    """Map of time step ``index`` of a (lon, lat, time) cube."""
    fig = LakePlot(w=MAP_PANEL[0], h=MAP_PANEL[1], map_proj=(Map(),))
    try:
        fig[0].slice(cube.isel(time=index), **kwargs)
        fig.savefig(path)
    finally:
        fig.close()
    return Path(path)
