"""
lswtpy.style
============
Matplotlib rcParams presets for LSWT figures.

Usage
-----
>>> import lswtpy
>>> lswtpy.use_style('globolakes')    # cream background, teal series
>>> lswtpy.use_style('paper')         # plain white, journal-sized fonts
>>> lswtpy.use_style('default')       # restore matplotlib defaults

Or as a context manager:
>>> with lswtpy.style_context('globolakes'):
...     plot_timeseries(daily, 'figures/ts.png')
"""

import matplotlib as mpl
import matplotlib.pyplot as plt
from contextlib import contextmanager

# ── Figure sizes (inches) ─────────────────────────────────────────────
SINGLE_PANEL = (7.2, 4.0)    # seasonal scatter
WIDE_PANEL   = (10.0, 4.0)   # full time series
MAP_PANEL    = (6.0, 5.0)    # single slice

# ── Colours ───────────────────────────────────────────────────────────
SERIES_COLOR     = "#7DB2BE"   # teal, daily LSWT series
BACKGROUND_COLOR = "#F8F2E7"   # cream
TEXT_COLOR       = "#61605D"   # warm grey
MUTED_COLOR      = "#B3B3B3"   # grey70, captions and axis lines


# ── rcParams dictionaries ─────────────────────────────────────────────

_BASE = {
    "font.family"           : "sans-serif",
    "font.sans-serif"       : ["Helvetica", "Arial", "DejaVu Sans"],
    "lines.linewidth"       : 1.0,
    "lines.markersize"      : 3.0,
    "axes.linewidth"        : 0.5,
    "xtick.direction"       : "out",
    "ytick.direction"       : "out",
    "legend.framealpha"     : 0.8,
    "legend.edgecolor"      : "0.8",
    "figure.dpi"            : 100,
    "savefig.dpi"           : 200,
    "savefig.bbox"          : "tight",
    "savefig.pad_inches"    : 0.05,
}

PAPER_RC = {
    **_BASE,
    "font.size"             : 8,
    "axes.titlesize"        : 9,
    "axes.labelsize"        : 8,
    "xtick.labelsize"       : 7,
    "ytick.labelsize"       : 7,
    "legend.fontsize"       : 7,
}

GLOBOLAKES_RC = {
    **_BASE,
    "font.sans-serif"       : ["Roboto", "DejaVu Sans"],
    "font.size"             : 10,
    "axes.titlesize"        : 14,
    "axes.titlecolor"       : TEXT_COLOR,
    "axes.labelsize"        : 10,
    "axes.labelcolor"       : TEXT_COLOR,
    "axes.facecolor"        : BACKGROUND_COLOR,
    "axes.edgecolor"        : MUTED_COLOR,
    "axes.linewidth"        : 1.0,
    "axes.spines.top"       : False,
    "axes.spines.right"     : False,
    "axes.prop_cycle"       : mpl.cycler(color=[SERIES_COLOR]),
    "figure.facecolor"      : BACKGROUND_COLOR,
    "savefig.facecolor"     : BACKGROUND_COLOR,
    "xtick.color"           : TEXT_COLOR,
    "ytick.color"           : TEXT_COLOR,
    "xtick.major.size"      : 0.0,
    "ytick.major.size"      : 0.0,
    "xtick.labelsize"       : 8,
    "ytick.labelsize"       : 10,
    "legend.fontsize"       : 8,
}

_STYLES = {
    "paper"     : PAPER_RC,
    "globolakes": GLOBOLAKES_RC,
}


def available_styles() -> list:
    """Names accepted by :func:`use_style`."""
    return [*_STYLES, "default"]


def use_style(name: str = "globolakes") -> None:
    """Apply an rcParams preset globally.

    Parameters
    ----------
    name : {'paper', 'globolakes', 'default'}
    """
    if name == "default":
        mpl.rcdefaults()
        return
    key = name.lower()
    if key not in _STYLES:
        raise ValueError(
            f"Style '{name}' not recognised. "
            f"Choose from: {available_styles()}."
        )
    plt.rcParams.update(_STYLES[key])


@contextmanager
def style_context(name: str = "globolakes"):
    """Context manager: temporarily apply a style, then restore previous settings."""
    prev = dict(mpl.rcParams)
    try:
        use_style(name)
        yield
    finally:
        mpl.rcParams.update(prev)
