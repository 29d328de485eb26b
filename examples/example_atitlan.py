"""
example_atitlan.py
==================
Daily mean lake surface water temperature for Lake Atitlán (Guatemala)
from the GloboLakes L3S LSWT v4.0 product, 1995–2016.

Writes a CSV with one row per day that has at least one clear-sky pixel,
plus a seasonal scatter and a time-series plot.

All parameters are set at the top of the script — no interactive input().
Run ``python generate_test_data.py`` first to try it on synthetic data.
"""

from pathlib import Path
import lswtpy

# ── 1. Configuration (edit these) ────────────────────────────────────

DATA_FILE = Path("GloboLakes/LAKE00001479-GloboLakes-L3S-LSWT-v4.0-fv01.0.nc")
OUT_FILE  = Path("GloboLakes_Atitlan_TS_95_16.csv")
PLOT_DIR  = Path("figures")
LOG_FILE  = None             # e.g. Path("logs/atitlan.log")

# Lake footprint inside the grid; most of the file is land.
# Found by looking at single slices (see step 3 below).
LAT_RANGE = (14.61, 14.75)
LON_RANGE = (-91.30, -91.10)

STYLE = "globolakes"


# ── 2. Run the pipeline ───────────────────────────────────────────────

logger = lswtpy.setup_logger(log_file=LOG_FILE)

lswtpy.summarise(DATA_FILE)

config = lswtpy.PipelineConfig(
    input_file  = DATA_FILE,
    output_file = OUT_FILE,
    lat_range   = LAT_RANGE,
    lon_range   = LON_RANGE,
    plot_dir    = PLOT_DIR,
    style       = STYLE,
)
daily = lswtpy.run(config)

logger.info(f"Date range: {daily['date'].min():%Y-%m-%d} – {daily['date'].max():%Y-%m-%d}")
logger.info(f"Mean LSWT: {daily['mean_c'].mean():.2f} °C")


# ── 3. Look at one raw slice of the full grid ─────────────────────────

cube = lswtpy.load_nc(DATA_FILE)
with lswtpy.style_context(STYLE):
    lswtpy.plot_slice(cube, index=cube.sizes["time"] // 2,
                      path=PLOT_DIR / "lswt_slice.png")
