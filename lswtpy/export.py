"""
lswtpy.export
=============
Writing the daily series to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["date", "mean_k", "mean_c"]


def write_csv(
    daily: pd.DataFrame,
    path: Union[str, Path],
) -> Path:
    """Write date, mean_k and mean_c to a CSV file.

    The first column is an unnamed 1-based row index, so the header reads
    ``,date,mean_k,mean_c``. Dates are written as ISO-8601 (YYYY-MM-DD)
    and numbers with at most 15 significant digits, as R's write.csv does.
    Missing parent directories are created; any other failure to write
    (permissions, a file in place of a directory) raises ``OSError``.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    out = daily[CSV_COLUMNS].reset_index(drop=True)
    out.index = pd.RangeIndex(1, len(out) + 1)
    out.to_csv(path, index=True, date_format="%Y-%m-%d", float_format="%.15g")

    logger.info(f"Wrote {len(out)} daily rows → {path}")
    return path
