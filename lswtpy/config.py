"""
lswtpy.config
=============
Parameters of one pipeline run.

Scripts set their paths and region at the top and build a single
``PipelineConfig``; nothing is read from the environment or the command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .style import available_styles


@dataclass
class PipelineConfig:
    """Configuration object for one LSWT extraction run."""

    # Required parameters
    input_file: Union[str, Path]
    output_file: Union[str, Path]

    # Variable and axis names in the container
    var: str = "lake_surface_water_temperature"
    lon_name: str = "lon"
    lat_name: str = "lat"
    time_name: str = "time"

    # Region of interest, inclusive (None = keep the whole file)
    lat_range: Optional[tuple] = None
    lon_range: Optional[tuple] = None
    time_range: Optional[tuple] = None

    # Plotting (None = no plots)
    plot_dir: Optional[Union[str, Path]] = None
    style: str = "globolakes"

    def __post_init__(self):
        """Validate configuration parameters after initialization"""
        self.input_file = Path(self.input_file)
        self.output_file = Path(self.output_file)
        if self.plot_dir is not None:
            self.plot_dir = Path(self.plot_dir)

        for name in ("lat_range", "lon_range"):
            rng = getattr(self, name)
            if rng is None:
                continue
            if len(rng) != 2:
                raise ValueError(f"{name} must be a (min, max) pair, got {rng!r}")
            lo, hi = float(rng[0]), float(rng[1])
            if lo > hi:
                raise ValueError(f"{name} min must not exceed max, got {rng!r}")
            setattr(self, name, (lo, hi))

        if self.time_range is not None and len(self.time_range) != 2:
            raise ValueError(
                f"time_range must be a (start, end) pair, got {self.time_range!r}"
            )

        if self.style not in available_styles():
            raise ValueError(
                f"Style '{self.style}' not recognised. "
                f"Choose from: {available_styles()}"
            )
