"""
End-to-end tests: NetCDF in, daily CSV and plots out.
"""

import logging

import numpy as np
import pandas as pd
import pytest

import lswtpy
import lswtpy.pipeline as pipeline
from lswtpy.config import PipelineConfig
from lswtpy.errors import FormatError, MetadataError
from lswtpy.log import LoggerContext, setup_logger


@pytest.mark.integration
class TestScenario:
    """2 lon x 2 lat x 3 days with fill cells."""

    def test_two_dates(self, scenario_nc):
        daily = lswtpy.extract_daily_lswt(scenario_nc)["daily"]
        assert daily["date"].tolist() == [pd.Timestamp("1981-01-01"),
                                          pd.Timestamp("1981-01-02")]

    def test_means_ignore_fill_cells(self, scenario_nc):
        daily = lswtpy.extract_daily_lswt(scenario_nc)["daily"]
        np.testing.assert_allclose(daily["mean_k"], [292.0, 283.0])
        np.testing.assert_allclose(daily["mean_c"], [292.0 - 273.15, 283.0 - 273.15])

    def test_intermediate_results(self, scenario_nc):
        result = lswtpy.extract_daily_lswt(scenario_nc)
        assert result["cube"].shape == (2, 2, 3)
        assert list(result["observations"].columns) == ["time", "value"]
        assert len(result["observations"]) == 7

    def test_csv(self, tmp_path, scenario_nc):
        out = tmp_path / "atitlan.csv"
        lswtpy.run(PipelineConfig(input_file=scenario_nc, output_file=out))
        lines = out.read_text().splitlines()
        assert lines[0] == ",date,mean_k,mean_c"
        assert [line.split(",")[1] for line in lines[1:]] == ["1981-01-01", "1981-01-02"]
        assert lines[1:] == ["1,1981-01-01,292,18.85", "2,1981-01-02,283,9.85"]


@pytest.mark.integration
class TestRun:
    """Configured runs with bounding box and plots."""

    def test_bounding_box(self, lake_nc):
        result = lswtpy.extract_daily_lswt(
            lake_nc, lat=(14.61, 14.75), lon=(-91.30, -91.10),
        )
        assert result["cube"].sizes["lat"] == 3
        assert result["cube"].sizes["lon"] == 4

        daily = result["daily"]
        assert len(daily) == 34
        expected = [290.0 + t for t in range(40) if t % 7 != 0]
        np.testing.assert_allclose(daily["mean_k"], expected)

    def test_box_without_lake(self, lake_nc):
        daily = lswtpy.extract_daily_lswt(lake_nc, lat=(14.55, 14.56))["daily"]
        assert len(daily) == 0

    def test_time_window(self, lake_nc):
        daily = lswtpy.extract_daily_lswt(
            lake_nc, time=("1981-01-02", "1981-01-05 23:59"),
        )["daily"]
        assert daily["mean_k"].tolist() == [291.0, 292.0, 293.0, 294.0]

    def test_writes_csv_and_plots(self, tmp_path, lake_nc):
        config = PipelineConfig(
            input_file=lake_nc,
            output_file=tmp_path / "out" / "lake.csv",
            lat_range=(14.61, 14.75),
            lon_range=(-91.30, -91.10),
            plot_dir=tmp_path / "figures",
            style="paper",
        )
        daily = lswtpy.run(config)

        assert len(daily) == 34
        back = pd.read_csv(config.output_file, index_col=0)
        assert len(back) == 34
        assert (tmp_path / "figures" / pipeline.MONTHLY_PLOT).exists()
        assert (tmp_path / "figures" / pipeline.TIMESERIES_PLOT).exists()

    def test_plot_failure_keeps_csv(self, tmp_path, lake_nc, monkeypatch, caplog):
        def broken(*args, **kwargs):
            raise RuntimeError("no display")

        monkeypatch.setattr(pipeline, "plot_monthly_means", broken)
        config = PipelineConfig(
            input_file=lake_nc,
            output_file=tmp_path / "lake.csv",
            plot_dir=tmp_path / "figures",
        )
        with caplog.at_level(logging.ERROR, logger="lswtpy"):
            daily = lswtpy.run(config)

        assert len(daily) == 34
        assert len(pd.read_csv(config.output_file, index_col=0)) == 34
        assert "Plotting failed" in caplog.text

    def test_plot_failure_keeps_other_chart(self, tmp_path, lake_nc, monkeypatch, caplog):
        def broken(*args, **kwargs):
            raise RuntimeError("no display")

        monkeypatch.setattr(pipeline, "plot_monthly_means", broken)
        figures = tmp_path / "figures"
        config = PipelineConfig(
            input_file=lake_nc,
            output_file=tmp_path / "lake.csv",
            plot_dir=figures,
        )
        with caplog.at_level(logging.ERROR, logger="lswtpy"):
            lswtpy.run(config)

        assert not (figures / pipeline.MONTHLY_PLOT).exists()
        assert (figures / pipeline.TIMESERIES_PLOT).exists()
        assert pipeline.MONTHLY_PLOT in caplog.text

    def test_render_plots_returns_written(self, tmp_path, lake_nc, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("no display")

        daily = lswtpy.extract_daily_lswt(lake_nc)["daily"]
        monkeypatch.setattr(pipeline, "plot_timeseries", broken)
        written = pipeline.render_plots(daily, tmp_path, "paper")
        assert written == [tmp_path / pipeline.MONTHLY_PLOT]

    def test_no_plots_without_plot_dir(self, tmp_path, lake_nc, monkeypatch):
        def unexpected(*args, **kwargs):
            raise AssertionError("plots should not be rendered")

        monkeypatch.setattr(pipeline, "render_plots", unexpected)
        lswtpy.run(PipelineConfig(input_file=lake_nc, output_file=tmp_path / "x.csv"))

    def test_missing_input(self, tmp_path):
        config = PipelineConfig(input_file=tmp_path / "missing.nc",
                                output_file=tmp_path / "x.csv")
        with pytest.raises(FileNotFoundError):
            lswtpy.run(config)
        assert not (tmp_path / "x.csv").exists()

    def test_metadata_error_before_output(self, tmp_path, scenario_arrays):
        from conftest import write_lswt_file

        path = write_lswt_file(
            tmp_path / "bad.nc", scenario_arrays["data"],
            scenario_arrays["lon"], scenario_arrays["lat"],
            scenario_arrays["ticks"], units="furlongs since 1981-01-01",
        )
        config = PipelineConfig(input_file=path, output_file=tmp_path / "x.csv")
        with pytest.raises(MetadataError):
            lswtpy.run(config)
        assert not (tmp_path / "x.csv").exists()

    def test_wrong_variable_name(self, tmp_path, lake_nc):
        config = PipelineConfig(input_file=lake_nc, output_file=tmp_path / "x.csv",
                                var="sea_surface_temperature")
        with pytest.raises(FormatError):
            lswtpy.run(config)


class TestConfig:
    """PipelineConfig validation."""

    def test_paths_normalised(self, tmp_path):
        cfg = PipelineConfig(input_file=str(tmp_path / "a.nc"), output_file="b.csv",
                             plot_dir="figs")
        assert cfg.input_file == tmp_path / "a.nc"
        assert cfg.plot_dir.name == "figs"

    def test_defaults(self):
        cfg = PipelineConfig(input_file="a.nc", output_file="b.csv")
        assert cfg.var == "lake_surface_water_temperature"
        assert cfg.lat_range is None and cfg.plot_dir is None

    def test_ranges_cast_to_float(self):
        cfg = PipelineConfig(input_file="a.nc", output_file="b.csv", lat_range=(14, 15))
        assert cfg.lat_range == (14.0, 15.0)

    @pytest.mark.parametrize("field,value", [
        ("lat_range", (14.75, 14.61)),
        ("lon_range", (-91.1,)),
        ("time_range", ("1995-01-01",)),
        ("style", "ggplot2"),
    ])
    def test_invalid(self, field, value):
        with pytest.raises(ValueError):
            PipelineConfig(input_file="a.nc", output_file="b.csv", **{field: value})


class TestLogging:
    """Logger setup and stage timing."""

    def test_setup_logger_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logger("lswtpy_test_file", log_file=log_file, log_level="DEBUG")
        logger.debug("hello from the test")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from the test" in log_file.read_text()

    def test_setup_logger_idempotent(self):
        logger = setup_logger("lswtpy_test_twice")
        logger = setup_logger("lswtpy_test_twice")
        assert len(logger.handlers) == 1

    def test_context_reraises(self, caplog):
        logger = logging.getLogger("lswtpy.test_context")
        with caplog.at_level(logging.INFO, logger="lswtpy.test_context"):
            with pytest.raises(ZeroDivisionError):
                with LoggerContext(logger, "division"):
                    1 / 0
        assert "Starting division" in caplog.text
        assert "Failed division" in caplog.text

    def test_context_success(self, caplog):
        logger = logging.getLogger("lswtpy.test_context")
        with caplog.at_level(logging.INFO, logger="lswtpy.test_context"):
            with LoggerContext(logger, "nothing"):
                pass
        assert "Completed nothing" in caplog.text
