"""End-to-end tests for PipelineOrchestrator."""

import json
import math

import pandas as pd
import pytest

from soltemp.errors import EmptyDataset
from soltemp.pipeline.orchestrator import PipelineOrchestrator, PipelineResults

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]

YEARS = (1990, 1991, 1992)


def station_lines(years, lat=57.7607, lon=12.9468):
    """Mid-month observations at three hours with a seasonal cycle."""
    lines = []
    for year in years:
        for month in range(1, 13):
            for hour in (6, 12, 18):
                temp = 8.0 - 10.0 * math.cos(2 * math.pi * (month - 1) / 12) + (hour - 12) * 0.1
                lines.append(f"{year};{month:02d};15;{hour:02d};{temp:.1f};{lat};{lon}")
    return lines


@pytest.fixture
def input_dir(temp_dir):
    d = temp_dir / "input"
    d.mkdir()
    (d / "station_a.csv").write_text("\n".join(station_lines(YEARS[:2])) + "\n")
    (d / "station_b.csv").write_text(
        "\n".join(station_lines(YEARS[2:]) + ["not;a;record", "1992;02;30;12;1.0;57.0;12.0"]) + "\n"
    )
    (d / "notes.txt").write_text("ignored: pattern is *.csv\n")
    return d


@pytest.fixture
def pipeline_config(make_config, input_dir, temp_dir):
    return make_config(INPUT_DIR=str(input_dir), BASE_DIR=str(temp_dir / "out"), N_WORKERS=2)


def test_orchestrator_initialization(pipeline_config, output_dirs):
    orch = PipelineOrchestrator(pipeline_config, output_dirs)
    assert orch.config == pipeline_config
    assert orch.output_dirs == output_dirs
    assert orch.workers == []


def test_discover_sources_sorted_and_filtered(pipeline_config, input_dir):
    paths = PipelineOrchestrator(pipeline_config).discover_sources()
    assert [p.name for p in paths] == ["station_a.csv", "station_b.csv"]


def test_missing_input_dir_raises(make_config, temp_dir):
    config = make_config(INPUT_DIR=str(temp_dir / "nowhere"))
    with pytest.raises(FileNotFoundError):
        PipelineOrchestrator(config).discover_sources()


def test_unset_input_dir_raises(internal_config):
    with pytest.raises(ValueError, match="input directory"):
        PipelineOrchestrator(internal_config).discover_sources()


def test_run_end_to_end(pipeline_config, output_dirs):
    results = PipelineOrchestrator(pipeline_config, output_dirs).run()

    assert isinstance(results, PipelineResults)

    counts = results.counts
    assert counts.files == 2
    assert counts.produced_records == len(YEARS) * 12 * 3
    assert counts.bad_lines == 1
    assert counts.rejected_records == 1
    assert counts.total_lines == counts.bad_lines + counts.rejected_records + counts.produced_records

    assert len(results.adjusted) == counts.produced_records
    assert results.normalized["normalized"].between(0, 1).all()
    assert len(results.monthly) == len(YEARS) * 12

    spectrum = results.spectrum
    assert spectrum.sizes["month_index"] == 36
    assert spectrum.sizes["frequency"] == 18
    assert spectrum.sizes["period"] == 500
    assert set(results.series["series"]) == {f"{m:02d}" for m in range(1, 13)} | {"timeline"}


def test_run_writes_artifacts(pipeline_config, output_dirs):
    PipelineOrchestrator(pipeline_config, output_dirs).run()

    analysis = output_dirs["analysis"]
    for name in ("adjusted_observations", "monthly_means", "normalized_monthly_series",
                 "spectrum", "periodogram", "dominant_periods"):
        assert (analysis / f"{name}.csv").exists(), name

    periodogram = pd.read_csv(analysis / "periodogram.csv")
    assert list(periodogram.columns) == ["period_years", "power"]
    assert len(periodogram) == 500

    adjusted = pd.read_csv(analysis / "adjusted_observations.csv")
    assert len(adjusted.columns) == 11

    series = pd.read_csv(analysis / "normalized_monthly_series.csv", dtype={"series": str})
    assert list(series.columns) == ["series", "year", "month", "fractional_year", "mean"]
    assert (series["series"] == "timeline").sum() == len(YEARS) * 12

    config = json.loads((analysis / "runtime_config.json").read_text())
    assert config["processor"]["n_workers"] == 2
    assert (output_dirs["logs"] / "soltemp_pipeline.log").exists()


def test_run_parquet_output(make_config, input_dir, output_dirs):
    config = make_config(INPUT_DIR=str(input_dir), OUTPUT_FORMAT="parquet")
    PipelineOrchestrator(config, output_dirs).run()

    df = pd.read_parquet(output_dirs["analysis"] / "spectrum.parquet")
    assert list(df.columns) == ["frequency_cpy", "power"]
    assert df["frequency_cpy"].iloc[0] == 0.0


def test_run_without_output_dirs_writes_nothing(pipeline_config, temp_dir):
    results = PipelineOrchestrator(pipeline_config).run()
    assert results.counts.produced_records > 0
    assert not (temp_dir / "out").exists()


def test_empty_input_dir_raises_empty_dataset(make_config, temp_dir):
    empty = temp_dir / "empty"
    empty.mkdir()
    config = make_config(INPUT_DIR=str(empty))
    with pytest.raises(EmptyDataset):
        PipelineOrchestrator(config).run()


def test_stop_is_idempotent(pipeline_config, output_dirs):
    orch = PipelineOrchestrator(pipeline_config, output_dirs)
    orch.stop()
    orch.stop()
