"""Tests for line parsing and the ingestion pipeline."""

import pytest

from soltemp.errors import ParseFailure
from soltemp.pipeline.ingest import IngestionPipeline, parse_line, records_to_dataframe
from soltemp.records import RawObservation
from soltemp.solar.corrector import TemperatureCorrector

pytestmark = pytest.mark.unit

ADJUSTED_TABLE_COLUMNS = [
    "year", "month", "day", "hour_utc", "temp_raw_C", "lat_deg", "lon_deg",
    "G0h_Wm2", "G0h_mean_Wm2", "correction_C", "temp_adj_C",
]


@pytest.fixture
def pipeline():
    return IngestionPipeline(TemperatureCorrector())


class TestParseLine:

    def test_reference_line(self, reference_line):
        obs = parse_line(reference_line)
        assert obs == RawObservation(1958, 6, 21, 12, 17.0, 57.7607, 12.9468)

    def test_trailing_newline_and_spaces(self):
        obs = parse_line(" 1958 ; 6;21;12;-3.5;57.7;12.9\n")
        assert obs.temperature_c == -3.5
        assert obs.month == 6

    def test_other_delimiter(self):
        obs = parse_line("1958,6,21,12,17.0,57.7,12.9", delimiter=",")
        assert obs.year == 1958

    @pytest.mark.parametrize("line", [
        "1958;06;21;12;17.0;57.7607",
        "1958;06;21;12;17.0;57.7607;12.9468;extra",
        "1958;06;21;12;warm;57.7607;12.9468",
        "1958;June;21;12;17.0;57.7607;12.9468",
        "1958;06;21;12.5;17.0;57.7607;12.9468",
        "1958;06;21;12;nan;57.7607;12.9468",
        "1958;06;21;12;17.0;inf;12.9468",
        "",
    ])
    def test_malformed_lines_raise(self, line):
        with pytest.raises(ParseFailure):
            parse_line(line)


class TestIngestionPipeline:

    def test_good_lines_produce_records(self, pipeline, reference_line):
        records = pipeline.run([reference_line, "1958;06;22;12;18.0;57.7607;12.9468"])

        assert len(records) == 2
        assert pipeline.total_lines == 2
        assert pipeline.produced_records == 2
        assert pipeline.bad_lines == 0
        assert pipeline.rejected_records == 0

    def test_bad_lines_are_counted_and_skipped(self, pipeline, reference_line):
        lines = [
            reference_line,
            "garbage",
            "1958;06;21;12;x;57.7607;12.9468",
            reference_line,
        ]
        records = pipeline.run(lines)

        assert len(records) == 2
        assert pipeline.bad_lines == 2
        assert pipeline.total_lines == 4

    def test_geometry_failures_are_rejected(self, pipeline, reference_line):
        lines = [
            reference_line,
            "1958;02;30;12;1.0;57.7607;12.9468",   # no such date
            "1958;06;21;24;1.0;57.7607;12.9468",   # hour out of range
            "1958;06;21;12;1.0;95.0;12.9468",      # latitude out of range
        ]
        pipeline.run(lines)

        assert pipeline.produced_records == 1
        assert pipeline.rejected_records == 3
        assert pipeline.bad_lines == 0

    def test_blank_lines_ignored(self, pipeline, reference_line):
        pipeline.run(["", reference_line, "   \n", "\n"])
        assert pipeline.total_lines == 1
        assert pipeline.produced_records == 1

    def test_counts_balance_across_runs(self, pipeline, reference_line):
        pipeline.run([reference_line, "bad", "1958;13;01;12;1.0;57.0;12.0"], source="a.csv")
        pipeline.run(["1958;06;21;06;5.0;57.0;12.0", "1;2;3"], source="b.csv")

        assert pipeline.total_lines == 5
        assert pipeline.total_lines == (
            pipeline.bad_lines + pipeline.rejected_records + pipeline.produced_records
        )
        assert len(pipeline.records) == pipeline.produced_records == 2

    def test_empty_input(self, pipeline):
        assert pipeline.run([]) == []
        assert pipeline.total_lines == 0
        assert list(pipeline.to_dataframe().columns) == ADJUSTED_TABLE_COLUMNS
        assert pipeline.to_dataframe().empty

    def test_to_dataframe_columns(self, pipeline, reference_line):
        pipeline.run([reference_line])
        df = pipeline.to_dataframe()

        assert list(df.columns) == ADJUSTED_TABLE_COLUMNS
        assert len(df) == 1
        row = df.iloc[0]
        assert row["temp_raw_C"] == 17.0
        assert row["temp_adj_C"] == pytest.approx(row["temp_raw_C"] - row["correction_C"])

    def test_records_to_dataframe_keeps_order(self, pipeline):
        records = pipeline.run([
            "1958;06;22;12;18.0;57.7607;12.9468",
            "1958;06;21;12;17.0;57.7607;12.9468",
        ])
        df = records_to_dataframe(records)
        assert df["day"].tolist() == [22, 21]


def failing_source(good_line, n_good):
    for _ in range(n_good):
        yield good_line
    raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


class TestFailedSource:

    def test_counters_restored_when_source_fails(self, pipeline, reference_line):
        pipeline.run([reference_line, "bad"])

        with pytest.raises(UnicodeDecodeError):
            pipeline.run(failing_source(reference_line, 3), source="broken.csv")

        assert (pipeline.total_lines, pipeline.bad_lines,
                pipeline.rejected_records, pipeline.produced_records) == (2, 1, 0, 1)
        assert len(pipeline.records) == 1

    def test_keep_records_off(self, reference_line):
        pipeline = IngestionPipeline(TemperatureCorrector(), keep_records=False)
        produced = pipeline.run([reference_line])

        assert len(produced) == 1
        assert pipeline.produced_records == 1
        assert pipeline.records == []
