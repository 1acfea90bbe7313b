"""Tests for report formatters."""

import csv
import io
import json

import pytest
from rich.console import Console

from less_census.formatters import (
    SUMMARY_FILENAME,
    CsvFormatter,
    JsonFormatter,
    RichFormatter,
    TxtFormatter,
    get_formatter,
)
from less_census.scanning.counters import SECTIONS, CounterStore
from less_census.scanning.models import CensusResult, ScanFailure
from less_census.stats import summarize

RANKED = [("color", 3), ("width", 1), ("z-index", 1)]


@pytest.fixture
def store():
    store = CounterStore()
    for key in ["width", "color", "color", "z-index", "color"]:
        store.incr("properties", key)
    store.incr("colors", "#f00")
    return store


@pytest.fixture
def result(store):
    return CensusResult(
        counters=store,
        files_dispatched=3,
        files_parsed=2,
        failures=[ScanFailure("broken.less", "Failed to parse [bad]")],
        per_worker={1: 1, 0: 2},
        missing=["gone.less"],
        elapsed_seconds=0.25,
    )


class TestSectionFormats:
    """One section rendered in each file format."""

    def test_json(self):
        assert json.loads(JsonFormatter().format(RANKED)) == [
            ["color", 3],
            ["width", 1],
            ["z-index", 1],
        ]

    def test_json_empty(self):
        assert json.loads(JsonFormatter().format([])) == []

    def test_csv(self):
        text = CsvFormatter().format(RANKED)
        assert text.splitlines()[0] == "key,count"
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1:] == [["color", "3"], ["width", "1"], ["z-index", "1"]]

    def test_csv_quotes_keys_with_commas(self):
        text = CsvFormatter().format([('"Helvetica Neue", Arial', 1)])
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1] == ['"Helvetica Neue", Arial', "1"]

    def test_txt(self):
        assert TxtFormatter().format(RANKED) == "3\tcolor\n1\twidth\n1\tz-index\n"

    def test_get_formatter(self):
        assert isinstance(get_formatter("csv"), CsvFormatter)
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestWrite:
    """Writing a report directory."""

    @pytest.mark.parametrize("name", ["json", "csv", "txt"])
    def test_one_file_per_section(self, store, tmp_path, name):
        formatter = get_formatter(name)
        written = formatter.write(store, tmp_path / "report")
        assert [p.name for p in written] == [f"{s}.{name}" for s in SECTIONS]
        assert all(p.exists() for p in written)

    def test_sections_are_ranked(self, store, tmp_path):
        TxtFormatter().write(store, tmp_path)
        lines = (tmp_path / "properties.txt").read_text().splitlines()
        assert lines == ["3\tcolor", "1\twidth", "1\tz-index"]
        assert (tmp_path / "ratios.txt").read_text() == ""

    def test_summary_file(self, store, tmp_path):
        written = JsonFormatter().write(store, tmp_path, summarize(store, top=1))
        assert written[-1].name == SUMMARY_FILENAME
        data = json.loads((tmp_path / SUMMARY_FILENAME).read_text())
        assert data["properties"]["total"] == 5
        assert data["properties"]["top"] == [["color", 3]]


class TestJsonResult:
    def test_whole_run(self, result, store):
        data = json.loads(JsonFormatter().format_result(result, summarize(store)))
        assert data["files_dispatched"] == 3
        assert data["files_parsed"] == 2
        assert data["failures"] == [{"path": "broken.less", "reason": "Failed to parse [bad]"}]
        assert data["missing"] == ["gone.less"]
        assert data["per_worker"] == {"0": 2, "1": 1}
        assert data["counters"]["properties"] == [["color", 3], ["width", 1], ["z-index", 1]]
        assert list(data["counters"]) == list(SECTIONS)
        assert data["summary"]["colors"]["distinct"] == 1

    def test_without_summary(self, result):
        data = json.loads(JsonFormatter().format_result(result))
        assert "summary" not in data


class TestRichFormatter:
    """Console rendering."""

    def render(self, result, store, top=10):
        console = Console(record=True, width=120, color_system=None)
        RichFormatter(console).render(result, summarize(store, top=top), top=top)
        return console.export_text()

    def test_overview_and_sections(self, result, store):
        text = self.render(result, store)
        assert "LESS CENSUS" in text
        assert "Missing paths" in text
        assert "properties" in text
        assert "color" in text

    def test_failures_listed_with_markup_escaped(self, result, store):
        text = self.render(result, store)
        assert "Skipped 1 file(s)" in text
        assert "Failed to parse [bad]" in text

    def test_top_zero_hides_key_tables(self, result, store):
        text = self.render(result, store, top=0)
        assert "(top" not in text
