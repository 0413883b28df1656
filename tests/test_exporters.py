"""Tests for schedule exporters."""

import csv

import pytest
from openpyxl import load_workbook

from crisp_scheduler.exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    get_exporter,
    load_result,
)
from crisp_scheduler.scheduler import InterviewScheduler
from crisp_scheduler.scheduler.config import parse_request


@pytest.fixture
def result(sample_request_data):
    """Scheduled sample request with one conflict."""
    return InterviewScheduler().schedule(parse_request(sample_request_data))


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_round_trip(self, result, tmp_path):
        output = tmp_path / "out" / "schedule.json"
        JSONExporter().export(result, output)

        loaded = load_result(output)

        assert loaded.interviews == result.interviews
        assert loaded.conflicts == result.conflicts
        assert loaded.window == result.window
        assert loaded.statistics.total_interviews == result.statistics.total_interviews


class TestCSVExporter:
    """Tests for CSVExporter."""

    def test_writes_three_files(self, result, tmp_path):
        CSVExporter().export(result, tmp_path / "csv")

        with open(tmp_path / "csv" / "interviews.csv", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == len(result.interviews)
        assert rows[0]["start"] == "9:00 AM"
        assert rows[0]["start_minutes"] == "540"
        assert {row["panel"] for row in rows} <= {"1", "2"}

        with open(tmp_path / "csv" / "conflicts.csv", encoding="utf-8") as f:
            conflicts = list(csv.DictReader(f))
        assert [c["studentId"] for c in conflicts] == ["S003"]

        assert (tmp_path / "csv" / "summary.csv").exists()

    def test_empty_result_has_headers(self, tmp_path):
        engine = InterviewScheduler()
        result = engine.schedule(parse_request({"companies": [], "students": []}))

        CSVExporter().export(result, tmp_path)

        header = (tmp_path / "conflicts.csv").read_text(encoding="utf-8").splitlines()
        assert header == ["studentId,reason,kind"]


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_sheets(self, result, tmp_path):
        output = tmp_path / "schedule.xlsx"
        ExcelExporter().export(result, output)

        workbook = load_workbook(output)
        assert workbook.sheetnames == ["Interviews", "Conflicts", "Summary"]

        sheet = workbook["Interviews"]
        header = [cell.value for cell in sheet[1]]
        assert header[:3] == ["Student", "Organization", "Round"]
        assert sheet[1][0].font.bold
        assert sheet.max_row == len(result.interviews) + 1


class TestGetExporter:
    """Tests for get_exporter."""

    @pytest.mark.parametrize(
        "format_type,cls",
        [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)],
    )
    def test_known_formats(self, format_type, cls):
        assert isinstance(get_exporter(format_type), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("pdf")
