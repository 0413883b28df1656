"""Export functionality for schedule results."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd
from openpyxl.styles import Font

from .models import ScheduleResult
from .utils import format_time

FONT_HEADER = Font(bold=True)


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to file.

        Args:
            result: ScheduleResult to export
            output_path: Path to output file or directory
        """
        pass


def _interview_rows(result: ScheduleResult) -> list[dict]:
    return [
        {
            "student_id": i.student_id,
            "organization": i.organization,
            "round": i.round,
            "start": format_time(i.interval.start),
            "end": format_time(i.interval.end),
            "start_minutes": i.interval.start,
            "end_minutes": i.interval.end,
            # Panels are numbered from 1 for people
            "panel": i.panel + 1,
        }
        for i in result.interviews
    ]


def _summary_rows(result: ScheduleResult) -> list[dict]:
    stats = result.statistics
    rows = [
        {"metric": "generation_date", "value": result.generation_date},
        {"metric": "mode", "value": result.mode.value},
        {"metric": "total_candidates", "value": stats.total_candidates},
        {"metric": "scheduled_candidates", "value": stats.scheduled_candidates},
        {"metric": "total_interviews", "value": stats.total_interviews},
        {"metric": "total_conflicts", "value": stats.total_conflicts},
        {"metric": "success_rate", "value": round(stats.success_rate, 2)},
    ]
    for name, utilization in stats.panel_utilization.items():
        rows.append({"metric": f"panel_utilization:{name}", "value": utilization})
    return rows


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to CSV files.

        Creates three files:
        - interviews.csv: All committed interviews
        - conflicts.csv: Candidates that could not be scheduled
        - summary.csv: Overall statistics

        Args:
            result: ScheduleResult to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(
            output_dir / "interviews.csv",
            _interview_rows(result),
            ["student_id", "organization", "round", "start", "end",
             "start_minutes", "end_minutes", "panel"],
        )
        self._write_csv(
            output_dir / "conflicts.csv",
            [c.to_dict() for c in result.conflicts],
            ["studentId", "reason", "kind"],
        )
        self._write_csv(output_dir / "summary.csv", _summary_rows(result), ["metric", "value"])

    def _write_csv(self, output_path: Path, rows: list[dict], fieldnames: list[str]) -> None:
        """Write rows to CSV file; a header is written even with no rows."""
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to Excel file.

        Creates workbook with sheets:
        - Interviews: All interviews, sorted by student then start time
        - Conflicts: Conflict notices
        - Summary: Overall statistics

        Args:
            result: ScheduleResult to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        interviews = pd.DataFrame(
            _interview_rows(result),
            columns=["student_id", "organization", "round", "start", "end",
                     "start_minutes", "end_minutes", "panel"],
        )
        interviews = interviews.sort_values(
            ["student_id", "start_minutes"], kind="stable"
        ).rename(
            columns={
                "student_id": "Student",
                "organization": "Organization",
                "round": "Round",
                "start": "Start",
                "end": "End",
                "start_minutes": "Start (min)",
                "end_minutes": "End (min)",
                "panel": "Panel",
            }
        )

        conflicts = pd.DataFrame(
            [{"Student": c.student_id, "Reason": c.reason, "Kind": c.kind.value}
             for c in result.conflicts],
            columns=["Student", "Reason", "Kind"],
        )
        summary = pd.DataFrame(
            [{"Metric": r["metric"], "Value": r["value"]} for r in _summary_rows(result)]
        )

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            interviews.to_excel(writer, sheet_name="Interviews", index=False)
            conflicts.to_excel(writer, sheet_name="Conflicts", index=False)
            summary.to_excel(writer, sheet_name="Summary", index=False)

            for sheet in writer.sheets.values():
                for cell in sheet[1]:
                    cell.font = FONT_HEADER


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()


def load_result(input_path: Path | str) -> ScheduleResult:
    """Load a schedule result exported as JSON."""
    with open(input_path, encoding="utf-8") as f:
        return ScheduleResult.from_dict(json.load(f))
