"""Test fixtures for interview scheduler tests."""

import csv
import json

import pytest

from crisp_scheduler.models import TimeWindow
from crisp_scheduler.scheduler import InterviewScheduler, SchedulerConfig


@pytest.fixture
def day_window():
    """09:00 - 17:00."""
    return TimeWindow(540, 1020)


@pytest.fixture
def scheduler(day_window):
    """Greedy scheduler initialized with the default day window."""
    engine = InterviewScheduler()
    engine.initialize(day_window)
    return engine


@pytest.fixture
def make_scheduler(day_window):
    """Factory for initialized schedulers with custom settings."""

    def _make(window=None, **settings):
        engine = InterviewScheduler(SchedulerConfig(**settings))
        engine.initialize(window or day_window)
        return engine

    return _make


@pytest.fixture
def sample_request_data():
    """Request in the JSON API format."""
    return {
        "timeSlot": {"startTime": 540, "endTime": 1020},
        "companies": [
            {"name": "Acme", "durationPerRound": 30, "numRounds": 2, "numPanels": 2},
            {"name": "Globex", "durationPerRound": 45, "numRounds": 1, "numPanels": 1},
        ],
        "students": [
            {"id": "S001", "name": "Asha Rao", "shortlistedCompanies": ["Acme", "Globex"]},
            {"id": "S002", "name": "Ben Ortiz", "shortlistedCompanies": ["Globex"]},
            {"id": "S003", "name": "Chen Li", "shortlistedCompanies": ["Acme", "Initech"]},
        ],
    }


@pytest.fixture
def request_file(tmp_path, sample_request_data):
    """Write the sample request to a temporary JSON file."""
    file_path = tmp_path / "request.json"
    file_path.write_text(json.dumps(sample_request_data), encoding="utf-8")
    return file_path


@pytest.fixture
def config_dir(tmp_path):
    """Directory with organizations.csv and candidates.csv."""
    directory = tmp_path / "data"
    directory.mkdir()

    with open(directory / "organizations.csv", "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(
            f, fieldnames=["name", "duration_per_round", "num_rounds", "num_panels"]
        )
        writer.writeheader()
        writer.writerows(
            [
                {"name": "Acme", "duration_per_round": "30", "num_rounds": "2", "num_panels": "1"},
                {"name": "Globex", "duration_per_round": "60", "num_rounds": "1", "num_panels": "2"},
            ]
        )

    with open(directory / "candidates.csv", "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["id", "name", "shortlist"])
        writer.writeheader()
        writer.writerows(
            [
                {"id": "S001", "name": "Asha Rao", "shortlist": "Acme; Globex"},
                {"id": "S002", "name": "Ben Ortiz", "shortlist": "Globex"},
            ]
        )

    return directory
