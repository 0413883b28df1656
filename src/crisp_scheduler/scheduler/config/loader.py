"""Unified input loaders."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...constants import DEFAULT_WINDOW_END, DEFAULT_WINDOW_START
from ...exceptions import RequestFormatError
from ...models import Candidate, Organization, TimeWindow
from .candidates import CandidateConfig
from .organizations import OrganizationConfig


@dataclass
class SchedulingRequest:
    """Everything needed for one run: window, organizations, candidates."""

    window: TimeWindow
    organizations: list[Organization] = field(default_factory=list)
    candidates: list[Candidate] = field(default_factory=list)


class ConfigLoader:
    """Loader for a directory of scheduling input files."""

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Path to directory containing input files.
                       Expected files:
                       - organizations.csv
                       - candidates.csv
        """
        if config_dir is None:
            config_dir = Path("data")

        self.config_dir = Path(config_dir)

        self.organizations = OrganizationConfig(self._get_path("organizations.csv"))
        self.candidates = CandidateConfig(self._get_path("candidates.csv"))

    def _get_path(self, filename: str) -> Path | None:
        """Get path to config file if it exists."""
        path = self.config_dir / filename
        return path if path.exists() else None

    def to_request(self, window: TimeWindow) -> SchedulingRequest:
        """Combine the loaded files with a scheduling window."""
        return SchedulingRequest(
            window=window,
            organizations=list(self.organizations.get_all_organizations()),
            candidates=list(self.candidates.get_all_candidates()),
        )


def parse_request(data: dict[str, Any], source: str | None = None) -> SchedulingRequest:
    """Build a request from the JSON request format.

    Args:
        data: Dictionary with optional "timeSlot" and lists of
              "companies" and "students"
        source: File name for error messages

    Returns:
        SchedulingRequest

    Raises:
        RequestFormatError: If required keys are missing or values are not numeric
    """
    if not isinstance(data, dict):
        raise RequestFormatError("request must be a JSON object", source)

    time_slot = data.get("timeSlot", {})
    if not isinstance(time_slot, dict):
        raise RequestFormatError("timeSlot must be an object", source)

    try:
        window = TimeWindow(
            int(time_slot.get("startTime", DEFAULT_WINDOW_START)),
            int(time_slot.get("endTime", DEFAULT_WINDOW_END)),
        )
        organizations = [Organization.from_dict(c) for c in data.get("companies", [])]
        candidates = [Candidate.from_dict(s) for s in data.get("students", [])]
    except KeyError as e:
        raise RequestFormatError(f"missing field {e}", source) from e
    except (TypeError, ValueError) as e:
        raise RequestFormatError(str(e), source) from e

    return SchedulingRequest(window=window, organizations=organizations, candidates=candidates)


def load_request(input_path: Path | str) -> SchedulingRequest:
    """Load a scheduling request from a JSON file.

    Args:
        input_path: Path to request JSON

    Returns:
        SchedulingRequest
    """
    path = Path(input_path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RequestFormatError(f"invalid JSON: {e}", path.name) from e

    return parse_request(data, path.name)
