"""Candidate configuration loader."""

import csv
from pathlib import Path

from ...exceptions import RequestFormatError
from ...models import Candidate
from ...utils import parse_shortlist


class CandidateConfig:
    """Loader for candidates from candidates.csv.

    The ``shortlist`` column holds organization names separated by ';',
    in the order they should be attempted.
    """

    REQUIRED_COLUMNS = ("id", "shortlist")

    def __init__(self, candidates_path: Path | None = None):
        self.candidates: list[Candidate] = []

        if candidates_path and candidates_path.exists():
            self._load(candidates_path)

    def _load(self, path: Path) -> None:
        """Load candidates from CSV file."""
        with open(path, encoding="utf-8") as f:
            reader = csv.DictReader(f)
            missing = [c for c in self.REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                raise RequestFormatError(f"missing columns: {', '.join(missing)}", path.name)

            for row in reader:
                candidate_id = row["id"].strip()
                if not candidate_id:
                    continue
                self.candidates.append(
                    Candidate(
                        id=candidate_id,
                        name=(row.get("name") or "").strip(),
                        shortlist=parse_shortlist(row["shortlist"] or ""),
                    )
                )

    def get_all_candidates(self) -> list[Candidate]:
        """Get all candidates in file order."""
        return self.candidates
