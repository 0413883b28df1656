"""Organization configuration loader."""

import csv
from pathlib import Path

from ...exceptions import RequestFormatError
from ...models import Organization


class OrganizationConfig:
    """Loader for organizations from organizations.csv."""

    REQUIRED_COLUMNS = ("name", "duration_per_round", "num_rounds", "num_panels")

    def __init__(self, organizations_path: Path | None = None):
        self.organizations: list[Organization] = []
        self._by_name: dict[str, Organization] = {}

        if organizations_path and organizations_path.exists():
            self._load(organizations_path)

    def _load(self, path: Path) -> None:
        """Load organizations from CSV file."""
        with open(path, encoding="utf-8") as f:
            reader = csv.DictReader(f)
            missing = [c for c in self.REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                raise RequestFormatError(f"missing columns: {', '.join(missing)}", path.name)

            # Row 1 is the header
            for row_number, row in enumerate(reader, start=2):
                name = row["name"].strip()
                if not name:
                    continue
                try:
                    organization = Organization(
                        name=name,
                        duration_per_round=int(row["duration_per_round"]),
                        num_rounds=int(row["num_rounds"]),
                        num_panels=int(row["num_panels"]),
                    )
                except ValueError as e:
                    raise RequestFormatError(str(e), path.name, row_number) from e

                self.organizations.append(organization)
                self._by_name[organization.name] = organization

    def get_organization(self, name: str) -> Organization | None:
        """Get an organization by name."""
        return self._by_name.get(name)

    def get_all_organizations(self) -> list[Organization]:
        """Get all organizations in file order."""
        return self.organizations
