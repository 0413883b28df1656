"""Data models for the interview scheduling engine."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class SearchMode(str, Enum):
    """Placement strategy used by the engine."""

    GREEDY = "greedy"
    EXHAUSTIVE = "exhaustive"


class ConflictReason(str, Enum):
    """Why a candidate could not be scheduled."""

    NO_SLOT_AVAILABLE = "no_slot_available"
    UNKNOWN_ORGANIZATION = "unknown_organization"
    BUDGET_EXHAUSTED = "budget_exhausted"
    INFEASIBLE = "infeasible"
    SOLVER_TIMEOUT = "solver_timeout"


@dataclass(frozen=True)
class TimeInterval:
    """A half-open span of minutes from midnight, [start, end)."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def is_well_formed(self) -> bool:
        return self.start < self.end

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check whether two intervals share any minute."""
        return not (self.end <= other.start or self.start >= other.end)

    def contains(self, other: "TimeInterval") -> bool:
        return self.start <= other.start and other.end <= self.end


# The scheduling day is just an interval with a distinct role
TimeWindow = TimeInterval


def _whole_number(value: Any, field_name: str) -> int:
    """Read an integer field from the request format without truncating."""
    if isinstance(value, bool):
        raise TypeError(f"{field_name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"{field_name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Organization:
    """A recruiting organization with sequential interview rounds."""

    name: str
    duration_per_round: int
    num_rounds: int
    num_panels: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Organization":
        """Create an Organization from the request format."""
        return cls(
            name=data["name"],
            duration_per_round=_whole_number(data["durationPerRound"], "durationPerRound"),
            num_rounds=_whole_number(data["numRounds"], "numRounds"),
            num_panels=_whole_number(data["numPanels"], "numPanels"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "durationPerRound": self.duration_per_round,
            "numRounds": self.num_rounds,
            "numPanels": self.num_panels,
        }


@dataclass(frozen=True)
class Candidate:
    """A student with an ordered shortlist of organizations."""

    id: str
    name: str
    shortlist: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Candidate":
        """Create a Candidate from the request format."""
        shortlist = data.get("shortlistedCompanies", [])
        if not isinstance(shortlist, list):
            raise TypeError(f"shortlistedCompanies must be a list, got {shortlist!r}")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            shortlist=tuple(shortlist),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "shortlistedCompanies": list(self.shortlist),
        }


@dataclass(frozen=True)
class Interview:
    """A committed interview appointment."""

    student_id: str
    organization: str
    round: int
    interval: TimeInterval
    panel: int

    @property
    def start(self) -> int:
        return self.interval.start

    @property
    def end(self) -> int:
        return self.interval.end

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Interview":
        return cls(
            student_id=data["studentId"],
            organization=data["companyName"],
            round=int(data["round"]),
            interval=TimeInterval(int(data["startTime"]), int(data["endTime"])),
            panel=int(data["panelId"]),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert interview to dictionary."""
        return {
            "studentId": self.student_id,
            "companyName": self.organization,
            "round": self.round,
            "startTime": self.interval.start,
            "endTime": self.interval.end,
            "panelId": self.panel,
        }


@dataclass(frozen=True)
class ConflictNotice:
    """A candidate whose interviews could not all be placed."""

    student_id: str
    reason: str
    kind: ConflictReason = ConflictReason.NO_SLOT_AVAILABLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "studentId": self.student_id,
            "reason": self.reason,
            "kind": self.kind.value,
        }


@dataclass
class ScheduleStatistics:
    """Statistics about the generated schedule."""

    total_candidates: int = 0
    scheduled_candidates: int = 0
    total_interviews: int = 0
    total_conflicts: int = 0
    by_organization: dict[str, int] = field(default_factory=dict)
    panel_utilization: dict[str, float] = field(default_factory=dict)
    solver_time_seconds: float = 0.0

    @property
    def success_rate(self) -> float:
        """Percentage of candidates with every interview placed."""
        if self.total_candidates == 0:
            return 100.0
        return 100.0 * self.scheduled_candidates / self.total_candidates

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalCandidates": self.total_candidates,
            "scheduledCandidates": self.scheduled_candidates,
            "totalInterviews": self.total_interviews,
            "totalConflicts": self.total_conflicts,
            "successRate": round(self.success_rate, 2),
            "byOrganization": self.by_organization,
            "panelUtilization": self.panel_utilization,
            "solverTimeSeconds": self.solver_time_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleStatistics":
        return cls(
            total_candidates=data.get("totalCandidates", 0),
            scheduled_candidates=data.get("scheduledCandidates", 0),
            total_interviews=data.get("totalInterviews", 0),
            total_conflicts=data.get("totalConflicts", 0),
            by_organization=dict(data.get("byOrganization", {})),
            panel_utilization=dict(data.get("panelUtilization", {})),
            solver_time_seconds=data.get("solverTimeSeconds", 0.0),
        )


@dataclass
class ScheduleResult:
    """Result of one scheduling run."""

    interviews: list[Interview] = field(default_factory=list)
    conflicts: list[ConflictNotice] = field(default_factory=list)
    window: TimeWindow | None = None
    mode: SearchMode = SearchMode.GREEDY
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def success(self) -> bool:
        return not self.conflicts

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "success": self.success,
            "generationDate": self.generation_date,
            "mode": self.mode.value,
            "schedule": [i.to_dict() for i in self.interviews],
            "conflicts": [c.reason for c in self.conflicts],
            "conflictDetails": [c.to_dict() for c in self.conflicts],
            "statistics": self.statistics.to_dict(),
        }
        if self.window is not None:
            data["timeSlot"] = {
                "startTime": self.window.start,
                "endTime": self.window.end,
            }
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleResult":
        """Rebuild a result from its exported dictionary."""
        window = None
        if "timeSlot" in data:
            window = TimeWindow(data["timeSlot"]["startTime"], data["timeSlot"]["endTime"])
        conflicts = [
            ConflictNotice(
                student_id=c["studentId"],
                reason=c["reason"],
                kind=ConflictReason(c.get("kind", ConflictReason.NO_SLOT_AVAILABLE.value)),
            )
            for c in data.get("conflictDetails", [])
        ]
        return cls(
            interviews=[Interview.from_dict(i) for i in data.get("schedule", [])],
            conflicts=conflicts,
            window=window,
            mode=SearchMode(data.get("mode", SearchMode.GREEDY.value)),
            statistics=ScheduleStatistics.from_dict(data.get("statistics", {})),
            generation_date=data.get("generationDate", ""),
        )
