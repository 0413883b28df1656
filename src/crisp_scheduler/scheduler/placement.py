"""Backtracking placement of one candidate's interviews."""

import logging
from dataclasses import dataclass, field

from ..models import Candidate, ConflictReason, Interview, Organization, TimeInterval
from .availability import AvailabilityTracker

logger = logging.getLogger(__name__)


class SearchBudgetExceeded(Exception):
    """Raised inside the search when the step budget runs out."""

    pass


@dataclass
class PlacementOutcome:
    """Result of placing a single candidate."""

    success: bool
    interviews: list[Interview] = field(default_factory=list)
    reason: ConflictReason | None = None
    steps: int = 0


class PlacementSearch:
    """Places every round of a candidate's shortlist, or nothing at all.

    Within an organization each round takes the first start time (from the
    end of the previous round) at which the candidate and some panel are both
    free. Earlier rounds are never moved to make room for later ones. If an
    organization cannot be fully placed, or anything after it fails, its
    bookings are rolled back and the candidate fails as a whole.
    """

    def __init__(
        self,
        tracker: AvailabilityTracker,
        organizations: dict[str, Organization],
        max_steps: int | None = None,
    ) -> None:
        self.tracker = tracker
        self.organizations = organizations
        self.max_steps = max_steps
        self._steps = 0
        self._failure: ConflictReason | None = None

    def place(self, candidate: Candidate) -> PlacementOutcome:
        """Attempt all of a candidate's interviews.

        On failure the tracker is left exactly as it was before the call.
        """
        self._steps = 0
        self._failure = None
        marker = self.tracker.checkpoint()

        try:
            interviews = self._place_from(candidate, 0)
        except SearchBudgetExceeded:
            self.tracker.rollback(marker)
            logger.debug(f"Budget of {self.max_steps} steps exhausted for {candidate.id}")
            return PlacementOutcome(
                success=False, reason=ConflictReason.BUDGET_EXHAUSTED, steps=self._steps
            )

        if interviews is None:
            return PlacementOutcome(success=False, reason=self._failure, steps=self._steps)
        return PlacementOutcome(success=True, interviews=interviews, steps=self._steps)

    def _place_from(self, candidate: Candidate, position: int) -> list[Interview] | None:
        """Place the shortlist from ``position`` onward."""
        if position >= len(candidate.shortlist):
            return []

        name = candidate.shortlist[position]
        organization = self.organizations.get(name)
        if organization is None:
            logger.warning(f"Student {candidate.id} shortlists unknown organization '{name}'")
            self._failure = ConflictReason.UNKNOWN_ORGANIZATION
            return None

        marker = self.tracker.checkpoint()
        placed = self._place_rounds(candidate.id, organization)
        if placed is None:
            self.tracker.rollback(marker)
            self._failure = ConflictReason.NO_SLOT_AVAILABLE
            return None

        rest = self._place_from(candidate, position + 1)
        if rest is None:
            # A later organization failed: undo this one too
            self.tracker.rollback(marker)
            return None

        return placed + rest

    def _place_rounds(self, student_id: str, organization: Organization) -> list[Interview] | None:
        """Place every round of one organization in order."""
        cursor = self.tracker.grid.window.start
        interviews: list[Interview] = []

        for round_number in range(1, organization.num_rounds + 1):
            interview = self._first_fit(student_id, organization, round_number, cursor)
            if interview is None:
                logger.debug(
                    f"No slot for {student_id} at {organization.name} round {round_number}"
                )
                return None
            interviews.append(interview)
            cursor = interview.interval.end

        return interviews

    def _first_fit(
        self,
        student_id: str,
        organization: Organization,
        round_number: int,
        cursor: int,
    ) -> Interview | None:
        """Commit the earliest start from ``cursor`` free for candidate and a panel."""
        duration = organization.duration_per_round

        for start in self.tracker.grid.candidate_starts(cursor, duration):
            self._tick()
            interval = TimeInterval(start, start + duration)

            if not self.tracker.is_student_free(student_id, interval):
                continue

            panel = self.tracker.find_free_panel(organization.name, interval)
            if panel is None:
                continue

            self.tracker.commit(organization.name, panel, student_id, interval)
            return Interview(
                student_id=student_id,
                organization=organization.name,
                round=round_number,
                interval=interval,
                panel=panel,
            )

        return None

    def _tick(self) -> None:
        self._steps += 1
        if self.max_steps is not None and self._steps > self.max_steps:
            raise SearchBudgetExceeded()
