"""Interview scheduling engine: registration, ordering and batch runs."""

import logging
import time

from ..constants import BUDGET_MESSAGE, CONFLICT_MESSAGE
from ..exceptions import (
    DuplicateCandidateError,
    DuplicateOrganizationError,
    EngineNotInitializedError,
    InvalidCandidateError,
    InvalidOrganizationError,
)
from ..models import (
    Candidate,
    ConflictNotice,
    ConflictReason,
    Interview,
    Organization,
    ScheduleResult,
    ScheduleStatistics,
    SearchMode,
    TimeWindow,
)
from ..utils import interviews_for_candidate, sort_candidates_by_priority
from ..validators import validate_candidate, validate_organization
from .availability import AvailabilityTracker
from .config import SchedulerConfig, SchedulingRequest
from .grid import TimeGrid
from .placement import PlacementSearch
from .solver import ExhaustiveSolver

logger = logging.getLogger(__name__)


class InterviewScheduler:
    """
    Assigns interview rounds to candidates across recruiting organizations.

    A run places candidates one at a time, fewest shortlisted organizations
    first. Each candidate either gets every round of every shortlisted
    organization or none, in which case a conflict notice is recorded and the
    run moves on.

    Usage:
        scheduler = InterviewScheduler()
        scheduler.initialize(TimeWindow(540, 1020))
        scheduler.register_organization("Acme", 30, 2, 2)
        scheduler.register_candidate("S001", "Asha", ["Acme"])
        interviews, conflicts = scheduler.run()
    """

    def __init__(self, config: SchedulerConfig | None = None):
        self.config = config or SchedulerConfig()
        self.grid: TimeGrid | None = None
        self.tracker: AvailabilityTracker | None = None
        self.organizations: dict[str, Organization] = {}
        self.candidates: dict[str, Candidate] = {}
        self._schedule: list[Interview] = []
        self._last_conflicts: list[ConflictNotice] = []
        self._solver_time = 0.0

    def initialize(self, window: TimeWindow) -> None:
        """Reset all state and fix the window for the next run.

        Raises:
            InvalidTimeWindowError: If the window is empty or not divisible
                                    into slots of the configured granularity
        """
        self.grid = TimeGrid(window, self.config.granularity)
        self.tracker = AvailabilityTracker(self.grid)
        self.organizations = {}
        self.candidates = {}
        self._schedule = []
        self._last_conflicts = []
        self._solver_time = 0.0
        logger.debug(
            f"Initialized window [{window.start}, {window.end}) with "
            f"{self.grid.total_slots} slots of {self.config.granularity} min"
        )

    def register_organization(
        self, name: str, duration: int, rounds: int, panels: int
    ) -> Organization:
        """Register an organization for this run.

        Raises:
            EngineNotInitializedError: If initialize() has not been called
            DuplicateOrganizationError: If the name is already registered
            InvalidOrganizationError: If any numeric field is not positive
        """
        tracker = self._require_tracker("register an organization")

        if name in self.organizations:
            raise DuplicateOrganizationError(name)

        is_valid, error = validate_organization(name, duration, rounds, panels)
        if not is_valid:
            raise InvalidOrganizationError(name, error or "")

        organization = Organization(name, duration, rounds, panels)
        self.organizations[name] = organization
        tracker.add_organization(organization)
        logger.debug(f"Registered organization {name}: {rounds} x {duration} min, {panels} panel(s)")
        return organization

    def register_candidate(
        self, candidate_id: str, name: str, shortlist: list[str] | tuple[str, ...]
    ) -> Candidate:
        """Register a candidate with an ordered shortlist.

        Shortlisted names need not be registered yet; names still unknown at
        run time make the candidate a conflict.

        Raises:
            EngineNotInitializedError: If initialize() has not been called
            DuplicateCandidateError: If the id is already registered
            InvalidCandidateError: If the id is empty
        """
        self._require_tracker("register a candidate")

        if candidate_id in self.candidates:
            raise DuplicateCandidateError(candidate_id)

        is_valid, error = validate_candidate(candidate_id, list(shortlist))
        if not is_valid:
            raise InvalidCandidateError(candidate_id, error or "")

        candidate = Candidate(candidate_id, name, tuple(shortlist))
        self.candidates[candidate_id] = candidate
        logger.debug(f"Registered candidate {candidate_id} with {len(shortlist)} organization(s)")
        return candidate

    def load(self, request: SchedulingRequest) -> None:
        """Initialize and register everything in a request."""
        self.initialize(request.window)
        for organization in request.organizations:
            self.register_organization(
                organization.name,
                organization.duration_per_round,
                organization.num_rounds,
                organization.num_panels,
            )
        for candidate in request.candidates:
            self.register_candidate(candidate.id, candidate.name, candidate.shortlist)

    def run(self) -> tuple[list[Interview], list[ConflictNotice]]:
        """Schedule every registered candidate.

        Committed interviews accumulate across runs; call initialize()
        before each run for a clean result.

        Returns:
            Tuple of (all committed interviews, conflicts from this run)
        """
        tracker = self._require_tracker("run")
        order = sort_candidates_by_priority(list(self.candidates.values()))

        logger.info(
            f"Scheduling {len(order)} candidates across "
            f"{len(self.organizations)} organizations ({self.config.mode.value} mode)"
        )

        started = time.perf_counter()
        if self.config.mode == SearchMode.EXHAUSTIVE:
            conflicts = self._run_exhaustive(tracker, order)
        else:
            conflicts = self._run_greedy(tracker, order)
        self._solver_time = time.perf_counter() - started

        for conflict in conflicts:
            logger.warning(conflict.reason)

        self._last_conflicts = conflicts
        logger.info(
            f"Committed {len(self._schedule)} interviews, {len(conflicts)} conflict(s) "
            f"in {self._solver_time:.3f}s"
        )
        return list(self._schedule), list(conflicts)

    def _run_greedy(
        self, tracker: AvailabilityTracker, order: list[Candidate]
    ) -> list[ConflictNotice]:
        search = PlacementSearch(tracker, self.organizations, self.config.max_steps)
        conflicts = []

        for candidate in order:
            outcome = search.place(candidate)
            if outcome.success:
                tracker.seal()
                self._schedule.extend(outcome.interviews)
            else:
                conflicts.append(self._conflict(candidate, outcome.reason))

        return conflicts

    def _run_exhaustive(
        self, tracker: AvailabilityTracker, order: list[Candidate]
    ) -> list[ConflictNotice]:
        solver = ExhaustiveSolver(tracker, self.organizations, order, self.config.time_limit)
        outcome = solver.solve()
        logger.info(f"Solver finished with status {outcome.status} in {outcome.wall_time:.3f}s")

        for interview in outcome.interviews:
            tracker.commit(
                interview.organization, interview.panel, interview.student_id, interview.interval
            )
        tracker.seal()
        self._schedule.extend(outcome.interviews)

        return [self._conflict(candidate, reason) for candidate, reason in outcome.failures]

    def _conflict(self, candidate: Candidate, reason: ConflictReason | None) -> ConflictNotice:
        kind = reason or ConflictReason.NO_SLOT_AVAILABLE
        template = BUDGET_MESSAGE if kind == ConflictReason.BUDGET_EXHAUSTED else CONFLICT_MESSAGE
        return ConflictNotice(candidate.id, template.format(student_id=candidate.id), kind)

    def get_schedule(self) -> list[Interview]:
        """Get all committed interviews in commit order."""
        return list(self._schedule)

    def get_candidate_schedule(self, candidate_id: str) -> list[Interview]:
        """Get one candidate's interviews sorted by start time."""
        return interviews_for_candidate(self._schedule, candidate_id)

    def schedule(self, request: SchedulingRequest) -> ScheduleResult:
        """Run a complete request and package the result.

        Args:
            request: Window, organizations and candidates

        Returns:
            ScheduleResult with interviews, conflicts and statistics
        """
        self.load(request)
        interviews, conflicts = self.run()
        return ScheduleResult(
            interviews=interviews,
            conflicts=conflicts,
            window=request.window,
            mode=self.config.mode,
            statistics=self.get_statistics(),
        )

    def get_statistics(self) -> ScheduleStatistics:
        """Compute statistics for the current state and the last run."""
        tracker = self._require_tracker("compute statistics")
        window_minutes = self.grid.window.end - self.grid.window.start

        by_organization: dict[str, int] = {name: 0 for name in self.organizations}
        for interview in self._schedule:
            by_organization[interview.organization] = (
                by_organization.get(interview.organization, 0) + 1
            )

        panel_utilization = {
            name: round(
                tracker.booked_minutes(name) / (organization.num_panels * window_minutes), 4
            )
            for name, organization in self.organizations.items()
        }

        conflicted = {c.student_id for c in self._last_conflicts}
        return ScheduleStatistics(
            total_candidates=len(self.candidates),
            scheduled_candidates=len(self.candidates) - len(conflicted),
            total_interviews=len(self._schedule),
            total_conflicts=len(self._last_conflicts),
            by_organization=by_organization,
            panel_utilization=panel_utilization,
            solver_time_seconds=round(self._solver_time, 6),
        )

    def _require_tracker(self, operation: str) -> AvailabilityTracker:
        if self.tracker is None:
            raise EngineNotInitializedError(operation)
        return self.tracker
