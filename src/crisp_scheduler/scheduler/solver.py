"""Exhaustive batch placement using the OR-Tools CP-SAT solver."""

import logging
from dataclasses import dataclass, field

from ortools.sat.python import cp_model

from ..constants import SOLVER_RANDOM_SEED
from ..models import Candidate, ConflictReason, Interview, Organization, TimeInterval
from .availability import AvailabilityTracker

logger = logging.getLogger(__name__)


@dataclass
class SolverOutcome:
    """Interviews and failures produced by one solve."""

    interviews: list[Interview] = field(default_factory=list)
    failures: list[tuple[Candidate, ConflictReason]] = field(default_factory=list)
    status: str = "UNKNOWN"
    wall_time: float = 0.0


class ExhaustiveSolver:
    """Places the whole batch at once, maximizing fully scheduled candidates.

    Uses the same rules as the greedy search: aligned start times inside the
    window, rounds of an organization in order, one interview per panel at a
    time, no overlapping interviews for a candidate, and all-or-nothing per
    candidate. Bookings already held by the tracker are treated as fixed.
    Ties between equally good schedules prefer earlier start times.
    """

    def __init__(
        self,
        tracker: AvailabilityTracker,
        organizations: dict[str, Organization],
        candidates: list[Candidate],
        time_limit: int,
    ):
        self.tracker = tracker
        self.grid = tracker.grid
        self.organizations = organizations
        self.candidates = candidates
        self.time_limit = time_limit

        self.model = cp_model.CpModel()
        # candidate id -> presence literal
        self.placed: dict[str, cp_model.IntVar] = {}
        # (candidate id, shortlist position, round) -> start variable
        self.starts: dict[tuple[str, int, int], cp_model.IntVar] = {}
        # (candidate id, shortlist position, round) -> one literal per panel
        self.panels: dict[tuple[str, int, int], list[cp_model.IntVar]] = {}
        self._rejected: dict[str, ConflictReason] = {}

    def solve(self) -> SolverOutcome:
        """Build the model, solve it and extract the schedule."""
        self._build()
        if not self.placed:
            return SolverOutcome(
                failures=[(c, self._rejected[c.id]) for c in self.candidates],
                status="OPTIMAL",
            )

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.time_limit
        solver.parameters.num_workers = 1
        solver.parameters.random_seed = SOLVER_RANDOM_SEED
        solver.parameters.log_search_progress = False

        logger.info(f"Solving {len(self.placed)} candidates with {self.time_limit}s time limit")
        status = solver.Solve(self.model)
        status_name = solver.StatusName(status)

        if status in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            if status == cp_model.FEASIBLE:
                logger.info("Found feasible solution (may not be optimal)")
            outcome = self._extract(solver)
        else:
            logger.warning(f"Solver returned status: {status_name}")
            reason = (
                ConflictReason.INFEASIBLE
                if status == cp_model.INFEASIBLE
                else ConflictReason.SOLVER_TIMEOUT
            )
            outcome = SolverOutcome(
                failures=[
                    (c, self._rejected.get(c.id, reason)) for c in self.candidates
                ]
            )

        outcome.status = status_name
        outcome.wall_time = solver.WallTime()
        return outcome

    def _build(self) -> None:
        window = self.grid.window
        student_intervals: dict[str, list[cp_model.IntervalVar]] = {}
        panel_intervals: dict[tuple[str, int], list[cp_model.IntervalVar]] = {}
        objective_starts: list[cp_model.IntVar] = []

        for candidate in self.candidates:
            reason = self._precheck(candidate)
            if reason is not None:
                self._rejected[candidate.id] = reason
                continue

            placed = self.model.NewBoolVar(f"placed_{candidate.id}")
            self.placed[candidate.id] = placed
            intervals = student_intervals.setdefault(candidate.id, [])

            for position, name in enumerate(candidate.shortlist):
                organization = self.organizations[name]
                duration = organization.duration_per_round
                domain = cp_model.Domain.FromValues(
                    list(self.grid.candidate_starts(window.start, duration))
                )
                previous_end = None

                for round_number in range(1, organization.num_rounds + 1):
                    key = (candidate.id, position, round_number)
                    suffix = f"{candidate.id}_{position}_{round_number}"
                    start = self.model.NewIntVarFromDomain(domain, f"start_{suffix}")
                    end = start + duration
                    intervals.append(
                        self.model.NewOptionalFixedSizeIntervalVar(
                            start, duration, placed, f"student_{suffix}"
                        )
                    )

                    if previous_end is not None:
                        self.model.Add(start >= previous_end).OnlyEnforceIf(placed)
                    previous_end = end

                    literals = []
                    for panel in range(organization.num_panels):
                        literal = self.model.NewBoolVar(f"panel_{suffix}_{panel}")
                        literals.append(literal)
                        panel_intervals.setdefault((name, panel), []).append(
                            self.model.NewOptionalFixedSizeIntervalVar(
                                start, duration, literal, f"panel_{suffix}_{panel}"
                            )
                        )
                    self.model.Add(sum(literals) == placed)

                    self.starts[key] = start
                    self.panels[key] = literals
                    objective_starts.append(start)

        self._add_existing_bookings(student_intervals, panel_intervals)

        for intervals in student_intervals.values():
            self.model.AddNoOverlap(intervals)
        for intervals in panel_intervals.values():
            self.model.AddNoOverlap(intervals)

        # One more placed candidate outweighs any shift of start times
        shift_bound = sum(window.end - window.start for _ in objective_starts) + 1
        self.model.Maximize(
            shift_bound * sum(self.placed.values())
            - sum(s - window.start for s in objective_starts)
        )

    def _precheck(self, candidate: Candidate) -> ConflictReason | None:
        """Reject candidates that cannot be placed under any schedule."""
        window = self.grid.window
        for name in candidate.shortlist:
            organization = self.organizations.get(name)
            if organization is None:
                logger.warning(f"Student {candidate.id} shortlists unknown organization '{name}'")
                return ConflictReason.UNKNOWN_ORGANIZATION
            total = organization.duration_per_round * organization.num_rounds
            if total > window.end - window.start:
                return ConflictReason.NO_SLOT_AVAILABLE
        return None

    def _add_existing_bookings(
        self,
        student_intervals: dict[str, list[cp_model.IntervalVar]],
        panel_intervals: dict[tuple[str, int], list[cp_model.IntervalVar]],
    ) -> None:
        """Add bookings from earlier runs as fixed intervals."""
        for student_id, intervals in student_intervals.items():
            for booked in self.tracker.student_bookings.get(student_id, []):
                intervals.append(
                    self.model.NewFixedSizeIntervalVar(
                        booked.start, booked.duration, f"booked_{student_id}_{booked.start}"
                    )
                )

        for (name, panel), intervals in panel_intervals.items():
            for busy in self._occupied_runs(name, panel):
                intervals.append(
                    self.model.NewFixedSizeIntervalVar(
                        busy.start, busy.duration, f"busy_{name}_{panel}_{busy.start}"
                    )
                )

    def _occupied_runs(self, organization: str, panel: int) -> list[TimeInterval]:
        """Collapse a panel's occupied slots into maximal intervals."""
        runs = []
        row = self.tracker.panel_occupancy[organization][panel]
        first = None
        for index, occupied in enumerate(row + [False]):
            if occupied and first is None:
                first = index
            elif not occupied and first is not None:
                runs.append(
                    TimeInterval(self.grid.time_of_slot(first), self.grid.time_of_slot(index))
                )
                first = None
        return runs

    def _extract(self, solver: cp_model.CpSolver) -> SolverOutcome:
        """Read interviews in candidate, shortlist and round order."""
        outcome = SolverOutcome()

        for candidate in self.candidates:
            placed = self.placed.get(candidate.id)
            if placed is None:
                outcome.failures.append((candidate, self._rejected[candidate.id]))
                continue
            if not solver.BooleanValue(placed):
                outcome.failures.append((candidate, ConflictReason.NO_SLOT_AVAILABLE))
                continue

            for position, name in enumerate(candidate.shortlist):
                organization = self.organizations[name]
                for round_number in range(1, organization.num_rounds + 1):
                    key = (candidate.id, position, round_number)
                    start = solver.Value(self.starts[key])
                    panel = next(
                        i for i, lit in enumerate(self.panels[key]) if solver.BooleanValue(lit)
                    )
                    outcome.interviews.append(
                        Interview(
                            student_id=candidate.id,
                            organization=name,
                            round=round_number,
                            interval=TimeInterval(start, start + organization.duration_per_round),
                            panel=panel,
                        )
                    )

        return outcome
