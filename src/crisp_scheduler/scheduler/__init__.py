"""Interview scheduling engine.

This package assigns interview rounds to candidates across recruiting
organizations inside a shared daily window. The default greedy search places
each round at the first free aligned start time on the lowest-numbered free
panel, rolling a candidate back entirely if any shortlisted organization
cannot be placed. An exhaustive mode solves the whole batch with CP-SAT.

Main classes:
- InterviewScheduler: Registration and batch runs
- TimeGrid: Window discretization into slots
- AvailabilityTracker: Panel occupancy and candidate bookings with undo log
- PlacementSearch: Per-candidate greedy search with rollback
- ExhaustiveSolver: CP-SAT batch placement

Usage:
    from crisp_scheduler.scheduler import InterviewScheduler
    from crisp_scheduler.models import TimeWindow

    scheduler = InterviewScheduler()
    scheduler.initialize(TimeWindow(540, 1020))
    scheduler.register_organization("Acme", 30, 2, 2)
    scheduler.register_candidate("S001", "Asha", ["Acme"])
    interviews, conflicts = scheduler.run()
"""

from .availability import AvailabilityTracker, Booking
from .config import ConfigLoader, SchedulerConfig, SchedulingRequest, load_request
from .engine import InterviewScheduler
from .grid import TimeGrid
from .placement import PlacementOutcome, PlacementSearch
from .solver import ExhaustiveSolver

__all__ = [
    # Engine
    "InterviewScheduler",
    # Building blocks
    "TimeGrid",
    "AvailabilityTracker",
    "Booking",
    "PlacementSearch",
    "PlacementOutcome",
    "ExhaustiveSolver",
    # Configuration
    "ConfigLoader",
    "SchedulerConfig",
    "SchedulingRequest",
    "load_request",
]
