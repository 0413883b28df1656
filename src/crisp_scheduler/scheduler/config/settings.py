"""Run settings for the scheduler."""

from dataclasses import dataclass

from ...constants import DEFAULT_GRANULARITY, DEFAULT_TIME_LIMIT
from ...models import SearchMode


@dataclass
class SchedulerConfig:
    """Configuration for one scheduling run.

    Attributes:
        granularity: Slot length in minutes; start times are aligned to it
        mode: GREEDY reproduces first-fit placement with shortlist-level
              rollback, EXHAUSTIVE solves the whole batch with CP-SAT
        max_steps: Start times a single candidate may examine before it is
                   reported as a conflict (None = unbounded, greedy only)
        time_limit: Solver wall clock limit in seconds (exhaustive only)
    """

    granularity: int = DEFAULT_GRANULARITY
    mode: SearchMode = SearchMode.GREEDY
    max_steps: int | None = None
    time_limit: int = DEFAULT_TIME_LIMIT

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")
        if self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")
