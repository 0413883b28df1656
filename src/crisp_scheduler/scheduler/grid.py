"""Discretization of the scheduling window into fixed-length slots."""

from dataclasses import dataclass

from ..constants import DEFAULT_GRANULARITY
from ..exceptions import InvalidTimeWindowError
from ..models import TimeInterval, TimeWindow
from ..validators import validate_time_window


@dataclass(frozen=True)
class TimeGrid:
    """Maps minutes inside a window to slot indices and back.

    Slot ``i`` covers ``[window.start + i * granularity, window.start + (i + 1) * granularity)``.
    """

    window: TimeWindow
    granularity: int = DEFAULT_GRANULARITY

    def __post_init__(self) -> None:
        is_valid, error = validate_time_window(
            self.window.start, self.window.end, self.granularity
        )
        if not is_valid:
            raise InvalidTimeWindowError(
                self.window.start, self.window.end, self.granularity, error or ""
            )

    @property
    def total_slots(self) -> int:
        return (self.window.end - self.window.start) // self.granularity

    def slot_index(self, minutes: int) -> int:
        """Get the slot containing a minute offset."""
        return (minutes - self.window.start) // self.granularity

    def time_of_slot(self, index: int) -> int:
        """Get the start minute of a slot."""
        return self.window.start + index * self.granularity

    def slot_range(self, interval: TimeInterval) -> range:
        """Get the slots an interval occupies.

        The end index is rounded up so a partially used slot counts as taken.
        """
        first = self.slot_index(interval.start)
        last = -((self.window.start - interval.end) // self.granularity)
        return range(first, last)

    def candidate_starts(self, cursor: int, duration: int) -> range:
        """Get aligned start times from ``cursor`` that keep ``duration`` inside the window."""
        offset = cursor - self.window.start
        if offset % self.granularity:
            offset += self.granularity - offset % self.granularity
        first = self.window.start + max(offset, 0)
        return range(first, self.window.end - duration + 1, self.granularity)
