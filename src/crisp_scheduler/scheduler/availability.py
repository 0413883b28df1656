"""Occupancy tracking for interview panels and candidates."""

import logging
from dataclasses import dataclass

from ..models import Organization, TimeInterval
from .grid import TimeGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Booking:
    """One undo log entry: a panel reservation paired with a candidate booking."""

    organization: str
    panel: int
    student_id: str
    interval: TimeInterval


class AvailabilityTracker:
    """Tracks which panels and candidates are busy during a run.

    This class maintains two resources and an undo log:
    - panel_occupancy: organization -> panels x slots matrix, True where reserved
    - student_bookings: candidate -> intervals booked in the current run
    - _log: stack of Booking entries, unwound by rollback()
    """

    def __init__(self, grid: TimeGrid) -> None:
        self.grid = grid
        # organization -> [panel][slot] -> occupied
        self.panel_occupancy: dict[str, list[list[bool]]] = {}
        # student_id -> intervals in booking order
        self.student_bookings: dict[str, list[TimeInterval]] = {}
        self._panel_counts: dict[str, int] = {}
        self._log: list[Booking] = []

    def add_organization(self, organization: Organization) -> None:
        """Allocate an empty occupancy matrix for an organization."""
        total_slots = self.grid.total_slots
        self.panel_occupancy[organization.name] = [
            [False] * total_slots for _ in range(organization.num_panels)
        ]
        self._panel_counts[organization.name] = organization.num_panels

    # Queries

    def is_student_free(self, student_id: str, interval: TimeInterval) -> bool:
        """Check that an interval overlaps none of the candidate's bookings."""
        for booked in self.student_bookings.get(student_id, ()):
            if interval.overlaps(booked):
                return False
        return True

    def is_panel_free(self, organization: str, panel: int, interval: TimeInterval) -> bool:
        """Check that every slot of an interval is unoccupied on a panel.

        Intervals that fall outside the grid, or are malformed, are never free.
        """
        if not interval.is_well_formed():
            return False
        slots = self.grid.slot_range(interval)
        row = self.panel_occupancy[organization][panel]
        if slots.start < 0 or slots.stop > len(row):
            return False
        return not any(row[i] for i in slots)

    def find_free_panel(self, organization: str, interval: TimeInterval) -> int | None:
        """Get the lowest-indexed panel free for the whole interval."""
        for panel in range(self._panel_counts[organization]):
            if self.is_panel_free(organization, panel, interval):
                return panel
        return None

    # Mutators

    def reserve(self, organization: str, panel: int, interval: TimeInterval) -> None:
        """Mark an interval's slots as occupied on a panel."""
        row = self.panel_occupancy[organization][panel]
        for i in self.grid.slot_range(interval):
            row[i] = True

    def release(self, organization: str, panel: int, interval: TimeInterval) -> None:
        """Clear an interval's slots on a panel. Exact inverse of reserve()."""
        row = self.panel_occupancy[organization][panel]
        for i in self.grid.slot_range(interval):
            row[i] = False

    def book_student(self, student_id: str, interval: TimeInterval) -> None:
        self.student_bookings.setdefault(student_id, []).append(interval)

    def unbook_student(self, student_id: str, interval: TimeInterval) -> None:
        """Remove the most recent booking of a candidate.

        Raises:
            ValueError: If the most recent booking is not ``interval``
        """
        bookings = self.student_bookings.get(student_id)
        if not bookings or bookings[-1] != interval:
            raise ValueError(
                f"Cannot unbook {interval} for student {student_id}: not the latest booking"
            )
        bookings.pop()

    # Undo log

    def commit(
        self, organization: str, panel: int, student_id: str, interval: TimeInterval
    ) -> Booking:
        """Reserve a panel and book the candidate, recording it for rollback."""
        self.reserve(organization, panel, interval)
        self.book_student(student_id, interval)
        booking = Booking(organization, panel, student_id, interval)
        self._log.append(booking)
        return booking

    def checkpoint(self) -> int:
        """Get a marker for the current undo log depth."""
        return len(self._log)

    def rollback(self, marker: int) -> int:
        """Undo every commit made after ``marker``, newest first.

        Returns:
            Number of bookings undone
        """
        undone = 0
        while len(self._log) > marker:
            booking = self._log.pop()
            self.release(booking.organization, booking.panel, booking.interval)
            self.unbook_student(booking.student_id, booking.interval)
            undone += 1
        if undone:
            logger.debug(f"Rolled back {undone} booking(s) to marker {marker}")
        return undone

    def booked_minutes(self, organization: str) -> int:
        """Total reserved minutes across all panels of an organization."""
        occupied = sum(sum(row) for row in self.panel_occupancy.get(organization, []))
        return occupied * self.grid.granularity

    def seal(self) -> None:
        """Make every logged commit permanent; later rollbacks cannot reach them."""
        self._log.clear()
