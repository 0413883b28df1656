"""Utility functions for interview scheduling."""

import re
from collections import defaultdict

from .constants import MINUTES_PER_DAY
from .models import Candidate, Interview

CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def format_time(minutes: int) -> str:
    """Format minutes from midnight as a 12-hour clock string.

    Examples:
        540 -> "9:00 AM", 750 -> "12:30 PM", 0 -> "12:00 AM"

    Args:
        minutes: Minutes from midnight

    Returns:
        Time string like "9:00 AM"
    """
    hours, mins = divmod(minutes, 60)
    period = "AM" if hours < 12 else "PM"

    if hours == 0:
        hours = 12
    elif hours > 12:
        hours -= 12

    return f"{hours}:{mins:02d} {period}"


def format_range(start: int, end: int) -> str:
    """Format a start/end pair (e.g., '9:00 AM-9:30 AM')."""
    return f"{format_time(start)}-{format_time(end)}"


def parse_time(value: str | int) -> int:
    """Parse 'HH:MM' or a plain minute count into minutes from midnight.

    Args:
        value: Clock string like "09:30" or minutes like "570" / 570

    Returns:
        Minutes from midnight

    Raises:
        ValueError: If the value is not a valid time of day
    """
    if isinstance(value, int):
        minutes = value
    else:
        text = value.strip()
        match = CLOCK_PATTERN.match(text)
        if match:
            hours, mins = int(match.group(1)), int(match.group(2))
            if mins >= 60:
                raise ValueError(f"Invalid minutes in time: '{value}'")
            minutes = hours * 60 + mins
        elif text.isdigit():
            minutes = int(text)
        else:
            raise ValueError(f"Invalid time: '{value}'. Expected HH:MM or minutes")

    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValueError(f"Time out of range: '{value}'")
    return minutes


def sort_candidates_by_priority(candidates: list[Candidate]) -> list[Candidate]:
    """Sort candidates by processing priority.

    Priority order:
    1. Shortlist length (ascending) - fewest organizations first
    2. Candidate id (lexicographic) - deterministic tie-break

    Args:
        candidates: Registered candidates

    Returns:
        New list with highest priority first
    """
    return sorted(candidates, key=lambda c: (len(c.shortlist), c.id))


def parse_shortlist(value: str) -> tuple[str, ...]:
    """Split a ';'-separated shortlist cell into organization names."""
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(";") if part.strip())


def interviews_for_candidate(interviews: list[Interview], student_id: str) -> list[Interview]:
    """Get a candidate's interviews sorted by ascending start time."""
    return sorted(
        (i for i in interviews if i.student_id == student_id),
        key=lambda i: i.interval.start,
    )


def group_by_candidate(interviews: list[Interview]) -> dict[str, list[Interview]]:
    """Group interviews by candidate id.

    Keys are ordered by candidate id, each list by ascending start time.
    """
    groups: dict[str, list[Interview]] = defaultdict(list)
    for interview in interviews:
        groups[interview.student_id].append(interview)

    return {
        student_id: sorted(groups[student_id], key=lambda i: i.interval.start)
        for student_id in sorted(groups)
    }
