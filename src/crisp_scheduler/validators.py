"""Validation logic for scheduling inputs."""


def validate_time_window(start: int, end: int, granularity: int) -> tuple[bool, str | None]:
    """Validate the scheduling window against the slot granularity.

    Args:
        start: Window start in minutes from midnight
        end: Window end in minutes from midnight
        granularity: Slot length in minutes

    Returns:
        Tuple of (is_valid, error_message)
    """
    if granularity <= 0:
        return False, f"Granularity must be positive, got {granularity}"

    if start < 0:
        return False, f"Window start must not be negative, got {start}"

    if start >= end:
        return False, "Window is empty: start must be before end"

    if (end - start) % granularity != 0:
        return False, (
            f"Granularity {granularity} does not divide window length {end - start}"
        )

    return True, None


def validate_organization(
    name: str, duration: int, rounds: int, panels: int
) -> tuple[bool, str | None]:
    """Validate organization fields.

    Args:
        name: Organization name
        duration: Minutes per round
        rounds: Number of sequential rounds
        panels: Number of parallel panels

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not str(name).strip():
        return False, "Organization name is empty"

    for field_name, value in (
        ("durationPerRound", duration),
        ("numRounds", rounds),
        ("numPanels", panels),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            return False, f"{field_name} must be an integer, got {value!r}"
        if value <= 0:
            return False, f"{field_name} must be positive, got {value}"

    return True, None


def validate_candidate(candidate_id: str, shortlist: list[str]) -> tuple[bool, str | None]:
    """Validate candidate fields.

    Unknown organization names in the shortlist are not an error here;
    they surface as a conflict when the candidate is placed.

    Args:
        candidate_id: Candidate id (roll number)
        shortlist: Ordered organization names

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not candidate_id or not str(candidate_id).strip():
        return False, "Candidate id is empty"

    for entry in shortlist:
        if not isinstance(entry, str):
            return False, f"Shortlist entries must be names, got {entry!r}"

    return True, None
