"""Custom exceptions for the interview scheduler."""


class SchedulingError(Exception):
    """Base exception for scheduling configuration errors."""

    pass


class InvalidTimeWindowError(SchedulingError):
    """Scheduling window or granularity is unusable."""

    def __init__(self, start: int, end: int, granularity: int, reason: str):
        self.start = start
        self.end = end
        self.granularity = granularity
        super().__init__(
            f"Invalid time window [{start}, {end}) with granularity {granularity}: {reason}"
        )


class InvalidOrganizationError(SchedulingError):
    """Organization fields failed validation."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"Invalid organization '{name}': {message}")


class DuplicateOrganizationError(SchedulingError):
    """Organization name already registered in this run."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Organization '{name}' is already registered")


class InvalidCandidateError(SchedulingError):
    """Candidate fields failed validation."""

    def __init__(self, candidate_id: str, message: str):
        self.candidate_id = candidate_id
        super().__init__(f"Invalid candidate '{candidate_id}': {message}")


class DuplicateCandidateError(SchedulingError):
    """Candidate id already registered in this run."""

    def __init__(self, candidate_id: str):
        self.candidate_id = candidate_id
        super().__init__(f"Candidate '{candidate_id}' is already registered")


class EngineNotInitializedError(SchedulingError):
    """A mutator was called before initialize()."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation} before the scheduler is initialized")


class RequestFormatError(SchedulingError):
    """Request or configuration file is malformed."""

    def __init__(self, message: str, source: str | None = None, row: int | None = None):
        self.source = source
        self.row = row
        location = ""
        if source:
            location += f" in '{source}'"
        if row is not None:
            location += f" at row {row}"
        super().__init__(f"Malformed input{location}: {message}")
