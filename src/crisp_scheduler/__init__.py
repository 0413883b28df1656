"""CRISP - Campus Recruitment Interview Scheduling Platform.

This module assigns interview appointments to students across recruiting
organizations, each with a fixed number of sequential rounds and a limited
number of interview panels, without ever double-booking a student or a panel.

Example usage:
    from crisp_scheduler import InterviewScheduler, load_request

    request = load_request("request.json")
    scheduler = InterviewScheduler()
    result = scheduler.schedule(request)

    print(f"Total interviews: {result.statistics.total_interviews}")
    for conflict in result.conflicts:
        print(conflict.reason)

    # Export to JSON
    from crisp_scheduler.exporters import JSONExporter
    exporter = JSONExporter()
    exporter.export(result, "schedule.json")
"""

from .exceptions import (
    DuplicateCandidateError,
    DuplicateOrganizationError,
    EngineNotInitializedError,
    InvalidCandidateError,
    InvalidOrganizationError,
    InvalidTimeWindowError,
    RequestFormatError,
    SchedulingError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter, load_result
from .models import (
    Candidate,
    ConflictNotice,
    ConflictReason,
    Interview,
    Organization,
    ScheduleResult,
    ScheduleStatistics,
    SearchMode,
    TimeInterval,
    TimeWindow,
)
from .scheduler import InterviewScheduler, SchedulerConfig, load_request

__version__ = "1.0.0"

__all__ = [
    # Main engine
    "InterviewScheduler",
    "SchedulerConfig",
    "load_request",
    # Models
    "TimeInterval",
    "TimeWindow",
    "Organization",
    "Candidate",
    "Interview",
    "ConflictNotice",
    "ConflictReason",
    "ScheduleResult",
    "ScheduleStatistics",
    "SearchMode",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    "load_result",
    # Exceptions
    "SchedulingError",
    "InvalidTimeWindowError",
    "InvalidOrganizationError",
    "DuplicateOrganizationError",
    "InvalidCandidateError",
    "DuplicateCandidateError",
    "EngineNotInitializedError",
    "RequestFormatError",
]
