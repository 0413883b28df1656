"""Configuration and input loaders for the scheduler."""

from .candidates import CandidateConfig
from .loader import ConfigLoader, SchedulingRequest, load_request, parse_request
from .organizations import OrganizationConfig
from .settings import SchedulerConfig

__all__ = [
    "ConfigLoader",
    "CandidateConfig",
    "OrganizationConfig",
    "SchedulerConfig",
    "SchedulingRequest",
    "load_request",
    "parse_request",
]
