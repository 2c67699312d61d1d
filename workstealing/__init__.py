"""
Work Stealing

Opportunistic background maintenance: idle callers across a cluster are
randomly recruited to perform small, idempotent slices of work against a
shared Redis store, instead of dedicating a daemon to it.
"""

__version__ = "1.0.0"

from workstealing.constants import ErrorKind, Outcome  # noqa: E402
from workstealing.exceptions import (  # noqa: E402
    DuplicateIdentifier,
    InvalidRate,
    RateBudgetExceeded,
    WorkStealingError,
)
from workstealing.recruiter import Recruiter, get_recruiter  # noqa: E402
from workstealing.types.job import Job, JobResult  # noqa: E402

__all__ = [
    "Recruiter",
    "get_recruiter",
    "Job",
    "JobResult",
    "Outcome",
    "ErrorKind",
    "WorkStealingError",
    "DuplicateIdentifier",
    "InvalidRate",
    "RateBudgetExceeded",
]
