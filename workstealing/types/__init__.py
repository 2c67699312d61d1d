"""
Type definitions for work stealing.
"""

from workstealing.types.job import Job, JobResult

__all__ = [
    "Job",
    "JobResult",
]
