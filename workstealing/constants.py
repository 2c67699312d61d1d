"""
Application constants.
Centralized location for all constant values used across the application.
"""

from enum import StrEnum


class Outcome(StrEnum):
    """
    Result of offering a slice of work to an enlisted caller.

    - RECRUITED: the caller performed a meaningful amount of work
    - DISMISSED: no job was selected, or the job had nothing to do
    """

    RECRUITED = "recruited"
    DISMISSED = "dismissed"


class ErrorKind(StrEnum):
    """Why a job reported no work despite being selected."""

    CONTENTION = "contention"  # WATCHed key changed before EXEC
    STORE = "store"
    UNEXPECTED = "unexpected"


# Recruiting rates of all installed jobs must sum to at most this
MAX_TOTAL_RATE = 1.0

# Default values
DEFAULT_QUEUE_WORK_COUNT = 25
DEFAULT_REAP_BATCH_SIZE = 5

# Redis key prefixes for volatile hash fields
VHASH_MAP_PREFIX = "vhash-map"
VHASH_ZSET_PREFIX = "vhash-zset"

# Metrics names
METRIC_ENLISTMENTS = "workstealing_enlistments_total"
METRIC_JOB_INVOCATIONS = "workstealing_job_invocations_total"
METRIC_JOB_ERRORS = "workstealing_job_errors_total"
METRIC_JOB_DURATION = "workstealing_job_duration_seconds"

# Trace span names
SPAN_RECRUIT_JOB = "recruit_job"
