"""
Configuration errors raised while installing jobs with a Recruiter.

Nothing here is raised at steady state: enlisting never fails, it only
reports that no work was done.
"""


class WorkStealingError(Exception):
    """Base class for work stealing errors."""


class DuplicateIdentifier(WorkStealingError, ValueError):
    """A job with the same identifier is already installed."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f'Job "{job_id}" already registered')


class InvalidRate(WorkStealingError, ValueError):
    """Recruiting rate is not a number in (0, 1]."""

    def __init__(self, job_id: str, rate: float):
        self.job_id = job_id
        self.rate = rate
        super().__init__(f'Job "{job_id}" recruiting rate {rate} must be in (0, 1]')


class RateBudgetExceeded(WorkStealingError, ValueError):
    """Installing the job would push the total recruiting rate over 1.0."""

    def __init__(self, job_id: str, rate: float, total: float):
        self.job_id = job_id
        self.rate = rate
        self.total = total
        super().__init__(
            f'Job "{job_id}" recruiting rate {rate} will exceed max. rate of 1.0 '
            f"(total would be {total})"
        )
