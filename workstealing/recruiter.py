"""
Recruiter: weighted random dispatch of work stealing jobs.

Jobs are installed with an identifier and a recruiting rate. Each rate
claims a disjoint slice of [0, 1), in installation order; whatever is left
over is the chance an enlisted caller is not recruited at all. Over many
enlistments each job is therefore picked at its configured rate without any
shared bookkeeping between callers.

By sprinkling enlist() calls over idle moments across a cluster (a cache
hit, an empty poll), background maintenance gets done without dedicating
daemons or cron jobs to it.
"""

import logging
import math
import time
from dataclasses import dataclass
from decimal import Decimal

from workstealing.config import get_settings
from workstealing.constants import MAX_TOTAL_RATE, SPAN_RECRUIT_JOB, ErrorKind, Outcome
from workstealing.exceptions import DuplicateIdentifier, InvalidRate, RateBudgetExceeded
from workstealing.observability.metrics import MetricsCollector, get_metrics
from workstealing.observability.tracing import get_tracer
from workstealing.random import MtRandom, Random
from workstealing.types.job import Job, JobResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobRegistration:
    """
    An installed job.

    `threshold` is the running total of rates up to and including this
    entry, summed exactly in decimal so that rates of 0.3 + 0.3 + 0.3 reach
    0.9 rather than 0.8999999999999999. A draw at or below it (and above
    the previous entry's) selects this job.
    """

    job: Job
    job_id: str
    rate: float
    threshold: Decimal


class Recruiter:
    """
    Manages one or more work stealing jobs.

    Callers with spare cycles call `enlist()`. They may or may not be
    recruited; if they are, they perform one small slice of one job and
    return. Errors from a job never reach the caller.
    """

    def __init__(
        self,
        random: Random | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the recruiter.

        Args:
            random: Source for the recruiting draw. Defaults to MtRandom.
            metrics: Metrics collector. Defaults to the process-wide one.
        """
        self._random = random or MtRandom()
        self._metrics = metrics or get_metrics()
        self._jobs: list[JobRegistration] = []

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        return any(reg.job_id == job_id for reg in self._jobs)

    @property
    def job_ids(self) -> list[str]:
        """Installed job identifiers in installation order."""
        return [reg.job_id for reg in self._jobs]

    @property
    def total_rate(self) -> float:
        """Sum of all installed recruiting rates."""
        return float(self._jobs[-1].threshold) if self._jobs else 0.0

    def install(self, job: Job, job_id: str, rate: float) -> None:
        """
        Install a job with this recruiter.

        Args:
            job: The job to recruit for.
            job_id: Unique identifier for the job.
            rate: Fraction of enlisted callers to perform this job.

        Raises:
            DuplicateIdentifier: If `job_id` is already installed.
            InvalidRate: If `rate` is not in (0, 1].
            RateBudgetExceeded: If the total of all rates would exceed 1.0.
        """
        if job_id in self:
            raise DuplicateIdentifier(job_id)

        if not (math.isfinite(rate) and 0.0 < rate <= MAX_TOTAL_RATE):
            raise InvalidRate(job_id, rate)

        total = _exact(rate) + (self._jobs[-1].threshold if self._jobs else Decimal(0))
        if total > _exact(MAX_TOTAL_RATE):
            raise RateBudgetExceeded(job_id, rate, float(total))

        self._jobs.append(JobRegistration(job=job, job_id=job_id, rate=rate, threshold=total))
        logger.info(
            f"Installed job {job_id}",
            extra={"job_id": job_id, "rate": rate, "total_rate": float(total)},
        )

    def enlist(self) -> Outcome:
        """
        Enlist a caller with spare cycles to perform a background job.

        Returns:
            RECRUITED if the caller performed a slice of work for a job.
            DISMISSED if no job was drawn or the drawn job had nothing to do.
        """
        registration = self._select()
        if registration is None:
            outcome = Outcome.DISMISSED
        else:
            outcome = self._work(registration).outcome

        self._metrics.record_enlistment(outcome)
        return outcome

    def volunteer(self) -> set[str]:
        """
        Run every installed job once, ignoring recruiting rates.

        Meant for administrative sweeps rather than opportunistic dispatch.

        Returns:
            Identifiers of the jobs that reported RECRUITED.
        """
        return {
            reg.job_id
            for reg in list(self._jobs)
            if self._work(reg).is_recruited
        }

    def _select(self) -> JobRegistration | None:
        """
        Draw a job at random, or None if the caller avoided duty.
        """
        lottery = _exact(self._random.next_float())

        for reg in self._jobs:
            if lottery <= reg.threshold:
                return reg

        return None

    def _work(self, registration: JobRegistration) -> JobResult:
        """
        Let a job perform one slice of work, containing any failure.

        A job that raises is reported as DISMISSED: no work is assumed to
        have been done.
        """
        job_id = registration.job_id
        started = time.perf_counter()

        with get_tracer().start_as_current_span(SPAN_RECRUIT_JOB) as span:
            span.set_attribute("job.id", job_id)
            try:
                result = self._as_result(registration.job.recruited())
            except Exception as e:
                logger.exception(
                    f"Job {job_id} raised exception",
                    extra={"job_id": job_id, "error": str(e)},
                )
                result = JobResult.aborted(ErrorKind.UNEXPECTED, detail=str(e))

            span.set_attribute("job.outcome", str(result.outcome))

        self._metrics.record_job(
            job_id,
            result.outcome,
            time.perf_counter() - started,
            error=result.error,
        )
        if result.failed:
            logger.debug(
                f"Job {job_id} dismissed after {result.error}",
                extra={"job_id": job_id, "error_kind": result.error},
            )
        return result

    @staticmethod
    def _as_result(value: object) -> JobResult:
        if isinstance(value, JobResult):
            return value
        if isinstance(value, Outcome):
            return JobResult(outcome=value)
        raise TypeError(f"Job returned {type(value).__name__}, expected JobResult")


def _exact(value: float) -> Decimal:
    """Decimal of the shortest repr, so 0.3 is 3/10 rather than its binary neighbour."""
    return Decimal(repr(value))


# Global recruiter instance
_recruiter: Recruiter | None = None


def get_recruiter() -> Recruiter:
    """
    Get or create the process-wide recruiter.

    A convenience for hosts with a single recruiter; subsystems are free to
    construct and inject their own.
    """
    global _recruiter
    if _recruiter is None:
        settings = get_settings()
        _recruiter = Recruiter(random=MtRandom(seed=settings.recruiter_seed))
    return _recruiter


def reset_recruiter() -> None:
    """Discard the process-wide recruiter."""
    global _recruiter
    _recruiter = None
