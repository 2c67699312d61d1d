"""
Job-related type definitions.
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from workstealing.constants import ErrorKind, Outcome


class JobResult(BaseModel):
    """
    Result of one slice of work.

    Soft failures are carried as data: an aborted slice is always
    DISMISSED and records why in `error`.
    """

    outcome: Outcome
    count: int = 0
    error: ErrorKind | None = None
    detail: str | None = None

    @classmethod
    def work_done(cls, count: int = 1) -> "JobResult":
        """Work was performed (items added, removed or reaped)."""
        return cls(outcome=Outcome.RECRUITED, count=count)

    @classmethod
    def no_work(cls) -> "JobResult":
        """Nothing to do this time."""
        return cls(outcome=Outcome.DISMISSED)

    @classmethod
    def aborted(cls, kind: ErrorKind, detail: str | None = None) -> "JobResult":
        """Slice abandoned without applying any mutation."""
        return cls(outcome=Outcome.DISMISSED, error=kind, detail=detail)

    @property
    def is_recruited(self) -> bool:
        """Check if meaningful work was performed."""
        return self.outcome == Outcome.RECRUITED

    @property
    def failed(self) -> bool:
        """Check if the slice was abandoned because of an error."""
        return self.error is not None


@runtime_checkable
class Job(Protocol):
    """
    A unit of bounded, idempotent background work.

    Implementations must return quickly, never block waiting on a lock,
    and never retry: contention or a transient store failure is reported
    as a DISMISSED result, not raised.
    """

    def recruited(self) -> JobResult:
        """Attempt one bounded slice of work."""
        ...
