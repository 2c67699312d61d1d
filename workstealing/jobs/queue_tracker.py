"""
Track identifiers with pending work on a task queue, in a Redis set.

When tasks are stored in a queue (one or more per identifier), a Redis set
of those identifiers answers "is work pending for X?" without querying the
queue. Recruits keep the set roughly current: half of them scrape the queue
forward from a persisted cursor and add what they find, the other half
sample the set and drop identifiers whose work has since drained.

Both passes are idempotent, so racing workers are harmless. A pass whose
WATCHed keys were written by someone else before EXEC is simply abandoned;
the next recruit, possibly on another worker, picks up from there.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from redis import Redis
from redis.client import Pipeline
from redis.exceptions import RedisError, WatchError

from workstealing.config import get_settings
from workstealing.constants import ErrorKind
from workstealing.random import MtRandom, Random
from workstealing.types.job import JobResult

logger = logging.getLogger(__name__)


class QueueSource(Protocol):
    """The authoritative task queue, as seen by QueueTracker."""

    def still_queued(self, ids: list[str]) -> Iterable[str]:
        """Return the subset of `ids` that still has pending work."""
        ...

    def next_batch(self, cursor: int, count: int) -> tuple[list[str], int]:
        """
        Scrape up to `count` identifiers queued after `cursor`.

        Identifiers may repeat when several tasks are outstanding for one.

        Returns:
            The identifiers and the cursor to resume from next time.
        """
        ...


class QueueTracker:
    """
    Job maintaining a cached set of identifiers with queued work.

    `set_key` holds the set, `cursor_key` the scrape position. The same
    cursor key is used for reading and writing.
    """

    def __init__(
        self,
        redis: Redis,
        set_key: str,
        cursor_key: str,
        source: QueueSource,
        work_count: int | None = None,
        random: Random | None = None,
    ):
        """
        Initialize the tracker.

        Args:
            redis: Redis client.
            set_key: Redis key of the identifier set.
            cursor_key: Redis key of the scrape cursor.
            source: The task queue being mirrored.
            work_count: Identifiers to add or check per slice.
            random: Source for choosing the pass. Independent of the
                recruiter's draw; defaults to a freshly seeded MtRandom.
        """
        self._redis = redis
        self.set_key = set_key
        self.cursor_key = cursor_key
        self._source = source
        if work_count is None:
            work_count = get_settings().queue_tracker_work_count
        if work_count <= 0:
            raise ValueError(f"Work count must be positive (supplied: {work_count})")
        self.work_count = work_count
        self._random = random or MtRandom()

    def is_queued(self, identifier: str) -> bool:
        """
        Check if an identifier has work pending.

        Raises:
            redis.RedisError: On store failure.
        """
        return bool(self._redis.sismember(self.set_key, identifier))

    def recruited(self) -> JobResult:
        # half of the recruits add queued identifiers, the other half remove stale ones
        if self._random.next_float() < 0.5:
            return self.add_pass()
        return self.remove_pass()

    def add_pass(self) -> JobResult:
        """Add the next round of queued identifiers to the set."""
        return self._attempt("add", self._add)

    def remove_pass(self) -> JobResult:
        """Remove identifiers no longer queued from the set."""
        return self._attempt("remove", self._remove)

    def _attempt(self, name: str, work: Callable[[Pipeline], int | None]) -> JobResult:
        try:
            with self._redis.pipeline() as pipe:
                count = work(pipe)
        except WatchError:
            # another worker wrote first; nothing was applied
            logger.debug(
                f"Queue tracker {name} pass aborted by concurrent write",
                extra={"set_key": self.set_key},
            )
            return JobResult.aborted(ErrorKind.CONTENTION)
        except RedisError as e:
            logger.warning(
                f"Queue tracker {name} pass failed: {e}",
                extra={"set_key": self.set_key},
            )
            return JobResult.aborted(ErrorKind.STORE, detail=str(e))

        if count is None:
            return JobResult.no_work()
        return JobResult.work_done(count)

    def _add(self, pipe: Pipeline) -> int | None:
        """
        Returns:
            Number of identifiers newly added, or None if the queue had
            nothing past the cursor.
        """
        pipe.watch(self.set_key, self.cursor_key)

        raw = pipe.get(self.cursor_key)
        cursor = int(raw) if raw is not None else 0

        ids, next_cursor = self._source.next_batch(cursor, self.work_count)
        if not ids:
            return None

        pipe.multi()
        pipe.sadd(self.set_key, *ids)
        pipe.set(self.cursor_key, next_cursor)
        added, _ = pipe.execute()

        logger.debug(
            f"Queue tracker added {added} identifiers",
            extra={"set_key": self.set_key, "cursor": next_cursor},
        )
        return added

    def _remove(self, pipe: Pipeline) -> int | None:
        """
        Returns:
            Number of identifiers removed, or None if nothing was stale.
        """
        pipe.watch(self.set_key)

        sampled = pipe.srandmember(self.set_key, self.work_count)
        if not sampled:
            return None

        queued = set(self._source.still_queued(list(sampled)))
        stale = [member for member in sampled if member not in queued]
        if not stale:
            return None

        pipe.multi()
        pipe.srem(self.set_key, *stale)
        (removed,) = pipe.execute()

        logger.debug(
            f"Queue tracker removed {removed} identifiers",
            extra={"set_key": self.set_key},
        )
        return removed
