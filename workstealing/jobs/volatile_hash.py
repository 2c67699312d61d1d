"""
A Redis hash map with volatile fields.

Redis only expires whole keys, so individual fields of a hash cannot be
given a time-to-live. VolatileHashFields keeps the hash without an
expiration and records each field's expiry time in a companion sorted set.
The accessors read and write both structures together, and treat a field
past its expiry as absent whether or not it has been removed yet.

To keep expired fields from accumulating, install an instance with a
Recruiter: each recruit reaps a small batch of the oldest expired fields,
freeing memory much as Redis does for volatile keys.
"""

import logging
import time
from collections.abc import Callable

from redis import Redis
from redis.client import Pipeline
from redis.exceptions import RedisError, WatchError

from workstealing.config import get_settings
from workstealing.constants import VHASH_MAP_PREFIX, VHASH_ZSET_PREFIX, ErrorKind
from workstealing.types.job import JobResult

logger = logging.getLogger(__name__)


class VolatileHashFields:
    """Hash map whose fields expire individually."""

    def __init__(
        self,
        redis: Redis,
        base_key: str,
        batch_size: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            redis: Redis client.
            base_key: Base key for the hash map and sorted set.
            batch_size: Most fields reaped per slice.
            clock: Current time in seconds since the epoch.
        """
        self._redis = redis
        self.hash_key = f"{VHASH_MAP_PREFIX}:{base_key}"
        self.zset_key = f"{VHASH_ZSET_PREFIX}:{base_key}"
        if batch_size is None:
            batch_size = get_settings().volatile_reap_batch_size
        if batch_size <= 0:
            raise ValueError(f"Batch size must be positive (supplied: {batch_size})")
        self.batch_size = batch_size
        self._clock = clock

    def set_with_expiry(self, field: str, value: str, ttl: float) -> None:
        """
        Set a field that expires `ttl` seconds from now.

        Raises:
            ValueError: If `ttl` is not positive.
            redis.RedisError: On store failure.
        """
        if ttl <= 0:
            raise ValueError(f"Time-to-live must be positive (supplied: {ttl})")

        expires = self._clock() + ttl

        with self._redis.pipeline() as pipe:
            pipe.hset(self.hash_key, field, value)
            pipe.zadd(self.zset_key, {field: expires})
            pipe.execute()

    def get(self, field: str) -> str | None:
        """
        Get a field value, or None if it is absent or expired.

        Raises:
            redis.RedisError: On store failure.
        """
        with self._redis.pipeline() as pipe:
            pipe.hget(self.hash_key, field)
            pipe.zscore(self.zset_key, field)
            value, expires = pipe.execute()

        if value is None or expires is None or expires <= self._clock():
            return None
        return value

    def delete(self, field: str) -> bool:
        """
        Remove a field from the hash map and the expiry index.

        Returns:
            True if the field was present.
        """
        with self._redis.pipeline() as pipe:
            pipe.hdel(self.hash_key, field)
            pipe.zrem(self.zset_key, field)
            deleted, _ = pipe.execute()

        return bool(deleted)

    def recruited(self) -> JobResult:
        try:
            reaped = self.reap()
        except WatchError:
            # a write landed between WATCH and EXEC, next recruit will try again
            logger.debug(
                "Volatile hash reap aborted by concurrent write",
                extra={"hash_key": self.hash_key},
            )
            return JobResult.aborted(ErrorKind.CONTENTION)
        except RedisError as e:
            logger.warning(
                f"Volatile hash reap failed: {e}",
                extra={"hash_key": self.hash_key},
            )
            return JobResult.aborted(ErrorKind.STORE, detail=str(e))

        if not reaped:
            return JobResult.no_work()
        return JobResult.work_done(reaped)

    def reap(self) -> int:
        """
        Remove the oldest expired fields, at most `batch_size` of them.

        Returns:
            Number of fields reaped.

        Raises:
            redis.WatchError: If either key changed before the removal
                committed; nothing is removed.
        """
        with self._redis.pipeline() as pipe:
            return self._reap(pipe)

    def _reap(self, pipe: Pipeline) -> int:
        pipe.watch(self.hash_key, self.zset_key)

        candidates = pipe.zrangebyscore(
            self.zset_key, "-inf", self._clock(), start=0, num=self.batch_size
        )
        if not candidates:
            return 0

        pipe.multi()
        pipe.hdel(self.hash_key, *candidates)
        pipe.zrem(self.zset_key, *candidates)
        pipe.execute()

        logger.debug(
            f"Reaped {len(candidates)} expired fields",
            extra={"hash_key": self.hash_key},
        )
        return len(candidates)
