"""
Maintenance jobs backed by Redis.
"""

from workstealing.jobs.queue_tracker import QueueSource, QueueTracker
from workstealing.jobs.volatile_hash import VolatileHashFields

__all__ = ["QueueSource", "QueueTracker", "VolatileHashFields"]
