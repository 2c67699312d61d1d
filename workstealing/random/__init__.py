"""
Random sources used for recruiting draws.
"""

from workstealing.random.base import Random
from workstealing.random.mt import MtRandom

__all__ = ["Random", "MtRandom"]
