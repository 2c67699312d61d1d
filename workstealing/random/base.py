"""
Random or pseudo-random number generator interface.
"""

from abc import ABC, abstractmethod


class Random(ABC):
    """
    Uniform integer source with a derived float draw.

    `next_int()` is half-open, so `next_float()` lies in [0.0, 1.0) and
    never returns 1.0.
    """

    @abstractmethod
    def seed(self, seed: int | None = None) -> None:
        """Re-seed deterministically, or from fresh entropy if `seed` is None."""

    @abstractmethod
    def max_int(self) -> int:
        """Largest integer bound the source supports."""

    @abstractmethod
    def next_int(self, max: int | None = None) -> int:
        """
        Draw an integer in [0, max).

        Args:
            max: Exclusive upper bound. Defaults to `max_int()`.

        Raises:
            ValueError: If `max` is not positive.
        """

    def next_float(self) -> float:
        """Draw a float in [0.0, 1.0)."""
        return float(self.next_int()) / float(self.max_int())
