"""Qualitative speed ratings for average latencies."""

import math
from enum import Enum
from functools import total_ordering
from typing import List, Tuple


@total_ordering
class Rating(Enum):
    """Latency tier, ordered from fastest to slowest."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    SLOW = "Slow"
    VERY_SLOW = "Very Slow"

    @property
    def rank(self) -> int:
        return list(Rating).index(self)

    def __lt__(self, other):
        if not isinstance(other, Rating):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.value


# Inclusive upper bound (ms) of each tier; anything above the last is VERY_SLOW
RATING_THRESHOLDS: List[Tuple[float, Rating]] = [
    (100, Rating.EXCELLENT),
    (300, Rating.GOOD),
    (600, Rating.AVERAGE),
    (1000, Rating.SLOW),
]


def classify(latency_ms: float) -> Rating:
    """
    Map a latency in milliseconds to its rating.

    Args:
        latency_ms: Non-negative latency, typically a method's average.

    Returns:
        The Rating whose range contains the value.

    Raises:
        ValueError: If the latency is negative or not a number.
    """
    if math.isnan(latency_ms) or latency_ms < 0:
        raise ValueError(f"Latency must be a non-negative number, got {latency_ms}")

    for upper_bound, rating in RATING_THRESHOLDS:
        if latency_ms <= upper_bound:
            return rating
    return Rating.VERY_SLOW
