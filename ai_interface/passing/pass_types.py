"""
Value types describing a pass.

A ``Pass`` is immutable once built; the only way to obtain a rated pass is
from the pass generator, which pairs it with a rating in ``PassWithRating``.
"""

import math
from collections import namedtuple
from enum import Enum

from ai_interface.utils.algo_utils import time_to_travel
from world.geometry import as_point, distance, orientation


class PassType(Enum):
    # the receiver stops the ball and keeps it
    RECEIVE_AND_DRIBBLE = "receive_and_dribble"
    # the receiver redirects the ball at the enemy goal on first touch
    ONE_TOUCH_SHOT = "one_touch_shot"


_PassBase = namedtuple("Pass", ["passer_point", "receiver_point", "speed_m_per_s", "pass_type"])


class Pass(_PassBase):
    """
    A ball transfer from ``passer_point`` to ``receiver_point``.

    Points are stored as ``(x, y)`` float tuples so two passes compare equal
    exactly when every field is identical.
    """
    __slots__ = ()

    def __new__(cls, passer_point, receiver_point, speed_m_per_s, pass_type=PassType.RECEIVE_AND_DRIBBLE):
        passer_point = tuple(float(c) for c in as_point(passer_point))
        receiver_point = tuple(float(c) for c in as_point(receiver_point))
        return super().__new__(cls, passer_point, receiver_point, float(speed_m_per_s), pass_type)

    def length(self) -> float:
        return distance(self.passer_point, self.receiver_point)

    def estimate_receive_time(self) -> float:
        """Seconds from the kick until the ball reaches the receiver point."""
        return time_to_travel(self.length(), self.speed_m_per_s)

    def passer_orientation(self) -> float:
        """Direction the passer faces to kick this pass."""
        return orientation(as_point(self.receiver_point) - as_point(self.passer_point))

    def receiver_orientation(self) -> float:
        """Direction the receiver faces to meet the ball."""
        return orientation(as_point(self.passer_point) - as_point(self.receiver_point))

    def __str__(self):
        return (f"Pass({self.passer_point} -> {self.receiver_point}, "
                f"{self.speed_m_per_s:.2f} m/s, {self.pass_type.value})")


_PassWithRatingBase = namedtuple("PassWithRating", ["pass_", "rating"])


class PassWithRating(_PassWithRatingBase):
    """A pass and its quality in [0, 1]; 1 is a perfect pass, 0 is unacceptable."""
    __slots__ = ()

    def __new__(cls, pass_: Pass, rating: float):
        rating = float(rating)
        if not math.isfinite(rating):
            rating = 0.0
        return super().__new__(cls, pass_, min(max(rating, 0.0), 1.0))
