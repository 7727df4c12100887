"""
Acceptance thresholds that relax while a play waits for a good enough option.
"""


class LinearDecayPolicy:
    """
    Minimum acceptable score falling linearly from 1 to 0 over ``max_time_s``.

    ``min_score(0) == 1`` so only a perfect option is accepted immediately,
    and ``min_score(t) == 0`` for every ``t >= max_time_s`` so anything is
    accepted once the time is up. A non-positive ``max_time_s`` accepts
    anything straight away.
    """

    def __init__(self, max_time_s: float):
        self.max_time_s = float(max_time_s)

    def min_score(self, elapsed_s: float) -> float:
        if self.max_time_s <= 0:
            return 0.0
        elapsed_s = max(float(elapsed_s), 0.0)
        return max(0.0, 1.0 - min(elapsed_s / self.max_time_s, 1.0))

    def __repr__(self):
        return f"LinearDecayPolicy(max_time_s={self.max_time_s})"
