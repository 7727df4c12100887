import math
from typing import List, Tuple

import numpy as np

from world.geometry import as_point, normalize, orientation


def normalize_angle(angle: float) -> float:
    """Normalize angle to be within [-pi, pi) radians."""
    return (angle + math.pi) % (2 * math.pi) - math.pi


def sigmoid(value: float | np.ndarray, offset: float, width: float) -> float | np.ndarray:
    """
    Smooth step from 0 to 1 centred on ``offset``.

    ``width`` is the distance over which the output goes from roughly 0.018
    to 0.982. A negative width flips the step.
    """
    sig_width_factor = 8.0 / width
    exponent = np.clip(sig_width_factor * (offset - np.asarray(value, dtype=float)), -500.0, 500.0)
    return 1.0 / (1.0 + np.exp(exponent))


def calculate_shooting_pose(ball_pos: np.ndarray | Tuple | List, target: np.ndarray | Tuple | List,
                            offset: float) -> np.ndarray:
    """
    Pose ``offset`` meters behind the ball, facing through the ball at ``target``.

    Returns:
        Array ``[x, y, theta]``.
    """
    ball_pos, target = as_point(ball_pos), as_point(target)
    shot_dir = target - ball_pos
    destination = ball_pos - normalize(shot_dir, offset)
    return np.array([destination[0], destination[1], orientation(shot_dir)])


def time_to_travel(distance: float, max_speed: float) -> float:
    """Time to cover ``distance`` at ``max_speed``; zero speed never arrives."""
    if max_speed <= 0:
        return math.inf
    return max(distance, 0.0) / max_speed
