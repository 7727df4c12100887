"""
Command strings tactics hand to the actuation layer.

Every command is a space separated string, e.g. ``"move 1.0 2.0 0.5 2.0"`` or
``"kick 3.5 0.0"``. ``"done"`` tells the caller the tactic reached its goal.
"""

from typing import List, Tuple

import numpy as np

from constants.player_constants import (KICKABLE_MARGIN, POSITION_TOLERANCE,
                                        ORIENTATION_TOLERANCE, ROBOT_MAX_SPEED)
from ai_interface.utils.algo_utils import normalize_angle
from world.geometry import orientation


def goto(self_pose: np.ndarray | Tuple | List, x: float, y: float, theta: float | None = None,
         margin: float = POSITION_TOLERANCE, speed: float = ROBOT_MAX_SPEED) -> str:
    """Move to ``(x, y)`` and, optionally, turn to ``theta``; ``"done"`` once there."""
    destination = np.array([x, y])
    distance = np.linalg.norm(destination - np.array(self_pose[:2]))
    if distance < margin:
        if theta is None:
            return "done"
        angle_diff = normalize_angle(theta - self_pose[2])
        if abs(angle_diff) <= ORIENTATION_TOLERANCE:
            return "done"
    final_theta = self_pose[2] if theta is None else theta
    return f"move {x} {y} {final_theta} {speed}"


def shoot(self_pose: np.ndarray | Tuple | List, ball_pos: np.ndarray | Tuple | List,
          target: np.ndarray | Tuple | List, kick_speed: float,
          kickable_tolerance: float = KICKABLE_MARGIN, angle_tolerance: float = 0.1) -> str:
    """Kick the ball at ``target``; ``"failed"`` if the ball is out of reach or behind us."""
    to_ball = np.array(ball_pos[:2]) - np.array(self_pose[:2])
    if np.linalg.norm(to_ball) > kickable_tolerance:
        return "failed"

    ball_dir = orientation(to_ball)
    if abs(normalize_angle(ball_dir - self_pose[2])) > angle_tolerance:
        return "failed"

    angle_to_target = orientation(np.array(target[:2]) - np.array(self_pose[:2]))
    angle_diff = normalize_angle(angle_to_target - self_pose[2])
    return f"kick {kick_speed} {angle_diff}"


def pass_to_point(self_pose: np.ndarray | Tuple | List, ball_pos: np.ndarray | Tuple | List,
                  receiver_point: np.ndarray | Tuple | List, pass_speed: float) -> str:
    return shoot(self_pose, ball_pos, receiver_point, pass_speed)


def stop() -> str:
    return "stop"


def parse_command(command: str) -> tuple[str, list[float]]:
    """Split a command string into its name and numeric arguments."""
    parts = command.split()
    return parts[0], [float(arg) for arg in parts[1:]]


def redirect(self_pose: np.ndarray | Tuple | List, target: np.ndarray | Tuple | List,
             kick_speed: float) -> str:
    """Kick whatever is on the dribbler at ``target`` without lining up first."""
    angle_to_target = orientation(np.array(target[:2]) - np.array(self_pose[:2]))
    return f"kick {kick_speed} {normalize_angle(angle_to_target - self_pose[2])}"
