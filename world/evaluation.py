"""Questions about the world that plays ask in their predicates."""

import math

import numpy as np

from constants.play_constants import PASS_IN_PROGRESS_SPEED, PASS_IN_PROGRESS_CONE
from constants.player_constants import POSSESSION_DISTANCE
from world.geometry import as_point, distance
from world.world_state import Team, World


def team_has_possession(world: World, team: Team) -> bool:
    """True if any robot of ``team`` is close enough to the ball to control it."""
    ball_pos = world.ball.position
    return any(distance(robot.position, ball_pos) <= POSSESSION_DISTANCE
               for robot in team.robots)


def team_pass_in_progress(world: World, team: Team) -> bool:
    """
    True if the ball is travelling towards one of ``team``'s robots.

    A robot counts as the target if it lies within a narrow cone around the
    ball's direction of travel.
    """
    velocity = as_point(world.ball.velocity)
    speed = float(np.linalg.norm(velocity))
    if speed < PASS_IN_PROGRESS_SPEED:
        return False

    ball_pos = as_point(world.ball.position)
    for robot in team.robots:
        to_robot = as_point(robot.position) - ball_pos
        dist = np.linalg.norm(to_robot)
        if dist < 1e-9:
            continue
        cos_angle = np.clip(np.dot(to_robot, velocity) / (dist * speed), -1.0, 1.0)
        if math.acos(cos_angle) <= PASS_IN_PROGRESS_CONE:
            return True
    return False
