"""
A minimal kinematic stand-in for the real simulator.

Robots move straight at their targets within their speed limits, kicks set the
ball's velocity directly and the ball slows down at a constant rate. There are
no collisions; a moving ball is caught by the first robot it passes close to.
Good enough to drive plays tick by tick without the full simulator.
"""

import math

import numpy as np

from ai_interface.utils.algo_utils import normalize_angle
from ai_interface.utils.basic_commands import parse_command
from constants.field_constants import KICK_RESTART_BALL_MOVE_DISTANCE
from constants.player_constants import (KICKABLE_MARGIN, POSSESSION_DISTANCE, ROBOT_MAX_SPEED,
                                        ROBOT_MAX_ANGULAR_SPEED)
from world.geometry import as_point, closest_point_on_segment, distance, to_tuple
from world.world_state import Ball, PlayState, World

SIM_TIMESTEP = 0.05    # seconds
BALL_DECELERATION = 0.3    # m/s^2, rolling friction


class KinematicSimulator:
    """Steps a ``World`` forward given one command per friendly robot."""

    def __init__(self, world: World, timestep: float = SIM_TIMESTEP):
        self.world = world
        self.timestep = timestep
        self.last_kicker_id = None
        self._restart_ball_position = world.ball.position

    def step(self, actions: dict[int, str]) -> World:
        """
        Apply ``actions`` for one timestep.

        Args:
            actions: Command string per friendly robot id; missing robots stop

        Returns:
            The next world snapshot
        """
        dt = self.timestep
        ball_pos = as_point(self.world.ball.position)
        ball_vel = as_point(self.world.ball.velocity)
        kicked = False

        robots = []
        for robot in self.world.friendly_team.robots:
            name, args = parse_command(actions.get(robot.id, "stop"))
            position, heading = as_point(robot.position), robot.orientation
            new_position = position
            if name == "move":
                x, y, theta, speed = args
                new_position = _step_towards(position, (x, y), min(speed, ROBOT_MAX_SPEED) * dt)
                heading = _turn_towards(heading, theta, ROBOT_MAX_ANGULAR_SPEED * dt)
            elif name == "kick" and distance(position, ball_pos) <= KICKABLE_MARGIN:
                kick_speed, angle = args
                direction = heading + angle
                ball_vel = kick_speed * np.array([math.cos(direction), math.sin(direction)])
                self.last_kicker_id = robot.id
                kicked = True
            robots.append(robot._replace(position=to_tuple(new_position), orientation=heading,
                                         velocity=to_tuple((new_position - position) / dt)))

        new_ball_pos, ball_vel = _roll_ball(ball_pos, ball_vel, dt)

        if not kicked and np.linalg.norm(ball_vel) > 0:
            catchers = [robot for robot in robots if robot.id != self.last_kicker_id]
            catchers += list(self.world.enemy_team.robots)
            for robot in catchers:
                catch_point = closest_point_on_segment(robot.position, ball_pos, new_ball_pos)
                if distance(robot.position, catch_point) <= POSSESSION_DISTANCE:
                    new_ball_pos, ball_vel = catch_point, np.zeros(2)
                    break

        game_state = self.world.game_state
        if (game_state.is_ready_state()
                and distance(new_ball_pos, self._restart_ball_position) > KICK_RESTART_BALL_MOVE_DISTANCE):
            game_state = game_state.with_play_state(PlayState.PLAYING)

        self.world = self.world.replace(
            ball=Ball(to_tuple(new_ball_pos), to_tuple(ball_vel)),
            friendly_team=self.world.friendly_team._replace(robots=tuple(robots)),
            game_state=game_state,
            timestamp=self.world.timestamp + dt,
        )
        return self.world


def _step_towards(position: np.ndarray, target, max_step: float) -> np.ndarray:
    target = as_point(target)
    offset = target - position
    dist = np.linalg.norm(offset)
    if dist <= max_step:
        return target
    return position + offset / dist * max_step


def _turn_towards(heading: float, target: float, max_step: float) -> float:
    diff = normalize_angle(target - heading)
    if abs(diff) <= max_step:
        return float(target)
    return normalize_angle(heading + math.copysign(max_step, diff))


def _roll_ball(position: np.ndarray, velocity: np.ndarray, dt: float):
    speed = np.linalg.norm(velocity)
    if speed < 1e-9:
        return position, np.zeros(2)
    new_speed = max(speed - BALL_DECELERATION * dt, 0.0)
    return position + velocity * dt, velocity / speed * new_speed
