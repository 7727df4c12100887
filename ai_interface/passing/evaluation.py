"""
Pass rating.

Every function returns a value in [0, 1]. The overall rating of a pass is the
product of independent factors, so a single hopeless factor (a pass straight
into an enemy, a receiver point outside the field) sinks the whole pass.
Degenerate input rates 0 rather than raising.
"""

import math

import numpy as np

from ai_interface.passing.pass_types import Pass, PassType
from ai_interface.utils.algo_utils import normalize_angle, sigmoid, time_to_travel
from constants.play_constants import (ENEMY_REACTION_TIME, RECEIVER_REACTION_TIME,
                                      MIN_PASS_SPEED, MAX_PASS_SPEED,
                                      STATIC_FIELD_QUALITY_WIDTH, ONE_TOUCH_MAX_DEFLECTION)
from constants.player_constants import ROBOT_MAX_RADIUS_METERS, ROBOT_MAX_SPEED
from world.geometry import Rectangle, as_point, closest_point_on_segment, distance, orientation
from world.world_state import Field, Team, World

FIELD_EDGE_MARGIN = 0.2
MIN_OPEN_GOAL_ANGLE = math.radians(6)
OPEN_GOAL_ANGLE_WIDTH = math.radians(8)


def rate_pass(world: World, pass_: Pass, target_region: Rectangle | None = None,
              passer_robot_id: int | None = None) -> float:
    """
    Rate how likely ``pass_`` is to succeed and how useful it would be.

    Args:
        world: Snapshot the pass would be played in
        pass_: The pass to rate
        target_region: Area the receiver point should be in, or None for anywhere
        passer_robot_id: Robot kicking the pass; it can not also receive it

    Returns:
        Rating in [0, 1]
    """
    if pass_.length() < 1e-6:
        return 0.0
    if target_region is not None and target_region.is_degenerate():
        return 0.0

    rating = (get_static_position_quality(world.field, pass_.receiver_point)
              * rate_pass_friendly_capability(world.friendly_team, pass_, passer_robot_id)
              * rate_pass_enemy_risk(world.enemy_team, pass_)
              * rate_target_region(target_region, pass_.receiver_point)
              * rate_pass_speed(pass_.speed_m_per_s))
    if pass_.pass_type is PassType.ONE_TOUCH_SHOT:
        rating *= rate_pass_shoot_score(world.field, world.enemy_team, pass_)

    rating = float(rating)
    if not math.isfinite(rating):
        return 0.0
    return min(max(rating, 0.0), 1.0)


def get_static_position_quality(field: Field, point) -> float:
    """Penalize points near the field edges or inside the enemy defense area."""
    x, y = as_point(point)
    in_field = (sigmoid(field.x_length / 2 - abs(x), FIELD_EDGE_MARGIN, STATIC_FIELD_QUALITY_WIDTH)
                * sigmoid(field.y_length / 2 - abs(y), FIELD_EDGE_MARGIN, STATIC_FIELD_QUALITY_WIDTH))
    # receivers are not allowed to touch the ball inside the enemy defense area
    outside_defense_area = sigmoid(field.enemy_defense_area.distance_to(point), 0.1, 0.2)
    return float(in_field * outside_defense_area)


def rate_pass_friendly_capability(friendly_team: Team, pass_: Pass,
                                  passer_robot_id: int | None = None) -> float:
    """How comfortably our closest possible receiver reaches the receiver point in time."""
    receivers = [robot for robot in friendly_team.robots if robot.id != passer_robot_id]
    if not receivers:
        return 0.0

    ball_time = pass_.estimate_receive_time()
    robot_time = min(time_to_travel(distance(robot.position, pass_.receiver_point), ROBOT_MAX_SPEED)
                     for robot in receivers) + RECEIVER_REACTION_TIME
    return float(sigmoid(ball_time - robot_time, 0.0, 0.5))


def rate_pass_enemy_risk(enemy_team: Team, pass_: Pass) -> float:
    """Probability that no enemy gets to the ball before it reaches the receiver."""
    passer_point = as_point(pass_.passer_point)
    receiver_point = as_point(pass_.receiver_point)

    no_interception = 1.0
    for robot in enemy_team.robots:
        intercept_point = closest_point_on_segment(robot.position, passer_point, receiver_point)
        ball_time = time_to_travel(distance(passer_point, intercept_point), pass_.speed_m_per_s)
        reach = max(distance(robot.position, intercept_point) - ROBOT_MAX_RADIUS_METERS, 0.0)
        enemy_time = time_to_travel(reach, ROBOT_MAX_SPEED) + ENEMY_REACTION_TIME
        no_interception *= 1.0 - sigmoid(ball_time - enemy_time, 0.0, 0.5)
    return float(no_interception)


def rate_target_region(target_region: Rectangle | None, point) -> float:
    if target_region is None:
        return 1.0
    if target_region.is_degenerate():
        return 0.0
    if target_region.contains(point):
        return 1.0
    return float(sigmoid(-target_region.distance_to(point), -0.25, 0.5))


def rate_pass_speed(speed: float) -> float:
    return float(sigmoid(speed, MIN_PASS_SPEED + 0.1, 0.2)
                 * sigmoid(-speed, -(MAX_PASS_SPEED - 0.1), 0.2))


def rate_pass_shoot_score(field: Field, enemy_team: Team, pass_: Pass) -> float:
    """Quality of the one-touch shot the receiver gets off after this pass."""
    open_angle = get_open_goal_angle(field, enemy_team, pass_.receiver_point)
    open_angle_quality = sigmoid(open_angle, MIN_OPEN_GOAL_ANGLE, OPEN_GOAL_ANGLE_WIDTH)

    receiver_point = as_point(pass_.receiver_point)
    shot_dir = orientation(as_point(field.enemy_goal_center) - receiver_point)
    deflection = abs(normalize_angle(shot_dir - pass_.receiver_orientation()))
    deflection_quality = sigmoid(ONE_TOUCH_MAX_DEFLECTION - deflection, 0.0, 0.3)
    return float(open_angle_quality * deflection_quality)


def get_open_goal_angle(field: Field, enemy_team: Team, point) -> float:
    """
    Angle of the enemy goal visible from ``point`` past the enemy robots.

    Returns:
        Open angle in radians, 0 when the point is on or behind the goal line
    """
    point = as_point(point)
    goal_center = as_point(field.enemy_goal_center)
    if point[0] >= goal_center[0]:
        return 0.0

    base = orientation(goal_center - point)
    lo = normalize_angle(orientation(as_point(field.enemy_goalpost_neg) - point) - base)
    hi = normalize_angle(orientation(as_point(field.enemy_goalpost_pos) - point) - base)
    lo, hi = min(lo, hi), max(lo, hi)

    blocked = []
    for robot in enemy_team.robots:
        to_robot = as_point(robot.position) - point
        dist = float(np.linalg.norm(to_robot))
        if dist <= ROBOT_MAX_RADIUS_METERS:
            return 0.0
        # robots behind the shooter don't block anything
        if np.dot(to_robot, goal_center - point) <= 0:
            continue
        centre = normalize_angle(orientation(to_robot) - base)
        half_width = math.asin(ROBOT_MAX_RADIUS_METERS / dist)
        start, end = max(lo, centre - half_width), min(hi, centre + half_width)
        if start < end:
            blocked.append((start, end))

    blocked_angle = 0.0
    current_start, current_end = None, None
    for start, end in sorted(blocked):
        if current_end is None or start > current_end:
            if current_end is not None:
                blocked_angle += current_end - current_start
            current_start, current_end = start, end
        else:
            current_end = max(current_end, end)
    if current_end is not None:
        blocked_angle += current_end - current_start

    return max((hi - lo) - blocked_angle, 0.0)


def choose_pass_speed(passer_point, receiver_point) -> float:
    """Nominal speed for a pass of this length: short passes are played softly."""
    length = distance(passer_point, receiver_point)
    return float(np.clip(length * 1.2, MIN_PASS_SPEED + 0.3, MAX_PASS_SPEED - 0.3))


def rate_receiving_position(world: World, point, passer_point,
                            pass_type: PassType = PassType.ONE_TOUCH_SHOT,
                            target_region: Rectangle | None = None,
                            passer_robot_id: int | None = None) -> float:
    """Rate a point as a place to receive a pass from ``passer_point``."""
    pass_ = Pass(passer_point, point, choose_pass_speed(passer_point, point), pass_type)
    return rate_pass(world, pass_, target_region, passer_robot_id)
