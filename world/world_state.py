"""
Immutable World Snapshot types.

A new ``World`` is built for every control tick. Plays and tactics only ever
read it; producing the next snapshot is the job of whatever feeds the AI
(vision, or the kinematic simulator used by the command-line driver).
"""

import math
from collections import namedtuple
from enum import Enum

from constants.field_constants import (FIELD_X_LENGTH, FIELD_Y_LENGTH, DEFENSE_X_LENGTH,
                                       DEFENSE_Y_LENGTH, GOAL_Y_LENGTH)
from world.geometry import Rectangle


class PlayState(Enum):
    HALT = "halt"
    STOP = "stop"
    SETUP = "setup"
    READY = "ready"
    PLAYING = "playing"


class RestartReason(Enum):
    NONE = "none"
    KICKOFF = "kickoff"
    DIRECT_FREE = "direct_free"
    INDIRECT_FREE = "indirect_free"
    PENALTY = "penalty"
    BALL_PLACEMENT = "ball_placement"


_GameStateBase = namedtuple("GameState", ["play_state", "restart_reason", "our_restart"])


class GameState(_GameStateBase):
    """Referee-derived state of the game."""
    __slots__ = ()

    def is_playing(self) -> bool:
        return self.play_state is PlayState.PLAYING

    def is_ready_state(self) -> bool:
        return self.play_state is PlayState.READY

    def is_stopped(self) -> bool:
        return self.play_state in (PlayState.HALT, PlayState.STOP)

    def _is_free_kick(self) -> bool:
        return self.restart_reason in (RestartReason.DIRECT_FREE, RestartReason.INDIRECT_FREE)

    def is_our_free_kick(self) -> bool:
        return self._is_free_kick() and bool(self.our_restart)

    def is_their_free_kick(self) -> bool:
        return self._is_free_kick() and not self.our_restart

    def with_play_state(self, play_state: PlayState) -> "GameState":
        return self._replace(play_state=play_state)


_FieldBase = namedtuple(
    "Field", ["x_length", "y_length", "defense_x_length", "defense_y_length", "goal_y_length"]
)


class Field(_FieldBase):
    """
    Field dimensions with the derived points plays care about.

    The origin is the center of the field and the enemy goal lies on +x.
    """
    __slots__ = ()

    @classmethod
    def default(cls) -> "Field":
        return cls(FIELD_X_LENGTH, FIELD_Y_LENGTH, DEFENSE_X_LENGTH,
                   DEFENSE_Y_LENGTH, GOAL_Y_LENGTH)

    @property
    def center_point(self) -> tuple:
        return (0.0, 0.0)

    @property
    def enemy_corner_pos(self) -> tuple:
        return (self.x_length / 2, self.y_length / 2)

    @property
    def enemy_corner_neg(self) -> tuple:
        return (self.x_length / 2, -self.y_length / 2)

    @property
    def friendly_corner_pos(self) -> tuple:
        return (-self.x_length / 2, self.y_length / 2)

    @property
    def friendly_corner_neg(self) -> tuple:
        return (-self.x_length / 2, -self.y_length / 2)

    @property
    def enemy_goal_center(self) -> tuple:
        return (self.x_length / 2, 0.0)

    @property
    def friendly_goal_center(self) -> tuple:
        return (-self.x_length / 2, 0.0)

    @property
    def enemy_goalpost_pos(self) -> tuple:
        return (self.x_length / 2, self.goal_y_length / 2)

    @property
    def enemy_goalpost_neg(self) -> tuple:
        return (self.x_length / 2, -self.goal_y_length / 2)

    @property
    def enemy_defense_area(self) -> Rectangle:
        return Rectangle(self.x_length / 2 - self.defense_x_length, -self.defense_y_length / 2,
                         self.x_length / 2, self.defense_y_length / 2)

    @property
    def friendly_defense_area(self) -> Rectangle:
        return Rectangle(-self.x_length / 2, -self.defense_y_length / 2,
                         -self.x_length / 2 + self.defense_x_length, self.defense_y_length / 2)

    @property
    def field_lines(self) -> Rectangle:
        return Rectangle.from_corners(self.friendly_corner_neg, self.enemy_corner_pos)

    def point_in_field(self, point) -> bool:
        return self.field_lines.contains(point)


Ball = namedtuple("Ball", ["position", "velocity"])

Robot = namedtuple("Robot", ["id", "position", "orientation", "velocity"])


class Team(namedtuple("Team", ["robots", "goalie_id"])):
    __slots__ = ()

    @property
    def robot_ids(self) -> list[int]:
        return [robot.id for robot in self.robots]

    def get_robot_by_id(self, robot_id: int):
        for robot in self.robots:
            if robot.id == robot_id:
                return robot
        return None

    @property
    def goalie(self):
        if self.goalie_id is None:
            return None
        return self.get_robot_by_id(self.goalie_id)


class World(namedtuple("World", ["field", "ball", "friendly_team", "enemy_team",
                                 "game_state", "timestamp"])):
    """One tick's view of the game. ``timestamp`` is monotonic, in seconds."""
    __slots__ = ()

    def replace(self, **kwargs) -> "World":
        return self._replace(**kwargs)


def validate_world(world: World):
    """
    Reject snapshots no play can reason about.

    Raises:
        ValueError: If the field has no area, the ball position is not finite
            or we have no robots.
    """
    field = world.field
    if field.x_length <= 0 or field.y_length <= 0:
        raise ValueError(f"Field has no area: {field}")
    if not all(math.isfinite(c) for c in world.ball.position[:2]):
        raise ValueError(f"Ball position is not finite: {world.ball.position}")
    if not world.friendly_team.robots:
        raise ValueError("World has no friendly robots")
