"""Shared pytest fixtures for the team AI tests."""

import itertools

import pytest

from ai_interface.passing.pass_types import Pass, PassWithRating
from world.world_state import (Ball, Field, GameState, PlayState, RestartReason, Robot, Team,
                               World)


def make_robot(robot_id: int, pose) -> Robot:
    x, y = pose[0], pose[1]
    theta = pose[2] if len(pose) > 2 else 0.0
    return Robot(robot_id, (x, y), theta, (0.0, 0.0))


@pytest.fixture
def make_world():
    """
    Build a world from plain values.

    Robots are given as ``{id: (x, y)}`` or ``{id: (x, y, theta)}``.
    """
    def _make(ball=(0.0, 0.0), ball_velocity=(0.0, 0.0), friendly=None, enemy=None,
              friendly_goalie_id=None, enemy_goalie_id=None, play_state=PlayState.PLAYING,
              restart_reason=RestartReason.NONE, our_restart=False, timestamp=0.0,
              field=None) -> World:
        friendly = {1: (-1.0, 0.0)} if friendly is None else friendly
        enemy = {} if enemy is None else enemy
        friendly_team = Team(tuple(make_robot(i, p) for i, p in friendly.items()), friendly_goalie_id)
        enemy_team = Team(tuple(make_robot(i, p) for i, p in enemy.items()), enemy_goalie_id)
        return World(field or Field.default(), Ball(ball, ball_velocity), friendly_team, enemy_team,
                     GameState(play_state, restart_reason, our_restart), timestamp)
    return _make


@pytest.fixture
def field() -> Field:
    return Field.default()


class FakePassGenerator:
    """Stands in for the pass generator; hands out a fixed pass with scripted ratings."""

    def __init__(self, world, passer_point, pass_type, background=False, seed=None):
        self.passer_point = passer_point
        self.pass_type = pass_type
        self.background = background
        self.seed = seed
        self.receiver_point = (2.0, 1.0)
        self.speed = 3.0
        self.ratings = itertools.cycle([0.0])
        self.passer_robot_id = None
        self.target_region = None
        self.worlds_seen = 0
        self.stopped = False

    def set_world(self, world):
        self.worlds_seen += 1

    def set_passer_point(self, passer_point):
        self.passer_point = passer_point

    def set_passer_robot_id(self, robot_id):
        self.passer_robot_id = robot_id

    def set_target_region(self, target_region):
        self.target_region = target_region

    def set_ratings(self, ratings):
        self.ratings = itertools.cycle(ratings)

    def get_best_pass_so_far(self) -> PassWithRating:
        pass_ = Pass(self.passer_point, self.receiver_point, self.speed, self.pass_type)
        return PassWithRating(pass_, next(self.ratings))

    def stop(self):
        self.stopped = True


@pytest.fixture
def fake_pass_generator_factory():
    """Factory building ``FakePassGenerator``s; every instance is kept in ``.created``."""
    created = []

    def factory(*args, **kwargs):
        generator = FakePassGenerator(*args, **kwargs)
        created.append(generator)
        return generator

    factory.created = created
    return factory
