"""Starting worlds for the command-line driver and the integration tests."""

import math

from world.world_state import (Ball, Field, GameState, PlayState, RestartReason, Robot, Team,
                               World)

FRIENDLY_GOALIE_ID = 0
ENEMY_GOALIE_ID = 0


def _robot(robot_id: int, x: float, y: float, orientation: float = 0.0) -> Robot:
    return Robot(robot_id, (x, y), orientation, (0.0, 0.0))


def build_corner_kick_world(corner: str = "pos") -> World:
    """
    Our direct free kick with the ball next to an enemy corner.

    Args:
        corner: ``"pos"`` for the +y corner, ``"neg"`` for the -y corner
    """
    if corner not in ("pos", "neg"):
        raise ValueError(f"Unknown corner: {corner}")
    field = Field.default()
    sign = 1.0 if corner == "pos" else -1.0
    ball_pos = (field.x_length / 2 - 0.1, sign * (field.y_length / 2 - 0.1))

    friendly_team = Team((
        _robot(FRIENDLY_GOALIE_ID, -field.x_length / 2 + 0.2, 0.0),
        _robot(1, 2.0, sign * 1.0),
        _robot(2, 0.5, -sign * 1.5),
        _robot(3, 1.5, sign * 2.0),
        _robot(4, -1.0, 0.5),
        _robot(5, 3.0, -sign * 2.0),
    ), FRIENDLY_GOALIE_ID)
    enemy_team = Team((
        _robot(ENEMY_GOALIE_ID, field.x_length / 2 - 0.2, 0.0, math.pi),
        _robot(1, 3.5, 0.8, math.pi),
        _robot(2, 3.5, -0.8, math.pi),
        _robot(3, 2.5, 0.0, math.pi),
        _robot(4, 1.0, 1.5, math.pi),
        _robot(5, 1.0, -1.5, math.pi),
    ), ENEMY_GOALIE_ID)

    game_state = GameState(PlayState.READY, RestartReason.DIRECT_FREE, True)
    return World(field, Ball(ball_pos, (0.0, 0.0)), friendly_team, enemy_team, game_state, 0.0)
