import numpy as np

from ai_interface.passing.pass_types import Pass
from ai_interface.tactics.tactic import Tactic, robot_pose
from ai_interface.utils.algo_utils import calculate_shooting_pose
from ai_interface.utils.basic_commands import goto, pass_to_point
from constants.field_constants import BALL_MAX_RADIUS_METERS
from constants.play_constants import BALL_KICKED_SPEED
from constants.player_constants import ROBOT_MAX_RADIUS_METERS

# distance between robot and ball centers when lining up a kick
KICK_OFFSET = ROBOT_MAX_RADIUS_METERS + BALL_MAX_RADIUS_METERS


class PasserTactic(Tactic):
    """Line up behind the ball and kick the given pass. Done once the ball is moving."""

    def __init__(self, pass_: Pass):
        super().__init__()
        self.pass_ = pass_
        self._kick_issued = False
        self._kicked = False

    def update_control_params(self, pass_: Pass):
        self.pass_ = pass_

    def done(self) -> bool:
        return self._kicked

    def target_point(self, world):
        return tuple(calculate_shooting_pose(world.ball.position, self.pass_.receiver_point,
                                             KICK_OFFSET)[:2])

    def calculate_next_action(self, robot, world) -> str:
        ball_speed = float(np.linalg.norm(world.ball.velocity))
        if self._kick_issued and ball_speed > BALL_KICKED_SPEED:
            self._kicked = True
        if self._kicked:
            return "done"

        pose = calculate_shooting_pose(world.ball.position, self.pass_.receiver_point, KICK_OFFSET)
        move = goto(robot_pose(robot), pose[0], pose[1], theta=pose[2])
        if move != "done":
            return move

        kick = pass_to_point(robot_pose(robot), world.ball.position,
                             self.pass_.receiver_point, self.pass_.speed_m_per_s)
        if kick == "failed":
            return move
        self._kick_issued = True
        return kick
