import numpy as np

from ai_interface.passing.pass_types import Pass, PassType
from ai_interface.tactics.tactic import Tactic, robot_pose
from ai_interface.utils.basic_commands import goto, redirect, stop
from constants.play_constants import BALL_KICKED_SPEED, MAX_PASS_SPEED
from constants.player_constants import POSSESSION_DISTANCE
from world.geometry import as_point, closest_point_on_segment, distance, orientation

# how far ahead along the ball's path we look for an interception point (s)
BALL_PATH_LOOKAHEAD = 2.0


class ReceiverTactic(Tactic):
    """
    Wait at the pass receiver point and collect the ball.

    Once the pass is on its way the receiver steps onto the ball's path. It is
    done as soon as it controls the ball; a one-touch receiver shoots at the
    enemy goal on that same tick.
    """

    def __init__(self, pass_: Pass):
        super().__init__()
        self.pass_ = pass_
        self._received = False

    def update_control_params(self, pass_: Pass):
        self.pass_ = pass_

    def done(self) -> bool:
        return self._received

    def target_point(self, world):
        return self.pass_.receiver_point

    def calculate_next_action(self, robot, world) -> str:
        if self._received:
            return "done"

        ball_pos = as_point(world.ball.position)
        if distance(robot.position, ball_pos) <= POSSESSION_DISTANCE:
            self._received = True
            if self.pass_.pass_type is PassType.ONE_TOUCH_SHOT:
                return redirect(robot_pose(robot), world.field.enemy_goal_center, MAX_PASS_SPEED)
            return "done"

        ball_vel = as_point(world.ball.velocity)
        destination = as_point(self.pass_.receiver_point)
        if np.linalg.norm(ball_vel) > BALL_KICKED_SPEED:
            path_end = ball_pos + ball_vel * BALL_PATH_LOOKAHEAD
            destination = closest_point_on_segment(robot.position, ball_pos, path_end)

        facing = orientation(ball_pos - destination)
        move = goto(robot_pose(robot), destination[0], destination[1], theta=facing)
        if move == "done":
            return stop()
        return move
