"""
Cherry picking: roam a rectangle looking for a good place to receive a pass.
"""

import numpy as np

from ai_interface.passing.evaluation import rate_receiving_position
from ai_interface.passing.pass_types import PassType
from ai_interface.tactics.tactic import Tactic, robot_pose
from ai_interface.utils.basic_commands import goto
from constants.play_constants import CHERRY_PICK_GRID_SIZE
from world.geometry import Rectangle, as_point, orientation, to_tuple


class CherryPickTactic(Tactic):
    """
    Move to the best receiving position inside a rectangle.

    Every world update rates a coarse grid over the rectangle as receiving
    points for a pass kicked from the ball, and sends the robot to the best
    one, facing the ball.
    """

    def __init__(self, target_region: Rectangle, pass_type: PassType = PassType.RECEIVE_AND_DRIBBLE):
        super().__init__(loop_forever=True)
        self.target_region = target_region
        self.pass_type = pass_type
        self.destination = None
        self.destination_rating = 0.0
        self.final_orientation = 0.0

    def update_control_params(self, target_region: Rectangle):
        self.target_region = target_region

    def update_world_params(self, world):
        ball_pos = world.ball.position
        candidates = self.target_region.grid(CHERRY_PICK_GRID_SIZE)
        ratings = [rate_receiving_position(world, point, ball_pos, self.pass_type)
                   for point in candidates]
        best = int(np.argmax(ratings))

        self.destination = to_tuple(candidates[best])
        self.destination_rating = float(ratings[best])
        self.final_orientation = orientation(as_point(ball_pos) - as_point(self.destination))

    def target_point(self, world):
        if self.destination is None:
            return self.target_region.centre
        return self.destination

    def calculate_next_action(self, robot, world) -> str:
        if self.destination is None:
            self.update_world_params(world)
        return goto(robot_pose(robot), self.destination[0], self.destination[1],
                    theta=self.final_orientation)
