import numpy as np

from ai_interface.tactics.tactic import Tactic, robot_pose
from ai_interface.utils.basic_commands import goto
from constants.player_constants import ROBOT_MAX_RADIUS_METERS
from world.geometry import as_point, orientation, to_tuple

# how far in front of the goal line the goalie stands (m)
GOALIE_LINE_OFFSET = ROBOT_MAX_RADIUS_METERS + 0.05


class GoalieTactic(Tactic):
    """Stand on the goal mouth, on the line between the ball and the goal center."""

    is_goalie = True

    def __init__(self):
        super().__init__(loop_forever=True)
        self.destination = None
        self.final_orientation = 0.0

    def update_control_params(self):
        """The goalie takes everything it needs from the world."""

    def update_world_params(self, world):
        field = world.field
        goal_center = as_point(field.friendly_goal_center)
        ball_pos = as_point(world.ball.position)
        guard_x = goal_center[0] + GOALIE_LINE_OFFSET

        to_ball = ball_pos - goal_center
        if to_ball[0] > 1e-6:
            guard_y = goal_center[1] + to_ball[1] * (guard_x - goal_center[0]) / to_ball[0]
        else:
            guard_y = np.sign(to_ball[1]) * field.goal_y_length / 2
        half_goal = field.goal_y_length / 2 - ROBOT_MAX_RADIUS_METERS
        guard_y = float(np.clip(guard_y, -half_goal, half_goal))

        # the goalie never leaves its defense area
        self.destination = to_tuple(field.friendly_defense_area.clamp((guard_x, guard_y)))
        self.final_orientation = orientation(ball_pos - np.array(self.destination))

    def target_point(self, world):
        return self.destination

    def calculate_next_action(self, robot, world) -> str:
        if self.destination is None:
            self.update_world_params(world)
        return goto(robot_pose(robot), self.destination[0], self.destination[1],
                    theta=self.final_orientation)
