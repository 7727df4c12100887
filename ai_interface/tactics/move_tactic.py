from ai_interface.tactics.tactic import Tactic, robot_pose
from ai_interface.utils.basic_commands import goto, stop
from constants.player_constants import ROBOT_MAX_SPEED
from world.geometry import to_tuple


class MoveTactic(Tactic):
    """Drive to a point and face a given direction."""

    def __init__(self, loop_forever: bool = False):
        super().__init__(loop_forever)
        self.destination = None
        self.final_orientation = None

    def update_control_params(self, destination, final_orientation: float):
        self.destination = to_tuple(destination)
        self.final_orientation = float(final_orientation)

    def target_point(self, world):
        return self.destination

    def calculate_next_action(self, robot, world) -> str:
        if self.destination is None:
            return stop()
        return goto(robot_pose(robot), self.destination[0], self.destination[1],
                    theta=self.final_orientation, speed=ROBOT_MAX_SPEED)
