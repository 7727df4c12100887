"""
The capability set every tactic offers to plays and to robot assignment.

A tactic is a single-robot behaviour. Plays create tactics, push parameters
into them and read ``done()``; the assignment stage picks a robot for each
tactic with ``update_robot`` and asks it for the robot's next command.
"""

from typing import Optional

from ai_interface.utils.basic_commands import stop
from world.geometry import distance
from world.world_state import Robot, World


class Tactic:
    """
    Base class for single-robot behaviours.

    Subclasses implement ``update_control_params`` and
    ``calculate_next_action``. A tactic created with ``loop_forever`` never
    reports done.
    """

    is_goalie = False

    def __init__(self, loop_forever: bool = False):
        self.loop_forever = loop_forever
        self._robot_id = None
        self._done = False

    def assigned_robot(self) -> Optional[int]:
        """Id of the robot running this tactic, or None if nothing is assigned."""
        return self._robot_id

    def update_robot(self, robot_id: Optional[int]):
        self._robot_id = robot_id

    def done(self) -> bool:
        return self._done

    def update_control_params(self, *args, **kwargs):
        raise NotImplementedError

    def update_world_params(self, world: World):
        """Refresh anything derived from the world. Most tactics need nothing."""

    def target_point(self, world: World):
        """Where this tactic wants its robot; used to cost robot assignments."""
        return None

    def robot_cost(self, robot: Robot, world: World) -> float:
        target = self.target_point(world)
        if target is None:
            return 0.0
        return distance(robot.position, target)

    def get_next_action(self, world: World) -> str:
        """
        Command for the assigned robot this tick.

        Returns:
            A command string; ``"stop"`` when no robot is assigned or the
            behaviour has nothing left to do
        """
        robot = None
        if self._robot_id is not None:
            robot = world.friendly_team.get_robot_by_id(self._robot_id)
        if robot is None:
            self._done = False
            return stop()

        action = self.calculate_next_action(robot, world)
        self._done = action == "done" and not self.loop_forever
        if action == "done":
            return stop()
        return action

    def calculate_next_action(self, robot: Robot, world: World) -> str:
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}(robot={self._robot_id}, done={self.done()})"


def robot_pose(robot: Robot) -> tuple:
    return (robot.position[0], robot.position[1], robot.orientation)
