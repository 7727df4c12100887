"""
Skills, Tactics, Plays: the per-tick entry point of the AI.

Each tick the STP makes sure a suitable play is live, resumes it with the new
world snapshot, assigns robots to the tactics it yields and collects one
command per robot.
"""

import logging
from typing import Callable, Iterable

from ai_interface.assignment import assign_robots
from ai_interface.plays.play import Play
from ai_interface.plays.play_config import PlayConfig
from ai_interface.tactics.tactic import Tactic
from ai_interface.utils.basic_commands import stop
from world.world_state import World

logger = logging.getLogger(__name__)


class STP:
    """
    Chooses, runs and stops plays.

    A live play is dropped as soon as its invariant fails or it reports done;
    a new play is then picked from ``play_factories`` in order, the first one
    that is applicable and whose invariant holds.
    """

    def __init__(self, play_factories: Iterable[Callable[[PlayConfig], Play]],
                 config: PlayConfig = PlayConfig()):
        """
        Args:
            play_factories: Callables building a fresh play from a config, in priority order
            config: Configuration handed to every play
        """
        self.play_factories = list(play_factories)
        self.config = config
        self.current_play = None

    def get_tactics(self, world: World) -> list[Tactic]:
        """Resume the live play (starting one if needed) and return its tactics."""
        if self.current_play is not None:
            if self.current_play.done():
                logger.info("%s is done", self.current_play.name)
                self.current_play = None
            elif not self.current_play.invariant_holds(world):
                logger.info("Invariant of %s no longer holds, stopping it", self.current_play.name)
                self.current_play = None

        if self.current_play is None:
            self.current_play = self._choose_play(world)
            if self.current_play is None:
                return []

        return self.current_play.resume(world)

    def decide_action(self, world: World) -> dict[int, str]:
        """
        Decide actions for all robots on the team based on the world.

        Returns:
            Mapping from robot id to command string; robots without a tactic stop
        """
        tactics = self.get_tactics(world)
        assignments = assign_robots(tactics, world)
        actions = {robot.id: stop() for robot in world.friendly_team.robots}
        for robot_id, tactic in assignments.items():
            actions[robot_id] = tactic.get_next_action(world)
        return actions

    def _choose_play(self, world: World):
        for play_factory in self.play_factories:
            play = play_factory(self.config)
            if play.is_applicable(world) and play.invariant_holds(world):
                logger.info("Starting %s", play.name)
                return play
        return None
