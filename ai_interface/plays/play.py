"""
The play scheduling contract.

A play is a multi-stage procedure that is resumed once per tick with the
newest world snapshot. Every ``resume`` does a bounded amount of work and
hands back the tactics the team should run this tick; where the procedure
left off is kept in the play instance as an explicit stage tag plus whatever
stage-local values the play needs.
"""

import logging
from enum import Enum

from ai_interface.plays.play_config import PlayConfig
from ai_interface.tactics.tactic import Tactic
from world.world_state import World, validate_world

logger = logging.getLogger(__name__)


class Play:
    """
    Base class for plays.

    Subclasses implement ``applicable``, ``invariant`` and
    ``get_next_tactics``. ``get_next_tactics`` returns the tactics for this
    tick, or None once the procedure has run to completion. The call that
    sees None only records the final stage; after that ``resume`` keeps
    returning the final tactic list and changes nothing.
    """

    def __init__(self, config: PlayConfig):
        self.config = config
        self.stage = None
        self._last_tactics = []
        self._finished = False

    @property
    def name(self) -> str:
        return type(self).__name__

    def is_applicable(self, world: World) -> bool:
        """Whether this play could start in ``world``. Never raises."""
        return self._evaluate_predicate(self.applicable, world)

    def invariant_holds(self, world: World) -> bool:
        """Whether a running instance may keep going in ``world``. Never raises."""
        return self._evaluate_predicate(self.invariant, world)

    def done(self) -> bool:
        return self._finished

    def resume(self, world: World) -> list[Tactic]:
        """
        Continue the procedure for one tick.

        Args:
            world: This tick's snapshot; not kept past the call

        Returns:
            Ordered tactics for this tick

        Raises:
            ValueError: If ``world`` is malformed
        """
        validate_world(world)
        if self._finished:
            logger.debug("%s resumed after finishing, tactics unchanged", self.name)
            return list(self._last_tactics)

        tactics = self.get_next_tactics(world)
        if tactics is None:
            self._finished = True
            logger.info("%s finished", self.name)
            return list(self._last_tactics)

        if len({id(tactic) for tactic in tactics}) != len(tactics):
            raise RuntimeError(f"{self.name} yielded the same tactic more than once: {tactics}")
        for tactic in tactics:
            tactic.update_world_params(world)

        self._last_tactics = list(tactics)
        return list(tactics)

    def applicable(self, world: World) -> bool:
        raise NotImplementedError

    def invariant(self, world: World) -> bool:
        raise NotImplementedError

    def get_next_tactics(self, world: World) -> list[Tactic] | None:
        raise NotImplementedError

    def advance_to(self, stage: Enum):
        """Move to a later stage; stages never go backwards."""
        if self.stage is not None and stage.value < self.stage.value:
            raise RuntimeError(f"{self.name} can not go back from {self.stage.name} to {stage.name}")
        logger.debug("%s: %s -> %s", self.name,
                     self.stage.name if self.stage is not None else None, stage.name)
        self.stage = stage

    def _evaluate_predicate(self, predicate, world: World) -> bool:
        try:
            return bool(predicate(world))
        except Exception as e:
            logger.warning("%s.%s could not be evaluated: %s", self.name, predicate.__name__, e)
            return False
