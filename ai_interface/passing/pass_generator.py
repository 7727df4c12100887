"""
Incremental pass optimizer.

The generator keeps a small population of candidate passes and improves them
a little at a time, so whoever asks for the best pass never waits on a full
search. Refinement either happens in bounded steps pushed by ``set_world``
(the default) or continuously on a background thread.
"""

import logging
import threading
import weakref

import numpy as np
from scipy.optimize import minimize

from ai_interface.passing.evaluation import rate_pass
from ai_interface.passing.pass_types import Pass, PassType, PassWithRating
from constants.play_constants import (MIN_PASS_SPEED, MAX_PASS_SPEED, NUM_PASSES_TO_OPTIMIZE,
                                      NUM_PASSES_TO_KEEP_AFTER_PRUNING, PASS_OPTIMIZER_MAX_ITERATIONS,
                                      MIN_RECEIVER_POINT_SEPARATION, OPTIMIZER_BACKGROUND_PERIOD)
from world.geometry import Rectangle, to_tuple
from world.world_state import World

logger = logging.getLogger(__name__)


class PassGenerator:
    """
    Maintains the best pass found so far from a passer point into a target region.

    All public methods may be called from one thread while refinement runs on
    another; shared state is only touched under an internal lock, which is held
    just long enough to copy or swap it.
    """

    def __init__(self, world: World, passer_point, pass_type: PassType = PassType.RECEIVE_AND_DRIBBLE,
                 background: bool = False, seed: int | None = None):
        """
        Args:
            world: Initial world snapshot
            passer_point: Where the pass will be kicked from
            pass_type: Archetype of every pass this generator produces
            background: Refine on a daemon thread instead of inside ``set_world``
            seed: Seed for the random candidate sampling
        """
        self._lock = threading.Lock()
        self._world = world
        self._passer_point = to_tuple(passer_point)
        self._passer_robot_id = None
        self._pass_type = pass_type
        self._target_region = None
        # bumped whenever the candidates are resampled, so a refinement step
        # started before that does not write stale candidates back
        self._generation = 0
        self._rng = np.random.default_rng(seed)
        # each row is one candidate: receiver x, receiver y, speed
        self._candidates = self._sample_candidates(NUM_PASSES_TO_OPTIMIZE)

        self._stop_event = threading.Event()
        self._thread = None
        if background:
            self._thread = threading.Thread(target=_refine_forever,
                                            args=(weakref.ref(self), self._stop_event),
                                            name="PassGenerator", daemon=True)
            self._thread.start()

    @property
    def running_in_background(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def set_world(self, world: World):
        with self._lock:
            self._world = world
        if self._thread is None:
            self.optimize_step()

    def set_passer_point(self, passer_point):
        with self._lock:
            self._passer_point = to_tuple(passer_point)

    def set_passer_robot_id(self, robot_id: int):
        """The passer is never considered as a receiver."""
        with self._lock:
            self._passer_robot_id = robot_id

    def set_target_region(self, target_region: Rectangle | None):
        """Restrict receiver points to ``target_region``; None allows the whole field."""
        with self._lock:
            self._target_region = target_region
            self._generation += 1
            self._candidates = self._sample_candidates(NUM_PASSES_TO_OPTIMIZE)

    def get_best_pass_so_far(self) -> PassWithRating:
        """
        Best candidate, rated against the most recently pushed world.

        Does no searching of its own; right after construction the result may
        be poor.
        """
        with self._lock:
            context = self._context()
            candidates = self._candidates.copy()
        rated = [self._rate(context, candidate) for candidate in candidates]
        return max(rated, key=lambda pass_with_rating: pass_with_rating.rating)

    def optimize_step(self):
        """Run one bounded round of local optimization, pruning and resampling."""
        with self._lock:
            context = self._context()
            candidates = self._candidates.copy()
            generation = self._generation

        def objective(params):
            return -self._rate(context, params).rating

        optimized = []
        for candidate in candidates:
            result = minimize(objective, candidate, method="Nelder-Mead",
                              options={"maxiter": PASS_OPTIMIZER_MAX_ITERATIONS,
                                       "xatol": 1e-3, "fatol": 1e-4})
            optimized.append((-float(result.fun), np.asarray(result.x, dtype=float)))
        optimized.sort(key=lambda rated: rated[0], reverse=True)

        kept = []
        for _, params in optimized:
            if len(kept) >= NUM_PASSES_TO_KEEP_AFTER_PRUNING:
                break
            if all(np.linalg.norm(params[:2] - other[:2]) >= MIN_RECEIVER_POINT_SEPARATION
                   for other in kept):
                kept.append(params)

        with self._lock:
            if generation != self._generation:
                logger.debug("Target region changed during refinement, dropping the step")
                return
            fresh = self._sample_candidates(NUM_PASSES_TO_OPTIMIZE - len(kept))
            self._candidates = np.vstack([np.array(kept).reshape(-1, 3), fresh])

        logger.debug("Best pass candidate rating after refinement: %.3f", optimized[0][0])

    def stop(self):
        """Stop background refinement. Harmless when running synchronously."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)

    def _context(self) -> tuple:
        return (self._world, self._passer_point, self._passer_robot_id,
                self._target_region, self._pass_type)

    @staticmethod
    def _rate(context: tuple, params) -> PassWithRating:
        world, passer_point, passer_robot_id, target_region, pass_type = context
        pass_ = Pass(passer_point, params[:2], params[2], pass_type)
        return PassWithRating(pass_, rate_pass(world, pass_, target_region, passer_robot_id))

    def _sample_candidates(self, n: int) -> np.ndarray:
        region = self._target_region
        if region is None:
            region = self._world.field.field_lines
        points = region.sample(self._rng, n)
        speeds = self._rng.uniform(MIN_PASS_SPEED, MAX_PASS_SPEED, size=n)
        return np.column_stack([points, speeds]).reshape(-1, 3)


def _refine_forever(generator_ref, stop_event: threading.Event):
    """Background refinement loop; exits once the generator is garbage collected."""
    while not stop_event.is_set():
        generator = generator_ref()
        if generator is None:
            return
        try:
            generator.optimize_step()
        except Exception as e:
            logger.error("Pass generator refinement stopped: %s", e)
            return
        del generator
        stop_event.wait(OPTIMIZER_BACKGROUND_PERIOD)
