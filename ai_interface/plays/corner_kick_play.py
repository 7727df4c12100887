"""
Corner kick play.

There are three main stages once the support robots are set up:

1. Align the passer to the ball. The passer lines up behind the ball, facing
   the center of the field. Meanwhile two cherry pickers roam rectangles on
   the attacking half looking for good places to receive, and two bait robots
   hold static points on the far side of the field to draw enemies away from
   where we are likely to pass.
2. Decide on a pass. We start out only accepting a perfect pass and lower the
   bar over time, so we are eventually forced to accept one. The cherry
   pickers and bait robots keep running.
3. Execute the pass. The chosen pass never changes from here on; we run a
   passer and a receiver until the receiver has the ball.

"Pass" here can mean the receiver stops the ball, or that it redirects it at
the goal on first touch (a one-touch shot). This play uses one-touch shots.
"""

import logging
import math
from enum import Enum

from ai_interface.passing.pass_generator import PassGenerator
from ai_interface.passing.pass_types import PassType
from ai_interface.plays.decay_policy import LinearDecayPolicy
from ai_interface.plays.play import Play
from ai_interface.plays.play_config import PlayConfig
from ai_interface.tactics.cherry_pick_tactic import CherryPickTactic
from ai_interface.tactics.goalie_tactic import GoalieTactic
from ai_interface.tactics.move_tactic import MoveTactic
from ai_interface.tactics.passer_tactic import PasserTactic
from ai_interface.tactics.receiver_tactic import ReceiverTactic
from constants.field_constants import BALL_IN_CORNER_RADIUS
from constants.player_constants import ROBOT_MAX_RADIUS_METERS
from world.evaluation import team_has_possession, team_pass_in_progress
from world.geometry import Rectangle, as_point, distance, normalize, orientation
from world.world_state import World

logger = logging.getLogger(__name__)


class CornerKickStage(Enum):
    SETUP = 0
    ALIGN = 1
    DECIDE = 2
    EXECUTE = 3
    FINISHED = 4


class CornerKickPlay(Play):
    """Take a free kick from one of the enemy corners by passing into the attacking half."""

    def __init__(self, config: PlayConfig = PlayConfig(), pass_generator_factory=PassGenerator,
                 decay_policy=None):
        """
        Args:
            config: Play configuration, read once here
            pass_generator_factory: Builds the pass generator; called as
                ``factory(world, passer_point, pass_type, background=..., seed=...)``
            decay_policy: Acceptance threshold over time; defaults to a linear
                decay over the configured maximum commit time
        """
        super().__init__(config)
        max_commit_time = config.corner_kick_play_config.max_time_commit_to_pass_seconds
        self.decay_policy = decay_policy or LinearDecayPolicy(max_commit_time)
        self.pass_generator_factory = pass_generator_factory
        self.stage = CornerKickStage.SETUP

        self.goalie_tactic = None
        self.bait_move_tactic_1 = None
        self.bait_move_tactic_2 = None
        self.align_to_ball_tactic = None
        self.cherry_pick_tactic_pos_y = None
        self.cherry_pick_tactic_neg_y = None
        self.passer_tactic = None
        self.receiver_tactic = None

        self.pass_generator = None
        self.passer_robot_id = None
        self.commit_stage_start_time = None
        self.min_score = 1.0
        self.best_pass_and_score_so_far = None
        self.committed_pass = None

    def applicable(self, world: World) -> bool:
        field, ball_pos = world.field, world.ball.position
        min_dist_to_corner = min(distance(field.enemy_corner_pos, ball_pos),
                                 distance(field.enemy_corner_neg, ball_pos))
        return world.game_state.is_our_free_kick() and min_dist_to_corner <= BALL_IN_CORNER_RADIUS

    def invariant(self, world: World) -> bool:
        game_state = world.game_state
        return ((game_state.is_playing() or game_state.is_ready_state())
                and (not team_has_possession(world, world.enemy_team)
                     or team_pass_in_progress(world, world.friendly_team)))

    def done(self) -> bool:
        if self.stage is CornerKickStage.EXECUTE:
            return self.receiver_tactic.done()
        return super().done()

    def get_next_tactics(self, world: World):
        if self.stage is CornerKickStage.SETUP:
            self._setup(world)
        if self.stage is CornerKickStage.ALIGN:
            return self._align(world)
        if self.stage is CornerKickStage.DECIDE:
            return self._decide(world)
        if self.stage is CornerKickStage.EXECUTE:
            return self._execute(world)
        return None

    def _setup(self, world: World):
        field = world.field
        ball_pos = as_point(world.ball.position)
        defense_y_length = field.enemy_defense_area.y_length

        self.goalie_tactic = GoalieTactic()

        # Two bait robots on the opposite side of the field to where the corner
        # kick is taking place pull enemies away from the goal
        opposite_corner_to_kick = as_point(field.enemy_corner_neg if ball_pos[1] > 0
                                           else field.enemy_corner_pos)
        y_offset = math.copysign(0.5, opposite_corner_to_kick[1])
        bait_move_tactic_1_pos = opposite_corner_to_kick - (defense_y_length * 0.5, y_offset)
        bait_move_tactic_2_pos = opposite_corner_to_kick - (defense_y_length * 1.5, y_offset)
        self.bait_move_tactic_1 = MoveTactic(loop_forever=True)
        self.bait_move_tactic_2 = MoveTactic(loop_forever=True)
        goal = as_point(field.enemy_goal_center)
        self.bait_move_tactic_1.update_control_params(
            bait_move_tactic_1_pos, orientation(goal - bait_move_tactic_1_pos))
        self.bait_move_tactic_2.update_control_params(
            bait_move_tactic_2_pos, orientation(goal - bait_move_tactic_2_pos))

        # The cherry pickers search rectangles on the +y and -y sides of the
        # attacking half; the one on the kick side stays further off the goal line
        pos_y_goalline_x_offset = as_point((defense_y_length, 0))
        neg_y_goalline_x_offset = as_point((defense_y_length, 0))
        if ball_pos[1] > 0:
            pos_y_goalline_x_offset = pos_y_goalline_x_offset + (defense_y_length, 0)
        else:
            neg_y_goalline_x_offset = neg_y_goalline_x_offset + (defense_y_length, 0)
        center_line_x_offset = as_point((1, 0))
        pos_y_cherry_pick_rectangle = Rectangle.from_corners(
            as_point(field.center_point) + center_line_x_offset,
            as_point(field.enemy_corner_pos) - pos_y_goalline_x_offset)
        neg_y_cherry_pick_rectangle = Rectangle.from_corners(
            as_point(field.center_point) + center_line_x_offset,
            as_point(field.enemy_corner_neg) - neg_y_goalline_x_offset)

        self.align_to_ball_tactic = MoveTactic(loop_forever=False)
        self.cherry_pick_tactic_pos_y = CherryPickTactic(pos_y_cherry_pick_rectangle, PassType.ONE_TOUCH_SHOT)
        self.cherry_pick_tactic_neg_y = CherryPickTactic(neg_y_cherry_pick_rectangle, PassType.ONE_TOUCH_SHOT)

        self.pass_generator = self.pass_generator_factory(
            world, world.ball.position, PassType.ONE_TOUCH_SHOT,
            background=self.config.threaded_pass_generator, seed=self.config.seed)
        # Target any pass in the enemy half of the field, shifted up by 1 meter
        # from the center line
        self.pass_generator.set_target_region(
            Rectangle.from_corners((1, field.y_length / 2), field.enemy_corner_neg))
        self.best_pass_and_score_so_far = self.pass_generator.get_best_pass_so_far()

        self.advance_to(CornerKickStage.ALIGN)

    def _align(self, world: World):
        if self.passer_robot_id is None:
            robot_id = self.align_to_ball_tactic.assigned_robot()
            if robot_id is None:
                logger.debug("Nothing assigned to align to ball yet")
            else:
                self._register_passer(robot_id)
                logger.debug("Aligning to ball with robot %d", robot_id)
        elif self.align_to_ball_tactic.done():
            logger.debug("Finished aligning to ball")
            # the aligned robot is the passer, even if assignment moved it around
            if self.align_to_ball_tactic.assigned_robot() is not None:
                self._register_passer(self.align_to_ball_tactic.assigned_robot())
            self.min_score = 1.0
            self.commit_stage_start_time = world.timestamp
            self.advance_to(CornerKickStage.DECIDE)

        self._update_align_to_ball_tactic(world)
        self._update_pass_generator(world)
        return self._setup_tactics()

    def _decide(self, world: World):
        self._update_align_to_ball_tactic(world)
        self._update_pass_generator(world)

        self.best_pass_and_score_so_far = self.pass_generator.get_best_pass_so_far()
        time_since_commit_stage_start = world.timestamp - self.commit_stage_start_time
        self.min_score = self.decay_policy.min_score(time_since_commit_stage_start)
        logger.debug("Best pass found so far is: %s", self.best_pass_and_score_so_far.pass_)
        logger.debug("    with score: %.3f (need %.3f)",
                     self.best_pass_and_score_so_far.rating, self.min_score)

        if self.best_pass_and_score_so_far.rating < self.min_score:
            return self._setup_tactics()

        self._commit_to_pass(world)
        self.advance_to(CornerKickStage.EXECUTE)
        return self._execute(world)

    def _commit_to_pass(self, world: World):
        self.committed_pass = self.best_pass_and_score_so_far.pass_
        logger.info("Committing to pass: %s", self.committed_pass)
        logger.info("Score of pass we committed to: %.3f", self.best_pass_and_score_so_far.rating)

        self.pass_generator.stop()
        self.passer_tactic = PasserTactic(self.committed_pass)
        self.receiver_tactic = ReceiverTactic(self.committed_pass)

    def _execute(self, world: World):
        if self.receiver_tactic.done():
            self.advance_to(CornerKickStage.FINISHED)
            return None

        self.passer_tactic.update_control_params(self.committed_pass)
        self.receiver_tactic.update_control_params(self.committed_pass)
        return [self.goalie_tactic, self.passer_tactic, self.receiver_tactic,
                self.bait_move_tactic_1, self.bait_move_tactic_2]

    def _setup_tactics(self):
        return [self.goalie_tactic, self.align_to_ball_tactic, self.cherry_pick_tactic_pos_y,
                self.cherry_pick_tactic_neg_y, self.bait_move_tactic_1, self.bait_move_tactic_2]

    def _register_passer(self, robot_id: int):
        self.passer_robot_id = robot_id
        self.pass_generator.set_passer_robot_id(robot_id)

    def _update_align_to_ball_tactic(self, world: World):
        ball_pos = as_point(world.ball.position)
        ball_to_center_vec = as_point(world.field.center_point) - ball_pos
        # get behind the ball, facing the center of the field
        self.align_to_ball_tactic.update_control_params(
            ball_pos - normalize(ball_to_center_vec, ROBOT_MAX_RADIUS_METERS * 2),
            orientation(ball_to_center_vec))

    def _update_pass_generator(self, world: World):
        self.pass_generator.set_world(world)
        self.pass_generator.set_passer_point(world.ball.position)
