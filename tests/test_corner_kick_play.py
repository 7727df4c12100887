import math

import pytest

from ai_interface.assignment import assign_robots
from ai_interface.passing.pass_types import PassType
from ai_interface.plays.corner_kick_play import CornerKickPlay, CornerKickStage
from ai_interface.plays.play_config import CornerKickPlayConfig, PlayConfig
from ai_interface.tactics.cherry_pick_tactic import CherryPickTactic
from ai_interface.tactics.goalie_tactic import GoalieTactic
from ai_interface.tactics.move_tactic import MoveTactic
from ai_interface.tactics.passer_tactic import PasserTactic
from ai_interface.tactics.receiver_tactic import ReceiverTactic
from constants.player_constants import ROBOT_MAX_RADIUS_METERS
from world.geometry import Rectangle, as_point, normalize, orientation
from world.world_state import Ball, PlayState, RestartReason

BALL = (4.4, 2.9)


def _align_pose():
    ball = as_point(BALL)
    to_center = -ball
    x, y = ball - normalize(to_center, 2 * ROBOT_MAX_RADIUS_METERS)
    return (float(x), float(y), orientation(to_center))


def _corner_world(make_world, timestamp=0.0, passer_pose=None, **kwargs):
    """Our free kick from the +y enemy corner, robot 1 already lined up behind the ball."""
    friendly = {0: (-4.3, 0.0), 1: passer_pose or _align_pose(), 2: (1.0, 1.0)}
    options = dict(ball=BALL, friendly=friendly, enemy={0: (4.3, 0.0)}, friendly_goalie_id=0,
                   enemy_goalie_id=0, play_state=PlayState.READY,
                   restart_reason=RestartReason.DIRECT_FREE, our_restart=True, timestamp=timestamp)
    options.update(kwargs)
    return make_world(**options)


def _play(factory, max_commit_time=2.0):
    config = PlayConfig(CornerKickPlayConfig(max_commit_time))
    return CornerKickPlay(config, pass_generator_factory=factory)


def _tick(play, world):
    tactics = play.resume(world)
    assignments = assign_robots(tactics, world)
    actions = {robot_id: tactic.get_next_action(world) for robot_id, tactic in assignments.items()}
    return tactics, actions


def _run_to_decide(play, make_world):
    for _ in range(3):
        _tick(play, _corner_world(make_world))
    assert play.stage is CornerKickStage.DECIDE


def test_applicable_for_our_free_kick_in_an_enemy_corner(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    assert play.is_applicable(_corner_world(make_world))
    assert play.is_applicable(_corner_world(make_world, ball=(4.4, -2.8)))
    assert not play.is_applicable(_corner_world(make_world, ball=(0.0, 0.0)))
    assert not play.is_applicable(_corner_world(make_world, our_restart=False))
    assert not play.is_applicable(_corner_world(make_world, restart_reason=RestartReason.KICKOFF))


def test_invariant(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    assert play.invariant_holds(_corner_world(make_world))
    assert play.invariant_holds(_corner_world(make_world, play_state=PlayState.PLAYING))
    assert not play.invariant_holds(_corner_world(make_world, play_state=PlayState.HALT))
    assert not play.invariant_holds(_corner_world(make_world, play_state=PlayState.STOP))
    # enemy controls the ball
    assert not play.invariant_holds(_corner_world(make_world, enemy={0: (4.45, 2.95)}))


def test_invariant_holds_while_our_pass_is_on_its_way(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    # enemy right next to the ball, but the ball is flying towards robot 2 at (1, 1)
    passing = _corner_world(make_world, enemy={0: (4.45, 2.95)}, ball_velocity=(-3.4, -1.9),
                            play_state=PlayState.PLAYING)
    assert play.invariant_holds(passing)
    assert not play.invariant_holds(passing.replace(ball=Ball(BALL, (0.0, 0.0))))


def test_predicates_never_raise(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    broken = _corner_world(make_world).replace(ball=None)
    assert play.is_applicable(broken) is False
    assert play.invariant_holds(broken) is False


def test_setup_creates_the_pass_generator(make_world, fake_pass_generator_factory, field):
    play = _play(fake_pass_generator_factory)
    tactics = play.resume(_corner_world(make_world))

    assert play.stage is CornerKickStage.ALIGN
    (generator,) = fake_pass_generator_factory.created
    assert generator.pass_type is PassType.ONE_TOUCH_SHOT
    assert generator.background is False
    assert generator.target_region == Rectangle(1.0, -3.0, 4.5, 3.0)
    assert tuple(generator.passer_point) == pytest.approx(BALL)
    assert len(tactics) == 6


def test_tactic_sets_per_stage(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    setup_types = [GoalieTactic, MoveTactic, CherryPickTactic, CherryPickTactic, MoveTactic, MoveTactic]

    tactics, _ = _tick(play, _corner_world(make_world))
    assert [type(tactic) for tactic in tactics] == setup_types
    assert len({id(tactic) for tactic in tactics}) == len(tactics)
    first_tactics = tactics

    _run_to_decide(play, make_world)
    tactics, _ = _tick(play, _corner_world(make_world, timestamp=0.5))
    assert play.stage is CornerKickStage.DECIDE
    assert [type(tactic) for tactic in tactics] == setup_types
    # tactic identity is kept across ticks
    assert all(a is b for a, b in zip(tactics, first_tactics))

    fake_pass_generator_factory.created[0].set_ratings([1.0])
    tactics, _ = _tick(play, _corner_world(make_world, timestamp=0.6))
    assert play.stage is CornerKickStage.EXECUTE
    assert [type(tactic) for tactic in tactics] == [GoalieTactic, PasserTactic, ReceiverTactic,
                                                    MoveTactic, MoveTactic]
    assert tactics[0] is first_tactics[0]
    assert tactics[3] is first_tactics[4]
    assert tactics[4] is first_tactics[5]


def test_bait_and_cherry_pick_positions(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    play.resume(_corner_world(make_world))

    assert play.bait_move_tactic_1.destination == pytest.approx((3.5, -2.5))
    assert play.bait_move_tactic_2.destination == pytest.approx((1.5, -2.5))
    # the kick side rectangle keeps further off the goal line
    assert play.cherry_pick_tactic_pos_y.target_region == Rectangle(0.5, 0.0, 1.0, 3.0)
    assert play.cherry_pick_tactic_neg_y.target_region == Rectangle(1.0, -3.0, 2.5, 0.0)


def test_stays_aligning_while_nobody_is_assigned(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    for tick in range(100):
        tactics = play.resume(_corner_world(make_world, timestamp=tick * 0.05))
        assert play.stage is CornerKickStage.ALIGN
        assert len(tactics) == 6
    assert play.passer_robot_id is None
    assert play.commit_stage_start_time is None


def test_passer_is_registered_with_the_generator(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    _tick(play, _corner_world(make_world))
    _tick(play, _corner_world(make_world))
    assert play.passer_robot_id == 1
    assert fake_pass_generator_factory.created[0].passer_robot_id == 1


def test_commits_once_the_threshold_has_decayed_below_the_score(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory, max_commit_time=2.0)
    _run_to_decide(play, make_world)
    assert play.commit_stage_start_time == 0.0
    generator = fake_pass_generator_factory.created[0]
    generator.set_ratings([0.4])

    _tick(play, _corner_world(make_world, timestamp=0.5))
    assert play.stage is CornerKickStage.DECIDE
    assert play.min_score == pytest.approx(0.75)
    assert play.committed_pass is None
    assert not generator.stopped

    _tick(play, _corner_world(make_world, timestamp=1.8))
    assert play.min_score == pytest.approx(0.1)
    assert play.stage is CornerKickStage.EXECUTE
    assert play.committed_pass == play.best_pass_and_score_so_far.pass_
    assert generator.stopped


def test_always_commits_by_the_maximum_time(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory, max_commit_time=2.0)
    _run_to_decide(play, make_world)
    fake_pass_generator_factory.created[0].set_ratings([0.05, 0.0, 0.02])

    timestamp = 0.0
    while play.stage is CornerKickStage.DECIDE:
        timestamp += 0.25
        assert timestamp <= 2.0
        _tick(play, _corner_world(make_world, timestamp=timestamp))
    assert play.stage is CornerKickStage.EXECUTE


def test_committed_pass_never_changes(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    _run_to_decide(play, make_world)
    generator = fake_pass_generator_factory.created[0]
    generator.set_ratings([1.0])
    _tick(play, _corner_world(make_world, timestamp=0.1))
    committed = play.committed_pass
    assert committed is not None

    generator.receiver_point = (-2.0, -2.0)
    for tick in range(5):
        tactics, _ = _tick(play, _corner_world(make_world, timestamp=0.2 + tick * 0.05))
        assert play.stage is CornerKickStage.EXECUTE
        assert play.committed_pass is committed
        assert tactics[1].pass_ is committed
        assert tactics[2].pass_ is committed


def test_finished_play_is_frozen(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    _run_to_decide(play, make_world)
    fake_pass_generator_factory.created[0].set_ratings([1.0])
    _tick(play, _corner_world(make_world, timestamp=0.1))
    committed = play.committed_pass
    assert committed.receiver_point == (2.0, 1.0)

    # the ball reached robot 2, waiting on the receiver point
    received = _corner_world(make_world, timestamp=0.2, ball=(2.1, 1.0),
                             friendly={0: (-4.3, 0.0), 1: _align_pose(), 2: (2.0, 1.0)})
    tactics, actions = _tick(play, received)
    assert play.receiver_tactic.assigned_robot() == 2
    assert actions[2].startswith("kick")
    assert play.done()

    final = play.resume(received.replace(timestamp=0.3))
    assert play.stage is CornerKickStage.FINISHED
    assert final == tactics
    # finishing only records the final stage
    assert play.committed_pass is committed
    assert all(a is b for a, b in zip(final, tactics))
    for tick in range(3):
        assert play.resume(received.replace(timestamp=0.4 + tick)) == tactics
        assert play.stage is CornerKickStage.FINISHED
        assert play.committed_pass is committed
        assert play.done()


def test_stages_never_go_backwards(fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    play.advance_to(CornerKickStage.DECIDE)
    with pytest.raises(RuntimeError):
        play.advance_to(CornerKickStage.ALIGN)


def test_malformed_world_raises(make_world, fake_pass_generator_factory):
    play = _play(fake_pass_generator_factory)
    with pytest.raises(ValueError):
        play.resume(_corner_world(make_world).replace(ball=Ball((math.nan, 0.0), (0.0, 0.0))))
    with pytest.raises(ValueError):
        play.resume(_corner_world(make_world, friendly={}))
