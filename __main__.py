import argparse
import logging

from ai_interface.plays.corner_kick_play import CornerKickPlay
from ai_interface.plays.play_config import CornerKickPlayConfig, PlayConfig
from ai_interface.stp import STP
from constants.play_constants import MAX_TIME_COMMIT_TO_PASS_SECONDS
from simulation.kinematic_sim import KinematicSimulator, SIM_TIMESTEP
from simulation.scenarios import build_corner_kick_world

parser = argparse.ArgumentParser(description="Run the corner kick play against the kinematic simulator.")
parser.add_argument("--max-commit-time", type=float, default=MAX_TIME_COMMIT_TO_PASS_SECONDS,
                    help="seconds after which any pass is accepted")
parser.add_argument("--ticks", type=int, default=400)
parser.add_argument("--timestep", type=float, default=SIM_TIMESTEP)
parser.add_argument("--corner", choices=["pos", "neg"], default="pos")
parser.add_argument("--threaded-pass-generator", action="store_true",
                    help="refine passes on a background thread")
parser.add_argument("--seed", type=int, default=None)
parser.add_argument("--verbose", action="store_true")


def main():
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    config = PlayConfig(CornerKickPlayConfig(args.max_commit_time),
                        args.threaded_pass_generator, args.seed)
    stp = STP([CornerKickPlay], config)
    world = build_corner_kick_world(args.corner)
    sim = KinematicSimulator(world, args.timestep)

    try:
        for tick in range(args.ticks):
            actions = stp.decide_action(world)
            play = stp.current_play
            stage = play.stage.name if play is not None else "-"
            print(f"Tick {tick} t={world.timestamp:.2f}s stage={stage} ball={_fmt(world.ball.position)}")
            world = sim.step(actions)
            if play is None or play.done():
                break
    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        if stp.current_play is not None and stp.current_play.pass_generator is not None:
            stp.current_play.pass_generator.stop()

    play = stp.current_play
    if play is not None and play.committed_pass is not None:
        print("Committed pass:", play.committed_pass)
    print("Final ball position:", _fmt(world.ball.position))


def _fmt(point) -> str:
    return f"({point[0]:.2f}, {point[1]:.2f})"


if __name__ == "__main__":
    main()
