"""Configuration handed to plays when they are constructed."""

from collections import namedtuple

from constants.play_constants import MAX_TIME_COMMIT_TO_PASS_SECONDS

CornerKickPlayConfig = namedtuple(
    "CornerKickPlayConfig", ["max_time_commit_to_pass_seconds"],
    defaults=[MAX_TIME_COMMIT_TO_PASS_SECONDS]
)

PlayConfig = namedtuple(
    "PlayConfig", ["corner_kick_play_config", "threaded_pass_generator", "seed"],
    defaults=[CornerKickPlayConfig(), False, None]
)
