"""
Tunables for plays and passing.

The corner kick commit time is the only value a play reads from its
configuration; everything else here is fixed at import time.
"""

import math

MAX_TIME_COMMIT_TO_PASS_SECONDS = 2.0

# pass speed limits (m/s)
MIN_PASS_SPEED = 1.0
MAX_PASS_SPEED = 5.5

# pass generator
NUM_PASSES_TO_OPTIMIZE = 8
NUM_PASSES_TO_KEEP_AFTER_PRUNING = 3
PASS_OPTIMIZER_MAX_ITERATIONS = 6
MIN_RECEIVER_POINT_SEPARATION = 0.3
OPTIMIZER_BACKGROUND_PERIOD = 0.01    # seconds between background refinement steps

# pass rating
ENEMY_REACTION_TIME = 0.4
RECEIVER_REACTION_TIME = 0.2
STATIC_FIELD_QUALITY_WIDTH = 0.3
ONE_TOUCH_MAX_DEFLECTION = math.radians(90)

# world evaluation
PASS_IN_PROGRESS_SPEED = 0.5
PASS_IN_PROGRESS_CONE = math.radians(20)
BALL_KICKED_SPEED = 0.5

# cherry pick search grid (points per axis)
CHERRY_PICK_GRID_SIZE = 5
