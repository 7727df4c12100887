"""Physical limits of our robots."""

import math

ROBOT_MAX_RADIUS_METERS = 0.09
ROBOT_MAX_SPEED = 2.0              # m/s
ROBOT_MAX_ANGULAR_SPEED = 4 * math.pi    # rad/s

# distance between robot center and ball center at which the robot can kick
KICKABLE_MARGIN = 0.15
POSSESSION_DISTANCE = ROBOT_MAX_RADIUS_METERS + 0.05

# tolerances used to decide that a robot reached its destination
POSITION_TOLERANCE = 0.02
ORIENTATION_TOLERANCE = 0.05
