"""
Field geometry defaults (SSL division B) and field-related thresholds.

All distances are in meters. The enemy goal is on the +x side of the field.
"""

FIELD_X_LENGTH = 9.0
FIELD_Y_LENGTH = 6.0
DEFENSE_X_LENGTH = 1.0
DEFENSE_Y_LENGTH = 2.0
GOAL_Y_LENGTH = 1.0

BALL_MAX_RADIUS_METERS = 0.0215
BALL_IN_CORNER_RADIUS = 0.5

# a restart is over once the ball has moved this far (m)
KICK_RESTART_BALL_MOVE_DISTANCE = 0.05
