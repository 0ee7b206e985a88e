"""Wall resolution and dimension-label layout constants.

Label distances are screen pixels at zoom 1; divide by the zoom level to get
world pixels.
"""

WALL_TOLERANCE_FRACTION = 0.25    # edge/opening alignment tolerance = grid / 4

WALL_LABEL_OFFSET = 15.0          # wall length label, outward from the wall
OPENING_LABEL_OFFSET = 18.0       # opening width label, outward from the wall
WALL_LABEL_ANCHOR = (30.0, 6.0)   # (x, y) text box anchor, screen axes
OPENING_LABEL_ANCHOR = (25.0, 6.0)
COLLISION_ALONG = 70.0            # along-wall overlap threshold
COLLISION_PERP = 20.0             # "same level" threshold
COLLISION_PUSH = 2.5              # opening offset multiplier on collision
