"""Named constants for the floor-plan editor.

Lengths in feet and canvas measures in pixels unless noted.
"""

# Canvas
MAX_CANVAS_FEET = 36              # visible span of the plan (ft)
DISPLAY_SIZE = 800                # visible viewport (px)
CANVAS_EXTEND = 3                 # extended canvas = 3x visible span each axis
MAJOR_GRID_EVERY = 5              # major grid line every 5 ft

# Snap granularities
SNAP_GRID = "grid"
SNAP_HALF = "half"
SNAP_FREE = "free"
SNAP_MODES = (SNAP_GRID, SNAP_HALF, SNAP_FREE)

# ADU limits (sqft)
ADU_MIN_AREA = 300
ADU_MAX_AREA = 1200
ADU_DEFAULT_AREA = 600            # default square boundary
MIN_ROOM_SIZE = 70                # fallback minimum for unknown room types

# Entity minimums (grid units)
MIN_ROOM_UNITS = 1
MIN_DOOR_UNITS = 2
MIN_WINDOW_UNITS = 1
MIN_FURNITURE_UNITS = 1
MIN_DRAWN_ROOM_SQFT = 1           # rectangle draws smaller than this are dropped
WINDOW_SILL_HEIGHT = 3.0          # ft above floor
OPENING_DEPTH = 0.5               # 6" drawn depth of door/window symbols

# History
MAX_HISTORY = 50
HISTORY_DEBOUNCE = 0.3            # s

# Autosave
AUTOSAVE_DEBOUNCE = 2.0           # s

# Messages
MSG_BOUNDARY_MIN = "ADU boundary must have at least 3 points"
MSG_ROOM_MIN = "Room must have at least 3 points"
MSG_POLYGON_MIN = "Please add at least 3 points to create a room"
MSG_NOT_RECT_ROTATE = "Only rectangular rooms can be rotated"
MSG_NOT_RECT_RESIZE = "Only rectangular rooms can be resized"
MSG_SAVE_FAILED = "Failed to save floor plan"
