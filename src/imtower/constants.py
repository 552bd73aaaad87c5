"""
constants.py: Centralized configuration for the play field, blocks and physics.
"""

# -------- Play Field Config --------
SCREEN_WIDTH = 400
SCREEN_HEIGHT = 640
EDGE_MARGIN = 10                # Inset from both side walls for the oscillation

# -------- Base Platform Config --------
BASE_WIDTH = 160
BASE_HEIGHT = 20
BASE_OFFSET = 50                # Distance from the field bottom to the base top

# -------- Block Config --------
BLOCK_WIDTH = 80
BLOCK_HEIGHT = 80
STACK_GAP = 5                   # Spawn clearance above the stack top
OVERLAP_EPSILON = 10            # Minimum horizontal overlap for a placement
BLOCK_TAGS = ("jihun1", "jihun2", "jihun3")

# -------- Physics Config (Pixels / Second / Second) --------
BASE_SPEED = 120.0              # Horizontal speed of the first block (pixels/s)
SPEED_INCREASE = 8.0            # Extra horizontal speed per floor (pixels/s)
GRAVITY = 1200.0                # Vertical acceleration while falling (pixels/s^2)

# -------- Time Config --------
TICK_RATE = 60                  # Simulation steps per second
TICK_TIME = 1.0 / TICK_RATE     # Fixed time step (Delta Time)
MAX_STEPS_PER_FRAME = 5         # Catch-up limit for a slow frame

# -------- Persistence Config --------
DB_FILE = "imtower_scores.db"
DEFAULT_PROFILE = "imtower_best_score"
