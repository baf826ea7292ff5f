# ============================================================================
# RULES
# ============================================================================
MIN_REGION_SIZE = 3            # smallest clearable region
INITIAL_RUN_REDRAWS = 10       # redraws per cell to avoid a pre-formed run of 3
GENERATION_ATTEMPTS = 50       # full-board regenerations looking for a valid move
SHUFFLE_ATTEMPTS = 100         # reshuffles before falling back to regeneration


# ============================================================================
# SCORING & PROGRESSION
# ============================================================================
POINTS_PER_TILE = 10
COMBO_MULTIPLIER_STEP = 0.2
COMBO_MULTIPLIER_CAP = 3.0
COMBO_BONUS_PER_LEVEL = 100
MOVES_PER_LEVEL = 5
LEVEL_UP_PERTURB_CHANCE = 0.3


# ============================================================================
# TIMING (seconds of virtual time)
# ============================================================================
COUNTDOWN_PERIOD = 1.0
SELECTION_CONFIRM_DELAY = 0.15  # highlight pause before a selection is committed
CLEAR_ANIMATION_DELAY = 0.25    # fade pause before gravity/refill run
DEFAULT_DIFFICULTY = "medium"


# ============================================================================
# PALETTE
# ============================================================================
TILE_COLORS = {
    'red':    (255, 0, 51),
    'blue':   (30, 110, 255),
    'yellow': (255, 221, 0),
    'green':  (0, 214, 100),
    'purple': (170, 60, 255),
    'cyan':   (0, 230, 230),
    'orange': (255, 140, 0),
}


# ============================================================================
# PRESENTATION
# ============================================================================
TILE_SIZE = 50
TILE_GAP = 3
BOTTOM_MARGIN = 20
HUD_HEIGHT = 90

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.80
BOARD_MAX_HEIGHT_PCT = 0.75
LOW_TIME_WARNING = 10  # countdown turns red at or below this many seconds

# Float slack when comparing accumulated tick time against a deadline.
TIME_EPSILON = 1e-9
