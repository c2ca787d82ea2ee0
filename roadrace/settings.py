import math

# ============================================================================
# VERSION INFO
# ============================================================================
VERSION = "0.4.0"

# ============================================================================
# DISPLAY SETTINGS
# ============================================================================
SCREEN_WIDTH = 1000
SCREEN_HEIGHT = 700
FPS = 60

# Largest frame delta (seconds) fed to the physics
MAX_DT = 0.05

# ============================================================================
# PHYSICS & TUNING
# ============================================================================
CAR_WIDTH = 28
CAR_HEIGHT = 16

PLAYER_START_ANGLE = -math.pi / 2  # facing up
PLAYER_REVERSE_FACTOR = 0.65
PLAYER_BOOST_MULTIPLIER = 1.28
PLAYER_TURN_BASE = 0.9
PLAYER_TURN_SPEED_REF = 250.0
PLAYER_TURN_GAIN = 2.2

NPC_THROTTLE = 0.72
NPC_BOOST_MULTIPLIER = 1.20
NPC_TURN_GAIN = 2.0
NPC_ARRIVAL_RADIUS = 60.0
NPC_SPAWN_DX = 30
NPC_SPAWN_STEP_X = 18
NPC_SPAWN_DY = 40
NPC_SPAWN_STEP_Y = 28
NPC_COLOR_SHADE = 40

WALL_DAMPING = 0.6
BUMP_DISTANCE = 10.0

BOOST_DURATION_MS = 850

PLAYER_OBSTACLE_DAMPING = 0.4
NPC_OBSTACLE_DAMPING = 0.3
EXPLOSION_SPEED = 220.0  # impact speed above this wrecks the player

# ============================================================================
# LAYOUT
# ============================================================================
OBSTACLE_SIZE = 36
BOOST_PAD_SIZE = 30
MIN_DIST_FROM_START = 120
PLACEMENT_ATTEMPTS = 500
FALLBACK_OFFSET = 200

# ============================================================================
# RACE TIMING
# ============================================================================
COUNTDOWN_MS = 5000
EXPLODE_MS = 1100

# ============================================================================
# DIFFICULTY
# ============================================================================
DIFFICULTY_NAMES = ["Easy", "Normal", "Hard", "Impossible"]
OBSTACLE_COUNTS = [6, 9, 13, 16]
BOOST_COUNTS = [5, 5, 4, 3]
NPC_COUNTS = [2, 3, 4, 5]
NPC_SPEED_SCALE = [0.80, 0.92, 1.05, 1.20]
DEFAULT_DIFFICULTY = 1

# ============================================================================
# ECONOMY
# ============================================================================
TRACK_COSTS = [0, 80, 140]
VEHICLE_COSTS = [0, 100, 160]
REWARD_BY_PLACE = {1: 60, 2: 40, 3: 25}
REWARD_MIN = 10

# ============================================================================
# INPUT
# ============================================================================
DIRECTIONS = ("up", "down", "left", "right")

# ============================================================================
# COLORS
# ============================================================================
COLOR_BG = (20, 20, 24)
COLOR_TEXT = (235, 235, 235)
COLOR_TEXT_DIM = (170, 170, 180)
COLOR_HIGHLIGHT = (255, 200, 0)
COLOR_PANEL = (40, 40, 48)
COLOR_PANEL_SELECTED = (70, 90, 140)
COLOR_LOCKED = (200, 70, 70)
COLOR_BUTTON = (60, 130, 80)
COLOR_OBSTACLE = (35, 35, 35)
COLOR_OBSTACLE_EDGE = (255, 80, 80)
COLOR_BOOST = (60, 200, 255)
COLOR_BOOST_GLOW = (255, 230, 80)
COLOR_PLAYER_MARKER = (255, 255, 255)
