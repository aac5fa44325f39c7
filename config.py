import os
import builtins as _builtins
import pygame

# --- Constants ---
BOARD_WIDTH, BOARD_HEIGHT = 800, 600
FPS = 60
FRAME_MS = 1000 / FPS

# Window is a bit taller than the board so the HUD strip and the on-screen
# controls fit underneath the playfield.
WINDOW_WIDTH = BOARD_WIDTH
WINDOW_HEIGHT = BOARD_HEIGHT + 110

PADDLE_WIDTH = 120
PADDLE_HEIGHT = 20
PADDLE_Y_OFFSET = 30
PADDLE_SPEED = 8  # pixels per frame
PADDLE_Y = BOARD_HEIGHT - PADDLE_Y_OFFSET - PADDLE_HEIGHT
BIG_PADDLE_FACTOR = 1.5
TINY_PADDLE_FACTOR = 0.5

BALL_RADIUS = 10
BALL_SPEED = 6           # base speed, pixels per frame
SPEED_EPSILON = 0.1      # tolerance before the speed is renormalised
DOUBLE_SPEED_FACTOR = 2.0
SLOW_SPEED_FACTOR = 0.5

BRICK_COLS = 10
BRICK_HEIGHT = 25
BRICK_GAP = 4
BRICK_OFFSET_TOP = 50
BRICK_OFFSET_LEFT = 30
BRICK_WIDTH = ((BOARD_WIDTH - 2 * BRICK_OFFSET_LEFT) - (BRICK_COLS - 1) * BRICK_GAP) / BRICK_COLS

INITIAL_LIVES = 3
BRICK_POINTS = 10
COMBO_POINTS = 20

# Anti-degenerate bounce heuristics
STUCK_THRESHOLD = 5           # side bounces in a row before the ball is nudged
STUCK_NUDGE = 0.5             # vertical nudge applied to break the streak
WALL_HIT_RESET_THRESHOLD = 250
RECOVERY_SLOW_MS = 2000

POWERUP_CHANCE = 0.25
POWERUP_SPEED = 2.5       # pixels per frame
POWERUP_SIZE = 28
POWERUP_DURATION = 10000  # ms
FIRE_SHOTS = 10

LEVEL_MESSAGE_MS = 1500
SEQUENTIAL_LEVELS = 6     # levels with index below this use their own layout
RANDOM_POOL_MIN = 5
RANDOM_POOL_MAX = 24

# Colors
WHITE  = (255, 255, 255)
BLACK  = (0, 0, 0)
YELLOW = (255, 255, 0)
CYAN   = (34, 211, 238)
PURPLE = (192, 132, 252)
BG     = (15, 23, 42)
PANEL  = (30, 41, 59)
GREY   = (100, 116, 139)

# Persisted data lives next to the game unless overridden
DATA_DIR = os.getenv("BRICK_WALL_DATA_DIR", ".")

# --- Control Settings ---
# Default key bindings for game controls
DEFAULT_CONTROLS = {
    'left': pygame.K_LEFT,
    'right': pygame.K_RIGHT,
    'launch': pygame.K_SPACE,
}

# Current control mappings (can be modified by options menu)
CURRENT_CONTROLS = DEFAULT_CONTROLS.copy()

# Control action descriptions for the UI
CONTROL_DESCRIPTIONS = {
    'left': 'Move Left',
    'right': 'Move Right',
    'launch': 'Launch Ball',
}

# Keys the game reserves for itself; they can't be rebound
PAUSE_KEYS = (pygame.K_p, pygame.K_ESCAPE)
LEVEL_SELECT_KEY = pygame.K_F5

def get_key_name(key_code):
    """Get a readable name for a pygame key code."""
    key_name = pygame.key.name(key_code)
    if key_name == 'left':
        return '←'
    elif key_name == 'right':
        return '→'
    elif key_name == 'up':
        return '↑'
    elif key_name == 'down':
        return '↓'
    elif key_name == 'space':
        return 'SPACE'
    elif key_name == 'return':
        return 'ENTER'
    elif key_name in ('left shift', 'right shift'):
        return 'SHIFT'
    elif key_name in ('left ctrl', 'right ctrl'):
        return 'CTRL'
    elif key_name in ('left alt', 'right alt'):
        return 'ALT'
    elif not key_name:
        return '?'
    else:
        return key_name.upper()

def update_control_mapping(action, new_key):
    """Update a control mapping in memory (options menu persists it)."""
    CURRENT_CONTROLS[action] = new_key

def get_control_key(action):
    """Get the current key mapping for a control action."""
    return CURRENT_CONTROLS.get(action, DEFAULT_CONTROLS.get(action))

def has_control_conflicts(controls=None):
    """Return (action, other_action) pairs that share the same key."""
    controls = CURRENT_CONTROLS if controls is None else controls
    used_keys = {}
    conflicts = []

    for action, key in controls.items():
        if key in used_keys:
            conflicts.append((action, used_keys[key]))
        else:
            used_keys[key] = action

    return conflicts

DEBUG = os.getenv("BRICK_WALL_DEBUG", "") not in ("", "0")

_original_print = _builtins.print

def _debug_filter_print(*args, **kwargs):
    """Custom print that omits messages starting with '[DEBUG]' when DEBUG is False."""
    if not DEBUG:
        if args and isinstance(args[0], str) and args[0].startswith("[DEBUG]"):
            return
    _original_print(*args, **kwargs)

_builtins.print = _debug_filter_print
