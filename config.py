WINDOW_WIDTH = 557
WINDOW_HEIGHT = 543
TITLE_BAR_HEIGHT = 50
FPS = 60

# Engine defaults
CELL_SIZE = 32
MIN_CELL_SIZE = 16
MAX_CELL_SIZE = 64
BASE_SPEED_MS = 100
SPEED_DIVISOR = 80

SNAKE_START_SEGMENTS = 5
SNAKE_START_DIRECTION = "RIGHT"
# Head cell (column, row) for a fresh game
SNAKE_START_CELL = (5, 7)

APPLE_COUNT = 1
AUTO_INCREASE_SPEED = True
MAX_PLACEMENT_ATTEMPTS = 100

# Animation sequencing
ANIMATION_FRAMES = 10
ANIMATION_INTERVAL_MS = 100

START_TEXT = ("Press an arrow key", "to start playing")
RESUME_TEXT = ("Press space to resume",)
RESTART_TEXT = ("Game over!", "Press space to restart")

PRIMARY_FONT = None
SECONDARY_FONT = None
PROMPT_FONT_SIZE = 20
OVERLAY_FONT_SIZE = 30
SCORE_FONT_SIZE = 14

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (231, 71, 29)
DARK_RED = (160, 40, 20)
LEAF_GREEN = (60, 140, 40)
GOLD = (255, 204, 0)
SNAKE_BLUE = (78, 124, 246)

PRIMARY_GRID_COLOR = (162, 209, 73)
SECONDARY_GRID_COLOR = (170, 215, 81)
TITLE_BAR_COLOR = (74, 117, 44)
TEXT_COLOR = (255, 255, 255)
# Alpha of prompt text once fully faded in
TEXT_ALPHA = 200

# Sound effects (Hz, seconds, volume)
SOUND_START = (880, 0.12, 0.25)
SOUND_EAT = (660, 0.10, 0.22)
SOUND_DIE = (220, 0.28, 0.35)
