"""Configuration for Crossing.

Screen geometry, sprite measurements, gameplay constants and colors.
Display values can be overridden from a .env file beside the package or
from CROSSING_* environment variables; gameplay defaults live in
settings/default.yaml and are validated by crossing.models.GameSettings.
"""
import os
from pathlib import Path
from typing import Dict, Tuple

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display settings
SCREEN_WIDTH = _get_int('CROSSING_SCREEN_WIDTH', 505)
SCREEN_HEIGHT = _get_int('CROSSING_SCREEN_HEIGHT', 606)
FPS = _get_int('CROSSING_FPS', 60)
CONTROL_BAR_HEIGHT = 50  # Button strip below the board

# Sprite measurements. These come from the visible area of the images, not
# their physical size, so they change if the artwork changes.
SPRITE_WIDTH = 101
SPRITE_HEIGHT = 171
VISIBLE_ROW_HEIGHT = 83
ROW_HEIGHT_OFFSET = 25
PLAYER_WIDTH_OFFSET = 23

# Gameplay constants
LIFE_LIMIT = 3
ENEMY_COUNT = 3
BOARD_COLUMNS = 5
BOARD_ROWS = 6
HAZARD_ROWS: Tuple[int, ...] = (1, 2, 3)
GOAL_ROW = 0
HOME_COLUMN = 2
HOME_ROW = 5
ENEMY_MIN_SPEED = 100.0  # pixels/second, inclusive
ENEMY_MAX_SPEED = 400.0  # pixels/second, exclusive
ENEMY_SPEED_ADJUSTOR = _get_float('CROSSING_ENEMY_SPEED_ADJUSTOR', 0.0)

# Image ids
ENEMY_SPRITE = 'enemy-bug'
PLAYER_SPRITE = 'char-boy'
WATER_BLOCK = 'water-block'
STONE_BLOCK = 'stone-block'
GRASS_BLOCK = 'grass-block'

# Background image per row, top to bottom
ROW_IMAGES: Tuple[str, ...] = (
    WATER_BLOCK,   # Goal row
    STONE_BLOCK,
    STONE_BLOCK,
    STONE_BLOCK,
    GRASS_BLOCK,
    GRASS_BLOCK,
)

IMAGE_IDS: Tuple[str, ...] = (
    STONE_BLOCK,
    WATER_BLOCK,
    GRASS_BLOCK,
    ENEMY_SPRITE,
    PLAYER_SPRITE,
)

# Physical image sizes, used for placeholder sprites
IMAGE_SIZES: Dict[str, Tuple[int, int]] = {
    STONE_BLOCK: (101, 171),
    WATER_BLOCK: (101, 171),
    GRASS_BLOCK: (101, 171),
    ENEMY_SPRITE: (101, 171),
    PLAYER_SPRITE: (101, 171),
}

ASSETS_DIR = Path(os.getenv('CROSSING_ASSETS_DIR', str(Path(__file__).parent / 'images')))
USE_PLACEHOLDERS = _get_bool('CROSSING_USE_PLACEHOLDERS', True)

# Colors
BACKGROUND_COLOR = (255, 255, 255)
HUD_TEXT_COLOR = (0, 0, 0)
BUTTON_COLOR = (70, 110, 170)
BUTTON_DISABLED_COLOR = (170, 170, 170)
BUTTON_TEXT_COLOR = (255, 255, 255)

# Placeholder sprite colors
PLACEHOLDER_COLORS: Dict[str, Tuple[int, int, int]] = {
    WATER_BLOCK: (66, 135, 245),
    STONE_BLOCK: (150, 150, 150),
    GRASS_BLOCK: (90, 190, 80),
    ENEMY_SPRITE: (200, 40, 40),
    PLAYER_SPRITE: (240, 200, 60),
}

# Outcome banners: (message, background, text)
WIN_BANNER = ("Woo hoo! You won!", "#ffd738", "#3500a8")
LOSS_BANNER = ("Game over - you lose", "#000", "#fff")

# Fonts
FONT_SIZE_HUD = 22
FONT_SIZE_BANNER = 48
FONT_SIZE_BUTTON = 24
