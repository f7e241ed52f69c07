"""
Pydantic v2 models for Crossing settings and render frames.

GameSettings is loaded once at startup (see settings_loader) and frozen for
the lifetime of the process. Frame and its parts are the render
instructions produced by GameSession.tick().
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from crossing import config
from crossing.game_state import GameState


class BoardConfig(BaseModel):
    """
    Board grid and sprite geometry.

    Pixel measurements describe the visible area of the sprites, which is
    what layout and collision math use.
    """
    model_config = ConfigDict(frozen=True)

    columns: int = Field(default=config.BOARD_COLUMNS, ge=1)
    rows: int = Field(default=config.BOARD_ROWS, ge=2)
    hazard_rows: Tuple[int, ...] = Field(default=config.HAZARD_ROWS, min_length=1)
    goal_row: int = Field(default=config.GOAL_ROW, ge=0)
    row_images: Tuple[str, ...] = Field(default=config.ROW_IMAGES)
    row_height: int = Field(default=config.VISIBLE_ROW_HEIGHT, gt=0)
    row_height_offset: int = Field(default=config.ROW_HEIGHT_OFFSET, ge=0)

    @property
    def max_row(self) -> int:
        return self.rows - 1

    def row_to_y(self, row: int) -> float:
        """Pixel y for a sprite standing in the given row."""
        return float(row * self.row_height - self.row_height_offset)

    @model_validator(mode='after')
    def validate_rows(self) -> 'BoardConfig':
        """Hazard and goal rows must lie on the board, and not overlap."""
        for row in self.hazard_rows:
            if not 0 <= row < self.rows:
                raise ValueError(f"hazard row {row} is outside the board (0..{self.rows - 1})")
        if self.goal_row >= self.rows:
            raise ValueError(f"goal row {self.goal_row} is outside the board")
        if self.goal_row in self.hazard_rows:
            raise ValueError("goal row cannot also be a hazard row")
        if len(self.row_images) != self.rows:
            raise ValueError(
                f"row_images must name one image per row, "
                f"expected {self.rows}, got {len(self.row_images)}"
            )
        return self


class EnemyConfig(BaseModel):
    """Enemy population and speed range (pixels/second)."""
    model_config = ConfigDict(frozen=True)

    count: int = Field(default=config.ENEMY_COUNT, ge=1)
    min_speed: float = Field(default=config.ENEMY_MIN_SPEED, gt=0.0)
    max_speed: float = Field(default=config.ENEMY_MAX_SPEED, gt=0.0)
    speed_adjustor: float = Field(default=config.ENEMY_SPEED_ADJUSTOR)
    sprite: str = config.ENEMY_SPRITE

    @model_validator(mode='after')
    def validate_speed_range(self) -> 'EnemyConfig':
        if self.min_speed >= self.max_speed:
            raise ValueError("min_speed must be less than max_speed")
        if self.min_speed + self.speed_adjustor < 0:
            raise ValueError("speed_adjustor would make enemies move backwards")
        return self


class PlayerConfig(BaseModel):
    """Player home cell and visible-width offset."""
    model_config = ConfigDict(frozen=True)

    home_column: int = Field(default=config.HOME_COLUMN, ge=0)
    home_row: int = Field(default=config.HOME_ROW, ge=0)
    width_offset: int = Field(default=config.PLAYER_WIDTH_OFFSET, ge=0)
    sprite: str = config.PLAYER_SPRITE


class RulesConfig(BaseModel):
    """Win/loss rules."""
    model_config = ConfigDict(frozen=True)

    life_limit: int = Field(default=config.LIFE_LIMIT, ge=1)


class GameSettings(BaseModel):
    """
    Complete game settings.

    Defaults reproduce the fixed constants in crossing.config, so
    GameSettings() is the standard game.
    """
    model_config = ConfigDict(frozen=True)

    name: str = "Crossing"
    board: BoardConfig = Field(default_factory=BoardConfig)
    enemies: EnemyConfig = Field(default_factory=EnemyConfig)
    player: PlayerConfig = Field(default_factory=PlayerConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)

    @model_validator(mode='after')
    def validate_home(self) -> 'GameSettings':
        """Home must be on the board and must not already be the goal."""
        if self.player.home_column >= self.board.columns:
            raise ValueError(
                f"home_column {self.player.home_column} is outside the board "
                f"(0..{self.board.columns - 1})"
            )
        if self.player.home_row > self.board.max_row:
            raise ValueError(
                f"home_row {self.player.home_row} is outside the board "
                f"(0..{self.board.max_row})"
            )
        if self.player.home_row == self.board.goal_row:
            raise ValueError("home_row cannot be the goal row")
        return self


# =============================================================================
# Render instructions
# =============================================================================

class SpritePlacement(BaseModel):
    """One sprite drawn at a pixel position."""
    model_config = ConfigDict(frozen=True)

    image_id: str
    x: float
    y: float


class StatusBanner(BaseModel):
    """Win/loss overlay."""
    model_config = ConfigDict(frozen=True)

    message: str
    background_color: str
    text_color: str

    @field_validator('background_color', 'text_color')
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        """Accept #rgb or #rrggbb."""
        digits = v[1:] if v.startswith('#') else ''
        if len(digits) not in (3, 6) or any(c not in '0123456789abcdefABCDEF' for c in digits):
            raise ValueError(f"expected a #rgb or #rrggbb color, got {v!r}")
        return v


class Frame(BaseModel):
    """
    Everything the renderer needs to draw one tick.

    Attributes:
        state: Session state after the tick
        columns: Board width in cells
        row_images: Background image id per row, top to bottom
        row_height: Visible row height in pixels
        sprites: Enemies first, then the player
        lives_text: HUD text, None when no game is running
        banner: Outcome overlay, None unless the game has ended
    """
    model_config = ConfigDict(frozen=True)

    state: GameState
    columns: int
    row_images: Tuple[str, ...]
    row_height: int
    sprites: List[SpritePlacement] = Field(default_factory=list)
    lives_text: Optional[str] = None
    banner: Optional[StatusBanner] = None
