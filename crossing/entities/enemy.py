"""Enemy entity: a bug that crawls left to right along a hazard row.

Enemies are recycled. When one leaves the right edge of the track it is
respawned in place with a new row and speed, so a session always has the
same enemy objects.
"""

import random
from typing import Optional

from crossing.models import BoardConfig, EnemyConfig


class Enemy:
    """Horizontally moving hazard.

    Attributes:
        x: Left edge in pixels, 0 at the track start
        row: Hazard row index
        speed: Pixels per second
    """

    def __init__(
        self,
        config: EnemyConfig,
        board: BoardConfig,
        sprite_width: float,
        rng: Optional[random.Random] = None,
    ):
        """Initialize enemy. Call spawn() before the first update.

        Args:
            config: Enemy speed range and sprite id
            board: Board geometry (hazard rows, row height)
            sprite_width: Width of the enemy image in pixels
            rng: Random source, shared with the session for reproducibility
        """
        self._config = config
        self._board = board
        self._sprite_width = float(sprite_width)
        self._rng = rng or random.Random()

        self.x: float = 0.0
        self.row: int = board.hazard_rows[0]
        self.speed: float = config.min_speed + config.speed_adjustor

    @property
    def y(self) -> float:
        """Pixel y derived from the row."""
        return self._board.row_to_y(self.row)

    @property
    def width(self) -> float:
        return self._sprite_width

    @property
    def sprite(self) -> str:
        return self._config.sprite

    @property
    def track_width(self) -> float:
        """Horizontal extent of the board; passing it triggers a respawn."""
        return self._board.columns * self._sprite_width

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self._sprite_width

    def spawn(self) -> None:
        """Pick a new speed and hazard row and go back to the track start."""
        self.speed = self._random_speed()
        self.row = self._rng.choice(self._board.hazard_rows)
        self.x = 0.0

    def _random_speed(self) -> float:
        # random() is in [0, 1), which keeps the upper bound exclusive
        span = self._config.max_speed - self._config.min_speed
        return self._config.min_speed + self._rng.random() * span + self._config.speed_adjustor

    def update(self, dt: float) -> bool:
        """Advance along the track.

        Args:
            dt: Seconds since the previous tick (>= 0)

        Returns:
            True if the enemy ran off the track and was respawned
        """
        self.x += self.speed * dt
        if self.x > self.track_width:
            self.spawn()
            return True
        return False

    def __repr__(self) -> str:
        return f"Enemy(x={self.x:.1f}, row={self.row}, speed={self.speed:.1f})"
