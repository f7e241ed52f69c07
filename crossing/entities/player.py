"""Player entity: moves one grid cell per command, clamped to the board."""

from crossing.commands import Direction
from crossing.models import BoardConfig, PlayerConfig


class Player:
    """The single player of a session.

    Grid position (col, row) is authoritative; pixel position (x, y) is
    derived from it by update() once per tick.

    Attributes:
        col: Grid column, 0 at the left
        row: Grid row, 0 is the goal at the top
        x: Pixel x of the sprite's left edge
        y: Pixel y of the sprite's top edge
        collision_count: Collisions in the current session
    """

    def __init__(self, config: PlayerConfig, board: BoardConfig, cell_width: float):
        """Initialize player at home.

        Args:
            config: Home cell and sprite offsets
            board: Board geometry
            cell_width: Width of one grid cell in pixels (the sprite width)
        """
        self._config = config
        self._board = board
        self._cell_width = float(cell_width)

        self.col: int = config.home_column
        self.row: int = config.home_row
        self.x: float = 0.0
        self.y: float = 0.0
        self.collision_count: int = 0
        self.update()

    @property
    def width(self) -> float:
        return self._cell_width

    @property
    def sprite(self) -> str:
        return self._config.sprite

    @property
    def left(self) -> float:
        """Left edge of the visible figure, inside the image's transparent margin."""
        return self.x + self._config.width_offset

    @property
    def right(self) -> float:
        return self.left + (self._cell_width - self._config.width_offset)

    @property
    def is_home(self) -> bool:
        return (self.col, self.row) == (self._config.home_column, self._config.home_row)

    def to_home(self) -> None:
        """Return to the starting cell."""
        self.col = self._config.home_column
        self.row = self._config.home_row

    def crash(self) -> None:
        """Record a collision and send the player home."""
        self.to_home()
        self.collision_count += 1

    def move_by(self, direction: Direction) -> None:
        """Move one cell, staying on the board.

        Moves off the edge are silently clamped.
        """
        d_col, d_row = direction.vector
        self.col = max(0, min(self._board.columns - 1, self.col + d_col))
        self.row = max(0, min(self._board.max_row, self.row + d_row))

    def update(self) -> None:
        """Recompute pixel position from the grid cell."""
        self.x = self.col * self._cell_width
        self.y = self._board.row_to_y(self.row)

    def __repr__(self) -> str:
        return f"Player(col={self.col}, row={self.row}, collisions={self.collision_count})"
