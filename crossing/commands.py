"""
Player commands.

Every input reaching the core is a discrete Command: one of four
directions, or one of the three session commands. Input sources
(keyboard, on-screen buttons, tests) convert their events to this format.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class Direction(str, Enum):
    """Grid movement directions.

    The vector is (column delta, row delta); row 0 is the top of the board.
    """
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Tuple[int, int]:
        return _VECTORS[self]


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class SessionCommand(str, Enum):
    """Commands that drive the session state machine."""
    START = "start"
    STOP = "stop"
    RESET = "reset"


@dataclass(frozen=True)
class Command:
    """Immutable command from any input source.

    Attributes:
        action: A Direction or a SessionCommand
        timestamp: When the input happened (seconds, monotonic clock)
    """
    action: Union[Direction, SessionCommand]
    timestamp: float = 0.0

    def __post_init__(self):
        """Validate action type and timestamp."""
        if not isinstance(self.action, (Direction, SessionCommand)):
            raise TypeError(
                f"action must be a Direction or SessionCommand, got {type(self.action).__name__}"
            )
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    @property
    def is_movement(self) -> bool:
        return isinstance(self.action, Direction)

    def __str__(self) -> str:
        return f"Command({self.action.value}, t={self.timestamp:.3f})"
