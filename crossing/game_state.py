"""Session states for Crossing.

    IDLE ──start──▶ RUNNING ──player reaches goal──▶ WON
      ▲               │  ╲
      └────stop───────┘   ╲──lives exhausted──▶ LOST

WON and LOST are terminal until the session is reset or started again.
"""
from enum import Enum


class GameState(str, Enum):
    """States a game session can be in.

    Attributes:
        IDLE: Before the first start, or after a stop
        RUNNING: Active gameplay
        WON: Player reached the goal row
        LOST: Player used up all lives
    """
    IDLE = "idle"
    RUNNING = "running"
    WON = "won"
    LOST = "lost"

    @property
    def is_ended(self) -> bool:
        """True for the terminal outcomes."""
        return self in (GameState.WON, GameState.LOST)


class Outcome(str, Enum):
    """Result of a session as reported to the HUD and the session log."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @classmethod
    def from_state(cls, state: GameState) -> 'Outcome':
        if state == GameState.WON:
            return cls.WON
        if state == GameState.LOST:
            return cls.LOST
        return cls.IN_PROGRESS
