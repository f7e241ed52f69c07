"""
Crossing - cross the board to the water without getting hit by a bug.

Provides:
- session: GameSession state machine owning the player and enemies
- loop: LoopDriver, the per-frame tick scheduler
- entities: Player and Enemy
- physics: collision detection
- render: renderer interface and the pygame renderer
- engine: pygame host (window, input, buttons)
"""

NAME = "Crossing"
DESCRIPTION = "Cross the board while avoiding the bugs."
VERSION = "1.0.0"
