"""
Game session: the state machine that owns the player and the enemies.

The session exposes a small command API (start, stop, reset, move) and a
tick(dt) that advances the simulation and returns the render instructions
for that frame. It never touches pygame, the clock or the frame scheduler;
those belong to the host and the LoopDriver.

Examples:
    >>> from crossing.assets import StaticAssetProvider
    >>> session = GameSession(assets=StaticAssetProvider(), seed=1)
    >>> session.start()
    True
    >>> session.state
    <GameState.RUNNING: 'running'>
    >>> frame = session.tick(0.016)
    >>> frame.lives_text
    'Lives remaining: 3'
"""

import random
from typing import List, Optional

from crossing import config
from crossing.assets import AssetProvider, StaticAssetProvider
from crossing.commands import Command, Direction, SessionCommand
from crossing.entities import Enemy, Player
from crossing.game_state import GameState, Outcome
from crossing.logging import emit_record, get_logger
from crossing.models import Frame, GameSettings, SpritePlacement, StatusBanner
from crossing.physics import resolve_collisions

log = get_logger('session')


class GameSession:
    """One player crossing the board, from start to outcome.

    The player and enemies are created once and reset between games, so
    the enemy list has the same objects and the same length for the life
    of the session.

    Attributes:
        settings: Frozen game settings
        player: The player entity
        enemies: Fixed-size list of enemy entities
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        assets: Optional[AssetProvider] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize an idle session.

        Args:
            settings: Game settings (defaults to the standard game)
            assets: Provides sprite widths for layout and collision math
            seed: Seed for enemy speeds and rows, ignored if rng is given
            rng: Random source shared by all enemies
        """
        self.settings = settings or GameSettings()
        self._assets = assets or StaticAssetProvider()
        self._rng = rng or random.Random(seed)

        board = self.settings.board
        enemy_width = self._assets.get_image_width(self.settings.enemies.sprite)
        cell_width = self._assets.get_image_width(self.settings.player.sprite)

        self.player = Player(self.settings.player, board, cell_width)
        self.enemies: List[Enemy] = [
            Enemy(self.settings.enemies, board, enemy_width, rng=self._rng)
            for _ in range(self.settings.enemies.count)
        ]

        self._state = GameState.IDLE
        self._games_started = 0
        self._ticks = 0
        self._elapsed = 0.0

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == GameState.RUNNING

    @property
    def outcome(self) -> Outcome:
        return Outcome.from_state(self._state)

    @property
    def life_limit(self) -> int:
        return self.settings.rules.life_limit

    @property
    def lives_remaining(self) -> int:
        """Lives left to display, never negative."""
        return max(0, self.life_limit - self.player.collision_count)

    @property
    def ticks(self) -> int:
        """Simulated ticks in the current game."""
        return self._ticks

    @property
    def elapsed(self) -> float:
        """Simulated seconds in the current game."""
        return self._elapsed

    # =========================================================================
    # Commands
    # =========================================================================

    def start(self) -> bool:
        """Begin a new game.

        Resets the collision count, respawns every enemy and sends the
        player home. Ignored while a game is already running.

        Returns:
            True if a new game started
        """
        if self._state == GameState.RUNNING:
            log.debug("start ignored, game already running")
            return False

        self.player.collision_count = 0
        self.player.to_home()
        self.player.update()
        for enemy in self.enemies:
            enemy.spawn()

        self._ticks = 0
        self._elapsed = 0.0
        self._games_started += 1
        self._state = GameState.RUNNING

        log.info("Game %d started", self._games_started)
        emit_record('session', {
            'type': 'start',
            'game': self._games_started,
            'enemies': [{'row': e.row, 'speed': round(e.speed, 2)} for e in self.enemies],
        })
        return True

    def stop(self) -> bool:
        """Abort the running game and go back to idle.

        Stopping is not a loss. Calling stop when no game is running leaves
        the session unchanged.

        Returns:
            True if a running game was stopped
        """
        if self._state != GameState.RUNNING:
            return False

        self._state = GameState.IDLE
        log.info("Game %d stopped after %d ticks", self._games_started, self._ticks)
        emit_record('session', {'type': 'stop', 'game': self._games_started, 'ticks': self._ticks})
        return True

    def reset(self) -> bool:
        """Stop then start. Does nothing before the first game.

        Returns:
            True if a new game started
        """
        if self._state == GameState.IDLE:
            return False
        self.stop()
        return self.start()

    def move(self, direction: Direction) -> bool:
        """Move the player one cell. Ignored unless a game is running.

        Returns:
            True if the move was applied (it may still be clamped)
        """
        if self._state != GameState.RUNNING:
            return False
        self.player.move_by(direction)
        log.trace("move %s -> (%d, %d)", direction.value, self.player.col, self.player.row)
        return True

    def handle_command(self, command: Command) -> bool:
        """Dispatch a command from any input source."""
        action = command.action
        if isinstance(action, Direction):
            return self.move(action)
        if action == SessionCommand.START:
            return self.start()
        if action == SessionCommand.STOP:
            return self.stop()
        if action == SessionCommand.RESET:
            return self.reset()
        return False

    def handle_commands(self, commands: List[Command]) -> None:
        for command in commands:
            self.handle_command(command)

    # =========================================================================
    # Simulation
    # =========================================================================

    def tick(self, dt: float) -> Frame:
        """Advance one frame and describe what to draw.

        While running: enemies move, the player's pixel position is
        refreshed, at most one collision is applied and the win/loss
        conditions are checked, in that order. In any other state the
        simulation is frozen and only the frame is produced.

        Args:
            dt: Seconds since the previous tick

        Returns:
            Render instructions for this frame
        """
        if self._state == GameState.RUNNING:
            dt = max(0.0, dt)
            self._ticks += 1
            self._elapsed += dt

            for enemy in self.enemies:
                if enemy.update(dt):
                    log.trace("enemy respawned in row %d at %.1f px/s", enemy.row, enemy.speed)

            self.player.update()

            enemy = resolve_collisions(self.player, self.enemies)
            if enemy is not None:
                log.debug(
                    "collision in row %d, %d of %d lives used",
                    enemy.row, self.player.collision_count, self.life_limit,
                )
                emit_record('session', {
                    'type': 'collision',
                    'game': self._games_started,
                    'tick': self._ticks,
                    'row': enemy.row,
                    'count': self.player.collision_count,
                })

            self.check_status()

        return self.frame()

    def check_status(self) -> GameState:
        """Apply the win/loss rules to a running game.

        A loss takes precedence when both conditions hold at once.
        """
        if self._state != GameState.RUNNING:
            return self._state

        if self.player.collision_count >= self.life_limit:
            self._end(GameState.LOST)
        elif self.player.row == self.settings.board.goal_row:
            self._end(GameState.WON)
        return self._state

    def _end(self, state: GameState) -> None:
        self._state = state
        log.info("Game %d %s after %.1fs", self._games_started, state.value, self._elapsed)
        emit_record('session', {
            'type': 'outcome',
            'game': self._games_started,
            'outcome': state.value,
            'ticks': self._ticks,
            'elapsed': round(self._elapsed, 3),
            'collisions': self.player.collision_count,
        })

    # =========================================================================
    # Render instructions
    # =========================================================================

    def frame(self) -> Frame:
        """Build render instructions for the current state."""
        board = self.settings.board

        # Idle shows the empty board, as before the first start
        sprites: List[SpritePlacement] = []
        if self._state != GameState.IDLE:
            sprites = [
                SpritePlacement(image_id=e.sprite, x=e.x, y=e.y)
                for e in self.enemies
            ]
            sprites.append(SpritePlacement(image_id=self.player.sprite, x=self.player.x, y=self.player.y))

        lives_text = None
        if self._state == GameState.RUNNING:
            lives_text = f"Lives remaining: {self.lives_remaining}"

        banner = None
        if self._state == GameState.WON:
            banner = StatusBanner(
                message=config.WIN_BANNER[0],
                background_color=config.WIN_BANNER[1],
                text_color=config.WIN_BANNER[2],
            )
        elif self._state == GameState.LOST:
            banner = StatusBanner(
                message=config.LOSS_BANNER[0],
                background_color=config.LOSS_BANNER[1],
                text_color=config.LOSS_BANNER[2],
            )

        return Frame(
            state=self._state,
            columns=board.columns,
            row_images=board.row_images,
            row_height=board.row_height,
            sprites=sprites,
            lives_text=lives_text,
            banner=banner,
        )
