"""
Main game engine for Crossing.

The engine is the host environment: it owns the pygame window, the frame
clock, sprite loading, input and the button strip. Gameplay lives in
GameSession and the LoopDriver; the engine only feeds them commands and
runs the frame callbacks the driver requests.
"""

import random
from pathlib import Path
from typing import List, Optional

import pygame

from crossing import config
from crossing.commands import Command
from crossing.controls import ControlPanel
from crossing.game_state import GameState
from crossing.input.input_manager import InputManager
from crossing.input.sources.keyboard import KeyboardInputSource
from crossing.logging import get_logger
from crossing.loop import LoopDriver, MonotonicClock, QueuedFrameScheduler
from crossing.models import GameSettings
from crossing.render.pygame_renderer import PygameRenderer
from crossing.render.sprites import SpriteAssetProvider
from crossing.session import GameSession

log = get_logger('engine')


class GameEngine:
    """Main game engine managing the pygame loop.

    Attributes:
        screen: Pygame display surface (board plus button strip)
        clock: Pygame clock capping the frame rate
        running: Whether the main loop should continue
        assets: Sprite provider; Start is enabled once it reports loaded
        scheduler: Frame scheduler the loop driver requests ticks from
        driver: Loop driver, created when the assets are loaded
        controls: Start / Reset / Stop buttons

    Examples:
        >>> engine = GameEngine()
        >>> engine.run()
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        assets_dir: Optional[Path] = None,
        placeholders: bool = config.USE_PLACEHOLDERS,
        fps: int = config.FPS,
        seed: Optional[int] = None,
    ):
        """Initialize pygame, the window and sprite loading.

        Args:
            settings: Game settings (defaults to the standard game)
            assets_dir: Directory holding <image-id>.png sprites
            placeholders: Draw stand-in sprites for missing files
            fps: Frame rate cap
            seed: Seed for enemy rows and speeds
        """
        pygame.init()

        self.screen = pygame.display.set_mode(
            (config.SCREEN_WIDTH, config.SCREEN_HEIGHT + config.CONTROL_BAR_HEIGHT)
        )
        pygame.display.set_caption("Crossing")

        self.clock = pygame.time.Clock()
        self.fps = fps
        self.running = True

        self.settings = settings or GameSettings()
        self._rng = random.Random(seed)

        self.input_manager = InputManager(KeyboardInputSource())
        self.controls = ControlPanel()
        self.scheduler = QueuedFrameScheduler()
        self.renderer: Optional[PygameRenderer] = None
        self.driver: Optional[LoopDriver] = None

        self.assets = SpriteAssetProvider(assets_dir=assets_dir, placeholders=placeholders)
        self.assets.on_all_loaded(self._on_assets_loaded)
        self.assets.load()

        self._sync_controls()

    def _on_assets_loaded(self) -> None:
        """Create the session once sprite widths are known and show the board."""
        self.renderer = PygameRenderer(self.screen, self.assets)
        session = GameSession(self.settings, assets=self.assets, rng=self._rng)
        self.driver = LoopDriver(session, self.scheduler, MonotonicClock(), self.renderer)
        self.driver.redraw()
        log.info("Ready, press Start")

    @property
    def state(self) -> GameState:
        if self.driver is None:
            return GameState.IDLE
        return self.driver.session.state

    def _sync_controls(self) -> None:
        self.controls.sync(self.state, self.assets.is_ready)

    def handle_events(self) -> None:
        """Process pygame events.

        Mapped key releases become commands through the keyboard source;
        of the events it leaves, quit closes the window and clicks go to
        the button strip.
        """
        events = pygame.event.get()
        source = self.input_manager.get_source()
        if isinstance(source, KeyboardInputSource):
            events = source.feed(events)

        clicks: List[Command] = []
        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
                return
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
                return
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                command = self.controls.handle_click(event.pos)
                if command is not None:
                    clicks.append(command)

        self.input_manager.update(0.0)

        self.dispatch(clicks + self.input_manager.get_events())

    def dispatch(self, commands: List[Command]) -> None:
        """Deliver commands to the loop driver.

        Session commands for a disabled button are dropped, which is also
        how Start stays unavailable until the assets have loaded.
        """
        for command in commands:
            if self.driver is None:
                log.debug("ignoring %s, assets not loaded", command)
                continue
            if not command.is_movement and not self.controls.is_enabled(command.action):
                log.debug("ignoring %s, button disabled", command)
                continue
            self.driver.handle_command(command)
            self._sync_controls()

    def update(self) -> None:
        """Run the frame callbacks requested since the last frame."""
        self.scheduler.run_pending()
        self._sync_controls()

    def render(self) -> None:
        """Draw the button strip and show the frame.

        The board area keeps whatever the last tick drew, so a stopped or
        finished game stays on screen.
        """
        self.controls.render(self.screen)
        pygame.display.flip()

    def run(self) -> None:
        """Run the main loop until the window closes.

        1. Handle events
        2. Run requested ticks
        3. Draw controls and flip
        4. Maintain target FPS
        """
        while self.running:
            self.clock.tick(self.fps)
            self.handle_events()
            self.update()
            self.render()

    def quit(self) -> None:
        """Stop the game loop and shut down pygame."""
        if self.driver is not None:
            self.driver.shutdown()
        pygame.quit()
