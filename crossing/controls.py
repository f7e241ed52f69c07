"""
Start / Stop / Reset buttons.

The buttons sit in a strip below the board. Which of them are enabled
follows the session state and whether the assets have finished loading:

    assets loading   -> all disabled
    idle             -> Start
    running          -> Stop, Reset
    won / lost       -> Start, Reset
"""

from typing import Dict, List, Optional, Tuple

import pygame

from crossing import config
from crossing.commands import Command, SessionCommand
from crossing.game_state import GameState


def button_states(state: GameState, assets_ready: bool) -> Dict[SessionCommand, bool]:
    """Enabled flag for each session command button."""
    if not assets_ready:
        return {command: False for command in SessionCommand}

    running = state == GameState.RUNNING
    return {
        SessionCommand.START: not running,
        SessionCommand.STOP: running,
        SessionCommand.RESET: running or state.is_ended,
    }


class Button:
    """A clickable session command button.

    Attributes:
        label: Display text
        command: Session command issued when clicked
        rect: Screen rectangle
        enabled: Whether clicks are accepted
    """

    def __init__(self, label: str, command: SessionCommand, rect: pygame.Rect):
        self.label = label
        self.command = command
        self.rect = rect
        self.enabled = False

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)

    def render(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        color = config.BUTTON_COLOR if self.enabled else config.BUTTON_DISABLED_COLOR
        pygame.draw.rect(screen, color, self.rect, border_radius=6)
        text = font.render(self.label, True, config.BUTTON_TEXT_COLOR)
        screen.blit(text, text.get_rect(center=self.rect.center))


class ControlPanel:
    """Row of session buttons under the board.

    Examples:
        >>> panel = ControlPanel(top=606, width=505)
        >>> panel.sync(GameState.IDLE, assets_ready=True)
        >>> panel.is_enabled(SessionCommand.START)
        True
    """

    LABELS = (
        ("Start", SessionCommand.START),
        ("Reset", SessionCommand.RESET),
        ("Stop", SessionCommand.STOP),
    )

    def __init__(
        self,
        top: int = config.SCREEN_HEIGHT,
        width: int = config.SCREEN_WIDTH,
        height: int = config.CONTROL_BAR_HEIGHT,
    ):
        self.rect = pygame.Rect(0, top, width, height)
        self._font: Optional[pygame.font.Font] = None

        margin = 10
        button_width = (width - margin * (len(self.LABELS) + 1)) // len(self.LABELS)
        self.buttons: List[Button] = []
        for i, (label, command) in enumerate(self.LABELS):
            rect = pygame.Rect(
                margin + i * (button_width + margin),
                top + margin // 2,
                button_width,
                height - margin,
            )
            self.buttons.append(Button(label, command, rect))

    def sync(self, state: GameState, assets_ready: bool) -> None:
        """Update enabled flags from the session state."""
        states = button_states(state, assets_ready)
        for button in self.buttons:
            button.enabled = states[button.command]

    def is_enabled(self, command: SessionCommand) -> bool:
        return any(b.enabled for b in self.buttons if b.command == command)

    def handle_click(self, pos: Tuple[int, int], timestamp: float = 0.0) -> Optional[Command]:
        """Command for an enabled button under pos, or None."""
        for button in self.buttons:
            if button.enabled and button.contains(pos):
                return Command(button.command, timestamp)
        return None

    def render(self, screen: pygame.Surface) -> None:
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, config.FONT_SIZE_BUTTON)
        screen.fill(config.BACKGROUND_COLOR, self.rect)
        for button in self.buttons:
            button.render(screen, self._font)
