"""
Keyboard Input Source - arrow keys and session hotkeys.

Moves are taken from key releases, so holding a key down moves the
player once.
"""
import time
from typing import Dict, Iterable, List, Union

import pygame

from crossing.commands import Command, Direction, SessionCommand
from crossing.input.sources.base import InputSource

KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_UP: Direction.UP,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_DOWN: Direction.DOWN,
}

KEY_COMMANDS: Dict[int, SessionCommand] = {
    pygame.K_s: SessionCommand.START,
    pygame.K_x: SessionCommand.STOP,
    pygame.K_r: SessionCommand.RESET,
}


class KeyboardInputSource(InputSource):
    """Converts pygame KEYUP events into commands.

    The engine passes each frame's pygame events to feed(); events this
    source does not use are returned for the engine to handle.
    """

    def __init__(self):
        self._event_queue: List[Command] = []

    def translate(self, key: int) -> Union[Direction, SessionCommand, None]:
        """Action for a pygame key code, or None if the key is unmapped."""
        if key in KEY_DIRECTIONS:
            return KEY_DIRECTIONS[key]
        return KEY_COMMANDS.get(key)

    def feed(self, events: Iterable[pygame.event.Event]) -> List[pygame.event.Event]:
        """Queue commands for mapped key releases.

        Returns:
            Events that were not consumed
        """
        unused = []
        for event in events:
            if event.type == pygame.KEYUP:
                action = self.translate(event.key)
                if action is not None:
                    self._event_queue.append(Command(action, time.monotonic()))
                    continue
            unused.append(event)
        return unused

    def poll_events(self) -> List[Command]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        pass
