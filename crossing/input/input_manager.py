"""
Input manager for Crossing.

Holds the active input source and gives the engine a single place to
collect commands from.
"""

from typing import List

from crossing.commands import Command
from crossing.input.sources.base import InputSource


class InputManager:
    """Wraps the active input source and provides unified command access.

    Examples:
        >>> from crossing.input.sources.keyboard import KeyboardInputSource
        >>> manager = InputManager(KeyboardInputSource())
        >>> manager.update(0.016)
        >>> manager.get_events()
        []
    """

    def __init__(self, source: InputSource):
        """
        Raises:
            TypeError: If source is not an instance of InputSource
        """
        if not isinstance(source, InputSource):
            raise TypeError(
                f"source must be an instance of InputSource, got {type(source).__name__}"
            )
        self._source = source

    def get_source(self) -> InputSource:
        return self._source

    def update(self, dt: float) -> None:
        """Update the active input source once per frame."""
        self._source.update(dt)

    def get_events(self) -> List[Command]:
        """New commands from the active source."""
        return self._source.poll_events()
