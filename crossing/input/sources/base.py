"""
Abstract base class for input sources.

Every source (keyboard, on-screen buttons, scripted test input) converts
its raw events into Command objects and hands them out through
poll_events().
"""

from abc import ABC, abstractmethod
from typing import List

from crossing.commands import Command


class InputSource(ABC):
    """Abstract base class for input sources.

    Subclasses must implement:
        - poll_events(): Return new commands since last poll
        - update(dt): Update source state for time-based processing

    Examples:
        >>> class MyInputSource(InputSource):
        ...     def poll_events(self) -> List[Command]:
        ...         return []
        ...     def update(self, dt: float) -> None:
        ...         pass
    """

    @abstractmethod
    def poll_events(self) -> List[Command]:
        """Return every command since the last call and clear the queue."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Called once per frame.

        Args:
            dt: Delta time in seconds since last update
        """
        pass
