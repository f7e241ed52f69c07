"""
Game loop driver.

The driver turns host frame callbacks into session ticks. The host owns
the real scheduling primitive (in the pygame engine, one callback per
pass of its main loop); the driver only asks for "one more frame" while a
game is running and cancels that request when told to halt.

Per tick, in order:
    1. dt from the clock
    2. session.tick(dt): enemies, player position, collision, win/loss
    3. render the returned frame
    4. request the next frame if the game is still running

Examples:
    >>> from crossing.session import GameSession
    >>> scheduler = QueuedFrameScheduler()
    >>> clock = ManualClock()
    >>> driver = LoopDriver(GameSession(seed=3), scheduler, clock)
    >>> driver.start()
    >>> scheduler.pending
    1
    >>> clock.advance(0.016)
    >>> scheduler.run_pending()
    1
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from crossing.commands import Command, Direction, SessionCommand
from crossing.logging import get_logger
from crossing.models import Frame
from crossing.render.base import Renderer
from crossing.session import GameSession

log = get_logger('loop')

FrameCallback = Callable[[], None]


# =============================================================================
# Host collaborators
# =============================================================================

class Clock(ABC):
    """Monotonic time source."""

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds. Only differences are meaningful."""
        pass


class MonotonicClock(Clock):
    """Wall clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock(Clock):
    """Clock that only moves when told to. Used by tests and replays."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Clock cannot go backwards, got {seconds}")
        self._now += seconds


class FrameScheduler(ABC):
    """Host primitive for "call me on the next frame"."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback for the next frame.

        Returns:
            Handle that can be passed to cancel_frame()
        """
        pass

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending request. Unknown handles are ignored."""
        pass


class QueuedFrameScheduler(FrameScheduler):
    """Collects frame requests until the host runs them.

    The host calls run_pending() once per frame. Callbacks requested while
    running are deferred to the following frame.
    """

    def __init__(self):
        self._callbacks: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def run_pending(self) -> int:
        """Run every callback requested before this call.

        Returns:
            Number of callbacks run
        """
        callbacks, self._callbacks = self._callbacks, {}
        for callback in callbacks.values():
            callback()
        return len(callbacks)


# =============================================================================
# Driver
# =============================================================================

class LoopDriver:
    """Schedules session ticks and renders their frames.

    Attributes:
        session: The game session being driven
        last_frame: Frame produced by the most recent tick or redraw
    """

    def __init__(
        self,
        session: GameSession,
        scheduler: FrameScheduler,
        clock: Optional[Clock] = None,
        renderer: Optional[Renderer] = None,
    ):
        self.session = session
        self._scheduler = scheduler
        self._clock = clock or MonotonicClock()
        self._renderer = renderer

        self._pending: Optional[int] = None
        self._active = False
        self._last_time = 0.0
        self._frames = 0
        self.last_frame: Optional[Frame] = None

    @property
    def is_active(self) -> bool:
        """True while the loop keeps requesting frames."""
        return self._active

    @property
    def has_pending_frame(self) -> bool:
        return self._pending is not None

    @property
    def frames(self) -> int:
        """Ticks run since this driver was created."""
        return self._frames

    # -------------------------------------------------------------------------
    # Session commands
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Start a game and run its first tick with dt = 0."""
        if not self.session.start():
            return
        self._begin()

    def stop(self) -> None:
        """Abort the game, halt the loop and redraw the idle board."""
        self.session.stop()
        self._halt()
        self.redraw()

    def reset(self) -> None:
        """Stop followed by start. No-op before the first game."""
        self._halt()
        if self.session.reset():
            self._begin()

    def move(self, direction: Direction) -> None:
        self.session.move(direction)

    def handle_command(self, command: Command) -> None:
        action = command.action
        if isinstance(action, Direction):
            self.move(action)
        elif action == SessionCommand.START:
            self.start()
        elif action == SessionCommand.STOP:
            self.stop()
        elif action == SessionCommand.RESET:
            self.reset()

    def shutdown(self) -> None:
        """Stop the game and the loop without drawing. Idempotent.

        The session is stopped along with the loop, so a later start()
        begins a new game.
        """
        self.session.stop()
        self._halt()

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def _halt(self) -> None:
        """Stop requesting frames and cancel any pending one. Idempotent."""
        if self._pending is not None:
            self._scheduler.cancel_frame(self._pending)
            self._pending = None
        if self._active:
            log.debug("loop halted after %d frames", self._frames)
        self._active = False

    def _begin(self) -> None:
        self._active = True
        self._last_time = self._clock.now()
        log.debug("loop started")
        self._tick()

    def _tick(self) -> None:
        """One frame. Always completes; a halt takes effect afterwards."""
        self._pending = None

        now = self._clock.now()
        dt = max(0.0, now - self._last_time)
        self._last_time = now

        frame = self.session.tick(dt)
        self._frames += 1
        self._draw(frame)

        if self._active and self.session.is_running:
            self._pending = self._scheduler.request_frame(self._tick)
        else:
            self._halt()

    def redraw(self) -> None:
        """Render the current state without advancing the simulation."""
        self._draw(self.session.frame())

    def _draw(self, frame: Frame) -> None:
        self.last_frame = frame
        if self._renderer is not None:
            self._renderer.render(frame)
