"""
Tests for the loop driver and its host collaborators.

The driver is exercised with a ManualClock and a QueuedFrameScheduler so
each test controls exactly when time passes and when frames run.
"""

import pytest

from conftest import park_enemies, place_enemy_on_player
from crossing.commands import Command, Direction, SessionCommand
from crossing.game_state import GameState
from crossing.loop import LoopDriver, ManualClock, QueuedFrameScheduler
from crossing.render.base import Renderer


class RecordingRenderer(Renderer):
    """Renderer that records the primitives it is asked to draw."""

    def __init__(self):
        self.frames = []
        self.calls = []
        self.on_render = None

    def render(self, frame):
        self.frames.append(frame)
        if self.on_render is not None:
            self.on_render(frame)
        super().render(frame)

    def draw_board(self, row_images, columns, row_height):
        self.calls.append('board')

    def draw_sprite(self, sprite):
        self.calls.append(('sprite', sprite.image_id))

    def draw_hud(self, lives_text):
        self.calls.append(('hud', lives_text))

    def draw_status(self, message, background_color, text_color):
        self.calls.append(('status', message))

    def present(self):
        self.calls.append('present')


@pytest.fixture
def clock():
    return ManualClock(start=100.0)


@pytest.fixture
def scheduler():
    return QueuedFrameScheduler()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def driver(session, scheduler, clock, renderer):
    return LoopDriver(session, scheduler, clock, renderer)


def start_parked(driver):
    """Start a game and park the enemies before any time passes."""
    driver.start()
    park_enemies(driver.session)


class TestManualClock:
    """Tests for ManualClock."""

    def test_advance(self):
        clock = ManualClock()
        clock.advance(0.5)
        clock.advance(0.25)
        assert clock.now() == pytest.approx(0.75)

    def test_cannot_go_backwards(self):
        with pytest.raises(ValueError):
            ManualClock().advance(-0.1)


class TestQueuedFrameScheduler:
    """Tests for QueuedFrameScheduler."""

    def test_run_pending_runs_once(self, scheduler):
        calls = []
        scheduler.request_frame(lambda: calls.append(1))
        assert scheduler.run_pending() == 1
        assert scheduler.run_pending() == 0
        assert calls == [1]

    def test_cancel(self, scheduler):
        calls = []
        handle = scheduler.request_frame(lambda: calls.append(1))
        scheduler.cancel_frame(handle)
        assert scheduler.run_pending() == 0
        assert calls == []

    def test_cancel_unknown_handle_ignored(self, scheduler):
        scheduler.cancel_frame(12345)
        assert scheduler.pending == 0

    def test_requests_during_run_deferred(self, scheduler):
        calls = []

        def again():
            calls.append('again')
            scheduler.request_frame(again)

        scheduler.request_frame(again)
        scheduler.run_pending()
        assert calls == ['again']
        assert scheduler.pending == 1

    def test_handles_unique(self, scheduler):
        a = scheduler.request_frame(lambda: None)
        b = scheduler.request_frame(lambda: None)
        assert a != b


class TestDriverStart:
    """Tests for LoopDriver.start()."""

    def test_first_tick_runs_immediately(self, driver, renderer):
        driver.start()
        assert driver.frames == 1
        assert len(renderer.frames) == 1
        assert driver.session.ticks == 1

    def test_first_tick_has_zero_dt(self, driver, clock):
        """Time before start never reaches the simulation."""
        clock.advance(30.0)
        driver.start()
        assert driver.session.elapsed == 0.0

    def test_requests_next_frame(self, driver, scheduler):
        driver.start()
        assert driver.is_active
        assert driver.has_pending_frame
        assert scheduler.pending == 1

    def test_dt_from_clock(self, driver, scheduler, clock):
        start_parked(driver)
        enemy = driver.session.enemies[0]
        enemy.speed = 100.0
        clock.advance(0.25)
        scheduler.run_pending()
        assert enemy.x == pytest.approx(25.0)
        assert driver.session.elapsed == pytest.approx(0.25)

    def test_start_while_running_ignored(self, driver, scheduler):
        driver.start()
        driver.start()
        assert driver.frames == 1
        assert scheduler.pending == 1

    def test_one_pending_frame_at_a_time(self, driver, scheduler, clock):
        start_parked(driver)
        for _ in range(5):
            clock.advance(0.016)
            assert scheduler.run_pending() == 1
            assert scheduler.pending == 1
        assert driver.frames == 6


class TestDriverShutdown:
    """Tests for stopping and shutting down the loop."""

    def test_shutdown_cancels_pending_frame(self, driver, scheduler):
        driver.start()
        driver.shutdown()
        assert not driver.is_active
        assert not driver.has_pending_frame
        assert scheduler.run_pending() == 0
        assert driver.frames == 1

    def test_shutdown_is_idempotent(self, driver, scheduler):
        driver.start()
        driver.shutdown()
        driver.shutdown()
        assert scheduler.pending == 0

    def test_shutdown_before_start(self, driver, renderer):
        driver.shutdown()
        assert not driver.is_active
        assert renderer.frames == []

    def test_shutdown_stops_session(self, driver):
        """Loop and session stop together, so start() is not left ignored."""
        driver.start()
        driver.shutdown()
        assert driver.session.state == GameState.IDLE
        driver.start()
        assert driver.session.state == GameState.RUNNING
        assert driver.is_active
        assert driver.has_pending_frame

    def test_stop_goes_idle_and_redraws(self, driver, scheduler, renderer):
        driver.start()
        driver.stop()
        assert driver.session.state == GameState.IDLE
        assert scheduler.pending == 0
        last = renderer.frames[-1]
        assert last.state == GameState.IDLE
        assert last.sprites == []
        assert last.lives_text is None

    def test_stop_twice(self, driver, renderer):
        driver.start()
        driver.stop()
        driver.stop()
        assert driver.session.state == GameState.IDLE

    def test_start_after_stop(self, driver, scheduler):
        driver.start()
        driver.stop()
        driver.start()
        assert driver.is_active
        assert scheduler.pending == 1

    def test_shutdown_inside_render_lets_tick_finish(self, driver, scheduler, clock, renderer):
        """A shutdown requested mid-tick takes effect after the tick completes."""
        start_parked(driver)
        renderer.calls.clear()
        renderer.on_render = lambda frame: driver.shutdown()
        clock.advance(0.016)
        scheduler.run_pending()
        assert renderer.calls[-1] == 'present'
        assert driver.session.ticks == 2
        assert not driver.is_active
        assert scheduler.pending == 0


class TestDriverOutcome:
    """Tests for the loop ending with the game."""

    def test_loop_halts_on_win(self, driver, scheduler, clock, renderer):
        start_parked(driver)
        for _ in range(5):
            driver.move(Direction.UP)
        clock.advance(0.016)
        scheduler.run_pending()
        assert driver.session.state == GameState.WON
        assert not driver.is_active
        assert scheduler.pending == 0
        assert ('status', "Woo hoo! You won!") in renderer.calls

    def test_loop_halts_on_loss(self, driver, scheduler, clock):
        start_parked(driver)
        place_enemy_on_player(driver.session)
        for _ in range(3):
            clock.advance(0.016)
            scheduler.run_pending()
        assert driver.session.state == GameState.LOST
        assert not driver.has_pending_frame

    def test_render_sees_collision(self, driver, scheduler, clock, renderer):
        """The frame rendered in a tick already counts that tick's collision."""
        start_parked(driver)
        place_enemy_on_player(driver.session)
        clock.advance(0.016)
        scheduler.run_pending()
        assert renderer.frames[-1].lives_text == "Lives remaining: 2"

    def test_start_after_win(self, driver, scheduler, clock):
        start_parked(driver)
        for _ in range(5):
            driver.move(Direction.UP)
        clock.advance(0.016)
        scheduler.run_pending()
        driver.start()
        assert driver.session.state == GameState.RUNNING
        assert driver.is_active


class TestDriverRenderOrder:
    """Tests for what reaches the renderer."""

    def test_render_order(self, driver, renderer):
        """Board, then HUD, then sprites with the player last."""
        driver.start()
        assert renderer.calls[0] == 'board'
        assert renderer.calls[1] == ('hud', "Lives remaining: 3")
        assert renderer.calls[2:-1] == [('sprite', 'enemy-bug')] * 3 + [('sprite', 'char-boy')]
        assert renderer.calls[-1] == 'present'

    def test_banner_drawn_over_sprites(self, driver, scheduler, clock, renderer):
        start_parked(driver)
        for _ in range(5):
            driver.move(Direction.UP)
        renderer.calls.clear()
        clock.advance(0.016)
        scheduler.run_pending()
        assert renderer.calls[1] == ('hud', None)
        assert renderer.calls[-2] == ('status', "Woo hoo! You won!")
        assert renderer.calls[-3] == ('sprite', 'char-boy')

    def test_redraw_does_not_tick(self, driver, renderer):
        driver.redraw()
        assert driver.frames == 0
        assert driver.last_frame.state == GameState.IDLE
        assert renderer.calls == ['board', ('hud', None), 'present']

    def test_without_renderer(self, session, scheduler, clock):
        driver = LoopDriver(session, scheduler, clock)
        driver.start()
        assert driver.last_frame.state == GameState.RUNNING


class TestDriverCommands:
    """Tests for reset and command dispatch."""

    def test_reset_before_first_game(self, driver, scheduler):
        driver.reset()
        assert driver.session.state == GameState.IDLE
        assert scheduler.pending == 0

    def test_reset_while_running(self, driver, scheduler, clock):
        start_parked(driver)
        driver.move(Direction.UP)
        clock.advance(0.016)
        scheduler.run_pending()
        driver.reset()
        assert driver.session.state == GameState.RUNNING
        assert driver.session.player.is_home
        assert driver.session.ticks == 1
        assert scheduler.pending == 1

    def test_handle_command(self, driver, scheduler):
        driver.handle_command(Command(SessionCommand.START))
        driver.handle_command(Command(Direction.LEFT))
        assert driver.session.player.col == 1
        driver.handle_command(Command(SessionCommand.RESET))
        assert driver.session.player.col == 2
        driver.handle_command(Command(SessionCommand.STOP))
        assert driver.session.state == GameState.IDLE
        assert scheduler.pending == 0
