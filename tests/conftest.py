"""Shared fixtures for Crossing tests."""
import copy
import os

# Headless pygame and quiet logs; must be set before crossing is imported
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')
os.environ.setdefault('CROSSING_LOG_LEVEL', 'WARNING')

import pytest

from crossing import logging as crossing_logging
from crossing.assets import StaticAssetProvider
from crossing.logging import MemorySink
from crossing.models import GameSettings
from crossing.session import GameSession


@pytest.fixture
def settings():
    """Standard game settings."""
    return GameSettings()


@pytest.fixture
def assets():
    """Fixed-size sprites, ready immediately."""
    return StaticAssetProvider()


@pytest.fixture
def session(settings, assets):
    """Idle session with a fixed seed."""
    return GameSession(settings, assets=assets, seed=1234)


@pytest.fixture
def running_session(session):
    """Session with a game in progress and every enemy parked off the player's path."""
    session.start()
    park_enemies(session)
    return session


@pytest.fixture
def logging_config():
    """Restore the global logging configuration after the test."""
    saved = copy.deepcopy(crossing_logging._config)
    yield crossing_logging._config
    crossing_logging._config.clear()
    crossing_logging._config.update(saved)


@pytest.fixture
def session_records():
    """Capture structured 'session' records."""
    sink = MemorySink()
    crossing_logging.register_sink('session', sink)
    yield sink.records
    crossing_logging._sinks.pop('session', None)


def park_enemies(session):
    """Stop every enemy at the track start of row 1, clear of the home cell."""
    for enemy in session.enemies:
        enemy.row = 1
        enemy.x = 0.0
        enemy.speed = 0.0


def place_enemy_on_player(session, enemy_index=0):
    """Put a motionless enemy directly on top of the player."""
    enemy = session.enemies[enemy_index]
    enemy.row = session.player.row
    enemy.x = session.player.col * enemy.width
    enemy.speed = 0.0
    return enemy
