"""Crossing game entities."""

from .enemy import Enemy
from .player import Player

__all__ = ['Enemy', 'Player']
