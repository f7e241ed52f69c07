"""Crossing collision detection."""

from .collision import (
    overlaps,
    check_enemy_collision,
    find_collision,
    resolve_collisions,
)

__all__ = [
    'overlaps',
    'check_enemy_collision',
    'find_collision',
    'resolve_collisions',
]
