"""Collision detection between the player and enemies.

Only enemies in the player's row can collide. Horizontal extents are
compared with inclusive bounds, so touching edges count as a hit.
"""

from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities.enemy import Enemy
    from ..entities.player import Player


def overlaps(left_a: float, right_a: float, left_b: float, right_b: float) -> bool:
    """Inclusive 1-D interval overlap."""
    return right_b >= left_a and right_a >= left_b


def check_enemy_collision(player: 'Player', enemy: 'Enemy') -> bool:
    """Check if an enemy touches the player.

    Args:
        player: Player to check (pixel position must be current)
        enemy: Enemy to check against

    Returns:
        True if both share a row and their visible extents overlap
    """
    if enemy.row != player.row:
        return False

    return overlaps(player.left, player.right, enemy.left, enemy.right)


def find_collision(player: 'Player', enemies: Iterable['Enemy']) -> Optional['Enemy']:
    """Return the first enemy touching the player, or None.

    Stops at the first hit; enemies after it are not examined.
    """
    for enemy in enemies:
        if check_enemy_collision(player, enemy):
            return enemy
    return None


def resolve_collisions(player: 'Player', enemies: Iterable['Enemy']) -> Optional['Enemy']:
    """Apply at most one collision for this tick.

    On a hit the player's collision count goes up by one and the player is
    sent home.

    Returns:
        The enemy that hit the player, or None
    """
    enemy = find_collision(player, enemies)
    if enemy is not None:
        player.crash()
    return enemy
