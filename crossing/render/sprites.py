"""Pygame sprite loading.

SpriteAssetProvider loads one PNG per image id from a directory. When an
image is missing it can draw a geometric placeholder of the same
image size instead, so the game is playable without artwork.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional

import pygame

from crossing import config
from crossing.assets import AssetProvider
from crossing.logging import get_logger

log = get_logger('assets')


def _darken(color, factor: float = 0.7):
    return tuple(int(c * factor) for c in color)


def make_placeholder(image_id: str) -> pygame.Surface:
    """Draw a stand-in sprite with the real image's dimensions.

    - Blocks: colored top face with a darker front edge
    - Enemy: red oval with eyes
    - Player: yellow head and body
    """
    width, height = config.IMAGE_SIZES.get(image_id, (config.SPRITE_WIDTH, config.SPRITE_HEIGHT))
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    color = config.PLACEHOLDER_COLORS.get(image_id, (255, 0, 255))

    if image_id == config.ENEMY_SPRITE:
        body = pygame.Rect(2, 77, width - 4, 66)
        pygame.draw.ellipse(surface, color, body)
        pygame.draw.ellipse(surface, _darken(color), body, 2)
        for eye_x in (width - 30, width - 16):
            pygame.draw.circle(surface, (255, 255, 255), (eye_x, 100), 5)
    elif image_id == config.PLAYER_SPRITE:
        pygame.draw.circle(surface, color, (width // 2, 82), 18)
        pygame.draw.rect(surface, color, pygame.Rect(width // 2 - 16, 98, 32, 40), border_radius=6)
        pygame.draw.circle(surface, (0, 0, 0), (width // 2 - 6, 80), 3)
        pygame.draw.circle(surface, (0, 0, 0), (width // 2 + 6, 80), 3)
    else:
        pygame.draw.rect(surface, color, pygame.Rect(0, 50, width, config.VISIBLE_ROW_HEIGHT))
        pygame.draw.rect(surface, _darken(color), pygame.Rect(0, 50 + config.VISIBLE_ROW_HEIGHT, width, 38))

    return surface


class SpriteAssetProvider(AssetProvider):
    """Loads sprites from disk and exposes them by image id.

    Handles:
    - <assets_dir>/<image_id>.png files
    - Placeholder surfaces for missing files (optional)

    If a file is missing and placeholders are off, the provider logs an
    error and never reports itself loaded.
    """

    def __init__(
        self,
        assets_dir: Optional[Path] = None,
        image_ids: Iterable[str] = config.IMAGE_IDS,
        placeholders: bool = config.USE_PLACEHOLDERS,
    ):
        super().__init__()
        self._assets_dir = Path(assets_dir) if assets_dir else config.ASSETS_DIR
        self._image_ids = tuple(image_ids)
        self._placeholders = placeholders
        self._sprites: Dict[str, pygame.Surface] = {}
        self._missing: list = []

    @property
    def missing(self) -> list:
        """Image ids that could not be loaded."""
        return list(self._missing)

    def load(self) -> bool:
        """Load every image.

        Returns:
            True if all images are available
        """
        self._missing = []
        for image_id in self._image_ids:
            sprite = self._load_sprite(image_id)
            if sprite is None:
                self._missing.append(image_id)
            else:
                self._sprites[image_id] = sprite

        if self._missing:
            log.error(
                "Missing sprites %s in %s; Start stays disabled",
                ', '.join(self._missing), self._assets_dir,
            )
            return False

        self._notify_loaded()
        return True

    def _load_sprite(self, image_id: str) -> Optional[pygame.Surface]:
        path = self._assets_dir / f"{image_id}.png"
        if path.exists():
            try:
                image = pygame.image.load(str(path))
            except pygame.error as e:
                log.error("Failed to load sprite '%s': %s", image_id, e)
                return None
            if pygame.display.get_surface() is not None:
                image = image.convert_alpha()
            return image

        if self._placeholders:
            log.debug("Sprite file not found, using placeholder: %s", path)
            return make_placeholder(image_id)

        return None

    def get_sprite(self, image_id: str) -> Optional[pygame.Surface]:
        return self._sprites.get(image_id)

    def has_sprite(self, image_id: str) -> bool:
        return image_id in self._sprites

    def get_image_width(self, image_id: str) -> int:
        sprite = self._sprites.get(image_id)
        if sprite is None:
            raise KeyError(f"Sprite '{image_id}' is not loaded")
        return sprite.get_width()
