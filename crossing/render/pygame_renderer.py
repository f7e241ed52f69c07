"""Pygame renderer for Crossing frames."""

from typing import Optional, Tuple

import pygame

from crossing import config
from crossing.models import SpritePlacement
from crossing.render.base import Renderer
from crossing.render.sprites import SpriteAssetProvider

HUD_HEIGHT = 50
BANNER_TOP = 120
BANNER_HEIGHT = 140


def parse_hex_color(value: str) -> Tuple[int, int, int]:
    """Convert #rgb or #rrggbb to an RGB tuple."""
    digits = value.lstrip('#')
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    if len(digits) != 6:
        raise ValueError(f"expected a #rgb or #rrggbb color, got {value!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


class PygameRenderer(Renderer):
    """Draws frames onto a pygame surface.

    Board tiles are drawn at (col * tile width, row * row height); sprites
    at their frame position. The HUD strip across the top is cleared every
    frame, and the lives counter drawn right-aligned in it while a game is
    running.
    """

    def __init__(self, screen: pygame.Surface, sprites: SpriteAssetProvider):
        self._screen = screen
        self._sprites = sprites
        self._hud_font: Optional[pygame.font.Font] = None
        self._banner_font: Optional[pygame.font.Font] = None

    def _ensure_fonts(self) -> None:
        if self._hud_font is None:
            pygame.font.init()
            self._hud_font = pygame.font.Font(None, config.FONT_SIZE_HUD)
            self._banner_font = pygame.font.Font(None, config.FONT_SIZE_BANNER)

    @property
    def board_width(self) -> int:
        return self._screen.get_width()

    def draw_board(self, row_images: Tuple[str, ...], columns: int, row_height: int) -> None:
        self._screen.fill(config.BACKGROUND_COLOR, pygame.Rect(0, 0, self.board_width, config.SCREEN_HEIGHT))
        for row, image_id in enumerate(row_images):
            image = self._sprites.get_sprite(image_id)
            if image is None:
                continue
            for col in range(columns):
                self._screen.blit(image, (col * image.get_width(), row * row_height))

    def draw_sprite(self, sprite: SpritePlacement) -> None:
        image = self._sprites.get_sprite(sprite.image_id)
        if image is not None:
            self._screen.blit(image, (int(sprite.x), int(sprite.y)))

    def draw_hud(self, lives_text: Optional[str]) -> None:
        self._ensure_fonts()
        self._screen.fill(config.BACKGROUND_COLOR, pygame.Rect(0, 0, self.board_width, HUD_HEIGHT))
        if lives_text:
            text = self._hud_font.render(lives_text, True, config.HUD_TEXT_COLOR)
            rect = text.get_rect(bottomright=(self.board_width - 30, 35))
            self._screen.blit(text, rect)

    def draw_status(self, message: str, background_color: str, text_color: str) -> None:
        self._ensure_fonts()
        fill = parse_hex_color(background_color)
        ink = parse_hex_color(text_color)

        banner = pygame.Rect(0, BANNER_TOP, self.board_width, BANNER_HEIGHT)
        pygame.draw.rect(self._screen, fill, banner)
        pygame.draw.rect(self._screen, ink, banner, 1)

        text = self._banner_font.render(message, True, ink)
        self._screen.blit(text, text.get_rect(center=banner.center))
