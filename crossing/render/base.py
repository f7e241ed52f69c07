"""Renderer interface.

A renderer turns a Frame into pixels. render() draws in a fixed order
(board, HUD, sprites, status banner); subclasses supply the primitives.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from crossing.models import Frame, SpritePlacement


class Renderer(ABC):
    """Draws frames produced by GameSession.tick()."""

    def render(self, frame: Frame) -> None:
        """Draw a complete frame."""
        self.draw_board(frame.row_images, frame.columns, frame.row_height)
        # The HUD clears its strip, so it goes under the sprites
        self.draw_hud(frame.lives_text)
        for sprite in frame.sprites:
            self.draw_sprite(sprite)
        if frame.banner is not None:
            self.draw_status(
                frame.banner.message,
                frame.banner.background_color,
                frame.banner.text_color,
            )
        self.present()

    @abstractmethod
    def draw_board(self, row_images: Tuple[str, ...], columns: int, row_height: int) -> None:
        """Tile each row with its background image."""
        pass

    @abstractmethod
    def draw_sprite(self, sprite: SpritePlacement) -> None:
        pass

    @abstractmethod
    def draw_hud(self, lives_text: Optional[str]) -> None:
        """Clear the HUD strip and draw the lives counter, if any."""
        pass

    @abstractmethod
    def draw_status(self, message: str, background_color: str, text_color: str) -> None:
        """Draw a banner across the board (win/loss messages)."""
        pass

    def present(self) -> None:
        """Show the finished frame. Default is a no-op."""
        pass
