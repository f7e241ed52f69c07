"""Crossing rendering.

Only the renderer interface is imported here so the core stays free of
pygame; import crossing.render.pygame_renderer for the pygame backend.
"""

from .base import Renderer

__all__ = ['Renderer']
