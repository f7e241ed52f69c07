"""
Input source implementations.
"""

from crossing.input.sources.base import InputSource
from crossing.input.sources.keyboard import KeyboardInputSource

__all__ = ['InputSource', 'KeyboardInputSource']
