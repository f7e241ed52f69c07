"""Crossing input: pygame sources feeding commands to the engine."""
from crossing.input.input_manager import InputManager
from crossing.input.sources import InputSource, KeyboardInputSource

__all__ = [
    'InputManager',
    'InputSource',
    'KeyboardInputSource',
]
