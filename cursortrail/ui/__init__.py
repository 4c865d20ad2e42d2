"""Pygame demo UI layer."""
from .renderer import Renderer, draw_trail
from .input import InputHandler, InputAction
from .terminal import TerminalPane

__all__ = ['Renderer', 'draw_trail', 'InputHandler', 'InputAction', 'TerminalPane']
