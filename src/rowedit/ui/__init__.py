"""
UI package for the curses front-end.

This package implements the WindowManager that draws the editor and the
InputHandler that turns key presses into editor actions.
"""

from .window import WindowManager
from .input_handler import InputHandler

__all__ = ['WindowManager', 'InputHandler']
