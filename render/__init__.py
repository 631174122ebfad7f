"""
Render module for TicTacToe.
Draws game snapshots for the UI and the console.
"""

from .config import RenderConfig
from .board_renderer import BoardRenderer
