"""Rules engine for a falling-block puzzle game."""

from .board import Board
from .tetromino import Cell, Tetromino, rotation_index, shape_blocks
from .game_state import Command, GameSnapshot, GameState, GameStatus, LINE_SCORES
from .utils import render_grid, render_text

__all__ = [
    "Board",
    "Cell",
    "Command",
    "GameSnapshot",
    "GameState",
    "GameStatus",
    "LINE_SCORES",
    "Tetromino",
    "render_grid",
    "render_text",
    "rotation_index",
    "shape_blocks",
]
