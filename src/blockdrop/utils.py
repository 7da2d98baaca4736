"""Rendering helpers shared by the drivers."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .game_state import GameState
from .tetromino import Cell, Tetromino


SHAPE_GLYPHS: Dict[Cell, str] = {
    Cell.I: "I",
    Cell.J: "J",
    Cell.L: "L",
    Cell.O: "O",
    Cell.S: "S",
    Cell.T: "T",
    Cell.Z: "Z",
    Cell.EMPTY: ".",
}


def render_grid(game: GameState) -> List[List[Cell]]:
    """Return the board as a renderer sees it, active piece included.

    This is a convenience for renderers that want a single 2D array to draw.
    The engine is only read through :meth:`GameState.cell_at`.
    """

    return [
        [game.cell_at(row, col) for col in range(game.cols)]
        for row in range(game.rows)
    ]


def preview_blocks(piece: Tetromino) -> List[Tuple[int, int]]:
    """Return ``piece``'s cells relative to its own 4x4 frame."""

    return [(r - piece.row, c - piece.col) for r, c in piece.blocks()]


def render_text(game: GameState) -> str:
    """Return an ASCII frame: the board, then the score and next piece."""

    lines = ["".join(SHAPE_GLYPHS[cell] for cell in row) for row in render_grid(game)]
    lines.append(f"Score: {game.score}  Lines: {game.lines}  Next: {game.upcoming.shape.name}")
    if game.is_over:
        lines.append("GAME OVER")
    return "\n".join(lines)
