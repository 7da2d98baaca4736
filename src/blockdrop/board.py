"""Board representation for the playfield."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from .tetromino import FRAME_SIZE, Cell, Tetromino


# Default dimensions of the playfield.
ROWS = 22
COLS = 10

Grid = NDArray[np.uint8]

EMPTY = np.uint8(Cell.EMPTY)

LOGGER = logging.getLogger(__name__)


def create_empty_grid(rows: int = ROWS, cols: int = COLS) -> Grid:
    """Return a new ``rows`` x ``cols`` grid with every cell ``EMPTY``."""

    return np.full((rows, cols), EMPTY, dtype=np.uint8)


class Board:
    """Grid of locked cells.

    The grid only ever holds cells of pieces that have locked; the falling
    piece is tracked separately by the engine and tested against the grid with
    :meth:`fits`.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS) -> None:
        if rows < FRAME_SIZE or cols < FRAME_SIZE:
            raise ValueError(
                f"Board must be at least {FRAME_SIZE}x{FRAME_SIZE}, got {rows}x{cols}"
            )
        self.height = rows
        self.width = cols
        self.grid: Grid = create_empty_grid(rows, cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> Cell:
        """Return the locked :class:`Cell` at ``(row, col)``.

        Raises:
            IndexError: If ``(row, col)`` lies off the grid.
        """
        if self.in_bounds(row, col):
            return Cell(int(self.grid[row, col]))
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: Cell) -> None:
        """Store ``value`` at ``(row, col)`` as its uint8 cell code.

        Raises:
            IndexError: If ``(row, col)`` lies off the grid.
        """
        if self.in_bounds(row, col):
            self.grid[row, col] = np.uint8(Cell(value))
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if ``(row, col)`` holds ``Cell.EMPTY``.

        Off-grid coordinates count as occupied, so walls and the floor reject
        a piece through the same check as locked cells.
        """

        if self.in_bounds(row, col):
            return bool(self.grid[row, col] == EMPTY)
        return False

    def fits(self, tetromino: Tetromino) -> bool:
        """Return ``True`` if every block of ``tetromino`` lands on an empty cell."""

        return all(self.is_empty(row, col) for row, col in tetromino.blocks())

    def lock_piece(self, tetromino: Tetromino) -> None:
        """Lock the tetromino's blocks into the board grid."""

        coordinates = np.asarray(tetromino.blocks(), dtype=np.int16)
        rows, cols = coordinates.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")

        self.grid[rows, cols] = np.uint8(tetromino.shape)

    def row_filled(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != EMPTY))

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows are scanned from the bottom up.  Whenever a row is full, all rows
        above it move down by one and the same row index is checked again,
        since it now holds what used to be the row above.
        """

        cleared = 0
        row = self.height - 1
        while row >= 0:
            if self.row_filled(row):
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0] = EMPTY
                cleared += 1
            else:
                row -= 1
        if cleared:
            LOGGER.debug("Cleared %d row(s)", cleared)
        return cleared

    def rows_occupied(self, count: int) -> bool:
        """Return ``True`` if any cell in the top ``count`` rows is filled."""

        return bool(np.any(self.grid[:count] != EMPTY))
