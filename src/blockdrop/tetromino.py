"""Tetromino definitions and rotation geometry.

Every piece is described by a 16 bit occupancy mask over a 4x4 local frame.
Bit ``row * 4 + col`` is set when that cell is occupied in the spawn
orientation.  Rotated orientations are never stored; instead
:func:`rotation_index` maps a cell of the rotated frame back to the bit that
covers it in the spawn frame, one quarter turn clockwise per rotation step.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from functools import lru_cache
from typing import Dict, List, Tuple

Offsets = List[Tuple[int, int]]

FRAME_SIZE = 4
ROTATIONS = 4


class Cell(IntEnum):
    """Contents of a single board cell.

    The seven shape members double as piece identifiers.  ``EMPTY`` is an
    explicit member rather than an out-of-range integer.
    """

    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6
    EMPTY = 7


# The shape members of :class:`Cell`, in identifier order.
SHAPES: Tuple[Cell, ...] = tuple(c for c in Cell if c is not Cell.EMPTY)


# Spawn orientation masks.  Read a mask as four nibbles, the lowest nibble
# being row 0 and the lowest bit of each nibble being column 0.
TETROMINO_MASKS: Dict[Cell, int] = {
    Cell.I: 0b0010001000100010,
    Cell.J: 0b0000011001000100,
    Cell.L: 0b0000011000100010,
    Cell.O: 0b0000011001100000,
    Cell.S: 0b0100011000100000,
    Cell.T: 0b0010011000100000,
    Cell.Z: 0b0010011001000000,
}


def rotation_index(x: int, y: int, r: int) -> int:
    """Return the spawn-frame bit covering column ``x``, row ``y`` at rotation ``r``.

    ``r`` is reduced modulo four so negative values and values past three are
    accepted.
    """

    r %= ROTATIONS
    if r == 0:
        return y * 4 + x
    if r == 1:
        return 12 + y - 4 * x
    if r == 2:
        return 15 - 4 * y - x
    return 3 - y + 4 * x


@lru_cache(maxsize=None)
def _blocks(shape: Cell, rotation: int) -> Tuple[Tuple[int, int], ...]:
    mask = TETROMINO_MASKS[shape]
    return tuple(
        (y, x)
        for y in range(FRAME_SIZE)
        for x in range(FRAME_SIZE)
        if mask >> rotation_index(x, y, rotation) & 1
    )


def shape_blocks(shape: Cell, rotation: int) -> Offsets:
    """Return the ``(row, col)`` offsets occupied by ``shape`` at ``rotation``.

    Offsets are relative to the top-left corner of the 4x4 frame and are
    listed in row-major order.  Values of ``rotation`` are wrapped so any
    integer is accepted.
    """

    return list(_blocks(Cell(shape), rotation % ROTATIONS))


@dataclass(frozen=True)
class Tetromino:
    """A piece placed on the board.

    ``row`` and ``col`` locate the top-left corner of the piece's 4x4 frame.
    Instances are immutable; movement returns a new piece so candidate
    positions can be tested without touching the current one.
    """

    shape: Cell
    row: int = 0
    col: int = 0
    rotation: int = 0

    @classmethod
    def spawn(cls, shape: Cell, cols: int) -> "Tetromino":
        """Return ``shape`` at the top row, horizontally centred on ``cols``."""

        return cls(shape, row=0, col=cols // 2 - 2, rotation=0)

    def moved(self, d_row: int = 0, d_col: int = 0) -> "Tetromino":
        return replace(self, row=self.row + d_row, col=self.col + d_col)

    def rotated(self, direction: int = 1) -> "Tetromino":
        """Return the piece turned by ``direction`` quarter turns.

        Positive values turn clockwise, negative values counter-clockwise.
        """

        return replace(self, rotation=(self.rotation + direction) % ROTATIONS)

    def blocks(self) -> Offsets:
        """Return the board coordinates covered by this piece."""

        return [
            (self.row + dr, self.col + dc)
            for dr, dc in shape_blocks(self.shape, self.rotation)
        ]
