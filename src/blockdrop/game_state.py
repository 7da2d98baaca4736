"""Game engine: the per-tick state machine driving a single game."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .board import COLS, ROWS, Board
from .tetromino import SHAPES, Cell, Tetromino


# Ticks between gravity steps.
TICKS_PER_DROP = 500

# Score awarded when a single lock clears 0, 1, 2, 3 or 4 rows.
LINE_SCORES: Tuple[int, ...] = (0, 40, 100, 300, 1200)

# Rows at the top of the board that must stay free of locked cells.
DANGER_ROWS = 2

# Column offsets tried, in order, when a rotation does not fit in place.
KICK_OFFSETS: Tuple[int, ...] = (0, -1, 1)

LOGGER = logging.getLogger(__name__)


class Command(Enum):
    """Input accepted by :meth:`GameState.tick`."""

    MOVE_LEFT = "left"
    MOVE_RIGHT = "right"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    DROP = "drop"
    NONE = "none"


class GameStatus(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the engine handed to renderers."""

    cells: Tuple[Tuple[Cell, ...], ...]
    upcoming: Tetromino
    score: int
    lines: int
    status: GameStatus


class GameState:
    """Mutable state for a game session.

    The board only holds locked cells; the active piece is overlaid by
    :meth:`cell_at`.  All state changes happen in :meth:`tick`.
    """

    def __init__(
        self,
        rows: int = ROWS,
        cols: int = COLS,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        ticks_per_drop: int = TICKS_PER_DROP,
    ) -> None:
        if ticks_per_drop < 1:
            raise ValueError(f"ticks_per_drop must be positive, got {ticks_per_drop}")
        self._rng = rng if rng is not None else random.Random(seed)
        self._ticks_per_drop = ticks_per_drop
        self._rows = rows
        self._cols = cols
        self.reset()

    def reset(self) -> None:
        """Start a new game with an empty board and fresh pieces."""

        self.board = Board(self._rows, self._cols)
        self.score = 0
        self.lines = 0
        self.pieces = 0
        self.drop_timer = self._ticks_per_drop
        self.status = GameStatus.PLAYING
        self.upcoming = self._new_piece()
        self.active = self.upcoming
        self.upcoming = self._new_piece()

    # Read accessors ---------------------------------------------------
    @property
    def rows(self) -> int:
        return self.board.height

    @property
    def cols(self) -> int:
        return self.board.width

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def cell_at(self, row: int, col: int) -> Cell:
        """Return what a renderer should draw at ``(row, col)``.

        Cells covered by the active piece report its shape while the game is
        running; everything else reports the locked board contents.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        cell = self.board.get_cell(row, col)
        if self.status is GameStatus.PLAYING and (row, col) in self.active.blocks():
            return self.active.shape
        return cell

    def snapshot(self) -> GameSnapshot:
        """Return an immutable copy of everything a renderer needs."""

        cells = tuple(
            tuple(self.cell_at(row, col) for col in range(self.cols))
            for row in range(self.rows)
        )
        return GameSnapshot(
            cells=cells,
            upcoming=self.upcoming,
            score=self.score,
            lines=self.lines,
            status=self.status,
        )

    # Piece lifecycle --------------------------------------------------
    def _new_piece(self) -> Tetromino:
        return Tetromino.spawn(self._rng.choice(SHAPES), self.board.width)

    def _lock_and_spawn(self) -> int:
        """Lock the active piece, clear and score its rows, then spawn.

        Returns the number of rows the lock completed.  A single piece spans
        at most four rows, so the score lookup always stays in the table even
        when one tick locks two pieces.
        """

        self.board.lock_piece(self.active)
        self.pieces += 1
        LOGGER.debug(
            "Locked %s at row=%d col=%d rotation=%d",
            self.active.shape.name,
            self.active.row,
            self.active.col,
            self.active.rotation,
        )
        cleared = self.board.clear_full_rows()
        if cleared:
            self.lines += cleared
            self.score += LINE_SCORES[cleared]
            LOGGER.info("Cleared %d row(s). Score: %d", cleared, self.score)
        self.active = self.upcoming
        self.upcoming = self._new_piece()
        return cleared

    def _try_place(self, candidate: Tetromino) -> bool:
        if self.board.fits(candidate):
            self.active = candidate
            return True
        return False

    # Per-tick steps ---------------------------------------------------
    def _apply_gravity(self) -> None:
        self.drop_timer -= 1
        if self.drop_timer > 0:
            return
        if self._try_place(self.active.moved(d_row=1)):
            self.drop_timer = self._ticks_per_drop
        else:
            self._lock_and_spawn()

    def _rotate(self, direction: int) -> None:
        turned = self.active.rotated(direction)
        for offset in KICK_OFFSETS:
            if self._try_place(turned.moved(d_col=offset)):
                return
        LOGGER.debug("Rotation of %s rejected", self.active.shape.name)

    def _hard_drop(self) -> None:
        while self._try_place(self.active.moved(d_row=1)):
            pass
        self._lock_and_spawn()

    def _dispatch(self, command: Command) -> None:
        if command is Command.MOVE_LEFT:
            self._try_place(self.active.moved(d_col=-1))
        elif command is Command.MOVE_RIGHT:
            self._try_place(self.active.moved(d_col=1))
        elif command is Command.ROTATE_CW:
            self._rotate(1)
        elif command is Command.ROTATE_CCW:
            self._rotate(-1)
        elif command is Command.DROP:
            self._hard_drop()

    def _check_game_over(self) -> bool:
        return self.board.rows_occupied(DANGER_ROWS) or not self.board.fits(self.active)

    def tick(self, command: Command = Command.NONE) -> bool:
        """Advance the game by one step and return whether it is still running.

        Gravity is applied first, then ``command`` acts on whichever piece is
        active afterwards.  Rows are cleared and scored as each piece locks,
        so a tick that locks two pieces scores each lock on its own.  Once the
        game is over further calls return ``False`` without changing anything.

        Raises:
            TypeError: If ``command`` is not a :class:`Command`.
        """

        if not isinstance(command, Command):
            raise TypeError(f"Expected a Command, got {command!r}")
        if self.status is GameStatus.GAME_OVER:
            return False

        self._apply_gravity()
        # A freshly spawned piece that overlaps the stack is blocked out; it
        # must not move or lock.
        if self.board.fits(self.active):
            self._dispatch(command)

        if self._check_game_over():
            self.status = GameStatus.GAME_OVER
            LOGGER.info("Game over. Score: %d, lines: %d", self.score, self.lines)
            return False
        return True
