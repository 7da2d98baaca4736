from __future__ import annotations

import numpy as np

from blockdrop.game_state import Command, GameStatus
from blockdrop.tetromino import Cell, Tetromino


def _stack_columns(game, cols, top_row: int) -> None:
    for row in range(top_row, game.rows):
        for col in cols:
            game.board.set_cell(row, col, Cell.L)


def test_lock_into_top_rows_ends_game(make_game, caplog) -> None:
    game = make_game(Cell.O, Cell.T, ticks_per_drop=1)
    _stack_columns(game, (4, 5), top_row=3)

    with caplog.at_level("INFO", logger="blockdrop.game_state"):
        assert game.tick() is False

    assert game.status is GameStatus.GAME_OVER
    assert game.is_over
    assert game.board.get_cell(1, 4) is Cell.O
    assert "Game over" in caplog.text


def test_ticks_after_game_over_do_not_mutate(make_game) -> None:
    game = make_game(Cell.O, Cell.T, ticks_per_drop=1)
    _stack_columns(game, (4, 5), top_row=3)
    assert game.tick() is False

    grid = game.board.grid.copy()
    state = (game.active, game.upcoming, game.score, game.drop_timer, game.pieces)
    for command in Command:
        assert game.tick(command) is False

    assert np.array_equal(game.board.grid, grid)
    assert (game.active, game.upcoming, game.score, game.drop_timer, game.pieces) == state


def test_cells_below_top_rows_do_not_end_game(make_game) -> None:
    game = make_game(Cell.O, Cell.T)
    _stack_columns(game, (0,), top_row=2)
    assert game.tick(Command.NONE) is True
    assert game.status is GameStatus.PLAYING


def test_spawn_overlapping_stack_ends_game(make_game) -> None:
    game = make_game(Cell.O, Cell.I, ticks_per_drop=1)
    # The bar spawns over column 4, rows 0-3.
    game.board.set_cell(3, 4, Cell.S)
    game.active = Tetromino(Cell.O, row=19, col=0)

    assert game.tick(Command.MOVE_RIGHT) is False
    assert game.active == Tetromino(Cell.I, row=0, col=3)
    assert game.board.get_cell(3, 4) is Cell.S


def test_reset_starts_a_new_game(make_game) -> None:
    game = make_game(Cell.O, Cell.T, Cell.Z, ticks_per_drop=1)
    _stack_columns(game, (4, 5), top_row=3)
    assert game.tick() is False

    game.reset()

    assert game.status is GameStatus.PLAYING
    assert game.score == 0 and game.lines == 0 and game.pieces == 0
    assert bool(np.all(game.board.grid == Cell.EMPTY))
    assert game.tick() is True
