from __future__ import annotations

from blockdrop.game_state import Command, GameStatus
from blockdrop.tetromino import Cell, Tetromino
from blockdrop.utils import SHAPE_GLYPHS, preview_blocks, render_grid, render_text


def test_render_grid_overlays_active_piece(make_game) -> None:
    game = make_game(Cell.O, Cell.J)
    game.board.set_cell(21, 0, Cell.Z)
    grid = render_grid(game)

    assert len(grid) == 22 and all(len(row) == 10 for row in grid)
    assert grid[1][4] is Cell.O and grid[2][5] is Cell.O
    assert grid[21][0] is Cell.Z
    # The overlay never leaks into the locked grid.
    assert game.board.get_cell(1, 4) is Cell.EMPTY


def test_render_text_frame(make_game) -> None:
    game = make_game(Cell.O, Cell.J)
    lines = render_text(game).splitlines()

    assert len(lines) == 23
    assert lines[0] == ".........."
    assert lines[1] == "....OO...."
    assert lines[-1] == "Score: 0  Lines: 0  Next: J"


def test_render_text_marks_game_over(make_game) -> None:
    game = make_game(Cell.O, Cell.T, ticks_per_drop=1)
    game.board.set_cell(0, 9, Cell.I)
    assert game.tick(Command.NONE) is False
    assert render_text(game).endswith("GAME OVER")


def test_preview_blocks_are_frame_relative(make_game) -> None:
    game = make_game(Cell.O, Cell.L)
    assert preview_blocks(game.upcoming) == [(0, 1), (1, 1), (2, 1), (2, 2)]


def test_every_cell_has_a_glyph() -> None:
    assert set(SHAPE_GLYPHS) == set(Cell)
    assert len(set(SHAPE_GLYPHS.values())) == len(Cell)


def test_snapshot_is_detached_from_engine(make_game) -> None:
    game = make_game(Cell.O, Cell.S)
    snap = game.snapshot()

    game.active = Tetromino(Cell.O, row=5, col=0)

    assert snap.cells[1][4] is Cell.O
    assert snap.upcoming.shape is Cell.S
    assert snap.score == 0
    assert snap.status is GameStatus.PLAYING
    assert render_grid(game)[1][4] is Cell.EMPTY
