from __future__ import annotations

from typing import Iterable, Sequence

import pytest

from blockdrop.game_state import GameState
from blockdrop.tetromino import Cell


class ScriptedRng:
    """Stand-in for ``random.Random`` that hands out shapes in a fixed order.

    Once the script runs out the last shape is repeated.
    """

    def __init__(self, shapes: Iterable[Cell]) -> None:
        self._shapes = list(shapes)
        self.draws = 0

    def choice(self, seq: Sequence[Cell]) -> Cell:
        shape = self._shapes[min(self.draws, len(self._shapes) - 1)]
        self.draws += 1
        assert shape in seq
        return shape


@pytest.fixture
def make_game():
    def _make(*shapes: Cell, **kwargs) -> GameState:
        rng = ScriptedRng(shapes or (Cell.O,))
        return GameState(rng=rng, **kwargs)

    return _make


def occupied(game: GameState) -> int:
    return sum(
        1
        for row in range(game.rows)
        for col in range(game.cols)
        if game.cell_at(row, col) is not Cell.EMPTY
    )
