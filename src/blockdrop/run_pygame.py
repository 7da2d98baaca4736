"""Simple pygame front-end for the engine.

This module is a thin driver: it turns key presses into :class:`Command`
values, calls :meth:`GameState.tick` once per frame and draws whatever
:meth:`GameState.cell_at` reports.  It never reaches into the board itself.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import pygame

from .board import COLS, ROWS
from .game_state import Command, GameState
from .tetromino import Cell
from .utils import preview_blocks

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at; one engine tick per frame
FPS = 60
# Engine ticks between gravity steps (half a second at 60 FPS)
TICKS_PER_DROP = 30
# Width of the side panel holding the preview and score
PANEL_WIDTH = 6 * CELL_SIZE

# Colours for each cell value
CELL_COLORS: Dict[Cell, tuple[int, int, int]] = {
    Cell.I: (0, 255, 255),
    Cell.J: (0, 0, 255),
    Cell.L: (255, 255, 255),
    Cell.O: (255, 255, 0),
    Cell.S: (0, 255, 0),
    Cell.T: (255, 0, 255),
    Cell.Z: (255, 0, 0),
    Cell.EMPTY: (0, 0, 0),
}

KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_DOWN: Command.DROP,
    pygame.K_SPACE: Command.DROP,
}

LOGGER = logging.getLogger(__name__)


def command_for_key(key: int) -> Command:
    """Map a pygame key code to a command; unknown keys map to ``NONE``."""

    return KEY_COMMANDS.get(key, Command.NONE)


def _draw_cell(screen: pygame.Surface, x: int, y: int, cell: Cell) -> None:
    rect = pygame.Rect(x, y, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, CELL_COLORS[cell], rect)
    pygame.draw.rect(screen, (50, 50, 50), rect, 1)


def draw_board(screen: pygame.Surface, game: GameState) -> None:
    """Render the board with the active piece overlaid."""

    for r in range(game.rows):
        for c in range(game.cols):
            _draw_cell(screen, c * CELL_SIZE, r * CELL_SIZE, game.cell_at(r, c))


def draw_panel(screen: pygame.Surface, game: GameState, font: pygame.font.Font) -> None:
    """Render the next-piece preview and the score beside the board."""

    left = game.cols * CELL_SIZE + CELL_SIZE
    screen.blit(font.render("Next", True, (255, 255, 255)), (left, CELL_SIZE // 2))
    for r, c in preview_blocks(game.upcoming):
        _draw_cell(
            screen, left + c * CELL_SIZE, (r + 1) * CELL_SIZE + CELL_SIZE // 2,
            game.upcoming.shape,
        )
    screen.blit(font.render("Score", True, (255, 255, 255)), (left, 7 * CELL_SIZE))
    screen.blit(font.render(str(game.score), True, (255, 255, 255)), (left, 8 * CELL_SIZE))
    if game.is_over:
        screen.blit(font.render("Game over", True, (255, 0, 0)), (left, 10 * CELL_SIZE))
        screen.blit(font.render("R: restart", True, (200, 200, 200)), (left, 11 * CELL_SIZE))


class GameRunner:
    """Own the window and the frame loop; one engine tick per frame."""

    def __init__(self, rows: int = ROWS, cols: int = COLS, seed: Optional[int] = None) -> None:
        self._rows = rows
        self._cols = cols
        self._seed = seed
        self._running = False
        self._paused = False
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self.game: Optional[GameState] = None

    @property
    def paused(self) -> bool:
        return self._paused

    def handle_key(self, key: int) -> Command:
        """Apply runner keys (P pauses, R restarts after game over) and map the rest."""

        if key == pygame.K_p:
            self._paused = not self._paused
            LOGGER.info("Paused" if self._paused else "Resumed")
        elif key == pygame.K_r and self.game and self.game.is_over:
            self.game.reset()
            LOGGER.info("Game restarted")
        return command_for_key(key)

    async def _run_loop(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(
            (self._cols * CELL_SIZE + PANEL_WIDTH, self._rows * CELL_SIZE)
        )
        pygame.display.set_caption("blockdrop")
        self._clock = pygame.time.Clock()
        font = pygame.font.Font(None, CELL_SIZE)

        self.game = GameState(
            self._rows, self._cols, seed=self._seed, ticks_per_drop=TICKS_PER_DROP
        )
        LOGGER.info("Game started")

        self._running = True
        while self._running:
            self._clock.tick(FPS)
            command = Command.NONE
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    command = self.handle_key(event.key)

            if not self.paused and not self.game.is_over:
                self.game.tick(command)

            self._screen.fill((0, 0, 0))
            draw_board(self._screen, self.game)
            draw_panel(self._screen, self.game, font)
            pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped with score %d", self.game.score)

    def start(self) -> None:
        self._paused = False
        asyncio.run(self._run_loop())


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    GameRunner().start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
