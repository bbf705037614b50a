from __future__ import annotations

from typing import Optional, Tuple

import pygame

from unblocked.game import Board, GameState
from unblocked.game.scores import LevelProgress


def color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 200, 120),   # S
        2: (230, 60, 60),   # X
        3: (240, 200, 0),   # O
        4: (60, 120, 240),  # T
        5: (200, 90, 220),  # Z
        6: (240, 140, 40),  # W
        7: (235, 235, 235), # joker
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    """Draws a board with the player's block in a column left of the grid."""

    def __init__(self, cell_size: int = 48, margin: int = 20, panel_width: int = 220) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, board: Board) -> Tuple[int, int]:
        width = self.margin * 3 + (board.cols + 2) * self.cell_size + self.panel_width
        height = self.margin * 2 + board.rows * self.cell_size
        return width, height

    def _cell_rect(self, row: int, col: int) -> pygame.Rect:
        # column -2 is the player's lane, -1 is the gap the block is thrown across
        return pygame.Rect(
            self.margin + (col + 2) * self.cell_size,
            self.margin + row * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _text(self, screen: pygame.Surface, txt: str, pos: Tuple[int, int], color=(230, 230, 230)) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        screen.blit(self._font.render(txt, True, color), pos)

    def draw(
        self,
        screen: pygame.Surface,
        board: Board,
        state: GameState,
        throws: int,
        progress: Optional[LevelProgress] = None,
        title: str = "",
        replay_percent: Optional[int] = None,
        message: str = "",
    ) -> None:
        screen.fill((10, 10, 14))
        for y in range(board.rows):
            for x in range(board.cols):
                pygame.draw.rect(screen, color_for_value(int(board.grid[y, x])), self._cell_rect(y, x))
        if board.player_block is not None:
            rect = self._cell_rect(board.player_row, -2)
            pygame.draw.rect(screen, color_for_value(int(board.player_block)), rect)
            pygame.draw.rect(screen, (255, 255, 255), rect, 2)

        x_text = self.margin * 2 + (board.cols + 2) * self.cell_size
        lines = [title, f"Throws: {throws}"]
        if progress is not None:
            lines.append(f"Best: {progress.hiscore or '-'}")
            lines.append(f"Attempts: {progress.attempts}  Wins: {progress.wins}")
            if progress.first_win is not None:
                lines.append(f"Solved on {progress.first_win.isoformat()}" + (" (help)" if progress.help_used else ""))
        if replay_percent is not None:
            lines.append(f"Replay: {replay_percent}%")
        for i, txt in enumerate(lines):
            self._text(screen, txt, (x_text, self.margin + i * 24))

        if state != GameState.PLAYING:
            self._text(screen, state.value, (self.margin, 2), (255, 100, 100))
        if message:
            self._text(screen, message, (x_text, self.margin + (len(lines) + 1) * 24), (120, 220, 140))
        pygame.display.flip()
