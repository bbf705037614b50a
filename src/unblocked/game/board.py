from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .blocks import EMPTY, BlockKind, kind_from_value
from .levels import Level


Position = Tuple[int, int]


class Direction(IntEnum):
    UP = -1
    DOWN = 1


class Board:
    """Block grid plus the player's block and row.

    The grid uses 0 for empty cells and BlockKind values for occupied ones.
    Row 0 is the top row. The player stands to the left of column 0 and
    throws towards increasing column indices.
    """

    def __init__(self, grid: np.ndarray, player_block: Optional[BlockKind], player_row: int) -> None:
        self.grid = np.asarray(grid, dtype=np.int8)
        self.player_block = player_block
        self.player_row = int(player_row)

    @classmethod
    def from_level(cls, level: Level) -> "Board":
        grid = np.zeros((level.rows, level.cols), dtype=np.int8)
        for y, row in enumerate(level.cells):
            for x, kind in enumerate(row):
                if kind is not None:
                    grid[y, x] = int(kind)
        return cls(grid, level.start_block, level.start_row)

    @property
    def rows(self) -> int:
        return int(self.grid.shape[0])

    @property
    def cols(self) -> int:
        return int(self.grid.shape[1])

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def kind_at(self, row: int, col: int) -> Optional[BlockKind]:
        return kind_from_value(self.grid[row, col])

    def move_player(self, direction: Direction) -> bool:
        new_row = self.player_row + int(direction)
        if not 0 <= new_row < self.rows:
            return False
        self.player_row = new_row
        return True

    def row_blocks(self, row: int) -> List[Tuple[int, BlockKind]]:
        """Occupied cells of `row`, nearest to the player first."""
        cols = np.flatnonzero(self.grid[row] != EMPTY)
        return [(int(x), BlockKind(int(self.grid[row, x]))) for x in cols]

    def remove(self, positions: Iterable[Position]) -> None:
        for y, x in positions:
            self.grid[y, x] = EMPTY

    def block_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_empty(self) -> bool:
        return not self.grid.any()

    def snapshot(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "Board":
        return Board(self.grid.copy(), self.player_block, self.player_row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.player_block == other.player_block
            and self.player_row == other.player_row
            and np.array_equal(self.grid, other.grid)
        )

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, player={self.player_block!r}@{self.player_row})"

    def to_text(self) -> str:
        lines = []
        for y in range(self.rows):
            hand = self.player_block.glyph if (y == self.player_row and self.player_block) else " "
            cells = "".join(
                BlockKind(int(v)).glyph if v != EMPTY else "·" for v in self.grid[y]
            )
            lines.append(f"{hand}|{cells}")
        return "\n".join(lines)
