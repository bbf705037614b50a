from __future__ import annotations

"""
Level descriptions and the text level-pack loader.

Level pack format:

    ; comment
    # 01 first steps        <- starts a new level, the rest is its name
    start:?                 <- player's first block (joker when omitted)
    row:2                   <- player's first row (bottom row when omitted)
    SSX
    XXO
    O.S                     <- '.' or any unknown character is an empty cell

The player stands to the left of column 0, so the first character of a line
is the first block a throw into that row hits.
"""

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import List, Optional, Tuple

from .blocks import BlockKind, kind_from_char

logger = logging.getLogger(__name__)

CellRow = Tuple[Optional[BlockKind], ...]

DEFAULT_START_BLOCK = BlockKind.JOKER
BUNDLED_PACK = "std_levels.txt"


class LevelError(ValueError):
    """Raised for level data that can never be played."""


@dataclass(frozen=True)
class Level:
    level_id: int
    cells: Tuple[CellRow, ...]
    start_block: BlockKind = DEFAULT_START_BLOCK
    start_row: int = -1
    name: str = ""

    def __post_init__(self) -> None:
        if not self.cells:
            raise LevelError(f"Level {self.level_id}: grid has no rows")
        width = len(self.cells[0])
        if width == 0:
            raise LevelError(f"Level {self.level_id}: grid has no columns")
        for y, row in enumerate(self.cells):
            if len(row) != width:
                raise LevelError(
                    f"Level {self.level_id}: row {y} has {len(row)} cells, expected {width}"
                )
        if all(cell is None for row in self.cells for cell in row):
            raise LevelError(f"Level {self.level_id}: grid contains no blocks")
        if self.start_block is None:
            raise LevelError(f"Level {self.level_id}: player has no start block")
        # -1 means "bottom row", resolved once here so the rest of the engine sees a real index
        if self.start_row == -1:
            object.__setattr__(self, "start_row", len(self.cells) - 1)
        if not 0 <= self.start_row < len(self.cells):
            raise LevelError(
                f"Level {self.level_id}: start row {self.start_row} outside 0..{len(self.cells) - 1}"
            )

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])


@dataclass
class _Draft:
    name: str = ""
    start_block: BlockKind = DEFAULT_START_BLOCK
    start_row: int = -1
    lines: List[List[Optional[BlockKind]]] = field(default_factory=list)

    def build(self, level_id: int) -> Level:
        width = max(len(line) for line in self.lines)
        cells = tuple(tuple(line + [None] * (width - len(line))) for line in self.lines)
        return Level(
            level_id=level_id,
            cells=cells,
            start_block=self.start_block,
            start_row=self.start_row,
            name=self.name,
        )


def parse_levels(text: str) -> List[Level]:
    """Parse a whole level pack. Levels are numbered from 1 in file order."""
    levels: List[Level] = []
    draft = _Draft()

    def flush() -> None:
        nonlocal draft
        if draft.lines:
            levels.append(draft.build(len(levels) + 1))
        draft = _Draft()

    for lineno, raw in enumerate(text.splitlines(), start=1):
        s = raw.rstrip()
        if not s or s.startswith(";"):
            continue
        if s.startswith("#"):
            flush()
            draft.name = s[1:].strip()
            continue
        if s.startswith("start:"):
            value = s[len("start:"):].strip()
            if not value:
                continue
            kind = kind_from_char(value[0])
            if kind is None:
                raise LevelError(f"line {lineno}: unknown start block {value[0]!r}")
            draft.start_block = kind
            continue
        if s.startswith("row:"):
            try:
                draft.start_row = int(s[len("row:"):].strip())
            except ValueError as exc:
                raise LevelError(f"line {lineno}: bad start row {s!r}") from exc
            continue
        draft.lines.append([kind_from_char(c) for c in s])
    flush()
    return levels


def load_levels(path: Optional[Path] = None) -> List[Level]:
    """Load a level pack from `path`, or the bundled pack when omitted."""
    if path is None:
        text = resources.files("unblocked.levels").joinpath(BUNDLED_PACK).read_text(encoding="utf-8")
        source = BUNDLED_PACK
    else:
        text = Path(path).read_text(encoding="utf-8")
        source = str(path)
    levels = parse_levels(text)
    logger.info("Loaded %d levels from %s", len(levels), source)
    return levels
