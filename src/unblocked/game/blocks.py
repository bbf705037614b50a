from __future__ import annotations

from enum import IntEnum
from typing import Dict, Optional


EMPTY = 0


class BlockKind(IntEnum):
    K1 = 1
    K2 = 2
    K3 = 3
    K4 = 4
    K5 = 5
    K6 = 6
    JOKER = 7

    @property
    def glyph(self) -> str:
        return GLYPHS[self]


GLYPHS: Dict[BlockKind, str] = {
    BlockKind.K1: "S",
    BlockKind.K2: "X",
    BlockKind.K3: "O",
    BlockKind.K4: "T",
    BlockKind.K5: "Z",
    BlockKind.K6: "W",
    BlockKind.JOKER: "?",
}

# Every spelling accepted by the level format
_CHAR_TO_KIND: Dict[str, BlockKind] = {}
for _kind, _chars in (
    (BlockKind.K1, "Ss$1"),
    (BlockKind.K2, "Xx%2"),
    (BlockKind.K3, "Oo@3"),
    (BlockKind.K4, "Tt=4"),
    (BlockKind.K5, "Zz+5"),
    (BlockKind.K6, "Ww:6"),
    (BlockKind.JOKER, "?"),
):
    for _c in _chars:
        _CHAR_TO_KIND[_c] = _kind


def matches(a: BlockKind, b: BlockKind) -> bool:
    """Two blocks annihilate if they are of the same kind or either is a joker."""
    return a == b or a == BlockKind.JOKER or b == BlockKind.JOKER


def kind_from_char(c: str) -> Optional[BlockKind]:
    return _CHAR_TO_KIND.get(c)


def kind_from_value(v: int) -> Optional[BlockKind]:
    if v == EMPTY:
        return None
    return BlockKind(int(v))
