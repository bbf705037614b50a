from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .blocks import BlockKind, matches
from .board import Board, Position


class ThrowSignal(Enum):
    CONTINUE = "continue"
    WIN = "win"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class ThrowOutcome:
    signal: ThrowSignal
    removed: Tuple[Position, ...] = ()
    picked_up: Optional[Position] = None
    new_block: Optional[BlockKind] = None

    @property
    def accepted(self) -> bool:
        return self.signal != ThrowSignal.NO_MATCH


NO_MATCH = ThrowOutcome(ThrowSignal.NO_MATCH)


def first_target(board: Board, row: int) -> Optional[BlockKind]:
    """Kind of the block a throw into `row` would hit first."""
    blocks = board.row_blocks(row)
    if not blocks:
        return None
    return blocks[0][1]


def can_throw(board: Board, row: int) -> bool:
    if board.player_block is None:
        return False
    target = first_target(board, row)
    return target is not None and matches(board.player_block, target)


def has_legal_throw(board: Board) -> bool:
    return any(can_throw(board, y) for y in range(board.rows))


def resolve_throw(board: Board, throw_row: int) -> ThrowOutcome:
    """Throw the player's block into `throw_row` and resolve the chain.

    Every block from the nearest one outward that matches the thrown block
    is annihilated. The first block that does not match is taken from the
    grid into the player's hand. A rejected throw leaves the board untouched.
    If the row runs out without a mismatch the block comes back as the kind
    of the last block it annihilated, so a thrown joker is used up.
    """
    thrown = board.player_block
    if thrown is None:
        return NO_MATCH
    blocks = board.row_blocks(throw_row)
    if not blocks or not matches(thrown, blocks[0][1]):
        return NO_MATCH

    removed: List[Position] = []
    picked_up: Optional[Position] = None
    new_block: BlockKind = thrown
    for col, kind in blocks:
        if matches(thrown, kind):
            removed.append((throw_row, col))
            new_block = kind
            continue
        picked_up = (throw_row, col)
        new_block = kind
        break

    board.remove(removed)
    if picked_up is not None:
        board.remove([picked_up])

    if board.is_empty():
        board.player_block = None
        return ThrowOutcome(ThrowSignal.WIN, tuple(removed), picked_up, None)

    board.player_block = new_block
    return ThrowOutcome(ThrowSignal.CONTINUE, tuple(removed), picked_up, new_block)
