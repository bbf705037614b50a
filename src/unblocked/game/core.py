from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .board import Board, Direction
from .levels import Level
from .rules import ThrowOutcome, ThrowSignal, has_legal_throw, resolve_throw

logger = logging.getLogger(__name__)

REPLAY_VERSION = 1


class Action(IntEnum):
    MOVE_UP = 0
    MOVE_DOWN = 1
    THROW = 2


class GameState(Enum):
    PLAYING = "playing"
    WON = "level solved"
    FAILED = "no moves available"


@dataclass
class GameConfig:
    max_replay_gap: float = 3.0
    supported_replay_versions: Tuple[int, ...] = (REPLAY_VERSION,)
    # aborting after this many throws still counts as an attempt
    min_throws_for_attempt: int = 3
    hiscore_cap: int = 999


@dataclass(frozen=True)
class StepResult:
    action: Action
    accepted: bool
    outcome: Optional[ThrowOutcome] = None


class UnblockedGame:
    """One play of a level: the board, the throw counter and win/fail state.

    `step` is the single entry point for actions, so live input and replayed
    input go through exactly the same code.
    """

    def __init__(self, level: Level, config: Optional[GameConfig] = None) -> None:
        self.level = level
        self.config = config or GameConfig()
        self.board = Board.from_level(level)
        self.state = GameState.PLAYING
        self.throws = 0
        self.outcomes: List[ThrowOutcome] = []
        self.reset()

    def reset(self) -> None:
        self.board = Board.from_level(self.level)
        self.state = GameState.PLAYING
        self.throws = 0
        self.outcomes = []
        self._update_state()

    @property
    def is_interactive(self) -> bool:
        return self.state == GameState.PLAYING

    def _update_state(self) -> None:
        if self.board.is_empty():
            self.state = GameState.WON
        elif not has_legal_throw(self.board):
            self.state = GameState.FAILED

    def move(self, direction: Direction) -> bool:
        if not self.is_interactive:
            return False
        return self.board.move_player(direction)

    def throw(self) -> Optional[ThrowOutcome]:
        if not self.is_interactive or self.board.player_block is None:
            return None
        outcome = resolve_throw(self.board, self.board.player_row)
        self.outcomes.append(outcome)
        if outcome.signal == ThrowSignal.NO_MATCH:
            return outcome
        self.throws += 1
        if outcome.signal == ThrowSignal.WIN:
            self.state = GameState.WON
        else:
            self._update_state()
        logger.debug(
            "Throw %d into row %d removed %d blocks, state %s",
            self.throws,
            self.board.player_row,
            len(outcome.removed),
            self.state.value,
        )
        return outcome

    def step(self, action: Action) -> StepResult:
        if action == Action.MOVE_UP:
            return StepResult(action, self.move(Direction.UP))
        if action == Action.MOVE_DOWN:
            return StepResult(action, self.move(Direction.DOWN))
        if action == Action.THROW:
            outcome = self.throw()
            return StepResult(action, outcome is not None and outcome.accepted, outcome)
        raise ValueError(f"Unknown action {action!r}")

    def get_state(self) -> np.ndarray:
        return self.board.snapshot()
