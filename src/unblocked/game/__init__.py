"""Game module for Unblocked.

Exports the puzzle engine and supporting classes:
- BlockKind: Block categories and the joker
- Level: Immutable level description and the level-pack loader
- Board: Grid representation and player position
- resolve_throw: Throw resolution and chain annihilation
- UnblockedGame: Single entry point for live and replayed actions
- LevelProgress: Per-level attempts, wins and best scores
"""

from .blocks import BlockKind, matches
from .levels import Level, LevelError, load_levels, parse_levels
from .board import Board, Direction
from .rules import ThrowOutcome, ThrowSignal, can_throw, first_target, has_legal_throw, resolve_throw
from .core import Action, GameConfig, GameState, StepResult, UnblockedGame
from .scores import LevelProgress, ScoreBook

__all__ = [
    "BlockKind",
    "matches",
    "Level",
    "LevelError",
    "load_levels",
    "parse_levels",
    "Board",
    "Direction",
    "ThrowOutcome",
    "ThrowSignal",
    "can_throw",
    "first_target",
    "has_legal_throw",
    "resolve_throw",
    "Action",
    "GameConfig",
    "GameState",
    "StepResult",
    "UnblockedGame",
    "LevelProgress",
    "ScoreBook",
]
