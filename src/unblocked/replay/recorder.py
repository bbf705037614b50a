from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from unblocked.game.core import REPLAY_VERSION, Action

MAX_REPLAY_GAP = 3.0


@dataclass(frozen=True)
class TimedAction:
    action: Action
    # seconds since the previous action, or since the level started
    delay: float = 0.0


@dataclass(frozen=True)
class ReplayRecord:
    level_id: int
    actions: Tuple[TimedAction, ...] = ()
    version: int = REPLAY_VERSION

    @property
    def throw_count(self) -> int:
        return sum(1 for a in self.actions if a.action == Action.THROW)

    @property
    def duration(self) -> float:
        return sum(a.delay for a in self.actions)


class ActionRecorder:
    """Collects the actions of a live session for an optional later save."""

    def __init__(self, level_id: int) -> None:
        self.level_id = level_id
        self._actions: List[TimedAction] = []

    def record(self, action: Action, elapsed_since_last: float) -> None:
        if elapsed_since_last < 0:
            raise ValueError(f"negative delay {elapsed_since_last} for {action.name}")
        self._actions.append(TimedAction(Action(action), float(elapsed_since_last)))

    def reset(self) -> None:
        self._actions.clear()

    def snapshot(self) -> ReplayRecord:
        return ReplayRecord(level_id=self.level_id, actions=tuple(self._actions))

    @property
    def throw_count(self) -> int:
        return sum(1 for a in self._actions if a.action == Action.THROW)

    @property
    def has_throws(self) -> bool:
        return self.throw_count > 0

    def __len__(self) -> int:
        return len(self._actions)


def compress(record: ReplayRecord, max_gap: float = MAX_REPLAY_GAP) -> ReplayRecord:
    """Clamp every pause longer than `max_gap` down to `max_gap`."""
    actions = tuple(
        replace(a, delay=max_gap) if a.delay > max_gap else a for a in record.actions
    )
    return replace(record, actions=actions)
