from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, List, Optional

from unblocked.game.core import REPLAY_VERSION, Action

from .clock import Clock
from .recorder import ReplayRecord

logger = logging.getLogger(__name__)


class PlayerState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    FINISHED = "finished"
    INTERRUPTED = "interrupted"


class PlaybackStatus(Enum):
    STARTED = "started"
    UNSUPPORTED_VERSION = "unsupported version"
    EMPTY = "empty replay"
    MISSING = "no replay"
    LEVEL_MISMATCH = "replay belongs to another level"


class ReplayPlayer:
    """Feeds a recorded action stream back on a clock.

    Action i is due `sum(delay[0..i])` seconds after `start`, no matter how
    late earlier actions were delivered, so pacing never drifts. Delivered
    actions go to `deliver`, which must be the same entry point live input
    uses.
    """

    def __init__(
        self,
        clock: Clock,
        deliver: Callable[[Action], object],
        supported_versions: Iterable[int] = (REPLAY_VERSION,),
    ) -> None:
        self.clock = clock
        self.deliver = deliver
        self.supported_versions = frozenset(supported_versions)
        self.state = PlayerState.IDLE
        self.record: Optional[ReplayRecord] = None
        self._index = 0
        self._next_due = 0.0

    def start(self, record: ReplayRecord) -> PlaybackStatus:
        if self.state != PlayerState.IDLE:
            raise RuntimeError(f"player already used ({self.state.value})")
        if record.version not in self.supported_versions:
            logger.warning(
                "Unsupported replay version %s for level %s, can replay only %s",
                record.version,
                record.level_id,
                sorted(self.supported_versions),
            )
            return PlaybackStatus.UNSUPPORTED_VERSION
        if not record.actions:
            return PlaybackStatus.EMPTY
        self.record = record
        self._index = 0
        self._next_due = self.clock.now() + record.actions[0].delay
        self.state = PlayerState.PLAYING
        logger.info("Replay for level %s started, %d actions", record.level_id, len(record.actions))
        return PlaybackStatus.STARTED

    @property
    def is_playing(self) -> bool:
        return self.state == PlayerState.PLAYING

    @property
    def progress(self) -> int:
        if self.record is None or not self.record.actions:
            return 0
        return self._index * 100 // len(self.record.actions)

    @property
    def remaining(self) -> int:
        if self.record is None:
            return 0
        return len(self.record.actions) - self._index

    def _deliver_next(self) -> Action:
        assert self.record is not None
        action = self.record.actions[self._index].action
        self._index += 1
        logger.debug("Replay action %d/%d: %s", self._index, len(self.record.actions), action.name)
        self.deliver(action)
        if self._index >= len(self.record.actions):
            self.state = PlayerState.FINISHED
            logger.info("Replay for level %s finished", self.record.level_id)
        else:
            self._next_due += self.record.actions[self._index].delay
        return action

    def poll(self) -> List[Action]:
        delivered: List[Action] = []
        while self.is_playing and self.clock.now() >= self._next_due:
            delivered.append(self._deliver_next())
        return delivered

    def fast_forward(self) -> List[Action]:
        delivered: List[Action] = []
        while self.is_playing:
            delivered.append(self._deliver_next())
        return delivered

    def cancel(self) -> bool:
        if not self.is_playing:
            return False
        self.state = PlayerState.INTERRUPTED
        logger.info("Replay interrupted at %d%%", self.progress)
        return True
