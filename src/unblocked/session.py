from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, List, Optional

from unblocked.game.board import Board
from unblocked.game.core import Action, GameConfig, GameState, StepResult, UnblockedGame
from unblocked.game.levels import Level
from unblocked.game.rules import ThrowOutcome
from unblocked.game.scores import LevelProgress, mark_help_used, record_fail, record_win
from unblocked.replay.clock import Clock, RealClock
from unblocked.replay.player import PlaybackStatus, PlayerState, ReplayPlayer
from unblocked.replay.recorder import ActionRecorder, ReplayRecord, compress
from unblocked.replay.storage import ReplayStore

logger = logging.getLogger(__name__)


class SessionOutcome(Enum):
    WON = "won"
    FAILED = "failed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class SessionResult:
    level_id: int
    throws: int
    outcome: SessionOutcome
    first_solve: bool = False
    cheated: bool = False
    new_hiscore: bool = False


class SessionController:
    """Runs one attempt at a level, live or while watching its replay.

    Progress for the level is handed in and read back through `progress`;
    the controller never touches the hiscore table itself. While a replay is
    attached, live input is ignored and the live game is left exactly as it
    was, so closing the replay resumes play where it stopped.

    Results are only settled after a throw. A level that has no opening move
    shows as failed but costs no attempt.
    """

    def __init__(
        self,
        level: Level,
        progress: Optional[LevelProgress] = None,
        config: Optional[GameConfig] = None,
        clock: Optional[Clock] = None,
        store: Optional[ReplayStore] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.level = level
        self.config = config or GameConfig()
        self.clock = clock or RealClock()
        self.store = store
        self.today = today or date.today
        self.progress = progress or LevelProgress()
        self.game = UnblockedGame(level, self.config)
        self.recorder = ActionRecorder(level.level_id)
        self.result: Optional[SessionResult] = None
        self.playback: Optional[ReplayPlayer] = None
        self.playback_game: Optional[UnblockedGame] = None
        self._last_action_at = self.clock.now()
        self._playback_started_at = 0.0

    # ---------- Polled by the presentation layer ----------
    @property
    def active_game(self) -> UnblockedGame:
        return self.playback_game if self.playback_game is not None else self.game

    @property
    def board(self) -> Board:
        return self.active_game.board

    @property
    def throws(self) -> int:
        return self.active_game.throws

    @property
    def state(self) -> GameState:
        return self.active_game.state

    @property
    def replay_state(self) -> Optional[PlayerState]:
        return self.playback.state if self.playback is not None else None

    @property
    def is_watching(self) -> bool:
        return self.playback is not None

    # ---------- Live input ----------
    def _live_step(self, action: Action) -> Optional[StepResult]:
        if self.is_watching or self.result is not None or not self.game.is_interactive:
            return None
        now = self.clock.now()
        self.recorder.record(action, now - self._last_action_at)
        self._last_action_at = now
        step = self.game.step(action)
        self._check_finished()
        return step

    def move_up(self) -> bool:
        step = self._live_step(Action.MOVE_UP)
        return step is not None and step.accepted

    def move_down(self) -> bool:
        step = self._live_step(Action.MOVE_DOWN)
        return step is not None and step.accepted

    def throw(self) -> Optional[ThrowOutcome]:
        step = self._live_step(Action.THROW)
        return step.outcome if step is not None else None

    def _check_finished(self) -> None:
        if self.result is not None:
            return
        if self.game.state == GameState.WON:
            self._finish_win()
        elif self.game.state == GameState.FAILED:
            self._finish_fail()

    def _finish_win(self) -> None:
        before = self.progress
        throws = self.game.throws
        self.progress = record_win(before, throws, self.today(), self.config.hiscore_cap)
        self.result = SessionResult(
            level_id=self.level.level_id,
            throws=throws,
            outcome=SessionOutcome.WON,
            first_solve=before.wins == 0,
            cheated=before.help_used,
            new_hiscore=before.hiscore == 0 or throws < before.hiscore,
        )
        logger.info("Level %d solved in %d throws", self.level.level_id, throws)

    def _finish_fail(self) -> None:
        self.progress = record_fail(self.progress)
        self.result = SessionResult(
            level_id=self.level.level_id,
            throws=self.game.throws,
            outcome=SessionOutcome.FAILED,
        )
        # a failed attempt is never worth a replay
        self.recorder.reset()
        logger.info("Level %d failed after %d throws", self.level.level_id, self.game.throws)

    # ---------- Session lifecycle ----------
    def restart(self) -> None:
        self._count_unfinished_attempt()
        self.close_playback()
        self.game.reset()
        self.recorder.reset()
        self.result = None
        self._last_action_at = self.clock.now()

    def abort(self) -> SessionResult:
        self.close_playback()
        if self.result is not None:
            return self.result
        self._count_unfinished_attempt()
        self.result = SessionResult(
            level_id=self.level.level_id,
            throws=self.game.throws,
            outcome=SessionOutcome.ABORTED,
        )
        return self.result

    def _count_unfinished_attempt(self) -> None:
        if self.result is None and self.game.throws >= self.config.min_throws_for_attempt:
            self.progress = record_fail(self.progress)

    def save_replay(self) -> bool:
        """Compress and store the current recording. Returns whether anything was written."""
        if self.store is None:
            return False
        if not self.recorder.has_throws:
            logger.debug("Nothing to save for level %d", self.level.level_id)
            return False
        record = compress(self.recorder.snapshot(), self.config.max_replay_gap)
        self.store.save(self.level.level_id, record)
        return True

    # ---------- Replay playback ----------
    def start_playback(self, record: Optional[ReplayRecord] = None) -> PlaybackStatus:
        self.close_playback()
        if record is None:
            record = self.store.load(self.level.level_id) if self.store is not None else None
            if record is None:
                return PlaybackStatus.MISSING
        if record.level_id != self.level.level_id:
            logger.warning(
                "Replay of level %d cannot be played on level %d", record.level_id, self.level.level_id
            )
            return PlaybackStatus.LEVEL_MISMATCH

        game = UnblockedGame(self.level, self.config)
        player = ReplayPlayer(self.clock, game.step, self.config.supported_replay_versions)
        status = player.start(record)
        if status != PlaybackStatus.STARTED:
            return status
        self.playback = player
        self.playback_game = game
        self._playback_started_at = self.clock.now()
        self.progress = mark_help_used(self.progress)
        return status

    def update(self) -> List[Action]:
        """One pass of the control loop: deliver replay actions that are due."""
        if self.playback is None:
            return []
        return self.playback.poll()

    def fast_forward_playback(self) -> List[Action]:
        if self.playback is None:
            return []
        return self.playback.fast_forward()

    def cancel_playback(self) -> bool:
        if self.playback is None:
            return False
        self.playback.cancel()
        self._detach_playback()
        return True

    def close_playback(self) -> None:
        if self.playback is not None:
            self.cancel_playback()

    def _detach_playback(self) -> None:
        self.playback = None
        self.playback_game = None
        # time spent watching is not part of the live recording
        self._last_action_at += self.clock.now() - self._playback_started_at
