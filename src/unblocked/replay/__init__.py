"""Replay recording, compression, storage and deterministic playback."""

from .clock import Clock, RealClock, VirtualClock
from .recorder import MAX_REPLAY_GAP, ActionRecorder, ReplayRecord, TimedAction, compress
from .player import PlaybackStatus, PlayerState, ReplayPlayer
from .storage import ReplayStore

__all__ = [
    "Clock",
    "RealClock",
    "VirtualClock",
    "MAX_REPLAY_GAP",
    "ActionRecorder",
    "ReplayRecord",
    "TimedAction",
    "compress",
    "PlaybackStatus",
    "PlayerState",
    "ReplayPlayer",
    "ReplayStore",
]
