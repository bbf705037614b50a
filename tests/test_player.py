"""Test the replay player state machine and its pacing."""

import pytest

from unblocked.game import Action
from unblocked.replay import PlaybackStatus, PlayerState, ReplayPlayer, ReplayRecord, TimedAction


def record_of(*delays, version=1):
    acts = (Action.MOVE_UP, Action.THROW, Action.MOVE_DOWN, Action.THROW)
    return ReplayRecord(
        level_id=1,
        actions=tuple(TimedAction(acts[i % len(acts)], d) for i, d in enumerate(delays)),
        version=version,
    )


@pytest.fixture
def delivered():
    return []


@pytest.fixture
def player(clock, delivered):
    return ReplayPlayer(clock, delivered.append)


def test_unsupported_version_never_plays(player, delivered):
    status = player.start(record_of(0.0, 0.0, version=99))
    assert status == PlaybackStatus.UNSUPPORTED_VERSION
    assert player.state == PlayerState.IDLE
    assert player.fast_forward() == []
    assert delivered == []


def test_empty_record_does_not_start(player):
    assert player.start(record_of()) == PlaybackStatus.EMPTY
    assert player.state == PlayerState.IDLE


def test_actions_follow_recorded_delays(player, clock, delivered):
    assert player.start(record_of(1.0, 0.5, 2.0)) == PlaybackStatus.STARTED
    assert player.state == PlayerState.PLAYING
    assert player.poll() == []
    clock.advance(1.0)
    assert player.poll() == [Action.MOVE_UP]
    clock.advance(0.25)
    assert player.poll() == []
    clock.advance(0.25)
    assert player.poll() == [Action.THROW]
    clock.advance(1.75)
    assert player.poll() == []
    assert player.progress == 66
    clock.advance(0.25)
    assert player.poll() == [Action.MOVE_DOWN]
    assert player.state == PlayerState.FINISHED
    assert delivered == [Action.MOVE_UP, Action.THROW, Action.MOVE_DOWN]
    assert player.progress == 100


def test_late_poll_delivers_everything_due(player, clock):
    player.start(record_of(0.0, 1.0, 1.0, 5.0))
    clock.advance(2.5)
    assert player.poll() == [Action.MOVE_UP, Action.THROW, Action.MOVE_DOWN]
    # the schedule is anchored to the start, not to the late delivery
    clock.advance(4.5)
    assert player.poll() == [Action.THROW]


def test_zero_delays_are_delivered_together(player):
    player.start(record_of(0.0, 0.0))
    assert player.poll() == [Action.MOVE_UP, Action.THROW]
    assert player.state == PlayerState.FINISHED


def test_fast_forward(player, delivered):
    player.start(record_of(3.0, 3.0, 3.0))
    assert len(player.fast_forward()) == 3
    assert player.state == PlayerState.FINISHED
    assert player.remaining == 0


def test_cancel_interrupts(player, clock, delivered):
    player.start(record_of(1.0, 1.0))
    clock.advance(1.0)
    player.poll()
    assert player.cancel()
    assert player.state == PlayerState.INTERRUPTED
    clock.advance(10.0)
    assert player.poll() == []
    assert delivered == [Action.MOVE_UP]
    assert not player.cancel()


def test_player_is_single_use(player):
    player.start(record_of(0.0))
    player.fast_forward()
    with pytest.raises(RuntimeError):
        player.start(record_of(0.0))
