"""Test the action recorder and replay compression."""

import pytest

from unblocked.game import Action
from unblocked.replay import MAX_REPLAY_GAP, ActionRecorder, ReplayRecord, TimedAction, compress


def sample_record() -> ReplayRecord:
    return ReplayRecord(
        level_id=3,
        actions=(
            TimedAction(Action.MOVE_UP, 12.5),
            TimedAction(Action.THROW, 0.0),
            TimedAction(Action.MOVE_DOWN, 3.0),
            TimedAction(Action.THROW, 3.0001),
            TimedAction(Action.THROW, 1.25),
        ),
    )


def test_record_and_snapshot():
    rec = ActionRecorder(level_id=2)
    rec.record(Action.MOVE_UP, 0.5)
    rec.record(Action.THROW, 0.0)
    snap = rec.snapshot()
    assert snap.level_id == 2
    assert snap.version == 1
    assert snap.actions == (TimedAction(Action.MOVE_UP, 0.5), TimedAction(Action.THROW, 0.0))
    # snapshot does not consume the stream
    assert rec.snapshot() == snap
    assert len(rec) == 2
    assert rec.has_throws


def test_reset_discards_stream():
    rec = ActionRecorder(level_id=1)
    rec.record(Action.THROW, 1.0)
    rec.reset()
    assert len(rec) == 0
    assert not rec.has_throws
    assert rec.snapshot().actions == ()


def test_moves_only_have_no_throws():
    rec = ActionRecorder(level_id=1)
    rec.record(Action.MOVE_UP, 1.0)
    rec.record(Action.MOVE_DOWN, 1.0)
    assert rec.throw_count == 0
    assert not rec.has_throws


def test_negative_delay_is_rejected():
    rec = ActionRecorder(level_id=1)
    with pytest.raises(ValueError):
        rec.record(Action.THROW, -0.1)


def test_compress_clamps_long_pauses_only():
    record = sample_record()
    packed = compress(record)
    assert [a.delay for a in packed.actions] == [MAX_REPLAY_GAP, 0.0, 3.0, MAX_REPLAY_GAP, 1.25]
    assert [a.action for a in packed.actions] == [a.action for a in record.actions]
    assert packed.level_id == record.level_id
    assert packed.version == record.version


def test_compress_is_idempotent():
    packed = compress(sample_record())
    assert compress(packed) == packed


def test_compress_does_not_touch_input():
    record = sample_record()
    compress(record)
    assert record.actions[0].delay == 12.5


def test_record_properties():
    record = sample_record()
    assert record.throw_count == 3
    assert record.duration == pytest.approx(19.7501)
