"""Test replay and hiscore persistence."""

import json
from datetime import date

import pytest

from unblocked.game import Action
from unblocked.game.scores import LevelProgress, ScoreBook, mark_help_used, record_fail, record_win
from unblocked.replay import ReplayRecord, ReplayStore, TimedAction


def test_replay_round_trip(tmp_path):
    store = ReplayStore(tmp_path / "replays")
    record = ReplayRecord(
        level_id=7,
        actions=(TimedAction(Action.MOVE_DOWN, 0.25), TimedAction(Action.THROW, 3.0)),
    )
    path = store.save(7, record)
    assert path.name == "level-0007.rpl"
    assert store.exists(7)
    assert store.load(7) == record


def test_missing_replay(tmp_path):
    assert ReplayStore(tmp_path).load(3) is None


def test_unknown_version_is_still_decoded(tmp_path):
    store = ReplayStore(tmp_path)
    store.path_for(2).write_text(
        json.dumps({"version": 42, "level": 2, "actions": [{"act": "THROW", "delay": 0.5}]}),
        encoding="utf-8",
    )
    record = store.load(2)
    assert record.version == 42
    assert record.actions == (TimedAction(Action.THROW, 0.5),)


def test_corrupt_replay_is_ignored(tmp_path):
    store = ReplayStore(tmp_path)
    store.path_for(1).write_text("not json", encoding="utf-8")
    assert store.load(1) is None
    store.path_for(2).write_text(json.dumps({"version": 1, "level": 2, "actions": [{"act": "JUMP", "delay": 0}]}))
    assert store.load(2) is None


@pytest.mark.parametrize(
    "payload",
    [
        [1, 2, 3],
        "x",
        {"version": 1, "level": 1, "actions": "THROW"},
        {"version": 1, "level": 1, "actions": [["THROW", 0.5]]},
        {"version": 1, "level": 1, "actions": [{"act": "THROW", "delay": float("nan")}]},
        {"version": 1, "level": 1, "actions": [{"act": "THROW", "delay": float("inf")}]},
        {"version": 1, "level": 1, "actions": [{"act": "THROW", "delay": -1.0}]},
    ],
)
def test_malformed_replay_is_treated_as_missing(tmp_path, payload):
    store = ReplayStore(tmp_path)
    store.path_for(1).write_text(json.dumps(payload), encoding="utf-8")
    assert store.load(1) is None


def test_record_win_tracks_best_and_first_date():
    p = record_win(LevelProgress(), throws=9, today=date(2024, 5, 1))
    assert (p.attempts, p.wins, p.hiscore, p.first_win) == (1, 1, 9, date(2024, 5, 1))
    p = record_win(p, throws=12, today=date(2024, 6, 1))
    assert (p.wins, p.hiscore, p.first_win) == (2, 9, date(2024, 5, 1))
    p = record_win(p, throws=6, today=date(2024, 7, 1))
    assert p.hiscore == 6


def test_hiscore_is_capped():
    assert record_win(LevelProgress(), throws=5000).hiscore == 999


def test_help_only_marked_before_first_win():
    assert mark_help_used(LevelProgress()).help_used
    solved = record_win(LevelProgress(), throws=3)
    assert not mark_help_used(solved).help_used


def test_record_fail_counts_attempt():
    assert record_fail(LevelProgress(attempts=2)).attempts == 3


def test_score_book_persists(tmp_path):
    path = tmp_path / "data" / "hiscores.json"
    book = ScoreBook(path)
    assert book.get(1) == LevelProgress()
    progress = record_win(LevelProgress(help_used=True), throws=4, today=date(2023, 1, 2))
    book.update(1, progress)
    assert book.max_level == 2

    reloaded = ScoreBook(path)
    assert reloaded.get(1) == progress
    assert reloaded.max_level == 2


def test_score_book_ignores_corrupt_file(tmp_path):
    path = tmp_path / "hiscores.json"
    path.write_text("{broken", encoding="utf-8")
    book = ScoreBook(path)
    assert book.levels == {}
    assert book.max_level == 1
