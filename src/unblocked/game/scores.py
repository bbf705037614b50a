from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from datetime import date
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

HISCORE_CAP = 999


@dataclass(frozen=True)
class LevelProgress:
    attempts: int = 0
    wins: int = 0
    hiscore: int = 0  # fewest throws, 0 = never solved
    first_win: Optional[date] = None
    help_used: bool = False  # replay watched before the first win

    @property
    def solved(self) -> bool:
        return self.wins > 0


def record_win(progress: LevelProgress, throws: int, today: Optional[date] = None, cap: int = HISCORE_CAP) -> LevelProgress:
    first_win = progress.first_win
    if progress.wins == 0:
        first_win = today or date.today()
    hiscore = progress.hiscore
    if hiscore == 0 or hiscore > throws:
        hiscore = min(throws, cap)
    return replace(
        progress,
        attempts=progress.attempts + 1,
        wins=progress.wins + 1,
        hiscore=hiscore,
        first_win=first_win,
    )


def record_fail(progress: LevelProgress) -> LevelProgress:
    return replace(progress, attempts=progress.attempts + 1)


def mark_help_used(progress: LevelProgress) -> LevelProgress:
    if progress.wins > 0 or progress.help_used:
        return progress
    return replace(progress, help_used=True)


def _to_json(progress: LevelProgress) -> dict:
    data = asdict(progress)
    data["first_win"] = progress.first_win.isoformat() if progress.first_win else None
    return data


def _from_json(data: dict) -> LevelProgress:
    first_win = data.get("first_win")
    return LevelProgress(
        attempts=int(data.get("attempts", 0)),
        wins=int(data.get("wins", 0)),
        hiscore=int(data.get("hiscore", 0)),
        first_win=date.fromisoformat(first_win) if first_win else None,
        help_used=bool(data.get("help_used", False)),
    )


class ScoreBook:
    """Per-level progress kept in a JSON file.

    A missing file is a first start. A file that cannot be parsed is logged
    and ignored so a damaged hiscore table never blocks playing.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else None
        self.levels: Dict[int, LevelProgress] = {}
        self.max_level = 1
        self.load()

    def load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            levels = {int(k): _from_json(v) for k, v in data.get("levels", {}).items()}
            max_level = int(data.get("max_level", 1))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Failed to read hiscores from %s: %s", self.path, exc)
            return
        self.levels = levels
        self.max_level = max(1, max_level)

    def save(self) -> None:
        if self.path is None:
            return
        data = {
            "max_level": self.max_level,
            "levels": {str(k): _to_json(v) for k, v in sorted(self.levels.items())},
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, level_id: int) -> LevelProgress:
        return self.levels.get(level_id, LevelProgress())

    def update(self, level_id: int, progress: LevelProgress) -> None:
        self.levels[level_id] = progress
        if progress.solved and level_id + 1 > self.max_level:
            self.max_level = level_id + 1
        self.save()
