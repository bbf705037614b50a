from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional

from unblocked.game.core import Action

from .recorder import ReplayRecord, TimedAction

logger = logging.getLogger(__name__)


def replay_filename(level_id: int) -> str:
    return f"level-{level_id:04d}.rpl"


def encode_record(record: ReplayRecord) -> Dict[str, Any]:
    return {
        "version": record.version,
        "level": record.level_id,
        "actions": [{"act": a.action.name, "delay": round(a.delay, 6)} for a in record.actions],
    }


def _decode_action(item: Any) -> TimedAction:
    if not isinstance(item, dict):
        raise ValueError(f"replay action must be an object, got {item!r}")
    delay = float(item["delay"])
    if not math.isfinite(delay) or delay < 0:
        raise ValueError(f"bad replay delay {item['delay']!r}")
    return TimedAction(Action[item["act"]], delay)


def decode_record(data: Any) -> ReplayRecord:
    """Decode a stored replay.

    The version is not checked here: a replay from another format version is
    still returned so the player can refuse it and say why. Anything that is
    not a replay object raises `ValueError`.
    """
    if not isinstance(data, dict):
        raise ValueError(f"replay must be an object, got {type(data).__name__}")
    items = data.get("actions", [])
    if not isinstance(items, list):
        raise ValueError("replay actions must be a list")
    actions = tuple(_decode_action(item) for item in items)
    return ReplayRecord(level_id=int(data["level"]), actions=actions, version=int(data["version"]))


class ReplayStore:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, level_id: int) -> Path:
        return self.directory / replay_filename(level_id)

    def exists(self, level_id: int) -> bool:
        return self.path_for(level_id).is_file()

    def load(self, level_id: int) -> Optional[ReplayRecord]:
        path = self.path_for(level_id)
        if not path.is_file():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return decode_record(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Ignoring unreadable replay %s: %s", path, exc)
            return None

    def save(self, level_id: int, record: ReplayRecord) -> Path:
        """Write `record`, replacing any earlier replay of the level."""
        path = self.path_for(level_id)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(encode_record(record)), encoding="utf-8")
        logger.info("Replay saved to %s (%d actions)", path, len(record.actions))
        return path
