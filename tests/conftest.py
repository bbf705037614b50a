# tests/conftest.py
from typing import List

import pytest

from unblocked.game import Action, Level, load_levels, parse_levels
from unblocked.replay import VirtualClock

# Known solutions for the bundled pack, starting from each level's start row
SOLUTIONS = {
    1: [Action.THROW, Action.MOVE_UP, Action.THROW],
    2: [Action.THROW, Action.MOVE_UP, Action.THROW, Action.MOVE_UP, Action.THROW],
    3: [
        Action.THROW, Action.MOVE_UP, Action.THROW, Action.MOVE_DOWN, Action.THROW,
        Action.MOVE_UP, Action.MOVE_UP, Action.THROW,
    ],
    4: [
        Action.MOVE_UP, Action.THROW, Action.THROW, Action.MOVE_UP, Action.THROW,
        Action.THROW, Action.MOVE_DOWN, Action.MOVE_DOWN, Action.THROW,
    ],
}


def make_level(text: str) -> Level:
    return parse_levels(text)[0]


@pytest.fixture
def levels() -> List[Level]:
    return load_levels()


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()
