import datetime
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from core.difficulty import Difficulty
from core.levels import generate_level
from core.storage import JsonStore


@pytest.fixture
def store(tmp_path):
    return JsonStore(str(tmp_path / "save.json"))


@pytest.fixture
def today():
    return datetime.date(2026, 10, 19)


@pytest.fixture
def easy_level():
    """Level 1 on Easy: 3x3 grid, a single colour, three dots to win."""
    return generate_level(1, Difficulty.EASY)
