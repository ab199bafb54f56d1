import os
import random
import sys

import pytest

# Ensure src and the repo root are on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from tetris_engine.game import GameConfig, GameEngine
from tests.helpers import fill_row, make_piece

__all__ = [
    "fill_row",
    "make_piece",
]


@pytest.fixture
def engine():
    game = GameEngine(GameConfig(random_seed=1234))
    game.start()
    return game


@pytest.fixture
def rng():
    return random.Random(42)
