import sys, os
import random

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tests.helpers import build_board_world, drive_ticks, paint_layout  # noqa: E402

__all__ = [
    "build_board_world",
    "drive_ticks",
    "paint_layout",
]


@pytest.fixture
def rng():
    return random.Random(1234)
