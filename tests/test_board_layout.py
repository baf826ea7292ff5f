import logging
import random

import pytest

from spectra.components.difficulty import PROFILES
from spectra.utils.board_layout import (
    completes_run,
    generate_layout,
    layout_to_type_map,
    type_map_to_layout,
)
from spectra.utils.connectivity import has_valid_move
from tests.helpers import paint_layout


def has_straight_run(layout):
    rows = len(layout)
    cols = len(layout[0])
    for r in range(rows):
        for c in range(cols - 2):
            if layout[r][c] == layout[r][c + 1] == layout[r][c + 2]:
                return True
    for c in range(cols):
        for r in range(rows - 2):
            if layout[r][c] == layout[r + 1][c] == layout[r + 2][c]:
                return True
    return False


def test_completes_run_checks_left_and_above():
    layout = paint_layout([
        "RRB",
        "GBY",
        "GYY",
    ])
    assert completes_run(layout, 0, 2, 'red')
    assert not completes_run(layout, 0, 2, 'blue')
    assert completes_run(layout, 2, 0, 'green') is False  # only one green above at (1,0)
    layout[0][0] = 'green'
    assert completes_run(layout, 2, 0, 'green')


@pytest.mark.parametrize("key", sorted(PROFILES))
def test_generated_layouts_have_valid_move(key):
    profile = PROFILES[key]
    for seed in range(15):
        layout = generate_layout(profile.rows, profile.cols, profile.colors, random.Random(seed))
        assert len(layout) == profile.rows
        assert all(len(row) == profile.cols for row in layout)
        assert all(value in profile.colors for row in layout for value in row)
        assert has_valid_move(layout_to_type_map(layout))


@pytest.mark.parametrize("key", ["medium", "hard"])
def test_generated_layouts_avoid_preformed_runs(key):
    # Six or more colors; the redraw budget practically never runs out.
    profile = PROFILES[key]
    for seed in range(15):
        layout = generate_layout(profile.rows, profile.cols, profile.colors, random.Random(seed))
        assert not has_straight_run(layout)


def test_generation_is_reproducible_with_seed():
    colors = PROFILES["medium"].colors
    first = generate_layout(6, 6, colors, random.Random(99))
    second = generate_layout(6, 6, colors, random.Random(99))
    assert first == second


def test_exhausted_generation_returns_last_layout(caplog):
    # Two cells can never hold a region of three.
    with caplog.at_level(logging.WARNING, logger="spectra.utils.board_layout"):
        layout = generate_layout(1, 2, ['red'], random.Random(0), max_attempts=5)
    assert layout == [['red', 'red']]
    assert any("valid move" in record.getMessage() for record in caplog.records)


def test_type_map_round_trip_keeps_empty_cells():
    layout = paint_layout([
        "R.",
        ".B",
    ])
    assert type_map_to_layout(layout_to_type_map(layout), 2, 2) == layout
