"""Board layout generation.

Layouts are row-major ``List[List[str]]`` with row 0 at the top. Generation is
best effort: a cell that still completes a run of three after the redraw budget
keeps its last draw, and a board without a valid move after the attempt budget
is returned anyway.
"""
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence

from spectra.constants import GENERATION_ATTEMPTS, INITIAL_RUN_REDRAWS
from spectra.utils.connectivity import Position, has_valid_move

logger = logging.getLogger(__name__)

Layout = List[List[Optional[str]]]


def completes_run(layout: Layout, row: int, col: int, color: str) -> bool:
    """Return True if placing color at (row, col) finishes a run of three to the left or above."""
    if col >= 2 and layout[row][col - 1] == color and layout[row][col - 2] == color:
        return True
    if row >= 2 and layout[row - 1][col] == color and layout[row - 2][col] == color:
        return True
    return False


def fill_layout(rows: int, cols: int, colors: Sequence[str], rng: random.Random) -> Layout:
    layout: Layout = []
    for row in range(rows):
        row_values: List[Optional[str]] = []
        layout.append(row_values)
        for col in range(cols):
            color = rng.choice(colors)
            redraws = 0
            while completes_run(layout, row, col, color) and redraws < INITIAL_RUN_REDRAWS:
                color = rng.choice(colors)
                redraws += 1
            row_values.append(color)
    return layout


def generate_layout(
    rows: int,
    cols: int,
    colors: Sequence[str],
    rng: random.Random,
    *,
    max_attempts: int = GENERATION_ATTEMPTS,
) -> Layout:
    """Generate a layout without pre-formed runs that offers at least one clearable region."""
    palette = list(colors)
    layout: Layout = []
    for _ in range(max(1, max_attempts)):
        layout = fill_layout(rows, cols, palette, rng)
        if has_valid_move(layout_to_type_map(layout)):
            return layout
    logger.warning(
        "No %dx%d layout with a valid move after %d attempts using %d colors; keeping the last one",
        rows, cols, max_attempts, len(palette),
    )
    return layout


def layout_to_type_map(layout: Sequence[Sequence[Optional[str]]]) -> Dict[Position, str]:
    return {
        (row, col): value
        for row, values in enumerate(layout)
        for col, value in enumerate(values)
        if value is not None
    }


def type_map_to_layout(types: Dict[Position, str], rows: int, cols: int) -> Layout:
    return [[types.get((row, col)) for col in range(cols)] for row in range(rows)]
