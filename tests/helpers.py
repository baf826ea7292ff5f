from __future__ import annotations

import random
from typing import Sequence

from esper import World

from spectra.components.difficulty import DifficultyProfile, get_profile
from spectra.components.scheduled_action import ScheduledAction
from spectra.events.bus import EVENT_TICK, EventBus
from spectra.systems.board import BoardSystem
from spectra.systems.board_ops import apply_layout
from spectra.utils.board_layout import Layout
from spectra.utils.connectivity import connected_region, is_clearable
from spectra.world import create_world

LETTER_COLORS = {
    'R': 'red',
    'B': 'blue',
    'Y': 'yellow',
    'G': 'green',
    'P': 'purple',
    'C': 'cyan',
    'O': 'orange',
    '.': None,
}


def paint_layout(rows: Sequence[str]) -> Layout:
    """Translate rows of color letters ('.' = empty) into a layout."""
    return [[LETTER_COLORS[ch] for ch in row] for row in rows]


def pending_actions(world: World) -> list[ScheduledAction]:
    return sorted((action for _, action in world.get_component(ScheduledAction)), key=lambda a: a.sequence)


def drive_ticks(bus: EventBus, count: int = 60, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def build_board_world(
    rows: Sequence[str],
    *,
    profile: DifficultyProfile | None = None,
    seed: int = 0,
) -> tuple[EventBus, World, BoardSystem]:
    """World with a board painted from ``rows`` (no session systems attached)."""
    bus = EventBus()
    world = create_world(bus, profile or get_profile("hard"), rng=random.Random(seed))
    board = BoardSystem(world, bus)
    layout = paint_layout(rows)
    board.build_board(len(layout), len(layout[0]))
    apply_layout(world, layout)
    return bus, world, board


def first_clearable_cell(grid: Layout) -> tuple[int, int] | None:
    types = {
        (r, c): value
        for r, values in enumerate(grid)
        for c, value in enumerate(values)
        if value is not None
    }
    for pos in sorted(types):
        if is_clearable(connected_region(types, *pos)):
            return pos
    return None
