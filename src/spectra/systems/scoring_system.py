from esper import World

from spectra.constants import LEVEL_UP_PERTURB_CHANCE
from spectra.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_RESHUFFLED,
    EVENT_CLEARED,
    EVENT_LEVEL_UP,
    EVENT_MATCH_CLEARED,
)
from spectra.systems.board_ops import ensure_valid_move, perturb_random_cell, world_rng
from spectra.utils.scoring import level_for_moves, score_clear
from spectra.utils.session_state import get_session_state


class ScoringSystem:
    """Applies points, combo, move count and level progression after each clear.

    Subscribes to EVENT_MATCH_CLEARED and emits EVENT_CLEARED with the points
    awarded, followed by EVENT_LEVEL_UP whenever the move count crosses a level
    threshold.
    """

    def __init__(self, world: World, event_bus: EventBus, *, perturb_chance: float = LEVEL_UP_PERTURB_CHANCE):
        self.world = world
        self.event_bus = event_bus
        self.perturb_chance = perturb_chance
        self.event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)

    def on_match_cleared(self, sender, **kwargs):
        size = kwargs.get('size', 0)
        if size <= 0:
            return
        state = get_session_state(self.world)
        result = score_clear(size, state.combo)
        state.score += result.points
        state.combo = result.new_combo
        state.moves += 1
        state.last_clear_time = state.clock
        self.event_bus.emit(
            EVENT_CLEARED,
            region_size=size,
            points_awarded=result.points,
            new_combo=result.new_combo,
        )
        new_level = level_for_moves(state.moves)
        if new_level != state.level:
            state.level = new_level
            self._perturb_board()
            self.event_bus.emit(EVENT_LEVEL_UP, new_level=new_level)

    def _perturb_board(self) -> None:
        rng = world_rng(self.world)
        if rng.random() >= self.perturb_chance:
            return
        position = perturb_random_cell(self.world, rng)
        if position is None:
            return
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="level_up", positions=[position])
        remedy = ensure_valid_move(self.world, rng)
        if remedy:
            self.event_bus.emit(EVENT_BOARD_RESHUFFLED, remedy=remedy)
