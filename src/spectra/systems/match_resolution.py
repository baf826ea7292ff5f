from esper import World

from spectra.components.selection import Selection
from spectra.components.session_state import GamePhase
from spectra.constants import CLEAR_ANIMATION_DELAY
from spectra.events.bus import (
    EventBus,
    EVENT_BOARD_RESHUFFLED,
    EVENT_CLEAR_READY,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_RESOLUTION_COMPLETE,
    EVENT_SELECTION_CONFIRMED,
)
from spectra.systems.board_ops import resolve_region
from spectra.systems.scheduler import schedule_action
from spectra.utils.connectivity import is_clearable
from spectra.utils.session_state import get_session_state, set_phase


class MatchResolutionSystem:
    """Runs the clear -> gravity -> refill -> guard pipeline for a confirmed selection."""

    def __init__(self, world: World, event_bus: EventBus, *, clear_delay: float = CLEAR_ANIMATION_DELAY):
        self.world = world
        self.event_bus = event_bus
        self.clear_delay = clear_delay
        self.event_bus.subscribe(EVENT_SELECTION_CONFIRMED, self.on_selection_confirmed)
        self.event_bus.subscribe(EVENT_CLEAR_READY, self.on_clear_ready)

    def on_selection_confirmed(self, sender, **kwargs):
        selection = self._selection()
        if not is_clearable(selection.positions):
            selection.clear()
            self._finish()
            return
        positions = sorted(selection.positions)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=positions, size=len(positions))
        schedule_action(self.world, self.event_bus, EVENT_CLEAR_READY, self.clear_delay)

    def on_clear_ready(self, sender, **kwargs):
        selection = self._selection()
        positions = sorted(selection.positions)
        result = resolve_region(self.world, positions)
        selection.clear()
        if result.points_eligible:
            self.event_bus.emit(
                EVENT_MATCH_CLEARED,
                positions=[(row, col) for row, col, _ in result.cleared],
                types=result.cleared,
                size=result.size,
            )
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=result.moves, cascades=result.columns_shifted)
            if result.new_tiles:
                self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=result.new_tiles)
            if result.remedy:
                self.event_bus.emit(EVENT_BOARD_RESHUFFLED, remedy=result.remedy)
        self.event_bus.emit(EVENT_RESOLUTION_COMPLETE, size=result.size)
        self._finish()

    def _finish(self) -> None:
        # A countdown expiry during the animation keeps the session in GAME_OVER.
        state = get_session_state(self.world)
        if state.phase == GamePhase.ANIMATING:
            set_phase(self.world, self.event_bus, GamePhase.SELECTING)

    def _selection(self) -> Selection:
        for _, selection in self.world.get_component(Selection):
            return selection
        selection = Selection()
        self.world.create_entity(selection)
        return selection
