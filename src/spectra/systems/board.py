from esper import World

from spectra.components.active_switch import ActiveSwitch
from spectra.components.board import Board
from spectra.components.board_position import BoardPosition
from spectra.components.selection import Selection
from spectra.components.session_state import GamePhase
from spectra.components.tile import TileType
from spectra.constants import SELECTION_CONFIRM_DELAY
from spectra.events.bus import (
    EventBus,
    EVENT_REGION_SELECTED,
    EVENT_SELECTION_CONFIRMED,
    EVENT_SESSION_STARTED,
    EVENT_TILE_CLICK,
)
from spectra.systems.board_ops import active_tile_type_map, get_tile_registry, respawn_full_board
from spectra.systems.scheduler import schedule_action
from spectra.utils.connectivity import connected_region, is_clearable
from spectra.utils.session_state import get_session_state, set_phase


class BoardSystem:
    """Owns the tile entities and turns cell selections into pending clears."""

    def __init__(self, world: World, event_bus: EventBus, *, confirm_delay: float = SELECTION_CONFIRM_DELAY):
        self.world = world
        self.event_bus = event_bus
        self.confirm_delay = confirm_delay
        self.board_entity: int | None = None
        self.event_bus.subscribe(EVENT_SESSION_STARTED, self.on_session_started)
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    def on_session_started(self, sender, **kwargs):
        rows = kwargs.get('rows')
        cols = kwargs.get('cols')
        if rows is None or cols is None:
            return
        self.build_board(rows, cols)
        respawn_full_board(self.world)

    def build_board(self, rows: int, cols: int) -> None:
        """Replace the board with an empty ``rows`` x ``cols`` grid of tile entities."""
        for ent, _ in list(self.world.get_component(BoardPosition)):
            self.world.delete_entity(ent, immediate=True)
        if self.board_entity is not None:
            self.world.delete_entity(self.board_entity, immediate=True)
        self.board_entity = self.world.create_entity(Board(rows=rows, cols=cols))
        placeholder = get_tile_registry(self.world).all_types()[0]
        for r in range(rows):
            for c in range(cols):
                self.world.create_entity(
                    BoardPosition(row=r, col=c),
                    TileType(type_name=placeholder),
                    ActiveSwitch(active=False),
                )

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select(row, col)

    def select(self, row: int, col: int) -> bool:
        """Start clearing the region at (row, col); returns False when the click is ignored."""
        state = get_session_state(self.world)
        if not state.accepting_input:
            return False
        board = self._board()
        if board is None or not board.contains(row, col):
            return False
        region = connected_region(active_tile_type_map(self.world), row, col)
        if not is_clearable(region):
            return False
        selection = self._selection()
        selection.positions = set(region)
        set_phase(self.world, self.event_bus, GamePhase.ANIMATING)
        self.event_bus.emit(EVENT_REGION_SELECTED, positions=sorted(region), size=len(region))
        schedule_action(self.world, self.event_bus, EVENT_SELECTION_CONFIRMED, self.confirm_delay)
        return True

    def _board(self) -> Board | None:
        for _, board in self.world.get_component(Board):
            return board
        return None

    def _selection(self) -> Selection:
        for _, selection in self.world.get_component(Selection):
            return selection
        selection = Selection()
        self.world.create_entity(selection)
        return selection
