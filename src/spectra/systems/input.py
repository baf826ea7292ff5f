from esper import World

from spectra.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from spectra.systems.board_ops import board_dimensions
from spectra.ui.layout import cell_at_point, compute_board_geometry


class InputSystem:
    """Translates left clicks on the board into EVENT_TILE_CLICK."""

    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Only the left button (1) selects.
        if button != 1:
            return
        dims = board_dimensions(self.world)
        if not dims:
            return
        rows, cols = dims
        geometry = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        cell = cell_at_point(geometry, x, y)
        if cell is None:
            return
        row, col = cell
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
