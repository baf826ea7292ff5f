from esper import World

from spectra.components.selection import Selection
from spectra.components.session_state import GamePhase
from spectra.constants import LOW_TIME_WARNING
from spectra.events.bus import EventBus, EVENT_MATCH_CLEARED, EVENT_MATCH_FOUND, EVENT_SESSION_STARTED
from spectra.systems.board_ops import board_dimensions, board_layout, get_tile_registry
from spectra.ui.layout import BoardGeometry, cell_origin, compute_board_geometry
from spectra.utils.session_state import get_session_state

EMPTY_COLOR = (25, 25, 35)
SELECTED_OUTLINE = (255, 255, 255)
HUD_COLOR = (0, 255, 255)
WARNING_COLOR = (255, 0, 51)
COMBO_COLOR = (255, 255, 0)
CLEARING_DIM = 0.35


def format_score(value: int) -> str:
    return str(value).rjust(6, "0")


class RenderSystem:
    """Draws the board and HUD from world state; reads only, never mutates the game."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.clearing: set[tuple[int, int]] = set()
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)
        self.event_bus.subscribe(EVENT_SESSION_STARTED, self.on_session_started)

    def on_match_found(self, sender, **kwargs):
        self.clearing = set(kwargs.get('positions', []))

    def on_match_cleared(self, sender, **kwargs):
        self.clearing = set()

    def on_session_started(self, sender, **kwargs):
        self.clearing = set()

    def geometry(self) -> BoardGeometry | None:
        dims = board_dimensions(self.world)
        if not dims:
            return None
        rows, cols = dims
        return compute_board_geometry(self.window.width, self.window.height, rows, cols)

    def hud_lines(self) -> list[tuple[str, tuple[int, int, int]]]:
        state = get_session_state(self.world)
        time_color = WARNING_COLOR if state.time_left <= LOW_TIME_WARNING else HUD_COLOR
        lines = [
            (f"SCORE {format_score(state.score)}   BEST {format_score(max(state.best_score, state.score))}", HUD_COLOR),
            (f"LEVEL {state.level}   TIME {state.time_left}", time_color),
        ]
        if state.combo > 1:
            lines.append((f"{state.combo}x COMBO!", COMBO_COLOR))
        return lines

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        geometry = self.geometry()
        if geometry is None:
            arcade.draw_text(
                "Press 1 (easy), 2 (medium) or 3 (hard)",
                self.window.width / 2, self.window.height / 2, HUD_COLOR, 16, anchor_x="center",
            )
            return
        registry = get_tile_registry(self.world)
        selected: set[tuple[int, int]] = set()
        for _, selection in self.world.get_component(Selection):
            selected = set(selection.positions)
        for row, values in enumerate(board_layout(self.world)):
            for col, type_name in enumerate(values):
                x, y = cell_origin(geometry, row, col)
                color = registry.background_for(type_name) if type_name else EMPTY_COLOR
                if (row, col) in self.clearing:
                    color = tuple(int(channel * CLEARING_DIM) for channel in color)
                arcade.draw_lrbt_rectangle_filled(x, x + geometry.tile_size, y, y + geometry.tile_size, color)
                if (row, col) in selected:
                    arcade.draw_lrbt_rectangle_outline(
                        x, x + geometry.tile_size, y, y + geometry.tile_size, SELECTED_OUTLINE, 3
                    )
        top = geometry.bottom + geometry.height + 20
        for idx, (text, color) in enumerate(self.hud_lines()):
            arcade.draw_text(text, self.window.width / 2, top + idx * 26, color, 16, anchor_x="center")
        state = get_session_state(self.world)
        if state.phase == GamePhase.GAME_OVER:
            cx = self.window.width / 2
            cy = geometry.bottom + geometry.height / 2
            arcade.draw_lrbt_rectangle_filled(cx - 180, cx + 180, cy - 80, cy + 80, (0, 0, 0, 230))
            arcade.draw_text("TIME'S UP!", cx, cy + 30, WARNING_COLOR, 28, anchor_x="center")
            arcade.draw_text(f"Score: {format_score(state.score)}", cx, cy - 15, COMBO_COLOR, 20, anchor_x="center")
            arcade.draw_text("R to play again, 1/2/3 to pick difficulty", cx, cy - 55, HUD_COLOR, 11, anchor_x="center")