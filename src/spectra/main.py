"""Entry point for the Spectra tile-matching game.

Sets up a GameSession and an Arcade window that renders it and feeds it clicks.
"""
import logging

from arcade import Window, run, set_background_color, color, key

from spectra.events.bus import EVENT_MOUSE_PRESS, EVENT_TICK
from spectra.persistence.high_scores import JsonHighScoreStore
from spectra.session import GameSession
from spectra.systems.input import InputSystem
from spectra.systems.render import RenderSystem

DIFFICULTY_KEYS = {
    key.KEY_1: "easy",
    key.KEY_2: "medium",
    key.KEY_3: "hard",
}


class SpectraWindow(Window):
    def __init__(self):
        super().__init__(800, 600, "Spectra")
        self.set_update_rate(1/60)
        self.session = GameSession(store=JsonHighScoreStore())
        self.render_system = RenderSystem(self.session.world, self.session.event_bus, self)
        self.input_system = InputSystem(self.session.event_bus, self, self.session.world)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.session.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.session.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        difficulty = DIFFICULTY_KEYS.get(symbol)
        if difficulty is not None:
            self.session.init(difficulty)
        elif symbol == key.R:
            self.session.init()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    SpectraWindow()
    run()

if __name__ == "__main__":
    main()
