from esper import World

from spectra.components.difficulty import DifficultyProfile
from spectra.components.session_state import GamePhase
from spectra.constants import COUNTDOWN_PERIOD, TIME_EPSILON
from spectra.events.bus import (
    EventBus,
    EVENT_COMBO_RESET,
    EVENT_COUNTDOWN_TICK,
    EVENT_SESSION_STARTED,
    EVENT_TICK,
    EVENT_TIME_EXPIRED,
)
from spectra.utils.session_state import get_session_state, set_phase


class CountdownSystem:
    """Turns frame ticks into whole-second countdown steps.

    Each step decrements the remaining time and checks combo decay; reaching
    zero moves the session to GAME_OVER and stops the countdown.
    """

    def __init__(self, world: World, event_bus: EventBus, *, period: float = COUNTDOWN_PERIOD):
        self.world = world
        self.event_bus = event_bus
        self.period = period
        self.running = False
        self._accumulator = 0.0
        self.event_bus.subscribe(EVENT_SESSION_STARTED, self.on_session_started)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_session_started(self, sender, **kwargs):
        self._accumulator = 0.0
        self.running = True

    def on_tick(self, sender, **kwargs):
        if not self.running:
            return
        dt = kwargs.get('dt', 1/60)
        state = get_session_state(self.world)
        state.clock += dt
        self._accumulator += dt
        while self.running and self._accumulator + TIME_EPSILON >= self.period:
            self._accumulator -= self.period
            self._step()

    def _step(self) -> None:
        state = get_session_state(self.world)
        if state.phase == GamePhase.GAME_OVER:
            self.running = False
            return
        state.time_left = max(0, state.time_left - 1)
        self._check_combo_decay()
        self.event_bus.emit(EVENT_COUNTDOWN_TICK, time_left=state.time_left)
        if state.time_left <= 0:
            self.running = False
            set_phase(self.world, self.event_bus, GamePhase.GAME_OVER)
            self.event_bus.emit(EVENT_TIME_EXPIRED, final_score=state.score)

    def _check_combo_decay(self) -> None:
        state = get_session_state(self.world)
        if state.combo == 0:
            return
        timeout = self._combo_timeout()
        if state.clock - state.last_clear_time > timeout:
            previous = state.combo
            state.combo = 0
            self.event_bus.emit(EVENT_COMBO_RESET, previous_combo=previous)

    def _combo_timeout(self) -> float:
        for _, profile in self.world.get_component(DifficultyProfile):
            return profile.combo_timeout
        return 0.0
