"""Headless game session: the single entry point presentation code talks to.

A GameSession owns its own ECS world, event bus, random source and systems, so
several sessions can run side by side and tests can drive time explicitly.
"""
from __future__ import annotations

import random
from typing import Callable, FrozenSet, List, Optional, Tuple

from spectra.components.difficulty import DifficultyProfile, get_profile
from spectra.components.selection import Selection
from spectra.components.session_state import GamePhase, SessionState
from spectra.constants import CLEAR_ANIMATION_DELAY, LEVEL_UP_PERTURB_CHANCE, SELECTION_CONFIRM_DELAY
from spectra.events.bus import EVENT_SESSION_STARTED, EVENT_TICK, EventBus
from spectra.persistence.high_scores import HighScoreStore
from spectra.systems.board import BoardSystem
from spectra.systems.board_ops import active_tile_type_map, board_layout, get_tile_registry
from spectra.systems.countdown_system import CountdownSystem
from spectra.systems.high_score_system import HighScoreSystem
from spectra.systems.match_resolution import MatchResolutionSystem
from spectra.systems.scheduler import SchedulerSystem, cancel_scheduled_actions
from spectra.systems.scoring_system import ScoringSystem
from spectra.utils.connectivity import has_valid_move
from spectra.utils.session_state import get_active_profile, get_session_state, reset_session, set_phase
from spectra.world import create_world


class GameSession:
    def __init__(
        self,
        *,
        store: HighScoreStore | None = None,
        rng: random.Random | None = None,
        confirm_delay: float = SELECTION_CONFIRM_DELAY,
        clear_delay: float = CLEAR_ANIMATION_DELAY,
        perturb_chance: float = LEVEL_UP_PERTURB_CHANCE,
    ) -> None:
        self.event_bus = EventBus()
        self.rng = rng or random.Random()
        self.world = create_world(self.event_bus, rng=self.rng)
        # Scheduler first so actions queued during a tick wait for the next one.
        self.scheduler_system = SchedulerSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus, confirm_delay=confirm_delay)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus, clear_delay=clear_delay)
        self.scoring_system = ScoringSystem(self.world, self.event_bus, perturb_chance=perturb_chance)
        self.countdown_system = CountdownSystem(self.world, self.event_bus)
        self.high_score_system = HighScoreSystem(self.world, self.event_bus, store)

    def init(self, profile: DifficultyProfile | str | None = None) -> None:
        """Start a fresh session; ``profile`` defaults to the current difficulty."""
        if isinstance(profile, str):
            profile = get_profile(profile)
        profile = profile or self.profile
        cancel_scheduled_actions(self.world)
        reset_session(self.world, profile)
        get_tile_registry(self.world).set_spawnable(profile.colors)
        self.event_bus.emit(
            EVENT_SESSION_STARTED,
            difficulty=profile.key,
            rows=profile.rows,
            cols=profile.cols,
        )
        set_phase(self.world, self.event_bus, GamePhase.SELECTING)

    def select_cell(self, row: int, col: int) -> bool:
        """Select the region at (row, col); True when a clear was started."""
        return self.board_system.select(row, col)

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def advance(self, seconds: float, *, step: float = 0.05) -> None:
        """Drive ``seconds`` of virtual time in ``step``-sized ticks."""
        remaining = seconds
        while remaining > 1e-9:
            dt = min(step, remaining)
            self.tick(dt)
            remaining -= dt

    def subscribe(self, name: str, fn: Callable) -> None:
        self.event_bus.subscribe(name, fn)

    def grid(self) -> List[List[Optional[str]]]:
        return board_layout(self.world)

    def has_valid_move(self) -> bool:
        return has_valid_move(active_tile_type_map(self.world))

    @property
    def state(self) -> SessionState:
        return get_session_state(self.world)

    @property
    def profile(self) -> DifficultyProfile:
        return get_active_profile(self.world)

    @property
    def selection(self) -> FrozenSet[Tuple[int, int]]:
        for _, selection in self.world.get_component(Selection):
            return frozenset(selection.positions)
        return frozenset()

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def combo(self) -> int:
        return self.state.combo

    @property
    def moves(self) -> int:
        return self.state.moves

    @property
    def time_left(self) -> int:
        return self.state.time_left

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def best_score(self) -> int:
        return self.state.best_score
