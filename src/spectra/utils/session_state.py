from __future__ import annotations

from esper import World

from spectra.components.difficulty import DifficultyProfile, get_profile
from spectra.components.selection import Selection
from spectra.components.session_state import GamePhase, SessionState
from spectra.constants import DEFAULT_DIFFICULTY
from spectra.events.bus import EVENT_PHASE_CHANGED, EventBus


def _session_entity(world: World) -> int:
    for entity, _ in world.get_component(SessionState):
        return entity
    return world.create_entity(SessionState(), Selection())


def get_session_state(world: World) -> SessionState:
    """Return the shared SessionState component, creating it if absent."""
    return world.component_for_entity(_session_entity(world), SessionState)


def get_active_profile(world: World) -> DifficultyProfile:
    for _, profile in world.get_component(DifficultyProfile):
        return profile
    return get_profile(DEFAULT_DIFFICULTY)


def reset_session(world: World, profile: DifficultyProfile) -> SessionState:
    """Return the session to its initial values for ``profile``.

    The phase is left untouched; callers move it with ``set_phase`` so the
    change is announced.
    """
    entity = _session_entity(world)
    state = world.component_for_entity(entity, SessionState)
    state.difficulty = profile.key
    state.score = 0
    state.level = 1
    state.moves = 0
    state.combo = 0
    state.time_left = profile.max_time
    state.clock = 0.0
    state.last_clear_time = 0.0
    world.add_component(entity, profile)
    if world.has_component(entity, Selection):
        world.component_for_entity(entity, Selection).clear()
    else:
        world.add_component(entity, Selection())
    return state


def set_phase(world: World, event_bus: EventBus, phase: GamePhase) -> None:
    """Update the session phase and emit a change event when it differs."""
    state = get_session_state(world)
    previous_phase = state.phase
    if previous_phase == phase:
        return
    state.phase = phase
    event_bus.emit(
        EVENT_PHASE_CHANGED,
        previous_phase=previous_phase,
        new_phase=phase,
    )
