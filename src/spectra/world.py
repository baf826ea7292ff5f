import random

from esper import World

from spectra.components.difficulty import DifficultyProfile, get_profile
from spectra.components.selection import Selection
from spectra.components.session_state import SessionState
from spectra.components.tile_type_registry import TileTypeRegistry
from spectra.components.tile_types import TileTypes
from spectra.constants import DEFAULT_DIFFICULTY, TILE_COLORS
from spectra.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    profile: DifficultyProfile | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create a world holding the session resources for ``profile``.

    Board tiles are created by BoardSystem; this only registers the singleton
    entities every system expects: palette registry, session state, selection.
    """
    profile = profile or get_profile(DEFAULT_DIFFICULTY)
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(
        SessionState(difficulty=profile.key, time_left=profile.max_time),
        Selection(),
        profile,
    )
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(types=dict(TILE_COLORS), spawnable=list(profile.colors)),
    )
    return world
