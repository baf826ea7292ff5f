from __future__ import annotations

import itertools
from typing import Any

from esper import World

from spectra.components.scheduled_action import ScheduledAction
from spectra.constants import TIME_EPSILON
from spectra.events.bus import EVENT_TICK, EventBus

_sequence = itertools.count()


def schedule_action(world: World, event_bus: EventBus, event_name: str, delay: float, **payload: Any) -> int | None:
    """Emit ``event_name`` after ``delay`` seconds of virtual time.

    A non-positive delay emits immediately and returns None; otherwise the
    queued action's entity id is returned.
    """
    if delay <= 0.0:
        event_bus.emit(event_name, **payload)
        return None
    return world.create_entity(
        ScheduledAction(
            event_name=event_name,
            remaining=float(delay),
            payload=dict(payload),
            sequence=next(_sequence),
        )
    )


def cancel_scheduled_actions(world: World) -> int:
    entities = [ent for ent, _ in world.get_component(ScheduledAction)]
    for ent in entities:
        world.delete_entity(ent, immediate=True)
    return len(entities)


class SchedulerSystem:
    """Advances queued delayed events on every tick; each action is its own entity."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        actions = sorted(self.world.get_component(ScheduledAction), key=lambda item: item[1].sequence)
        if not actions:
            return
        due: list[ScheduledAction] = []
        for ent, action in actions:
            action.remaining -= dt
            if action.remaining <= TIME_EPSILON:
                due.append(action)
                self.world.delete_entity(ent, immediate=True)
        # Actions queued by these emissions start counting on the next tick.
        for action in due:
            self.event_bus.emit(action.event_name, **action.payload)
