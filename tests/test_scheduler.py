from esper import World

from spectra.events.bus import EventBus
from spectra.systems.scheduler import (
    SchedulerSystem,
    cancel_scheduled_actions,
    schedule_action,
)
from tests.helpers import drive_ticks, pending_actions


def _setup():
    bus = EventBus()
    world = World()
    SchedulerSystem(world, bus)
    return bus, world


def test_action_fires_after_delay():
    bus, world = _setup()
    fired = []
    bus.subscribe("ping", lambda sender, **kwargs: fired.append(kwargs))

    schedule_action(world, bus, "ping", 0.15, value=3)
    drive_ticks(bus, count=2, dt=0.05)
    assert fired == []
    drive_ticks(bus, count=1, dt=0.05)

    assert fired == [{"value": 3}]
    assert pending_actions(world) == []


def test_zero_delay_emits_immediately():
    bus, world = _setup()
    fired = []
    bus.subscribe("ping", lambda sender, **kwargs: fired.append(kwargs))

    assert schedule_action(world, bus, "ping", 0) is None
    assert fired == [{}]


def test_actions_due_together_fire_in_schedule_order():
    bus, world = _setup()
    order = []
    bus.subscribe("a", lambda sender, **kwargs: order.append("a"))
    bus.subscribe("b", lambda sender, **kwargs: order.append("b"))

    schedule_action(world, bus, "b", 0.1)
    schedule_action(world, bus, "a", 0.1)
    drive_ticks(bus, count=1, dt=0.2)

    assert order == ["b", "a"]


def test_action_queued_from_handler_waits_for_next_tick():
    bus, world = _setup()
    fired = []
    bus.subscribe("first", lambda sender, **kwargs: schedule_action(world, bus, "second", 0.05))
    bus.subscribe("second", lambda sender, **kwargs: fired.append("second"))

    schedule_action(world, bus, "first", 0.05)
    drive_ticks(bus, count=1, dt=0.05)
    assert fired == []
    drive_ticks(bus, count=1, dt=0.05)
    assert fired == ["second"]


def test_cancel_drops_pending_actions():
    bus, world = _setup()
    fired = []
    bus.subscribe("ping", lambda sender, **kwargs: fired.append(kwargs))
    schedule_action(world, bus, "ping", 0.1)
    schedule_action(world, bus, "ping", 0.2)

    assert cancel_scheduled_actions(world) == 2
    drive_ticks(bus, count=10, dt=0.05)

    assert fired == []
