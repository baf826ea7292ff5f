from spectra.events.bus import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_unsubscribed_handler_is_not_called():
    bus = EventBus()
    calls = []

    def handler(sender, **kwargs):
        calls.append(kwargs)

    bus.subscribe("test", handler)
    bus.unsubscribe("test", handler)
    bus.emit("test", value=1)

    assert calls == []


def test_separate_buses_do_not_share_handlers():
    first, second = EventBus(), EventBus()
    calls = []
    first.subscribe("test", lambda sender, **kwargs: calls.append("first"))
    second.emit("test")
    assert calls == []
