import pytest

from depths.events import Event, EventBus


def test_publish_calls_subscribers_in_order():
    bus = EventBus()
    calls = []
    bus.subscribe("x", lambda e: calls.append(("a", e.payload["n"])))
    bus.subscribe("x", lambda e: calls.append(("b", e.payload["n"])))
    bus.subscribe("y", lambda e: calls.append(("y", e.payload["n"])))

    bus.publish("x", {"n": 1})
    assert calls == [("a", 1), ("b", 1)]


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    got = []

    def cb(event: Event) -> None:
        got.append(event.name)

    bus.subscribe("x", cb)
    bus.unsubscribe("x", cb)
    bus.unsubscribe("never", cb)
    bus.publish("x", {})
    assert got == []


def test_non_callable_rejected():
    with pytest.raises(TypeError):
        EventBus().subscribe("x", "not callable")


def test_raising_subscriber_is_logged_and_skipped(caplog):
    bus = EventBus()
    got = []

    def bad(_):
        raise RuntimeError("nope")

    bus.subscribe("x", bad)
    bus.subscribe("x", lambda e: got.append(e))
    bus.publish("x", {"k": 1})
    assert len(got) == 1
    assert "bad failed on 'x'" in caplog.text
