"""Tests for the event bus and diagnostics envelopes."""

from __future__ import annotations

import re

from fskit.core.diagnostics import build_envelope
from fskit.core.events import EventBus, get_event_bus


def test_subscribe_and_publish() -> None:
    bus = EventBus()
    seen: list[dict[str, object]] = []

    bus.subscribe("evt", seen.append)
    bus.publish("evt", {"x": 1})
    bus.publish("other", {"x": 2})

    assert seen == [{"x": 1}]


def test_subscribe_all_receives_events() -> None:
    bus = get_event_bus()
    seen: list[tuple[str, dict[str, object]]] = []

    def cb(event: str, data: dict[str, object]) -> None:
        seen.append((event, data))

    bus.subscribe_all(cb)
    bus.publish("any_event", {"x": 1})
    bus.unsubscribe_all(cb)
    bus.publish("any_event", {"x": 2})

    assert seen == [("any_event", {"x": 1})]


def test_handler_failure_does_not_propagate(capsys) -> None:
    bus = EventBus()
    seen: list[dict[str, object]] = []

    def broken(_data: dict[str, object]) -> None:
        raise ValueError("bad handler")

    bus.subscribe("evt", broken)
    bus.subscribe("evt", seen.append)
    bus.publish("evt", {"ok": True})

    assert seen == [{"ok": True}]
    assert "bad handler" in capsys.readouterr().err


def test_unsubscribe_unknown_is_noop() -> None:
    bus = EventBus()
    bus.unsubscribe("never", lambda data: None)


def test_envelope_shape() -> None:
    env = build_envelope(event="operation.end", component="fskit", operation="op", data={"a": 1})

    assert set(env) == {"event", "component", "operation", "timestamp", "data"}
    assert env["data"] == {"a": 1}
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", env["timestamp"])
