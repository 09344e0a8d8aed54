from __future__ import annotations

import time
from typing import Any

EVENT_TYPES = ("filter_change", "registration", "recommendations")

_events: list[dict[str, Any]] = []


def record_event(event_type: str, data: dict[str, Any]) -> None:
    if event_type not in EVENT_TYPES:
        msg = f"Unknown analytics event type: {event_type}"
        raise ValueError(msg)
    _events.append({
        "type": event_type,
        "timestamp": time.time(),
        **data,
    })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    if event_type is None:
        return _events
    return [e for e in _events if e["type"] == event_type]


def clear_events() -> None:
    _events.clear()
