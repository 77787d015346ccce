"""Structured event log for basket and session activity.

Every mutation emits one sentinel line of the form

    [BASKET] {"type": "item_added", "code": "P001", ...}

to an optional text stream, and keeps the event in memory. parse_events()
reads such lines back from captured output, skipping plain text and
malformed lines for forward compatibility.
"""

from __future__ import annotations

import json
from typing import Any, TextIO

# Sentinel prefix for structured event lines
SENTINEL = "[BASKET] "


class EventLog:
    """Collects basket events and optionally echoes them to a stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.events: list[dict[str, Any]] = []

    def emit(self, event_type: str, **fields: Any) -> None:
        """Record an event and write its sentinel line."""
        event = {"type": event_type, **fields}
        self.events.append(event)
        if self.stream is not None:
            self.stream.write(SENTINEL + json.dumps(event, default=str) + "\n")

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        """Return recorded events with the given type."""
        return [e for e in self.events if e["type"] == event_type]


def parse_events(text: str) -> list[dict[str, Any]]:
    """Extract structured events from captured output.

    Args:
        text: Output that may mix plain text and [BASKET] lines.

    Returns:
        Event dicts in emission order.
    """
    events: list[dict[str, Any]] = []
    for line in text.splitlines():
        if not line.startswith(SENTINEL):
            continue
        try:
            event = json.loads(line[len(SENTINEL):])
        except json.JSONDecodeError:
            continue
        if isinstance(event, dict) and "type" in event:
            events.append(event)
    return events
